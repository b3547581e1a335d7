import logging
import os

from flask import Flask

from config import Config, _is_production, instance_dir
from extensions import db, login_manager, oauth


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    if _is_production() and app.config["SECRET_KEY"] == "dev-secret-key":
        raise ValueError("SECRET_KEY environment variable is required in production!")

    logging.basicConfig(level=app.config["LOG_LEVEL"])

    # init extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"
    login_manager.login_message = "יש להתחבר כדי לצפות בדף זה."
    oauth.init_app(app)
    oauth.register(
        name="google",
        client_id=app.config["GOOGLE_CLIENT_ID"],
        client_secret=app.config["GOOGLE_CLIENT_SECRET"],
        server_metadata_url="https://accounts.google.com/.well-known/openid-configuration",
        client_kwargs={"scope": "openid email profile"},
    )

    # import and register blueprints
    from auth.routes import auth_bp
    from routes import main_bp
    from routes.api import api_bp
    from utils.semesters import format_semester_label

    app.register_blueprint(auth_bp)
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)

    app.add_template_filter(format_semester_label, "semester_label")

    with app.app_context():
        import models  # noqa: F401  (registers all tables)

        if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite:///" + instance_dir):
            os.makedirs(instance_dir, exist_ok=True)
        db.create_all()

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
