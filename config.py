import os

from dotenv import load_dotenv

# Absolute path to project root
# (a stable anchor for all file paths - where is it on disk)
basedir = os.path.abspath(os.path.dirname(__file__))

# Runtime only directory (DB, secrets)
instance_dir = os.path.join(basedir, "instance")

load_dotenv(os.path.join(basedir, ".env"))


def _is_production() -> bool:
    return os.environ.get("FLASK_ENV") == "production"


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", "sqlite:///" + os.path.join(instance_dir, "app.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = _is_production()

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Federated sign-in (Google OpenID Connect)
    GOOGLE_CLIENT_ID = os.environ.get("GOOGLE_CLIENT_ID", "placeholder-client-id")
    GOOGLE_CLIENT_SECRET = os.environ.get("GOOGLE_CLIENT_SECRET", "placeholder-client-secret")

    # Image studio
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    IMAGE_MODEL = os.environ.get("IMAGE_MODEL", "gpt-image-1")
    MAX_IMAGE_BYTES = 5 * 1024 * 1024
    # whole request body: the image plus the other form fields
    MAX_CONTENT_LENGTH = MAX_IMAGE_BYTES + 1024 * 1024

    # Degree defaults for new profiles
    DEFAULT_CREDITS_NEEDED = 120

    # TTF with Hebrew glyphs for the PDF report; unset means look one up on the system
    REPORT_FONT_PATH = os.environ.get("REPORT_FONT_PATH")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    OPENAI_API_KEY = "test-key"
