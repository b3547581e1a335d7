from app import create_app

# create_app() runs db.create_all() for every model, so building the app is
# all it takes to initialise the database
app = create_app()

with app.app_context():
    print("DB URI:", app.config["SQLALCHEMY_DATABASE_URI"])
    print("DB CREATED")
