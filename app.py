from flask import Flask
from dotenv import load_dotenv
import logging
import os
from extensions import db, mail, migrate


def create_app(test_config=None):
    load_dotenv()

    app = Flask(__name__)
    app.config['SECRET_KEY'] = os.getenv("SECRET_KEY", "secret_key")
    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv("DATABASE_URL", "sqlite:///pollopollo.db")
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # JWT issued on login / registration
    app.config["JWT_SECRET"] = os.getenv("JWT_SECRET", app.config["SECRET_KEY"])
    app.config["JWT_EXPIRES_DAYS"] = int(os.getenv("JWT_EXPIRES_DAYS", 7))

    # Applications
    app.config["MOTIVATION_MIN_LENGTH"] = int(os.getenv("MOTIVATION_MIN_LENGTH", 4))
    app.config["STATIC_IMAGE_FOLDER"] = os.getenv("STATIC_IMAGE_FOLDER", "static")

    # Obyte wallet pairing + settlement service
    app.config["OBYTE_DEVICE_ADDRESS"] = os.getenv("OBYTE_DEVICE_ADDRESS", "AymLnfCdnKSzNHwMFdGnTmGllPdv6Qxgz1fHfbkEcDKo")
    app.config["OBYTE_HUB"] = os.getenv("OBYTE_HUB", "obyte.org/bb")
    app.config["WALLET_SERVICE_URL"] = os.getenv("WALLET_SERVICE_URL", "http://localhost:8004")
    app.config["WALLET_TIMEOUT"] = int(os.getenv("WALLET_TIMEOUT", 10))

    # Flask-Mail
    app.config.update(
        MAIL_SERVER=os.getenv("MAIL_SERVER", "smtp.gmail.com"),
        MAIL_PORT=int(os.getenv("MAIL_PORT", 587)),
        MAIL_USE_TLS=True,
        MAIL_USERNAME=os.getenv("MAIL_USERNAME"),
        MAIL_PASSWORD=os.getenv("MAIL_PASSWORD"),
        MAIL_DEFAULT_SENDER=os.getenv("MAIL_DEFAULT_SENDER", os.getenv("MAIL_USERNAME") or "pollopollo@pollopollo.org"),
    )

    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Init db, migrate, mail
    db.init_app(app)
    migrate.init_app(app, db)
    mail.init_app(app)

    # Import models after db is bound so metadata is complete
    import models  # noqa: F401

    return app


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        print("Database schema is ready.")
