"""
Shared fixtures: an app bound to in-memory SQLite with a fresh schema per
test, model factories and mocked email/wallet clients.
"""

import itertools
from datetime import datetime
from unittest.mock import Mock

import pytest

from app import create_app
from extensions import db
from models import Application, Contract, Producer, Product, Receiver, User
from models.application import OPEN
from repositories import ApplicationRepository, UserRepository
from services import EmailClient, WalletClient

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "MAIL_SUPPRESS_SEND": True,
    "MAIL_DEFAULT_SENDER": "noreply@pollopollo.test",
    "JWT_SECRET": "test-secret",
    "WALLET_SERVICE_URL": "http://wallet.test",
    "MOTIVATION_MIN_LENGTH": 4,
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def email_client():
    client = Mock(spec=EmailClient)
    client.send_email.return_value = (True, None)
    return client


@pytest.fixture
def wallet_client():
    client = Mock(spec=WalletClient)
    client.confirm_receival.return_value = (True, 200)
    client.withdraw_bytes.return_value = (True, 200)
    return client


@pytest.fixture
def repository(app, email_client, wallet_client):
    return ApplicationRepository(email_client=email_client, wallet_client=wallet_client)


@pytest.fixture
def user_repository(app):
    return UserRepository()


@pytest.fixture
def make_receiver(app):
    counter = itertools.count(1)

    def _make(first_name="test", sur_name="test", country="DK", thumbnail=None, email=None):
        user = User(
            first_name=first_name,
            sur_name=sur_name,
            email=email or f"receiver{next(counter)}@itu.dk",
            country=country,
            thumbnail=thumbnail,
            role="receiver",
        )
        user.set_password("password123")
        user.receiver = Receiver()
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def make_producer(app):
    counter = itertools.count(1)

    def _make(country="DK", city="TestBy", street="Test", street_number="42", zipcode=None,
              wallet_address="pwallet", device_address="pdevice", email=None, with_record=True):
        user = User(
            first_name="shop",
            sur_name="owner",
            email=email or f"producer{next(counter)}@itu.dk",
            country=country,
            role="producer",
        )
        user.set_password("password123")
        if with_record:
            user.producer = Producer(
                pairing_secret=f"secret-{next(counter)}",
                street=street,
                street_number=street_number,
                zipcode=zipcode,
                city=city,
                wallet_address=wallet_address,
                device_address=device_address,
            )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def make_product(app):
    def _make(owner, title="5 chickens", price=42, available=True, country="DK"):
        product = Product(
            user_id=owner.id,
            title=title,
            price=price,
            description="Test",
            location="Test",
            country=country,
            available=available,
        )
        db.session.add(product)
        db.session.commit()
        return product

    return _make


@pytest.fixture
def make_application(app):
    def _make(receiver, product, status=OPEN, created_at=datetime(2019, 4, 8),
              motivation="Test", date_of_donation=None, last_modified=None):
        application = Application(
            receiver_id=receiver.id,
            product_id=product.id,
            motivation=motivation,
            status=status,
            created_at=created_at,
            last_modified=last_modified or created_at,
            date_of_donation=date_of_donation,
        )
        db.session.add(application)
        db.session.commit()
        return application

    return _make


@pytest.fixture
def make_contract(app):
    def _make(application, bytes=25, completed=True, shared_address="address"):
        contract = Contract(
            application_id=application.id,
            creation_time=datetime(2019, 1, 1, 1, 1, 1),
            completed=completed,
            confirm_key="key",
            shared_address=shared_address,
            donor_wallet="dwallet",
            donor_device="ddevice",
            producer_wallet="pwallet",
            producer_device="pdevice",
            price=application.product.price,
            bytes=bytes,
        )
        db.session.add(contract)
        db.session.commit()
        return contract

    return _make
