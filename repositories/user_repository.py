"""
Users, their role-specific records and authentication.

Profiles are returned as a tagged variant: the ``user_role`` key says whether
the dict is a producer view or a receiver view.
"""

import logging
import time
import uuid
from datetime import timedelta
import jwt
from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import Application, Producer, Product, Receiver, User
from models.application import COMPLETED, PENDING
from models.user import PRODUCER, RECEIVER, USER_ROLES
from utils import utcnow, relative_image_path
from .transaction import transaction

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
PASSWORD_MIN_LENGTH = 8

# (label, days); None means all time
DONATION_WINDOWS = (("past_week", 7), ("past_month", 30), ("all_time", None))


def generate_pairing_secret():
    return f"{uuid.uuid4()}_{time.time_ns()}"


class UserRepository:

    #-------------------------------------------------------
    # Register
    def create(self, dto):
        if not dto or not dto.get("password") or len(dto["password"]) < PASSWORD_MIN_LENGTH:
            logger.warning("USER_REJECTED: password missing or too short")
            return None

        role = dto.get("role")
        if role not in USER_ROLES:
            logger.warning("USER_REJECTED: invalid role %r", role)
            return None

        user = User(
            first_name=dto.get("first_name"),
            sur_name=dto.get("sur_name"),
            email=dto.get("email"),
            country=dto.get("country"),
            role=role,
            created_at=utcnow(),
        )
        user.set_password(dto["password"])

        if role == PRODUCER:
            user.producer = Producer(
                pairing_secret=generate_pairing_secret(),
                street=dto.get("street"),
                street_number=dto.get("street_number"),
                zipcode=dto.get("zipcode") or None,
                city=dto.get("city"),
            )
        else:
            user.receiver = Receiver()

        try:
            with transaction() as session:
                session.add(user)
        except SQLAlchemyError:
            logger.exception("USER_CREATE_FAILED: email=%s", dto.get("email"))
            return None

        logger.info("USER_CREATED: id=%s, role=%s", user.id, role)
        view, token = self.authenticate(dto["email"], dto["password"])
        return {"user": view, "token": token}

    #-------------------------------------------------------
    # Profile
    def find(self, user_id):
        user = db.session.get(User, user_id)
        if user is None:
            return None

        data = {
            "user_id": user.id,
            "user_role": user.role,
            "first_name": user.first_name,
            "sur_name": user.sur_name,
            "email": user.email,
            "country": user.country,
            "description": user.description,
            "thumbnail": relative_image_path(user.thumbnail),
        }

        if user.role == RECEIVER:
            return data

        producer = user.producer
        data.update({
            "wallet": producer.wallet_address if producer else None,
            "device": producer.device_address if producer else None,
            "pairing_link": self.pairing_link(producer.pairing_secret) if producer else None,
            "street": producer.street if producer else None,
            "street_number": producer.street_number if producer else None,
            "zipcode": producer.zipcode if producer else None,
            "city": producer.city if producer else None,
        })
        data.update(self.donation_stats(user.id))
        return data

    def pairing_link(self, pairing_secret):
        if not pairing_secret:
            return None
        device = current_app.config["OBYTE_DEVICE_ADDRESS"]
        hub = current_app.config["OBYTE_HUB"]
        return f"byteball:{device}@{hub}#{pairing_secret}"

    def donation_stats(self, user_id):
        """Count and total price of a producer's completed/pending donations."""
        stats = {}
        for status in (COMPLETED, PENDING):
            for label, days in DONATION_WINDOWS:
                count, price = self._donations(user_id, status, days)
                stats[f"{status}_donations_{label}_no"] = count
                stats[f"{status}_donations_{label}_price"] = price
        return stats

    def _donations(self, user_id, status, days):
        query = (
            db.session.query(func.count(Application.id), func.coalesce(func.sum(Product.price), 0))
            .join(Product, Application.product_id == Product.id)
            .filter(Product.user_id == user_id, Application.status == status)
        )
        if days is not None:
            query = query.filter(Application.last_modified >= utcnow() - timedelta(days=days))

        count, price = query.one()
        return count, int(price)

    def update(self, dto):
        user = User.query.filter_by(id=dto.get("user_id"), email=dto.get("email")).first()
        if user is None or not user.check_password(dto.get("password") or ""):
            return False

        new_password = dto.get("new_password")
        if new_password and len(new_password) < PASSWORD_MIN_LENGTH:
            return False

        try:
            with transaction():
                user.first_name = dto.get("first_name", user.first_name)
                user.sur_name = dto.get("sur_name", user.sur_name)
                user.country = dto.get("country", user.country)
                user.description = dto.get("description", user.description)
                if new_password:
                    user.set_password(new_password)

                # Receivers have no extra fields
                producer = user.producer
                if user.role == PRODUCER and producer is not None:
                    if dto.get("wallet"):
                        producer.wallet_address = dto["wallet"]
                    producer.street = dto.get("street", producer.street)
                    producer.street_number = dto.get("street_number", producer.street_number)
                    producer.city = dto.get("city", producer.city)
                    if dto.get("zipcode"):
                        producer.zipcode = dto["zipcode"]
        except SQLAlchemyError:
            logger.exception("USER_UPDATE_FAILED: id=%s", user.id)
            return False
        return True

    def update_device_address(self, pairing_secret, device_address, wallet_address):
        producer = Producer.query.filter_by(pairing_secret=pairing_secret).first()
        if producer is None or producer.user.role != PRODUCER:
            return False

        try:
            with transaction():
                producer.device_address = device_address
                producer.wallet_address = wallet_address
        except SQLAlchemyError:
            logger.exception("DEVICE_PAIRING_FAILED: producer=%s", producer.id)
            return False

        logger.info("DEVICE_PAIRED: producer=%s", producer.id)
        return True

    #-------------------------------------------------------
    # Auth
    def authenticate(self, email, password):
        user = User.query.filter_by(email=email).first()
        if user is None or not user.check_password(password or ""):
            return None, None

        now = utcnow()
        payload = {
            "sub": str(user.id),
            "name": user.full_name,
            "role": user.role,
            "iat": now,
            "exp": now + timedelta(days=current_app.config.get("JWT_EXPIRES_DAYS", 7)),
        }
        token = jwt.encode(payload, current_app.config["JWT_SECRET"], algorithm=JWT_ALGORITHM)
        return self.find(user.id), token

    def decode_token(self, token):
        try:
            return jwt.decode(token, current_app.config["JWT_SECRET"], algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.info("JWT expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning("JWT rejected: %s", e)
            return None

    #-------------------------------------------------------
    # Counts
    def count_producers(self):
        return Producer.query.count()

    def count_receivers(self):
        return Receiver.query.count()
