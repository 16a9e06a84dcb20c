"""
Application lifecycle: submission, status transitions and the read-side
projections used by the receiver/producer pages.

Status graph::

    open -> pending -> completed
    pending -> open              (donation reverted)
    open | pending -> locked     (administrative hold, final)

Every write runs inside one scoped transaction. Emails are only sent after the
status change is committed, and their outcome is returned next to the update
result instead of failing it.
"""

import logging
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import Application, ByteExchangeRate, Contract, Producer, Product, User
from models.application import OPEN, PENDING, COMPLETED, LOCKED, UNAVAILABLE
from models.user import RECEIVER
from services import EmailClient, WalletClient
from services import email_templates
from utils import utcnow, format_date, format_datetime, relative_image_path
from .transaction import transaction

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    OPEN: {PENDING, LOCKED},
    PENDING: {COMPLETED, OPEN, LOCKED},
    LOCKED: set(),
    COMPLETED: set(),
}

CONTRACT_FIELDS = (
    "confirm_key", "shared_address",
    "donor_wallet", "donor_device", "producer_wallet", "producer_device",
    "price", "bytes", "completed", "creation_time",
)

NO_EMAIL = (False, None)


class ApplicationRepository:

    def __init__(self, email_client=None, wallet_client=None):
        self.email_client = email_client or EmailClient()
        self.wallet_client = wallet_client or WalletClient()

    #-------------------------------------------------------
    # Submit
    def submit(self, receiver_id, product_id, motivation):
        """
        Create an open application for ``product_id``.

        Returns the created projection, a non-persisted projection with status
        ``unavailable`` when the product is switched off, or None when the
        input is invalid or the insert fails.
        """
        if receiver_id is None or product_id is None or motivation is None:
            logger.warning("APPLICATION_REJECTED: missing input")
            return None

        min_length = current_app.config.get("MOTIVATION_MIN_LENGTH", 4)
        if len(motivation.strip()) < max(min_length, 1):
            logger.warning("APPLICATION_REJECTED: motivation shorter than %s characters", min_length)
            return None

        receiver = db.session.get(User, receiver_id)
        if receiver is None or receiver.role != RECEIVER:
            logger.warning("APPLICATION_REJECTED: user=%s is not a receiver", receiver_id)
            return None

        product = db.session.get(Product, product_id)
        if product is None:
            logger.warning("APPLICATION_REJECTED: product=%s not found", product_id)
            return None

        if not product.available:
            logger.info("APPLICATION_UNAVAILABLE: product=%s", product_id)
            return {
                "application_id": None,
                "receiver_id": receiver_id,
                "product_id": product_id,
                "motivation": motivation,
                "status": UNAVAILABLE,
                "creation_date": None,
            }

        now = utcnow()
        application = Application(
            receiver_id=receiver_id,
            product_id=product_id,
            motivation=motivation,
            status=OPEN,
            created_at=now,
            last_modified=now,
        )

        try:
            with transaction() as session:
                session.add(application)
        except SQLAlchemyError:
            logger.exception("APPLICATION_CREATE_FAILED: receiver=%s, product=%s", receiver_id, product_id)
            return None

        logger.info("APPLICATION_CREATED: id=%s, receiver=%s, product=%s", application.id, receiver_id, product_id)
        return {
            "application_id": application.id,
            "receiver_id": application.receiver_id,
            "product_id": application.product_id,
            "motivation": application.motivation,
            "status": application.status,
            "creation_date": format_datetime(application.created_at),
        }

    #-------------------------------------------------------
    # Reads
    def find(self, application_id):
        application = self._joined_query().filter(Application.id == application_id).first()
        if application is None:
            return None
        return self._to_dict(application)

    def list_open(self):
        return [self._to_dict(a) for a in self._open_query().all()]

    def page_open(self, offset=0, amount=0):
        query = self._open_query()
        count = query.count()

        query = query.offset(offset)
        if amount:
            query = query.limit(amount)

        return {"count": count, "list": [self._to_dict(a) for a in query.all()]}

    def list_completed(self):
        query = self._newest_first(self._joined_query().filter(Application.status == COMPLETED))

        applications = []
        for application in query.all():
            data = self._to_dict(application)
            data["date_of_donation"] = format_date(application.date_of_donation)
            applications.append(data)
        return applications

    def list_by_receiver(self, receiver_id):
        query = self._newest_first(self._joined_query().filter(Application.receiver_id == receiver_id))
        return [self._to_dict(a) for a in query.all()]

    def list_filtered(self, country=None, city=None):
        query = self._joined_query().filter(Application.status == OPEN)

        if country:
            query = query.filter(User.country == country)
        if city:
            query = query.join(Producer, Producer.user_id == Product.user_id).filter(Producer.city == city)

        return [self._to_dict(a) for a in self._newest_first(query).all()]

    def list_withdrawable_by_producer(self, producer_id):
        query = (
            self._joined_query()
            .join(Contract, Contract.application_id == Application.id)
            .filter(
                Application.status == COMPLETED,
                Product.user_id == producer_id,
                Contract.bytes > 0,
                Contract.completed.is_(True),
            )
        )
        return [self._to_dict(a) for a in self._newest_first(query).all()]

    def contract_info(self, application_id):
        row = (
            db.session.query(Application.id, Product.price, Producer.wallet_address, Producer.device_address)
            .join(Product, Application.product_id == Product.id)
            .join(Producer, Producer.user_id == Product.user_id)
            .filter(Application.id == application_id)
            .first()
        )
        if row is None:
            return None

        return {
            "application_id": row[0],
            "price": row[1],
            "producer_wallet": row[2],
            "producer_device": row[3],
        }

    def distinct_countries(self):
        rows = db.session.query(User.country).distinct().order_by(User.country).all()
        return [country for (country,) in rows if country]

    def distinct_cities(self, country):
        rows = (
            db.session.query(Producer.city)
            .join(User, Producer.user_id == User.id)
            .filter(User.country == country)
            .distinct()
            .order_by(Producer.city)
            .all()
        )
        return [city for (city,) in rows if city]

    #-------------------------------------------------------
    # Status transitions
    def update_status(self, application_id, status, receiver_id, contract=None):
        """
        Move an application to ``status``.

        Returns ``(updated, (email_sent, email_error))``. A failed email does
        not undo a committed status change.
        """
        application = Application.query.filter_by(id=application_id, receiver_id=receiver_id).first()
        if application is None:
            logger.warning("STATUS_UPDATE_SKIPPED: application=%s not found for receiver=%s", application_id, receiver_id)
            return False, NO_EMAIL

        previous = application.status
        if status not in ALLOWED_TRANSITIONS.get(previous, ()):
            logger.warning("STATUS_UPDATE_REJECTED: application=%s, %s -> %s", application_id, previous, status)
            return False, NO_EMAIL

        now = utcnow()
        try:
            with transaction():
                application.status = status
                application.last_modified = now

                # Donation date only exists while pending or completed
                if status == PENDING:
                    application.date_of_donation = now
                    if contract is not None:
                        self._attach_contract(application, contract, now)
                elif status != COMPLETED:
                    application.date_of_donation = None
        except SQLAlchemyError:
            logger.exception("STATUS_UPDATE_FAILED: application=%s, %s -> %s", application_id, previous, status)
            return False, NO_EMAIL

        logger.info("STATUS_UPDATED: application=%s, %s -> %s", application_id, previous, status)

        if status == PENDING:
            return True, self._send_donation_notice(application)
        if status == COMPLETED:
            return True, self._send_completion_emails(application)
        return True, NO_EMAIL

    def _attach_contract(self, application, contract, now):
        fields = {key: contract[key] for key in CONTRACT_FIELDS if key in contract}
        fields.setdefault("creation_time", now)

        if application.contract is None:
            application.contract = Contract(**fields)
        else:
            for key, value in fields.items():
                setattr(application.contract, key, value)

    def _send_donation_notice(self, application):
        product = application.product
        producer = Producer.query.filter_by(user_id=product.user_id).first()
        pickup_address = producer.address if producer else ""

        subject, body = email_templates.donation_notice(product.title, pickup_address)
        return self.email_client.send_email(application.receiver.email, subject, body)

    def _send_completion_emails(self, application):
        receiver = application.receiver
        subject, body = email_templates.receiver_thank_you()
        result = self.email_client.send_email(receiver.email, subject, body)

        # Producer summary needs settlement data
        contract = application.contract
        if contract is None:
            return result

        product = application.product
        rate = ByteExchangeRate.latest()
        usd_value = rate.to_usd(contract.bytes) if rate else 0.0

        subject, body = email_templates.producer_donation_summary(
            receiver.full_name,
            application.id,
            product.title,
            product.price,
            contract.bytes,
            usd_value,
            contract.shared_address,
        )
        sent, error = self.email_client.send_email(product.user.email, subject, body)
        if not sent:
            logger.warning("PRODUCER_EMAIL_FAILED: application=%s, error=%s", application.id, error)

        return result

    #-------------------------------------------------------
    # Delete
    def delete(self, user_id, application_id):
        application = db.session.get(Application, application_id)
        if application is None:
            return False

        if application.receiver_id != user_id:
            logger.warning("APPLICATION_DELETE_FORBIDDEN: application=%s, user=%s", application_id, user_id)
            return False

        if application.status != OPEN:
            logger.warning("APPLICATION_DELETE_REJECTED: application=%s is %s", application_id, application.status)
            return False

        try:
            with transaction() as session:
                session.delete(application)
        except SQLAlchemyError:
            logger.exception("APPLICATION_DELETE_FAILED: application=%s", application_id)
            return False

        logger.info("APPLICATION_DELETED: id=%s", application_id)
        return True

    #-------------------------------------------------------
    # Settlement
    def confirm_receival(self, application_id, receiver_id):
        """Ask the wallet service to release a pending donation to the shop."""
        application = Application.query.filter_by(id=application_id, receiver_id=receiver_id).first()
        if application is None:
            return False, 404
        if application.status != PENDING:
            return False, 400

        receiver = application.receiver
        product = application.product
        producer = Producer.query.filter_by(user_id=product.user_id).first()
        if producer is None:
            logger.warning("CONFIRM_REJECTED: application=%s has no producer record", application_id)
            return False, 400

        return self.wallet_client.confirm_receival(
            application.id,
            {"user_id": receiver.id, "name": receiver.full_name, "email": receiver.email},
            {"product_id": product.id, "title": product.title, "price": product.price},
            {
                "user_id": product.user_id,
                "wallet_address": producer.wallet_address,
                "device_address": producer.device_address,
            },
        )

    def withdraw(self, producer_id):
        results = {}
        for item in self.list_withdrawable_by_producer(producer_id):
            info = self.contract_info(item["application_id"])
            if info is None:
                continue
            results[item["application_id"]] = self.wallet_client.withdraw_bytes(
                info["application_id"], info["producer_wallet"], info["producer_device"]
            )
        return results

    #-------------------------------------------------------
    # Helpers
    def _joined_query(self):
        return (
            Application.query
            .join(User, Application.receiver_id == User.id)
            .join(Product, Application.product_id == Product.id)
        )

    def _open_query(self):
        return self._newest_first(self._joined_query().filter(Application.status == OPEN))

    def _newest_first(self, query):
        return query.order_by(Application.created_at.desc(), Application.id.asc())

    def _to_dict(self, application):
        receiver = application.receiver
        product = application.product
        return {
            "application_id": application.id,
            "receiver_id": application.receiver_id,
            "receiver_name": receiver.full_name,
            "country": receiver.country,
            "thumbnail": relative_image_path(receiver.thumbnail),
            "product_id": product.id,
            "product_title": product.title,
            "product_price": product.price,
            "producer_id": product.user_id,
            "motivation": application.motivation,
            "status": application.status,
            "creation_date": format_datetime(application.created_at),
        }
