"""
Notification port backed by Flask-Mail.

Delivery problems never raise out of here: callers get ``(delivered, error)``
and decide what to surface.
"""

import logging
from smtplib import SMTPException
from flask_mail import Message
from extensions import mail

logger = logging.getLogger(__name__)


class EmailClient:

    def send_email(self, to_email, subject, body):
        if not to_email:
            logger.warning("EMAIL_SKIP: no recipient for subject=%r", subject)
            return False, "Recipient has no email address"

        message = Message(subject=subject, recipients=[to_email], body=body)
        try:
            mail.send(message)
        except (SMTPException, OSError) as e:
            logger.error("EMAIL_FAILED: to=%s, error=%s", to_email, e)
            return False, str(e)

        logger.info("EMAIL_SENT: to=%s, subject=%r", to_email, subject)
        return True, None
