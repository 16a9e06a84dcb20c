"""
Client for the Obyte wallet service that settles donations.

The service itself (shared addresses, bytes, payouts) lives elsewhere; this
module only posts requests to it and reports ``(ok, status_code)``.
"""

import logging
import requests
from flask import current_app

logger = logging.getLogger(__name__)

# Returned when the wallet service could not be reached at all
SERVICE_UNAVAILABLE = 503


class WalletClient:

    def __init__(self, base_url=None, timeout=None):
        self.base_url = base_url
        self.timeout = timeout

    def _url(self, path):
        base = self.base_url or current_app.config["WALLET_SERVICE_URL"]
        return f"{base.rstrip('/')}/{path}"

    def _post(self, path, payload):
        timeout = self.timeout or current_app.config.get("WALLET_TIMEOUT", 10)
        try:
            response = requests.post(self._url(path), json=payload, timeout=timeout)
        except requests.exceptions.RequestException as e:
            logger.error("WALLET_HTTP_ERROR: path=%s, error=%s", path, e)
            return False, SERVICE_UNAVAILABLE

        if not response.ok:
            logger.error("WALLET_HTTP_FAILED: path=%s, status=%s", path, response.status_code)
            return False, response.status_code

        logger.info("WALLET_HTTP_SUCCESS: path=%s", path)
        return True, response.status_code

    def confirm_receival(self, application_id, receiver, product, producer):
        return self._post("postconfirmation", {
            "applicationId": application_id,
            "receiver": receiver,
            "product": product,
            "producer": producer,
        })

    def withdraw_bytes(self, application_id, producer_wallet, producer_device):
        return self._post("withdraw", {
            "applicationId": application_id,
            "producerWallet": producer_wallet,
            "producerDevice": producer_device,
        })
