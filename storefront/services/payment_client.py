# storefront/services/payment_client.py
"""
Payment processor boundary.

PaymentGateway is the contract checkout depends on; StripeGateway talks to the
processor REST API with requests, FakeGateway is used in development and tests.
Every failure surfaces as PaymentFailure. Charge creation is never retried:
without an idempotency contract a retry can bill the customer twice.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import uuid4

import requests
from requests import RequestException

from storefront.domain.errors import PaymentFailure
from storefront.utils.retry import http_retry
from storefront.utils.settings import (
    PAYMENT_GATEWAY,
    PAYMENT_API_URL,
    PAYMENT_API_KEY,
    PAYMENT_TIMEOUT_SECONDS,
    MIN_CHARGE_MINOR_UNITS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaymentIntent:
    reference: str
    client_secret: str
    amount: int
    currency: str


@dataclass(frozen=True)
class CaptureResult:
    reference: str
    amount: int
    currency: str


class PaymentGateway(ABC):
    def __init__(self, min_amount: int = MIN_CHARGE_MINOR_UNITS):
        self.min_amount = min_amount

    def check_amount(self, amount_minor: int) -> None:
        if amount_minor < self.min_amount:
            raise PaymentFailure("Invalid amount")

    @abstractmethod
    def create_intent(self, amount_minor: int, currency: str, customer_ref: str) -> PaymentIntent:
        """Create an intent the client confirms on its side."""

    @abstractmethod
    def capture(
        self,
        amount_minor: int,
        currency: str,
        customer_ref: str,
        payment_method: str,
        payment_intent_id: str | None = None,
    ) -> CaptureResult:
        """Charge the customer, or verify an intent the client already confirmed."""


class StripeGateway(PaymentGateway):
    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float = PAYMENT_TIMEOUT_SECONDS,
        min_amount: int = MIN_CHARGE_MINOR_UNITS,
    ):
        super().__init__(min_amount)
        self.base_url = (base_url or PAYMENT_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else PAYMENT_API_KEY
        self.timeout = timeout

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.api_key}"}

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            return resp.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            return f"Payment provider returned {resp.status_code}"

    def _post(self, path: str, data: dict) -> dict:
        url = f"{self.base_url}{path}"
        logger.info(f"PaymentClient POST {url}")
        try:
            resp = requests.post(url, data=data, headers=self._headers(), timeout=self.timeout)
        except requests.Timeout:
            # fail closed, the charge outcome is unknown
            raise PaymentFailure("Payment provider timed out")
        except RequestException as e:
            raise PaymentFailure(f"Payment provider unavailable: {e}")

        if resp.status_code >= 400:
            raise PaymentFailure(self._error_message(resp))
        return resp.json()

    @http_retry()
    def _get(self, path: str) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.info(f"PaymentClient GET {url}")
        return requests.get(url, headers=self._headers(), timeout=self.timeout)

    def create_intent(self, amount_minor: int, currency: str, customer_ref: str) -> PaymentIntent:
        self.check_amount(amount_minor)
        body = self._post(
            "/payment_intents",
            {
                "amount": amount_minor,
                "currency": currency,
                "metadata[user_id]": customer_ref,
            },
        )
        return PaymentIntent(
            reference=body["id"],
            client_secret=body["client_secret"],
            amount=body["amount"],
            currency=body["currency"],
        )

    def capture(
        self,
        amount_minor: int,
        currency: str,
        customer_ref: str,
        payment_method: str,
        payment_intent_id: str | None = None,
    ) -> CaptureResult:
        self.check_amount(amount_minor)

        if payment_intent_id:
            body = self._retrieve_intent(payment_intent_id)
            # an intent confirmed by one customer can't pay for another's order
            owner = (body.get("metadata") or {}).get("user_id")
            if str(owner) != customer_ref:
                raise PaymentFailure("Payment does not belong to this customer")
        else:
            body = self._post(
                "/payment_intents",
                {
                    "amount": amount_minor,
                    "currency": currency,
                    "payment_method": payment_method,
                    "confirm": "true",
                    "automatic_payment_methods[enabled]": "true",
                    "automatic_payment_methods[allow_redirects]": "never",
                    "metadata[user_id]": customer_ref,
                },
            )

        if body.get("status") != "succeeded":
            raise PaymentFailure(f"Payment not completed (status: {body.get('status')})")

        # the intent must be for exactly what the server priced
        if body.get("amount") != amount_minor or str(body.get("currency", "")).lower() != currency.lower():
            raise PaymentFailure("Payment amount does not match order total")

        return CaptureResult(reference=body["id"], amount=body["amount"], currency=body["currency"])

    def _retrieve_intent(self, payment_intent_id: str) -> dict:
        try:
            resp = self._get(f"/payment_intents/{payment_intent_id}")
        except RequestException as e:
            raise PaymentFailure(f"Payment provider unavailable: {e}")
        if resp.status_code >= 400:
            raise PaymentFailure(self._error_message(resp))
        return resp.json()


class FakeGateway(PaymentGateway):
    """Configurable in-process gateway, no external calls."""

    def __init__(self, min_amount: int = MIN_CHARGE_MINOR_UNITS):
        super().__init__(min_amount)
        self.should_succeed = True
        self.failure_reason = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_intent(self, amount_minor: int, currency: str, customer_ref: str) -> PaymentIntent:
        self.calls.append({"method": "create_intent", "amount": amount_minor, "currency": currency})
        self.check_amount(amount_minor)
        reference = f"pi_fake_{uuid4().hex[:16]}"
        return PaymentIntent(
            reference=reference,
            client_secret=f"{reference}_secret_{uuid4().hex[:8]}",
            amount=amount_minor,
            currency=currency,
        )

    def capture(
        self,
        amount_minor: int,
        currency: str,
        customer_ref: str,
        payment_method: str,
        payment_intent_id: str | None = None,
    ) -> CaptureResult:
        self.calls.append(
            {
                "method": "capture",
                "amount": amount_minor,
                "currency": currency,
                "customer_ref": customer_ref,
                "payment_method": payment_method,
                "payment_intent_id": payment_intent_id,
            }
        )
        self.check_amount(amount_minor)
        if not self.should_succeed:
            raise PaymentFailure(self.failure_reason)
        return CaptureResult(
            reference=payment_intent_id or f"pi_fake_{uuid4().hex[:16]}",
            amount=amount_minor,
            currency=currency,
        )


_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = StripeGateway() if PAYMENT_GATEWAY == "stripe" else FakeGateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway | None) -> None:
    global _current_gateway
    _current_gateway = gateway
