from dataclasses import dataclass

from flask import current_app

from app.config.settings import Settings
from app.entitlement.rate_limiter import RateLimiter
from app.exceptions import ConfigurationMissingError
from app.payments.base import BasePaymentVerifier
from app.processor.processor import Processor

EXTENSION_KEY = "klarbrief"


@dataclass
class Services:
    """Collaborators shared by every request of one application instance."""

    settings: Settings
    processor: Processor
    rate_limiter: RateLimiter
    payment_verifier: BasePaymentVerifier | None = None

    def require_payments(self) -> BasePaymentVerifier:
        if self.payment_verifier is None:
            raise ConfigurationMissingError("Server is not configured: Stripe is not configured.")
        return self.payment_verifier


def current_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
