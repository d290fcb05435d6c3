from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentStatus:
    """Outcome of a checkout session lookup."""

    payment_completed: bool
    subscription_active: bool

    @property
    def confirmed(self) -> bool:
        return self.payment_completed and self.subscription_active


class BasePaymentVerifier(ABC):
    """Contract for payment provider adapters."""

    @abstractmethod
    def verify_session(self, session_id: str) -> PaymentStatus:
        """Look up a completed checkout session.

        Raises:
            PaymentVerificationError: if the provider call fails.
        """

    @abstractmethod
    def create_checkout_session(self, price_id: str, success_url: str, cancel_url: str) -> str:
        """Create a subscription checkout session and return its redirect URL.

        Raises:
            PaymentVerificationError: if the provider call fails.
        """
