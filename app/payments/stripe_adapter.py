import stripe

from app.logging.logger import Log
from app.payments.base import BasePaymentVerifier, PaymentStatus
from app.payments.exceptions import PaymentVerificationError


class StripePaymentVerifier(BasePaymentVerifier):
    """Payment verifier backed by Stripe Checkout and Subscriptions."""

    ACTIVE_SUBSCRIPTION_STATUSES = frozenset({"active", "trialing"})

    def __init__(self, *, api_key: str) -> None:
        self._api_key = api_key

    def verify_session(self, session_id: str) -> PaymentStatus:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self._api_key)
            payment_completed = getattr(session, "payment_status", None) == "paid"

            subscription = getattr(session, "subscription", None)
            subscription_active = False
            if subscription:
                if isinstance(subscription, str):
                    subscription = stripe.Subscription.retrieve(
                        subscription, api_key=self._api_key
                    )
                subscription_active = (
                    getattr(subscription, "status", None) in self.ACTIVE_SUBSCRIPTION_STATUSES
                )
        except stripe.StripeError as exc:
            raise PaymentVerificationError(f"Stripe session lookup failed: {exc}") from exc

        Log.info(
            f"Checkout session verified: paid={payment_completed} "
            f"subscription_active={subscription_active}"
        )
        return PaymentStatus(
            payment_completed=payment_completed,
            subscription_active=subscription_active,
        )

    def create_checkout_session(self, price_id: str, success_url: str, cancel_url: str) -> str:
        try:
            session = stripe.checkout.Session.create(
                api_key=self._api_key,
                mode="subscription",
                line_items=[{"price": price_id, "quantity": 1}],
                success_url=success_url,
                cancel_url=cancel_url,
                allow_promotion_codes=True,
            )
        except stripe.StripeError as exc:
            raise PaymentVerificationError(f"Stripe checkout creation failed: {exc}") from exc

        url = getattr(session, "url", None)
        if not url:
            raise PaymentVerificationError("Stripe returned a checkout session without URL")
        return url
