from unittest.mock import MagicMock, patch

import pytest
import stripe

from app.payments.exceptions import PaymentVerificationError
from app.payments.stripe_adapter import StripePaymentVerifier


def _session(payment_status: str = "paid", subscription: object = "sub_123") -> MagicMock:
    return MagicMock(payment_status=payment_status, subscription=subscription)


def _verifier() -> StripePaymentVerifier:
    return StripePaymentVerifier(api_key="sk_test_123")


class TestVerifySession:
    @pytest.mark.parametrize(
        ("payment_status", "sub_status", "confirmed"),
        [
            ("paid", "active", True),
            ("paid", "trialing", True),
            ("paid", "canceled", False),
            ("unpaid", "active", False),
        ],
    )
    def test_requires_paid_and_active_subscription(
        self, payment_status: str, sub_status: str, confirmed: bool
    ) -> None:
        with (
            patch("app.payments.stripe_adapter.stripe.checkout.Session.retrieve",
                  return_value=_session(payment_status)),
            patch("app.payments.stripe_adapter.stripe.Subscription.retrieve",
                  return_value=MagicMock(status=sub_status)) as sub_retrieve,
        ):
            status = _verifier().verify_session("cs_test_1")
        assert status.confirmed is confirmed
        sub_retrieve.assert_called_once_with("sub_123", api_key="sk_test_123")

    def test_expanded_subscription_is_used_directly(self) -> None:
        with (
            patch("app.payments.stripe_adapter.stripe.checkout.Session.retrieve",
                  return_value=_session(subscription=MagicMock(status="active"))),
            patch("app.payments.stripe_adapter.stripe.Subscription.retrieve") as sub_retrieve,
        ):
            status = _verifier().verify_session("cs_test_1")
        assert status.confirmed is True
        sub_retrieve.assert_not_called()

    def test_session_without_subscription_is_not_confirmed(self) -> None:
        with patch("app.payments.stripe_adapter.stripe.checkout.Session.retrieve",
                   return_value=_session(subscription=None)):
            status = _verifier().verify_session("cs_test_1")
        assert status.payment_completed is True
        assert status.subscription_active is False

    def test_stripe_error_is_wrapped(self) -> None:
        with patch("app.payments.stripe_adapter.stripe.checkout.Session.retrieve",
                   side_effect=stripe.StripeError("No such checkout.session")):
            with pytest.raises(PaymentVerificationError):
                _verifier().verify_session("cs_missing")


class TestCreateCheckoutSession:
    def test_subscription_mode_with_promotion_codes(self) -> None:
        with patch("app.payments.stripe_adapter.stripe.checkout.Session.create",
                   return_value=MagicMock(url="https://checkout.stripe.com/c/pay/cs_1")) as create:
            url = _verifier().create_checkout_session("price_1", "https://app/ok", "https://app/")
        assert url == "https://checkout.stripe.com/c/pay/cs_1"
        kwargs = create.call_args.kwargs
        assert kwargs["mode"] == "subscription"
        assert kwargs["line_items"] == [{"price": "price_1", "quantity": 1}]
        assert kwargs["allow_promotion_codes"] is True

    def test_missing_url_raises(self) -> None:
        with patch("app.payments.stripe_adapter.stripe.checkout.Session.create",
                   return_value=MagicMock(url=None)):
            with pytest.raises(PaymentVerificationError, match="without URL"):
                _verifier().create_checkout_session("price_1", "s", "c")
