class PaymentVerificationError(Exception):
    """Raised when the payment provider could not be queried."""
