import hashlib
import hmac

from app.exceptions import ConfigurationMissingError


class TokenSigner:
    """Owns the server secret and the single sign/verify pair for tokens.

    Token format: ``payload + "." + hex(HMAC-SHA256(secret, payload))``.
    """

    SEPARATOR = "."

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ConfigurationMissingError("Server is not configured: cookie secret is missing.")
        self._key = secret.encode("utf-8")

    def signature(self, payload: str) -> str:
        return hmac.new(self._key, payload.encode("utf-8"), hashlib.sha256).hexdigest()

    def sign(self, payload: str) -> str:
        return f"{payload}{self.SEPARATOR}{self.signature(payload)}"

    def verify(self, token: str | None) -> str | None:
        """Return the payload of a genuine token, ``None`` for anything else.

        Never raises. The signature comparison is constant-time.
        """
        if not token:
            return None
        payload, separator, provided = token.rpartition(self.SEPARATOR)
        if not separator or not payload or not provided:
            return None

        expected = self.signature(payload).encode("ascii")
        candidate = provided.encode("utf-8", errors="replace")
        if len(candidate) != len(expected):
            return None
        if not hmac.compare_digest(expected, candidate):
            return None
        return payload
