"""Stateless entitlement bookkeeping carried in signed client tokens.

The signed token is the entire durable state: there is no server-side user
record. Rotating the secret invalidates every outstanding token, which reads
as "no premium, zero usage".
"""

import re
import time
from collections.abc import Callable
from datetime import datetime, timezone

from app.entitlement.models import EntitlementState, EntitlementToken, TokenKind
from app.entitlement.signer import TokenSigner
from app.exceptions import QuotaExceededError
from app.logging.logger import Log

_PREMIUM_PAYLOAD_RE = re.compile(r"^v1:(\d{1,15})$")
_USAGE_PAYLOAD_RE = re.compile(r"^\s*[+-]?\d+")


class EntitlementLedger:
    """Issues and reads premium and usage-count tokens."""

    def __init__(
        self,
        signer: TokenSigner,
        *,
        free_limit: int = 3,
        usage_ceiling: int = 999,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._signer = signer
        self._free_limit = free_limit
        self._usage_ceiling = usage_ceiling
        self._clock = clock

    @property
    def free_limit(self) -> int:
        return self._free_limit

    # ------------------------------------------------------------------
    # Issue / verify
    # ------------------------------------------------------------------

    def issue(self, kind: TokenKind, payload: str) -> str:
        Log.debug(f"Issuing {kind.value} token")
        return self._signer.sign(payload)

    def verify(self, token: str | None) -> str | None:
        return self._signer.verify(token)

    def issue_premium(self) -> str:
        issued_ms = int(self._clock() * 1000)
        return self.issue(TokenKind.PREMIUM, f"v1:{issued_ms}")

    def issue_usage(self, count: int) -> str:
        return self.issue(TokenKind.USAGE_COUNT, str(self._clamp(count)))

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read_premium(self, token: str | None) -> EntitlementToken | None:
        """A premium token counts only if it is genuine and premium-shaped.

        The shape check keeps a genuine usage-count token from being replayed
        as a premium token, since both share one signing secret.
        """
        payload = self.verify(token)
        if payload is None:
            return None
        match = _PREMIUM_PAYLOAD_RE.match(payload)
        if match is None:
            return None
        issued_at = datetime.fromtimestamp(int(match.group(1)) / 1000, tz=timezone.utc)
        return EntitlementToken(kind=TokenKind.PREMIUM, payload=payload, issued_at=issued_at)

    def read_usage(self, token: str | None) -> int:
        """Verified usage count clamped to [0, ceiling]; 0 when absent or invalid."""
        payload = self.verify(token)
        if payload is None:
            return 0
        match = _USAGE_PAYLOAD_RE.match(payload)
        if match is None:
            return 0
        return self._clamp(int(match.group(0)))

    def read_state(self, premium_token: str | None, usage_token: str | None) -> EntitlementState:
        if self.read_premium(premium_token) is not None:
            return EntitlementState(premium=True, used=0)
        return EntitlementState(premium=False, used=self.read_usage(usage_token))

    # ------------------------------------------------------------------
    # Quota
    # ------------------------------------------------------------------

    def check_quota(self, state: EntitlementState) -> None:
        if not state.premium and state.used >= self._free_limit:
            Log.info(f"Free quota exhausted ({state.used}/{self._free_limit})")
            raise QuotaExceededError(
                f"Free limit reached ({self._free_limit} documents). "
                "Please activate premium to continue."
            )

    def next_usage_token(self, state: EntitlementState) -> str | None:
        """Fresh token for ``used + 1``; premium clients are never counted."""
        if state.premium:
            return None
        return self.issue_usage(state.used + 1)

    def _clamp(self, count: int) -> int:
        return max(0, min(self._usage_ceiling, count))
