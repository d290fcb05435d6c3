from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TokenKind(str, Enum):
    PREMIUM = "premium"
    USAGE_COUNT = "usage-count"


@dataclass(frozen=True)
class EntitlementToken:
    """A verified token. ``issued_at`` is only known for premium tokens."""

    kind: TokenKind
    payload: str
    issued_at: datetime | None = None


@dataclass(frozen=True)
class EntitlementState:
    """What the client is entitled to, as read from its tokens."""

    premium: bool = False
    used: int = 0

    def remaining(self, free_limit: int) -> int | None:
        if self.premium:
            return None
        return max(0, free_limit - self.used)
