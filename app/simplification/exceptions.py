class SimplificationError(Exception):
    """Raised when the plain-language transformation fails."""


class SimplificationNetworkError(SimplificationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
