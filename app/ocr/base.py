from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager


class BaseOcrEngine(ABC):
    """Contract for all OCR engine adapters.

    Engines hold resources between calls, so callers must use ``session()``
    and recognize through the engine it yields. Adapters shared across
    requests yield a request-scoped engine instead of ``self``; the default
    yields ``self`` and guarantees ``release()`` on every exit path.
    """

    @contextmanager
    def session(self) -> Iterator["BaseOcrEngine"]:
        self.acquire()
        try:
            yield self
        finally:
            self.release()

    def acquire(self) -> None:
        """Prepare engine resources. Default: nothing to acquire."""

    def release(self) -> None:
        """Free engine resources. Default: nothing to release."""

    @abstractmethod
    def recognize(
        self,
        image_bytes: bytes,
        on_progress: Callable[[float], None] | None = None,
    ) -> str:
        """Recognize text in an encoded image.

        Args:
            image_bytes: Encoded image (PNG, JPEG, ...).
            on_progress: Receives this call's progress in [0, 1].

        Returns:
            Recognized text, possibly empty.

        Raises:
            OcrError: if recognition fails.
            OcrTimeoutError: if recognition exceeds its time budget.
        """
