import io
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

import pytesseract
from PIL import Image, UnidentifiedImageError

from app.logging.logger import Log
from app.ocr.base import BaseOcrEngine
from app.ocr.exceptions import OcrError, OcrTimeoutError, OcrUnavailableError


class TesseractAdapter(BaseOcrEngine):
    """Recognizes text with the Tesseract CLI via pytesseract.

    One adapter is shared by all requests, so it holds configuration only.
    Each ``session()`` yields its own ``TesseractSession`` owning a private
    scratch directory.
    """

    def __init__(
        self,
        *,
        languages: str = "deu+eng",
        page_segmentation_mode: int = 6,
        timeout_seconds: int = 30,
    ) -> None:
        self._languages = languages
        self._config = f"--psm {page_segmentation_mode} -c preserve_interword_spaces=1"
        self._timeout_seconds = timeout_seconds

    @contextmanager
    def session(self) -> Iterator[BaseOcrEngine]:
        try:
            version = pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError as exc:
            raise OcrUnavailableError(f"Tesseract is not installed: {exc}") from exc
        with tempfile.TemporaryDirectory(prefix="ocr-") as workdir:
            Log.debug(f"Tesseract {version} session opened")
            yield TesseractSession(self, Path(workdir))
        Log.debug("Tesseract session closed")

    def recognize(
        self,
        image_bytes: bytes,
        on_progress: Callable[[float], None] | None = None,
    ) -> str:
        """Recognize a Pillow-readable image without a scratch directory."""
        return self.run(image_bytes, on_progress, workdir=None)

    def run(
        self,
        image_bytes: bytes,
        on_progress: Callable[[float], None] | None,
        *,
        workdir: Path | None,
    ) -> str:
        if on_progress is not None:
            on_progress(0.0)
        source = self._as_source(image_bytes, workdir)
        try:
            text = pytesseract.image_to_string(
                source,
                lang=self._languages,
                config=self._config,
                timeout=self._timeout_seconds,
            )
        except pytesseract.TesseractError as exc:
            raise OcrError(f"Tesseract failed: {exc}") from exc
        except RuntimeError as exc:
            # pytesseract signals a killed process with a bare RuntimeError
            raise OcrTimeoutError(
                f"Tesseract exceeded {self._timeout_seconds}s: {exc}"
            ) from exc
        if on_progress is not None:
            on_progress(1.0)
        return text or ""

    @staticmethod
    def _as_source(image_bytes: bytes, workdir: Path | None) -> Image.Image | str:
        """Prefer an in-memory Pillow image; hand Tesseract a file otherwise."""
        try:
            img = Image.open(io.BytesIO(image_bytes))
            img.load()
            return img
        except (UnidentifiedImageError, OSError):
            pass
        if workdir is None:
            raise OcrError("Tesseract session is not open")
        path = workdir / "input.img"
        path.write_bytes(image_bytes)
        return str(path)


class TesseractSession(BaseOcrEngine):
    """Request-scoped handle: shared adapter settings plus a private workdir."""

    def __init__(self, adapter: TesseractAdapter, workdir: Path) -> None:
        self._adapter = adapter
        self.workdir = workdir

    def recognize(
        self,
        image_bytes: bytes,
        on_progress: Callable[[float], None] | None = None,
    ) -> str:
        return self._adapter.run(image_bytes, on_progress, workdir=self.workdir)
