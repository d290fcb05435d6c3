import re

_CRLF_RE = re.compile(r"\r\n?")
_TRAILING_SPACE_RE = re.compile(r"[^\S\n]+\n")
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_extracted_text(text: str) -> str:
    """Normalize line endings and blank runs, then trim.

    The result never contains CR characters; paragraphs stay separated by a
    single blank line.
    """
    cleaned = _CRLF_RE.sub("\n", text)
    cleaned = _TRAILING_SPACE_RE.sub("\n", cleaned)
    cleaned = _BLANK_RUN_RE.sub("\n\n", cleaned)
    return cleaned.strip()


def text_density(text: str) -> int:
    """Character count after collapsing whitespace runs to single spaces."""
    return len(_WHITESPACE_RE.sub(" ", text).strip())


def decode_plain_text(content: bytes) -> str:
    """Decode a text upload, tolerating a BOM and invalid sequences."""
    return content.decode("utf-8-sig", errors="replace")
