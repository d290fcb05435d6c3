from pathlib import PurePath

from app.extraction.models import MediaKind

ACCEPTED_KINDS_DESCRIPTION = "text/plain (.txt), application/pdf (.pdf), image/* (.png, .jpg, .jpeg, .webp, .bmp, .tif, .tiff)"

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".webp", ".bmp", ".tif", ".tiff"})

_GENERIC_MEDIA_TYPES = frozenset({
    "",
    "application/octet-stream",
    "binary/octet-stream",
    "application/unknown",
})


def _kind_from_media_type(media_type: str) -> MediaKind:
    if media_type.startswith("text/"):
        return MediaKind.PLAIN_TEXT
    if media_type == "application/pdf":
        return MediaKind.PDF
    if media_type.startswith("image/"):
        return MediaKind.IMAGE
    return MediaKind.UNSUPPORTED


def _kind_from_filename(filename: str) -> MediaKind:
    suffix = PurePath(filename).suffix.lower()
    if suffix == ".txt":
        return MediaKind.PLAIN_TEXT
    if suffix == ".pdf":
        return MediaKind.PDF
    if suffix in IMAGE_EXTENSIONS:
        return MediaKind.IMAGE
    return MediaKind.UNSUPPORTED


def resolve_media_kind(media_type: str | None, filename: str | None) -> MediaKind:
    """Resolve the document kind once at the entry point.

    The declared media type wins when it is specific and recognized; a generic,
    absent or unrecognized declaration falls back to the filename extension.
    """
    declared = (media_type or "").split(";", 1)[0].strip().lower()
    if declared not in _GENERIC_MEDIA_TYPES:
        kind = _kind_from_media_type(declared)
        if kind is not MediaKind.UNSUPPORTED:
            return kind
    return _kind_from_filename(filename or "")
