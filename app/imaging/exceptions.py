class ImageDecodeError(Exception):
    """Raised when an image cannot be decoded by any available decode path."""
