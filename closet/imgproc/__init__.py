"""Image encoding helpers."""

from .encoding import encode_jpeg, to_jpeg_bytes

__all__ = ["encode_jpeg", "to_jpeg_bytes"]
