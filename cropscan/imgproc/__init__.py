"""Image preparation before upload."""

from .normalize import (
    DecodeError,
    EncodeError,
    ImageBlob,
    ImageNormalizationError,
    ImageNormalizer,
    NormalizedImage,
)

__all__ = [
    "DecodeError",
    "EncodeError",
    "ImageBlob",
    "ImageNormalizationError",
    "ImageNormalizer",
    "NormalizedImage",
]
