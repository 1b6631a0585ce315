"""Image normalisation helpers."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import PurePath

from PIL import Image, ImageOps, UnidentifiedImageError

JPEG_MEDIA_TYPE = "image/jpeg"


class ImageNormalizationError(ValueError):
    """Base class for failures while preparing an image for upload."""


class DecodeError(ImageNormalizationError):
    """Raised when the input bytes cannot be decoded as an image."""


class EncodeError(ImageNormalizationError):
    """Raised when re-encoding the resized image produces no output."""


@dataclass(frozen=True, slots=True)
class ImageBlob:
    """Raw image as selected by the user."""

    data: bytes
    filename: str
    media_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class NormalizedImage:
    """Resized JPEG copy of an :class:`ImageBlob`."""

    data: bytes
    filename: str
    width: int
    height: int
    media_type: str = JPEG_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.data)


def target_dimensions(width: int, height: int, max_edge: int) -> tuple[int, int]:
    """Scale ``(width, height)`` so the long edge fits ``max_edge``; never upscale."""

    if width > height:
        if width > max_edge:
            return max_edge, max(1, round(height * max_edge / width))
    elif height > max_edge:
        return max(1, round(width * max_edge / height)), max_edge
    return width, height


def jpeg_filename(filename: str) -> str:
    """Rewrite the extension of ``filename`` to ``.jpg``."""

    stem = PurePath(filename).stem if filename else ""
    return f"{stem or 'image'}.jpg"


class ImageNormalizer:
    """Ensures consistent orientation, bounded size and JPEG encoding."""

    def __init__(self, max_edge: int = 1024, quality: float = 0.7) -> None:
        if max_edge <= 0:
            raise ValueError("max_edge must be positive.")
        if not 0 < quality <= 1:
            raise ValueError("quality must be within (0, 1].")
        self._max_edge = max_edge
        self._quality = quality

    def normalize(self, image: ImageBlob) -> NormalizedImage:
        """Return a resized JPEG copy ready for the analysis webhook."""

        try:
            with Image.open(BytesIO(image.data)) as source:
                source.load()
                oriented = ImageOps.exif_transpose(source)
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Could not decode {image.filename or 'image'} as an image.") from exc

        width, height = target_dimensions(oriented.width, oriented.height, self._max_edge)
        rendered = oriented.convert("RGB")
        if (width, height) != rendered.size:
            rendered = rendered.resize((width, height), Image.Resampling.LANCZOS)

        buffer = BytesIO()
        try:
            rendered.save(buffer, format="JPEG", quality=round(self._quality * 100))
        except (OSError, ValueError) as exc:
            raise EncodeError("JPEG conversion failed.") from exc
        payload = buffer.getvalue()
        if not payload:
            raise EncodeError("JPEG conversion produced no output.")

        return NormalizedImage(
            data=payload,
            filename=jpeg_filename(image.filename),
            width=width,
            height=height,
        )
