"""
Photo preprocessor for vehicle uploads.

Phone cameras produce large images; every upload is scaled down to fit a
1600x1200 box and re-encoded as JPEG before it reaches the photo bucket.
"""
from dataclasses import dataclass
from typing import Tuple
import io
import logging
import os

from PIL import Image, ImageOps

from showcase.errors import ValidationFailedError
from showcase.storage.validation import FileValidator

logger = logging.getLogger(__name__)

MAX_WIDTH = 1600
MAX_HEIGHT = 1200
DEFAULT_QUALITY = 0.6


@dataclass(frozen=True)
class ProcessedImage:
    """Image bytes ready for storage, keeping the uploader's file name."""
    filename: str
    data: bytes
    content_type: str
    size: Tuple[int, int] | None = None


def fit_within(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """
    Scale (width, height) down to fit the box, preserving aspect ratio.

    The width constraint is applied first, then the height constraint on the
    result. Images already inside the box are left alone.
    """
    if width > max_width:
        height = max(1, round(height * max_width / width))
        width = max_width
    if height > max_height:
        width = max(1, round(width * max_height / height))
        height = max_height
    return width, height


class ImagePreprocessor:
    """Resize and recompress photos before upload."""

    def __init__(self, max_width: int = MAX_WIDTH, max_height: int = MAX_HEIGHT, quality: float = DEFAULT_QUALITY):
        self.max_width = max_width
        self.max_height = max_height
        self.quality = quality

    def process(
        self,
        data: bytes,
        filename: str,
        max_width: int | None = None,
        max_height: int | None = None,
        quality: float | None = None,
        content_type: str = "application/octet-stream",
    ) -> ProcessedImage:
        """
        Decode, downscale and re-encode an image as JPEG.

        Args:
            data: Raw upload bytes
            filename: Logical name, carried through unchanged
            max_width / max_height: Bounding box (defaults 1600x1200)
            quality: JPEG quality factor in 0..1 (default 0.6)
            content_type: Declared type, returned as-is on fallback

        Returns:
            ProcessedImage. If decoding or encoding fails the original bytes
            are returned untouched.

        Raises:
            ValidationFailedError: input above 100MB
        """
        size_ok, size_error = FileValidator.validate_file_size(len(data))
        if not size_ok:
            raise ValidationFailedError(size_error)

        max_width = max_width or self.max_width
        max_height = max_height or self.max_height
        quality = self.quality if quality is None else quality

        try:
            with Image.open(io.BytesIO(data)) as img:
                img = ImageOps.exif_transpose(img)
                original_size = img.size
                target = fit_within(img.width, img.height, max_width, max_height)
                if target != img.size:
                    img = img.resize(target, Image.LANCZOS)

                # Convert to RGB for JPEG
                if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
                    img = img.convert("RGBA")
                    background = Image.new("RGB", img.size, (255, 255, 255))
                    background.paste(img, mask=img.split()[3])
                    img = background
                elif img.mode != "RGB":
                    img = img.convert("RGB")

                output = io.BytesIO()
                img.save(output, format="JPEG", quality=max(1, min(95, int(round(quality * 100)))), optimize=True)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.warning(f"Could not preprocess {filename}, uploading original: {e}")
            return ProcessedImage(filename=filename, data=data, content_type=content_type)

        processed = output.getvalue()
        logger.debug(
            f"Preprocessed {filename}: {original_size} -> {target}, "
            f"{len(data)} -> {len(processed)} bytes"
        )
        return ProcessedImage(
            filename=os.path.basename(filename) or filename,
            data=processed,
            content_type="image/jpeg",
            size=target,
        )
