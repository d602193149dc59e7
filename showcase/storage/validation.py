"""
File validation for vehicle photo uploads.

Validates files by:
1. Content type: anything declared ``image/*`` is accepted; an undeclared or
   generic type falls back to sniffing magic bytes
2. File size: inputs above 100MB are rejected before any processing
"""
import os
import re
import logging

logger = logging.getLogger(__name__)

# Magic byte signatures for common photo formats
# Maps content_type → list of (offset, signature_bytes)
MAGIC_SIGNATURES: dict[str, list[tuple[int, bytes]]] = {
    "image/jpeg": [(0, b"\xff\xd8\xff")],
    "image/png": [(0, b"\x89PNG\r\n\x1a\n")],
    "image/webp": [(8, b"WEBP")],
    "image/gif": [(0, b"GIF87a"), (0, b"GIF89a")],
    "image/heic": [(4, b"ftypheic"), (4, b"ftypheix"), (4, b"ftypmif1")],
    "image/bmp": [(0, b"BM")],
}

MAX_IMAGE_BYTES = 100 * 1024 * 1024  # 100MB

GENERIC_CONTENT_TYPES = {"", "application/octet-stream", "binary/octet-stream"}


class FileValidator:
    """Validates uploaded photos for type and size."""

    @staticmethod
    def is_image_content_type(content_type: str | None) -> bool:
        return bool(content_type) and content_type.lower().startswith("image/")

    @staticmethod
    def sniff_content_type(data: bytes) -> str | None:
        """Identify an image type from its leading bytes, or None."""
        for content_type, signatures in MAGIC_SIGNATURES.items():
            for offset, signature in signatures:
                if data[offset:offset + len(signature)] == signature:
                    return content_type
        return None

    @staticmethod
    def validate_file_size(size: int) -> tuple[bool, str]:
        """
        Check the upload against the 100MB input ceiling.

        Returns (is_valid, error_message).
        """
        if size > MAX_IMAGE_BYTES:
            return False, "File is too large. Maximum size is 100MB."
        return True, ""

    @staticmethod
    def sanitize_filename(filename: str) -> str:
        """
        Sanitize a filename for display and logging.

        - Strips path components (directory traversal prevention)
        - Removes non-alphanumeric characters (except . - _)
        - Limits length to 255 characters
        """
        filename = os.path.basename(filename)
        filename = re.sub(r'[^\w\s\-.]', '_', filename)
        filename = re.sub(r'[\s_]+', '_', filename)
        filename = filename.lstrip('.')

        if len(filename) > 255:
            name, ext = os.path.splitext(filename)
            filename = name[:255 - len(ext)] + ext

        if not filename:
            filename = "photo.jpg"

        return filename

    @classmethod
    def resolve_image_type(cls, data: bytes, claimed_content_type: str | None) -> str | None:
        """
        Decide whether an upload is an image.

        A declared ``image/*`` type is trusted. A missing or generic type is
        replaced by the sniffed type. Anything else is not an image.
        """
        if cls.is_image_content_type(claimed_content_type):
            return claimed_content_type

        if (claimed_content_type or "").lower() in GENERIC_CONTENT_TYPES:
            sniffed = cls.sniff_content_type(data)
            if sniffed:
                logger.debug(f"Sniffed {sniffed} for upload declared as {claimed_content_type!r}")
            return sniffed

        return None
