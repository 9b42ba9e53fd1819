"""
Receipt image storage.

Receipts arrive inline as base64 (optionally wrapped in a data URL), are
written to the upload directory under a generated name, and are referenced
afterwards as ``/uploads/<filename>``.
"""

import base64
import binascii
import logging
import os
import random
import time
from pathlib import Path
from typing import Optional

import aiofiles

from errors import NotFound

logger = logging.getLogger(__name__)

REFERENCE_PREFIX = "/uploads/"
DATA_URL_MARKER = "base64,"


def strip_data_url(payload: str) -> str:
    if DATA_URL_MARKER in payload:
        return payload.split(DATA_URL_MARKER, 1)[1]
    return payload


def generate_filename() -> str:
    return f"receipt-{int(time.time() * 1000)}-{random.randint(0, 10**9)}.jpg"


class ReceiptStore:
    def __init__(self, upload_dir: str):
        self.upload_dir = Path(upload_dir)

    async def ingest(self, payload: str) -> Optional[str]:
        """Store a base64 receipt and return its reference.

        Returns None instead of raising when the payload cannot be decoded
        or written, so the caller can carry on without a receipt.
        """
        try:
            data = strip_data_url(payload).strip()
            logger.info("Receipt image received, base64 data length: %d", len(data))
            image_bytes = base64.b64decode(data, validate=True)
            if not image_bytes:
                raise ValueError("empty image payload")

            self.upload_dir.mkdir(parents=True, exist_ok=True)
            filename = generate_filename()
            filepath = self.upload_dir / filename
            async with aiofiles.open(filepath, mode="wb") as f:
                await f.write(image_bytes)
        except (binascii.Error, ValueError, OSError) as exc:
            logger.error("Error processing receipt image: %s", exc)
            return None

        logger.info("Receipt image saved to %s", filepath)
        return REFERENCE_PREFIX + filename

    def retrieve(self, reference: str) -> Path:
        filename = reference
        if filename.startswith(REFERENCE_PREFIX):
            filename = filename[len(REFERENCE_PREFIX):]

        if (
            not filename
            or filename in (".", "..")
            or "/" in filename
            or "\\" in filename
            or os.sep in filename
        ):
            raise NotFound("Image not found")

        filepath = self.upload_dir / filename
        if not filepath.is_file():
            raise NotFound("Image not found")
        return filepath
