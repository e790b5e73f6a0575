"""
Fingerprint Generator
=====================

SHA-256 over the exact bytes of the uploaded document. The digest is only
meaningful for the complete original bytes, so any failure to obtain them is
raised as DocumentReadError instead of being degraded.
"""

import hashlib
import io
import logging
import os
from pathlib import Path
from typing import BinaryIO, Union

from app.core.errors import DocumentReadError
from app.core.utc import utc_now_iso

from .models import DocumentHash

logger = logging.getLogger(__name__)

HASH_ALGORITHM = "SHA-256"
_READ_CHUNK = 1024 * 1024

DocumentSource = Union[bytes, bytearray, memoryview, str, os.PathLike, BinaryIO]


def read_document_bytes(source: DocumentSource) -> bytes:
    """
    Materialise the raw document bytes from bytes, a path, or a binary stream.

    Raises:
        DocumentReadError: source is missing, unreadable, or yields text
    """
    if source is None:
        raise DocumentReadError("No document bytes supplied")

    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    if isinstance(source, (str, os.PathLike)):
        try:
            return Path(source).read_bytes()
        except OSError as e:
            raise DocumentReadError(f"Failed to read document: {e}") from e

    if isinstance(source, io.TextIOBase):
        raise DocumentReadError("Document stream must be opened in binary mode")

    if hasattr(source, "read"):
        chunks = []
        try:
            while True:
                chunk = source.read(_READ_CHUNK)
                if not chunk:
                    break
                if not isinstance(chunk, (bytes, bytearray)):
                    raise DocumentReadError("Document stream must be opened in binary mode")
                chunks.append(bytes(chunk))
        # closed file objects raise ValueError
        except (OSError, ValueError) as e:
            raise DocumentReadError(f"Failed to read document stream: {e}") from e
        return b"".join(chunks)

    raise DocumentReadError(f"Unsupported document source type: {type(source).__name__}")


def generate_document_hash(source: DocumentSource) -> DocumentHash:
    """
    Fingerprint a document.

    Only the content bytes enter the digest; file names and paths never do,
    so the same scan uploaded under two names hashes identically.
    """
    data = read_document_bytes(source)
    digest = hashlib.sha256(data).hexdigest()
    logger.debug("Hashed %d bytes -> %s...", len(data), digest[:12])
    return DocumentHash(
        algorithm=HASH_ALGORITHM,
        hash=digest,
        timestamp=utc_now_iso(),
        file_size=len(data),
    )
