"""Signature validation and derivation.

A signature is a six character lowercase hex tag identifying a media file,
normally the first six digits of its MD5 digest. It is embedded into the
placeholder as the fill color (images, video) or title tag (audio).
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from mediashrink.errors import HashFailureError, InvalidSignatureError

SIGNATURE_LENGTH = 6
_HEX_DIGITS = frozenset("0123456789abcdef")
_MD5_DIGEST_SIZE = 16
_HASH_CHUNK_SIZE = 1024 * 1024


def is_valid_signature(raw: str | None) -> bool:
    """Return True if the first six characters of raw are lowercase hex."""
    if raw is None or len(raw) < SIGNATURE_LENGTH:
        return False
    return all(c in _HEX_DIGITS for c in raw[:SIGNATURE_LENGTH])


def validate_signature(raw: str | None) -> str:
    """Validate a raw signature and cut it to six characters.

    Args:
        raw: Candidate signature, e.g. a full MD5 hex digest.

    Returns:
        The first six characters of raw.

    Raises:
        InvalidSignatureError: If raw is shorter than six characters or its
            first six characters are not all in [0-9a-f].
    """
    if not is_valid_signature(raw):
        raise InvalidSignatureError(raw if raw is not None else "")
    return raw[:SIGNATURE_LENGTH]


def file_md5(path: Path | str) -> str:
    """Compute the MD5 hex digest of a file.

    Raises:
        OSError: If the file cannot be read.
        HashFailureError: If the digest is not 16 bytes long.
    """
    digest = hashlib.md5(usedforsecurity=False)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    raw = digest.digest()
    if len(raw) < _MD5_DIGEST_SIZE:
        raise HashFailureError(path, len(raw))
    return raw[:_MD5_DIGEST_SIZE].hex()
