"""Hashing utilities."""

import hashlib
from dataclasses import dataclass


@dataclass
class HashResult:
    md5: str
    sha1: str
    sha256: str
    size: int


def hash_bytes(data: bytes) -> HashResult:
    """MD5, SHA1 and SHA256 of ``data`` with its length."""
    digests = [hashlib.md5(), hashlib.sha1(), hashlib.sha256()]
    view = memoryview(data)
    for digest in digests:
        digest.update(view)
    md5, sha1, sha256 = (digest.hexdigest() for digest in digests)
    return HashResult(md5=md5, sha1=sha1, sha256=sha256, size=len(data))
