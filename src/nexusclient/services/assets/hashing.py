"""Content digests used to detect byte-identical assets regardless of name."""

import hashlib
import io
from pathlib import Path
from typing import BinaryIO

# Size of each chunk to read (1MB)
CHUNK_SIZE = 1024 * 1024


def compute_digest(source: BinaryIO | Path | bytes, algorithm: str = "sha256") -> str:
    """Compute the digest of a stream, file or byte string.

    The whole content is hashed; streams are rewound before and after reading.

    Args:
        source: Seekable binary stream, file path or raw bytes
        algorithm: Hash algorithm to use (default: sha256)

    Returns:
        Hex digest

    Raises:
        OSError: If a file cannot be read
    """
    if isinstance(source, bytes):
        return hashlib.new(algorithm, source).hexdigest()

    if isinstance(source, Path):
        with open(source, "rb") as f:
            return _digest_stream(f, algorithm)

    source.seek(0)
    try:
        return _digest_stream(source, algorithm)
    finally:
        source.seek(0)


def _digest_stream(stream: BinaryIO | io.BufferedReader, algorithm: str) -> str:
    hasher = hashlib.new(algorithm)
    while chunk := stream.read(CHUNK_SIZE):
        hasher.update(chunk)
    return hasher.hexdigest()


def same_content(data: bytes, path: Path, digest: str | None = None) -> bool:
    """Check whether the file at path holds exactly the given bytes.

    A size mismatch short-circuits; equal sizes are always confirmed by digest.

    Args:
        data: Incoming content
        path: Existing file
        digest: Precomputed digest of data, to avoid rehashing it per candidate

    Returns:
        True if the file exists and its content is identical
    """
    try:
        if path.stat().st_size != len(data):
            return False
        return compute_digest(path) == (digest or compute_digest(data))
    except FileNotFoundError:
        return False
