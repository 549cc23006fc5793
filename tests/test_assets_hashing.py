import hashlib
import io
from pathlib import Path

from nexusclient.services.assets.hashing import compute_digest, same_content


def test_compute_digest_matches_for_bytes_stream_and_file(tmp_path: Path) -> None:
    data = b"blueprint" * 1000
    path = tmp_path / "a.png"
    path.write_bytes(data)

    expected = hashlib.sha256(data).hexdigest()
    assert compute_digest(data) == expected
    assert compute_digest(path) == expected
    assert compute_digest(io.BytesIO(data)) == expected


def test_compute_digest_rewinds_stream() -> None:
    stream = io.BytesIO(b"savegame")
    stream.read(3)

    digest = compute_digest(stream)

    assert digest == hashlib.sha256(b"savegame").hexdigest()
    assert stream.tell() == 0


def test_same_content_requires_identical_bytes_not_just_size(tmp_path: Path) -> None:
    path = tmp_path / "park.txt"
    path.write_bytes(b"aaaa")

    assert same_content(b"aaaa", path)
    # Same size, different content
    assert not same_content(b"aaab", path)
    assert not same_content(b"aaaaa", path)


def test_same_content_missing_file(tmp_path: Path) -> None:
    assert not same_content(b"x", tmp_path / "missing.txt")
