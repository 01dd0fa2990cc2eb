"""
Archive production: encoding limits, fragment splitting, manifest output.
"""
import json
import struct

import pytest

from fsgame.fetcher.merger import merge_buffers
from fsgame.packager.packager import Packager
from fsgame.unpacker.decoder import decode_records
from fsgame.utils.checksum import calculate_bytes_checksum


def test_header_layout(packager) -> None:
    archive = packager.encode([("a.js", b"1"), ("b.js", b"2")])
    assert struct.unpack('<II', archive[:8]) == (1, 2)


def test_empty_name_is_refused(packager) -> None:
    with pytest.raises(ValueError):
        packager.encode_record("", b"data")


def test_overlong_name_is_refused(packager) -> None:
    with pytest.raises(ValueError):
        packager.encode_record("x" * 70000, b"data")


def test_split_covers_archive_in_order() -> None:
    archive = bytes(range(256)) * 10
    fragments = Packager.split(archive, 1000)

    assert [len(f) for f in fragments] == [1000, 1000, 560]
    assert merge_buffers(fragments) == archive


def test_split_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        Packager.split(b"abc", 0)


def test_pack_directory_writes_fragments_and_manifest(tmp_path, packager) -> None:
    src = tmp_path / "game"
    (src / "js").mkdir(parents=True)
    (src / "index.html").write_bytes(b"<html>" + b"x" * 3000 + b"</html>")
    (src / "js" / "main.js").write_bytes(b"let a = 1;\n" * 400)
    out = tmp_path / "dist"
    events = []

    result = packager.pack_directory(
        str(src), str(out), fragment_size=512,
        on_progress=lambda done, total: events.append((done, total))
    )

    manifest = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["files"] == [f"game.fsgame.part{i:03d}" for i in range(len(manifest["files"]))]
    assert manifest["record_count"] == 2
    assert len(events) == len(manifest["files"])

    fragments = [(out / name).read_bytes() for name in manifest["files"]]
    assert manifest["checksums"] == [calculate_bytes_checksum(f) for f in fragments]
    assert all(len(f) <= 512 for f in fragments)

    records = list(decode_records(merge_buffers(fragments)))
    assert [r.name for r in records] == ["index.html", "js/main.js"]
    assert result["archive_size"] == sum(len(f) for f in fragments)
    assert not list(out.glob("*.tmp"))


def test_pack_empty_directory_is_refused(tmp_path, packager) -> None:
    (tmp_path / "empty").mkdir()
    with pytest.raises(ValueError):
        packager.pack_directory(str(tmp_path / "empty"), str(tmp_path / "out"))
