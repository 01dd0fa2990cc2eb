"""
Manifest shape-checking and ordered fragment retrieval.
"""
import pytest

from fsgame.errors import FetchError, ManifestError
from fsgame.fetcher.fetcher import FragmentFetcher
from fsgame.fetcher.manifest import Manifest, resolve_locator
from fsgame.utils.checksum import calculate_bytes_checksum


BASE = "https://cdn.example.com/games/demo/"


def test_manifest_requires_files_array() -> None:
    for document in ({}, {"files": []}, {"files": "part0"}, []):
        with pytest.raises(ManifestError):
            Manifest.from_document(document)


def test_manifest_rejects_non_string_locators() -> None:
    with pytest.raises(ManifestError):
        Manifest.from_document({"files": ["part0", 3]})


def test_manifest_rejects_misaligned_checksums() -> None:
    with pytest.raises(ManifestError):
        Manifest.from_document({"files": ["a", "b"], "checksums": ["x"]})


def test_manifest_rejects_invalid_json() -> None:
    with pytest.raises(ManifestError):
        Manifest.from_bytes(b"{not json", BASE + "manifest.json")


def test_manifest_keeps_order_and_resolves_relative_locators() -> None:
    manifest = Manifest.from_document(
        {"files": ["part1", "part0", "https://other.example/x"], "archive": "demo"},
        BASE + "manifest.json"
    )

    assert manifest.files == ["part1", "part0", "https://other.example/x"]
    assert manifest.locators == [BASE + "part1", BASE + "part0", "https://other.example/x"]
    assert manifest.extra == {"archive": "demo"}


def test_local_locators_resolve_against_manifest_directory(tmp_path) -> None:
    source = str(tmp_path / "manifest.json")
    assert resolve_locator(source, "game.part000") == str(tmp_path / "game.part000")
    assert resolve_locator(source, "/abs/part") == "/abs/part"


def test_file_uri_manifest_with_escaped_path_resolves_fragments(tmp_path) -> None:
    game_dir = tmp_path / "my games"
    game_dir.mkdir()
    (game_dir / "game.part000").write_bytes(b"fragment")
    source = (game_dir / "manifest.json").as_uri()

    locator = resolve_locator(source, "game.part000")

    assert "%20" in source
    assert locator == str(game_dir / "game.part000")
    assert FragmentFetcher().fetch(locator) == b"fragment"


def test_fetch_all_preserves_order_and_reports_each_fragment(session) -> None:
    urls = [BASE + f"part{i}" for i in range(4)]
    for i, url in enumerate(urls):
        session.add(url, bytes([i]) * (i + 1))
    events = []

    fragments = FragmentFetcher(session=session).fetch_all(
        urls, on_progress=lambda done, total: events.append((done, total))
    )

    assert fragments == [b"\x00", b"\x01\x01", b"\x02\x02\x02", b"\x03\x03\x03\x03"]
    assert events == [(1, 4), (2, 4), (3, 4), (4, 4)]
    assert session.requested == urls


def test_non_success_status_stops_immediately(session) -> None:
    urls = [BASE + "part0", BASE + "part1", BASE + "part2"]
    session.add(urls[0], b"ok")
    session.add(urls[1], b"", status=503)
    session.add(urls[2], b"never")
    events = []

    with pytest.raises(FetchError) as exc:
        FragmentFetcher(session=session).fetch_all(urls, lambda d, t: events.append(d))

    assert exc.value.locator == urls[1]
    assert exc.value.status_or_cause == 503
    assert "HTTP 503" in str(exc.value)
    assert events == [1]
    assert urls[2] not in session.requested


def test_redirect_status_is_not_success(session) -> None:
    session.add(BASE + "part0", b"", status=302)

    with pytest.raises(FetchError):
        FragmentFetcher(session=session).fetch(BASE + "part0")


def test_transport_failure_becomes_fetch_error(session, connection_error) -> None:
    session.routes[BASE + "part0"] = connection_error

    with pytest.raises(FetchError) as exc:
        FragmentFetcher(session=session).fetch(BASE + "part0")
    assert exc.value.status_or_cause is connection_error


def test_checksum_mismatch_is_a_fetch_error(session) -> None:
    session.add(BASE + "part0", b"tampered")

    with pytest.raises(FetchError) as exc:
        FragmentFetcher(session=session).fetch_all(
            [BASE + "part0"], checksums=[calculate_bytes_checksum(b"original")]
        )
    assert "checksum" in str(exc.value)


def test_matching_checksums_pass(session) -> None:
    session.add(BASE + "part0", b"original")

    fragments = FragmentFetcher(session=session).fetch_all(
        [BASE + "part0"], checksums=[calculate_bytes_checksum(b"original")]
    )
    assert fragments == [b"original"]


def test_local_files_and_file_uris(tmp_path) -> None:
    part = tmp_path / "part0"
    part.write_bytes(b"local bytes")
    fetcher = FragmentFetcher(session=object())

    assert fetcher.fetch(str(part)) == b"local bytes"
    assert fetcher.fetch(part.as_uri()) == b"local bytes"


def test_missing_local_file_is_a_fetch_error(tmp_path) -> None:
    with pytest.raises(FetchError):
        FragmentFetcher(session=object()).fetch(str(tmp_path / "missing"))


def test_fetch_manifest_over_http(session) -> None:
    session.add_json(BASE + "manifest.json", {"files": ["part0", "part1"]})

    manifest = FragmentFetcher(session=session).fetch_manifest(BASE + "manifest.json")
    assert manifest.locators == [BASE + "part0", BASE + "part1"]


def test_unreachable_manifest_is_a_fetch_error(session) -> None:
    with pytest.raises(FetchError) as exc:
        FragmentFetcher(session=session).fetch_manifest(BASE + "manifest.json")
    assert exc.value.status_or_cause == 404
