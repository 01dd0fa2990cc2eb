"""
FSGAME Fragment Fetcher
Retrieves archive fragments in manifest order. Stops at the first failure.
"""
from pathlib import Path
from typing import List, Optional, Callable
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from ..config import config
from ..errors import FetchError
from ..utils.checksum import calculate_bytes_checksum
from ..utils.logger import logger
from .manifest import Manifest, is_remote


class FragmentFetcher:
    def __init__(self, session: requests.Session = None, timeout: float = None):
        if session is None:
            session = requests.Session()
            session.headers['User-Agent'] = config.user_agent
        self.session = session
        self.timeout = timeout if timeout is not None else config.timeout

    def fetch(self, locator: str) -> bytes:
        """Retrieve one locator, raising FetchError on any failure"""
        if is_remote(locator):
            return self._fetch_remote(locator)
        return self._fetch_local(locator)

    def fetch_manifest(self, source: str) -> Manifest:
        data = self.fetch(source)
        manifest = Manifest.from_bytes(data, source)
        logger.info(f"📜 Manifest lists {len(manifest)} fragment(s)")
        return manifest

    def fetch_all(
        self,
        locators: List[str],
        on_progress: Optional[Callable] = None,
        checksums: Optional[List[str]] = None
    ) -> List[bytes]:
        """
        Fetch every locator in order.

        Args:
            locators: resolved fragment locators, in byte order
            on_progress: optional callback(completed, total)
            checksums: optional SHA-256 digests, index-aligned with locators

        Returns:
            list of fragment bytes, index-aligned with locators
        """
        total = len(locators)
        fragments = []

        for i, locator in enumerate(locators):
            data = self.fetch(locator)

            if checksums and checksums[i]:
                actual = calculate_bytes_checksum(data)
                if actual != checksums[i]:
                    raise FetchError(locator, "checksum mismatch")

            fragments.append(data)
            logger.debug(f"   [{i + 1}/{total}] {locator} ({len(data)} bytes)")

            if on_progress:
                on_progress(i + 1, total)

        return fragments

    def _fetch_remote(self, url: str) -> bytes:
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(url, e)

        if not 200 <= resp.status_code < 300:
            raise FetchError(url, resp.status_code)
        return resp.content

    def _fetch_local(self, locator: str) -> bytes:
        parsed = urlparse(locator)
        path = Path(url2pathname(parsed.path)) if parsed.scheme == 'file' else Path(locator)
        try:
            return path.read_bytes()
        except OSError as e:
            raise FetchError(locator, e)


__all__ = ["FragmentFetcher"]
