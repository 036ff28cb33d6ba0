"""Readable file objects over HTTP download URLs."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

import httpx

from .exceptions import StorageError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import BinaryIO

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 60.0


class DownloadStream(io.RawIOBase):
    """Raw, read-only stream pulling bytes from a streamed httpx response.

    Closing the stream closes the response, and the client too when the
    stream owns it.
    """

    def __init__(self, response: httpx.Response, client: httpx.Client | None = None) -> None:
        self._response = response
        self._client = client
        self._chunks: Iterator[bytes] = response.iter_bytes()
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray | memoryview) -> int:
        while not self._pending:
            chunk = next(self._chunks, None)
            if chunk is None:
                return 0
            self._pending = chunk
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._response.close()
            if self._client is not None:
                self._client.close()
        except Exception:
            logger.warning(
                "Closing download stream failed for %s", self._response.url, exc_info=True
            )
        finally:
            super().close()


def open_url_stream(
    url: str,
    *,
    client: httpx.Client | None = None,
    timeout: float = DOWNLOAD_TIMEOUT,
) -> BinaryIO:
    """Open *url* for streamed reading.

    The caller owns the returned handle and must close it.  A client passed
    in stays open after the handle is closed.
    """
    owned = client is None
    http = client if client is not None else httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        response = http.send(http.build_request("GET", url), stream=True)
    except httpx.HTTPError as e:
        if owned:
            http.close()
        raise StorageError(f"Download request failed for {url}: {e}") from e

    if response.is_error:
        response.close()
        if owned:
            http.close()
        raise StorageError(f"Download failed for {url}: HTTP {response.status_code}")

    return io.BufferedReader(DownloadStream(response, http if owned else None))
