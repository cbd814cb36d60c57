"""
Download an artifact and compute its SHA-256 digest.

The body is streamed into the digest so large archives are never held
in memory.
"""

import hashlib as _hashlib
import logging as _logging
import typing as _typing

import httpx as _httpx

import recipebump.constants as constants
import recipebump.errors as errors

_logger = _logging.getLogger(__name__)


def sha256_of_chunks(chunks: _typing.Iterable[bytes]) -> str:
    """Hex SHA-256 digest of a byte stream."""
    digest = _hashlib.sha256()
    for chunk in chunks:
        digest.update(chunk)
    return digest.hexdigest()


def sha256_of_url(client: _httpx.Client, url: str) -> str:
    """
    Fetch ``url`` (following redirects) and return the hex SHA-256 of the body.

    Raises:
        UpstreamError: On transport failure or a non-2xx response.
    """
    _logger.debug("Downloading %s", url)
    size = 0

    def _counted(chunks: _typing.Iterator[bytes]) -> _typing.Iterator[bytes]:
        nonlocal size
        for chunk in chunks:
            size += len(chunk)
            yield chunk

    try:
        with client.stream("GET", url, follow_redirects=True) as response:
            response.raise_for_status()
            hexdigest = sha256_of_chunks(
                _counted(response.iter_bytes(constants.DOWNLOAD_CHUNK_SIZE))
            )
    except _httpx.HTTPStatusError as e:
        raise errors.UpstreamError(url, f"HTTP {e.response.status_code}") from e
    except _httpx.HTTPError as e:
        raise errors.UpstreamError(url, str(e) or type(e).__name__) from e

    _logger.debug("Hashed %d bytes from %s: %s", size, url, hexdigest)
    return hexdigest
