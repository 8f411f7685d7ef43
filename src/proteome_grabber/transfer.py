"""Single-attempt archive downloads with md5 manifest verification."""

import gzip
import hashlib
import logging
import os
import shutil
import tempfile
import zlib
from dataclasses import dataclass
from typing import Dict

import requests

from proteome_grabber.errors import ChecksumMismatchError, DecompressionError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024

TRANSPORT_ERROR = "transport"
HTTP_ERROR = "http"


@dataclass
class FetchResult:
    url: str
    path: str
    skipped: bool = False
    error: str = ""
    error_kind: str = ""  # TRANSPORT_ERROR or HTTP_ERROR

    @property
    def ok(self) -> bool:
        return not self.error


class VerifiedFetcher:
    def __init__(self, session: requests.Session, timeout: float = 300.0):
        self._session = session
        self._timeout = timeout

    def fetch(self, url: str, destination: str) -> FetchResult:
        """Download ``url`` to ``destination`` unless it already exists.

        Failures are returned, never raised. The body is streamed to
        ``<destination>.part`` and renamed once complete.
        """
        if os.path.exists(destination):
            logger.info("File %s exists already. Thus, download has been skipped.", destination)
            return FetchResult(url=url, path=destination, skipped=True)

        partial = destination + ".part"
        try:
            with self._session.get(to_http(url), stream=True, timeout=self._timeout) as resp:
                resp.raise_for_status()
                with open(partial, "wb") as fh:
                    for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                        fh.write(chunk)
        except requests.HTTPError as exc:
            _remove(partial)
            return FetchResult(url=url, path=destination, error=str(exc), error_kind=HTTP_ERROR)
        except requests.RequestException as exc:
            _remove(partial)
            return FetchResult(
                url=url, path=destination, error=str(exc), error_kind=TRANSPORT_ERROR
            )

        os.replace(partial, destination)
        logger.debug("Downloaded %s -> %s", url, destination)
        return FetchResult(url=url, path=destination)

    def verify(self, file_path: str, manifest_url: str, expected_key: str) -> bool:
        """Check ``file_path`` against its entry in a remote md5 manifest.

        Returns False when the manifest cannot be downloaded. Raises
        ``ChecksumMismatchError`` when the manifest has no entry for
        ``expected_key`` or the hashes differ.
        """
        directory = os.path.dirname(os.path.abspath(file_path))
        fd, manifest_path = tempfile.mkstemp(
            prefix=os.path.basename(file_path) + ".", suffix=".md5checksums.txt", dir=directory
        )
        os.close(fd)
        os.remove(manifest_path)
        try:
            result = self.fetch(manifest_url, manifest_path)
            if not result.ok:
                logger.warning("Checksum manifest %s could not be retrieved: %s", manifest_url, result.error)
                return False

            logger.info("Checking md5 hash of file: %s ...", file_path)
            with open(manifest_path, encoding="utf-8") as fh:
                manifest = parse_md5_manifest(fh.read())
        finally:
            _remove(manifest_path)

        expected = manifest.get(expected_key, "")
        actual = md5sum(file_path)
        if expected != actual:
            raise ChecksumMismatchError(file_path, expected, actual)
        logger.info("The md5 hash of file '%s' matches!", file_path)
        return True


def parse_md5_manifest(text: str) -> Dict[str, str]:
    """Map file name -> md5 from ``<hash>  ./<file name>`` lines."""
    entries = {}
    for line in text.splitlines():
        parts = line.strip().split(None, 1)
        if len(parts) != 2:
            continue
        md5, file_name = parts
        entries[file_name.strip()] = md5.lower()
    return entries


def md5sum(file_path: str) -> str:
    hasher = hashlib.md5()
    with open(file_path, "rb") as fh:
        for chunk in iter(lambda: fh.read(CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def gunzip_file(source: str, destination: str) -> str:
    """Decompress ``source`` into ``destination``, keeping ``source``.

    Raises ``DecompressionError`` for a truncated or non-gzip archive; no
    partial output is left behind.
    """
    if os.path.exists(destination):
        logger.info("File %s exists already. Thus, unzipping has been skipped.", destination)
        return destination
    partial = destination + ".part"
    try:
        with gzip.open(source, "rb") as src, open(partial, "wb") as dst:
            shutil.copyfileobj(src, dst, CHUNK_SIZE)
    except (OSError, EOFError, zlib.error) as exc:
        _remove(partial)
        raise DecompressionError(source, str(exc)) from exc
    os.replace(partial, destination)
    return destination


def to_http(url: str) -> str:
    """NCBI and EBI serve their FTP trees over HTTPS too."""
    if url.startswith("ftp://"):
        return "https://" + url[len("ftp://"):]
    return url


def _remove(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)
