import asyncio
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx

from reportflow.processor.exceptions import FileReadError, UnsupportedUriSchemeError


def resolve_local_path(file_uri: str) -> Path | None:
    """Return the filesystem path for a bare path or file:// URI, else None."""
    parsed = urlparse(file_uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    if parsed.scheme == "":
        return Path(file_uri)
    return None


class FileLoader:
    """Reads report bytes from a local path, a file:// URI or an http(s) URL."""

    REMOTE_SCHEMES = frozenset({"http", "https"})

    def __init__(self, timeout_seconds: float = 30.0) -> None:
        self._timeout_seconds = timeout_seconds

    async def load(self, file_uri: str) -> bytes:
        """Read file bytes.

        Raises:
            FileReadError: if the file is missing or the download fails.
            UnsupportedUriSchemeError: for schemes other than file/http/https.
        """
        path = resolve_local_path(file_uri)
        if path is not None:
            return await self._read_local(path)
        scheme = urlparse(file_uri).scheme.lower()
        if scheme not in self.REMOTE_SCHEMES:
            raise UnsupportedUriSchemeError(f"URI scheme '{scheme}' is not supported")
        return await self._download(file_uri)

    async def _read_local(self, path: Path) -> bytes:
        if not path.exists():
            raise FileReadError(f"File not found: {path}")
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise FileReadError(f"Failed to read {path}: {exc}") from exc

    async def _download(self, url: str) -> bytes:
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                response = await client.get(url, follow_redirects=True)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FileReadError(
                f"Download failed with status {exc.response.status_code}: {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FileReadError(f"Download failed: {exc}") from exc
        return response.content
