"""Plain HTTP downloads of rendered screen assets (HTML, screenshots)."""

import httpx

DEFAULT_DOWNLOAD_TIMEOUT = 30.0


class DownloadError(Exception):
    """Asset download failed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


async def download_bytes(url: str, timeout: float = DEFAULT_DOWNLOAD_TIMEOUT) -> bytes:
    """Download a URL and return its body.

    Raises:
        DownloadError: On connection errors or non-2xx responses
    """
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DownloadError(
                f"Failed to fetch content: {e.response.status_code} {e.response.reason_phrase}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise DownloadError(f"Failed to fetch content from {url}: {e}") from e
        return response.content


async def download_text(url: str, timeout: float = DEFAULT_DOWNLOAD_TIMEOUT) -> str:
    """Download a URL and decode it as text."""
    content = await download_bytes(url, timeout=timeout)
    return content.decode("utf-8", errors="replace")
