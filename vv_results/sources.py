"""Reading raw results text from local files or HTTP(S) URLs."""

import asyncio
import logging
from pathlib import Path

import aiohttp
from yarl import URL

log = logging.getLogger(__name__)

URL_SCHEMES = frozenset({"http", "https"})


class SourceError(Exception):
    """Raised when a results source cannot be read."""


def is_url(source: str) -> bool:
    """Check whether the source names an HTTP(S) resource."""
    return URL(source).scheme in URL_SCHEMES


def read_file(path: Path) -> str:
    """Read a local results file."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError as e:
        raise SourceError(f"Results file not found: {path}") from e
    except OSError as e:
        raise SourceError(f"Cannot read results file {path}: {e}") from e


async def fetch_url(url: URL, session: aiohttp.ClientSession) -> str:
    """Download a results file."""
    log.info("Fetching results from %s", url)
    try:
        async with session.get(url) as response:
            if response.status != 200:
                text = await response.text()
                raise SourceError(
                    f"Failed to fetch results: {response.status} {text}"
                )
            return await response.text()
    except aiohttp.ClientError as e:
        raise SourceError(f"Failed to fetch results from {url}: {e}") from e


async def load_source(
    source: str, session: aiohttp.ClientSession | None = None
) -> str:
    """Load raw results text from a path or URL.

    Args:
        source: Local file path or ``http(s)://`` URL
        session: Session to reuse for URLs; a temporary one is opened if omitted

    Returns:
        The raw text, not yet parsed

    Raises:
        SourceError: If the file is missing or the download fails

    """
    if not is_url(source):
        log.info("Reading results from %s", source)
        return await asyncio.to_thread(read_file, Path(source))

    if session is not None:
        return await fetch_url(URL(source), session)

    async with aiohttp.ClientSession() as owned_session:
        return await fetch_url(URL(source), owned_session)
