"""Remote acquisition: fetch a single page as one content unit.

Uses requests for the GET and BeautifulSoup to pull out inline scripts.
"""

from __future__ import annotations
import logging
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from keyhunter.core.content import ContentUnit, SourceKind
from keyhunter.core.exceptions import FetchError, InvalidUrlError
from keyhunter.scanner.config import DEFAULT_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http://", "https://")


def validate_url(url: Optional[str]) -> str:
    """Reject empty URLs and anything without an http(s) prefix."""
    if not url:
        raise InvalidUrlError("URL is required", url=url)
    if not url.startswith(ALLOWED_SCHEMES):
        raise InvalidUrlError(
            "Invalid URL format. URL must start with http:// or https://", url=url
        )
    return url


def extract_scripts(html: str) -> List[str]:
    """Return the non-empty contents of every ``<script>`` element, in page order."""
    soup = BeautifulSoup(html, "html.parser")
    scripts = []
    for tag in soup.find_all("script"):
        content = tag.string if tag.string is not None else tag.get_text()
        if content:
            scripts.append(content)
    return scripts


def fetch_url(
    url: str,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
    user_agent: Optional[str] = None,
) -> ContentUnit:
    """
    Fetch *url* and wrap the body as a content unit.

    The raw body becomes ``text`` (secret and sensitive-file checks run on
    it) while the joined inline scripts become ``script_text`` (code-risk
    checks run on that only).

    Raises:
        FetchError: on transport errors, timeouts or non-2xx responses
    """
    headers = {"User-Agent": user_agent} if user_agent else {}
    logger.debug("Fetching %s (timeout=%ss)", url, timeout)
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise FetchError(f"Failed to scan URL: {e}", url=url, status_code=status) from e
    except requests.RequestException as e:
        raise FetchError(f"Failed to scan URL: {e}", url=url) from e

    body = response.text
    scripts = extract_scripts(body)
    logger.debug("Fetched %s: %d bytes, %d inline scripts", url, len(body), len(scripts))
    return ContentUnit(
        logical_path=url,
        text=body,
        source=SourceKind.URL,
        script_text="\n".join(scripts),
    )
