"""Fetch TrueType files from Google Fonts into a local cache."""

import logging
import re
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)

CACHE_DIR = Path.home() / ".cache" / "text-vertical" / "fonts"

# The v1 CSS endpoint still links .ttf files; css2 only links .woff2
CSS_API_URL = "https://fonts.googleapis.com/css"

CSS_TIMEOUT = 10
FILE_TIMEOUT = 30

_SRC_TTF = re.compile(r"src:\s*url\((https://[^)]+\.ttf)\)")
_ANY_TTF = re.compile(r"https://[^\s'\"()]+\.ttf")


def cache_path_for(family: str, weight: int) -> Path:
    """Path a downloaded family/weight is cached under."""
    return CACHE_DIR / f"{family.replace(' ', '')}-{weight}.ttf"


def get_google_font(family: str, weight: int = 400) -> Optional[Path]:
    """
    Return a cached TTF for a Google Fonts family, downloading it on first use.

    Args:
        family: Family name as listed on Google Fonts (e.g., "Noto Sans SC").
        weight: Weight to request (100-900).

    Returns:
        Path to the TTF file, or None if the family could not be fetched.
    """
    target = cache_path_for(family, weight)
    if target.exists():
        logger.debug(f"Google Font cache hit: {target.name}")
        return target

    try:
        stylesheet = _fetch(CSS_API_URL, CSS_TIMEOUT, params={"family": f"{family}:{weight}"}).text
        ttf_url = _extract_font_url_from_css(stylesheet)
        if ttf_url is None:
            logger.error(f"Google Fonts returned no TTF link for {family} (weight {weight})")
            return None
        payload = _fetch(ttf_url, FILE_TIMEOUT).content
    except requests.RequestException as e:
        logger.error(f"Google Fonts request for {family} (weight {weight}) failed: {e}")
        return None

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(payload)
    logger.info(f"Cached Google Font {family} (weight {weight}) at {target}")
    return target


def _fetch(url: str, timeout: int, params: Optional[dict] = None) -> requests.Response:
    response = requests.get(url, params=params, timeout=timeout)
    response.raise_for_status()
    return response


def _extract_font_url_from_css(css_content: str) -> Optional[str]:
    """First .ttf URL in a Google Fonts stylesheet, preferring @font-face src entries."""
    for pattern, group in ((_SRC_TTF, 1), (_ANY_TTF, 0)):
        if match := pattern.search(css_content):
            return match.group(group)
    return None
