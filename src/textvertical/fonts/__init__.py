"""Font resolution and registration."""

import logging
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from PIL import ImageFont
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from textvertical.fonts.google import get_google_font

logger = logging.getLogger(__name__)

FONTS_DIR = Path(__file__).parent

FONT_EXTENSIONS = {".ttf", ".otf", ".ttc"}

# Bold is picked for weights at or above this value
BOLD_WEIGHT = 600

# Generic CSS families and platform aliases that never map to a font file
GENERIC_FAMILIES = {
    "-apple-system", "blinkmacsystemfont", "system-ui",
    "serif", "sans-serif", "monospace", "cursive", "fantasy",
}

# Names already registered with ReportLab
_REGISTERED_FONTS: set[str] = set()


@dataclass(frozen=True)
class ResolvedFont:
    """
    A font family resolved to something that can measure and draw.

    Attributes:
        name: Display/registration name (e.g., "Noto-Sans-Sc-700", "Helvetica").
        path: Font file, or None for the PDF built-in fonts.
        weight: Requested weight.
    """
    name: str
    path: Optional[Path] = None
    weight: int = 400

    @property
    def is_builtin(self) -> bool:
        return self.path is None


def _normalize_font_name(name: str) -> str:
    """
    Normalize a font name to TitleCase convention.

    Examples:
        "noto-sans-sc" → "Noto-Sans-Sc"
        "Segoe UI" → "Segoe-Ui"
    """
    parts = re.split(r"[-\s]+", name.strip())
    return '-'.join(part.title() for part in parts if part)


def _normalize_token(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", text.lower())


def parse_font_families(spec: str) -> list[str]:
    """
    Split a CSS font-family list into family names.

    Args:
        spec: e.g. "-apple-system, 'Segoe UI', Helvetica, sans-serif"

    Returns:
        Family names in order, unquoted and stripped.
    """
    families = []
    for part in spec.split(","):
        family = part.strip().strip("'\"").strip()
        if family:
            families.append(family)
    return families


def system_font_dirs() -> list[Path]:
    """Directories searched for installed fonts, in priority order."""
    candidates = [
        FONTS_DIR,
        Path.home() / ".fonts",
        Path.home() / ".local" / "share" / "fonts",
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path.home() / "Library" / "Fonts",
    ]
    if windir := os.environ.get("WINDIR"):
        candidates.append(Path(windir) / "Fonts")
    if extra := os.environ.get("TEXTVERTICAL_FONTS_DIR"):
        candidates.insert(0, Path(extra))
    return [path for path in candidates if path.is_dir()]


@lru_cache(maxsize=1)
def _font_index() -> tuple[tuple[str, Path], ...]:
    """Index of (normalized file stem, path) for every installed font file."""
    index = []
    for font_dir in system_font_dirs():
        for path in sorted(font_dir.rglob("*")):
            if path.suffix.lower() in FONT_EXTENSIONS:
                index.append((_normalize_token(path.stem), path))
    logger.debug(f"Indexed {len(index)} font file(s)")
    return tuple(index)


def find_local_font(family: str, weight: int = 400) -> Optional[Path]:
    """
    Find an installed font file for a family.

    Prefers "<family>bold" files for bold weights and "<family>regular"
    (or the bare family) otherwise.

    Args:
        family: Family name (e.g., "Helvetica Neue", "DejaVu Sans").
        weight: Font weight (100-900).

    Returns:
        Path to the font file, or None if nothing matches.
    """
    token = _normalize_token(family)
    if not token or family.lower() in GENERIC_FAMILIES:
        return None

    matches = [(stem, path) for stem, path in _font_index() if stem.startswith(token)]
    if not matches:
        return None

    # Windows ships short style suffixes (arialbd.ttf, timesbd.ttf)
    preferred = (
        [f"{token}bold", f"{token}bd", f"{token}b", f"{token}{weight}"]
        if weight >= BOLD_WEIGHT
        else [token, f"{token}regular", f"{token}{weight}"]
    )
    for wanted in preferred:
        for stem, path in matches:
            if stem == wanted:
                return path

    # Shortest stem is usually the plain style
    return min(matches, key=lambda match: len(match[0]))[1]


def builtin_font(weight: int = 400) -> ResolvedFont:
    """PDF built-in Helvetica in the requested weight."""
    name = "Helvetica-Bold" if weight >= BOLD_WEIGHT else "Helvetica"
    return ResolvedFont(name=name, path=None, weight=weight)


def resolve_font(font_spec: str, weight: int = 400, allow_google: bool = False) -> ResolvedFont:
    """
    Resolve a CSS font-family list to a font file.

    Resolution priority, per family in list order:
    1. Installed font files (package fonts dir, then system font dirs)
    2. Google Fonts (auto-download and cache), if allow_google is set
    Falls back to the PDF built-in Helvetica if no family resolves.

    Args:
        font_spec: CSS-style family list (e.g., "'Noto Sans SC', sans-serif").
        weight: Font weight (100-900).
        allow_google: Try downloading families from Google Fonts.

    Returns:
        ResolvedFont.
    """
    families = parse_font_families(font_spec)

    for family in families:
        if path := find_local_font(family, weight):
            logger.debug(f"Resolved font family '{family}' to {path}")
            return ResolvedFont(name=_normalize_font_name(path.stem), path=path, weight=weight)

    if allow_google:
        for family in families:
            if family.lower() in GENERIC_FAMILIES:
                continue
            logger.info(f"Font '{family}' not found locally, trying Google Fonts...")
            if path := get_google_font(family, weight):
                return ResolvedFont(name=f"{_normalize_font_name(family)}-{weight}", path=path, weight=weight)
            logger.warning(f"Could not download '{family}' from Google Fonts")

    fallback = builtin_font(weight)
    logger.warning(f"No font found for '{font_spec}', using built-in {fallback.name}")
    return fallback


def load_pillow_font(font: ResolvedFont, size: float) -> ImageFont.FreeTypeFont:
    """
    Load a font for Pillow measuring and drawing.

    Built-in fonts, and files Pillow cannot read, use Pillow's bundled
    default font at the requested size.

    Args:
        font: Resolved font.
        size: Font size in pixels.

    Returns:
        Pillow font object.
    """
    if font.is_builtin:
        return ImageFont.load_default(size=size)

    try:
        return ImageFont.truetype(str(font.path), size=size)
    except OSError as e:
        logger.warning(f"Failed to load font {font.name} from {font.path.name}: {e}, using default font")
        return ImageFont.load_default(size=size)


def register_pdf_font(font: ResolvedFont) -> str:
    """
    Register a font with ReportLab and return the name to draw with.

    ReportLab only embeds TrueType outlines, so OTF/TTC files and files that
    fail to load fall back to the built-in Helvetica.

    Args:
        font: Resolved font.

    Returns:
        Registered font name.
    """
    if font.is_builtin:
        return font.name

    if font.name in _REGISTERED_FONTS:
        return font.name

    if font.path.suffix.lower() != ".ttf":
        logger.warning(f"ReportLab cannot embed {font.path.name}, using built-in Helvetica")
        return builtin_font(font.weight).name

    try:
        pdfmetrics.registerFont(TTFont(font.name, str(font.path)))
    except Exception as e:
        logger.warning(f"Failed to register font {font.name} from {font.path.name}: {e}")
        return builtin_font(font.weight).name

    _REGISTERED_FONTS.add(font.name)
    logger.info(f"Registered font: {font.name} from {font.path.name}")
    return font.name

