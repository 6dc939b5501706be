import math
import re
import unicodedata
from typing import Iterable, List, Optional

from slugify import slugify

SLUG_MAX_LENGTH = 100
WORDS_PER_MINUTE = 200
DEFAULT_EXCERPT_LENGTH = 300

_HTML_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_KEPT_CONTROL_CHARS = {"\n", "\t", "\r"}

_TRUE_VALUES = {"1", "t", "true", "y", "yes", "on"}
_FALSE_VALUES = {"0", "f", "false", "n", "no", "off"}


def generate_slug(title: str) -> str:
    """URL-safe slug: lowercase, runs of other characters collapsed to one hyphen."""
    slug = slugify(
        title or "",
        entities=False,
        decimal=False,
        hexadecimal=False,
        max_length=SLUG_MAX_LENGTH,
        regex_pattern=r"[^a-z0-9]+",
        # digit groups stay apart ("10,000" -> "10-000")
        replacements=[[",", "-"]],
    )
    return slug.strip("-") or "post"


def strip_html_tags(content: str) -> str:
    return _HTML_TAG_RE.sub(" ", content)


def calculate_reading_time(content: str) -> int:
    if not content:
        return 0
    words = strip_html_tags(content).split()
    return max(1, math.ceil(len(words) / WORDS_PER_MINUTE))


def sanitize_string(value: Optional[str]) -> str:
    """Drop control characters (newline, tab and carriage return survive) and trim."""
    if not value:
        return ""
    cleaned = "".join(
        ch
        for ch in value
        if ch in _KEPT_CONTROL_CHARS or unicodedata.category(ch) != "Cc"
    )
    return cleaned.strip()


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    # the cut already sits on a word boundary
    if text[max_length].isspace():
        return truncated.rstrip() + "..."

    last_space = truncated.rfind(" ")
    if last_space > 0:
        truncated = truncated[:last_space]
    return truncated.rstrip() + "..."


def generate_excerpt(content: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    if max_length <= 0:
        max_length = DEFAULT_EXCERPT_LENGTH
    cleaned = _WHITESPACE_RE.sub(" ", strip_html_tags(content or "")).strip()
    return truncate_text(cleaned, max_length)


def split_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def join_tags(values: Iterable[str]) -> str:
    return ", ".join(tag.strip() for tag in values if tag and tag.strip())


def parse_bool(raw) -> Optional[bool]:
    """Lenient bool parsing for query strings; None when the value is not a bool."""
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return None
    value = str(raw).strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def parse_int(raw) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None
