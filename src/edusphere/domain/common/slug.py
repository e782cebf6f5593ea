import re
import secrets
import unicodedata

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """Lower-case, ascii-only, hyphen separated"""
    normalized = (
        unicodedata.normalize("NFKD", text)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    cleaned = _NON_WORD.sub("", normalized.lower()).strip()
    return _SEPARATORS.sub("-", cleaned).strip("-")


def unique_slug(text: str) -> str:
    # random suffix, uniqueness is enforced by the slug index
    base = slugify(text) or "item"
    return f"{base}-{secrets.token_hex(3)}"
