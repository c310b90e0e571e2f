import re

_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9_-]+")
_HYPHEN_RUN_RE = re.compile(r"-{2,}")

PAGE_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def generate_slug(title: str) -> str:
    """Turn a page title into a URL slug: ``"Our Programs"`` -> ``"our-programs"``.

    The result only contains ``[a-z0-9-]`` with no leading, trailing or doubled
    hyphens, so applying it twice gives the same slug.
    """
    text = str(title or "").lower().strip()
    text = _WHITESPACE_RE.sub("-", text)
    text = _DISALLOWED_RE.sub("", text.encode("ascii", "ignore").decode("ascii"))
    text = text.replace("_", "-")
    text = _HYPHEN_RUN_RE.sub("-", text)
    return text.strip("-")


def is_valid_page_slug(slug: str) -> bool:
    return bool(PAGE_SLUG_RE.fullmatch(str(slug or "")))
