import re

_NOT_SLUG_CHARS = re.compile(r"[^0-9A-Za-z _-]")


def make_slug(title: str, year_of_release: int) -> str:
    """'Nick the Greek', 2023 -> 'nick-the-greek-2023'."""
    cleaned = _NOT_SLUG_CHARS.sub("", title)
    return f"{cleaned.lower().replace(' ', '-')}-{year_of_release}"
