"""General-purpose helper utilities for GeoSearch Analyst."""

from pathlib import Path

KEYWORD_FILE_SUFFIXES = (".txt", ".csv")


def truncate_text(text: str, max_length: int = 160, suffix: str = "...") -> str:
    """Truncate text to a maximum length, breaking at word boundaries.

    Args:
        text: Input text.
        max_length: Maximum allowed length including suffix.
        suffix: String appended when truncation occurs.

    Returns:
        Truncated text with suffix if it was shortened.
    """
    if len(text) <= max_length:
        return text
    truncated = text[: max_length - len(suffix)]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        truncated = truncated[:last_space]
    return truncated.rstrip(".,;:!? ") + suffix


def format_number(n: int | float) -> str:
    """Format a number with human-readable suffixes.

    Examples:
        >>> format_number(1500)
        '1.5K'
        >>> format_number(2500000)
        '2.5M'
        >>> format_number(999)
        '999'
    """
    abs_n = abs(n)
    sign = "-" if n < 0 else ""
    if abs_n >= 1_000_000_000:
        return f"{sign}{abs_n / 1_000_000_000:.1f}B"
    if abs_n >= 1_000_000:
        return f"{sign}{abs_n / 1_000_000:.1f}M"
    if abs_n >= 1_000:
        return f"{sign}{abs_n / 1_000:.1f}K"
    if isinstance(n, float):
        return f"{sign}{abs_n:.1f}"
    return f"{sign}{abs_n}"


def load_keywords_text(name: str, content: bytes | str) -> str:
    """Decode an uploaded keyword file (.txt or .csv) into raw keyword text.

    Raises:
        ValueError: for any other file type.
    """
    if Path(name).suffix.lower() not in KEYWORD_FILE_SUFFIXES:
        raise ValueError("Please provide a valid text (.txt) or CSV (.csv) file.")
    if isinstance(content, bytes):
        content = content.decode("utf-8-sig", errors="replace")
    return content


def load_keywords_file(path: str | Path) -> str:
    """Read a .txt or .csv keyword file from disk."""
    path = Path(path)
    return load_keywords_text(path.name, path.read_bytes())
