"""Formatting helpers for showing farm entries in the terminal."""

from .validated_field import IconRef


def truncate_path(text: str, max_len: int) -> str:
    """
    Shorten a path for display, keeping its tail.

    Args:
        text: Path text to shorten
        max_len: Maximum length including the leading ellipsis

    Returns:
        Text with a "..." prefix if it exceeds max_len

    Examples:
        >>> truncate_path("/media/farm", 20)
        '/media/farm'
        >>> truncate_path("/media/subspace/farm-01", 12)
        '...e/farm-01'
    """
    if len(text) <= max_len:
        return text

    if max_len <= 3:
        return "..."[:max_len]

    return "..." + text[len(text) - (max_len - 3) :]


def get_status_badge(icon: IconRef) -> tuple[str, str]:
    """
    Get symbol and color for a field status icon.

    Examples:
        >>> get_status_badge(IconRef.CHECKMARK)
        ('✓', 'green')
        >>> get_status_badge(IconRef.WARNING)
        ('⚠', 'red')
    """
    badge_map = {
        IconRef.CHECKMARK: ("✓", "green"),
        IconRef.WARNING: ("⚠", "red"),
    }

    return badge_map.get(icon, ("?", "white"))
