"""Normalize model output into bullet lines."""

BULLET = "- "


def format_inspire_response(raw_text: str, indent_size: int) -> list[str]:
    """
    Turn a raw response into "- " bullet lines.

    Lines are trimmed, blank lines dropped, a "- " marker added where
    missing, and every line indented by indent_size spaces so the bullets
    nest under a list item when needed.

    Args:
        raw_text: Model response
        indent_size: Number of spaces in front of each bullet (0 for none)

    Returns:
        Bullet lines, possibly empty
    """
    indent = " " * indent_size
    bullets = []
    for line in raw_text.split("\n"):
        line = line.strip()
        if not line:
            continue
        if not line.startswith(BULLET):
            line = BULLET + line
        bullets.append(indent + line)
    return bullets
