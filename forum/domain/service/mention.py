"""@mention extraction."""

import re

MENTION_PATTERN = re.compile(r"@(\w+)")


def extract_mentions(text: str) -> list[str]:
    """Extract mentioned handles from free text.

    Handles are returned without the ``@``, deduplicated, in order of first
    appearance.

    Args:
        text: Comment or post body

    Returns:
        Mentioned handles
    """
    seen: dict[str, None] = {}
    for match in MENTION_PATTERN.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)
