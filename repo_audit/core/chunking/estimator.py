"""
Content size estimator.

Heuristic token estimate used for chunk packing decisions.

Dependencies: None
System role: Token budget heuristic
"""

import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str | None) -> int:
    """
    Estimate the token cost of a text blob from its length.

    Args:
        text: Text to measure (None counts as empty)

    Returns:
        int: ceil(len(text) / 4), 0 for empty or missing text
    """
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)
