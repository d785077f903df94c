"""
Display-width arithmetic for a fixed-width terminal grid.

East-Asian wide and full-width code points occupy two columns, everything
else one. No normalization is done and combining marks are counted as
ordinary characters, so decomposed text can measure wider than it renders.
"""

import unicodedata
from typing import List

ELLIPSIS = "..."

# Line breaks and other control characters never reach the grid.
CONTROL_CATEGORIES = ("Cc", "Zl", "Zp")

# Inclusive code point ranges rendered two columns wide.
WIDE_RANGES = (
    (0x1100, 0x115F),  # Hangul Jamo
    (0x2E80, 0x303E),  # CJK radicals, Kangxi, CJK symbols and punctuation
    (0x3041, 0x33FF),  # Hiragana, Katakana, Bopomofo, CJK compatibility
    (0x3400, 0x4DBF),  # CJK unified ideographs extension A
    (0x4E00, 0x9FFF),  # CJK unified ideographs
    (0xA000, 0xA4CF),  # Yi syllables and radicals
    (0xAC00, 0xD7A3),  # Hangul syllables
    (0xF900, 0xFAFF),  # CJK compatibility ideographs
    (0xFE10, 0xFE19),  # Vertical forms
    (0xFE30, 0xFE6F),  # CJK compatibility forms, small form variants
    (0xFF00, 0xFF60),  # Full-width forms
    (0xFFE0, 0xFFE6),  # Full-width signs
    (0xFFE8, 0xFFEE),  # Half-width arrows and shapes
    (0x20000, 0x2FFFD),  # CJK unified ideographs extensions B..F
    (0x30000, 0x3FFFD),  # CJK unified ideographs extension G
)


def char_width(ch: str) -> int:
    code = ord(ch)
    if code < 0x1100:
        return 1
    for low, high in WIDE_RANGES:
        if code < low:
            return 1
        if code <= high:
            return 2
    return 1


def display_width(s: str) -> int:
    """Number of terminal columns `s` occupies."""
    return sum(char_width(ch) for ch in s)


def truncate(s: str, max_width: int) -> str:
    """
    Fits `s` into `max_width` columns.

    Strings that already fit are returned unchanged. Otherwise code points are
    kept while they fit into `max_width - 3` columns and "..." is appended.
    The result is never wider than `max_width`.
    """
    if max_width <= 0:
        return ""
    if display_width(s) <= max_width:
        return s
    if max_width < len(ELLIPSIS):
        return "." * max_width

    budget = max_width - len(ELLIPSIS)
    used = 0
    kept = []
    for ch in s:
        w = char_width(ch)
        if used + w > budget:
            break
        kept.append(ch)
        used += w
    return "".join(kept) + ELLIPSIS


def pad(s: str, target_width: int) -> str:
    """Right-pads `s` with spaces to exactly `target_width` columns. Never truncates."""
    missing = target_width - display_width(s)
    if missing <= 0:
        return s
    return s + " " * missing


def clean(s: str) -> str:
    """Replaces control characters, line breaks included, with spaces."""
    return "".join(" " if unicodedata.category(ch) in CONTROL_CATEGORIES else ch for ch in s)


def fit(s: str, width: int) -> str:
    return pad(truncate(s, width), width)


def _split_long_word(word: str, width: int) -> List[str]:
    pieces = []
    current = []
    used = 0
    for ch in word:
        w = char_width(ch)
        if current and used + w > width:
            pieces.append("".join(current))
            current = []
            used = 0
        current.append(ch)
        used += w
    if current:
        pieces.append("".join(current))
    return pieces


def wrap(text: str, width: int) -> List[str]:
    """
    Word-wraps `text` into lines of at most `width` columns.

    Existing newlines are kept as hard breaks and blank lines survive as
    empty strings. Words wider than `width` are split at code points.
    """
    if width <= 0:
        return []

    lines: List[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = ""
        current_width = 0
        for word in words:
            word_width = display_width(word)
            if word_width > width:
                if current:
                    lines.append(current)
                pieces = _split_long_word(word, width)
                lines.extend(pieces[:-1])
                current = pieces[-1]
                current_width = display_width(current)
                continue

            if not current:
                current, current_width = word, word_width
            elif current_width + 1 + word_width <= width:
                current += " " + word
                current_width += 1 + word_width
            else:
                lines.append(current)
                current, current_width = word, word_width
        lines.append(current)
    return lines
