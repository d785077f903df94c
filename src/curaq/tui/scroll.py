LINE_STEP = 3
PAGE_STEP = 15


def line_count(text: str) -> int:
    return len(text.split("\n"))


def max_offset(total_lines: int, visible_rows: int) -> int:
    return max(0, total_lines - visible_rows)


def clamp_offset(offset: int, total_lines: int, visible_rows: int) -> int:
    """Pulls a stored offset back into range after a resize or content change."""
    return max(0, min(offset, max_offset(total_lines, visible_rows)))


def step(offset: int, delta: int, total_lines: int, visible_rows: int) -> int:
    """Moves `offset` by `delta` lines, clamped to `[0, total_lines - visible_rows]`."""
    return clamp_offset(offset + delta, total_lines, visible_rows)
