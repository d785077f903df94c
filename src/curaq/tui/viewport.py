from typing import Tuple


def compute_window(total: int, selected: int, visible_rows: int) -> Tuple[int, int]:
    """
    Returns the `(start, end)` slice of `total` items to show in `visible_rows`.

    The selection is kept vertically centred and the window is clamped to the
    ends of the list, so `start <= selected < end` whenever anything is visible.
    """
    if visible_rows <= 0 or total <= 0:
        return (0, 0)

    start = selected - visible_rows // 2
    start = max(0, min(start, max(0, total - visible_rows)))
    end = min(start + visible_rows, total)
    return (start, end)
