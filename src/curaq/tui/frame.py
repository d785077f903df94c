from typing import List, Optional, Sequence

from curaq.tui.text_metrics import clean, display_width, fit, truncate

TOP_LEFT = "┌"
TOP_RIGHT = "┐"
BOTTOM_LEFT = "└"
BOTTOM_RIGHT = "┘"
HORIZONTAL = "─"
VERTICAL = "│"

# Columns taken by "┌─ " + " " + "┐" around an inline title.
TITLE_CHROME = 5
MIN_TITLE_WIDTH = 4


def _top_border(width: int, title: Optional[str]) -> str:
    inner = width - 2
    available = width - TITLE_CHROME
    if not title or available < MIN_TITLE_WIDTH:
        return TOP_LEFT + HORIZONTAL * inner + TOP_RIGHT

    title = truncate(clean(title), available)
    k = available - display_width(title)
    return TOP_LEFT + HORIZONTAL + " " + title + " " + HORIZONTAL * k + TOP_RIGHT


def draw_panel(
    width: int,
    height: int,
    title: Optional[str] = None,
    content_lines: Sequence[str] = (),
) -> List[str]:
    """
    Draws a bordered box as `height` rows of exactly `width` columns.

    Content lines and the title have control characters replaced by spaces;
    content lines are truncated and padded to the inner width; missing rows
    are blank. Scrolling is the caller's business: passing more lines than
    fit is an error. Boxes too small to have both borders render nothing.
    """
    if width < 2 or height < 2:
        return []

    inner_width = width - 2
    inner_height = height - 2
    if len(content_lines) > inner_height:
        raise ValueError(
            f"{len(content_lines)} content lines do not fit into {inner_height} rows"
        )

    rows = [_top_border(width, title)]
    for line in content_lines:
        rows.append(VERTICAL + fit(clean(line), inner_width) + VERTICAL)
    blank = VERTICAL + " " * inner_width + VERTICAL
    rows.extend(blank for _ in range(inner_height - len(content_lines)))
    rows.append(BOTTOM_LEFT + HORIZONTAL * inner_width + BOTTOM_RIGHT)
    return rows


def side_by_side(left: Sequence[str], right: Sequence[str], gutter: int = 1) -> List[str]:
    """Joins two panels row by row. Both panels must have the same height."""
    if len(left) != len(right):
        raise ValueError(f"Panel heights differ: {len(left)} != {len(right)}")
    spacer = " " * gutter
    return [l + spacer + r for l, r in zip(left, right)]
