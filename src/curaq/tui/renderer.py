"""
Pure projection of NavigationState onto a grid of styled terminal rows.

`render` always returns exactly `height` rows, each exactly `width` columns
wide, as rich Text objects. Nothing here reads the terminal or caches a size:
the caller passes the current size on every frame.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from rich.text import Text

from curaq.models import Article
from curaq.themes import Theme, get_theme, theme_names
from curaq.tui.frame import draw_panel, side_by_side
from curaq.tui.state import NavigationState, Overlay
from curaq.tui.text_metrics import char_width, clean, display_width, fit, truncate, wrap
from curaq.tui.viewport import compute_window

Segment = Tuple[str, str]
Row = List[Segment]

LOGO = [
    " ██████╗██╗   ██╗██████╗  █████╗  ██████╗ ",
    "██╔════╝██║   ██║██╔══██╗██╔══██╗██╔═══██╗",
    "██║     ██║   ██║██████╔╝███████║██║   ██║",
    "╚██████╗╚██████╔╝██║  ██║██║  ██║╚██████╔╝",
    " ╚═════╝ ╚═════╝ ╚═╝  ╚═╝╚═╝  ╚═╝ ╚══▀▀═╝ ",
]
LOGO_WIDTH = max(display_width(line) for line in LOGO)
APP_TITLE = "CuraQ"

LIST_HINTS = "j/k:Navigate  Enter:Read  m:Done  o:Open  T:Theme  ^R:Refresh  q:Quit"
READER_HINTS = "j/k:Scroll  Space:Page  o:Open  Esc:Back"
THEME_HINTS = "Enter:Apply  Esc:Cancel"
ERROR_HINTS = "^R: Retry  q: Quit"

SELECTED_MARKER = "► "
UNSELECTED_MARKER = "  "
MAX_TAGS = 3
READER_RULE_WIDTH = 50
# byline, rule and a blank line above the text
READER_HEADER_ROWS = 3
# frame borders plus the footer line below the frame
READER_CHROME_ROWS = 2 + READER_HEADER_ROWS + 1


@dataclass(frozen=True)
class Layout:
    list_fraction: float = 0.45
    min_list_width: int = 30
    min_preview_width: int = 24
    gutter: int = 1
    reader_max_width: int = 82
    theme_panel_width: int = 34
    show_logo: bool = True
    logo_min_height: int = 20


DEFAULT_LAYOUT = Layout()


def reader_text_rows(height: int, layout: Layout = DEFAULT_LAYOUT) -> int:
    """Rows of article text the reader overlay shows at terminal `height`."""
    return max(0, height - READER_CHROME_ROWS)


def panel_widths(width: int, layout: Layout = DEFAULT_LAYOUT) -> Tuple[int, int]:
    """
    Splits `width` into list and preview panel widths.

    The preview is dropped (width 0) when both panels cannot get their
    minimum width.
    """
    if width < layout.min_list_width + layout.gutter + layout.min_preview_width:
        return width, 0
    list_width = max(layout.min_list_width, int(width * layout.list_fraction))
    list_width = min(list_width, width - layout.gutter - layout.min_preview_width)
    return list_width, width - list_width - layout.gutter


def _show_logo(width: int, height: int, layout: Layout) -> bool:
    return layout.show_logo and width >= LOGO_WIDTH and height >= layout.logo_min_height


def _header_rows(width: int, height: int, layout: Layout) -> int:
    # logo + blank, or one title line; the stats line is separate
    return len(LOGO) + 1 if _show_logo(width, height, layout) else 1


def _list_panel_height(width: int, height: int, layout: Layout) -> int:
    # header, stats line, panels, hints line
    return height - _header_rows(width, height, layout) - 2


def clip(s: str, width: int) -> str:
    """Cuts `s` to at most `width` columns without an ellipsis."""
    used = 0
    kept = []
    for ch in s:
        w = char_width(ch)
        if used + w > width:
            break
        kept.append(ch)
        used += w
    return "".join(kept)


class Canvas:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.rows: List[Row] = []

    def line(self, text: str = "", style: str = "") -> None:
        self.rows.append([(text, style)])

    def segments(self, row: Row) -> None:
        self.rows.append(row)

    def extend(self, rows: Sequence[Row]) -> None:
        self.rows.extend(rows)

    def finish(self) -> List[Text]:
        out = []
        for row in self.rows[: self.height]:
            out.append(self._fit_row(row))
        while len(out) < self.height:
            out.append(Text(" " * self.width))
        return out

    def _fit_row(self, row: Row) -> Text:
        remaining = self.width
        parts = []
        for text, style in row:
            if remaining <= 0:
                break
            text = clean(text)
            if display_width(text) > remaining:
                text = clip(text, remaining)
            parts.append((text, style))
            remaining -= display_width(text)
        if remaining > 0:
            parts.append((" " * remaining, ""))
        return Text.assemble(*parts)


def _row_roles(rows: List[str], roles: Sequence[str]) -> List[Optional[str]]:
    # None marks a border row; content rows past the given roles are blank
    if not rows:
        return []
    content = [roles[i] if i < len(roles) else "" for i in range(len(rows) - 2)]
    return [None] + content + [None]


def _style_row(row: str, role: Optional[str], border: str) -> Row:
    if role is None:
        return [(row, border)]
    return [(row[0], border), (row[1:-1], role), (row[-1], border)]


def _styled_panel(rows: List[str], roles: Sequence[str], border: str) -> List[Row]:
    """Colours the borders of a drawn panel and each content row by its role."""
    return [_style_row(row, role, border) for row, role in zip(rows, _row_roles(rows, roles))]


def _styled_pair(
    left: List[str],
    left_roles: Sequence[str],
    right: List[str],
    right_roles: Sequence[str],
    border: str,
    gutter: int,
) -> List[Row]:
    """Joins two drawn panels with `side_by_side` and colours both halves."""
    styled: List[Row] = []
    joined = side_by_side(left, right, gutter)
    halves = zip(joined, left, _row_roles(left, left_roles), _row_roles(right, right_roles))
    for row, left_row, left_role, right_role in halves:
        cut = len(left_row)
        styled.append(
            _style_row(row[:cut], left_role, border)
            + [(row[cut : cut + gutter], "")]
            + _style_row(row[cut + gutter :], right_role, border)
        )
    return styled


def _header(canvas: Canvas, theme: Theme, layout: Layout) -> None:
    if _show_logo(canvas.width, canvas.height, layout):
        for line in LOGO:
            canvas.line(line, theme.primary)
        canvas.line()
    else:
        canvas.line(APP_TITLE, f"bold {theme.primary}")


# --- screens -------------------------------------------------------------


def _render_loading(canvas: Canvas, state: NavigationState, theme: Theme, layout: Layout) -> None:
    _header(canvas, theme, layout)
    canvas.line("Loading...", theme.text_dim)


def _render_error(canvas: Canvas, state: NavigationState, theme: Theme, layout: Layout) -> None:
    _header(canvas, theme, layout)
    canvas.line(f"Error: {state.error}", "bold red")
    canvas.line(ERROR_HINTS, theme.text_dim)


def _article_row(article: Article, inner_width: int) -> str:
    title = article.title or "Untitled"
    suffix = f"{article.reading_time_minutes}min" if article.reading_time_minutes else ""
    if suffix and inner_width >= len(suffix) + 10:
        return fit(title, inner_width - len(suffix) - 1) + " " + suffix
    return title


def _list_panel(
    state: NavigationState, theme: Theme, width: int, height: int
) -> Tuple[List[str], List[str]]:
    visible = max(0, height - 2)
    inner = width - 2 - len(SELECTED_MARKER)
    lines: List[str] = []
    roles: List[str] = []
    row_style = theme.unread if state.start_screen == "unread" else theme.read

    if not state.articles:
        lines.append("  No articles")
        roles.append(theme.text_dim)
    else:
        start, end = compute_window(len(state.articles), state.selected_index, visible)
        for index in range(start, end):
            selected = index == state.selected_index
            marker = SELECTED_MARKER if selected else UNSELECTED_MARKER
            lines.append(marker + _article_row(state.articles[index], inner))
            roles.append(f"bold {theme.primary}" if selected else row_style)

    title = "Articles"
    if state.articles:
        title = f"Articles {state.selected_index + 1}/{len(state.articles)}"
    return draw_panel(width, height, title, lines[:visible]), roles


def _preview_lines(article: Optional[Article], theme: Theme, inner: int) -> Tuple[List[str], List[str]]:
    lines: List[str] = []
    roles: List[str] = []
    if article is None:
        return lines, roles

    def add(text_lines: List[str], role: str) -> None:
        lines.extend(text_lines)
        roles.extend([role] * len(text_lines))

    add(wrap(article.title or "Untitled", inner), f"bold {theme.primary}")
    if article.url:
        add([truncate(article.url, inner)], theme.text_dim)

    meta = " ".join(f"#{t}" for t in article.tags[:MAX_TAGS])
    if article.reading_time_minutes:
        meta = f"{meta}  {article.reading_time_minutes}min".strip()
    if meta:
        add([truncate(meta, inner)], theme.accent)

    if article.summary:
        add([""], theme.text)
        add(wrap(article.summary, inner), theme.text)
    return lines, roles


def _preview_panel(
    state: NavigationState, theme: Theme, width: int, height: int
) -> Tuple[List[str], List[str]]:
    lines, roles = _preview_lines(state.selected_article, theme, max(0, width - 2))
    return draw_panel(width, height, "Preview", lines[: max(0, height - 2)]), roles


def _render_list(canvas: Canvas, state: NavigationState, theme: Theme, layout: Layout) -> None:
    width, height = canvas.width, canvas.height
    _header(canvas, theme, layout)
    stats = f"{len(state.articles)} articles  ~{state.total_reading_minutes}min  [{state.start_screen}]"
    canvas.line(stats, theme.text_dim)

    panel_height = _list_panel_height(width, height, layout)
    if panel_height >= 2:
        list_width, preview_width = panel_widths(width, layout)
        left, left_roles = _list_panel(state, theme, list_width, panel_height)
        if preview_width >= 2:
            right, right_roles = _preview_panel(state, theme, preview_width, panel_height)
            canvas.extend(
                _styled_pair(left, left_roles, right, right_roles, theme.border, layout.gutter)
            )
        else:
            canvas.extend(_styled_panel(left, left_roles, theme.border))

    canvas.line(LIST_HINTS, theme.text_dim)


def _reader_footer(state: NavigationState, rows: int) -> str:
    content = state.reader_content
    if content is None:
        return "Esc:Back"
    total = len(content.lines)
    if total > rows:
        first = state.reader_scroll + 1
        last = min(state.reader_scroll + rows, total)
        return f"[{first}-{last}/{total}]  {READER_HINTS}"
    return READER_HINTS


def _render_reader(canvas: Canvas, state: NavigationState, theme: Theme, layout: Layout) -> None:
    width = min(canvas.width, layout.reader_max_width)
    frame_height = canvas.height - 1
    inner_width = max(0, width - 2)
    inner_height = max(0, frame_height - 2)
    text_rows = reader_text_rows(canvas.height, layout)
    content = state.reader_content

    if state.reader_loading:
        title = "Reader"
        lines, roles = ["Loading article..."], [theme.text]
    elif content is None:
        title = "Reader"
        lines = ["Failed to load article"]
        roles = ["bold red"]
        if state.reader_error:
            lines.extend(wrap(state.reader_error, inner_width))
        lines.extend(["", "Press Esc to go back"])
        roles.extend([theme.text_dim] * (len(lines) - 1))
    else:
        title = content.title
        rule = "─" * min(READER_RULE_WIDTH, inner_width)
        body = content.lines[state.reader_scroll : state.reader_scroll + text_rows]
        lines = [content.byline or "", rule, ""] + body
        roles = [theme.text_dim, theme.text_dim, theme.text]
        roles.extend(
            f"bold {theme.primary}" if line.startswith("#") else theme.text for line in body
        )

    rows = draw_panel(width, frame_height, title, lines[:inner_height])
    canvas.extend(_styled_panel(rows, roles, theme.border))
    canvas.line(_reader_footer(state, text_rows), theme.text_dim)


def _render_theme_picker(canvas: Canvas, state: NavigationState, theme: Theme, layout: Layout) -> None:
    names = theme_names()
    lines: List[str] = []
    roles: List[str] = []
    for index, name in enumerate(names):
        selected = index == state.theme_index
        marker = SELECTED_MARKER if selected else UNSELECTED_MARKER
        label = f"{name} (current)" if name == state.theme_name else name
        candidate = get_theme(name)
        lines.append(marker + label)
        roles.append(f"bold reverse {candidate.primary}" if selected else candidate.primary)
    lines.extend(["", THEME_HINTS])
    roles.extend([theme.text, theme.text_dim])

    width = min(canvas.width, layout.theme_panel_width)
    height = min(canvas.height, len(lines) + 2)
    rows = draw_panel(width, height, "Theme", lines[: max(0, height - 2)])

    top = max(0, (canvas.height - height) // 3)
    left = (" " * max(0, (canvas.width - width) // 2), "")
    for _ in range(top):
        canvas.line()
    for row in _styled_panel(rows, roles, theme.border):
        canvas.segments([left] + row)


def render(
    state: NavigationState, width: int, height: int, layout: Layout = DEFAULT_LAYOUT
) -> List[Text]:
    """Draws the whole screen for `state` at the given terminal size."""
    if width <= 0 or height <= 0:
        return []

    theme = get_theme(state.theme_name)
    canvas = Canvas(width, height)
    if state.loading:
        _render_loading(canvas, state, theme, layout)
    elif state.overlay is Overlay.READER:
        _render_reader(canvas, state, theme, layout)
    elif state.overlay is Overlay.THEME:
        _render_theme_picker(canvas, state, theme, layout)
    elif state.error is not None:
        _render_error(canvas, state, theme, layout)
    else:
        _render_list(canvas, state, theme, layout)
    return canvas.finish()
