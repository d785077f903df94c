import logging
from dataclasses import dataclass
from typing import Callable, Optional

from curaq.client import DEFAULT_PAGE_SIZE, ApiClient
from curaq.config import SettingsStore
from curaq.reader import ContentExtractor
from curaq.themes import get_theme, theme_names
from curaq.tui import scroll
from curaq.tui.keys import Key
from curaq.tui.renderer import DEFAULT_LAYOUT, Layout, reader_text_rows
from curaq.tui.state import NavigationState, Overlay
from curaq.tui.worker import Completion

logger = logging.getLogger(__name__)

JOB_ARTICLES = "articles"
JOB_READER = "reader"
JOB_MARK_READ = "mark_read"

NO_TOKEN_MESSAGE = "No API token configured. Run 'curaq login <TOKEN>'"


@dataclass
class Services:
    """The external collaborators the controller drives."""

    client: Optional[ApiClient]
    extractor: ContentExtractor
    open_url: Callable[[str], None]
    settings: SettingsStore


class NavigationController:
    """
    The view state machine.

    `handle_key` applies one key press to the state and starts any
    background work it implies; `apply_completion` folds a finished job back
    in. Both run on the input loop only, so the state is never mutated
    concurrently.
    """

    def __init__(
        self,
        services: Services,
        runner,
        theme_name: Optional[str] = None,
        layout: Layout = DEFAULT_LAYOUT,
        width: int = 80,
        height: int = 24,
    ):
        self.services = services
        self.runner = runner
        self.layout = layout
        self.width = width
        self.height = height
        self.running = True
        self._articles_generation = 0

        settings = services.settings.load()
        self.state = NavigationState(
            theme_name=get_theme(theme_name or settings.theme).name,
            start_screen=settings.start_screen,
        )

    # --- lifecycle -------------------------------------------------------

    def start(self) -> None:
        self.refresh()

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._clamp_reader_scroll()

    @property
    def visible_reader_rows(self) -> int:
        return reader_text_rows(self.height, self.layout)

    # --- input -----------------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Applies one key press. Returns True when the screen needs a redraw."""
        overlay = self.state.overlay
        if overlay is Overlay.READER:
            return self._handle_reader_key(key)
        if overlay is Overlay.THEME:
            return self._handle_theme_key(key)

        if key == Key.Q:
            self.running = False
            return True
        if self.state.loading:
            return False
        if self.state.error is not None:
            if key == Key.CTRL_R:
                self.refresh()
                return True
            return False
        return self._handle_list_key(key)

    def _handle_list_key(self, key: str) -> bool:
        state = self.state
        article = state.selected_article

        if key in (Key.DOWN, Key.J):
            if state.articles:
                state.selected_index = min(state.selected_index + 1, len(state.articles) - 1)
            return True
        elif key in (Key.UP, Key.K):
            state.selected_index = max(state.selected_index - 1, 0)
            return True
        elif key == Key.ENTER:
            if article and article.url:
                self.open_reader(article.url)
                return True
        elif key == Key.M:
            if article:
                self.mark_read(article.id)
        elif key == Key.O:
            self.open_selected_in_browser()
        elif key == Key.CTRL_R:
            self.refresh()
            return True
        elif key == Key.SHIFT_T:
            self.open_theme_picker()
            return True
        return False

    def _handle_reader_key(self, key: str) -> bool:
        state = self.state
        if key in (Key.ESCAPE, Key.Q):
            self.close_overlay()
            return True
        if key == Key.O:
            # the open article, even if the list shifted underneath it
            if state.reader_target:
                self.services.open_url(state.reader_target)
            return False
        if state.reader_content is None:
            return False

        if key in (Key.DOWN, Key.J):
            return self._scroll_reader(scroll.LINE_STEP)
        elif key in (Key.UP, Key.K):
            return self._scroll_reader(-scroll.LINE_STEP)
        elif key in (Key.SPACE, Key.PAGE_DOWN):
            return self._scroll_reader(scroll.PAGE_STEP)
        elif key == Key.PAGE_UP:
            return self._scroll_reader(-scroll.PAGE_STEP)
        return False

    def _handle_theme_key(self, key: str) -> bool:
        state = self.state
        last = len(theme_names()) - 1
        if key in (Key.DOWN, Key.J):
            state.theme_index = min(state.theme_index + 1, last)
            return True
        elif key in (Key.UP, Key.K):
            state.theme_index = max(state.theme_index - 1, 0)
            return True
        elif key == Key.ENTER:
            self.apply_theme(theme_names()[state.theme_index])
            return True
        elif key in (Key.ESCAPE, Key.Q):
            self.close_overlay()
            return True
        return False

    # --- actions ---------------------------------------------------------

    def refresh(self) -> None:
        state = self.state
        if self.services.client is None:
            state.loading = False
            state.error = NO_TOKEN_MESSAGE
            return

        self._articles_generation += 1
        state.loading = True
        self.runner.submit(
            JOB_ARTICLES,
            self.services.client.list_articles,
            1,
            DEFAULT_PAGE_SIZE,
            state.start_screen,
            tag=self._articles_generation,
        )

    def open_reader(self, url: str) -> None:
        self.close_overlay()
        state = self.state
        state.overlay = Overlay.READER
        state.reader_target = url
        state.reader_loading = True
        state.reader_scroll = 0
        self.runner.submit(JOB_READER, self.services.extractor.extract, url, tag=url)

    def open_theme_picker(self) -> None:
        self.close_overlay()
        names = theme_names()
        state = self.state
        state.theme_index = names.index(state.theme_name) if state.theme_name in names else 0
        state.overlay = Overlay.THEME

    def close_overlay(self) -> None:
        state = self.state
        state.overlay = Overlay.NONE
        state.reader_content = None
        state.reader_loading = False
        state.reader_scroll = 0
        state.reader_target = None
        state.reader_error = None

    def apply_theme(self, name: str) -> None:
        try:
            self.services.settings.set_theme(name)
        except (OSError, ValueError) as e:
            logger.error(f"Could not persist theme '{name}': {e}")
        self.state.theme_name = name
        self.close_overlay()

    def mark_read(self, article_id: str) -> None:
        if self.services.client is None:
            return
        self.runner.submit(JOB_MARK_READ, self.services.client.mark_read, article_id, tag=article_id)

    def open_selected_in_browser(self) -> None:
        article = self.state.selected_article
        if article and article.url:
            self.services.open_url(article.url)

    def _scroll_reader(self, delta: int) -> bool:
        state = self.state
        before = state.reader_scroll
        state.reader_scroll = scroll.step(
            state.reader_scroll, delta, self._reader_line_count(), self.visible_reader_rows
        )
        return state.reader_scroll != before

    def _reader_line_count(self) -> int:
        content = self.state.reader_content
        return scroll.line_count(content.text_content) if content else 0

    def _clamp_reader_scroll(self) -> None:
        state = self.state
        state.reader_scroll = scroll.clamp_offset(
            state.reader_scroll, self._reader_line_count(), self.visible_reader_rows
        )

    # --- completions -----------------------------------------------------

    def process_completions(self) -> bool:
        changed = False
        for completion in self.runner.drain():
            changed = self.apply_completion(completion) or changed
        return changed

    def apply_completion(self, completion: Completion) -> bool:
        if completion.kind == JOB_ARTICLES:
            return self._articles_done(completion)
        if completion.kind == JOB_READER:
            return self._reader_done(completion)
        if completion.kind == JOB_MARK_READ:
            return self._mark_read_done(completion)
        logger.warning(f"Ignoring completion of unknown job '{completion.kind}'")
        return False

    def _articles_done(self, completion: Completion) -> bool:
        if completion.tag != self._articles_generation:
            logger.debug(f"Discarding stale article list #{completion.tag}")
            return False

        state = self.state
        state.loading = False
        if completion.ok:
            state.articles = list(completion.result)
            state.error = None
            state.clamp_selection()
        else:
            state.error = str(completion.error) or "Failed to load"
        return True

    def _reader_done(self, completion: Completion) -> bool:
        state = self.state
        if state.overlay is not Overlay.READER or state.reader_target != completion.tag:
            logger.debug(f"Discarding stale reader content for {completion.tag}")
            return False

        state.reader_loading = False
        if completion.ok:
            state.reader_content = completion.result
            state.reader_error = None
        else:
            state.reader_content = None
            state.reader_error = str(completion.error) or None
        self._clamp_reader_scroll()
        return True

    def _mark_read_done(self, completion: Completion) -> bool:
        if not completion.ok:
            logger.warning(f"Mark as read failed for {completion.tag}: {completion.error}")
            return False

        state = self.state
        for index, article in enumerate(state.articles):
            if article.id == completion.tag:
                break
        else:
            return False

        old_length = len(state.articles)
        del state.articles[index]
        state.selected_index = max(0, min(state.selected_index, old_length - 2))
        return True
