from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from curaq.config import DEFAULT_START_SCREEN
from curaq.models import Article, ReaderContent
from curaq.themes import DEFAULT_THEME


class Overlay(Enum):
    NONE = "none"
    READER = "reader"
    THEME = "theme"


@dataclass
class NavigationState:
    """
    Everything the renderer needs to draw a frame.

    Owned and mutated only by the NavigationController on the input loop.
    """

    articles: List[Article] = field(default_factory=list)
    selected_index: int = 0
    overlay: Overlay = Overlay.NONE

    reader_content: Optional[ReaderContent] = None
    reader_loading: bool = False
    reader_scroll: int = 0
    # URL the open reader is waiting for or showing.
    reader_target: Optional[str] = None
    reader_error: Optional[str] = None

    theme_index: int = 0
    theme_name: str = DEFAULT_THEME
    start_screen: str = DEFAULT_START_SCREEN

    loading: bool = True
    error: Optional[str] = None

    @property
    def selected_article(self) -> Optional[Article]:
        if 0 <= self.selected_index < len(self.articles):
            return self.articles[self.selected_index]
        return None

    @property
    def reader_failed(self) -> bool:
        return (
            self.overlay is Overlay.READER
            and not self.reader_loading
            and self.reader_content is None
        )

    @property
    def total_reading_minutes(self) -> int:
        return sum(a.reading_time_minutes for a in self.articles)

    def clamp_selection(self) -> None:
        self.selected_index = max(0, min(self.selected_index, len(self.articles) - 1))
