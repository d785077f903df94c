from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Article:
    id: str
    title: str
    url: str
    summary: str = ""
    tags: Tuple[str, ...] = ()
    reading_time_minutes: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """Builds an article from an API payload, tolerating missing fields."""
        reading_time = data.get("reading_time_minutes") or 0
        try:
            reading_time = max(0, int(reading_time))
        except (TypeError, ValueError):
            reading_time = 0
        tags = data.get("tags") or []
        if not isinstance(tags, (list, tuple)):
            tags = []
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or "Untitled"),
            url=str(data.get("url") or ""),
            summary=str(data.get("summary") or ""),
            tags=tuple(str(t) for t in tags),
            reading_time_minutes=reading_time,
        )


@dataclass(frozen=True)
class ReaderContent:
    title: str
    text_content: str
    byline: Optional[str] = None

    @property
    def lines(self) -> List[str]:
        return self.text_content.split("\n")
