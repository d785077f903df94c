import logging
from typing import List, Optional

import requests

from curaq.config import DEFAULT_START_SCREEN
from curaq.errors import FetchFailure, MarkReadFailure
from curaq.models import Article

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 15
DEFAULT_PAGE_SIZE = 100


class ApiClient:
    """Client for the article data service."""

    def __init__(self, base_url: str, token: str, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
                "User-Agent": "curaq-tui",
            }
        )

    def _describe(self, response: requests.Response) -> str:
        reason = response.reason or "Request failed"
        return f"HTTP {response.status_code}: {reason}"

    def list_articles(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        status: str = DEFAULT_START_SCREEN,
    ) -> List[Article]:
        url = f"{self.base_url}/articles"
        params = {"page": page, "limit": page_size, "status": status}
        try:
            response = self.session.get(url, params=params, timeout=HTTP_TIMEOUT)
        except requests.RequestException as e:
            logger.error(f"Error fetching articles from {url}: {e}")
            raise FetchFailure(f"Could not reach {self.base_url}") from e

        if not response.ok:
            logger.error(f"Article list request failed: {response.status_code}")
            raise FetchFailure(self._describe(response))

        try:
            payload = response.json()
            items = payload.get("articles") or []
            return [Article.from_dict(item) for item in items]
        except (ValueError, AttributeError, KeyError, TypeError) as e:
            logger.error(f"Invalid article list payload: {e}")
            raise FetchFailure("Invalid response from article service") from e

    def mark_read(self, article_id: str) -> None:
        url = f"{self.base_url}/articles/{article_id}/read"
        try:
            response = self.session.post(url, timeout=HTTP_TIMEOUT)
        except requests.RequestException as e:
            raise MarkReadFailure(f"Could not reach {self.base_url}") from e
        if not response.ok:
            raise MarkReadFailure(self._describe(response))
