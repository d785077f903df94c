import logging
import re
from typing import Optional

import markdownify
import requests
from bs4 import BeautifulSoup

from curaq.errors import ExtractionFailure
from curaq.models import ReaderContent
from curaq.tui.text_metrics import wrap

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 15
MIN_ARTICLE_WORDS = 15
WRAP_WIDTH = 78

NOISE_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "aside", "form", "iframe"]
BODY_SELECTORS = ["article", "main", "[role=main]", "body"]
BYLINE_SELECTORS = ["[rel=author]", ".byline", ".author"]


class ContentExtractor:
    """Turns an article URL into plain, pre-wrapped reader text."""

    def __init__(self, session: Optional[requests.Session] = None, wrap_width: int = WRAP_WIDTH):
        self.session = session or requests.Session()
        self.wrap_width = wrap_width
        self.headers = {
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
        }

    def extract(self, url: str) -> ReaderContent:
        try:
            response = self.session.get(url, headers=self.headers, timeout=HTTP_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Error fetching article page {url}: {e}")
            raise ExtractionFailure(f"Could not fetch {url}") from e

        return self.extract_html(response.text, url)

    def extract_html(self, html: str, url: str = "") -> ReaderContent:
        soup = BeautifulSoup(html, "html.parser")
        title = self._find_title(soup) or url
        byline = self._find_byline(soup)

        for tag in soup(NOISE_TAGS):
            tag.decompose()

        body = None
        for selector in BODY_SELECTORS:
            body = soup.select_one(selector)
            if body is not None:
                break
        if body is None:
            body = soup

        text = markdownify.markdownify(
            str(body), heading_style="ATX", strip=["a", "img"], bullets="-"
        )
        text = self._normalize(text)

        if len(text.split()) < MIN_ARTICLE_WORDS:
            logger.warning(f"No readable content found at {url}")
            raise ExtractionFailure("No readable content found")

        lines = wrap(text, self.wrap_width)
        return ReaderContent(title=title, byline=byline, text_content="\n".join(lines))

    def _find_title(self, soup: BeautifulSoup) -> Optional[str]:
        og = soup.find("meta", attrs={"property": "og:title"})
        if og and og.get("content"):
            return og["content"].strip()
        if soup.title and soup.title.string:
            return soup.title.string.strip()
        h1 = soup.find("h1")
        if h1:
            return h1.get_text(" ", strip=True)
        return None

    def _find_byline(self, soup: BeautifulSoup) -> Optional[str]:
        meta = soup.find("meta", attrs={"name": "author"})
        if meta and meta.get("content"):
            return meta["content"].strip()
        for selector in BYLINE_SELECTORS:
            el = soup.select_one(selector)
            if el:
                text = el.get_text(" ", strip=True)
                if text:
                    return text
        return None

    def _normalize(self, text: str) -> str:
        lines = [line.rstrip() for line in text.replace("\r", "").split("\n")]
        text = "\n".join(lines)
        text = re.sub(r"\n{3,}", "\n\n", text)
        return text.strip()
