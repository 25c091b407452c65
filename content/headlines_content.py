"""
Headlines content retrieval module for the Article Briefing application.

This module queries the NewsAPI top-headlines feed for a single publication,
drops entries that are not article pages, and picks one at random.
"""

import json
import logging
import random
import time
import requests
from typing import Any, Callable, Dict, List, Optional

from config import PipelineConfig
from errors import ArticleSelectionError, NoArticlesError, NoValidArticlesError
from models import ArticleCandidate
from utils.http_utils import ResponseLimitError, read_body

def is_valid_article_url(url: Optional[str], domain: str, homepage_url: str) -> bool:
    """
    Checks whether a feed URL points at an article on the publication.

    Args:
        url: URL from the feed entry
        domain: Publication domain that the URL must contain
        homepage_url: Bare homepage URL that is never a valid article

    Returns:
        bool: True if the URL is on the domain and is not the homepage
    """
    if not url or domain not in url:
        return False
    return url.rstrip("/") != homepage_url.rstrip("/")

def filter_valid_articles(articles: List[Dict[str, Any]], domain: str, homepage_url: str) -> List[ArticleCandidate]:
    """
    Filters raw feed entries down to genuine article pages.

    Args:
        articles: Article objects from the feed response
        domain: Publication domain that every URL must contain
        homepage_url: Bare homepage URL to exclude

    Returns:
        List[ArticleCandidate]: The candidates that survived filtering
    """
    candidates = []
    for article in articles:
        if not isinstance(article, dict):
            continue
        url = article.get("url")
        if not is_valid_article_url(url, domain, homepage_url):
            continue
        candidates.append(ArticleCandidate(
            url=url,
            headline=article.get("title") or "",
            description=article.get("description")
        ))
    return candidates

class ArticleSelector:
    """Picks one article from the publication's current headlines."""

    def __init__(
        self,
        config: PipelineConfig,
        session: requests.Session,
        choose_index: Optional[Callable[[int], int]] = None
    ):
        self.config = config
        self.session = session
        # Takes the number of candidates and returns an index into them
        self.choose_index = choose_index or random.randrange

    def fetch_headlines(self) -> List[Dict[str, Any]]:
        """
        Fetches the raw article list from the headlines feed.

        Returns:
            List[Dict[str, Any]]: Article objects as returned by the feed
        """
        deadline = time.monotonic() + self.config.request_timeout
        try:
            response = self.session.get(
                self.config.news_api_url,
                params={"sources": self.config.news_source, "apiKey": self.config.news_api_key},
                timeout=self.config.request_timeout,
                stream=True
            )
            try:
                response.raise_for_status()
            except requests.HTTPError:
                response.close()
                raise
            data = json.loads(read_body(response, deadline, self.config.max_page_bytes))
        except (requests.RequestException, ResponseLimitError, ValueError) as e:
            logging.exception("Error fetching article details from the headlines feed")
            raise ArticleSelectionError() from e

        logging.debug(f"Headlines feed response: {data}")

        if not isinstance(data, dict):
            return []
        return data.get("articles") or []

    def select_article(self) -> ArticleCandidate:
        """
        Selects a random valid article from the headlines feed.

        Returns:
            ArticleCandidate: The selected article

        Raises:
            ArticleSelectionError: If the feed cannot be fetched
            NoArticlesError: If the feed returned no articles
            NoValidArticlesError: If no article survived filtering
        """
        articles = self.fetch_headlines()
        if not articles:
            logging.error(f"No articles found for source {self.config.news_source}")
            raise NoArticlesError()

        candidates = filter_valid_articles(
            articles, self.config.publication_domain, self.config.publication_homepage
        )
        logging.info(f"{len(candidates)} of {len(articles)} headlines are valid articles")

        if not candidates:
            logging.error(f"No valid articles found for source {self.config.news_source}")
            raise NoValidArticlesError()

        article = candidates[self.choose_index(len(candidates))]
        logging.info(f"Selected article: {article.headline} ({article.url})")
        return article
