"""
Web content retrieval module for the Article Briefing application.

This module provides functions for downloading an article page and
extracting its paragraph text.
"""

import logging
import time
import requests
from bs4 import BeautifulSoup
from typing import Union
from config import HEADERS, MAX_PAGE_BYTES
from errors import FetchError
from utils.http_utils import ResponseLimitError, read_body

def fetch_article_page(session: requests.Session, url: str, timeout: float, max_bytes: int = MAX_PAGE_BYTES) -> bytes:
    """
    Downloads the raw HTML of an article page.

    The whole download, body included, must finish within the timeout.

    Args:
        session: HTTP session used for the request
        url: The URL of the article to retrieve
        timeout: Time allowed for the whole download, in seconds
        max_bytes: Largest page accepted

    Returns:
        bytes: The page markup, left undecoded so the parser can detect its charset

    Raises:
        FetchError: If the page times out, is too large, cannot be reached, or returns a non-success status
    """
    deadline = time.monotonic() + timeout
    try:
        response = session.get(url, headers=HEADERS, timeout=timeout, stream=True)
        if not response.ok:
            response.close()
            raise FetchError(f"Failed to fetch article page: status code {response.status_code}")
        return read_body(response, deadline, max_bytes)
    except ResponseLimitError as e:
        logging.error(f"Gave up on article from {url}: {e}")
        raise FetchError(f"Failed to fetch article page: {e}.") from e
    except requests.Timeout as e:
        logging.error(f"Timed out after {timeout}s retrieving article from {url}")
        raise FetchError("Failed to fetch article page: request timed out.") from e
    except requests.RequestException as e:
        logging.exception(f"Error retrieving article from {url}")
        raise FetchError() from e

def extract_paragraph_text(html: Union[str, bytes]) -> str:
    """
    Extracts the text of every paragraph in the page.

    Args:
        html: The page markup

    Returns:
        str: Paragraph texts joined by newlines, or an empty string for pages
            with no paragraph content (e.g. script-rendered pages)
    """
    soup = BeautifulSoup(html or "", "html.parser")
    paragraphs = [p.get_text(" ", strip=True) for p in soup.find_all("p")]
    return "\n".join(text for text in paragraphs if text).strip()
