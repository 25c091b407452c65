"""
Content package for the Article Briefing application.
"""

from .headlines_content import ArticleSelector, filter_valid_articles, is_valid_article_url
from .web_content import fetch_article_page, extract_paragraph_text

__all__ = [
    'ArticleSelector',
    'filter_valid_articles',
    'is_valid_article_url',
    'fetch_article_page',
    'extract_paragraph_text'
]
