#!/usr/bin/env python3
"""
Summary Processor Module

This module downloads the selected article, extracts its paragraph text
and asks the OpenAI API for a detailed summary.
"""

import logging
import requests
from openai import OpenAI, OpenAIError

from config import PipelineConfig
from content.web_content import fetch_article_page, extract_paragraph_text
from errors import FetchError, SummarizationError
from utils.api_utils import call_openai_api_with_messages, first_choice_text
from utils.logging_setup import PROMPT_LOGGER_NAME, log_stage_prompt, log_stage_response

SUMMARY_PROMPT = "Please summarize the following article in detail: {article_text}"

class Summarizer:
    """Turns an article URL into a plain-text summary."""

    def __init__(self, config: PipelineConfig, client: OpenAI, session: requests.Session):
        self.config = config
        self.client = client
        self.session = session
        self.prompt_logger = logging.getLogger(PROMPT_LOGGER_NAME)

    def get_article_text(self, article_url: str) -> str:
        """
        Downloads the article and returns its paragraph text, cut to the configured size.

        Args:
            article_url (str): URL of the article page

        Returns:
            str: The extracted article text (possibly empty)
        """
        html = fetch_article_page(
            self.session, article_url, self.config.request_timeout, max_bytes=self.config.max_page_bytes
        )
        article_text = extract_paragraph_text(html)

        if not article_text:
            if self.config.require_article_text:
                logging.error(f"No paragraph text found in article: {article_url}")
                raise FetchError("Failed to extract article text.")
            logging.warning(f"No paragraph text found in article: {article_url}. Summarizing an empty body.")

        if len(article_text) > self.config.article_max_chars:
            logging.info(
                f"Truncating article text from {len(article_text)} to {self.config.article_max_chars} characters"
            )
            article_text = article_text[:self.config.article_max_chars]

        return article_text

    def summarize(self, article_url: str) -> str:
        """
        Summarizes the article at the given URL.

        Args:
            article_url (str): URL of the article page

        Returns:
            str: The generated summary

        Raises:
            FetchError: If the article page cannot be retrieved
            SummarizationError: If the model call fails or returns nothing
        """
        article_text = self.get_article_text(article_url)
        prompt = SUMMARY_PROMPT.format(article_text=article_text)
        log_stage_prompt(self.prompt_logger, "SUMMARY", prompt)

        try:
            response = call_openai_api_with_messages(
                self.client,
                [{"role": "user", "content": prompt}],
                model=self.config.ai_model,
                max_tokens=self.config.summary_max_tokens
            )
        except OpenAIError as e:
            logging.exception(f"Error summarizing article: {article_url}")
            raise SummarizationError() from e

        summary = first_choice_text(response)
        if not summary:
            logging.error(f"Empty summary returned for article: {article_url}")
            raise SummarizationError()

        log_stage_response(self.prompt_logger, "SUMMARY", summary)
        logging.info(f"Generated summary of {len(summary)} characters")
        return summary
