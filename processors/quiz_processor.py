#!/usr/bin/env python3
"""
Quiz Processor Module

This module asks the OpenAI API for multiple-choice questions about a summary.
The model's text is passed through without checking its structure.
"""

import logging
from openai import OpenAI, OpenAIError

from config import PipelineConfig
from errors import QuizGenerationError
from utils.api_utils import call_openai_api_with_messages, first_choice_text
from utils.logging_setup import PROMPT_LOGGER_NAME, log_stage_prompt, log_stage_response

QUIZ_PROMPT = (
    'Based on the following summary: "{summary}", please create 3 multiple-choice questions. '
    "Each question should have 4 answer options and indicate the correct answer."
)

class QuizGenerator:
    """Writes a three-question quiz for a summary."""

    def __init__(self, config: PipelineConfig, client: OpenAI):
        self.config = config
        self.client = client
        self.prompt_logger = logging.getLogger(PROMPT_LOGGER_NAME)

    def generate_quiz(self, summary: str) -> str:
        """
        Generates quiz questions for a summary.

        Args:
            summary (str): The article summary

        Returns:
            str: The quiz as returned by the model

        Raises:
            QuizGenerationError: If the model call fails or returns nothing
        """
        prompt = QUIZ_PROMPT.format(summary=summary)
        log_stage_prompt(self.prompt_logger, "QUIZ", prompt)

        try:
            response = call_openai_api_with_messages(
                self.client,
                [{"role": "user", "content": prompt}],
                model=self.config.ai_model,
                max_tokens=self.config.quiz_max_tokens
            )
        except OpenAIError as e:
            logging.exception("Error generating quiz questions")
            raise QuizGenerationError() from e

        quiz = first_choice_text(response)
        if not quiz:
            logging.error("Empty quiz returned by the model")
            raise QuizGenerationError()

        log_stage_response(self.prompt_logger, "QUIZ", quiz)
        return quiz
