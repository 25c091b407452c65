#!/usr/bin/env python3
"""
Article Pipeline

Runs the four briefing stages for one request: select an article, summarize
it, narrate the summary and write a quiz about it. A run either returns a
complete PipelineResult or raises a single PipelineError.
"""

import concurrent.futures
import logging
import uuid
import requests
from openai import OpenAI
from typing import Callable, Optional, Tuple

from config import PipelineConfig
from content.headlines_content import ArticleSelector
from errors import PipelineError
from models import AudioArtifact, PipelineResult
from processors import QuizGenerator, SpeechSynthesizer, Summarizer

def run_stage(stage_name: str, func: Callable, *args):
    """
    Runs one stage, turning unexpected exceptions into a PipelineError.

    Args:
        stage_name: Name used in log messages
        func: The stage callable
        *args: Arguments for the stage

    Returns:
        Whatever the stage returns
    """
    try:
        return func(*args)
    except PipelineError:
        raise
    except Exception as e:
        logging.exception(f"Unexpected error in {stage_name} stage")
        raise PipelineError() from e

class ArticlePipeline:
    """Orchestrates selection, summary, speech and quiz for one request."""

    def __init__(
        self,
        config: PipelineConfig,
        article_selector: ArticleSelector,
        summarizer: Summarizer,
        speech_synthesizer: SpeechSynthesizer,
        quiz_generator: QuizGenerator
    ):
        self.config = config
        self.article_selector = article_selector
        self.summarizer = summarizer
        self.speech_synthesizer = speech_synthesizer
        self.quiz_generator = quiz_generator

    def _narrate_and_quiz_sequentially(self, summary: str, artifact_key: str) -> Tuple[AudioArtifact, str]:
        audio = run_stage("speech", self.speech_synthesizer.synthesize, summary, artifact_key)
        quiz = run_stage("quiz", self.quiz_generator.generate_quiz, summary)
        return audio, quiz

    def _narrate_and_quiz_concurrently(self, summary: str, artifact_key: str) -> Tuple[AudioArtifact, str]:
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=2, thread_name_prefix="briefing-stage")
        try:
            audio_future = executor.submit(
                run_stage, "speech", self.speech_synthesizer.synthesize, summary, artifact_key
            )
            quiz_future = executor.submit(
                run_stage, "quiz", self.quiz_generator.generate_quiz, summary
            )
            futures = [audio_future, quiz_future]
            concurrent.futures.wait(futures, return_when=concurrent.futures.FIRST_EXCEPTION)

            # Abort on the first failure without waiting for the sibling
            for future in futures:
                if future.done() and future.exception() is not None:
                    raise future.exception()

            return audio_future.result(), quiz_future.result()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def run(self, artifact_key: Optional[str] = None) -> PipelineResult:
        """
        Runs the whole pipeline.

        Args:
            artifact_key: Unique key for this run's audio file (a fresh uuid when omitted)

        Returns:
            PipelineResult: The complete briefing

        Raises:
            PipelineError: The first stage failure; nothing partial is returned
        """
        artifact_key = artifact_key or uuid.uuid4().hex

        # Step 1: Select an article
        article = run_stage("selection", self.article_selector.select_article)

        # Step 2: Summarize it
        summary = run_stage("summary", self.summarizer.summarize, article.url)

        # Step 3: Narrate the summary and write the quiz
        if self.config.parallel_stages:
            audio, quiz = self._narrate_and_quiz_concurrently(summary, artifact_key)
        else:
            audio, quiz = self._narrate_and_quiz_sequentially(summary, artifact_key)

        logging.info(f"Pipeline run {artifact_key} completed for {article.url}")
        return PipelineResult(
            article_url=article.url,
            headline=article.headline,
            description=article.description,
            summary=summary,
            audio_file=f"{self.config.audio_url_prefix}{audio.filename}",
            quiz_questions=quiz
        )

def build_pipeline(config: PipelineConfig) -> ArticlePipeline:
    """
    Wires the stages to shared HTTP and OpenAI clients.

    Args:
        config: The process configuration

    Returns:
        ArticlePipeline: A ready-to-run pipeline
    """
    session = requests.Session()
    # No retries: a failed call fails the stage
    client = OpenAI(
        api_key=config.openai_api_key or "",
        timeout=config.request_timeout,
        max_retries=0
    )
    return ArticlePipeline(
        config,
        ArticleSelector(config, session),
        Summarizer(config, client, session),
        SpeechSynthesizer(config, session),
        QuizGenerator(config, client)
    )
