"""End-to-end tests of the pipeline with mocked providers."""

import threading
from unittest.mock import MagicMock

import pytest
import requests
from openai import OpenAIError

from conftest import feed, make_completion, make_response
from content.headlines_content import ArticleSelector
from errors import (
    FetchError,
    NoValidArticlesError,
    PipelineError,
    QuizGenerationError,
    SynthesisError,
)
from pipeline import ArticlePipeline, build_pipeline
from processors import QuizGenerator, SpeechSynthesizer, Summarizer

HOMEPAGE = "https://www.theverge.com"
STORY = "https://www.theverge.com/2024/1/1/story"


class FakeProviders:
    """A requests session and OpenAI client answering with canned responses."""

    def __init__(self, feed_payload=None, page_html="<p>Article body.</p>", tts_response=None):
        self.feed_payload = feed_payload if feed_payload is not None else feed(HOMEPAGE, STORY)
        self.page_html = page_html
        self.page_error = None
        self.session = MagicMock()
        self.session.get.side_effect = self._get
        self.session.post.return_value = tts_response or make_response(content=b"audio-bytes")
        self.client = MagicMock()
        self.completions = {"summarize": make_completion("The summary."), "quiz": make_completion("The quiz.")}
        self.client.chat.completions.create.side_effect = self._complete

    def _get(self, url, **kwargs):
        if "params" in kwargs:
            return make_response(json_data=self.feed_payload)
        if self.page_error is not None:
            raise self.page_error
        return make_response(text=self.page_html)

    def _complete(self, **kwargs):
        prompt = kwargs["messages"][0]["content"]
        key = "summarize" if prompt.startswith("Please summarize") else "quiz"
        result = self.completions[key]
        if isinstance(result, Exception):
            raise result
        return result

    def completion_prompts(self):
        return [c.kwargs["messages"][0]["content"] for c in self.client.chat.completions.create.call_args_list]

    def pipeline(self, config):
        return ArticlePipeline(
            config,
            ArticleSelector(config, self.session, choose_index=lambda n: 0),
            Summarizer(config, self.client, self.session),
            SpeechSynthesizer(config, self.session),
            QuizGenerator(config, self.client),
        )


def test_successful_run_returns_complete_result(config):
    providers = FakeProviders()

    result = providers.pipeline(config).run(artifact_key="run1")

    assert result.model_dump(by_alias=True) == {
        "articleUrl": STORY,
        "headline": "Title 1",
        "description": "Description 1",
        "summary": "The summary.",
        "audioFile": "audio/summary-run1.mp3",
        "quizQuestions": "The quiz.",
    }


def test_stages_run_in_order_when_sequential(config):
    providers = FakeProviders()
    calls = []
    original = providers.client.chat.completions.create.side_effect

    def speech(*args, **kwargs):
        calls.append("speech")
        return make_response(content=b"x")

    def complete(**kwargs):
        calls.append("llm")
        return original(**kwargs)

    providers.session.post.side_effect = speech
    providers.client.chat.completions.create.side_effect = complete

    providers.pipeline(config).run()

    assert calls == ["llm", "speech", "llm"]


def test_synthesis_failure_stops_before_quiz(config):
    providers = FakeProviders(tts_response=make_response(status_code=500))

    with pytest.raises(SynthesisError) as excinfo:
        providers.pipeline(config).run()

    assert excinfo.value.message == "Failed to convert summary to speech."
    assert len(providers.completion_prompts()) == 1


def test_quiz_failure_discards_summary_and_audio(config):
    providers = FakeProviders()
    providers.completions["quiz"] = OpenAIError("quota exceeded")

    with pytest.raises(QuizGenerationError):
        providers.pipeline(config).run(artifact_key="run2")

    # The audio file written before the failure is left in place
    assert providers.session.post.call_count == 1


def test_no_valid_articles_stops_pipeline(config):
    providers = FakeProviders(feed_payload=feed(HOMEPAGE))

    with pytest.raises(NoValidArticlesError):
        providers.pipeline(config).run()

    providers.client.chat.completions.create.assert_not_called()
    providers.session.post.assert_not_called()


def test_page_fetch_failure_skips_every_later_stage(config):
    providers = FakeProviders()
    providers.page_error = requests.Timeout("slow")

    with pytest.raises(FetchError):
        providers.pipeline(config).run()

    providers.client.chat.completions.create.assert_not_called()
    providers.session.post.assert_not_called()


def test_unexpected_stage_error_becomes_pipeline_error(config):
    providers = FakeProviders()
    pipeline = providers.pipeline(config)
    pipeline.quiz_generator = MagicMock()
    pipeline.quiz_generator.generate_quiz.side_effect = KeyError("choices")

    with pytest.raises(PipelineError) as excinfo:
        pipeline.run()

    assert type(excinfo.value) is PipelineError
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_repeated_runs_with_identical_responses_are_identical(config):
    providers = FakeProviders()
    pipeline = providers.pipeline(config)

    first = pipeline.run(artifact_key="same")
    second = pipeline.run(artifact_key="same")

    assert first == second


class TestConcurrentStages:
    @pytest.fixture
    def parallel_config(self, config):
        return config.model_copy(update={"parallel_stages": True})

    def test_speech_and_quiz_overlap(self, parallel_config):
        providers = FakeProviders()
        both_started = threading.Barrier(2, timeout=5)

        def speech(*args, **kwargs):
            both_started.wait()
            return make_response(content=b"audio")

        original = providers.client.chat.completions.create.side_effect

        def complete(**kwargs):
            if not kwargs["messages"][0]["content"].startswith("Please summarize"):
                both_started.wait()
            return original(**kwargs)

        providers.session.post.side_effect = speech
        providers.client.chat.completions.create.side_effect = complete

        result = providers.pipeline(parallel_config).run(artifact_key="par")

        assert result.audio_file == "audio/summary-par.mp3"
        assert result.quiz_questions == "The quiz."

    def test_first_failure_aborts_run(self, parallel_config):
        providers = FakeProviders(tts_response=make_response(status_code=401))

        with pytest.raises(SynthesisError):
            providers.pipeline(parallel_config).run()

    def test_quiz_failure_aborts_run(self, parallel_config):
        providers = FakeProviders()
        providers.completions["quiz"] = OpenAIError("down")

        with pytest.raises(QuizGenerationError):
            providers.pipeline(parallel_config).run()


def test_build_pipeline_wires_stages(config):
    pipeline = build_pipeline(config)

    assert pipeline.summarizer.client is pipeline.quiz_generator.client
    assert pipeline.article_selector.session is pipeline.speech_synthesizer.session
    assert pipeline.summarizer.client.max_retries == 0
