"""
Error types for the Article Briefing pipeline.

Every stage raises one of these, chained to the transport or provider
error that caused it. The message is what the HTTP caller sees.
"""


class PipelineError(Exception):
    """Base class for all pipeline failures."""

    default_message = "Failed to process article."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]


class ArticleSelectionError(PipelineError):
    default_message = "Failed to fetch valid article details."


class NoArticlesError(ArticleSelectionError):
    default_message = "No articles found from the headlines feed."


class NoValidArticlesError(ArticleSelectionError):
    default_message = "No valid articles found."


class FetchError(PipelineError):
    default_message = "Failed to fetch article page."


class SummarizationError(PipelineError):
    default_message = "Failed to summarize article."


class SynthesisError(PipelineError):
    default_message = "Failed to convert summary to speech."


class QuizGenerationError(PipelineError):
    default_message = "Failed to generate quiz questions."
