"""
Data models for the Article Briefing application.

This module defines Pydantic models used for structured data throughout the application.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class ArticleCandidate(BaseModel):
    """Model for a headlines feed entry that may be picked for the briefing."""
    url: str
    headline: str = ""
    description: Optional[str] = None

class AudioArtifact(BaseModel):
    """Model for a narrated summary written to disk."""
    path: str
    filename: str

class PipelineResult(BaseModel):
    """
    Response model for a complete pipeline run.

    Serialized with camelCase keys via model_dump(by_alias=True).
    """
    model_config = ConfigDict(populate_by_name=True)

    article_url: str = Field(alias="articleUrl")
    headline: str
    description: Optional[str] = None
    summary: str
    audio_file: str = Field(alias="audioFile")
    quiz_questions: str = Field(alias="quizQuestions")
