"""
Models package for the Article Briefing application.
"""

from .data_models import (
    ArticleCandidate,
    AudioArtifact,
    PipelineResult
)

__all__ = [
    'ArticleCandidate',
    'AudioArtifact',
    'PipelineResult'
]
