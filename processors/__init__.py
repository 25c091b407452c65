"""
Processors package for the Article Briefing application.
"""

from .summary_processor import Summarizer
from .speech_processor import SpeechSynthesizer
from .quiz_processor import QuizGenerator

__all__ = ['Summarizer', 'SpeechSynthesizer', 'QuizGenerator']
