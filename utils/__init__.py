"""
Utilities package for the Article Briefing application.
"""

from .logging_setup import setup_logging, log_stage_prompt, log_stage_response
from .api_utils import num_tokens_from_string, call_openai_api_with_messages, first_choice_text

__all__ = [
    'setup_logging',
    'log_stage_prompt',
    'log_stage_response',
    'num_tokens_from_string',
    'call_openai_api_with_messages',
    'first_choice_text'
]
