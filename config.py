#!/usr/bin/env python3
"""
Configuration module for the Article Briefing application.

This module loads environment variables and defines configuration constants
used throughout the application. The constants are snapshotted into a
PipelineConfig once at process start, and that object is handed to every
pipeline stage.
"""

import os
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load environment variables from .env file
load_dotenv()

# API Keys and credentials
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
NEWS_API_KEY = os.getenv("NEWS_API_KEY")
ELEVEN_LABS_API_KEY = os.getenv("ELEVEN_LABS_API_KEY")
ELEVEN_LABS_VOICE_ID = os.getenv("ELEVEN_LABS_VOICE_ID")

# Define AI model to use
AI_MODEL = "gpt-3.5-turbo"

# Output caps for the two completion calls
SUMMARY_MAX_TOKENS = 1000
QUIZ_MAX_TOKENS = 500

# Article text sent to the model is cut to this many characters
ARTICLE_MAX_CHARS = 12000

# Prompts above this size are logged as a warning
MAX_TOKENS_PER_REQUEST = 12000

# Every outbound call gets its own timeout (seconds)
REQUEST_TIMEOUT = 8

# Largest response bodies accepted from publishers and the speech API
MAX_PAGE_BYTES = 5_000_000
MAX_AUDIO_BYTES = 50_000_000

# Headlines feed settings
NEWS_API_URL = "https://newsapi.org/v2/top-headlines"
NEWS_SOURCE = "the-verge"
PUBLICATION_DOMAIN = "theverge.com"
PUBLICATION_HOMEPAGE = "https://www.theverge.com"

# Eleven Labs text-to-speech settings
ELEVEN_LABS_API_URL = "https://api.elevenlabs.io"
VOICE_STABILITY = 1.0
VOICE_SIMILARITY_BOOST = 1.0

# Directory holding this project, independent of how the process was launched
PROJECT_DIR = os.path.dirname(os.path.abspath(__file__))

# Generated audio lands here, one file per pipeline run
AUDIO_OUTPUT_DIR = os.getenv("AUDIO_OUTPUT_DIR", os.path.join(PROJECT_DIR, "audio"))
AUDIO_URL_PREFIX = "audio/"

# Only the newest generated audio files are kept
AUDIO_KEEP_FILES = 50

# Log file paths
LOG_FILE = os.path.join(PROJECT_DIR, "article_briefing.log")
PROMPT_LOG_FILE = os.path.join(PROJECT_DIR, "prompt_response.log")

# HTTP server port
PORT = int(os.getenv("PORT", "3000"))

# Define global headers for HTTP requests
HEADERS = {
    'User-Agent': ('Mozilla/5.0 (Windows NT 10.0; Win64; x64) '
                   'AppleWebKit/537.36 (KHTML, like Gecko) '
                   'Chrome/120.0.0.0 Safari/537.36')
}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class PipelineConfig(BaseModel):
    """Settings shared by every stage of the article pipeline."""
    model_config = ConfigDict(frozen=True)

    openai_api_key: Optional[str] = None
    news_api_key: Optional[str] = None
    eleven_labs_api_key: Optional[str] = None
    eleven_labs_voice_id: Optional[str] = None

    ai_model: str = AI_MODEL
    summary_max_tokens: int = SUMMARY_MAX_TOKENS
    quiz_max_tokens: int = QUIZ_MAX_TOKENS
    article_max_chars: int = ARTICLE_MAX_CHARS
    request_timeout: float = REQUEST_TIMEOUT
    max_page_bytes: int = MAX_PAGE_BYTES
    max_audio_bytes: int = MAX_AUDIO_BYTES

    news_api_url: str = NEWS_API_URL
    news_source: str = NEWS_SOURCE
    publication_domain: str = PUBLICATION_DOMAIN
    publication_homepage: str = PUBLICATION_HOMEPAGE

    eleven_labs_api_url: str = ELEVEN_LABS_API_URL
    voice_stability: float = VOICE_STABILITY
    voice_similarity_boost: float = VOICE_SIMILARITY_BOOST

    audio_output_dir: str = AUDIO_OUTPUT_DIR
    audio_url_prefix: str = AUDIO_URL_PREFIX
    audio_keep_files: int = AUDIO_KEEP_FILES

    parallel_stages: bool = True
    require_article_text: bool = False

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """
        Build the configuration from the process environment and module defaults.

        Missing API keys are not rejected here; they surface later as an
        authentication failure from the relevant provider.

        Returns:
            PipelineConfig: The configuration for this process
        """
        return cls(
            openai_api_key=OPENAI_API_KEY,
            news_api_key=NEWS_API_KEY,
            eleven_labs_api_key=ELEVEN_LABS_API_KEY,
            eleven_labs_voice_id=ELEVEN_LABS_VOICE_ID,
            parallel_stages=_env_flag("PARALLEL_STAGES", True),
            require_article_text=_env_flag("REQUIRE_ARTICLE_TEXT", False),
        )

    def missing_secrets(self) -> List[str]:
        """Return the names of the API secrets that are not set."""
        secrets = {
            "OPENAI_API_KEY": self.openai_api_key,
            "NEWS_API_KEY": self.news_api_key,
            "ELEVEN_LABS_API_KEY": self.eleven_labs_api_key,
            "ELEVEN_LABS_VOICE_ID": self.eleven_labs_voice_id,
        }
        return [name for name, value in secrets.items() if not value]
