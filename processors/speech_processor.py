#!/usr/bin/env python3
"""
Speech Processor Module

This module sends a summary to the Eleven Labs text-to-speech API and
writes the returned audio to a per-run file. Older files beyond the
configured retention count are removed after each write.
"""

import glob
import logging
import os
import time
import uuid
import requests
from typing import List, Optional

from config import PipelineConfig
from errors import SynthesisError
from models import AudioArtifact
from utils.http_utils import ResponseLimitError, read_body

AUDIO_FILE_PATTERN = "summary-*.mp3"

class SpeechSynthesizer:
    """Narrates summaries with Eleven Labs."""

    def __init__(self, config: PipelineConfig, session: requests.Session):
        self.config = config
        self.session = session

    def audio_path(self, artifact_key: str) -> str:
        """Returns the output path for the given artifact key."""
        return os.path.join(self.config.audio_output_dir, f"summary-{artifact_key}.mp3")

    def request_audio(self, summary: str) -> bytes:
        """
        Requests raw audio for the summary.

        Args:
            summary: Text to narrate

        Returns:
            bytes: The audio payload

        Raises:
            SynthesisError: On transport failure, timeout, an oversized body, or a non-200 response
        """
        url = f"{self.config.eleven_labs_api_url}/v1/text-to-speech/{self.config.eleven_labs_voice_id}"
        deadline = time.monotonic() + self.config.request_timeout
        try:
            response = self.session.post(
                url,
                headers={
                    "xi-api-key": self.config.eleven_labs_api_key or "",
                    "Content-Type": "application/json",
                    "accept": "audio/mpeg"
                },
                json={
                    "text": summary,
                    "voice_settings": {
                        "stability": self.config.voice_stability,
                        "similarity_boost": self.config.voice_similarity_boost
                    }
                },
                timeout=self.config.request_timeout,
                stream=True
            )
            if response.status_code != 200:
                response.close()
                logging.error(f"Text-to-speech API error: status code {response.status_code}")
                raise SynthesisError()
            return read_body(response, deadline, self.config.max_audio_bytes)
        except ResponseLimitError as e:
            logging.error(f"Gave up on text-to-speech response: {e}")
            raise SynthesisError() from e
        except requests.RequestException as e:
            logging.exception("Error converting summary to speech")
            raise SynthesisError() from e

    def prune_audio_files(self) -> List[str]:
        """
        Removes all but the newest audio files from the output directory.

        Returns:
            List[str]: Paths of the removed files
        """
        pattern = os.path.join(self.config.audio_output_dir, AUDIO_FILE_PATTERN)
        audio_files = sorted(glob.glob(pattern), key=os.path.getmtime, reverse=True)
        removed = []
        for path in audio_files[self.config.audio_keep_files:]:
            try:
                os.remove(path)
                removed.append(path)
            except OSError as e:
                logging.warning(f"Error removing old audio file {path}: {e}")
        if removed:
            logging.info(f"Removed {len(removed)} old audio file(s)")
        return removed

    def synthesize(self, summary: str, artifact_key: Optional[str] = None) -> AudioArtifact:
        """
        Converts a summary to speech and saves it.

        Args:
            summary: Text to narrate
            artifact_key: Unique part of the output filename (a fresh uuid when omitted)

        Returns:
            AudioArtifact: Where the audio was written

        Raises:
            SynthesisError: If the provider call or the file write fails
        """
        artifact_key = artifact_key or uuid.uuid4().hex
        audio = self.request_audio(summary)
        audio_path = self.audio_path(artifact_key)

        try:
            os.makedirs(self.config.audio_output_dir, exist_ok=True)
            with open(audio_path, 'wb') as file:
                file.write(audio)
        except OSError as e:
            logging.exception(f"Error writing audio to {audio_path}")
            raise SynthesisError() from e

        logging.info(f"Audio content written to file: {audio_path}")
        self.prune_audio_files()
        return AudioArtifact(path=audio_path, filename=os.path.basename(audio_path))
