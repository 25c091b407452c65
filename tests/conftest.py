"""Shared fixtures: provider fakes and a per-test configuration."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import tiktoken

from config import PipelineConfig


class _WordEncoding:
    def encode(self, text):
        return text.split()


@pytest.fixture(autouse=True)
def offline_token_counting(monkeypatch):
    # tiktoken downloads its encodings on first use
    monkeypatch.setattr(tiktoken, "encoding_for_model", lambda model: _WordEncoding())


@pytest.fixture
def config(tmp_path):
    return PipelineConfig(
        openai_api_key="sk-test",
        news_api_key="news-key",
        eleven_labs_api_key="xi-key",
        eleven_labs_voice_id="voice-123",
        audio_output_dir=str(tmp_path / "audio"),
        parallel_stages=False,
    )


def make_response(status_code=200, json_data=None, text="", content=b""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = json_data
    response.text = text
    response.content = content
    if content:
        body = content
    elif text:
        body = text.encode("utf-8")
    elif json_data is not None:
        body = json.dumps(json_data).encode("utf-8")
    else:
        body = b""
    response.iter_content.side_effect = lambda chunk_size=1, **kwargs: iter([body] if body else [])
    return response


def make_completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def feed(*urls):
    return {
        "status": "ok",
        "articles": [
            {"url": url, "title": f"Title {i}", "description": f"Description {i}"}
            for i, url in enumerate(urls)
        ],
    }
