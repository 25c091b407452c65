"""Tests for deadline and size limits on streamed response bodies."""

import threading
import time
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import requests

from utils.http_utils import ResponseLimitError, read_body


def _streamed(chunks, sock=None):
    response = MagicMock()
    response.iter_content.side_effect = lambda chunk_size=1, **kwargs: iter(chunks)
    response.raw = SimpleNamespace(connection=SimpleNamespace(sock=sock))
    return response


def test_read_body_joins_chunks_and_closes():
    response = _streamed([b"<p>a", b"</p>"])

    assert read_body(response, time.monotonic() + 5, 1024) == b"<p>a</p>"
    response.close.assert_called_once()


def test_read_body_rejects_body_over_cap():
    response = _streamed([b"x" * 10, b"x" * 10])

    with pytest.raises(ResponseLimitError, match="exceeded 15 bytes"):
        read_body(response, time.monotonic() + 5, 15)
    response.close.assert_called_once()


def test_read_body_stops_between_chunks_after_deadline():
    def slow_chunks():
        for _ in range(50):
            time.sleep(0.05)
            yield b"x"

    response = _streamed(slow_chunks())
    started = time.monotonic()

    with pytest.raises(ResponseLimitError, match="deadline"):
        read_body(response, started + 0.2, 1024)

    assert time.monotonic() - started < 1.0


def test_read_body_wakes_a_read_blocked_past_the_deadline():
    woken = threading.Event()
    sock = MagicMock()
    sock.shutdown.side_effect = lambda how: woken.set()

    def blocked_chunks():
        yield b"<p>partial"
        # A socket read that only returns once the connection is torn down
        if not woken.wait(5):
            yield b"never woken"
        raise requests.ConnectionError("connection shut down")

    response = _streamed(blocked_chunks(), sock=sock)
    started = time.monotonic()

    with pytest.raises(ResponseLimitError, match="deadline") as excinfo:
        read_body(response, started + 0.2, 1024)

    assert time.monotonic() - started < 2.0
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
    sock.shutdown.assert_called_once()


def test_read_body_propagates_errors_before_deadline():
    def failing_chunks():
        yield b"x"
        raise requests.ConnectionError("reset by peer")

    with pytest.raises(requests.ConnectionError):
        read_body(_streamed(failing_chunks()), time.monotonic() + 5, 1024)
