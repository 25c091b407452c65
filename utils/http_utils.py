"""
HTTP utilities for the Article Briefing application.

requests applies its timeout to each connect and socket read, not to the
whole transfer. read_body caps a streamed response by wall-clock deadline
and by size so one slow or oversized upstream cannot hold a stage open.
"""

import logging
import socket
import threading
import time
import requests

READ_CHUNK_SIZE = 8192

class ResponseLimitError(Exception):
    """Raised when a response body is too slow or too large."""

def _abort_connection(response: requests.Response, expired: threading.Event):
    # Shutting the socket down wakes a read that is blocked mid-chunk
    expired.set()
    connection = getattr(response.raw, "connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError as e:
        logging.debug(f"Socket already closed when deadline expired: {e}")

def read_body(response: requests.Response, deadline: float, max_bytes: int) -> bytes:
    """
    Reads a streamed response body within a deadline and a size cap.

    Args:
        response: A response obtained with stream=True
        deadline: time.monotonic() value by which the body must be complete
        max_bytes: Largest body accepted

    Returns:
        bytes: The response body

    Raises:
        ResponseLimitError: If the deadline passes or the body exceeds max_bytes
    """
    expired = threading.Event()
    watchdog = threading.Timer(max(0.0, deadline - time.monotonic()), _abort_connection, args=(response, expired))
    watchdog.daemon = True
    watchdog.start()

    body = bytearray()
    try:
        for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
            body.extend(chunk)
            if len(body) > max_bytes:
                raise ResponseLimitError(f"response exceeded {max_bytes} bytes")
            if time.monotonic() >= deadline:
                expired.set()
                break
    except (requests.RequestException, OSError) as e:
        if expired.is_set():
            raise ResponseLimitError("response did not complete before the deadline") from e
        raise
    finally:
        watchdog.cancel()
        response.close()

    if expired.is_set():
        raise ResponseLimitError("response did not complete before the deadline")
    return bytes(body)
