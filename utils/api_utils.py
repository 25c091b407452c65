"""
API utilities for the Article Briefing application.

This module provides functions for interacting with the OpenAI API
and for counting prompt tokens. Calls are made exactly once; failures
propagate to the calling stage.
"""

import logging
import tiktoken
from typing import List, Dict, Any, Optional
from openai import OpenAI
from config import AI_MODEL, MAX_TOKENS_PER_REQUEST

def num_tokens_from_string(string: str, model: str = AI_MODEL) -> int:
    """
    Returns the number of tokens in a text string.

    Args:
        string: The string to count tokens for
        model: The model to use for token counting

    Returns:
        int: The number of tokens in the string
    """
    try:
        encoding = tiktoken.encoding_for_model(model)
        return len(encoding.encode(string))
    except Exception as e:
        logging.warning(f"Error counting tokens: {e}. Using approximate count.")
        # Fallback to approximate count (1 token ≈ 4 chars for English text)
        return len(string) // 4

def call_openai_api_with_messages(
    client: OpenAI,
    messages: List[Dict[str, str]],
    model: str = AI_MODEL,
    max_tokens: Optional[int] = None
) -> Any:
    """
    Makes a chat completions call to OpenAI.

    Args:
        client: The OpenAI client instance
        messages: List of message dictionaries to send
        model: The model to use (default: AI_MODEL)
        max_tokens: Maximum tokens for the response (optional)

    Returns:
        The API response
    """
    # Count tokens in the request
    total_tokens = sum(num_tokens_from_string(msg["content"], model) for msg in messages)
    logging.info(f"Sending {total_tokens} prompt tokens to {model}")

    if total_tokens > MAX_TOKENS_PER_REQUEST:
        logging.warning(f"Request too large ({total_tokens} tokens). This may exceed the model context.")

    # Prepare the API call parameters
    params = {
        "messages": messages,
        "model": model
    }

    # Add optional parameters if provided
    if max_tokens is not None:
        params["max_tokens"] = max_tokens

    return client.chat.completions.create(**params)

def first_choice_text(response: Any) -> Optional[str]:
    """
    Returns the trimmed text of the first choice of a chat completion.

    Args:
        response: The chat completion response

    Returns:
        Optional[str]: The generated text, or None when the response has none
    """
    if not response or not response.choices:
        return None
    content = response.choices[0].message.content
    if content is None:
        return None
    return content.strip()
