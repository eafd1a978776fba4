"""Unified LLM client using LiteLLM.

Provides a single interface for Gemini, OpenAI and other providers. Claude
models are called through the Anthropic SDK instead (see rewrite.optimizer).
"""

import logging
from typing import Any, Optional, Union

import litellm

# Suppress verbose LiteLLM logging
litellm.set_verbose = False
logging.getLogger("LiteLLM").setLevel(logging.WARNING)


async def get_completion_async(
    model: str,
    messages: list[dict],
    max_tokens: int = 4096,
    temperature: float = 0.3,
    api_key: Optional[str] = None,
    return_full_response: bool = False,
) -> Union[str, tuple[str, Any]]:
    """
    Get a completion from any LiteLLM-supported model.

    Args:
        model: Model identifier, e.g. "gemini/gemini-2.5-flash" or "gpt-4o"
        messages: List of message dicts with role and content
        max_tokens: Maximum response tokens
        temperature: Sampling temperature
        api_key: Provider key; LiteLLM reads it from the environment when None
        return_full_response: If True, return (text, response) tuple for cost tracking

    Returns:
        Response text content, or (text, response) tuple if return_full_response=True

    Raises:
        Exception: If API call fails
    """
    kwargs: dict[str, Any] = {
        "model": model,
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
    }

    if api_key:
        kwargs["api_key"] = api_key

    response = await litellm.acompletion(**kwargs)
    text = response.choices[0].message.content or ""

    if return_full_response:
        return text, response
    return text
