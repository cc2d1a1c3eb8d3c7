"""
Request/response marshalling for running generations off the caller's thread.

A host sends one message per generation and gets one response back. Option
values and input text pass through untouched; failures are reported in the
response instead of being raised.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any

from .errors import ConfigurationError, GenerationError, GenerationTimeoutError
from .pipeline.config import GeneratorConfig
from .pipeline.generator import GenerationRequest, GenerationResult, InputKind, generate_model

logger = logging.getLogger(__name__)

# Seconds; the bound a host applies before giving up on a generation
DEFAULT_TIMEOUT = 5.0


def handle_message(message: dict[str, Any], timeout: float | None = None) -> dict[str, Any]:
    """
    Run one generation request message.

    Args:
        message: ``{requestId, kind, text, options}``
        timeout: Optional time bound in seconds

    Returns:
        ``{requestId, success, error?, files, diagnostics, meta}``
    """
    request_id = message.get("requestId")
    try:
        request = request_from_message(message)
        if timeout is None:
            result = generate_model(request)
        else:
            result = generate_with_timeout(request, timeout)
    except GenerationError as e:
        logger.warning("Generation request %s failed: %s", request_id, e)
        return failure_response(request_id, str(e))

    return {"requestId": request_id, "success": True, **result.to_dict()}


def request_from_message(message: dict[str, Any]) -> GenerationRequest:
    """Build a GenerationRequest from a request message."""
    options = message.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigurationError("Options must be a JSON object.")
    return GenerationRequest(
        kind=message.get("kind", InputKind.JSON),
        text=message.get("text", ""),
        options=GeneratorConfig.from_dict(options),
    )


def failure_response(request_id: Any, error: str) -> dict[str, Any]:
    empty = GenerationResult(diagnostics=[error])
    return {"requestId": request_id, "success": False, "error": error, **empty.to_dict()}


def generate_with_timeout(request: GenerationRequest, timeout: float = DEFAULT_TIMEOUT) -> GenerationResult:
    """
    Run one generation in a worker thread with a time bound.

    The generation cannot be interrupted; when the bound is exceeded its
    eventual result is discarded.

    Raises:
        GenerationTimeoutError: If the generation did not finish in time
        GenerationError: Whatever the generation itself raised
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="json_to_pojo")
    try:
        future = executor.submit(generate_model, request)
        try:
            return future.result(timeout=timeout)
        except FuturesTimeoutError as e:
            raise GenerationTimeoutError(f"Generation timed out after {timeout:g}s") from e
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
