"""
Generation Client

Single-attempt boundary over the generation backend:
- one network round trip per call, no client-initiated retries
- no client-side timeout beyond what the transport enforces
- every transport error, non-success status or connection failure is
  returned as a CallFailure instead of raised
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

import litellm
import structlog

from ventureai.config import Settings
from ventureai.monitoring import get_metrics

from .providers import BackendConfig, resolve_backend

logger = structlog.get_logger()

litellm.suppress_debug_info = True


class ExpectedShape(str, Enum):
    FREE_TEXT = "free_text"
    STRUCTURED_JSON = "structured_json"


@dataclass(frozen=True)
class GenerationRequest:
    """What is sent to the backend for one attempt."""

    system_instruction: str
    messages: list[dict[str, Any]]
    temperature: float
    max_output_tokens: int
    expected_shape: ExpectedShape = ExpectedShape.FREE_TEXT
    endpoint: str = "unknown"

    def to_backend_messages(self) -> list[dict[str, Any]]:
        return [{"role": "system", "content": self.system_instruction}, *self.messages]


@dataclass(frozen=True)
class GenerationResult:
    """A completed round trip. `raw` is unvalidated message content."""

    raw: Any
    model: str
    duration_ms: int = 0
    prompt_tokens: int = 0
    completion_tokens: int = 0


@dataclass(frozen=True)
class CallFailure:
    """A failed round trip (transport error or non-success status)."""

    error: str
    error_type: str = "Exception"
    status_code: int | None = None
    duration_ms: int = 0


def _message_content(response: Any) -> Any:
    """Pull the first choice's content; a malformed envelope yields None."""
    try:
        return response.choices[0].message.content
    except (AttributeError, IndexError, KeyError, TypeError):
        return None


def _usage(response: Any) -> tuple[int, int]:
    usage = getattr(response, "usage", None)
    if not usage:
        return 0, 0
    return int(getattr(usage, "prompt_tokens", 0) or 0), int(getattr(usage, "completion_tokens", 0) or 0)


class GenerationClient:
    """Thin wrapper over litellm for one configured backend."""

    def __init__(self, backend: BackendConfig):
        self.backend = backend

    async def generate(self, request: GenerationRequest) -> GenerationResult | CallFailure:
        """
        Perform exactly one completion call.

        Args:
            request: System instruction, ordered messages and sampling limits

        Returns:
            GenerationResult on a completed round trip (content unvalidated),
            CallFailure on any exception raised by the transport.
        """
        metrics = get_metrics()
        start_time = time.time()

        try:
            response = await litellm.acompletion(
                model=self.backend.model,
                messages=request.to_backend_messages(),
                temperature=request.temperature,
                max_tokens=request.max_output_tokens,
                api_key=self.backend.api_key,
                api_base=self.backend.api_base,
                num_retries=0,
                max_retries=0,
            )
        except Exception as e:
            duration = time.time() - start_time
            status_code = getattr(e, "status_code", None)
            metrics.track_generation_call(request.endpoint, ok=False, duration=duration)
            logger.warning(
                "Generation call failed",
                endpoint=request.endpoint,
                provider=self.backend.provider.value,
                model=self.backend.model,
                error_type=type(e).__name__,
                status_code=status_code,
                error=str(e),
            )
            return CallFailure(
                error=str(e),
                error_type=type(e).__name__,
                status_code=status_code if isinstance(status_code, int) else None,
                duration_ms=int(duration * 1000),
            )

        duration = time.time() - start_time
        prompt_tokens, completion_tokens = _usage(response)
        metrics.track_generation_call(request.endpoint, ok=True, duration=duration)
        logger.debug(
            "Generation call completed",
            endpoint=request.endpoint,
            model=self.backend.model,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            duration_ms=int(duration * 1000),
        )

        return GenerationResult(
            raw=_message_content(response),
            model=self.backend.model,
            duration_ms=int(duration * 1000),
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
        )


def build_generation_client(settings: Settings) -> GenerationClient | None:
    """Build the process-wide client, or None when no credential is configured."""
    backend = resolve_backend(settings)
    if backend is None:
        return None
    logger.info("Generation client configured", provider=backend.provider.value, model=backend.model)
    return GenerationClient(backend)
