"""
Generation layer: backend client, endpoint policies, prompts and the
resolver that turns an attempt into a caller-facing outcome.
"""

from .client import (
    CallFailure,
    ExpectedShape,
    GenerationClient,
    GenerationRequest,
    GenerationResult,
    build_generation_client,
)
from .decoding import NO_STRUCTURED_DATA, Decoded, JsonKind, decode_structured
from .endpoints import (
    ENDPOINT_POLICIES,
    Endpoint,
    EndpointPolicy,
    FailurePolicy,
    get_policy,
    validate_registry,
)
from .fallbacks import FallbackInput
from .resolver import GenerationOutcome, OutcomeStatus, ResilientResponseResolver
from .schemas import SurveyInfo, SurveyResponse, Transaction, VentureProfile

__all__ = [
    # Client
    "CallFailure",
    "ExpectedShape",
    "GenerationClient",
    "GenerationRequest",
    "GenerationResult",
    "build_generation_client",
    # Decoding
    "Decoded",
    "JsonKind",
    "NO_STRUCTURED_DATA",
    "decode_structured",
    # Policies
    "ENDPOINT_POLICIES",
    "Endpoint",
    "EndpointPolicy",
    "FailurePolicy",
    "get_policy",
    "validate_registry",
    # Resolution
    "FallbackInput",
    "GenerationOutcome",
    "OutcomeStatus",
    "ResilientResponseResolver",
    # Inputs
    "SurveyInfo",
    "SurveyResponse",
    "Transaction",
    "VentureProfile",
]
