"""
Decoding of upstream payloads.

The inference endpoints wrap their result in an envelope whose ``body`` is
either a JSON object or a JSON-encoded string. A string body must be a
complete JSON document; anything else is a malformed response.
"""

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from jobfinder.errors import MalformedUpstreamResponse

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_json_payload(payload: Any, service: str) -> Any:
    """Return ``payload`` decoded once more if it arrived as a JSON string."""
    if not isinstance(payload, str):
        return payload

    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedUpstreamResponse(service, "Response body is not valid JSON") from e


def decode_lambda_body(envelope: Any, service: str) -> dict:
    """
    Unwrap a Lambda proxy envelope.

    Accepts ``{"body": {...}}``, ``{"body": "<json>"}``, a bare JSON string
    or an object without an envelope.
    """
    envelope = decode_json_payload(envelope, service)
    if isinstance(envelope, dict) and "body" in envelope:
        body = decode_json_payload(envelope["body"], service)
    else:
        body = envelope

    if not isinstance(body, dict):
        raise MalformedUpstreamResponse(service, f"Expected a JSON object, got {type(body).__name__}")
    return body


def validate_upstream(model: type[ModelT], data: Any, service: str) -> ModelT:
    """Validate an upstream payload, raising MalformedUpstreamResponse on mismatch."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
        raise MalformedUpstreamResponse(service, f"Unexpected response shape ({fields})") from e
