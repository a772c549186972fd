"""
JSON encoding of requests and decoding of service answers.

The wire format uses camelCase keys ("sessionId", "resetContexts", ...) and
"lang" for the language tag. Fields that are absent or at their default are
left out of the encoded request.
"""

import json
from typing import Any, Dict, List, Optional

from .exceptions import DecodeError
from .models import AIContext, AIRequest, AIResponse, Fulfillment, Metadata, Result, Status


def _encode_context(context: AIContext) -> Dict[str, Any]:
    data = {"name": context.name, "parameters": dict(context.parameters)}
    if context.lifespan is not None:
        data["lifespan"] = context.lifespan
    return data


def encode(request: AIRequest) -> str:
    """
    Encode a request to JSON text.

    Args:
        request: Request to encode

    Returns:
        JSON object text; the same request always yields the same text
    """
    payload: Dict[str, Any] = {}
    if request.query is not None:
        payload["query"] = request.query
    if request.confidence is not None:
        payload["confidence"] = request.confidence
    if request.contexts:
        payload["contexts"] = [_encode_context(c) for c in request.contexts]
    if request.reset_contexts:
        payload["resetContexts"] = True
    if request.language is not None:
        payload["lang"] = request.language
    if request.timezone is not None:
        payload["timezone"] = request.timezone
    if request.session_id is not None:
        payload["sessionId"] = request.session_id
    return json.dumps(payload, ensure_ascii=False)


def _load_object(body: Optional[str]) -> Dict[str, Any]:
    if body is None or not body.strip():
        raise DecodeError("Empty answer from the service")
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DecodeError("Wrong service answer format", e) from e
    if not isinstance(data, dict):
        raise DecodeError(f"Wrong service answer format: expected a JSON object, got {type(data).__name__}")
    return data


def _field(data: Dict[str, Any], key: str, expected: type, path: str) -> Any:
    """Return data[key] if present and of the expected type, None if absent or null."""
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; do not accept it where a number is expected
    if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
        raise DecodeError(f"Wrong service answer format: '{path}{key}' should be {expected.__name__}")
    return value


def _decode_contexts(items: Optional[List[Any]], path: str) -> List[AIContext]:
    contexts = []
    for index, item in enumerate(items or []):
        item_path = f"{path}[{index}]."
        if not isinstance(item, dict):
            raise DecodeError(f"Wrong service answer format: '{path}[{index}]' should be dict")
        name = _field(item, "name", str, item_path)
        if name is None:
            raise DecodeError(f"Wrong service answer format: '{item_path}name' is missing")
        contexts.append(
            AIContext(
                name=name,
                parameters=_field(item, "parameters", dict, item_path) or {},
                lifespan=_field(item, "lifespan", int, item_path),
            )
        )
    return contexts


def _decode_result(data: Dict[str, Any]) -> Result:
    metadata = _field(data, "metadata", dict, "result.")
    fulfillment = _field(data, "fulfillment", dict, "result.")
    return Result(
        source=_field(data, "source", str, "result."),
        resolved_query=_field(data, "resolvedQuery", str, "result."),
        action=_field(data, "action", str, "result."),
        action_incomplete=bool(_field(data, "actionIncomplete", bool, "result.")),
        parameters=_field(data, "parameters", dict, "result.") or {},
        contexts=_decode_contexts(_field(data, "contexts", list, "result."), "result.contexts"),
        metadata=Metadata(
            intent_id=_field(metadata, "intentId", str, "result.metadata."),
            intent_name=_field(metadata, "intentName", str, "result.metadata."),
        )
        if metadata is not None
        else None,
        fulfillment=Fulfillment(speech=_field(fulfillment, "speech", str, "result.fulfillment."))
        if fulfillment is not None
        else None,
    )


def _decode_status(data: Dict[str, Any]) -> Status:
    return Status(
        code=_field(data, "code", int, "status."),
        error_type=_field(data, "errorType", str, "status."),
        error_id=_field(data, "errorId", str, "status."),
        error_details=_field(data, "errorDetails", str, "status."),
    )


def decode(body: Optional[str]) -> AIResponse:
    """
    Decode a service answer.

    Args:
        body: Raw response body text

    Returns:
        Parsed AIResponse

    Raises:
        DecodeError: If the body is empty, not JSON, or has mistyped fields
    """
    data = _load_object(body)
    result = _field(data, "result", dict, "")
    status = _field(data, "status", dict, "")
    return AIResponse(
        id=_field(data, "id", str, ""),
        timestamp=_field(data, "timestamp", str, ""),
        result=_decode_result(result) if result is not None else None,
        status=_decode_status(status) if status is not None else None,
    )


def decode_request(body: Optional[str]) -> AIRequest:
    """Decode request JSON, such as a request echoed back by a test server."""
    data = _load_object(body)
    confidence = data.get("confidence")
    if confidence is not None and (not isinstance(confidence, (int, float)) or isinstance(confidence, bool)):
        raise DecodeError("Wrong request format: 'confidence' should be float")
    return AIRequest(
        query=_field(data, "query", str, ""),
        contexts=_decode_contexts(_field(data, "contexts", list, ""), "contexts"),
        session_id=_field(data, "sessionId", str, ""),
        language=_field(data, "lang", str, ""),
        timezone=_field(data, "timezone", str, ""),
        reset_contexts=bool(_field(data, "resetContexts", bool, "")),
        confidence=float(confidence) if confidence is not None else None,
    )
