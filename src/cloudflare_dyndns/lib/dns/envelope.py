"""
Provider response envelope decoding
"""
import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from .base import DNSRecord, DecodeError, ResponseError


@dataclass
class ProviderResponse:
    """Outer response wrapper: success flag, errors and record payload"""
    success: bool
    errors: List[ResponseError] = field(default_factory=list)
    result: List[DNSRecord] = field(default_factory=list)
    messages: List[Any] = field(default_factory=list)


def decode_records(payload: Any) -> List[DNSRecord]:
    """
    Normalise a ``result`` payload into a list of records

    The provider serialises ``result`` as an array for collection endpoints
    and as a bare object for single-record endpoints; both shapes, and
    ``null``, are accepted.

    Raises:
        DecodeError: If the payload is neither an object nor an array of objects
    """
    if payload is None:
        return []
    if isinstance(payload, dict):
        items = [payload]
    elif isinstance(payload, list):
        items = payload
    else:
        raise DecodeError("DNS records: data is neither an array nor a single object")

    records = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise DecodeError(f"DNS records: item {index} is not an object")
        try:
            records.append(DNSRecord.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"DNS records: item {index} is malformed: {str(e)}")
    return records


def decode_errors(payload: Any) -> List[ResponseError]:
    """Decode the ``errors`` list of an envelope, keeping provider order"""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DecodeError("Response errors: expected an array")

    errors = []
    for item in payload:
        if not isinstance(item, dict):
            raise DecodeError("Response errors: item is not an object")
        try:
            code = int(item.get('code') or 0)
        except (TypeError, ValueError):
            raise DecodeError(f"Response errors: invalid code {item.get('code')!r}")
        errors.append(ResponseError(code=code, message=str(item.get('message') or "")))
    return errors


def decode_envelope(body: Union[bytes, str], status_code: Optional[int] = None) -> ProviderResponse:
    """
    Decode a raw response body into a ProviderResponse

    Args:
        body: Raw response body
        status_code: HTTP status, attached to decode errors for context

    Returns:
        ProviderResponse object

    Raises:
        DecodeError: If the body is not JSON, not shaped like an envelope, or
            reports failure without any errors
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Invalid JSON in provider response: {str(e)}", status_code=status_code)

    if not isinstance(data, dict):
        raise DecodeError("Provider response is not a JSON object", status_code=status_code)

    success = data.get('success')
    if not isinstance(success, bool):
        raise DecodeError(
            f"Provider response has no boolean success flag: {success!r}", status_code=status_code
        )
    try:
        errors = decode_errors(data.get('errors'))
        # A failed response's payload is not trusted
        result = decode_records(data.get('result')) if success else []
    except DecodeError as e:
        e.status_code = status_code
        raise

    if not success and not errors:
        raise DecodeError("Provider response reports failure without any errors", status_code=status_code)

    messages = data.get('messages') or []
    return ProviderResponse(
        success=success,
        errors=errors,
        result=result,
        messages=messages if isinstance(messages, list) else [messages],
    )
