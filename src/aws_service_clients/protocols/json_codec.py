#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import base64
import json
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any, Final

from ..exceptions import InvalidParameterError, SerializationError
from ..http import HTTPResponse
from ..model import OperationModel
from . import HttpClientProtocol, parse_error_code


def _default(value: Any) -> Any:
    match value:
        case datetime():
            return value.timestamp()
        case bytes() | bytearray():
            return base64.b64encode(value).decode("ascii")
        case Decimal():
            return float(value)
        case set() | frozenset() | tuple():
            return list(value)
        case _:
            raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json(members: Mapping[str, Any]) -> bytes:
    """Encode request members as a JSON object, dropping unset members.

    Timestamps are written as epoch seconds and blobs as base64 text.

    :raises InvalidParameterError: If a member has no JSON representation.
    """
    try:
        return json.dumps(
            {k: v for k, v in members.items() if v is not None},
            default=_default,
            separators=(",", ":"),
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"Unable to serialize request body: {e}") from e


def decode_json(body: bytes) -> dict[str, Any]:
    """Decode a JSON object response body.

    :raises SerializationError: If the body is not a JSON object.
    """
    try:
        decoded = json.loads(body)
    except ValueError as e:
        raise SerializationError(f"Unable to parse response body as JSON: {e}") from e
    if not isinstance(decoded, dict):
        raise SerializationError(
            f"Expected a JSON object response body, got {type(decoded).__name__}"
        )
    return decoded


class JSONClientProtocol(HttpClientProtocol):
    """Response handling shared by the JSON based protocols."""

    _ERROR_TYPE_HEADER: Final = "x-amzn-errortype"

    def _decode_body(self, operation: OperationModel, body: bytes) -> dict[str, Any]:
        return decode_json(body)

    def _decode_error_body(self, body: bytes) -> dict[str, Any]:
        try:
            return decode_json(body)
        except SerializationError:
            return {}

    def _error_code(
        self, response: HTTPResponse, body: Mapping[str, Any]
    ) -> str | None:
        if (header := response.fields.get_value(self._ERROR_TYPE_HEADER)) is not None:
            if code := parse_error_code(header):
                return code

        code = body.get("__type")
        if code is None:
            code = body.get("code")
        return parse_error_code(code) if isinstance(code, str) else None
