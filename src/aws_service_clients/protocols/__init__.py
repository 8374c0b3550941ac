#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
import os
from collections.abc import Mapping
from typing import Any, Final

from .. import URI
from ..exceptions import Fault
from ..http import Field, HTTPRequest, HTTPResponse
from ..interfaces import Endpoint
from ..model import OperationModel, Protocol, ServiceModel
from ..outcome import ErrorKind, ServiceError

_LOGGER = logging.getLogger(__name__)

_REQUEST_ID_HEADERS: Final = ("x-amzn-requestid", "x-amz-request-id")
_MESSAGE_KEYS: Final = ("message", "Message", "errorMessage")


def parse_error_code(code: str | None) -> str | None:
    """Strip the namespace and any trailing metadata from an error code.

    ``aws.protocoltests.restjson#FooError:http://internal.amazon.com/`` becomes
    ``FooError``.
    """
    if not code:
        return None

    code = code.split(":")[0]
    if "#" in code:
        code = code.split("#")[-1]

    return code or None


def parse_retry_after(response: HTTPResponse) -> float | None:
    """Read a ``Retry-After`` header given in seconds."""
    value = response.fields.get_value("retry-after")
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        _LOGGER.debug("Ignoring Retry-After header that is not a number: %s", value)
        return None
    return seconds if seconds >= 0 else None


class HttpClientProtocol:
    """Serializes operation requests and deserializes responses for one service.

    Subclasses implement a single AWS protocol. Requests are serialized without a
    host; :py:meth:`set_service_endpoint` fills it in once the endpoint is known.
    """

    content_type: str | None = None

    def __init__(self, service: ServiceModel) -> None:
        self._service = service

    @property
    def service(self) -> ServiceModel:
        return self._service

    def serialize_request(
        self, *, operation: OperationModel, params: Mapping[str, Any]
    ) -> HTTPRequest:
        """Build the request for an operation.

        :param operation: The operation being called.
        :param params: The request members that are set.
        :raises InvalidParameterError: If a member cannot be placed on the request.
        """
        raise NotImplementedError()

    def set_service_endpoint(
        self,
        *,
        request: HTTPRequest,
        endpoint: Endpoint,
    ) -> HTTPRequest:
        uri = endpoint.uri
        previous = request.destination

        path = previous.path or uri.path
        if uri.path is not None and previous.path is not None:
            path = os.path.join(uri.path, previous.path.lstrip("/"))

        if path is not None and not path.startswith("/"):
            path = "/" + path

        query = previous.query or uri.query
        if uri.query and previous.query:
            query = f"{uri.query}&{previous.query}"

        request.destination = URI(
            scheme=uri.scheme,
            username=uri.username or previous.username,
            password=uri.password or previous.password,
            host=uri.host,
            port=uri.port or previous.port,
            path=path,
            query=query,
            fragment=uri.fragment or previous.fragment,
        )

        for name, value in endpoint.headers.items():
            request.fields.set_field(Field(name=name, values=[value]))

        return request

    def deserialize_response(
        self, *, operation: OperationModel, response: HTTPResponse
    ) -> dict[str, Any]:
        """Decode the response of an operation.

        The decoded body carries a ``ResponseMetadata`` entry with the request id and
        HTTP status.

        :raises ServiceError: If the response is an error response.
        :raises SerializationError: If a successful response body can't be decoded.
        """
        if not self._is_success(response):
            raise self._create_error(operation=operation, response=response)

        result = self._decode_body(operation, response.body) if response.body else {}
        result["ResponseMetadata"] = {
            "RequestId": self._request_id(response, result),
            "HTTPStatusCode": response.status,
        }
        return result

    def _is_success(self, response: HTTPResponse) -> bool:
        return 200 <= response.status < 300

    def _decode_body(self, operation: OperationModel, body: bytes) -> dict[str, Any]:
        raise NotImplementedError()

    def _decode_error_body(self, body: bytes) -> dict[str, Any]:
        """Decode an error body, returning an empty dict if it can't be decoded."""
        raise NotImplementedError()

    def _error_code(
        self, response: HTTPResponse, body: Mapping[str, Any]
    ) -> str | None:
        raise NotImplementedError()

    def _error_message(self, body: Mapping[str, Any]) -> str:
        for key in _MESSAGE_KEYS:
            if isinstance(message := body.get(key), str):
                return message
        return ""

    def _request_id(
        self, response: HTTPResponse, body: Mapping[str, Any]
    ) -> str | None:
        for header in _REQUEST_ID_HEADERS:
            if (value := response.fields.get_value(header)) is not None:
                return value
        request_id = body.get("RequestId")
        return request_id if isinstance(request_id, str) else None

    def _create_error(
        self, *, operation: OperationModel, response: HTTPResponse
    ) -> ServiceError:
        body = self._decode_error_body(response.body) if response.body else {}
        code = self._error_code(response, body)
        kind = ErrorKind.from_code(code, response.status)
        fault: Fault = "client" if response.status < 500 else "server"
        error = ServiceError(
            self._error_message(body),
            kind=kind,
            code=code or kind.value,
            fault=fault,
            status_code=response.status,
            request_id=self._request_id(response, body),
            body=body,
            is_retry_safe=kind.is_retryable,
            retry_after=parse_retry_after(response),
            is_throttling_error=kind.is_throttling,
        )
        _LOGGER.debug(
            "%s returned %s (%s) with status %s",
            operation.name,
            error.code,
            kind.name,
            response.status,
        )
        return error


def create_protocol(service: ServiceModel) -> HttpClientProtocol:
    """Create the protocol implementation for a service."""
    from .aws_json import AWSJSONClientProtocol
    from .query import AWSQueryClientProtocol
    from .rest_json import RestJsonClientProtocol

    match service.protocol:
        case Protocol.REST_JSON:
            return RestJsonClientProtocol(service)
        case Protocol.AWS_JSON_1_0 | Protocol.AWS_JSON_1_1:
            return AWSJSONClientProtocol(service)
        case Protocol.AWS_QUERY:
            return AWSQueryClientProtocol(service)
