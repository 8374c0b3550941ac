#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import xml.etree.ElementTree as ETree
from collections.abc import Mapping
from typing import Any

from .. import URI
from ..bindings import serialize_scalar
from ..exceptions import SerializationError
from ..http import Field, Fields, HTTPRequest, HTTPResponse
from ..http.utils import join_query_params
from ..model import OperationModel
from . import HttpClientProtocol, parse_error_code


def flatten_params(
    value: Any, prefix: str = "", out: list[tuple[str, str | None]] | None = None
) -> list[tuple[str, str | None]]:
    """Flatten request members into query protocol key-value pairs.

    Nested structures are joined with ``.`` and lists are written with the
    non-flattened ``Name.member.N`` notation, counting from 1. Empty lists are
    written as an empty value so the service can tell them apart from unset lists.
    """
    if out is None:
        out = []

    match value:
        case None:
            pass
        case Mapping():
            for key, item in value.items():
                flatten_params(item, f"{prefix}.{key}" if prefix else str(key), out)
        case list() | tuple():
            if not value:
                out.append((prefix, ""))
            for index, item in enumerate(value, start=1):
                flatten_params(item, f"{prefix}.member.{index}", out)
        case _:
            out.append((prefix, serialize_scalar(value)))
    return out


def _strip_namespace(tag: str) -> str:
    return tag.rpartition("}")[2]


def xml_to_dict(element: ETree.Element) -> Any:
    """Convert an XML element to plain python values.

    Leaf elements become their text. Elements whose children are all ``member``
    become lists. Repeated child tags are collected into lists.
    """
    children = list(element)
    if not children:
        return element.text or ""

    if all(_strip_namespace(child.tag) == "member" for child in children):
        return [xml_to_dict(child) for child in children]

    result: dict[str, Any] = {}
    for child in children:
        tag = _strip_namespace(child.tag)
        value = xml_to_dict(child)
        if tag in result:
            if not isinstance(result[tag], list):
                result[tag] = [result[tag]]
            result[tag].append(value)
        else:
            result[tag] = value
    return result


def _parse_xml(body: bytes) -> ETree.Element:
    try:
        return ETree.fromstring(body)
    except ETree.ParseError as e:
        raise SerializationError(f"Unable to parse response body as XML: {e}") from e


class AWSQueryClientProtocol(HttpClientProtocol):
    """An implementation of the aws.protocols#awsQuery protocol.

    Requests are form-encoded ``POST`` bodies naming the ``Action`` and ``Version``.
    Responses are XML documents wrapping an ``<Operation>Result`` element.
    """

    content_type = "application/x-www-form-urlencoded; charset=utf-8"

    def serialize_request(
        self, *, operation: OperationModel, params: Mapping[str, Any]
    ) -> HTTPRequest:
        pairs: list[tuple[str, str | None]] = [
            ("Action", operation.name),
            ("Version", self.service.api_version),
        ]
        flatten_params(params, out=pairs)
        return HTTPRequest(
            destination=URI(host="", path="/"),
            method="POST",
            fields=Fields([Field(name="Content-Type", values=[self.content_type])]),
            body=join_query_params(pairs).encode("utf-8"),
        )

    def _decode_body(self, operation: OperationModel, body: bytes) -> dict[str, Any]:
        root = _parse_xml(body)
        result: dict[str, Any] = {}
        for child in root:
            tag = _strip_namespace(child.tag)
            if tag == f"{operation.name}Result":
                decoded = xml_to_dict(child)
                if isinstance(decoded, dict):
                    result.update(decoded)
            elif tag == "ResponseMetadata":
                result["ResponseMetadata"] = xml_to_dict(child)
        return result

    def _decode_error_body(self, body: bytes) -> dict[str, Any]:
        try:
            root = _parse_xml(body)
        except SerializationError:
            return {}

        decoded = xml_to_dict(root)
        if not isinstance(decoded, dict):
            return {}
        # <ErrorResponse><Error>...</Error><RequestId/></ErrorResponse>
        error = decoded.get("Error")
        if isinstance(error, dict):
            return {**error, "RequestId": decoded.get("RequestId")}
        return decoded

    def _error_code(
        self, response: HTTPResponse, body: Mapping[str, Any]
    ) -> str | None:
        code = body.get("Code")
        return parse_error_code(code) if isinstance(code, str) else None

    def _request_id(
        self, response: HTTPResponse, body: Mapping[str, Any]
    ) -> str | None:
        metadata = body.get("ResponseMetadata")
        if isinstance(metadata, Mapping) and isinstance(
            request_id := metadata.get("RequestId"), str
        ):
            return request_id
        return super()._request_id(response, body)
