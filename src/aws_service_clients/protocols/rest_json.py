#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from typing import Any, Final

from .. import URI
from ..bindings import build_headers, build_query
from ..exceptions import InvalidParameterError
from ..http import Field, HTTPRequest, tuples_to_fields
from ..model import Location, OperationModel
from .json_codec import JSONClientProtocol, encode_json

_BODYLESS_METHODS: Final = frozenset({"GET", "HEAD", "DELETE"})


class RestJsonClientProtocol(JSONClientProtocol):
    """An implementation of the aws.protocols#restJson1 protocol.

    Members bound by the request URI, query string or headers are written there and
    the rest make up the JSON body.
    """

    content_type = "application/json"

    def serialize_request(
        self, *, operation: OperationModel, params: Mapping[str, Any]
    ) -> HTTPRequest:
        pattern = operation.path
        try:
            path = pattern.format(**params)
            query = build_query(pattern, operation.bindings_for(Location.QUERY), params)
            headers = build_headers(operation.bindings_for(Location.HEADER), params)
        except (ValueError, TypeError) as e:
            raise InvalidParameterError(f"{operation.name}: {e}") from e

        fields = tuples_to_fields(headers)

        body_members = {
            name: value
            for name, value in params.items()
            if name not in operation.bound_members and value is not None
        }
        body = b""
        if body_members or operation.http_method not in _BODYLESS_METHODS:
            body = encode_json(body_members)
            fields.set_field(Field(name="Content-Type", values=[self.content_type]))

        return HTTPRequest(
            destination=URI(host="", path=path, query=query),
            method=operation.http_method,
            fields=fields,
            body=body,
        )
