#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from typing import Any

from .. import URI
from ..http import Field, Fields, HTTPRequest
from ..model import OperationModel, ServiceModel
from .json_codec import JSONClientProtocol, encode_json


class AWSJSONClientProtocol(JSONClientProtocol):
    """An implementation of the aws.protocols#awsJson1_0 and awsJson1_1 protocols.

    Every operation is a ``POST`` to ``/`` naming the operation in the
    ``X-Amz-Target`` header, with all members in the JSON body.
    """

    def __init__(self, service: ServiceModel) -> None:
        super().__init__(service)
        self.content_type = f"application/x-amz-json-{service.protocol.json_version}"

    def serialize_request(
        self, *, operation: OperationModel, params: Mapping[str, Any]
    ) -> HTTPRequest:
        fields = Fields(
            [
                Field(
                    name="X-Amz-Target",
                    values=[f"{self.service.target_prefix}.{operation.name}"],
                ),
                Field(name="Content-Type", values=[self.content_type]),
            ]
        )
        return HTTPRequest(
            destination=URI(host="", path="/"),
            method="POST",
            fields=fields,
            body=encode_json(params),
        )
