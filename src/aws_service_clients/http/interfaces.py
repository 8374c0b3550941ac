#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from . import HTTPRequest, HTTPResponse


@dataclass(kw_only=True)
class HTTPRequestConfiguration:
    """Request-level HTTP configuration.

    :param read_timeout: How long, in seconds, the client will attempt to read the first
        byte over an established, open connection before timing out.
    :param connect_timeout: How long, in seconds, the client will wait to establish a
        connection before timing out.
    """

    read_timeout: float | None = None
    connect_timeout: float | None = None


class HTTPClient(Protocol):
    """An asynchronous HTTP client interface."""

    TIMEOUT_EXCEPTIONS: tuple[type[Exception], ...]
    """Exceptions raised by :py:meth:`send` that indicate a timed out request."""

    async def send(
        self,
        request: "HTTPRequest",
        *,
        request_config: HTTPRequestConfiguration | None = None,
    ) -> "HTTPResponse":
        """Send HTTP request over the wire and return the response.

        :param request: The request including destination URI, fields, payload.
        :param request_config: Configuration specific to this request.
        """
        ...
