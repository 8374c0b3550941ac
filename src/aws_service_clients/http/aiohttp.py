#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import asyncio
from itertools import chain
from typing import TYPE_CHECKING, Any
from urllib.parse import urlunparse

if TYPE_CHECKING:
    # pyright doesn't like optional imports. This is reasonable because if we use these
    # in type hints then they'd result in runtime errors.
    import aiohttp

try:
    import aiohttp  # noqa: F811
    from yarl import URL

    HAS_AIOHTTP = True
except ImportError:
    HAS_AIOHTTP = False  # type: ignore

from .. import URI
from ..exceptions import MissingDependencyError
from . import Field, Fields, HTTPRequest, HTTPResponse
from .interfaces import HTTPClient, HTTPRequestConfiguration


def _assert_aiohttp() -> None:
    if not HAS_AIOHTTP:
        raise MissingDependencyError(
            "Attempted to use aiohttp component, but aiohttp is not installed."
        )


class AIOHTTPClient(HTTPClient):
    """Implementation of :py:class:`.interfaces.HTTPClient` using aiohttp.

    Blocking operations run each call on a fresh event loop, so unless a session is
    supplied a new ``aiohttp.ClientSession`` is opened for every request and closed
    when the response has been read.
    """

    TIMEOUT_EXCEPTIONS = (asyncio.TimeoutError, TimeoutError)

    def __init__(self, *, _session: "aiohttp.ClientSession | None" = None) -> None:
        _assert_aiohttp()
        self._session = _session

    async def send(
        self,
        request: HTTPRequest,
        *,
        request_config: HTTPRequestConfiguration | None = None,
    ) -> HTTPResponse:
        """Send HTTP request using aiohttp client.

        :param request: The request including destination URI, fields, payload.
        :param request_config: Configuration specific to this request.
        """
        request_config = request_config or HTTPRequestConfiguration()
        timeout = aiohttp.ClientTimeout(
            sock_connect=request_config.connect_timeout,
            sock_read=request_config.read_timeout,
        )

        headers_list = list(
            chain.from_iterable(fld.as_tuples() for fld in request.fields)
        )

        if self._session is not None:
            return await self._send(self._session, request, headers_list, timeout)

        async with aiohttp.ClientSession() as session:
            return await self._send(session, request, headers_list, timeout)

    async def _send(
        self,
        session: "aiohttp.ClientSession",
        request: HTTPRequest,
        headers_list: list[tuple[str, str]],
        timeout: "aiohttp.ClientTimeout",
    ) -> HTTPResponse:
        async with session.request(
            method=request.method,
            url=URL(self._serialize_uri(request.destination), encoded=True),
            headers=headers_list,
            data=request.body or None,
            timeout=timeout,
            allow_redirects=False,
        ) as resp:
            return await self._marshal_response(resp)

    def _serialize_uri(self, uri: URI) -> str:
        """Serialize the URI with its path and query already percent-encoded."""
        components = (uri.scheme, uri.netloc, uri.path or "/", "", uri.query or "", "")
        return urlunparse(components)

    async def _marshal_response(
        self, aiohttp_resp: "aiohttp.ClientResponse"
    ) -> HTTPResponse:
        """Convert a ``aiohttp.ClientResponse`` to an ``HTTPResponse``"""
        headers = Fields()
        for header_name, header_val in aiohttp_resp.headers.items():
            try:
                headers[header_name].add(header_val)
            except KeyError:
                headers[header_name] = Field(name=header_name, values=[header_val])

        return HTTPResponse(
            status=aiohttp_resp.status,
            fields=headers,
            body=await aiohttp_resp.read(),
            reason=aiohttp_resp.reason,
        )

    def __deepcopy__(self, memo: Any) -> "AIOHTTPClient":
        return self
