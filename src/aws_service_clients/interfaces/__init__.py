# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..endpoints import EndpointResolverParams


class URI(Protocol):
    """Universal Resource Identifier, target location for a request."""

    scheme: str
    """For example ``http`` or ``https``."""

    username: str | None
    """Username part of the userinfo URI component."""

    password: str | None
    """Password part of the userinfo URI component."""

    host: str
    """The hostname, for example ``amazonaws.com``."""

    port: int | None
    """An explicit port number."""

    path: str | None
    """Path component of the URI."""

    query: str | None
    """Query component of the URI as string."""

    fragment: str | None
    """Part of the URI specification, but may not be transmitted by a client."""

    def build(self) -> str:
        """Construct URI string representation.

        Returns a string of the form
        ``{scheme}://{username}:{password}@{host}:{port}{path}?{query}#{fragment}``
        """
        ...

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{username}:{password}@{host}:{port}``"""
        ...


class Endpoint(Protocol):
    """A resolved endpoint."""

    uri: URI
    """The endpoint URI."""

    headers: Mapping[str, str]
    """Headers that must be added to every request sent to the endpoint."""


class EndpointResolver(Protocol):
    """Resolves an operation's endpoint based on the provided parameters."""

    async def resolve_endpoint(self, params: "EndpointResolverParams") -> Endpoint:
        """Resolve an endpoint from the supplied parameters.

        :param params: The parameters available to resolve the endpoint.
        :raises EndpointResolutionError: If no endpoint can be determined.
        """
        ...
