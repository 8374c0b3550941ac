# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from .. import URI, HostType
from ..exceptions import ClientError, EndpointResolutionError
from ..interfaces import EndpointResolver
from ..interfaces import URI as _URI

_HOST_LABEL = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$")


def is_valid_host_label(value: str, allow_subdomains: bool = False) -> bool:
    """Whether the value can be used as a DNS host label.

    :param value: The candidate label.
    :param allow_subdomains: Whether ``.`` separated labels are permitted.
    """
    labels = value.split(".") if allow_subdomains else [value]
    return all(_HOST_LABEL.match(label) for label in labels)


@dataclass(kw_only=True)
class Endpoint:
    """A resolved endpoint."""

    uri: _URI
    """The endpoint URI."""

    headers: Mapping[str, str] = field(default_factory=dict)
    """Headers that must be added to every request sent to the endpoint."""


class StaticEndpointConfig(Protocol):
    """A config that has a static endpoint."""

    endpoint_uri: str | URI | None
    """A static endpoint to use for the request."""


@dataclass(kw_only=True)
class EndpointResolverParams:
    """Parameters passed into an Endpoint Resolver's resolve_endpoint method."""

    service: str
    """The endpoint prefix of the service, for example ``batch``."""

    operation: str
    """The name of the operation to resolve an endpoint for."""

    params: Mapping[str, Any]
    """The request members of the operation invocation."""

    config: Any
    """The client config, typically a :py:class:`..config.ClientConfig`."""

    endpoint_uri: str | URI | None = None
    """An endpoint set on the client itself, which takes precedence over the
    ``endpoint_uri`` of the config."""


def resolve_static_uri(params: EndpointResolverParams) -> _URI | None:
    """Attempt to resolve a static URI from the endpoint resolver params.

    :param params: The params whose ``endpoint_uri`` or config may carry a static
        endpoint.
    """
    config: StaticEndpointConfig = params.config
    static_uri = params.endpoint_uri or config.endpoint_uri
    if static_uri is None:
        return None

    # If it's not a string, it's already a parsed URI so just pass it along.
    if not isinstance(static_uri, str):
        return static_uri

    try:
        return URI.from_string(static_uri)
    except (ClientError, ValueError) as e:
        raise EndpointResolutionError(
            f"Unable to parse hostname from provided URI: {static_uri}"
        ) from e


def apply_host_prefix(uri: _URI, prefix: str | None) -> _URI:
    """Prepend an operation's host prefix, such as ``data.``, to the endpoint host.

    The prefix is not applied when the host already starts with it or when the host
    is an IP address.

    :param uri: The resolved endpoint URI.
    :param prefix: The host prefix of the operation, including its trailing dot.
    :raises EndpointResolutionError: If the prefix is not a valid host label.
    """
    if not prefix:
        return uri

    if not is_valid_host_label(prefix.rstrip("."), allow_subdomains=True):
        raise EndpointResolutionError(f"Invalid host prefix: {prefix}")

    if isinstance(uri, URI) and uri.host_type in (HostType.IPv4, HostType.IPv6):
        return uri

    if uri.host.startswith(prefix):
        return uri

    return URI(
        scheme=uri.scheme,
        username=uri.username,
        password=uri.password,
        host=f"{prefix}{uri.host}",
        port=uri.port,
        path=uri.path,
        query=uri.query,
        fragment=uri.fragment,
    )


class StaticEndpointResolver(EndpointResolver):
    """A basic endpoint resolver that forwards a static URI."""

    def __init__(self, uri: str | URI | None = None) -> None:
        """
        :param uri: The URI to forward. When unset, the ``endpoint_uri`` of the client
        config is used instead.
        """
        self._uri = URI.from_string(uri) if isinstance(uri, str) else uri

    async def resolve_endpoint(self, params: EndpointResolverParams) -> Endpoint:
        static_uri = self._uri or resolve_static_uri(params)
        if static_uri is None:
            raise EndpointResolutionError(
                "Unable to resolve endpoint: endpoint_uri is required"
            )

        return Endpoint(uri=static_uri)
