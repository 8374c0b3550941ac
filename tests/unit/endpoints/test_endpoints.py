#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass

import pytest

from aws_service_clients import URI
from aws_service_clients.endpoints import (
    EndpointResolverParams,
    StaticEndpointResolver,
    apply_host_prefix,
    is_valid_host_label,
    resolve_static_uri,
)
from aws_service_clients.endpoints.partitions import partition_for_region
from aws_service_clients.endpoints.standard_regional import (
    StandardRegionalEndpointsResolver,
)
from aws_service_clients.exceptions import EndpointResolutionError


@dataclass
class EndpointConfig:
    endpoint_uri: str | URI | None = None
    region: str | None = None
    use_fips_endpoint: bool = False
    use_dualstack_endpoint: bool = False

    @classmethod
    def params(cls, **kwargs) -> EndpointResolverParams:
        return EndpointResolverParams(
            service="service", operation="Operation", params={}, config=cls(**kwargs)
        )


async def test_resolve_endpoint_with_valid_sdk_endpoint_string():
    resolver = StandardRegionalEndpointsResolver(endpoint_prefix="service")
    params = EndpointConfig.params(endpoint_uri="https://example.com/path?query=123")

    endpoint = await resolver.resolve_endpoint(params)

    assert endpoint.uri.host == "example.com"
    assert endpoint.uri.path == "/path"
    assert endpoint.uri.scheme == "https"
    assert endpoint.uri.query == "query=123"


async def test_resolve_endpoint_with_sdk_endpoint_uri():
    resolver = StandardRegionalEndpointsResolver(endpoint_prefix="service")
    parsed_uri = URI(
        host="example.com", path="/path", scheme="https", query="query=123", port=443
    )
    params = EndpointConfig.params(endpoint_uri=parsed_uri)

    endpoint = await resolver.resolve_endpoint(params)

    assert endpoint.uri == parsed_uri


async def test_resolve_endpoint_with_invalid_sdk_endpoint():
    resolver = StandardRegionalEndpointsResolver(endpoint_prefix="service")
    params = EndpointConfig.params(endpoint_uri="https://")

    with pytest.raises(EndpointResolutionError):
        await resolver.resolve_endpoint(params)


@pytest.mark.parametrize(
    "region, fips, dualstack, expected",
    [
        ("us-west-2", False, False, "service.us-west-2.amazonaws.com"),
        ("us-west-2", True, False, "service-fips.us-west-2.amazonaws.com"),
        ("us-west-2", False, True, "service.us-west-2.api.aws"),
        ("us-west-2", True, True, "service-fips.us-west-2.api.aws"),
        ("fips-us-east-1", False, False, "service-fips.us-east-1.amazonaws.com"),
        ("us-east-1-fips", False, False, "service-fips.us-east-1.amazonaws.com"),
        ("cn-north-1", False, False, "service.cn-north-1.amazonaws.com.cn"),
        ("cn-north-1", False, True, "service.cn-north-1.api.amazonwebservices.com.cn"),
        ("us-gov-west-1", False, False, "service.us-gov-west-1.amazonaws.com"),
        ("us-iso-east-1", False, False, "service.us-iso-east-1.c2s.ic.gov"),
        ("us-isob-east-1", False, False, "service.us-isob-east-1.sc2s.sgov.gov"),
    ],
)
async def test_resolve_endpoint_with_region(
    region: str, fips: bool, dualstack: bool, expected: str
):
    resolver = StandardRegionalEndpointsResolver(endpoint_prefix="service")
    params = EndpointConfig.params(
        region=region, use_fips_endpoint=fips, use_dualstack_endpoint=dualstack
    )

    endpoint = await resolver.resolve_endpoint(params)

    assert endpoint.uri == URI(host=expected)


async def test_resolve_endpoint_prefers_endpoint_uri_over_region():
    resolver = StandardRegionalEndpointsResolver(endpoint_prefix="service")
    params = EndpointConfig.params(
        endpoint_uri="http://localhost:4566", region="us-west-2"
    )

    endpoint = await resolver.resolve_endpoint(params)

    assert endpoint.uri == URI(scheme="http", host="localhost", port=4566)


async def test_resolve_endpoint_without_region_or_uri():
    resolver = StandardRegionalEndpointsResolver(endpoint_prefix="service")

    with pytest.raises(EndpointResolutionError, match="endpoint_uri or region"):
        await resolver.resolve_endpoint(EndpointConfig.params())


@pytest.mark.parametrize("region", ["us_west_2", "us-west-2.evil.com", "-us-west-2"])
async def test_resolve_endpoint_with_invalid_region(region: str):
    resolver = StandardRegionalEndpointsResolver(endpoint_prefix="service")

    with pytest.raises(EndpointResolutionError, match="Invalid region"):
        await resolver.resolve_endpoint(EndpointConfig.params(region=region))


async def test_resolve_endpoint_dualstack_unsupported():
    resolver = StandardRegionalEndpointsResolver(endpoint_prefix="service")
    params = EndpointConfig.params(region="us-iso-east-1", use_dualstack_endpoint=True)

    with pytest.raises(EndpointResolutionError, match="does not support DualStack"):
        await resolver.resolve_endpoint(params)


@pytest.mark.parametrize(
    "region, partition",
    [
        ("us-east-1", "aws"),
        ("eu-central-1", "aws"),
        ("cn-northwest-1", "aws-cn"),
        ("us-gov-east-1", "aws-us-gov"),
        ("us-iso-west-1", "aws-iso"),
        ("us-isob-east-1", "aws-iso-b"),
        ("local", "aws"),
    ],
)
def test_partition_for_region(region: str, partition: str):
    assert partition_for_region(region).name == partition


async def test_static_resolver_forwards_uri():
    resolver = StaticEndpointResolver("https://example.com:8443/base")

    endpoint = await resolver.resolve_endpoint(EndpointConfig.params())

    assert endpoint.uri == URI(host="example.com", port=8443, path="/base")


async def test_static_resolver_reads_config():
    resolver = StaticEndpointResolver()
    params = EndpointConfig.params(endpoint_uri="https://example.com")

    endpoint = await resolver.resolve_endpoint(params)

    assert endpoint.uri == URI(host="example.com")


async def test_static_resolver_requires_uri():
    with pytest.raises(EndpointResolutionError, match="endpoint_uri is required"):
        await StaticEndpointResolver().resolve_endpoint(EndpointConfig.params())


def test_resolve_static_uri_without_uri():
    assert resolve_static_uri(EndpointConfig.params()) is None


@pytest.mark.parametrize(
    "uri, prefix, expected",
    [
        (URI(host="iotsitewise.us-west-2.amazonaws.com"), "data.", "data.iotsitewise.us-west-2.amazonaws.com"),
        (URI(host="iotsitewise.us-west-2.amazonaws.com"), None, "iotsitewise.us-west-2.amazonaws.com"),
        (URI(host="data.example.com"), "data.", "data.example.com"),
        (URI(host="example.com"), "api.v2.", "api.v2.example.com"),
        (URI(host="127.0.0.1"), "data.", "127.0.0.1"),
        (URI(host="::1"), "data.", "::1"),
    ],
)
def test_apply_host_prefix(uri: URI, prefix: str | None, expected: str):
    assert apply_host_prefix(uri, prefix).host == expected


def test_apply_host_prefix_keeps_other_components():
    uri = URI(scheme="http", host="localhost", port=4566, path="/base")
    assert apply_host_prefix(uri, "api.") == URI(
        scheme="http", host="api.localhost", port=4566, path="/base"
    )


@pytest.mark.parametrize("prefix", ["bad_prefix.", "-api.", ".", "a..b."])
def test_apply_host_prefix_rejects_invalid_prefix(prefix: str):
    with pytest.raises(EndpointResolutionError, match="Invalid host prefix"):
        apply_host_prefix(URI(host="example.com"), prefix)


@pytest.mark.parametrize(
    "value, allow_subdomains, expected",
    [
        ("us-west-2", False, True),
        ("a", False, True),
        ("a.b", False, False),
        ("a.b", True, True),
        ("", False, False),
        ("a" * 63, False, True),
        ("a" * 64, False, False),
        ("-a", False, False),
        ("a-", False, False),
    ],
)
def test_is_valid_host_label(value: str, allow_subdomains: bool, expected: bool):
    assert is_valid_host_label(value, allow_subdomains) is expected


async def test_params_endpoint_uri_takes_precedence_over_config():
    resolver = StandardRegionalEndpointsResolver(endpoint_prefix="service")
    params = EndpointConfig.params(
        endpoint_uri="https://config.example.com", region="us-west-2"
    )
    params.endpoint_uri = URI(scheme="http", host="localhost", port=4566)

    endpoint = await resolver.resolve_endpoint(params)

    assert endpoint.uri == URI(scheme="http", host="localhost", port=4566)
