#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from typing import Protocol

from .. import URI
from ..exceptions import EndpointResolutionError
from ..interfaces import EndpointResolver
from . import (
    Endpoint,
    EndpointResolverParams,
    StaticEndpointConfig,
    is_valid_host_label,
    resolve_static_uri,
)
from .partitions import partition_for_region

_LOGGER = logging.getLogger(__name__)


class RegionalEndpointConfig(StaticEndpointConfig, Protocol):
    """A config that carries the settings of a regional endpoint."""

    region: str | None
    use_fips_endpoint: bool
    use_dualstack_endpoint: bool


def _split_fips_pseudo_region(region: str) -> tuple[str, bool]:
    """Strip a ``fips-`` prefix or ``-fips`` suffix from a pseudo region."""
    if region.startswith("fips-"):
        return region.removeprefix("fips-"), True
    if region.endswith("-fips"):
        return region.removesuffix("-fips"), True
    return region, False


class StandardRegionalEndpointsResolver(EndpointResolver):
    """Resolves endpoints for services with standard regional endpoints."""

    def __init__(self, endpoint_prefix: str):
        """
        :param endpoint_prefix: The first host label of the service's endpoints, for
        example ``batch``.
        """
        self._endpoint_prefix = endpoint_prefix

    async def resolve_endpoint(self, params: EndpointResolverParams) -> Endpoint:
        if (static_uri := resolve_static_uri(params)) is not None:
            return Endpoint(uri=static_uri)

        config: RegionalEndpointConfig = params.config
        region = config.region
        if not region:
            raise EndpointResolutionError(
                "Unable to resolve endpoint - either endpoint_uri or region are required."
            )

        region, use_fips = _split_fips_pseudo_region(region)
        use_fips = use_fips or config.use_fips_endpoint
        use_dualstack = config.use_dualstack_endpoint

        if not is_valid_host_label(region):
            raise EndpointResolutionError(f"Invalid region: {region}")

        partition = partition_for_region(region)

        if use_dualstack:
            if partition.dual_stack_dns_suffix is None:
                raise EndpointResolutionError(
                    f"DualStack is enabled but partition {partition.name} does not "
                    "support DualStack"
                )
            dns_suffix = partition.dual_stack_dns_suffix
        else:
            dns_suffix = partition.dns_suffix

        prefix = f"{self._endpoint_prefix}-fips" if use_fips else self._endpoint_prefix
        hostname = f"{prefix}.{region}.{dns_suffix}"
        _LOGGER.debug(
            "Resolved %s endpoint in partition %s: %s",
            self._endpoint_prefix,
            partition.name,
            hostname,
        )
        return Endpoint(uri=URI(host=hostname))
