#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Final

from ..exceptions import IdentityError
from ..interfaces.identity import Identity, IdentityResolver
from . import AWSCredentialsIdentity, AWSCredentialsResolver, AWSIdentityProperties
from .environment import EnvironmentCredentialsResolver
from .static import StaticCredentialsResolver

logger: Final = logging.getLogger(__name__)


class ChainedIdentityResolver[I: Identity, IP: Mapping[str, Any]](
    IdentityResolver[I, IP]
):
    """Attempts to resolve an identity by checking a sequence of sub-resolvers.

    If a nested resolver raises an :py:class:`IdentityError`, the next resolver in the
    chain will be attempted. A resolved identity is cached until it expires.
    """

    def __init__(self, resolvers: Sequence[IdentityResolver[I, IP]]) -> None:
        """Construct a ChainedIdentityResolver.

        :param resolvers: The sequence of resolvers to resolve identity from.
        """
        self._resolvers = resolvers
        self._cached: I | None = None

    async def get_identity(self, *, properties: IP) -> I:
        if self._cached is None or self._cached.is_expired:
            self._cached = await self._get_identity(properties=properties)
        return self._cached

    async def _get_identity(self, *, properties: IP) -> I:
        logger.debug("Attempting to resolve identity from resolver chain.")
        for resolver in self._resolvers:
            try:
                logger.debug("Attempting to resolve identity from %s.", type(resolver))
                return await resolver.get_identity(properties=properties)
            except IdentityError as e:
                logger.debug(
                    "Failed to resolve identity from %s: %s", type(resolver), e
                )

        raise IdentityError("Failed to resolve identity from resolver chain.")


def create_default_chain() -> AWSCredentialsResolver:
    """Creates the default AWS credential provider chain.

    Credentials set on the client config, including those read from the shared
    credentials file, take precedence over the environment.
    """
    return ChainedIdentityResolver[AWSCredentialsIdentity, AWSIdentityProperties](
        resolvers=(
            StaticCredentialsResolver(),
            EnvironmentCredentialsResolver(),
        )
    )
