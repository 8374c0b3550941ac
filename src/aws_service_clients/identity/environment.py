#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import os
from collections.abc import Mapping

from ..exceptions import IdentityError
from ..interfaces.identity import IdentityResolver
from . import AWSCredentialsIdentity, AWSIdentityProperties


class EnvironmentCredentialsResolver(
    IdentityResolver[AWSCredentialsIdentity, AWSIdentityProperties]
):
    """Resolves AWS Credentials from system environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        """
        :param environ: The environment to read. Defaults to ``os.environ``, read on
        every resolution.
        """
        self._environ = environ

    async def get_identity(
        self, *, properties: AWSIdentityProperties
    ) -> AWSCredentialsIdentity:
        environ = os.environ if self._environ is None else self._environ
        access_key_id = environ.get("AWS_ACCESS_KEY_ID")
        secret_access_key = environ.get("AWS_SECRET_ACCESS_KEY")

        if not access_key_id or not secret_access_key:
            raise IdentityError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY are required"
            )

        return AWSCredentialsIdentity(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=environ.get("AWS_SESSION_TOKEN"),
            account_id=environ.get("AWS_ACCOUNT_ID"),
        )
