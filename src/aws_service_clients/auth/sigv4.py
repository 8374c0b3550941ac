#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import asyncio
import logging
from datetime import UTC, datetime
from io import BytesIO
from typing import TYPE_CHECKING, NotRequired, Required, TypedDict

if TYPE_CHECKING:
    from awscrt import auth as crt_auth
    from awscrt import http as crt_http

try:
    from awscrt import auth as crt_auth  # noqa: F811
    from awscrt import http as crt_http  # noqa: F811

    HAS_CRT = True
except ImportError:
    HAS_CRT = False  # type: ignore

from .. import URI
from ..exceptions import MissingDependencyError, SigningError
from ..http import HTTPRequest, tuples_to_fields
from ..identity import AWSCredentialsIdentity

_LOGGER = logging.getLogger(__name__)

DEFAULT_PRESIGN_EXPIRATION = 3600
"""Lifetime of a presigned URL, in seconds, when none is requested."""


class SigV4SigningProperties(TypedDict):
    region: Required[str]
    service: Required[str]
    date: NotRequired[datetime]


def _assert_crt() -> None:
    if not HAS_CRT:
        raise MissingDependencyError(
            "Attempted to use SigV4 signing, but awscrt is not installed."
        )


class SigV4Signer:
    """Signs HTTP requests with AWS Signature Version 4 using ``awscrt``."""

    def __init__(self) -> None:
        _assert_crt()

    async def sign(
        self,
        *,
        request: HTTPRequest,
        identity: AWSCredentialsIdentity,
        properties: SigV4SigningProperties,
    ) -> HTTPRequest:
        """Sign a request using the ``Authorization`` header.

        :param request: The request to sign. It is not modified.
        :param identity: The credentials to sign with.
        :param properties: The region and service the signature is scoped to.
        :returns: A copy of the request carrying the signature headers.
        """
        config = self._signing_config(
            identity=identity,
            properties=properties,
            signature_type=crt_auth.AwsSignatureType.HTTP_REQUEST_HEADERS,
        )
        signed = await self._sign_crt_request(self._to_crt_request(request), config)
        return HTTPRequest(
            destination=request.destination,
            method=request.method,
            fields=tuples_to_fields(signed.headers),
            body=request.body,
        )

    async def presign(
        self,
        *,
        request: HTTPRequest,
        identity: AWSCredentialsIdentity,
        properties: SigV4SigningProperties,
        expires_in: int = DEFAULT_PRESIGN_EXPIRATION,
    ) -> URI:
        """Sign a request by adding the signature to its query string.

        :param request: The request to presign.
        :param identity: The credentials to sign with.
        :param properties: The region and service the signature is scoped to.
        :param expires_in: How long, in seconds, the URL remains valid.
        :returns: The destination of the request with the signature query parameters.
        """
        if expires_in <= 0:
            raise SigningError(f"expires_in must be positive, got {expires_in}")

        config = self._signing_config(
            identity=identity,
            properties=properties,
            signature_type=crt_auth.AwsSignatureType.HTTP_REQUEST_QUERY_PARAMS,
            expires_in=expires_in,
        )
        signed = await self._sign_crt_request(self._to_crt_request(request), config)
        path, _, query = signed.path.partition("?")
        destination = request.destination
        return URI(
            scheme=destination.scheme,
            host=destination.host,
            port=destination.port,
            path=path,
            query=query or None,
        )

    def _signing_config(
        self,
        *,
        identity: AWSCredentialsIdentity,
        properties: SigV4SigningProperties,
        signature_type: "crt_auth.AwsSignatureType",
        expires_in: int | None = None,
    ) -> "crt_auth.AwsSigningConfig":
        if not isinstance(identity, AWSCredentialsIdentity):
            raise SigningError(
                "Invalid identity type. Expected AWSCredentialsIdentity, "
                f"but received {type(identity)}."
            )
        for key in ("region", "service"):
            if not properties.get(key):
                raise SigningError(
                    f"The signing property {key!r} is required for SigV4 auth."
                )

        credentials_provider = crt_auth.AwsCredentialsProvider.new_static(
            access_key_id=identity.access_key_id,
            secret_access_key=identity.secret_access_key,
            session_token=identity.session_token,
        )
        return crt_auth.AwsSigningConfig(
            algorithm=crt_auth.AwsSigningAlgorithm.V4,
            signature_type=signature_type,
            credentials_provider=credentials_provider,
            region=properties["region"],
            service=properties["service"],
            date=properties.get("date") or datetime.now(UTC),
            expiration_in_seconds=expires_in,
        )

    def _to_crt_request(self, request: HTTPRequest) -> "crt_http.HttpRequest":
        destination = request.destination
        path = destination.path or "/"
        if destination.query:
            path = f"{path}?{destination.query}"

        headers = crt_http.HttpHeaders(
            [(name, value) for fld in request.fields for name, value in fld.as_tuples()]
        )
        if headers.get("host") is None:
            host = destination.netloc.rpartition("@")[2]
            headers.add("Host", host)

        return crt_http.HttpRequest(
            method=request.method,
            path=path,
            headers=headers,
            body_stream=BytesIO(request.body) if request.body else None,
        )

    async def _sign_crt_request(
        self,
        crt_request: "crt_http.HttpRequest",
        config: "crt_auth.AwsSigningConfig",
    ) -> "crt_http.HttpRequest":
        _LOGGER.debug(
            "Signing %s %s for service %s in %s",
            crt_request.method,
            crt_request.path,
            config.service,
            config.region,
        )
        try:
            return await asyncio.wrap_future(
                crt_auth.aws_sign_request(crt_request, config)
            )
        except Exception as e:
            raise SigningError(f"Failed to sign request: {e}") from e
