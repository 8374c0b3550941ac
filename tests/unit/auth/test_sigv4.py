#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime
from typing import Any
from urllib.parse import parse_qs

import pytest
from freezegun import freeze_time

from aws_service_clients import URI
from aws_service_clients.auth.sigv4 import SigV4Signer, SigV4SigningProperties
from aws_service_clients.exceptions import SigningError
from aws_service_clients.http import HTTPRequest
from aws_service_clients.identity import AWSCredentialsIdentity

SECRET_KEY = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
ACCESS_KEY = "AKIDEXAMPLE"
SERVICE = "service"
REGION = "us-east-1"

DATE = datetime(year=2015, month=8, day=30, hour=12, minute=36, second=0, tzinfo=UTC)

CREDENTIALS = AWSCredentialsIdentity(
    access_key_id=ACCESS_KEY, secret_access_key=SECRET_KEY
)


def _vanilla_request() -> HTTPRequest:
    return HTTPRequest(
        destination=URI(host="example.amazonaws.com", path="/"), method="GET"
    )


async def test_sign_get_vanilla():
    signer = SigV4Signer()

    signed = await signer.sign(
        request=_vanilla_request(),
        identity=CREDENTIALS,
        properties=SigV4SigningProperties(region=REGION, service=SERVICE, date=DATE),
    )

    assert signed.fields.get_value("x-amz-date") == "20150830T123600Z"
    assert signed.fields.get_value("authorization") == (
        "AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/20150830/us-east-1/service/"
        "aws4_request, SignedHeaders=host;x-amz-date, "
        "Signature=5fa00fa31553b73ebf1942676e86291e8372ff2a2260956d9b8aae1d763fbf31"
    )


@freeze_time("2015-08-30 12:36:00")
async def test_sign_defaults_to_current_time():
    signer = SigV4Signer()

    signed = await signer.sign(
        request=_vanilla_request(),
        identity=CREDENTIALS,
        properties=SigV4SigningProperties(region=REGION, service=SERVICE),
    )

    assert signed.fields.get_value("x-amz-date") == "20150830T123600Z"


async def test_sign_does_not_modify_request():
    request = _vanilla_request()
    signer = SigV4Signer()

    signed = await signer.sign(
        request=request,
        identity=CREDENTIALS,
        properties=SigV4SigningProperties(region=REGION, service=SERVICE, date=DATE),
    )

    assert "authorization" not in request.fields
    assert signed is not request
    assert signed.destination == request.destination
    assert signed.body == request.body


async def test_sign_adds_session_token():
    signer = SigV4Signer()
    identity = AWSCredentialsIdentity(
        access_key_id=ACCESS_KEY, secret_access_key=SECRET_KEY, session_token="token"
    )

    signed = await signer.sign(
        request=_vanilla_request(),
        identity=identity,
        properties=SigV4SigningProperties(region=REGION, service=SERVICE, date=DATE),
    )

    assert signed.fields.get_value("x-amz-security-token") == "token"


async def test_presign():
    signer = SigV4Signer()
    request = HTTPRequest(
        destination=URI(
            host="example.amazonaws.com", path="/jobs/abc", query="scope=x"
        ),
        method="GET",
    )

    uri = await signer.presign(
        request=request,
        identity=CREDENTIALS,
        properties=SigV4SigningProperties(region=REGION, service=SERVICE, date=DATE),
        expires_in=900,
    )

    assert uri.host == "example.amazonaws.com"
    assert uri.path == "/jobs/abc"
    assert uri.query is not None
    query = parse_qs(uri.query)
    assert query["scope"] == ["x"]
    assert query["X-Amz-Algorithm"] == ["AWS4-HMAC-SHA256"]
    assert query["X-Amz-Credential"] == [
        "AKIDEXAMPLE/20150830/us-east-1/service/aws4_request"
    ]
    assert query["X-Amz-Date"] == ["20150830T123600Z"]
    assert query["X-Amz-Expires"] == ["900"]
    assert query["X-Amz-SignedHeaders"] == ["host"]
    assert len(query["X-Amz-Signature"][0]) == 64


async def test_presign_rejects_non_positive_expiration():
    with pytest.raises(SigningError, match="expires_in must be positive"):
        await SigV4Signer().presign(
            request=_vanilla_request(),
            identity=CREDENTIALS,
            properties=SigV4SigningProperties(region=REGION, service=SERVICE),
            expires_in=0,
        )


@pytest.mark.parametrize(
    "properties",
    [
        {"region": "", "service": SERVICE},
        {"region": REGION, "service": ""},
    ],
)
async def test_sign_requires_region_and_service(properties: Any):
    with pytest.raises(SigningError, match="is required for SigV4 auth"):
        await SigV4Signer().sign(
            request=_vanilla_request(), identity=CREDENTIALS, properties=properties
        )


async def test_sign_requires_aws_credentials():
    with pytest.raises(SigningError, match="Invalid identity type"):
        await SigV4Signer().sign(
            request=_vanilla_request(),
            identity=object(),  # type: ignore[arg-type]
            properties=SigV4SigningProperties(region=REGION, service=SERVICE),
        )
