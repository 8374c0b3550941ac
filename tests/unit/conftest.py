#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from aws_service_clients.identity.static import StaticCredentialsResolver
from aws_service_clients.services.batch import BatchClient
from aws_service_clients.testing import MockHTTPClient

_AWS_ENVIRONMENT = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_ACCOUNT_ID",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "AWS_ENDPOINT_URL",
    "AWS_USE_FIPS_ENDPOINT",
    "AWS_USE_DUALSTACK_ENDPOINT",
    "AWS_MAX_ATTEMPTS",
    "AWS_PROFILE",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the caller's AWS environment and shared config files out of tests."""
    for name in _AWS_ENVIRONMENT:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture
def http_client() -> MockHTTPClient:
    return MockHTTPClient()


@pytest.fixture
def executor() -> Iterator[ThreadPoolExecutor]:
    with ThreadPoolExecutor(max_workers=2) as pool:
        yield pool


@pytest.fixture
def client_config(http_client: MockHTTPClient, executor: ThreadPoolExecutor) -> dict:
    return {
        "region": "us-west-2",
        "aws_access_key_id": "fake-access-key",
        "aws_secret_access_key": "fake-secret-key",
        "credentials_resolver": StaticCredentialsResolver(),
        "http_client": http_client,
        "executor": executor,
        "max_attempts": 1,
    }


@pytest.fixture
def batch(client_config: dict) -> Iterator[BatchClient]:
    with BatchClient(**client_config) as client:
        yield client
