# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Test doubles for exercising service clients without network access."""

from .mockhttp import MockHTTPClient, MockHTTPClientError
from .utils import create_test_request

__all__ = (
    "MockHTTPClient",
    "MockHTTPClientError",
    "create_test_request",
)
