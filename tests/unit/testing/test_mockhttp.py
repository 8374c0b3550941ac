#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0

import pytest

from aws_service_clients.testing import (
    MockHTTPClient,
    MockHTTPClientError,
    create_test_request,
)


async def test_default_response():
    # Test error when no responses are queued
    mock_client = MockHTTPClient()
    request = create_test_request()

    with pytest.raises(MockHTTPClientError, match="No responses queued"):
        await mock_client.send(request)


async def test_queued_responses_fifo():
    # Test responses are returned in FIFO order
    mock_client = MockHTTPClient()
    mock_client.add_response(status=404, body=b"not found")
    mock_client.add_response(status=500, body=b"server error")

    request = create_test_request()

    response1 = await mock_client.send(request)
    assert response1.status == 404
    assert response1.body == b"not found"

    response2 = await mock_client.send(request)
    assert response2.status == 500
    assert response2.body == b"server error"

    assert mock_client.call_count == 2


async def test_captured_requests():
    # Test all requests are captured for inspection
    mock_client = MockHTTPClient()
    mock_client.add_response()
    mock_client.add_response()

    request1 = create_test_request(
        method="GET",
        host="test.aws.dev",
    )
    request2 = create_test_request(
        method="POST",
        host="test.aws.dev",
        body=b'{"name": "test"}',
    )

    await mock_client.send(request1)
    await mock_client.send(request2)

    captured = mock_client.captured_requests
    assert len(captured) == 2
    assert captured[0].method == "GET"
    assert captured[1].method == "POST"
    assert captured[1].body == b'{"name": "test"}'


async def test_captured_requests_are_snapshots():
    mock_client = MockHTTPClient()
    mock_client.add_response()
    request = create_test_request(headers=[("X-Test", "before")])

    await mock_client.send(request)
    request.fields["X-Test"].set(["after"])

    assert mock_client.captured_requests[0].fields.get_value("X-Test") == "before"


async def test_response_headers():
    # Test response headers are preserved
    mock_client = MockHTTPClient()
    mock_client.add_response(
        status=201,
        headers=[("Content-Type", "application/json"), ("X-Amzn-RequestId", "123")],
        body=b'{"id": 123}',
    )

    response = await mock_client.send(create_test_request())

    assert response.status == 201
    assert response.fields.get_value("content-type") == "application/json"
    assert response.fields.get_value("x-amzn-requestid") == "123"


async def test_queued_errors():
    mock_client = MockHTTPClient()
    mock_client.add_error(TimeoutError("timed out"))
    mock_client.add_response(status=204)

    with pytest.raises(TimeoutError, match="timed out"):
        await mock_client.send(create_test_request())
    response = await mock_client.send(create_test_request())

    assert response.status == 204
    assert mock_client.call_count == 2


def test_create_test_request():
    request = create_test_request(
        method="PUT",
        host="example.com",
        path="/jobs/1",
        query="a=b",
        headers=[("Content-Type", "application/json")],
        body=b"{}",
    )

    assert request.method == "PUT"
    assert request.destination.build() == "https://example.com/jobs/1?a=b"
    assert request.fields.get_value("content-type") == "application/json"
    assert request.body == b"{}"
