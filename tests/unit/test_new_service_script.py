#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import importlib.util
from pathlib import Path

import pytest

from aws_service_clients.services.chime_sdk_messaging import SERVICE_MODEL as CHIME

_SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "codegen" / "new-service.py"
_spec = importlib.util.spec_from_file_location("new_service", _SCRIPT)
assert _spec is not None and _spec.loader is not None
new_service = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(new_service)

CLIENT_SOURCE = """\
const char* ExampleClient::SERVICE_NAME = "example";
const char* ExampleClient::ALLOCATION_TAG = "ExampleClient";

ChannelFlowCallbackOutcome ExampleClient::ChannelFlowCallback(const ChannelFlowCallbackRequest& request) const
{
  AWS_OPERATION_CHECK_PTR(m_endpointProvider, ChannelFlowCallback, CoreErrors, CoreErrors::ENDPOINT_RESOLUTION_FAILURE);
  if (!request.ChannelArnHasBeenSet())
  {
    AWS_LOGSTREAM_ERROR("ChannelFlowCallback", "Required field: ChannelArn, is not set");
    return ChannelFlowCallbackOutcome(Aws::Client::AWSError<ExampleErrors>(ExampleErrors::MISSING_PARAMETER, "MISSING_PARAMETER", "Missing required field [ChannelArn]", false));
  }
  ResolveEndpointOutcome endpointResolutionOutcome = m_endpointProvider->ResolveEndpoint(request.GetEndpointContextParams());
  Aws::StringStream ss;
  endpointResolutionOutcome.GetResult().AddPathSegments("/channels/");
  endpointResolutionOutcome.GetResult().AddPathSegment(request.GetChannelArn());
  ss.str("?operation=channel-flow-callback");
  endpointResolutionOutcome.GetResult().SetQueryString(ss.str());
  return ChannelFlowCallbackOutcome(MakeRequest(request, endpointResolutionOutcome.GetResult(), Aws::Http::HttpMethod::HTTP_POST, Aws::Auth::SIGV4_SIGNER));
}

ChannelFlowCallbackOutcomeCallable ExampleClient::ChannelFlowCallbackCallable(const ChannelFlowCallbackRequest& request) const
{
  return MakeCallableOperation(ALLOCATION_TAG, &ExampleClient::ChannelFlowCallback, this, request, m_executor.get());
}

GetResourcePolicyOutcome ExampleClient::GetResourcePolicy(const GetResourcePolicyRequest& request) const
{
  if (!request.ResourceTypeHasBeenSet())
  {
    return GetResourcePolicyOutcome(Aws::Client::AWSError<ExampleErrors>(ExampleErrors::MISSING_PARAMETER, "MISSING_PARAMETER", "Missing required field [ResourceType]", false));
  }
  if (!request.ResourceIdHasBeenSet())
  {
    return GetResourcePolicyOutcome(Aws::Client::AWSError<ExampleErrors>(ExampleErrors::MISSING_PARAMETER, "MISSING_PARAMETER", "Missing required field [ResourceId]", false));
  }
  ResolveEndpointOutcome endpointResolutionOutcome = m_endpointProvider->ResolveEndpoint(request.GetEndpointContextParams());
  auto addPrefixErr = endpointResolutionOutcome.GetResult().AddPrefixIfMissing("api.");
  endpointResolutionOutcome.GetResult().AddPathSegments("/v1/policies/");
  endpointResolutionOutcome.GetResult().AddPathSegment(ResourceTypeMapper::GetNameForResourceType(request.GetResourceType()));
  endpointResolutionOutcome.GetResult().AddPathSegment(request.GetResourceId());
  return GetResourcePolicyOutcome(MakeRequest(request, endpointResolutionOutcome.GetResult(), Aws::Http::HttpMethod::HTTP_GET, Aws::Auth::SIGV4_SIGNER));
}

AssumeRoleWithTokenOutcome ExampleClient::AssumeRoleWithToken(const AssumeRoleWithTokenRequest& request) const
{
  ResolveEndpointOutcome endpointResolutionOutcome = m_endpointProvider->ResolveEndpoint(request.GetEndpointContextParams());
  return AssumeRoleWithTokenOutcome(MakeRequest(request, endpointResolutionOutcome.GetResult(), Aws::Http::HttpMethod::HTTP_POST, Aws::Auth::NULL_SIGNER));
}

DeleteQueueOutcome ExampleClient::DeleteQueue(const DeleteQueueRequest& request) const
{
  return DeleteQueueOutcome(MakeRequest(request.GetQueueUrl(), request, Aws::Http::HttpMethod::HTTP_POST));
}

CreateClusterOutcome ExampleClient::CreateCluster(const CreateClusterRequest& request) const
{
  ResolveEndpointOutcome endpointResolutionOutcome = m_endpointProvider->ResolveEndpoint(request.GetEndpointContextParams());
  return CreateClusterOutcome(MakeRequest(request, endpointResolutionOutcome.GetResult(), Aws::Http::HttpMethod::HTTP_POST, Aws::Auth::SIGV4_SIGNER));
}
"""


@pytest.fixture
def client_source():
    return new_service.parse_client_source(CLIENT_SOURCE)


def test_parse_client_source(client_source):
    assert client_source.class_name == "ExampleClient"
    assert client_source.signing_name == "example"
    assert [row.name for row in client_source.operations] == [
        "AssumeRoleWithToken",
        "ChannelFlowCallback",
        "CreateCluster",
        "GetResourcePolicy",
    ]


def test_parse_operation_with_query_literal(client_source):
    row = client_source.operations[1]
    assert row.http_method == "POST"
    assert row.request_uri == "/channels/{ChannelArn}?operation=channel-flow-callback"
    assert row.required == ["ChannelArn"]
    assert row.host_prefix is None
    assert row.signed


def test_parsed_row_matches_shipped_table(client_source):
    row = client_source.operations[1]
    shipped = CHIME.operation(row.name)
    assert shipped.http_method == row.http_method
    assert shipped.request_uri == row.request_uri
    assert list(shipped.required) == row.required


def test_parse_operation_with_enum_label_and_host_prefix(client_source):
    row = client_source.operations[3]
    assert row.http_method == "GET"
    assert row.request_uri == "/v1/policies/{ResourceType}/{ResourceId}"
    assert row.required == ["ResourceType", "ResourceId"]
    assert row.host_prefix == "api."


def test_parse_unsigned_operation(client_source):
    row = client_source.operations[0]
    assert row.request_uri == "/"
    assert not row.signed


@pytest.mark.parametrize(
    "body, expected",
    [
        ('AddPathSegments("/channels");', "/channels"),
        ('AddPathSegments("/tags/");', "/tags/"),
        ('AddPathSegments("/");', "/"),
        (
            'AddPathSegments("/tags/");\nAddPathSegment(request.GetResourceArn());',
            "/tags/{ResourceArn}",
        ),
        ("", "/"),
    ],
)
def test_parse_request_uri(body: str, expected: str):
    assert new_service.parse_request_uri(body) == expected


def test_parse_client_source_requires_service_name():
    with pytest.raises(ValueError, match="SERVICE_NAME"):
        new_service.parse_client_source("")


def test_parse_client_source_requires_operations():
    with pytest.raises(ValueError, match="No operations"):
        new_service.parse_client_source(
            'const char* ExampleClient::SERVICE_NAME = "example";\n'
        )


@pytest.mark.parametrize(
    "row, expected",
    [
        (new_service.OperationRow("CreateCluster"), '        op("CreateCluster"),'),
        (
            new_service.OperationRow("ListClusters", "GET"),
            '        op("ListClusters", "GET"),',
        ),
        (
            new_service.OperationRow(
                "GetJob", "GET", "/jobs/{Id}", ["Id"], host_prefix="api."
            ),
            '        op("GetJob", "GET", "/jobs/{Id}", "Id", host_prefix="api."),',
        ),
        (
            new_service.OperationRow("AssumeRole", signed=False),
            '        op("AssumeRole", signed=False),',
        ),
    ],
)
def test_render_row(row, expected: str):
    assert row.render() == expected


def test_render_long_row_wraps():
    row = new_service.OperationRow(
        "ChannelFlowCallback",
        "POST",
        "/channels/{ChannelArn}?operation=channel-flow-callback",
        ["ChannelArn"],
    )
    assert row.render() == (
        "        op(\n"
        '            "ChannelFlowCallback",\n'
        '            "POST",\n'
        '            "/channels/{ChannelArn}?operation=channel-flow-callback",\n'
        '            "ChannelArn",\n'
        "        ),"
    )


def test_render_module(client_source):
    module = new_service.render_module(
        client_source,
        service_name="Example",
        endpoint_prefix="example-api",
        protocol="restJson1",
        api_version="2024-01-01",
    )

    compile(module, "example.py", "exec")
    assert module.startswith(
        "#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.\n"
    )
    assert '    endpoint_prefix="example-api",\n' in module
    assert '    signing_name="example",\n' in module
    assert "    protocol=Protocol.REST_JSON,\n" in module
    assert "target_prefix" not in module
    assert '        op("CreateCluster"),\n' in module
    assert module.endswith(
        "class ExampleClient(ServiceClient):\n    SERVICE_MODEL = SERVICE_MODEL\n"
    )


def test_render_module_for_json_service(client_source):
    module = new_service.render_module(
        client_source,
        service_name="Example",
        endpoint_prefix="example",
        protocol="awsJson1_1",
        api_version="2024-01-01",
        target_prefix="Example_20240101",
    )

    assert "signing_name" not in module
    assert "    protocol=Protocol.AWS_JSON_1_1,\n" in module
    assert '    target_prefix="Example_20240101",\n' in module
