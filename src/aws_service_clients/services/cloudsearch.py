#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Amazon CloudSearch configuration service."""

from ..client import ServiceClient
from ..model import Protocol, ServiceModel, op

_OPERATIONS = (
    "BuildSuggesters",
    "CreateDomain",
    "DefineAnalysisScheme",
    "DefineExpression",
    "DefineIndexField",
    "DefineSuggester",
    "DeleteAnalysisScheme",
    "DeleteDomain",
    "DeleteExpression",
    "DeleteIndexField",
    "DeleteSuggester",
    "DescribeAnalysisSchemes",
    "DescribeAvailabilityOptions",
    "DescribeDomainEndpointOptions",
    "DescribeDomains",
    "DescribeExpressions",
    "DescribeIndexFields",
    "DescribeScalingParameters",
    "DescribeServiceAccessPolicies",
    "DescribeSuggesters",
    "IndexDocuments",
    "ListDomainNames",
    "UpdateAvailabilityOptions",
    "UpdateDomainEndpointOptions",
    "UpdateScalingParameters",
    "UpdateServiceAccessPolicies",
)

# Every query protocol operation is a form POST to "/".
SERVICE_MODEL = ServiceModel(
    service_name="CloudSearch",
    endpoint_prefix="cloudsearch",
    protocol=Protocol.AWS_QUERY,
    api_version="2013-01-01",
    operations=[op(name) for name in _OPERATIONS],
)


class CloudSearchClient(ServiceClient):
    SERVICE_MODEL = SERVICE_MODEL
