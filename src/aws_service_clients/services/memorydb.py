#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Amazon MemoryDB for Redis."""

from ..client import ServiceClient
from ..model import Protocol, ServiceModel, op

_OPERATIONS = (
    "BatchUpdateCluster",
    "CopySnapshot",
    "CreateACL",
    "CreateCluster",
    "CreateParameterGroup",
    "CreateSnapshot",
    "CreateSubnetGroup",
    "CreateUser",
    "DeleteACL",
    "DeleteCluster",
    "DeleteParameterGroup",
    "DeleteSnapshot",
    "DeleteSubnetGroup",
    "DeleteUser",
    "DescribeACLs",
    "DescribeClusters",
    "DescribeEngineVersions",
    "DescribeEvents",
    "DescribeParameterGroups",
    "DescribeParameters",
    "DescribeServiceUpdates",
    "DescribeSnapshots",
    "DescribeSubnetGroups",
    "DescribeUsers",
    "FailoverShard",
    "ListAllowedNodeTypeUpdates",
    "ListTags",
    "ResetParameterGroup",
    "TagResource",
    "UntagResource",
    "UpdateACL",
    "UpdateCluster",
    "UpdateParameterGroup",
    "UpdateSubnetGroup",
    "UpdateUser",
)

SERVICE_MODEL = ServiceModel(
    service_name="MemoryDB",
    endpoint_prefix="memory-db",
    signing_name="memorydb",
    protocol=Protocol.AWS_JSON_1_1,
    api_version="2021-01-01",
    target_prefix="AmazonMemoryDB",
    operations=[op(name) for name in _OPERATIONS],
)


class MemoryDBClient(ServiceClient):
    SERVICE_MODEL = SERVICE_MODEL
