#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""AWS Batch."""

from ..client import ServiceClient
from ..model import Protocol, ServiceModel, op, query

_TAGS_URI = "/v1/tags/{ResourceArn}"

SERVICE_MODEL = ServiceModel(
    service_name="Batch",
    endpoint_prefix="batch",
    protocol=Protocol.REST_JSON,
    api_version="2016-08-10",
    operations=[
        op("CancelJob", "POST", "/v1/canceljob"),
        op("CreateComputeEnvironment", "POST", "/v1/createcomputeenvironment"),
        op("CreateJobQueue", "POST", "/v1/createjobqueue"),
        op("CreateSchedulingPolicy", "POST", "/v1/createschedulingpolicy"),
        op("DeleteComputeEnvironment", "POST", "/v1/deletecomputeenvironment"),
        op("DeleteJobQueue", "POST", "/v1/deletejobqueue"),
        op("DeleteSchedulingPolicy", "POST", "/v1/deleteschedulingpolicy"),
        op("DeregisterJobDefinition", "POST", "/v1/deregisterjobdefinition"),
        op("DescribeComputeEnvironments", "POST", "/v1/describecomputeenvironments"),
        op("DescribeJobDefinitions", "POST", "/v1/describejobdefinitions"),
        op("DescribeJobQueues", "POST", "/v1/describejobqueues"),
        op("DescribeJobs", "POST", "/v1/describejobs"),
        op("DescribeSchedulingPolicies", "POST", "/v1/describeschedulingpolicies"),
        op("ListJobs", "POST", "/v1/listjobs"),
        op("ListSchedulingPolicies", "POST", "/v1/listschedulingpolicies"),
        op("ListTagsForResource", "GET", _TAGS_URI, "ResourceArn"),
        op("RegisterJobDefinition", "POST", "/v1/registerjobdefinition"),
        op("SubmitJob", "POST", "/v1/submitjob"),
        op("TagResource", "POST", _TAGS_URI, "ResourceArn"),
        op("TerminateJob", "POST", "/v1/terminatejob"),
        op(
            "UntagResource",
            "DELETE",
            _TAGS_URI,
            "ResourceArn",
            "TagKeys",
            bindings=[query("TagKeys", "tagKeys")],
        ),
        op("UpdateComputeEnvironment", "POST", "/v1/updatecomputeenvironment"),
        op("UpdateJobQueue", "POST", "/v1/updatejobqueue"),
        op("UpdateSchedulingPolicy", "POST", "/v1/updateschedulingpolicy"),
    ],
)


class BatchClient(ServiceClient):
    """Client for AWS Batch.

    Runs batch computing workloads on compute environments backed by EC2, Fargate
    or EKS.
    """

    SERVICE_MODEL = SERVICE_MODEL
