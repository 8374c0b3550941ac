#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""AWS Elemental MediaConvert."""

from ..client import ServiceClient
from ..model import Protocol, ServiceModel, op, query

_BASE = "/2017-08-29"
_PAGING = (query("NextToken", "nextToken"), query("MaxResults", "maxResults"))
_LIST = (*_PAGING, query("ListBy", "listBy"), query("Order", "order"))

SERVICE_MODEL = ServiceModel(
    service_name="MediaConvert",
    endpoint_prefix="mediaconvert",
    protocol=Protocol.REST_JSON,
    api_version="2017-08-29",
    operations=[
        op("AssociateCertificate", "POST", f"{_BASE}/certificates"),
        op("CancelJob", "DELETE", f"{_BASE}/jobs/{{Id}}", "Id"),
        op("CreateJob", "POST", f"{_BASE}/jobs"),
        op("CreateJobTemplate", "POST", f"{_BASE}/jobTemplates"),
        op("CreatePreset", "POST", f"{_BASE}/presets"),
        op("CreateQueue", "POST", f"{_BASE}/queues"),
        op("DeleteJobTemplate", "DELETE", f"{_BASE}/jobTemplates/{{Name}}", "Name"),
        op("DeletePolicy", "DELETE", f"{_BASE}/policy"),
        op("DeletePreset", "DELETE", f"{_BASE}/presets/{{Name}}", "Name"),
        op("DeleteQueue", "DELETE", f"{_BASE}/queues/{{Name}}", "Name"),
        op("DescribeEndpoints", "POST", f"{_BASE}/endpoints"),
        op("DisassociateCertificate", "DELETE", f"{_BASE}/certificates/{{Arn}}", "Arn"),
        op("GetJob", "GET", f"{_BASE}/jobs/{{Id}}", "Id"),
        op("GetJobTemplate", "GET", f"{_BASE}/jobTemplates/{{Name}}", "Name"),
        op("GetPolicy", "GET", f"{_BASE}/policy"),
        op("GetPreset", "GET", f"{_BASE}/presets/{{Name}}", "Name"),
        op("GetQueue", "GET", f"{_BASE}/queues/{{Name}}", "Name"),
        op(
            "ListJobTemplates",
            "GET",
            f"{_BASE}/jobTemplates",
            bindings=[*_LIST, query("Category", "category")],
        ),
        op(
            "ListJobs",
            "GET",
            f"{_BASE}/jobs",
            bindings=[
                *_PAGING,
                query("Order", "order"),
                query("Queue", "queue"),
                query("Status", "status"),
            ],
        ),
        op(
            "ListPresets",
            "GET",
            f"{_BASE}/presets",
            bindings=[*_LIST, query("Category", "category")],
        ),
        op("ListQueues", "GET", f"{_BASE}/queues", bindings=_LIST),
        op("ListTagsForResource", "GET", f"{_BASE}/tags/{{Arn}}", "Arn"),
        op("PutPolicy", "PUT", f"{_BASE}/policy"),
        op("TagResource", "POST", f"{_BASE}/tags"),
        op("UntagResource", "PUT", f"{_BASE}/tags/{{Arn}}", "Arn"),
        op("UpdateJobTemplate", "PUT", f"{_BASE}/jobTemplates/{{Name}}", "Name"),
        op("UpdatePreset", "PUT", f"{_BASE}/presets/{{Name}}", "Name"),
        op("UpdateQueue", "PUT", f"{_BASE}/queues/{{Name}}", "Name"),
    ],
)


class MediaConvertClient(ServiceClient):
    """Client for AWS Elemental MediaConvert.

    Accounts created before 2021 may need the account specific endpoint returned by
    ``describe_endpoints``; pass it to :py:meth:`override_endpoint`.
    """

    SERVICE_MODEL = SERVICE_MODEL
