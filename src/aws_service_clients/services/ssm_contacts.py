#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""AWS Systems Manager Incident Manager Contacts."""

from ..client import ServiceClient
from ..model import Protocol, ServiceModel, op

_OPERATIONS = (
    "AcceptPage",
    "ActivateContactChannel",
    "CreateContact",
    "CreateContactChannel",
    "DeactivateContactChannel",
    "DeleteContact",
    "DeleteContactChannel",
    "DescribeEngagement",
    "DescribePage",
    "GetContact",
    "GetContactChannel",
    "GetContactPolicy",
    "ListContactChannels",
    "ListContacts",
    "ListEngagements",
    "ListPageReceipts",
    "ListPagesByContact",
    "ListPagesByEngagement",
    "ListTagsForResource",
    "PutContactPolicy",
    "SendActivationCode",
    "StartEngagement",
    "StopEngagement",
    "TagResource",
    "UntagResource",
    "UpdateContact",
    "UpdateContactChannel",
)

SERVICE_MODEL = ServiceModel(
    service_name="SSM Contacts",
    endpoint_prefix="ssm-contacts",
    protocol=Protocol.AWS_JSON_1_1,
    api_version="2021-05-03",
    target_prefix="SSMContacts",
    operations=[op(name) for name in _OPERATIONS],
)


class SSMContactsClient(ServiceClient):
    SERVICE_MODEL = SERVICE_MODEL
