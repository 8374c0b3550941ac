#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""AWS IoT Events."""

from ..client import ServiceClient
from ..model import Protocol, ServiceModel, op, query

_PAGING = (query("NextToken", "nextToken"), query("MaxResults", "maxResults"))
_ALARM_MODEL = "/alarm-models/{AlarmModelName}"
_DETECTOR_MODEL = "/detector-models/{DetectorModelName}"
_INPUT = "/inputs/{InputName}"
_ANALYSIS = "/analysis/detector-models/{AnalysisId}"

SERVICE_MODEL = ServiceModel(
    service_name="IoT Events",
    endpoint_prefix="iotevents",
    protocol=Protocol.REST_JSON,
    api_version="2018-07-27",
    operations=[
        op("CreateAlarmModel", "POST", "/alarm-models"),
        op("CreateDetectorModel", "POST", "/detector-models"),
        op("CreateInput", "POST", "/inputs"),
        op("DeleteAlarmModel", "DELETE", _ALARM_MODEL, "AlarmModelName"),
        op("DeleteDetectorModel", "DELETE", _DETECTOR_MODEL, "DetectorModelName"),
        op("DeleteInput", "DELETE", _INPUT, "InputName"),
        op(
            "DescribeAlarmModel",
            "GET",
            _ALARM_MODEL,
            "AlarmModelName",
            bindings=[query("AlarmModelVersion", "version")],
        ),
        op(
            "DescribeDetectorModel",
            "GET",
            _DETECTOR_MODEL,
            "DetectorModelName",
            bindings=[query("DetectorModelVersion", "version")],
        ),
        op("DescribeDetectorModelAnalysis", "GET", _ANALYSIS, "AnalysisId"),
        op("DescribeInput", "GET", _INPUT, "InputName"),
        op("DescribeLoggingOptions", "GET", "/logging"),
        op(
            "GetDetectorModelAnalysisResults",
            "GET",
            f"{_ANALYSIS}/results",
            "AnalysisId",
            bindings=_PAGING,
        ),
        op(
            "ListAlarmModelVersions",
            "GET",
            f"{_ALARM_MODEL}/versions",
            "AlarmModelName",
            bindings=_PAGING,
        ),
        op("ListAlarmModels", "GET", "/alarm-models", bindings=_PAGING),
        op(
            "ListDetectorModelVersions",
            "GET",
            f"{_DETECTOR_MODEL}/versions",
            "DetectorModelName",
            bindings=_PAGING,
        ),
        op("ListDetectorModels", "GET", "/detector-models", bindings=_PAGING),
        op("ListInputRoutings", "POST", "/input-routings"),
        op("ListInputs", "GET", "/inputs", bindings=_PAGING),
        op(
            "ListTagsForResource",
            "GET",
            "/tags",
            "ResourceArn",
            bindings=[query("ResourceArn", "resourceArn")],
        ),
        op("PutLoggingOptions", "PUT", "/logging"),
        op("StartDetectorModelAnalysis", "POST", "/analysis/detector-models/"),
        op(
            "TagResource",
            "POST",
            "/tags",
            "ResourceArn",
            bindings=[query("ResourceArn", "resourceArn")],
        ),
        op(
            "UntagResource",
            "DELETE",
            "/tags",
            "ResourceArn",
            "TagKeys",
            bindings=[
                query("ResourceArn", "resourceArn"),
                query("TagKeys", "tagKeys"),
            ],
        ),
        op("UpdateAlarmModel", "POST", _ALARM_MODEL, "AlarmModelName"),
        op("UpdateDetectorModel", "POST", _DETECTOR_MODEL, "DetectorModelName"),
        op("UpdateInput", "PUT", _INPUT, "InputName"),
    ],
)


class IoTEventsClient(ServiceClient):
    """Client for AWS IoT Events.

    Manages the detector models, alarm models and inputs that monitor IoT devices.
    """

    SERVICE_MODEL = SERVICE_MODEL
