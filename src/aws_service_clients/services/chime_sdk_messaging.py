#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Amazon Chime SDK Messaging.

Most operations act on behalf of an app instance user, whose ARN is sent in the
``x-amz-chime-bearer`` header.
"""

from ..client import ServiceClient
from ..model import Protocol, ServiceModel, header, op, query

_BEARER = header("ChimeBearer", "x-amz-chime-bearer")
_PAGING = (query("NextToken", "next-token"), query("MaxResults", "max-results"))

_CHANNEL = "/channels/{ChannelArn}"
_BANS = f"{_CHANNEL}/bans"
_MEMBERSHIPS = f"{_CHANNEL}/memberships"
_MESSAGES = f"{_CHANNEL}/messages"
_MODERATORS = f"{_CHANNEL}/moderators"
_FLOW = "/channel-flows/{ChannelFlowArn}"

SERVICE_MODEL = ServiceModel(
    service_name="Chime SDK Messaging",
    endpoint_prefix="messaging-chime",
    signing_name="chime",
    protocol=Protocol.REST_JSON,
    api_version="2021-05-15",
    operations=[
        op(
            "AssociateChannelFlow",
            "PUT",
            f"{_CHANNEL}/channel-flow",
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "BatchCreateChannelMembership",
            "POST",
            f"{_MEMBERSHIPS}?operation=batch-create",
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "ChannelFlowCallback",
            "POST",
            f"{_CHANNEL}?operation=channel-flow-callback",
            "ChannelArn",
        ),
        op("CreateChannel", "POST", "/channels", "ChimeBearer", bindings=[_BEARER]),
        op(
            "CreateChannelBan",
            "POST",
            _BANS,
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op("CreateChannelFlow", "POST", "/channel-flows"),
        op(
            "CreateChannelMembership",
            "POST",
            _MEMBERSHIPS,
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "CreateChannelModerator",
            "POST",
            _MODERATORS,
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "DeleteChannel",
            "DELETE",
            _CHANNEL,
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER, query("SubChannelId", "sub-channel-id")],
        ),
        op(
            "DeleteChannelBan",
            "DELETE",
            f"{_BANS}/{{MemberArn}}",
            "ChannelArn",
            "MemberArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op("DeleteChannelFlow", "DELETE", _FLOW, "ChannelFlowArn"),
        op(
            "DeleteChannelMembership",
            "DELETE",
            f"{_MEMBERSHIPS}/{{MemberArn}}",
            "ChannelArn",
            "MemberArn",
            "ChimeBearer",
            bindings=[_BEARER, query("SubChannelId", "sub-channel-id")],
        ),
        op(
            "DeleteChannelMessage",
            "DELETE",
            f"{_MESSAGES}/{{MessageId}}",
            "ChannelArn",
            "MessageId",
            "ChimeBearer",
            bindings=[_BEARER, query("SubChannelId", "sub-channel-id")],
        ),
        op(
            "DeleteChannelModerator",
            "DELETE",
            f"{_MODERATORS}/{{ChannelModeratorArn}}",
            "ChannelArn",
            "ChannelModeratorArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "DescribeChannel",
            "GET",
            _CHANNEL,
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "DescribeChannelBan",
            "GET",
            f"{_BANS}/{{MemberArn}}",
            "ChannelArn",
            "MemberArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op("DescribeChannelFlow", "GET", _FLOW, "ChannelFlowArn"),
        op(
            "DescribeChannelMembership",
            "GET",
            f"{_MEMBERSHIPS}/{{MemberArn}}",
            "ChannelArn",
            "MemberArn",
            "ChimeBearer",
            bindings=[_BEARER, query("SubChannelId", "sub-channel-id")],
        ),
        op(
            "DescribeChannelMembershipForAppInstanceUser",
            "GET",
            f"{_CHANNEL}?scope=app-instance-user-membership",
            "ChannelArn",
            "AppInstanceUserArn",
            "ChimeBearer",
            bindings=[query("AppInstanceUserArn", "app-instance-user-arn"), _BEARER],
        ),
        op(
            "DescribeChannelModeratedByAppInstanceUser",
            "GET",
            f"{_CHANNEL}?scope=app-instance-user-moderated-channel",
            "ChannelArn",
            "AppInstanceUserArn",
            "ChimeBearer",
            bindings=[query("AppInstanceUserArn", "app-instance-user-arn"), _BEARER],
        ),
        op(
            "DescribeChannelModerator",
            "GET",
            f"{_MODERATORS}/{{ChannelModeratorArn}}",
            "ChannelArn",
            "ChannelModeratorArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "DisassociateChannelFlow",
            "DELETE",
            f"{_CHANNEL}/channel-flow/{{ChannelFlowArn}}",
            "ChannelArn",
            "ChannelFlowArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "GetChannelMembershipPreferences",
            "GET",
            f"{_MEMBERSHIPS}/{{MemberArn}}/preferences",
            "ChannelArn",
            "MemberArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "GetChannelMessage",
            "GET",
            f"{_MESSAGES}/{{MessageId}}",
            "ChannelArn",
            "MessageId",
            "ChimeBearer",
            bindings=[_BEARER, query("SubChannelId", "sub-channel-id")],
        ),
        op(
            "GetChannelMessageStatus",
            "GET",
            f"{_MESSAGES}/{{MessageId}}?scope=message-status",
            "ChannelArn",
            "MessageId",
            "ChimeBearer",
            bindings=[_BEARER, query("SubChannelId", "sub-channel-id")],
        ),
        op("GetMessagingSessionEndpoint", "GET", "/endpoints/messaging-session"),
        op(
            "ListChannelBans",
            "GET",
            _BANS,
            "ChannelArn",
            "ChimeBearer",
            bindings=[*_PAGING, _BEARER],
        ),
        op(
            "ListChannelFlows",
            "GET",
            "/channel-flows",
            "AppInstanceArn",
            bindings=[query("AppInstanceArn", "app-instance-arn"), *_PAGING],
        ),
        op(
            "ListChannelMemberships",
            "GET",
            _MEMBERSHIPS,
            "ChannelArn",
            "ChimeBearer",
            bindings=[
                query("Type", "type"),
                *_PAGING,
                _BEARER,
                query("SubChannelId", "sub-channel-id"),
            ],
        ),
        op(
            "ListChannelMembershipsForAppInstanceUser",
            "GET",
            "/channels?scope=app-instance-user-memberships",
            "ChimeBearer",
            bindings=[
                query("AppInstanceUserArn", "app-instance-user-arn"),
                *_PAGING,
                _BEARER,
            ],
        ),
        op(
            "ListChannelMessages",
            "GET",
            _MESSAGES,
            "ChannelArn",
            "ChimeBearer",
            bindings=[
                query("SortOrder", "sort-order"),
                query("NotBefore", "not-before"),
                query("NotAfter", "not-after"),
                *_PAGING,
                _BEARER,
                query("SubChannelId", "sub-channel-id"),
            ],
        ),
        op(
            "ListChannelModerators",
            "GET",
            _MODERATORS,
            "ChannelArn",
            "ChimeBearer",
            bindings=[*_PAGING, _BEARER],
        ),
        op(
            "ListChannels",
            "GET",
            "/channels",
            "AppInstanceArn",
            "ChimeBearer",
            bindings=[
                query("AppInstanceArn", "app-instance-arn"),
                query("Privacy", "privacy"),
                *_PAGING,
                _BEARER,
            ],
        ),
        op(
            "ListChannelsAssociatedWithChannelFlow",
            "GET",
            "/channels?scope=channel-flow-associations",
            "ChannelFlowArn",
            bindings=[query("ChannelFlowArn", "channel-flow-arn"), *_PAGING],
        ),
        op(
            "ListChannelsModeratedByAppInstanceUser",
            "GET",
            "/channels?scope=app-instance-user-moderated-channels",
            "ChimeBearer",
            bindings=[
                query("AppInstanceUserArn", "app-instance-user-arn"),
                *_PAGING,
                _BEARER,
            ],
        ),
        op(
            "ListSubChannels",
            "GET",
            f"{_CHANNEL}/subchannels",
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER, *_PAGING],
        ),
        op(
            "ListTagsForResource",
            "GET",
            "/tags",
            "ResourceARN",
            bindings=[query("ResourceARN", "arn")],
        ),
        op(
            "PutChannelMembershipPreferences",
            "PUT",
            f"{_MEMBERSHIPS}/{{MemberArn}}/preferences",
            "ChannelArn",
            "MemberArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "RedactChannelMessage",
            "POST",
            f"{_MESSAGES}/{{MessageId}}?operation=redact",
            "ChannelArn",
            "MessageId",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "SearchChannels",
            "POST",
            "/channels?operation=search",
            bindings=[_BEARER, *_PAGING],
        ),
        op(
            "SendChannelMessage",
            "POST",
            _MESSAGES,
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op("TagResource", "POST", "/tags?operation=tag-resource"),
        op("UntagResource", "POST", "/tags?operation=untag-resource"),
        op(
            "UpdateChannel",
            "PUT",
            _CHANNEL,
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op("UpdateChannelFlow", "PUT", _FLOW, "ChannelFlowArn"),
        op(
            "UpdateChannelMessage",
            "PUT",
            f"{_MESSAGES}/{{MessageId}}",
            "ChannelArn",
            "MessageId",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
        op(
            "UpdateChannelReadMarker",
            "PUT",
            f"{_CHANNEL}/readMarker",
            "ChannelArn",
            "ChimeBearer",
            bindings=[_BEARER],
        ),
    ],
)


class ChimeSDKMessagingClient(ServiceClient):
    SERVICE_MODEL = SERVICE_MODEL
