#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime

import pytest

from aws_service_clients.bindings import (
    PathPattern,
    build_headers,
    build_query,
    serialize_scalar,
)
from aws_service_clients.model import header, query


def test_path_pattern_without_labels():
    assert PathPattern("/foo/").format() == "/foo/"


def test_path_pattern_with_normal_label():
    assert PathPattern("/{foo}/").format(foo="foo") == "/foo/"


def test_path_pattern_with_greedy_label():
    assert PathPattern("/{foo+}/").format(foo="foo") == "/foo/"


def test_path_pattern_greedy_label_allows_path_sep():
    assert PathPattern("/{foo+}/").format(foo="foo/bar") == "/foo/bar/"


def test_path_pattern_normal_label_encodes_path_sep():
    assert PathPattern("/{foo}").format(foo="foo/bar") == "/foo%2Fbar"


def test_path_pattern_encodes_arn():
    pattern = PathPattern("/v1/tags/{ResourceArn}")
    assert (
        pattern.format(ResourceArn="arn:aws:batch:us-west-2:123456789012:job-queue/q")
        == "/v1/tags/arn%3Aaws%3Abatch%3Aus-west-2%3A123456789012%3Ajob-queue%2Fq"
    )


def test_path_pattern_keeps_literal_segments_in_order():
    pattern = PathPattern("/channels/{ChannelArn}/messages/{MessageId}")
    assert pattern.labels == ["ChannelArn", "MessageId"]
    assert pattern.format(ChannelArn="c", MessageId="m") == "/channels/c/messages/m"


def test_path_pattern_splits_literal_query():
    pattern = PathPattern("/channels/{ChannelArn}?operation=channel-flow-callback")
    assert pattern.path == "/channels/{ChannelArn}"
    assert pattern.literal_query == "operation=channel-flow-callback"
    assert pattern.format(ChannelArn="abc") == "/channels/abc"


def test_path_pattern_records_greedy_labels():
    pattern = PathPattern("/{Bucket}/{Key+}")
    assert pattern.labels == ["Bucket", "Key"]
    assert pattern.greedy_labels == {"Key"}


def test_path_pattern_formats_non_string_values():
    assert PathPattern("/jobs/{Id}").format(Id=42) == "/jobs/42"


@pytest.mark.parametrize(
    "greedy, value",
    [
        (False, ""),
        (False, None),
        (True, ""),
        (True, "/"),
        (True, "/foo"),
        (True, "foo/"),
        (True, "/foo/"),
        (True, "foo//bar"),
    ],
)
def test_path_pattern_disallows_empty_segments(greedy: bool, value: str | None):
    pattern = PathPattern("/{foo+}/" if greedy else "/{foo}/")
    with pytest.raises(ValueError):
        pattern.format(foo=value)


def test_path_pattern_requires_label_values():
    with pytest.raises(ValueError, match="Missing value for label foo"):
        PathPattern("/{foo}").format()


@pytest.mark.parametrize("template", ["foo", "", "?a=b"])
def test_path_pattern_requires_absolute_path(template: str):
    with pytest.raises(ValueError):
        PathPattern(template)


def test_path_pattern_rejects_duplicate_labels():
    with pytest.raises(ValueError, match="Duplicate label"):
        PathPattern("/{foo}/{foo}")


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, "true"),
        (False, "false"),
        (10, "10"),
        (1.5, "1.5"),
        ("text", "text"),
        (b"bytes", "Ynl0ZXM="),
        (b"\xff\xfe", "//4="),
        (datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC), "2024-01-02T03:04:05Z"),
    ],
)
def test_serialize_scalar(value: object, expected: str):
    assert serialize_scalar(value) == expected


def test_build_query_puts_literal_query_first():
    pattern = PathPattern("/channels?scope=app-instance-user-memberships")
    bindings = [query("NextToken", "next-token"), query("MaxResults", "max-results")]
    assert (
        build_query(pattern, bindings, {"MaxResults": 10, "NextToken": "a b"})
        == "scope=app-instance-user-memberships&next-token=a%20b&max-results=10"
    )


def test_build_query_repeats_list_values():
    pattern = PathPattern("/tags")
    bindings = [query("ResourceArn", "resourceArn"), query("TagKeys", "tagKeys")]
    params = {"ResourceArn": "arn:x", "TagKeys": ["a", "b"]}
    assert (
        build_query(pattern, bindings, params)
        == "resourceArn=arn%3Ax&tagKeys=a&tagKeys=b"
    )


def test_build_query_skips_unset_members():
    pattern = PathPattern("/jobs")
    bindings = [query("NextToken", "nextToken"), query("Status", "status")]
    assert build_query(pattern, bindings, {"NextToken": None}) is None


def test_build_query_writes_booleans():
    pattern = PathPattern("/things")
    assert build_query(pattern, [query("Flag", "flag")], {"Flag": False}) == "flag=false"


def test_build_headers():
    bindings = [
        header("ChimeBearer", "x-amz-chime-bearer"),
        header("Ids", "x-ids"),
        header("Unset", "x-unset"),
    ]
    params = {"ChimeBearer": "arn:bearer", "Ids": ["1", "2"]}
    assert build_headers(bindings, params) == [
        ("x-amz-chime-bearer", "arn:bearer"),
        ("x-ids", "1,2"),
    ]


@pytest.mark.parametrize("value", ["arn:a\r\nx-evil: 1", "line\nbreak", ["ok", "bad\r"]])
def test_build_headers_rejects_line_breaks(value: object):
    with pytest.raises(ValueError, match="x-amz-chime-bearer must not contain line"):
        build_headers([header("ChimeBearer", "x-amz-chime-bearer")], {"ChimeBearer": value})


def test_build_query_encodes_blobs():
    pattern = PathPattern("/things")
    assert build_query(pattern, [query("Token", "token")], {"Token": b"\xff\xfe"}) == (
        "token=%2F%2F4%3D"
    )
