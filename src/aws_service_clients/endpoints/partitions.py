#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import re
from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Partition:
    """A group of regions sharing DNS suffixes and feature support."""

    name: str
    """The partition id, for example ``aws-cn``."""

    region_regex: re.Pattern[str]
    """Matches the names of regions in this partition."""

    dns_suffix: str
    """Suffix of standard regional hostnames."""

    dual_stack_dns_suffix: str | None = None
    """Suffix of dual-stack hostnames, or None if dual-stack is unsupported."""

    def matches(self, region: str) -> bool:
        return self.region_regex.match(region) is not None


PARTITIONS: tuple[Partition, ...] = (
    Partition(
        name="aws",
        region_regex=re.compile(r"^(us|eu|ap|sa|ca|me|af|il|mx)\-\w+\-\d+$"),
        dns_suffix="amazonaws.com",
        dual_stack_dns_suffix="api.aws",
    ),
    Partition(
        name="aws-cn",
        region_regex=re.compile(r"^cn\-\w+\-\d+$"),
        dns_suffix="amazonaws.com.cn",
        dual_stack_dns_suffix="api.amazonwebservices.com.cn",
    ),
    Partition(
        name="aws-us-gov",
        region_regex=re.compile(r"^us\-gov\-\w+\-\d+$"),
        dns_suffix="amazonaws.com",
        dual_stack_dns_suffix="api.aws",
    ),
    Partition(
        name="aws-iso",
        region_regex=re.compile(r"^us\-iso\-\w+\-\d+$"),
        dns_suffix="c2s.ic.gov",
    ),
    Partition(
        name="aws-iso-b",
        region_regex=re.compile(r"^us\-isob\-\w+\-\d+$"),
        dns_suffix="sc2s.sgov.gov",
    ),
)


def partition_for_region(region: str) -> Partition:
    """Find the partition of a region.

    Regions that match no partition are assumed to belong to ``aws``.

    :param region: The region name, for example ``cn-north-1``.
    """
    for partition in PARTITIONS:
        if partition.matches(region):
            return partition
    return PARTITIONS[0]
