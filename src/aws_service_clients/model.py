#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Data tables describing services and their operations.

A :py:class:`ServiceModel` holds everything the generic client pipeline needs to
marshal an operation: the HTTP method, the request URI template, the members that
must be set, and where non-body members are bound on the HTTP request.
"""

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property

from .bindings import PathPattern

_PLURAL_ACRONYM = re.compile(r"[A-Z]{2,}s$")
_FIRST_CAP = re.compile(r"(.)([A-Z][a-z]+)")
_END_CAP = re.compile(r"([a-z0-9])([A-Z])")


def xform_name(name: str) -> str:
    """Convert a CamelCase operation name to a snake_case method name.

    >>> xform_name("CreateACL")
    'create_acl'
    >>> xform_name("DescribeACLs")
    'describe_acls'
    """
    if match := _PLURAL_ACRONYM.search(name):
        name = f"{name[: match.start()]}_{match.group().lower()}"
    name = _FIRST_CAP.sub(r"\1_\2", name)
    return _END_CAP.sub(r"\1_\2", name).lower()


class Protocol(Enum):
    """The wire protocol a service speaks."""

    REST_JSON = "restJson1"
    AWS_JSON_1_0 = "awsJson1_0"
    AWS_JSON_1_1 = "awsJson1_1"
    AWS_QUERY = "awsQuery"

    @property
    def json_version(self) -> str | None:
        match self:
            case Protocol.AWS_JSON_1_0:
                return "1.0"
            case Protocol.AWS_JSON_1_1:
                return "1.1"
            case _:
                return None


class Location(Enum):
    """Where a request member is bound on the HTTP request."""

    LABEL = "label"
    QUERY = "querystring"
    HEADER = "header"


@dataclass(frozen=True)
class MemberBinding:
    """Binds a request member to a query parameter or header."""

    name: str
    """The member name as it appears in the request."""

    location: Location
    """Where the member is written."""

    wire_name: str | None = None
    """The query key or header name. Defaults to the member name."""

    @property
    def serialized_name(self) -> str:
        return self.wire_name or self.name


def query(name: str, wire_name: str | None = None) -> MemberBinding:
    return MemberBinding(name, Location.QUERY, wire_name)


def header(name: str, wire_name: str) -> MemberBinding:
    return MemberBinding(name, Location.HEADER, wire_name)


@dataclass(frozen=True, kw_only=True)
class OperationModel:
    """One row of a service table."""

    name: str
    """The operation name, for example ``ListTagsForResource``."""

    http_method: str = "POST"
    """The HTTP method of the request."""

    request_uri: str = "/"
    """The request URI template, for example ``/v1/tags/{resourceArn}``."""

    required: tuple[str, ...] = ()
    """Members that must be set, in the order they are checked."""

    bindings: tuple[MemberBinding, ...] = ()
    """Query and header bindings. Path labels are derived from ``request_uri``."""

    host_prefix: str | None = None
    """A prefix such as ``data.`` prepended to the endpoint host."""

    signed: bool = True
    """Whether requests are signed with SigV4."""

    def __post_init__(self) -> None:
        missing = [label for label in self.path.labels if label not in self.required]
        if missing:
            raise ValueError(
                f"{self.name}: path labels {', '.join(missing)} must be required members"
            )
        for binding in self.bindings:
            if binding.location is Location.LABEL:
                raise ValueError(
                    f"{self.name}: label {binding.name} must be bound by the request URI"
                )

    @cached_property
    def path(self) -> PathPattern:
        return PathPattern(self.request_uri)

    @property
    def py_name(self) -> str:
        return xform_name(self.name)

    @cached_property
    def bound_members(self) -> frozenset[str]:
        """Members written outside of the request body."""
        return frozenset(self.path.labels) | {b.name for b in self.bindings}

    def bindings_for(self, location: Location) -> list[MemberBinding]:
        return [b for b in self.bindings if b.location is location]


def op(
    name: str,
    http_method: str = "POST",
    request_uri: str = "/",
    *required: str,
    bindings: Sequence[MemberBinding] = (),
    host_prefix: str | None = None,
    signed: bool = True,
) -> OperationModel:
    """Shorthand for a table row: ``op("GetJob", "GET", "/jobs/{Id}", "Id")``."""
    return OperationModel(
        name=name,
        http_method=http_method,
        request_uri=request_uri,
        required=required,
        bindings=tuple(bindings),
        host_prefix=host_prefix,
        signed=signed,
    )


@dataclass(kw_only=True)
class ServiceModel:
    """The table of a single service."""

    service_name: str
    """The service id used in the User-Agent, for example ``IoT Events``."""

    endpoint_prefix: str
    """The first label of the service's regional host names."""

    protocol: Protocol
    api_version: str
    operations: Sequence[OperationModel]

    signing_name: str | None = None
    """The SigV4 signing name. Defaults to the endpoint prefix."""

    target_prefix: str | None = None
    """The ``X-Amz-Target`` prefix of JSON protocol services."""

    _by_name: dict[str, OperationModel] = field(init=False, repr=False)
    _by_py_name: dict[str, OperationModel] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_name = {}
        self._by_py_name = {}
        for operation in self.operations:
            if operation.name in self._by_name:
                raise ValueError(f"Duplicate operation: {operation.name}")
            if operation.py_name in self._by_py_name:
                raise ValueError(f"Duplicate method name: {operation.py_name}")
            self._by_name[operation.name] = operation
            self._by_py_name[operation.py_name] = operation

        if self.protocol.json_version is not None and not self.target_prefix:
            raise ValueError(f"{self.service_name} requires a target prefix")

    @property
    def signing_service(self) -> str:
        return self.signing_name or self.endpoint_prefix

    def operation(self, name: str) -> OperationModel:
        """Look up an operation by its name or its python method name.

        :raises KeyError: If the service has no such operation.
        """
        try:
            return self._by_name[name]
        except KeyError:
            pass
        try:
            return self._by_py_name[name]
        except KeyError:
            raise KeyError(
                f"{self.service_name} has no operation named {name!r}"
            ) from None

    def __iter__(self) -> Iterator[OperationModel]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name or name in self._by_py_name
