#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import base64
import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any
from urllib.parse import quote as urlquote

from .http.utils import join_query_params

if TYPE_CHECKING:
    from .model import MemberBinding

_LABEL = re.compile(r"\{([^{}]+?)(\+)?\}")
_LINE_BREAK = re.compile(r"[\r\n]")


def serialize_scalar(value: Any) -> str:
    """Render a member value the way it appears in a URI or header.

    Blobs are base64 encoded.
    """
    match value:
        case bool():
            return "true" if value else "false"
        case datetime():
            return value.isoformat().replace("+00:00", "Z")
        case bytes() | bytearray():
            return base64.b64encode(value).decode("ascii")
        case _:
            return str(value)


class PathPattern:
    """A request URI template such as ``/tags/{ResourceArn}?operation=list``.

    Labels are written ``{Name}``. A greedy label, ``{Name+}``, may span several path
    segments.
    """

    def __init__(self, template: str) -> None:
        path, _, literal_query = template.partition("?")
        if not path.startswith("/"):
            raise ValueError(f"Request URI must start with '/': {template}")

        self.template = template
        self.path = path
        self.literal_query = literal_query or None
        self.labels: list[str] = []
        self.greedy_labels: set[str] = set()
        for match in _LABEL.finditer(path):
            name, greedy = match.groups()
            if name in self.labels:
                raise ValueError(f"Duplicate label {name} in {template}")
            self.labels.append(name)
            if greedy:
                self.greedy_labels.add(name)

    def format(self, **values: Any) -> str:
        """Substitute label values into the path.

        Values are percent-encoded. Greedy labels keep ``/``. Everything outside the
        labels, including trailing slashes, is kept as written.

        :raises ValueError: If a label is missing or would produce an empty segment.
        """

        def substitute(match: re.Match[str]) -> str:
            name, greedy = match.groups()
            if values.get(name) is None:
                raise ValueError(f"Missing value for label {name}")

            value = serialize_scalar(values[name])
            if not value:
                raise ValueError(f"Label {name} must not be empty")
            if greedy:
                if any(not segment for segment in value.split("/")):
                    raise ValueError(
                        f"Label {name} must not contain empty path segments: {value!r}"
                    )
                return urlquote(value, safe="/~")
            return urlquote(value, safe="~")

        return _LABEL.sub(substitute, self.path)

    def __repr__(self) -> str:
        return f"PathPattern({self.template!r})"


def _query_values(value: Any) -> Iterable[str]:
    if isinstance(value, list | tuple | set | frozenset):
        return [serialize_scalar(v) for v in value]
    return [serialize_scalar(value)]


def build_query(
    pattern: PathPattern,
    bindings: Iterable["MemberBinding"],
    params: Mapping[str, Any],
) -> str | None:
    """Build the query string of a request.

    The literal query of the template comes first, followed by the bound members in
    binding order. Lists become repeated keys.

    :param pattern: The request URI template.
    :param bindings: The query bindings of the operation.
    :param params: The request members.
    """
    query_params: list[tuple[str, str | None]] = []
    for binding in bindings:
        value = params.get(binding.name)
        if value is None:
            continue
        query_params.extend((binding.serialized_name, v) for v in _query_values(value))

    return join_query_params(query_params, prefix=pattern.literal_query or "") or None


def build_headers(
    bindings: Iterable["MemberBinding"], params: Mapping[str, Any]
) -> list[tuple[str, str]]:
    """Render the header-bound members of a request as ``(name, value)`` pairs.

    :raises ValueError: If a rendered value contains a line break.
    """
    headers: list[tuple[str, str]] = []
    for binding in bindings:
        value = params.get(binding.name)
        if value is None:
            continue
        if isinstance(value, list | tuple):
            rendered = ",".join(serialize_scalar(v) for v in value)
        else:
            rendered = serialize_scalar(value)
        if _LINE_BREAK.search(rendered):
            raise ValueError(
                f"Header {binding.serialized_name} must not contain line breaks"
            )
        headers.append((binding.serialized_name, rendered))
    return headers
