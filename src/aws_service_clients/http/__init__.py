# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections import Counter, OrderedDict
from collections.abc import Iterable, Iterator
from copy import deepcopy
from dataclasses import dataclass, field

from .. import URI


class Field:
    """A name-value pair representing a single header in an HTTP Request or Response.

    All field names are case insensitive and case-variance must be treated as
    equivalent. Names may be normalized but should be preserved for accuracy during
    transmission.
    """

    def __init__(
        self,
        *,
        name: str,
        values: Iterable[str] | None = None,
    ):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def add(self, value: str) -> None:
        """Append a value to a field."""
        self.values.append(value)

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        self.values = values

    def as_string(self) -> str:
        """Get comma-delimited string of all values.

        Values that contain commas or double quotes are quoted when the field holds
        more than one value.
        """
        if not self.values:
            return ""
        if len(self.values) == 1:
            return self.values[0]
        return ", ".join(quote_and_escape_field_value(val) for val in self.values)

    def as_tuples(self) -> list[tuple[str, str]]:
        """Get list of ``name``, ``value`` tuples where each tuple represents one
        value."""
        return [(self.name, val) for val in self.values]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, value={self.values!r})"


class Fields:
    def __init__(
        self,
        initial: Iterable[Field] | None = None,
        *,
        encoding: str = "utf-8",
    ):
        """Collection of header entries mapped by name.

        :param initial: Initial list of ``Field`` objects.
        :param encoding: The string encoding to be used when converting the ``Field``
        name and value from ``str`` to ``bytes`` for transmission.
        """
        init_fields = list(initial) if initial is not None else []
        init_field_names = [self._normalize_field_name(fld.name) for fld in init_fields]
        non_unique_names = [
            name for name, num in Counter(init_field_names).items() if num > 1
        ]
        if non_unique_names:
            raise ValueError(
                "Field names of the initial list of fields must be unique. The "
                "following normalized field names appear more than once: "
                f"{', '.join(non_unique_names)}."
            )
        self.entries: OrderedDict[str, Field] = OrderedDict(
            zip(init_field_names, init_fields)
        )
        self.encoding: str = encoding

    def set_field(self, field: Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        self.__setitem__(field.name, field)

    def __setitem__(self, name: str, field: Field) -> None:
        """Set or override entry for a Field name."""
        normalized_name = self._normalize_field_name(name)
        if normalized_name != self._normalize_field_name(field.name):
            raise ValueError(
                f"Supplied key {name} does not match Field.name provided: {field.name}"
            )
        self.entries[normalized_name] = field

    def get(self, key: str, default: Field | None = None) -> Field | None:
        return self[key] if key in self else default

    def get_value(self, key: str) -> str | None:
        """Return the comma-joined value of a field, or None if it is absent."""
        if (entry := self.get(key)) is None:
            return None
        return entry.as_string()

    def __getitem__(self, name: str) -> Field:
        """Retrieve Field entry."""
        return self.entries[self._normalize_field_name(name)]

    def __delitem__(self, name: str) -> None:
        """Delete entry from collection."""
        del self.entries[self._normalize_field_name(name)]

    def extend(self, other: "Fields") -> None:
        """Merges ``entries`` of ``other`` into the current ``entries``.

        Values of fields that already exist are appended. Other fields are added.
        """
        for other_field in other:
            try:
                cur_field = self[other_field.name]
                for other_value in other_field.values:
                    cur_field.add(other_value)
            except KeyError:
                self[other_field.name] = other_field

    def _normalize_field_name(self, name: str) -> str:
        return name.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fields):
            return False
        return self.encoding == other.encoding and self.entries == other.entries

    def __iter__(self) -> Iterator[Field]:
        yield from self.entries.values()

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Fields({self.entries})"

    def __contains__(self, key: str) -> bool:
        return self._normalize_field_name(key) in self.entries


def quote_and_escape_field_value(value: str) -> str:
    """Escapes and quotes a single :class:`Field` value if necessary.

    See :func:`Field.as_string` for quoting and escaping logic.
    """
    if any(char in value for char in (",", '"')):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def tuples_to_fields(tuples: Iterable[tuple[str, str]]) -> Fields:
    """Convert ``name``, ``value`` tuples to ``Fields`` object. Each tuple represents
    one Field value.
    """
    fields = Fields()
    for name, value in tuples:
        try:
            fields[name].add(value)
        except KeyError:
            fields[name] = Field(name=name, values=[value])

    return fields


@dataclass(kw_only=True)
class HTTPRequest:
    """An HTTP request ready to be signed and sent."""

    destination: URI
    """The URI where the request should be sent to."""

    method: str
    """The HTTP method of the request, for example ``GET``."""

    fields: Fields = field(default_factory=Fields)
    """HTTP headers."""

    body: bytes = field(repr=False, default=b"")
    """The request payload."""

    def __deepcopy__(self, memo: dict[int, object]) -> "HTTPRequest":
        return HTTPRequest(
            destination=self.destination,
            method=self.method,
            fields=deepcopy(self.fields, memo),
            body=self.body,
        )


@dataclass(kw_only=True)
class HTTPResponse:
    """An HTTP response received from a service."""

    status: int
    """The 3 digit response status code (1xx, 2xx, 3xx, 4xx, 5xx)."""

    fields: Fields = field(default_factory=Fields)
    """HTTP headers."""

    body: bytes = field(repr=False, default=b"")
    """The response payload."""

    reason: str | None = None
    """Optional string provided by the server explaining the status."""
