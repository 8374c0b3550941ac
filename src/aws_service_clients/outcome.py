#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Operation results: either a decoded response or a :py:class:`ServiceError`."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Self

from .exceptions import CallError


class ErrorKind(Enum):
    """Classification of an operation failure.

    Client-side validation and transport failures are classified locally. Service
    errors are classified from the error code returned by the service, falling back to
    :py:attr:`UNKNOWN` for codes specific to a single service.
    """

    INCOMPLETE_SIGNATURE = "IncompleteSignature"
    INTERNAL_FAILURE = "InternalFailure"
    INVALID_ACTION = "InvalidAction"
    INVALID_CLIENT_TOKEN_ID = "InvalidClientTokenId"
    INVALID_PARAMETER_COMBINATION = "InvalidParameterCombination"
    INVALID_QUERY_PARAMETER = "InvalidQueryParameter"
    INVALID_PARAMETER_VALUE = "InvalidParameterValue"
    MISSING_ACTION = "MissingAction"
    MISSING_AUTHENTICATION_TOKEN = "MissingAuthenticationToken"
    MISSING_PARAMETER = "MissingParameter"
    OPT_IN_REQUIRED = "OptInRequired"
    REQUEST_EXPIRED = "RequestExpired"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    THROTTLING = "Throttling"
    VALIDATION = "Validation"
    ACCESS_DENIED = "AccessDenied"
    RESOURCE_NOT_FOUND = "ResourceNotFound"
    UNRECOGNIZED_CLIENT = "UnrecognizedClient"
    MALFORMED_QUERY_STRING = "MalformedQueryString"
    SLOW_DOWN = "SlowDown"
    REQUEST_TIME_TOO_SKEWED = "RequestTimeTooSkewed"
    INVALID_SIGNATURE = "InvalidSignature"
    SIGNATURE_DOES_NOT_MATCH = "SignatureDoesNotMatch"
    INVALID_ACCESS_KEY_ID = "InvalidAccessKeyId"
    REQUEST_TIMEOUT = "RequestTimeout"
    NETWORK_CONNECTION = "NetworkConnection"
    CLIENT_SIGNING_FAILURE = "ClientSigningFailure"
    ENDPOINT_RESOLUTION_FAILURE = "EndpointResolutionFailure"
    UNKNOWN = "Unknown"

    @property
    def is_retryable(self) -> bool:
        """Whether an error of this kind may succeed if the request is sent again."""
        return self in _RETRYABLE_KINDS

    @property
    def is_throttling(self) -> bool:
        return self in (ErrorKind.THROTTLING, ErrorKind.SLOW_DOWN)

    @classmethod
    def from_code(cls, code: str | None, status: int | None = None) -> "ErrorKind":
        """Classify a service error code.

        Codes may carry an ``Exception`` or ``Fault`` suffix, for example
        ``ThrottlingException``. Unrecognized codes fall back to a classification based
        on the HTTP status.

        :param code: The error code returned by the service.
        :param status: The HTTP status of the response carrying the error.
        """
        if code:
            name = code
            for suffix in ("Exception", "Fault"):
                if name.endswith(suffix) and name != suffix:
                    name = name[: -len(suffix)]
                    break
            if (kind := _CODE_ALIASES.get(name)) is not None:
                return kind
            try:
                return cls(name)
            except ValueError:
                pass

        match status:
            case 429:
                return cls.THROTTLING
            case 503:
                return cls.SERVICE_UNAVAILABLE
            case int() if status >= 500:
                return cls.INTERNAL_FAILURE
            case _:
                return cls.UNKNOWN


_RETRYABLE_KINDS = frozenset(
    {
        ErrorKind.INTERNAL_FAILURE,
        ErrorKind.SERVICE_UNAVAILABLE,
        ErrorKind.THROTTLING,
        ErrorKind.SLOW_DOWN,
        ErrorKind.REQUEST_TIME_TOO_SKEWED,
        ErrorKind.REQUEST_EXPIRED,
        ErrorKind.REQUEST_TIMEOUT,
        ErrorKind.NETWORK_CONNECTION,
    }
)

_CODE_ALIASES = {
    "ThrottledRequest": ErrorKind.THROTTLING,
    "TooManyRequests": ErrorKind.THROTTLING,
    "RequestLimitExceeded": ErrorKind.THROTTLING,
    "ProvisionedThroughputExceeded": ErrorKind.THROTTLING,
    "RequestThrottled": ErrorKind.THROTTLING,
    "BandwidthLimitExceeded": ErrorKind.THROTTLING,
    "InternalServer": ErrorKind.INTERNAL_FAILURE,
    "InternalServerError": ErrorKind.INTERNAL_FAILURE,
    "InternalError": ErrorKind.INTERNAL_FAILURE,
    "Internal": ErrorKind.INTERNAL_FAILURE,
    "InternalService": ErrorKind.INTERNAL_FAILURE,
    "Service": ErrorKind.INTERNAL_FAILURE,
    "ServiceFailure": ErrorKind.INTERNAL_FAILURE,
    "ServiceUnavailableError": ErrorKind.SERVICE_UNAVAILABLE,
    "NotFound": ErrorKind.RESOURCE_NOT_FOUND,
    "BadRequest": ErrorKind.VALIDATION,
    "InvalidParameter": ErrorKind.INVALID_PARAMETER_VALUE,
    "InvalidParameterValue": ErrorKind.INVALID_PARAMETER_VALUE,
    "ValidationError": ErrorKind.VALIDATION,
    "Forbidden": ErrorKind.ACCESS_DENIED,
    "Unauthorized": ErrorKind.ACCESS_DENIED,
    "AccessDenied": ErrorKind.ACCESS_DENIED,
    "ExpiredToken": ErrorKind.REQUEST_EXPIRED,
    "RequestTimeTooSkewed": ErrorKind.REQUEST_TIME_TOO_SKEWED,
}


@dataclass(kw_only=True)
class ServiceError(CallError):
    """An operation failure, raised by :py:meth:`Outcome.unwrap`.

    The same type describes client-side validation failures, transport failures and
    errors returned by the service. ``kind`` carries the classification and ``code``
    the raw error code.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN
    """The classification of the failure."""

    code: str = ""
    """The error code, for example ``ResourceNotFoundException``."""

    status_code: int | None = None
    """The HTTP status of the error response, if one was received."""

    request_id: str | None = None
    """The request id assigned by the service, if one was returned."""

    body: Any = None
    """The decoded error response body, if one was received."""

    @classmethod
    def client(
        cls, kind: ErrorKind, message: str, *, is_retry_safe: bool = False
    ) -> Self:
        """Create an error raised before or while sending the request.

        The code is the name of the kind, for example ``MISSING_PARAMETER``.
        """
        return cls(
            kind=kind,
            code=kind.name,
            message=message,
            fault="client",
            is_retry_safe=is_retry_safe,
            is_throttling_error=kind.is_throttling,
        )

    def __str__(self) -> str:
        if self.code and self.message:
            return f"{self.code}: {self.message}"
        return self.code or self.message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ServiceError):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.code == other.code
            and self.message == other.message
            and self.fault == other.fault
            and self.status_code == other.status_code
            and self.request_id == other.request_id
        )

    __hash__ = Exception.__hash__


@dataclass(frozen=True, eq=True)
class Outcome[T]:
    """The result of an operation: a decoded response or an error.

    Exactly one of :py:attr:`result` and :py:attr:`error` is set.
    """

    result: T | None = None
    """The decoded response of a successful operation."""

    error: ServiceError | None = None
    """The failure of an unsuccessful operation."""

    def __post_init__(self) -> None:
        if self.result is not None and self.error is not None:
            raise ValueError("An outcome holds either a result or an error, not both.")

    @classmethod
    def success(cls, result: T) -> "Outcome[T]":
        return cls(result=result)

    @classmethod
    def failure(cls, error: ServiceError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the result of a successful operation.

        :raises ServiceError: If the operation failed.
        """
        if self.error is not None:
            raise self.error
        return self.result  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.ok
