#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from typing import Literal


class ClientError(Exception):
    """Base exception type for all exceptions raised by aws-service-clients."""


type Fault = Literal["client", "server"] | None
"""Whether the client or server is at fault.

If None, then there was not enough information to determine fault.
"""


@dataclass(kw_only=True)
class CallError(ClientError):
    """Base exception to be used in application-level errors.

    Implements :py:class:`.interfaces.retries.ErrorRetryInfo`.
    """

    fault: Fault = None
    """Whether the client or server is at fault.

    If None, then there was not enough information to determine fault.
    """

    message: str = field(default="", kw_only=False)
    """The message of the error."""

    is_retry_safe: bool | None = None
    """Whether the exception is safe to retry.

    A value of True does not mean a retry will occur, but rather that a retry is allowed
    to occur.

    A value of None indicates that there is not enough information available to
    determine if a retry is safe.
    """

    retry_after: float | None = None
    """The amount of time that should pass before a retry.

    Retry strategies MAY choose to wait longer.
    """

    is_throttling_error: bool = False
    """Whether the error is a throttling error."""

    def __post_init__(self):
        super().__init__(self.message)


class SerializationError(ClientError):
    """Exception type for exceptions raised while building a request."""


class InvalidParameterError(SerializationError):
    """Raised when a request member has a value that cannot be placed on the wire."""


class RetryError(ClientError):
    """Base exception type for all exceptions raised in retry strategies."""


class IdentityError(ClientError):
    """Base exception type for all exceptions raised in identity resolution."""


class SigningError(ClientError):
    """Raised when a request could not be signed."""


class MissingDependencyError(ClientError):
    """Exception type raised when a feature that requires a missing optional dependency
    is called."""


class EndpointResolutionError(ClientError):
    """Exception type for all exceptions raised by endpoint resolution."""


class ConfigError(ClientError):
    """Raised when a client configuration value is invalid."""
