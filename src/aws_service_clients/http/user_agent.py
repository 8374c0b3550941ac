#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import platform
from dataclasses import dataclass, field
from string import ascii_letters, digits

from .. import __version__

_USERAGENT_ALLOWED_CHARACTERS = ascii_letters + digits + "!$%&'*+-.^_`|~"
_USERAGENT_SDK_NAME = "aws-service-clients"


def sanitize_user_agent_string_component(raw_str: str, allow_hash: bool) -> str:
    """Replaces all not allowed characters in the string with a dash ("-").

    :param raw_str: The input string to be sanitized.
    :param allow_hash: Whether "#" is considered an allowed character.
    """
    return "".join(
        c if c in _USERAGENT_ALLOWED_CHARACTERS or (allow_hash and c == "#") else "-"
        for c in raw_str
    )


@dataclass(frozen=True, slots=True)
class UserAgentComponent:
    """Component of a User-Agent header string in the standard format.

    In the string representation components are written as ``prefix/name#value``.
    """

    prefix: str
    name: str
    value: str | None = None

    def __str__(self):
        clean_prefix = sanitize_user_agent_string_component(
            self.prefix, allow_hash=True
        )
        clean_name = sanitize_user_agent_string_component(self.name, allow_hash=False)
        if not self.value:
            return f"{clean_prefix}/{clean_name}"
        clean_value = sanitize_user_agent_string_component(self.value, allow_hash=True)
        return f"{clean_prefix}/{clean_name}#{clean_value}"


@dataclass(kw_only=True, slots=True)
class UserAgent:
    sdk_metadata: list[UserAgentComponent] = field(default_factory=list)
    api_metadata: list[UserAgentComponent] = field(default_factory=list)
    os_metadata: list[UserAgentComponent] = field(default_factory=list)
    language_metadata: list[UserAgentComponent] = field(default_factory=list)
    extra: list[str] = field(default_factory=list)

    @classmethod
    def for_service(
        cls, service_id: str, api_version: str, *, extra: str | None = None
    ) -> "UserAgent":
        """Build the User-Agent for a service client running on this interpreter.

        :param service_id: The service identifier, for example ``Batch``.
        :param api_version: The API version of the service.
        :param extra: Free-form text appended to the header verbatim.
        """
        return cls(
            sdk_metadata=[UserAgentComponent(_USERAGENT_SDK_NAME, __version__)],
            api_metadata=[
                UserAgentComponent("api", service_id.replace(" ", "-"), api_version)
            ],
            os_metadata=[
                UserAgentComponent("os", platform.system().lower(), platform.release())
            ],
            language_metadata=[
                UserAgentComponent(
                    "lang", "python", platform.python_version()
                )
            ],
            extra=[extra] if extra else [],
        )

    def to_string(self) -> str:
        """Pretty-print User-Agent string."""
        components = [
            *self.sdk_metadata,
            *self.api_metadata,
            *self.os_metadata,
            *self.language_metadata,
        ]
        return " ".join([*(str(comp) for comp in components), *self.extra])
