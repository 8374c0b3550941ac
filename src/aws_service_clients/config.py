#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import configparser
import logging
import os
from collections.abc import Callable, Mapping
from concurrent.futures import Executor
from pathlib import Path
from typing import Any, ClassVar, Literal

from . import URI
from .exceptions import ConfigError
from .http.interfaces import HTTPClient, HTTPRequestConfiguration
from .identity import AWSCredentialsResolver
from .interfaces import EndpointResolver
from .interfaces.retries import RetryStrategy
from .retries import DEFAULT_MAX_ATTEMPTS, SimpleRetryStrategy

_LOGGER = logging.getLogger(__name__)

SOURCE_CONSTRUCTOR = "constructor"
SOURCE_ENVIRONMENT = "environment"
SOURCE_CREDENTIALS_FILE = "credentials_file"
SOURCE_CONFIG_FILE = "config_file"
SOURCE_DEFAULT = "default"
SOURCE_IN_CODE_UPDATE = "in_code_update"

SourceType = Literal[
    "constructor",
    "environment",
    "credentials_file",
    "config_file",
    "default",
    "in_code_update",
]

type Loader = Callable[[], Mapping[str, Any]]

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off", "")


class ConfigValue:
    """Configuration value with metadata about its source"""

    def __init__(self, value: Any, source: SourceType):
        self.value = value
        self.source = source

    def __repr__(self) -> str:
        return f"ConfigValue(value={self.value!r}, source={self.source!r})"


class ClientConfig:
    """
    Service client configuration with precedence-based resolution.

    Each field is resolved from, in order of precedence: the constructor, environment
    variables, the shared config file (``~/.aws/config``), the shared credentials file
    (``~/.aws/credentials``) and finally the field's default. The sentinel value
    (``...``) distinguishes "not provided" from "explicitly set to None".

    Fields are declared in ``CONFIG_FIELDS``:

        "my_field": {
            "default": None,  # required
            "type": str | None,  # the expected type after parsing
            "env_var": "MY_ENV_VAR",  # optional environment variable name
            "config_key": "my_config_key",  # optional config/credentials file key
            "parser": "_parse_bool",  # optional conversion of string sources
            "validator": "_validate_string",  # optional, replaces the type check
        }

    A field may instead be resolved by a ``_resolve_<field>`` method.
    """

    CONFIG_FIELDS: ClassVar[dict[str, dict[str, Any]]] = {
        "credentials_resolver": {
            "default": None,
            "type": AWSCredentialsResolver | None,
        },
        "endpoint_resolver": {
            "default": None,
            "type": EndpointResolver | None,
        },
        "http_client": {
            "default": None,
            "type": HTTPClient | None,
        },
        "http_request_config": {
            "default": None,
            "type": HTTPRequestConfiguration | None,
        },
        "executor": {
            "default": None,
            "type": Executor | None,
        },
        "max_attempts": {
            "env_var": "AWS_MAX_ATTEMPTS",
            "config_key": "max_attempts",
            "default": DEFAULT_MAX_ATTEMPTS,
            "type": int,
            "parser": "_parse_int",
            "validator": "_validate_max_attempts",
        },
        "retry_strategy": {
            "default": None,
            "type": RetryStrategy,
        },
        "aws_access_key_id": {
            "env_var": "AWS_ACCESS_KEY_ID",
            "config_key": "aws_access_key_id",
            "default": None,
            "type": str | None,
        },
        "aws_secret_access_key": {
            "env_var": "AWS_SECRET_ACCESS_KEY",
            "config_key": "aws_secret_access_key",
            "default": None,
            "type": str | None,
        },
        "aws_session_token": {
            "env_var": "AWS_SESSION_TOKEN",
            "config_key": "aws_session_token",
            "default": None,
            "type": str | None,
        },
        "endpoint_uri": {
            "env_var": "AWS_ENDPOINT_URL",
            "config_key": "endpoint_url",
            "default": None,
            "validator": "_validate_endpoint_uri",
        },
        "region": {
            "env_var": "AWS_REGION",
            "config_key": "region",
            "default": None,
            "type": str | None,
        },
        "use_fips_endpoint": {
            "env_var": "AWS_USE_FIPS_ENDPOINT",
            "config_key": "use_fips_endpoint",
            "default": False,
            "type": bool,
            "parser": "_parse_bool",
        },
        "use_dualstack_endpoint": {
            "env_var": "AWS_USE_DUALSTACK_ENDPOINT",
            "config_key": "use_dualstack_endpoint",
            "default": False,
            "type": bool,
            "parser": "_parse_bool",
        },
        "user_agent_extra": {
            "default": None,
            "type": str | None,
        },
    }

    def __init__(
        self,
        *,
        profile: str | None = None,
        aws_access_key_id: str | None = ...,  # type: ignore[assignment]
        aws_secret_access_key: str | None = ...,  # type: ignore[assignment]
        aws_session_token: str | None = ...,  # type: ignore[assignment]
        endpoint_uri: str | URI | None = ...,  # type: ignore[assignment]
        region: str | None = ...,  # type: ignore[assignment]
        use_fips_endpoint: bool = ...,  # type: ignore[assignment]
        use_dualstack_endpoint: bool = ...,  # type: ignore[assignment]
        max_attempts: int = ...,  # type: ignore[assignment]
        user_agent_extra: str | None = ...,  # type: ignore[assignment]
        credentials_resolver: AWSCredentialsResolver | None = ...,  # type: ignore[assignment]
        endpoint_resolver: EndpointResolver | None = ...,  # type: ignore[assignment]
        http_client: HTTPClient | None = ...,  # type: ignore[assignment]
        http_request_config: HTTPRequestConfiguration | None = ...,  # type: ignore[assignment]
        executor: Executor | None = ...,  # type: ignore[assignment]
        retry_strategy: RetryStrategy = ...,  # type: ignore[assignment]
    ):
        """
        :param profile: The shared config profile to read. Defaults to the
        ``AWS_PROFILE`` environment variable, then ``default``.
        """
        self._constructor_values = {
            k: v
            for k, v in locals().items()
            if k not in ("self", "profile") and v is not ...
        }
        self._profile = profile
        self._resolved = False

    @property
    def resolved(self) -> bool:
        """Whether :py:meth:`resolve` has been called."""
        return self._resolved

    @property
    def profile(self) -> str:
        """The shared config profile values are read from."""
        return self._profile or os.environ.get("AWS_PROFILE") or "default"

    def resolve(
        self,
        *,
        environment_loader: Loader | None = None,
        config_file_loader: Loader | None = None,
        credentials_file_loader: Loader | None = None,
    ) -> None:
        """Resolve configuration from all sources

        :param environment_loader: Custom environment loader function
        :param config_file_loader: Custom config file loader function
        :param credentials_file_loader: Custom credentials file loader function
        :raises ConfigError: If a value has the wrong type or cannot be parsed.
        """
        if self._resolved:
            raise RuntimeError(
                "Config has already been resolved. Multiple calls to resolve() are "
                "not allowed."
            )

        env_values = (environment_loader or self._load_environment_values)()
        config_file_values = (config_file_loader or self._load_config_file_values)()
        credentials_file_values = (
            credentials_file_loader or self._load_credentials_file_values
        )()

        for field_name, field_info in self.CONFIG_FIELDS.items():
            resolved_value = self._resolve_field(
                field_name,
                self._constructor_values,
                env_values,
                config_file_values,
                credentials_file_values,
                field_info["default"],
                field_info.get("validator"),
            )
            _LOGGER.debug(
                "Resolved config field %s from %s", field_name, resolved_value.source
            )
            setattr(self, f"_{field_name}", resolved_value)

        self._resolved = True

    def _load_environment_values(self) -> Mapping[str, str]:
        return os.environ

    def _load_config_file_values(self) -> dict[str, Any]:
        config_path = Path.home() / ".aws" / "config"
        if not config_path.exists():
            return {}

        parser = configparser.ConfigParser()
        parser.read(config_path)

        profile = self.profile
        section_name = f"profile {profile}" if profile != "default" else "default"

        if section_name not in parser:
            return {}

        return dict(parser[section_name])

    def _load_credentials_file_values(self) -> dict[str, Any]:
        credentials_path = Path.home() / ".aws" / "credentials"
        if not credentials_path.exists():
            return {}

        parser = configparser.ConfigParser()
        parser.read(credentials_path)

        if self.profile not in parser:
            return {}

        return dict(parser[self.profile])

    def _resolve_field(
        self,
        field_name: str,
        constructor_values: dict[str, Any],
        env_values: Mapping[str, Any],
        config_file_values: Mapping[str, Any],
        credentials_file_values: Mapping[str, Any],
        default_value: Any,
        validator: str | None,
    ) -> ConfigValue:
        custom_resolver = getattr(self, f"_resolve_{field_name}", None)
        if custom_resolver:
            return custom_resolver(
                constructor_values,
                env_values,
                config_file_values,
                credentials_file_values,
                default_value,
                validator,
            )

        field_config = self.CONFIG_FIELDS.get(field_name, {})
        env_var = field_config.get("env_var")
        config_key = field_config.get("config_key")

        source: SourceType
        if field_name in constructor_values:
            value = constructor_values[field_name]
            source = SOURCE_CONSTRUCTOR
        elif env_var and env_var in env_values:
            value = env_values[env_var]
            source = SOURCE_ENVIRONMENT
        elif config_key and config_key in config_file_values:
            value = config_file_values[config_key]
            source = SOURCE_CONFIG_FILE
        elif config_key and config_key in credentials_file_values:
            value = credentials_file_values[config_key]
            source = SOURCE_CREDENTIALS_FILE
        else:
            value = default_value
            source = SOURCE_DEFAULT

        if (parser := field_config.get("parser")) and isinstance(value, str):
            value = getattr(self, parser)(value, field_name)

        if validator:
            getattr(self, validator)(value, field_name)
        else:
            self._check_type(value, field_name, field_config["type"])

        return ConfigValue(value, source)

    def _check_type(self, value: Any, field_name: str, expected_type: Any) -> None:
        # Skip type checking for protocol types (they can't be runtime checked)
        if self._is_protocol_type(expected_type):
            return

        if not isinstance(value, expected_type):
            actual_name = type(value).__name__
            expected_name = getattr(expected_type, "__name__", str(expected_type))
            raise ConfigError(
                f"{field_name} must be {expected_name}, got {actual_name}"
            )

    def _is_protocol_type(self, type_hint: Any) -> bool:
        """Check if a type hint contains protocol types that can't be runtime checked"""
        if getattr(type_hint, "_is_protocol", False):
            return True
        origin = getattr(type_hint, "__origin__", None)
        if origin is not None and getattr(origin, "_is_protocol", False):
            return True
        if (value := getattr(type_hint, "__value__", None)) is not None:
            return self._is_protocol_type(value)
        return any(
            self._is_protocol_type(arg) for arg in getattr(type_hint, "__args__", ())
        )

    def _parse_bool(self, value: str, field_name: str) -> bool:
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ConfigError(f"{field_name} must be a boolean, got {value!r}")

    def _parse_int(self, value: str, field_name: str) -> int:
        try:
            return int(value.strip())
        except ValueError as e:
            raise ConfigError(f"{field_name} must be an integer, got {value!r}") from e

    def _validate_max_attempts(self, value: Any, field_name: str) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError(f"{field_name} must be a positive integer, got {value!r}")

    def _validate_endpoint_uri(self, value: Any, field_name: str) -> None:
        if (
            value is not None
            and not isinstance(value, str)
            and not (hasattr(value, "scheme") and hasattr(value, "host"))
        ):
            raise ConfigError(f"{field_name} must be a string or URI")

    def _resolve_region(
        self,
        constructor_values: dict[str, Any],
        env_values: Mapping[str, Any],
        config_file_values: Mapping[str, Any],
        credentials_file_values: Mapping[str, Any],
        default_value: Any,
        validator: str | None,
    ) -> ConfigValue:
        if "region" in constructor_values:
            value = ConfigValue(constructor_values["region"], SOURCE_CONSTRUCTOR)
        elif env_values.get("AWS_REGION"):
            value = ConfigValue(env_values["AWS_REGION"], SOURCE_ENVIRONMENT)
        elif env_values.get("AWS_DEFAULT_REGION"):
            value = ConfigValue(env_values["AWS_DEFAULT_REGION"], SOURCE_ENVIRONMENT)
        elif "region" in config_file_values:
            value = ConfigValue(config_file_values["region"], SOURCE_CONFIG_FILE)
        else:
            value = ConfigValue(default_value, SOURCE_DEFAULT)
        self._check_type(value.value, "region", self.CONFIG_FIELDS["region"]["type"])
        return value

    def _resolve_retry_strategy(
        self,
        constructor_values: dict[str, Any],
        env_values: Mapping[str, Any],
        config_file_values: Mapping[str, Any],
        credentials_file_values: Mapping[str, Any],
        default_value: Any,
        validator: str | None,
    ) -> ConfigValue:
        if "retry_strategy" in constructor_values:
            return ConfigValue(constructor_values["retry_strategy"], SOURCE_CONSTRUCTOR)
        # max_attempts is declared first, so it has already been resolved.
        return ConfigValue(
            SimpleRetryStrategy(max_attempts=self.max_attempts),
            self._max_attempts.source,
        )

    def get_config_value_object(self, field_name: str) -> ConfigValue:
        """Get the raw ConfigValue object for a field"""
        if not self._resolved:
            raise RuntimeError("Config must be resolved before accessing values")
        return getattr(self, f"_{field_name}")

    @property
    def aws_access_key_id(self) -> str | None:
        return self._aws_access_key_id.value

    @aws_access_key_id.setter
    def aws_access_key_id(self, value: str | None) -> None:
        self._aws_access_key_id = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def aws_secret_access_key(self) -> str | None:
        return self._aws_secret_access_key.value

    @aws_secret_access_key.setter
    def aws_secret_access_key(self, value: str | None) -> None:
        self._aws_secret_access_key = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def aws_session_token(self) -> str | None:
        return self._aws_session_token.value

    @aws_session_token.setter
    def aws_session_token(self, value: str | None) -> None:
        self._aws_session_token = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def credentials_resolver(self) -> AWSCredentialsResolver | None:
        return self._credentials_resolver.value

    @credentials_resolver.setter
    def credentials_resolver(
        self, value: AWSCredentialsResolver | None
    ) -> None:
        self._credentials_resolver = ConfigValue(
            value, SOURCE_IN_CODE_UPDATE
        )

    @property
    def endpoint_resolver(self) -> EndpointResolver | None:
        return self._endpoint_resolver.value

    @endpoint_resolver.setter
    def endpoint_resolver(self, value: EndpointResolver | None) -> None:
        self._endpoint_resolver = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def endpoint_uri(self) -> str | URI | None:
        return self._endpoint_uri.value

    @endpoint_uri.setter
    def endpoint_uri(self, value: str | URI | None) -> None:
        self._validate_endpoint_uri(value, "endpoint_uri")
        self._endpoint_uri = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def executor(self) -> Executor | None:
        return self._executor.value

    @executor.setter
    def executor(self, value: Executor | None) -> None:
        self._executor = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def http_client(self) -> HTTPClient | None:
        return self._http_client.value

    @http_client.setter
    def http_client(self, value: HTTPClient | None) -> None:
        self._http_client = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def http_request_config(self) -> HTTPRequestConfiguration | None:
        return self._http_request_config.value

    @http_request_config.setter
    def http_request_config(self, value: HTTPRequestConfiguration | None) -> None:
        self._http_request_config = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts.value

    @max_attempts.setter
    def max_attempts(self, value: int) -> None:
        self._validate_max_attempts(value, "max_attempts")
        self._max_attempts = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def region(self) -> str | None:
        return self._region.value

    @region.setter
    def region(self, value: str | None) -> None:
        self._region = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def retry_strategy(self) -> RetryStrategy:
        return self._retry_strategy.value

    @retry_strategy.setter
    def retry_strategy(self, value: RetryStrategy) -> None:
        self._retry_strategy = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def use_dualstack_endpoint(self) -> bool:
        return self._use_dualstack_endpoint.value

    @use_dualstack_endpoint.setter
    def use_dualstack_endpoint(self, value: bool) -> None:
        self._use_dualstack_endpoint = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def use_fips_endpoint(self) -> bool:
        return self._use_fips_endpoint.value

    @use_fips_endpoint.setter
    def use_fips_endpoint(self, value: bool) -> None:
        self._use_fips_endpoint = ConfigValue(value, SOURCE_IN_CODE_UPDATE)

    @property
    def user_agent_extra(self) -> str | None:
        return self._user_agent_extra.value

    @user_agent_extra.setter
    def user_agent_extra(self, value: str | None) -> None:
        self._user_agent_extra = ConfigValue(value, SOURCE_IN_CODE_UPDATE)
