#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import asyncio
import logging
import threading
from collections.abc import Callable, Mapping
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, ClassVar, Self

from . import URI
from .auth.sigv4 import DEFAULT_PRESIGN_EXPIRATION, SigV4Signer, SigV4SigningProperties
from .config import SOURCE_DEFAULT, ClientConfig
from .endpoints import Endpoint, EndpointResolverParams, apply_host_prefix
from .endpoints.standard_regional import StandardRegionalEndpointsResolver
from .exceptions import (
    ClientError,
    IdentityError,
    RetryError,
    SerializationError,
    SigningError,
)
from .http import Field, Fields, HTTPRequest
from .http.aiohttp import AIOHTTPClient
from .http.interfaces import HTTPClient, HTTPRequestConfiguration
from .http.user_agent import UserAgent
from .identity import AWSCredentialsResolver, AWSIdentityProperties
from .identity.chain import create_default_chain
from .interfaces import EndpointResolver
from .interfaces.retries import RetryStrategy
from .model import OperationModel, ServiceModel
from .outcome import ErrorKind, Outcome, ServiceError
from .protocols import HttpClientProtocol, create_protocol

_LOGGER = logging.getLogger(__name__)

DEFAULT_SIGNING_REGION = "us-east-1"

type Response = dict[str, Any]
type AsyncHandler = Callable[
    ["ServiceClient", Mapping[str, Any], Outcome[Response], Any], None
]


@dataclass(kw_only=True)
class ClientCall:
    """Everything needed to make a single operation call."""

    operation: OperationModel
    """The operation being called."""

    params: Mapping[str, Any]
    """The request members."""

    config: ClientConfig
    """The config of the client making the call."""

    endpoint_resolver: EndpointResolver | None
    """The endpoint resolver to use for the operation."""

    endpoint_uri: URI | None = None
    """An endpoint set on the client with :py:meth:`ServiceClient.override_endpoint`."""

    identity_resolver: AWSCredentialsResolver
    """The credentials resolver used to sign the request."""

    transport: HTTPClient
    """The HTTP client used to send the request."""

    retry_strategy: RetryStrategy
    """The retry strategy to use for the operation."""

    request_config: HTTPRequestConfiguration | None = None
    """Per-request transport settings."""

    @property
    def identity_properties(self) -> AWSIdentityProperties:
        return AWSIdentityProperties(
            access_key_id=self.config.aws_access_key_id,
            secret_access_key=self.config.aws_secret_access_key,
            session_token=self.config.aws_session_token,
        )


class RequestPipeline:
    """Runs operation calls from validation through to a decoded :py:class:`Outcome`.

    No exception escapes a call: failures at every stage are returned as a failed
    outcome carrying a :py:class:`ServiceError`.
    """

    def __init__(
        self,
        *,
        protocol: HttpClientProtocol,
        signer: SigV4Signer,
        user_agent: str,
    ) -> None:
        self._protocol = protocol
        self._signer = signer
        self._user_agent = user_agent

    @property
    def service(self) -> ServiceModel:
        return self._protocol.service

    async def __call__(self, call: ClientCall) -> Outcome[Response]:
        _LOGGER.debug(
            "Making request for operation %s with parameters: %s",
            call.operation.name,
            call.params,
        )
        try:
            request = await self._prepare_request(call)
        except ServiceError as e:
            return Outcome.failure(e)
        return await self._retry(call, request)

    async def presign(self, call: ClientCall, *, expires_in: int) -> str:
        """Build a presigned URL for the call.

        :raises ServiceError: If the URL can't be built or signed.
        """
        request = await self._prepare_request(call)
        # Only the host is signed so the URL can be used without extra headers.
        request.fields = Fields()
        try:
            identity = await call.identity_resolver.get_identity(
                properties=call.identity_properties
            )
            uri = await self._signer.presign(
                request=request,
                identity=identity,
                properties=self._signing_properties(call),
                expires_in=expires_in,
            )
        except (IdentityError, SigningError) as e:
            raise ServiceError.client(ErrorKind.CLIENT_SIGNING_FAILURE, str(e)) from e
        return uri.build()

    async def _prepare_request(self, call: ClientCall) -> HTTPRequest:
        if call.endpoint_resolver is None:
            _LOGGER.error(
                "No endpoint resolver is configured for %s", self.service.service_name
            )
            raise ServiceError.client(
                ErrorKind.ENDPOINT_RESOLUTION_FAILURE,
                "Endpoint resolver is not configured",
            )

        for name in call.operation.required:
            if call.params.get(name) is None:
                _LOGGER.error("Required field: %s, is not set", name)
                raise ServiceError.client(
                    ErrorKind.MISSING_PARAMETER, f"Missing required field [{name}]"
                )

        endpoint = await self._resolve_endpoint(call)

        try:
            request = self._protocol.serialize_request(
                operation=call.operation, params=call.params
            )
        except SerializationError as e:
            raise ServiceError.client(ErrorKind.INVALID_PARAMETER_VALUE, str(e)) from e

        request.fields.set_field(Field(name="User-Agent", values=[self._user_agent]))
        return self._protocol.set_service_endpoint(request=request, endpoint=endpoint)

    async def _resolve_endpoint(self, call: ClientCall) -> Endpoint:
        assert call.endpoint_resolver is not None
        endpoint_params = EndpointResolverParams(
            service=self.service.endpoint_prefix,
            operation=call.operation.name,
            params=call.params,
            config=call.config,
            endpoint_uri=call.endpoint_uri,
        )
        _LOGGER.debug("Calling endpoint resolver with params: %s", endpoint_params)
        try:
            endpoint = await call.endpoint_resolver.resolve_endpoint(endpoint_params)
            uri = apply_host_prefix(endpoint.uri, call.operation.host_prefix)
        except ClientError as e:
            _LOGGER.error("Endpoint resolution failed: %s", e)
            raise ServiceError.client(
                ErrorKind.ENDPOINT_RESOLUTION_FAILURE, str(e)
            ) from e
        _LOGGER.debug("Endpoint resolver result: %s", uri.build())
        return Endpoint(uri=uri, headers=endpoint.headers)

    async def _retry(self, call: ClientCall, request: HTTPRequest) -> Outcome[Response]:
        retry_strategy = call.retry_strategy
        retry_token = retry_strategy.acquire_initial_retry_token(
            token_scope=self.service.endpoint_prefix
        )

        while True:
            if retry_token.retry_delay:
                await asyncio.sleep(retry_token.retry_delay)

            try:
                result = await self._handle_attempt(call, deepcopy(request))
            except ServiceError as error:
                try:
                    retry_token = retry_strategy.refresh_retry_token_for_retry(
                        token_to_renew=retry_token,
                        error=error,
                    )
                except RetryError:
                    return Outcome.failure(error)

                _LOGGER.debug(
                    "Retry needed. Attempting request #%s in %.4f seconds.",
                    retry_token.retry_count + 1,
                    retry_token.retry_delay,
                )
            else:
                retry_strategy.record_success(token=retry_token)
                return Outcome.success(result)

    async def _handle_attempt(
        self, call: ClientCall, request: HTTPRequest
    ) -> Response:
        if call.operation.signed:
            request = await self._sign(call, request)

        _LOGGER.debug("Sending request %s %s", request.method, request.destination.build())
        try:
            response = await call.transport.send(
                request, request_config=call.request_config
            )
        except call.transport.TIMEOUT_EXCEPTIONS as e:
            raise ServiceError.client(
                ErrorKind.REQUEST_TIMEOUT,
                f"Request timed out: {e}",
                is_retry_safe=True,
            ) from e
        except Exception as e:
            raise ServiceError.client(
                ErrorKind.NETWORK_CONNECTION,
                f"Failed to send request: {e}",
                is_retry_safe=True,
            ) from e

        _LOGGER.debug("Received response with status %s", response.status)
        try:
            output = self._protocol.deserialize_response(
                operation=call.operation, response=response
            )
        except SerializationError as e:
            raise ServiceError(
                str(e),
                kind=ErrorKind.UNKNOWN,
                code=ErrorKind.UNKNOWN.name,
                fault="server",
                status_code=response.status,
            ) from e
        _LOGGER.debug("Deserialization complete. Output: %s", output)
        return output

    async def _sign(self, call: ClientCall, request: HTTPRequest) -> HTTPRequest:
        try:
            identity = await call.identity_resolver.get_identity(
                properties=call.identity_properties
            )
            return await self._signer.sign(
                request=request,
                identity=identity,
                properties=self._signing_properties(call),
            )
        except (IdentityError, SigningError) as e:
            _LOGGER.error("Failed to sign %s request: %s", call.operation.name, e)
            raise ServiceError.client(ErrorKind.CLIENT_SIGNING_FAILURE, str(e)) from e

    def _signing_properties(self, call: ClientCall) -> SigV4SigningProperties:
        return SigV4SigningProperties(
            region=call.config.region or DEFAULT_SIGNING_REGION,
            service=self.service.signing_service,
        )


def _run[T](coro: Any) -> T:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    coro.close()
    raise RuntimeError(
        "Blocking client calls can't be made from a running event loop. Use the "
        "_callable variant and await it with asyncio.wrap_future instead."
    )


def _log_handler_failure(future: Future[None]) -> None:
    if future.cancelled():
        return
    if (exc := future.exception()) is not None:
        _LOGGER.error("Async operation handler raised an exception", exc_info=exc)


def _operation_methods(
    cls: type["ServiceClient"], operation: OperationModel
) -> dict[str, Callable[..., Any]]:
    name = operation.py_name

    def call(
        self: "ServiceClient", request: Mapping[str, Any] | None = None, /, **params: Any
    ) -> Outcome[Response]:
        return self._call(operation, self._members(request, params))

    def call_callable(
        self: "ServiceClient", request: Mapping[str, Any] | None = None, /, **params: Any
    ) -> Future[Outcome[Response]]:
        return self._call_callable(operation, self._members(request, params))

    def call_async(
        self: "ServiceClient",
        request: Mapping[str, Any] | None = None,
        /,
        *,
        handler: AsyncHandler,
        context: Any = None,
        **params: Any,
    ) -> None:
        self._call_async(operation, self._members(request, params), handler, context)

    call.__doc__ = (
        f"Invoke the {operation.name} operation (``{operation.http_method} "
        f"{operation.request_uri}``).\n\n"
        ":param request: The request members. Keyword arguments are merged over it.\n"
        ":returns: The outcome of the call."
    )
    call_callable.__doc__ = (
        f"Submit the {operation.name} operation to the client's executor.\n\n"
        ":returns: A future resolving to the outcome of the call."
    )
    call_async.__doc__ = (
        f"Submit the {operation.name} operation to the client's executor and call "
        "``handler(client, request, outcome, context)`` when it completes."
    )

    methods = {
        name: call,
        f"{name}_callable": call_callable,
        f"{name}_async": call_async,
    }
    for method_name, method in methods.items():
        method.__name__ = method_name
        method.__qualname__ = f"{cls.__name__}.{method_name}"
    return methods


class ServiceClient:
    """Base class of the service clients.

    Subclasses set ``SERVICE_MODEL`` and get three methods per operation: a blocking
    ``<operation>`` method, ``<operation>_callable`` returning a future and
    ``<operation>_async`` invoking a handler when the call completes.
    """

    SERVICE_MODEL: ClassVar[ServiceModel]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        model: ServiceModel | None = cls.__dict__.get("SERVICE_MODEL")
        if model is None:
            return

        for operation in model:
            for method_name, method in _operation_methods(cls, operation).items():
                if method_name in cls.__dict__:
                    continue
                if hasattr(ServiceClient, method_name):
                    raise TypeError(
                        f"Operation method {method_name} of {cls.__name__} clashes "
                        "with a client method"
                    )
                setattr(cls, method_name, method)

    def __init__(self, config: ClientConfig | None = None, **kwargs: Any) -> None:
        """
        :param config: The client configuration. Keyword arguments are passed to a
        new :py:class:`ClientConfig` when it is not given.
        """
        if config is not None and kwargs:
            raise TypeError("Pass either a config or config keyword arguments, not both")
        self._config = config or ClientConfig(**kwargs)
        if not self._config.resolved:
            self._config.resolve()

        # The config may be shared between clients of different services, so the
        # defaults filled in here stay on the client.
        self._endpoint_resolver: EndpointResolver | None
        if self._config.get_config_value_object("endpoint_resolver").source == (
            SOURCE_DEFAULT
        ):
            self._endpoint_resolver = StandardRegionalEndpointsResolver(
                self.SERVICE_MODEL.endpoint_prefix
            )
        else:
            self._endpoint_resolver = self._config.endpoint_resolver
        self._endpoint_uri: URI | None = None
        self._credentials_resolver = (
            self._config.credentials_resolver or create_default_chain()
        )
        self._http_client = self._config.http_client or AIOHTTPClient()

        user_agent = UserAgent.for_service(
            self.SERVICE_MODEL.service_name,
            self.SERVICE_MODEL.api_version,
            extra=self._config.user_agent_extra,
        )
        self._pipeline = RequestPipeline(
            protocol=create_protocol(self.SERVICE_MODEL),
            signer=SigV4Signer(),
            user_agent=user_agent.to_string(),
        )
        self._executor = self._config.executor
        self._owns_executor = False
        self._executor_lock = threading.Lock()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def service_model(self) -> ServiceModel:
        return self.SERVICE_MODEL

    @property
    def endpoint_resolver(self) -> EndpointResolver | None:
        return self._endpoint_resolver

    @endpoint_resolver.setter
    def endpoint_resolver(self, value: EndpointResolver | None) -> None:
        self._endpoint_resolver = value

    @property
    def endpoint_uri(self) -> URI | None:
        """The endpoint set with :py:meth:`override_endpoint`, if any."""
        return self._endpoint_uri

    def override_endpoint(self, uri: str | URI) -> None:
        """Send subsequent requests made by this client to a fixed endpoint.

        The override is read by the standard and static endpoint resolvers and takes
        precedence over the ``endpoint_uri`` of the config. Operation host prefixes
        are still applied.

        :param uri: An absolute URI such as ``https://localhost:4566``.
        :raises ClientError: If the URI has no host.
        """
        self._endpoint_uri = URI.from_string(uri) if isinstance(uri, str) else uri

    def invoke(
        self, operation_name: str, request: Mapping[str, Any] | None = None, /, **params: Any
    ) -> Outcome[Response]:
        """Invoke an operation by name.

        :param operation_name: The operation name, ``ListJobs``, or its method name,
        ``list_jobs``.
        :raises KeyError: If the service has no such operation.
        """
        operation = self.SERVICE_MODEL.operation(operation_name)
        return self._call(operation, self._members(request, params))

    def generate_presigned_url(
        self,
        operation_name: str,
        request: Mapping[str, Any] | None = None,
        /,
        *,
        expires_in: int = DEFAULT_PRESIGN_EXPIRATION,
        **params: Any,
    ) -> str:
        """Build a URL with a SigV4 query string signature for an operation.

        Only the method, path and query of the operation are covered; request bodies
        and headers other than ``Host`` are not part of the URL.

        :param expires_in: How long, in seconds, the URL remains valid.
        :raises ServiceError: If a required member is missing, the endpoint can't be
            resolved or the URL can't be signed.
        """
        operation = self.SERVICE_MODEL.operation(operation_name)
        return _run(
            self._pipeline.presign(
                self._client_call(operation, self._members(request, params)),
                expires_in=expires_in,
            )
        )

    def close(self) -> None:
        """Shut down the executor created by this client, if any."""
        with self._executor_lock:
            if self._owns_executor and self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None
                self._owns_executor = False

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(region={self._config.region!r})"

    def _members(
        self, request: Mapping[str, Any] | None, params: Mapping[str, Any]
    ) -> dict[str, Any]:
        if request is not None and not isinstance(request, Mapping):
            raise TypeError(
                f"request must be a mapping of member names, got {type(request).__name__}"
            )
        return deepcopy({**(request or {}), **params})

    def _client_call(
        self, operation: OperationModel, params: Mapping[str, Any]
    ) -> ClientCall:
        config = self._config
        return ClientCall(
            operation=operation,
            params=params,
            config=config,
            endpoint_resolver=self._endpoint_resolver,
            endpoint_uri=self._endpoint_uri,
            identity_resolver=self._credentials_resolver,
            transport=self._http_client,
            retry_strategy=config.retry_strategy,
            request_config=config.http_request_config,
        )

    def _call(
        self, operation: OperationModel, params: Mapping[str, Any]
    ) -> Outcome[Response]:
        return _run(self._pipeline(self._client_call(operation, params)))

    def _call_callable(
        self, operation: OperationModel, params: Mapping[str, Any]
    ) -> Future[Outcome[Response]]:
        return self._get_executor().submit(self._call, operation, params)

    def _call_async(
        self,
        operation: OperationModel,
        params: Mapping[str, Any],
        handler: AsyncHandler,
        context: Any,
    ) -> None:
        def run() -> None:
            outcome = self._call(operation, params)
            handler(self, params, outcome, context)

        future = self._get_executor().submit(run)
        future.add_done_callback(_log_handler_failure)

    def _get_executor(self) -> Executor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    thread_name_prefix=self.SERVICE_MODEL.endpoint_prefix
                )
                self._owns_executor = True
            return self._executor
