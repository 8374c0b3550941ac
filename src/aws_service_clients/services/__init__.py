#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Service clients, one module per service."""

from typing import Any

from ..client import ServiceClient
from .batch import BatchClient
from .chime_sdk_messaging import ChimeSDKMessagingClient
from .cloudsearch import CloudSearchClient
from .iotevents import IoTEventsClient
from .iotsitewise import IoTSiteWiseClient
from .mediaconvert import MediaConvertClient
from .memorydb import MemoryDBClient
from .ssm_contacts import SSMContactsClient

CLIENTS: dict[str, type[ServiceClient]] = {
    client.SERVICE_MODEL.endpoint_prefix: client
    for client in (
        BatchClient,
        ChimeSDKMessagingClient,
        CloudSearchClient,
        IoTEventsClient,
        IoTSiteWiseClient,
        MediaConvertClient,
        MemoryDBClient,
        SSMContactsClient,
    )
}
"""Client classes keyed by endpoint prefix."""

_ALIASES = {
    "memorydb": "memory-db",
    "chime-sdk-messaging": "messaging-chime",
}


def create_client(name: str, **config: Any) -> ServiceClient:
    """Create a service client by endpoint prefix, for example ``batch``.

    :param name: The endpoint prefix of the service. ``memorydb`` and
        ``chime-sdk-messaging`` are accepted as well.
    :param config: Keyword arguments for :py:class:`..config.ClientConfig`.
    :raises ValueError: If no client exists for the name.
    """
    key = name.lower()
    try:
        client_cls = CLIENTS[_ALIASES.get(key, key)]
    except KeyError:
        known = ", ".join(sorted([*CLIENTS, *_ALIASES]))
        raise ValueError(f"Unknown service {name!r}. Known services: {known}") from None
    return client_cls(**config)


__all__ = (
    "CLIENTS",
    "BatchClient",
    "ChimeSDKMessagingClient",
    "CloudSearchClient",
    "IoTEventsClient",
    "IoTSiteWiseClient",
    "MediaConvertClient",
    "MemoryDBClient",
    "SSMContactsClient",
    "create_client",
)
