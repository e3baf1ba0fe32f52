"""jikan_client -- base layer for typed async Jikan API clients.

Builds GET requests from endpoint templates, serves repeats from a
per-client response cache, and can log traffic through interception hooks.
"""

from jikan_client.client import ResourceClient, ResourceFetcher
from jikan_client.config import resolve_client_config
from jikan_client.constants import DEFAULT_BASE_URL
from jikan_client.exceptions import ConfigError, JikanClientError, TransportError, ValidationError
from jikan_client.interception import NoObservation, Observation, logging_observation
from jikan_client.models import CachePolicy, ClientConfig
from jikan_client.template import resolve_path

__version__ = "0.1.0"

__all__ = [
    "CachePolicy",
    "ClientConfig",
    "ConfigError",
    "DEFAULT_BASE_URL",
    "JikanClientError",
    "NoObservation",
    "Observation",
    "ResourceClient",
    "ResourceFetcher",
    "TransportError",
    "ValidationError",
    "logging_observation",
    "resolve_client_config",
    "resolve_path",
]
