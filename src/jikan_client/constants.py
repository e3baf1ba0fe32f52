"""Well-known locations and default request headers for the Jikan API."""

DEFAULT_BASE_URL = "https://api.jikan.moe/v4"
"""The official public Jikan REST instance."""

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
}
"""Headers attached to every request issued by a :class:`~jikan_client.client.ResourceClient`."""
