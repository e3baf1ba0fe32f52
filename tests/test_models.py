"""Tests for jikan_client.models."""

from __future__ import annotations

import pydantic
import pytest

from jikan_client.constants import DEFAULT_BASE_URL
from jikan_client.models import CachePolicy, ClientConfig


class TestCachePolicy:
    def test_defaults(self) -> None:
        policy = CachePolicy()
        assert policy.enabled is True
        assert policy.ttl_seconds == 300
        assert policy.methods == ("GET", "HEAD")
        assert policy.interpret_header is True
        assert policy.cache_takeover is False

    def test_partial_input_keeps_defaults(self) -> None:
        policy = CachePolicy.model_validate({"ttl_seconds": 60})
        assert policy.ttl_seconds == 60
        assert policy.methods == ("GET", "HEAD")

    def test_methods_upper_cased(self) -> None:
        assert CachePolicy(methods=("get", "Post")).methods == ("GET", "POST")

    def test_vary_headers_lower_cased(self) -> None:
        assert CachePolicy(vary_headers=("Accept-Language",)).vary_headers == (
            "accept-language",
        )

    def test_negative_ttl_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            CachePolicy(ttl_seconds=-1)

    def test_frozen(self) -> None:
        policy = CachePolicy()
        with pytest.raises(pydantic.ValidationError):
            policy.ttl_seconds = 10


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig()
        assert config.enable_logging is False
        assert config.base_url == DEFAULT_BASE_URL
        assert config.cache_options == CachePolicy()

    def test_cache_options_from_dict(self) -> None:
        config = ClientConfig.model_validate({"cache_options": {"enabled": False}})
        assert isinstance(config.cache_options, CachePolicy)
        assert config.cache_options.enabled is False

    def test_frozen(self) -> None:
        config = ClientConfig()
        with pytest.raises(pydantic.ValidationError):
            config.enable_logging = True

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ClientConfig(timeout=0)
