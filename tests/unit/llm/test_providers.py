from __future__ import annotations

import pytest

from ventureai.llm.providers import Provider, resolve_backend

pytestmark = [pytest.mark.unit]


def test_deepseek_key_is_preferred(settings) -> None:
    configured = settings.model_copy(update={"deepseek_api_key": "sk-ds", "openai_api_key": "sk-oa"})

    backend = resolve_backend(configured)

    assert backend.provider is Provider.DEEPSEEK
    assert backend.api_key == "sk-ds"
    assert backend.api_base == "https://api.deepseek.com/v1"


def test_openai_key_is_accepted_as_fallback(settings) -> None:
    configured = settings.model_copy(update={"openai_api_key": "sk-oa"})

    backend = resolve_backend(configured)

    assert backend.provider is Provider.OPENAI
    assert backend.api_key == "sk-oa"


def test_openai_key_uses_the_configured_base(settings) -> None:
    configured = settings.model_copy(update={"openai_api_key": "sk-oa"})
    proxied = settings.model_copy(update={"openai_api_key": "sk-oa", "llm_api_base": "http://llm-proxy:4000"})

    assert resolve_backend(configured).api_base == "https://api.deepseek.com/v1"
    assert resolve_backend(proxied).api_base == "http://llm-proxy:4000"


def test_no_credentials(settings) -> None:
    assert resolve_backend(settings) is None
