import base64
import json

import httpx
import pytest

from app.core.exceptions import ProviderError
from app.services.image_providers import (
    GenerationOptions,
    OpenAIImageProvider,
    StabilityImageProvider,
    build_providers,
)
from tests.conftest import make_settings, png_bytes, run

STABILITY_URL = "https://api.stability.ai/v2beta/stable-image/generate/sd3"


def stability_provider(handler, **kwargs):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StabilityImageProvider(
        api_key="sk-test",
        api_url=STABILITY_URL,
        http_client=client,
        **kwargs,
    )


def openai_provider(handler, **kwargs):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAIImageProvider(api_key="sk-openai", http_client=client, **kwargs)


class TestStabilityImageProvider:
    def test_sends_multipart_request_and_returns_bytes(self):
        image = png_bytes()
        seen = {}

        def handler(request: httpx.Request):
            request.read()
            seen["auth"] = request.headers["Authorization"]
            seen["accept"] = request.headers["Accept"]
            seen["content_type"] = request.headers["Content-Type"]
            seen["body"] = request.content.decode("utf-8", "replace")
            return httpx.Response(200, content=image, headers={"Content-Type": "image/png"})

        provider = stability_provider(handler, cfg_scale=6.5)
        result = run(provider.generate("a courtyard", "people, text", GenerationOptions(seed=42)))

        assert result == image
        assert seen["auth"] == "Bearer sk-test"
        assert seen["accept"] == "image/*"
        assert seen["content_type"].startswith("multipart/form-data")
        assert 'name="prompt"' in seen["body"] and "a courtyard" in seen["body"]
        assert 'name="negative_prompt"' in seen["body"]
        assert 'name="model"' in seen["body"] and "sd3.5-large" in seen["body"]
        assert 'name="cfg_scale"' in seen["body"] and "6.5" in seen["body"]
        assert 'name="seed"' in seen["body"]
        assert 'name="style_preset"' not in seen["body"]

    def test_non_success_status_raises_with_raw_text(self):
        def handler(request):
            return httpx.Response(402, text='{"errors":["insufficient credits"]}')

        provider = stability_provider(handler)
        with pytest.raises(ProviderError) as excinfo:
            run(provider.generate("p", "n"))

        assert excinfo.value.message == '{"errors":["insufficient credits"]}'
        assert excinfo.value.status == 402
        assert excinfo.value.provider == "stability"

    def test_empty_error_body_uses_generic_message(self):
        provider = stability_provider(lambda request: httpx.Response(500, content=b""))
        with pytest.raises(ProviderError, match="Stability API error"):
            run(provider.generate("p", "n"))

    def test_transport_error_becomes_provider_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = stability_provider(handler)
        with pytest.raises(ProviderError, match="connection refused"):
            run(provider.generate("p", "n"))

    def test_not_configured_without_key(self):
        provider = StabilityImageProvider(api_key="", api_url=STABILITY_URL)
        assert not provider.is_configured
        assert provider.missing_setting == "STABILITY_API_KEY"


class TestOpenAIImageProvider:
    def test_decodes_base64_image(self):
        image = png_bytes()
        seen = {}

        def handler(request: httpx.Request):
            seen["path"] = request.url.path
            seen["payload"] = json.loads(request.content)
            return httpx.Response(200, json={
                "created": 1700000000,
                "data": [{"b64_json": base64.b64encode(image).decode("ascii")}],
            })

        provider = openai_provider(handler)
        result = run(provider.generate("a dome at night", "people"))

        assert result == image
        assert seen["path"].endswith("/images/generations")
        assert seen["payload"]["model"] == "gpt-image-1"
        assert seen["payload"]["n"] == 1
        assert seen["payload"]["prompt"] == "a dome at night. Avoid: people"
        assert "response_format" not in seen["payload"]

    def test_status_error_carries_response_text(self):
        def handler(request):
            return httpx.Response(400, json={
                "error": {"message": "Your request was rejected", "type": "invalid_request_error"},
            })

        provider = openai_provider(handler)
        with pytest.raises(ProviderError) as excinfo:
            run(provider.generate("p", "n"))

        assert "Your request was rejected" in excinfo.value.message
        assert excinfo.value.status == 400

    def test_missing_image_data_raises(self):
        provider = openai_provider(lambda request: httpx.Response(200, json={"created": 1, "data": []}))
        with pytest.raises(ProviderError, match="no image data"):
            run(provider.generate("p", "n"))


def test_build_providers_reflects_settings():
    providers = build_providers(make_settings(STABILITY_API_KEY="", OPENAI_API_KEY="sk-x"))
    assert set(providers) == {"stability", "openai"}
    assert not providers["stability"].is_configured
    assert providers["openai"].is_configured


def test_provider_error_status_is_optional():
    error = ProviderError("Stability request timed out", provider="stability")
    assert error.status is None
    assert error.status_code == 502
    assert ProviderError("rejected", status=402).status == 402
