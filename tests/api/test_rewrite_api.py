"""
Tests for the rewrite proxy endpoint.

Covers the plain-text contract of POST /api/rewrite:
- Success relays the trimmed first choice
- Missing prompt and missing credential short-circuit before any upstream call
- Upstream and unexpected failures become 500 responses
"""

import pytest
import httpx
from fastapi.testclient import TestClient
from unittest.mock import Mock, patch
from openai import APIStatusError

from src.api.main import create_app
from src.api.dependencies.services import get_rewrite_proxy, get_model_manager
from src.api.models.rewrite import RewritePayload
from src.models.manager import ModelManager, DEFAULT_CONFIG_PATH
from src.models.providers.base import UpstreamError
from src.pipeline.rewrite.proxy import RewriteProxy, ProxyConfig


@pytest.fixture
def completion():
    client = Mock()
    client.send.return_value = " Hi there! "
    return client


@pytest.fixture
def factory(completion):
    return Mock(return_value=completion)


@pytest.fixture
def make_client(factory):
    """Build a test client whose proxy uses the given credential and a fake upstream."""
    def _make(api_key="sk-test"):
        app = create_app()
        app.dependency_overrides[get_rewrite_proxy] = lambda: RewriteProxy(ProxyConfig(api_key=api_key), client_factory=factory)
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()


class TestRewriteAPI:
    """Test the rewrite proxy endpoint."""

    def test_rewrite_success(self, client, completion):
        """
        Test: Hello scenario
        How: Upstream returns " Hi there! "
        Ensures: 200 with the trimmed text as a plain body
        """
        response = client.post("/api/rewrite", json={"prompt": "Hello"})

        assert response.status_code == 200
        assert response.text == "Hi there!"
        assert response.headers["content-type"].startswith("text/plain")
        completion.send.assert_called_once_with("Hello", "You improve user writing concisely and professionally.", 0.4)

    def test_extra_fields_ignored(self, client):
        response = client.post("/api/rewrite", json={"prompt": "Hello", "tone": "Friendly"})
        assert response.status_code == 200
        assert response.text == "Hi there!"

    @pytest.mark.parametrize("payload", [{}, {"prompt": ""}, {"prompt": None}, {"prompt": 42}, {"text": "Hello"}, []])
    def test_missing_prompt(self, client, factory, payload):
        """Absent, empty or non-string prompt is a 400 whatever else is sent"""
        response = client.post("/api/rewrite", json=payload)

        assert response.status_code == 400
        assert response.text == "Missing prompt"
        factory.assert_not_called()

    def test_missing_credential(self, make_client, factory):
        """
        Test: Credential unset
        How: Proxy configured without an API key
        Ensures: 500 "Missing OPENAI_API_KEY" and no upstream client is built
        """
        client = make_client(api_key=None)

        response = client.post("/api/rewrite", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert response.text == "Missing OPENAI_API_KEY"
        factory.assert_not_called()

    def test_empty_prompt_wins_over_missing_credential(self, make_client):
        response = make_client(api_key=None).post("/api/rewrite", json={})
        assert response.status_code == 400
        assert response.text == "Missing prompt"

    def test_upstream_error_relayed(self, client, completion):
        body = '{"error": {"message": "The model is overloaded", "type": "server_error"}}'
        completion.send.side_effect = UpstreamError(503, body)

        response = client.post("/api/rewrite", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert response.text == body

    def test_unexpected_exception_message(self, client, completion):
        completion.send.side_effect = KeyError("choices")

        response = client.post("/api/rewrite", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert response.text == "'choices'"

    def test_unexpected_exception_without_message(self, client, completion):
        completion.send.side_effect = RuntimeError()

        response = client.post("/api/rewrite", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert response.text == "Server error"

    def test_malformed_json(self, client, factory):
        """A body that is not JSON is an unexpected failure, not a missing prompt"""
        response = client.post("/api/rewrite", content=b"{prompt: Hello", headers={"content-type": "application/json"})

        assert response.status_code == 500
        assert response.text
        assert response.text != "Missing prompt"
        factory.assert_not_called()


class TestRewriteThroughSDK:
    """Full chain: ModelManager config -> proxy -> OpenAI SDK (mocked)."""

    @pytest.fixture
    def sdk_client(self):
        with patch('src.models.providers.openai_sdk.OpenAI') as openai_cls:
            yield openai_cls

    def _client(self, environ):
        app = create_app()
        manager = ModelManager(DEFAULT_CONFIG_PATH, environ=environ)
        app.dependency_overrides[get_model_manager] = lambda: manager
        return TestClient(app)

    def test_success(self, sdk_client):
        completion = Mock()
        choice = Mock()
        choice.message.content = " Hi there! "
        completion.choices = [choice]
        sdk_client.return_value.chat.completions.create.return_value = completion

        response = self._client({"OPENAI_API_KEY": "sk-test"}).post("/api/rewrite", json={"prompt": "Hello"})

        assert response.status_code == 200
        assert response.text == "Hi there!"
        assert sdk_client.call_args.kwargs["api_key"] == "sk-test"
        sdk_client.return_value.chat.completions.create.assert_called_once_with(
            model="gpt-4o-mini",
            messages=[
                {"role": "system", "content": "You improve user writing concisely and professionally."},
                {"role": "user", "content": "Hello"},
            ],
            temperature=0.4,
        )

    def test_missing_credential_never_builds_sdk_client(self, sdk_client):
        response = self._client({}).post("/api/rewrite", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert response.text == "Missing OPENAI_API_KEY"
        sdk_client.assert_not_called()

    def test_upstream_status_body_relayed(self, sdk_client):
        body = '{"error": {"message": "Incorrect API key provided"}}'
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        sdk_client.return_value.chat.completions.create.side_effect = APIStatusError(
            "Unauthorized", response=httpx.Response(401, text=body, request=request), body=None
        )

        response = self._client({"OPENAI_API_KEY": "sk-bad"}).post("/api/rewrite", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert response.text == body

    def test_no_choices(self, sdk_client):
        completion = Mock()
        completion.choices = []
        sdk_client.return_value.chat.completions.create.return_value = completion

        response = self._client({"OPENAI_API_KEY": "sk-test"}).post("/api/rewrite", json={"prompt": "Hello"})

        assert response.status_code == 500
        assert "Invalid response structure" in response.text


class TestRewritePayload:
    def test_schema_carries_example(self):
        schema = RewritePayload.model_json_schema()

        assert schema["required"] == ["prompt"]
        assert schema["properties"]["prompt"]["minLength"] == 1
        assert "User text:" in schema["example"]["prompt"]

    def test_openapi_documents_request_body(self):
        spec = create_app().openapi()
        body = spec["paths"]["/api/rewrite"]["post"]["requestBody"]

        assert body["required"] is True
        assert "prompt" in body["content"]["application/json"]["schema"]["properties"]
