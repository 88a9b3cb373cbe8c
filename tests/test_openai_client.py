import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from nlcli.providers.errors import (
    InvalidCredentialError,
    InvalidFormatError,
    InvalidJSONError,
    InvalidStructureError,
    NoResponseError,
    NotConfiguredError,
    QuotaExceededError,
    ResolverError,
    ServiceError,
)
from nlcli.providers.openai_client import OpenAIResolver
from nlcli.utils.schema import RiskLabeledCommand

MOCK_COMMANDS = [
    {"command": "ls -la", "description": "List all files and directories with details", "risk": "low"},
    {"command": "pwd", "description": "Show current directory path", "risk": "low"},
]


class _CodedError(Exception):
    def __init__(self, code):
        super().__init__(f"error code {code}")
        self.code = code


def _reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def resolver(client):
    return OpenAIResolver(api_key="test-api-key", client=client)


class TestConfiguration:
    def test_configured_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "test-api-key")
        assert OpenAIResolver().is_configured()

    def test_not_configured_without_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        assert not OpenAIResolver().is_configured()

    def test_custom_key_variable(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.setenv("MY_KEY", "abc")
        assert OpenAIResolver(api_key_env="MY_KEY").is_configured()

    def test_from_config(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        r = OpenAIResolver.from_config({"openai": {"model": "gpt-4o-mini", "max_tokens": 200, "temperature": 0.1}})
        assert r.model == "gpt-4o-mini"
        assert r.max_tokens == 200
        assert r.temperature == 0.1

    def test_unconfigured_raises(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(NotConfiguredError, match="OPENAI_API_KEY"):
            OpenAIResolver().convert_to_commands("list files")


class TestConvert:
    def test_success(self, resolver, client):
        client.chat.completions.create.return_value = _reply(json.dumps(MOCK_COMMANDS))

        out = resolver.convert_to_commands("list files")

        assert out == [RiskLabeledCommand(**c) for c in MOCK_COMMANDS]
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-3.5-turbo"
        assert kwargs["max_tokens"] == 800
        assert kwargs["temperature"] == 0.3
        assert kwargs["messages"][0]["role"] == "system"
        assert "You are a helpful assistant" in kwargs["messages"][0]["content"]
        assert kwargs["messages"][1] == {"role": "user", "content": "list files"}

    def test_code_fence_is_stripped(self, resolver, client):
        client.chat.completions.create.return_value = _reply("```json\n" + json.dumps(MOCK_COMMANDS) + "\n```")
        assert len(resolver.convert_to_commands("list files")) == 2

    def test_unknown_risk_becomes_medium(self, resolver, client):
        client.chat.completions.create.return_value = _reply(
            json.dumps([{"command": "ls", "description": "list", "risk": "extreme"}])
        )
        assert resolver.convert_to_commands("list").pop().risk == "medium"

    def test_empty_array_passes_through(self, resolver, client):
        client.chat.completions.create.return_value = _reply("[]")
        assert resolver.convert_to_commands("list") == []

    @pytest.mark.parametrize("reply", [_reply(None), _reply(""), SimpleNamespace(choices=[])])
    def test_no_content(self, resolver, client, reply):
        client.chat.completions.create.return_value = reply
        with pytest.raises(NoResponseError, match="No response from OpenAI"):
            resolver.convert_to_commands("list files")

    def test_invalid_json(self, resolver, client):
        client.chat.completions.create.return_value = _reply("not json at all")
        with pytest.raises(InvalidJSONError, match="Invalid JSON response from OpenAI"):
            resolver.convert_to_commands("list files")

    def test_not_an_array(self, resolver, client):
        client.chat.completions.create.return_value = _reply(json.dumps({"command": "ls"}))
        with pytest.raises(InvalidFormatError):
            resolver.convert_to_commands("list files")

    @pytest.mark.parametrize(
        "item",
        [
            {"command": "ls", "description": "list"},
            {"command": "", "description": "list", "risk": "low"},
            {"description": "list", "risk": "low"},
            "ls -la",
        ],
    )
    def test_invalid_structure(self, resolver, client, item):
        client.chat.completions.create.return_value = _reply(json.dumps([item]))
        with pytest.raises(InvalidStructureError):
            resolver.convert_to_commands("list files")

    def test_quota_exceeded(self, resolver, client):
        client.chat.completions.create.side_effect = _CodedError("insufficient_quota")
        with pytest.raises(QuotaExceededError, match="quota exceeded"):
            resolver.convert_to_commands("list files")

    def test_invalid_api_key(self, resolver, client):
        client.chat.completions.create.side_effect = _CodedError("invalid_api_key")
        with pytest.raises(InvalidCredentialError, match="Invalid OpenAI API key"):
            resolver.convert_to_commands("list files")

    def test_other_errors_are_wrapped(self, resolver, client):
        client.chat.completions.create.side_effect = RuntimeError("Network error")
        with pytest.raises(ServiceError, match="OpenAI API error: Network error"):
            resolver.convert_to_commands("list files")

    def test_all_errors_share_a_base(self):
        for cls in (NoResponseError, InvalidFormatError, InvalidStructureError, QuotaExceededError):
            assert issubclass(cls, ResolverError)
