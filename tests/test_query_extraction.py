"""Tests for query_extraction.py: user query lookup in inbound messages."""
import pytest
from mcp.shared.message import SessionMessage
from mcp.types import JSONRPCMessage, JSONRPCRequest

from browserstack_mcp.query_extraction import (
    extract_user_query,
    from_context,
    from_last_user_message,
    from_prompt,
    message_to_dict,
)


def generate(params):
    return {"jsonrpc": "2.0", "id": 1, "method": "model/generate", "params": params}


class TestExtractors:
    def test_prompt(self):
        assert from_prompt({"prompt": "run a live test"}) == "run a live test"

    def test_prompt_must_be_string(self):
        assert from_prompt({"prompt": ["run"]}) is None

    def test_last_user_message_string_content(self):
        params = {"messages": [
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "reply"},
            {"role": "user", "content": "second"},
            {"role": "assistant", "content": "another reply"},
        ]}
        assert from_last_user_message(params) == "second"

    def test_last_user_message_text_object(self):
        params = {"messages": [{"role": "user", "content": {"type": "text", "text": "check a11y"}}]}
        assert from_last_user_message(params) == "check a11y"

    def test_last_user_message_with_unusable_content(self):
        params = {"messages": [{"role": "user", "content": {"type": "image", "data": "..."}}]}
        assert from_last_user_message(params) is None

    def test_no_user_message(self):
        params = {"messages": [{"role": "assistant", "content": "hi"}]}
        assert from_last_user_message(params) is None

    def test_empty_messages(self):
        assert from_last_user_message({"messages": []}) is None

    def test_context_user_query(self):
        assert from_context({"context": {"userQuery": "flaky tests"}}) == "flaky tests"

    def test_context_not_a_mapping(self):
        assert from_context({"context": "flaky tests"}) is None


class TestExtractUserQuery:
    def test_prompt_wins_over_messages(self):
        message = generate({
            "prompt": "from prompt",
            "messages": [{"role": "user", "content": "from messages"}],
        })
        assert extract_user_query(message) == "from prompt"

    def test_messages_used_when_prompt_missing(self):
        message = generate({"messages": [{"role": "user", "content": "from messages"}]})
        assert extract_user_query(message) == "from messages"

    def test_empty_prompt_falls_through(self):
        message = generate({"prompt": "", "context": {"userQuery": "from context"}})
        assert extract_user_query(message) == "from context"

    def test_context_used_last(self):
        message = generate({"context": {"userQuery": "from context"}})
        assert extract_user_query(message) == "from context"

    def test_nothing_found(self):
        assert extract_user_query(generate({"temperature": 0.2})) is None

    @pytest.mark.parametrize("method", ["tools/list", "tools/call", "initialize"])
    def test_other_methods_are_ignored(self, method):
        message = {"jsonrpc": "2.0", "id": 1, "method": method, "params": {"prompt": "automate"}}
        assert extract_user_query(message) is None

    def test_missing_params(self):
        assert extract_user_query({"jsonrpc": "2.0", "id": 1, "method": "model/generate"}) is None

    def test_non_message_input(self):
        assert extract_user_query("model/generate") is None
        assert extract_user_query(None) is None


class TestSdkMessageObjects:
    def _request(self):
        return JSONRPCRequest(
            jsonrpc="2.0",
            id=7,
            method="model/generate",
            params={"prompt": "open the app live dashboard"},
        )

    def test_jsonrpc_request(self):
        assert extract_user_query(self._request()) == "open the app live dashboard"

    def test_jsonrpc_message_root_model(self):
        assert extract_user_query(JSONRPCMessage(self._request())) == "open the app live dashboard"

    def test_session_message(self):
        message = SessionMessage(message=JSONRPCMessage(self._request()))
        assert extract_user_query(message) == "open the app live dashboard"

    def test_message_to_dict(self):
        data = message_to_dict(JSONRPCMessage(self._request()))
        assert data["method"] == "model/generate"
        assert data["params"]["prompt"] == "open the app live dashboard"
