from types import SimpleNamespace
from unittest.mock import MagicMock

from docbot.llm.client import LLMClient


def _fake_openai(content):
    client = MagicMock()
    message = SimpleNamespace(content=content)
    client.chat.completions.create.return_value = SimpleNamespace(choices=[SimpleNamespace(message=message)])
    return client


def test_chat_prepends_system_prompt():
    openai_client = _fake_openai("answer")
    llm = LLMClient(model="m", temperature=0.2, client=openai_client)

    result = llm.chat([{"role": "user", "content": "q"}], system_prompt="be brief")

    assert result == "answer"
    kwargs = openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["messages"][0] == {"role": "system", "content": "be brief"}
    assert kwargs["model"] == "m"
    assert kwargs["temperature"] == 0.2
    assert "max_tokens" not in kwargs


def test_chat_returns_empty_string_for_missing_content():
    llm = LLMClient(max_tokens=50, client=_fake_openai(None))

    assert llm.chat([{"role": "user", "content": "q"}]) == ""
    assert llm.client.chat.completions.create.call_args.kwargs["max_tokens"] == 50
