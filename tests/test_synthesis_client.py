import json
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from drinkchain.domain.exceptions import UnreachableError
from drinkchain.domain.models import ChatMessage
from drinkchain.synthesis import prompts
from drinkchain.synthesis.client import ReplyStatus, SynthesisClient, serialize_transcript
from drinkchain.synthesis.llm_protocol import OpenAILLMClient


def _msg(role, text):
    return ChatMessage(id=text, role=role, text=text, timestamp=datetime(2025, 6, 1, tzinfo=timezone.utc))


def test_trend_request_composition(fake_llm, trend_payload):
    llm = fake_llm(json.dumps(trend_payload))
    reply = SynthesisClient(llm, model="test-model").synthesize_trends("重点关注：低成本。")

    assert reply.status is ReplyStatus.OK
    assert reply.payload == trend_payload
    call = llm.calls[0]
    assert call["model"] == "test-model"
    assert call["messages"][0] == {"role": "system", "content": prompts.TRENDS_SYSTEM}
    assert call["messages"][1]["role"] == "user"
    assert "重点关注：低成本。" in call["messages"][1]["content"]
    assert call["response_format"]["type"] == "json_schema"


def test_supply_request_embeds_category(fake_llm, supply_payload):
    llm = fake_llm(json.dumps({"listings": supply_payload}))
    reply = SynthesisClient(llm).synthesize_supply("咖啡", "重点关注：品质。")
    assert reply.ok
    assert reply.payload == {"listings": supply_payload}
    task = llm.calls[0]["messages"][1]["content"]
    assert "咖啡" in task
    assert "重点关注：品质。" in task


def test_supply_blank_category_defaults_to_general(fake_llm):
    llm = fake_llm("[]")
    SynthesisClient(llm).synthesize_supply("", "x")
    assert "general" in llm.calls[0]["messages"][1]["content"]


def test_backend_failure_is_unreachable(fake_llm):
    llm = fake_llm(ConnectionError("timed out"))
    reply = SynthesisClient(llm).synthesize_trends("x")
    assert reply.status is ReplyStatus.UNREACHABLE
    assert "timed out" in reply.error
    assert len(llm.calls) == 1


@pytest.mark.parametrize("raw", ["not json", "", None, '{"truncated": '])
def test_non_json_is_unparseable(fake_llm, raw):
    reply = SynthesisClient(fake_llm(raw)).synthesize_trends("x")
    assert reply.status is ReplyStatus.UNPARSEABLE
    assert reply.payload is None


def test_code_fenced_json_is_accepted(fake_llm):
    reply = SynthesisClient(fake_llm('```json\n{"a": 1}\n```')).synthesize_trends("x")
    assert reply.ok
    assert reply.payload == {"a": 1}


def test_converse_sends_history_then_new_message(fake_llm):
    llm = fake_llm("建议关注云南咖啡豆。")
    transcript = [_msg("model", "你好"), _msg("user", "咖啡豆去哪买？"), _msg("model", "云南。")]
    reply = SynthesisClient(llm).converse(transcript, "价格呢？")

    assert reply.ok
    assert reply.payload == "建议关注云南咖啡豆。"
    messages = llm.calls[0]["messages"]
    assert messages[0] == {"role": "system", "content": prompts.CHAT_SYSTEM}
    assert [m["role"] for m in messages[1:]] == ["assistant", "user", "assistant", "user"]
    assert messages[-1] == {"role": "user", "content": "价格呢？"}
    assert llm.calls[0]["response_format"] is None


def test_converse_empty_reply_is_unparseable(fake_llm):
    reply = SynthesisClient(fake_llm("   ")).converse([], "hi")
    assert reply.status is ReplyStatus.UNPARSEABLE


def test_converse_failure_is_unreachable(fake_llm):
    reply = SynthesisClient(fake_llm(RuntimeError("boom"))).converse([], "hi")
    assert reply.status is ReplyStatus.UNREACHABLE


def test_serialize_transcript_preserves_order():
    turns = serialize_transcript([_msg("user", "a"), _msg("model", "b")])
    assert turns == [{"role": "user", "content": "a"}, {"role": "assistant", "content": "b"}]


class _Completions:
    def __init__(self, outcome):
        self.outcome = outcome
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.outcome))])


def _sdk(outcome):
    completions = _Completions(outcome)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def test_openai_adapter_returns_first_choice():
    sdk, completions = _sdk('{"a": 1}')
    content = OpenAILLMClient(sdk).chat_completions_create(
        model="m", messages=[{"role": "user", "content": "hi"}], response_format={"type": "json_object"},
    )
    assert content == '{"a": 1}'
    assert completions.kwargs["response_format"] == {"type": "json_object"}


def test_openai_adapter_omits_missing_response_format():
    sdk, completions = _sdk("text")
    OpenAILLMClient(sdk).chat_completions_create(model="m", messages=[])
    assert "response_format" not in completions.kwargs


def test_openai_errors_become_unreachable():
    sdk, _ = _sdk(OpenAIError("rate limited"))
    with pytest.raises(UnreachableError):
        OpenAILLMClient(sdk).chat_completions_create(model="m", messages=[])

    reply = SynthesisClient(OpenAILLMClient(sdk)).synthesize_trends("x")
    assert reply.status is ReplyStatus.UNREACHABLE
    assert "rate limited" in reply.error
