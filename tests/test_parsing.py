# tests/test_parsing.py - Summary reply parsing and prompt construction
import pytest
from langchain_core.messages import AIMessage

from gateway.errors import UpstreamError
from gateway.models import DEFAULT_QUESTIONS
from gateway.parsing import ParsedSummary, RawTextFallback, parse_summary_reply, strip_code_fence
from gateway.prompts import build_question_prompt, build_summarize_prompt
from gateway.upstream import OpenAICompletionClient, extract_reply_text


class TestParseSummaryReply:
    """Tests for the JSON-or-fallback classification of summarize replies."""

    def test_json_object_is_returned_verbatim(self):
        reply = '{"summary": "Short summary", "questions": ["Q1?", "Q2?", "Q3?"], "extra": 1}'
        result = parse_summary_reply(reply)
        assert isinstance(result, ParsedSummary)
        assert result.to_response() == {
            "summary": "Short summary",
            "questions": ["Q1?", "Q2?", "Q3?"],
            "extra": 1,
        }

    def test_plain_prose_falls_back(self):
        result = parse_summary_reply("This document is about birds.")
        assert isinstance(result, RawTextFallback)
        assert result.to_response() == {
            "summary": "This document is about birds.",
            "questions": DEFAULT_QUESTIONS,
        }

    def test_fallback_has_four_default_questions(self):
        response = parse_summary_reply("not json").to_response()
        assert len(response["questions"]) == 4

    def test_fallback_questions_are_a_copy(self):
        response = parse_summary_reply("not json").to_response()
        response["questions"].append("mutated")
        assert len(DEFAULT_QUESTIONS) == 4

    def test_json_array_falls_back(self):
        result = parse_summary_reply('["a", "b"]')
        assert isinstance(result, RawTextFallback)
        assert result.text == '["a", "b"]'

    def test_code_fenced_json_is_parsed(self):
        reply = '```json\n{"summary": "Fenced", "questions": []}\n```'
        result = parse_summary_reply(reply)
        assert isinstance(result, ParsedSummary)
        assert result.payload == {"summary": "Fenced", "questions": []}

    def test_truncated_json_falls_back_with_raw_text(self):
        reply = '{"summary": "cut off'
        result = parse_summary_reply(reply)
        assert isinstance(result, RawTextFallback)
        assert result.to_response()["summary"] == reply


class TestStripCodeFence:
    def test_plain_text_unchanged(self):
        assert strip_code_fence("  hello  ") == "hello"

    def test_fence_without_language(self):
        assert strip_code_fence("```\n{}\n```") == "{}"


class TestPrompts:
    """Tests for mode-specific prompt construction."""

    def test_summarize_prompt_embeds_content(self):
        system, user = build_summarize_prompt("The quick brown fox.")
        assert "300 words" in system
        assert '"summary"' in system and '"questions"' in system
        assert "Content: The quick brown fox." in user
        assert '"summary": "your summary here"' in user

    def test_question_prompt_embeds_question_and_content(self):
        system, user = build_question_prompt("Foxes are quick.", "Are foxes quick?")
        assert "context" in system.lower()
        assert 'answer this question: "Are foxes quick?"' in user
        assert "Context: Foxes are quick." in user

    def test_braces_in_content_are_kept(self):
        _, user = build_summarize_prompt("payload {not a field}")
        assert "payload {not a field}" in user


class TestUpstreamReply:
    """Tests for reading assistant text out of chat replies."""

    def test_reads_message_content(self):
        assert extract_reply_text(AIMessage(content="Hello there")) == "Hello there"

    def test_blank_content_is_upstream_error(self):
        with pytest.raises(UpstreamError):
            extract_reply_text(AIMessage(content="  "))

    def test_missing_content_is_upstream_error(self):
        with pytest.raises(UpstreamError):
            extract_reply_text(object())

    def test_openai_client_uses_configured_model(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "gpt-test-model")
        client = OpenAICompletionClient(api_key="sk-test")
        assert client.model_name == "gpt-test-model"
        assert client.model.temperature == 0.7
        assert client.model.max_tokens == 1000
