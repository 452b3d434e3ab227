# tests/test_client.py - AIClient fallback behaviour
import requests

from client.ai_client import ANSWER_APOLOGY, SUMMARY_APOLOGY, AIClient
from gateway.models import DEFAULT_QUESTIONS


class FakeResponse:
    def __init__(self, status_code=200, payload=None, body_error=None):
        self.status_code = status_code
        self._payload = payload
        self._body_error = body_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._body_error is not None:
            raise self._body_error
        return self._payload


class FakeSession:
    """Stands in for requests.Session, recording posts."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


class TestSummarize:
    """Tests for AIClient.summarize."""

    def test_returns_gateway_payload(self):
        payload = {"summary": "Done.", "questions": ["Why?"]}
        session = FakeSession(response=FakeResponse(payload=payload))
        client = AIClient("http://localhost:3000/", session=session, timeout=5)

        assert client.summarize("text") == payload
        assert session.posts == [{
            "url": "http://localhost:3000/ai-proxy",
            "json": {"content": "text", "type": "summarize"},
            "timeout": 5,
        }]

    def test_network_error_returns_fallback(self):
        session = FakeSession(error=requests.ConnectionError("connection refused"))
        result = AIClient("http://localhost:3000", session=session).summarize("text")

        assert result["error"]
        assert result["summary"] == SUMMARY_APOLOGY
        assert result["questions"] == DEFAULT_QUESTIONS

    def test_non_ok_status_returns_fallback(self):
        session = FakeSession(response=FakeResponse(status_code=429, payload={"error": "Rate limit exceeded"}))
        result = AIClient("http://localhost:3000", session=session).summarize("text")

        assert result["error"] == "Failed to summarize content"
        assert result["summary"]

    def test_undecodable_body_returns_fallback(self):
        session = FakeSession(response=FakeResponse(body_error=ValueError("bad json")))
        result = AIClient("http://localhost:3000", session=session).summarize("text")
        assert result["summary"] == SUMMARY_APOLOGY

    def test_unexpected_error_returns_fallback(self):
        session = FakeSession(error=RuntimeError("boom"))
        result = AIClient("http://localhost:3000", session=session).summarize("text")
        assert result["error"]

    def test_fallback_questions_not_shared(self):
        session = FakeSession(error=requests.Timeout())
        client = AIClient("http://localhost:3000", session=session)
        client.summarize("text")["questions"].append("extra")
        assert len(client.summarize("text")["questions"]) == 4


class TestAsk:
    """Tests for AIClient.ask."""

    def test_posts_question_payload(self):
        session = FakeSession(response=FakeResponse(payload={"answer": "Yes."}))
        result = AIClient("http://api", session=session).ask("context", "Is it?")

        assert result == {"answer": "Yes."}
        assert session.posts[0]["json"] == {
            "content": "context",
            "question": "Is it?",
            "type": "question",
        }

    def test_failure_returns_apology(self):
        session = FakeSession(error=requests.ConnectionError())
        result = AIClient("http://api", session=session).ask("context", "Is it?")
        assert result == {"error": "Failed to get answer", "answer": ANSWER_APOLOGY}

    def test_server_error_returns_apology(self):
        session = FakeSession(response=FakeResponse(status_code=500, payload={"error": "Failed to process request"}))
        result = AIClient("http://api", session=session).ask("context", "Is it?")
        assert result["answer"] == ANSWER_APOLOGY

    def test_non_object_body_returns_apology(self):
        session = FakeSession(response=FakeResponse(payload=["not", "a", "dict"]))
        result = AIClient("http://api", session=session).ask("context", "Is it?")
        assert result["error"] == "Failed to get answer"
