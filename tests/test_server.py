import json
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from agents.orchestrator_agent import OrchestratorAgent
from tools.llm_client import LLMError, LLMUnavailable
from tools.tts import TTSError
import server


QUESTION_JSON = json.dumps(
    {
        "question": "What happens during a TCP handshake?",
        "hints": ["Three steps", "SYN first", "SYN-ACK then ACK"],
        "difficulty": "easy",
    }
)

EVALUATION_TEXT = (
    "Score: 4/5\n"
    "Strengths: - Clear explanation - Good example\n"
    "Areas for Improvement: Could mention edge cases\n"
    "Follow-up: **What about concurrent writes?**\n"
)


class FakeLLM:
    def __init__(self, reply: str = QUESTION_JSON, error: Optional[Exception] = None, transcript: str = "I would use a queue"):
        self.reply = reply
        self.error = error
        self.transcript = transcript
        self.ready = error is None or not isinstance(error, LLMUnavailable)
        self.unavailable_reason = None
        self.transcription_ready = True
        self.calls: List[dict] = []

    async def acomplete(self, system_prompt, messages, temperature=0.2, json_mode=False):
        self.calls.append({"system": system_prompt, "messages": list(messages), "json_mode": json_mode})
        if self.error:
            raise self.error
        return self.reply

    async def atranscribe(self, audio, filename="answer.webm"):
        return self.transcript


class FakeTTS:
    def __init__(self, available: bool = True, fail: bool = False):
        self.available = available
        self.fail = fail

    async def synthesize_data_uri(self, text):
        if self.fail:
            raise TTSError("503")
        return "data:audio/mp3;base64,AAAA"


@pytest.fixture
def client_for(make_config):
    def build(llm: FakeLLM, tts: Optional[FakeTTS] = None) -> TestClient:
        orch = OrchestratorAgent(make_config(), llm=llm, tts=tts or FakeTTS())
        server.app.dependency_overrides[server.get_orchestrator] = lambda: orch
        return TestClient(server.app)

    yield build
    server.app.dependency_overrides.clear()


def test_health_and_version(client_for):
    client = client_for(FakeLLM())
    health = client.get("/health").json()
    assert health["status"] == "ok"
    assert health["llm_ready"] is True
    assert client.get("/version").json() == {"version": "0.1.0", "api": "v1"}


def test_categories(client_for):
    data = client_for(FakeLLM()).get("/api/categories").json()
    assert len(data) == 9
    assert data[0] == {"id": "algorithms", "name": "Data Structures & Algorithms"}


def test_parse_endpoint(client_for):
    resp = client_for(FakeLLM()).post("/api/evaluation/parse", json={"text": EVALUATION_TEXT})
    assert resp.status_code == 200
    assert resp.json() == {
        "score": 4.0,
        "strengths": ["Clear explanation", "Good example"],
        "improvements": ["Could mention edge cases"],
        "missedPoints": [],
        "followUp": "What about concurrent writes?",
        "idealResponse": "",
    }


def test_question_request_returns_structured_content(client_for):
    llm = FakeLLM()
    resp = client_for(llm).post("/api", data={"category": "Networking Concepts", "requestType": "question"})
    body = resp.json()
    assert resp.status_code == 200
    assert body["response"] == QUESTION_JSON
    assert body["structuredContent"]["hints"][1] == "SYN first"
    assert "audioData" not in body
    assert llm.calls[0]["json_mode"] is True
    assert "Networking Concepts" in llm.calls[0]["system"]


def test_invalid_question_json_falls_back_to_raw(client_for):
    resp = client_for(FakeLLM(reply="Question: Why?")).post("/api", data={"category": "web"})
    body = resp.json()
    assert body["response"] == "Question: Why?"
    assert body["structuredContent"] is None


def test_unknown_request_type_is_treated_as_question(client_for):
    resp = client_for(FakeLLM()).post("/api", data={"category": "web", "requestType": "bogus"})
    assert resp.json()["structuredContent"]["difficulty"] == "easy"


def test_question_with_audio(client_for):
    resp = client_for(FakeLLM()).post("/api", data={"category": "os", "generateAudio": "true"})
    body = resp.json()
    assert body["audioData"].startswith("data:audio/mp3;base64,")
    assert "error" not in body


def test_question_audio_without_tts_key(client_for):
    client = client_for(FakeLLM(), FakeTTS(available=False))
    body = client.post("/api", data={"category": "os", "generateAudio": "true"}).json()
    assert body["audioData"] is None
    assert body["error"] == "TTS API key not configured"
    assert body["structuredContent"] is not None


def test_question_audio_tts_failure(client_for):
    client = client_for(FakeLLM(), FakeTTS(fail=True))
    body = client.post("/api", data={"category": "os", "generateAudio": "true"}).json()
    assert body["audioData"] is None
    assert body["error"] == "TTS generation failed"


def test_evaluate_request(client_for):
    llm = FakeLLM(reply=EVALUATION_TEXT)
    messages = [
        json.dumps({"role": "assistant", "content": "What is sharding?"}),
        json.dumps({"role": "user", "content": "Splitting data across nodes"}),
        "not json",
        json.dumps({"role": "user"}),
    ]
    resp = client_for(llm).post(
        "/api", data={"category": "databases", "requestType": "evaluate", "messages": messages}
    )
    body = resp.json()
    assert resp.status_code == 200
    assert body["response"] == EVALUATION_TEXT
    assert body["evaluation"]["score"] == 4.0
    assert body["evaluation"]["followUp"] == "What about concurrent writes?"
    sent = llm.calls[0]["messages"]
    assert [m.role for m in sent] == ["assistant", "user"]


def test_missing_llm_key(client_for):
    llm = FakeLLM(error=LLMUnavailable("missing_groq_api_key"))
    resp = client_for(llm).post("/api", data={"category": "web"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "API key configuration error"}


def test_provider_failure(client_for):
    resp = client_for(FakeLLM(error=LLMError("rate limited"))).post(
        "/api", data={"category": "web", "requestType": "evaluate"}
    )
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to generate response: rate limited"


def test_audio_transcription(client_for):
    resp = client_for(FakeLLM()).post(
        "/api",
        data={"category": "web", "requestType": "audio"},
        files={"audioData": ("answer.webm", b"\x00" * 2000, "audio/webm")},
    )
    assert resp.status_code == 200
    assert resp.json() == {"transcript": "I would use a queue"}


def test_audio_too_small(client_for):
    resp = client_for(FakeLLM()).post(
        "/api",
        data={"requestType": "audio"},
        files={"audioData": ("answer.webm", b"\x00" * 10, "audio/webm")},
    )
    assert resp.status_code == 400


def test_audio_without_speech(client_for):
    resp = client_for(FakeLLM(transcript="um")).post(
        "/api",
        data={"requestType": "audio"},
        files={"audioData": ("answer.webm", b"\x00" * 2000, "audio/webm")},
    )
    body = resp.json()
    assert resp.status_code == 200
    assert body["transcript"] == "um"
    assert "No speech detected" in body["error"]


def test_audio_request_requires_file(client_for):
    resp = client_for(FakeLLM()).post("/api", data={"requestType": "audio"})
    assert resp.status_code == 400
