from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from mhi_chatbot.app.api.app import create_app
from mhi_chatbot.app.llm.ollama import OllamaClient
from mhi_chatbot.app.memory.service import ConversationStore
from mhi_chatbot.core.config import AppConfig

RESOURCES = [
    {
        "category": "Counseling Services",
        "text": "Licensed therapists on a sliding scale.",
        "keywords": ["counseling", "therapy"],
    },
    {
        "category": "Support Groups",
        "text": "Weekly peer-led groups.",
        "keywords": ["support group"],
    },
]


class FakeOllama:
    def __init__(self) -> None:
        self.models = ["llama2:latest", "mistral:7b"]
        self.reply = "MHI offers counseling, support groups, and crisis support."
        self.down = False
        self.chat_status = 200
        self.chat_error = "boom"
        self.chat_requests: list[dict[str, object]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.down:
            raise httpx.ConnectError("Connection refused", request=request)
        if request.url.path == "/api/tags":
            return httpx.Response(
                200, json={"models": [{"name": name} for name in self.models]}
            )
        if request.url.path == "/api/chat":
            body = json.loads(request.content)
            self.chat_requests.append(body)
            if self.chat_status != 200:
                return httpx.Response(self.chat_status, json={"error": self.chat_error})
            return httpx.Response(
                200,
                json={
                    "model": body["model"],
                    "message": {"role": "assistant", "content": self.reply},
                    "done": True,
                },
            )
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def fake_ollama() -> FakeOllama:
    return FakeOllama()


@pytest.fixture
def resources_path(tmp_path: Path) -> Path:
    path = tmp_path / "resources.json"
    path.write_text(json.dumps(RESOURCES), encoding="utf-8")
    return path


@pytest.fixture
def app_config(tmp_path: Path, resources_path: Path) -> AppConfig:
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<h1>MHI chat</h1>", encoding="utf-8")
    return AppConfig(
        app_name="MHI Health Chatbot (Ollama)",
        app_version="2.0.0",
        host="127.0.0.1",
        port=3000,
        ollama_url="http://ollama.test:11434",
        ollama_model="llama2",
        ollama_chat_timeout=120.0,
        ollama_health_timeout=5.0,
        max_history_turns=21,
        resources_path=str(resources_path),
        static_dir=str(static_dir),
        cors_allow_origins=("*",),
        log_level="INFO",
    )


@pytest.fixture
def ollama_client(app_config: AppConfig, fake_ollama: FakeOllama) -> OllamaClient:
    return OllamaClient(
        base_url=app_config.ollama_url,
        model=app_config.ollama_model,
        chat_timeout=app_config.ollama_chat_timeout,
        health_timeout=app_config.ollama_health_timeout,
        transport=httpx.MockTransport(fake_ollama.handler),
    )


@pytest.fixture
def store() -> ConversationStore:
    return ConversationStore("You are the MHI assistant.")


@pytest.fixture
def app(app_config: AppConfig, ollama_client: OllamaClient, store: ConversationStore):
    return create_app(app_config, ollama_client=ollama_client, store=store)
