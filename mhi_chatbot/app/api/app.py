from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

from mhi_chatbot.app.crisis.service import crisis_response, detect_crisis
from mhi_chatbot.app.health.service import check_upstream, log_upstream_health
from mhi_chatbot.app.knowledge.service import load_knowledge_text
from mhi_chatbot.app.llm.contracts import UpstreamError
from mhi_chatbot.app.llm.ollama import OllamaClient
from mhi_chatbot.app.memory.service import ConversationStore
from mhi_chatbot.app.prompts.service import build_system_prompt
from mhi_chatbot.app.response.service import build_failure_guidance
from mhi_chatbot.core.config import AppConfig, load_app_config

LOGGER = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"
INVALID_MESSAGE = "Invalid message"


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    conversation_id: str | None = Field(default=None, alias="conversationId")


def _invalid_message() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": INVALID_MESSAGE})


def _build_ollama_client(config: AppConfig) -> OllamaClient:
    return OllamaClient(
        base_url=config.ollama_url,
        model=config.ollama_model,
        chat_timeout=config.ollama_chat_timeout,
        health_timeout=config.ollama_health_timeout,
    )


def create_app(
    config: AppConfig | None = None,
    *,
    ollama_client: OllamaClient | None = None,
    store: ConversationStore | None = None,
) -> FastAPI:
    config = config or load_app_config()
    ollama_client = ollama_client or _build_ollama_client(config)
    if store is None:
        system_prompt = build_system_prompt(load_knowledge_text(config.resources_path))
        store = ConversationStore(system_prompt, max_turns=config.max_history_turns)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        LOGGER.info(
            "%s online: model=%s ollama_url=%s",
            config.app_name,
            config.ollama_model,
            config.ollama_url,
        )
        health = await check_upstream(ollama_client, config.ollama_model)
        log_upstream_health(health, config.ollama_model)
        try:
            yield
        finally:
            LOGGER.info(
                "Shutting down %s (%s conversations in memory)",
                config.app_name,
                len(store),
            )

    app = FastAPI(title=config.app_name, version=config.app_version, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        if request.url.path == CHAT_PATH:
            return _invalid_message()
        return await request_validation_exception_handler(request, exc)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {
            "status": "online",
            "service": config.app_name,
            "version": config.app_version,
            "model": config.ollama_model,
            "ollama_url": config.ollama_url,
        }

    @app.post(CHAT_PATH, response_model=None)
    async def chat(payload: ChatRequest) -> dict[str, str] | JSONResponse:
        message = payload.message
        if not message or not message.strip():
            return _invalid_message()

        if detect_crisis(message):
            LOGGER.warning("Crisis keywords detected; returning emergency resources")
            return {
                "response": crisis_response(),
                "type": "crisis",
                "priority": "EMERGENCY",
            }

        conversation_id = payload.conversation_id or store.new_conversation_id()
        LOGGER.info(
            "Chat message for %s (%s chars)", conversation_id, len(message)
        )
        async with store.lock(conversation_id):
            store.get_or_create(conversation_id)
            store.append_user(conversation_id, message)
            store.trim(conversation_id)
            try:
                reply = await ollama_client.chat(store.turns(conversation_id))
            except UpstreamError as exc:
                LOGGER.error("Chat for %s failed: %s", conversation_id, exc.cause)
                return {
                    "response": build_failure_guidance(exc.cause, config.ollama_model),
                    "type": "error",
                    "error": exc.cause,
                }
            store.append_assistant(conversation_id, reply)

        return {
            "response": reply,
            "conversationId": conversation_id,
            "type": "ai",
            "model": config.ollama_model,
        }

    @app.get("/api/health")
    async def health() -> dict[str, object]:
        upstream = await check_upstream(ollama_client, config.ollama_model)
        return {
            "status": "healthy",
            "server": "running",
            "ollama": {
                "available": upstream.reachable,
                "url": config.ollama_url,
                "model": config.ollama_model,
                "message": upstream.message,
                "modelAvailable": upstream.model_available,
                "models": list(upstream.models),
            },
        }

    static_dir = Path(config.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        LOGGER.info("Static directory %s not found; skipping static assets", static_dir)

    return app
