from __future__ import annotations

import logging
from dataclasses import dataclass

from mhi_chatbot.app.llm.contracts import UpstreamError
from mhi_chatbot.app.llm.ollama import OllamaClient

LOGGER = logging.getLogger(__name__)

MESSAGE_CONNECTED = "Connected"
MESSAGE_NOT_RUNNING = "Not running - start with: ollama serve"


@dataclass(frozen=True)
class UpstreamHealth:
    reachable: bool
    model_available: bool
    models: tuple[str, ...]
    message: str
    error: str | None = None


def model_is_listed(model: str, models: tuple[str, ...]) -> bool:
    # "llama2" should match the "llama2:latest" tag Ollama reports.
    return any(name == model or name.startswith(model) for name in models)


async def check_upstream(client: OllamaClient, model: str) -> UpstreamHealth:
    try:
        models = tuple(await client.list_models())
    except UpstreamError as exc:
        return UpstreamHealth(
            reachable=False,
            model_available=False,
            models=(),
            message=MESSAGE_NOT_RUNNING,
            error=exc.cause,
        )

    if model_is_listed(model, models):
        return UpstreamHealth(
            reachable=True,
            model_available=True,
            models=models,
            message=MESSAGE_CONNECTED,
        )
    return UpstreamHealth(
        reachable=True,
        model_available=False,
        models=models,
        message=f"Connected, but model '{model}' is not installed - run: ollama pull {model}",
    )


def log_upstream_health(
    health: UpstreamHealth,
    model: str,
    logger: logging.Logger | None = None,
) -> None:
    active_logger = logger or LOGGER
    if not health.reachable:
        active_logger.warning(
            "Cannot connect to Ollama (%s). Start it with: ollama serve", health.error
        )
        return
    active_logger.info(
        "Ollama is running; available models: %s", ", ".join(health.models) or "none"
    )
    if not health.model_available:
        active_logger.warning(
            "Model '%s' not found. Run: ollama pull %s", model, model
        )
