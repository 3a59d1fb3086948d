import logging

import pytest

from mhi_chatbot.app.health.service import (
    UpstreamHealth,
    check_upstream,
    log_upstream_health,
    model_is_listed,
)


def test_model_is_listed_accepts_exact_and_prefix_matches() -> None:
    assert model_is_listed("llama2", ("llama2",))
    assert model_is_listed("llama2", ("mistral:7b", "llama2:latest"))
    assert not model_is_listed("llama3", ("llama2:latest",))


@pytest.mark.asyncio
async def test_check_upstream_reports_ready_model(ollama_client) -> None:
    health = await check_upstream(ollama_client, "llama2")

    assert health.reachable is True
    assert health.model_available is True
    assert health.message == "Connected"


@pytest.mark.asyncio
async def test_check_upstream_reachable_without_model(ollama_client) -> None:
    health = await check_upstream(ollama_client, "phi3")

    assert health.reachable is True
    assert health.model_available is False
    assert "ollama pull phi3" in health.message


@pytest.mark.asyncio
async def test_check_upstream_unreachable(ollama_client, fake_ollama) -> None:
    fake_ollama.down = True

    health = await check_upstream(ollama_client, "llama2")

    assert health.reachable is False
    assert health.models == ()
    assert health.message == "Not running - start with: ollama serve"
    assert "ollama serve" in (health.error or "")


def test_log_upstream_health_warns_about_missing_model(caplog) -> None:
    health = UpstreamHealth(
        reachable=True,
        model_available=False,
        models=("mistral:7b",),
        message="Connected, but model 'llama2' is not installed",
    )
    logger = logging.getLogger("test.health")

    with caplog.at_level(logging.INFO, logger="test.health"):
        log_upstream_health(health, "llama2", logger=logger)

    assert any("mistral:7b" in message for message in caplog.messages)
    assert any(
        record.levelno == logging.WARNING and "ollama pull llama2" in record.message
        for record in caplog.records
    )
