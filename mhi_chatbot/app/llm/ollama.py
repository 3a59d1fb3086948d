from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from mhi_chatbot.app.llm.contracts import (
    UpstreamConnectionError,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTimeoutError,
)
from mhi_chatbot.app.memory.contracts import ChatTurn

LOGGER = logging.getLogger(__name__)

CHAT_OPTIONS = {
    "temperature": 0.7,
    "top_p": 0.9,
    "num_predict": 500,
}


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return response.text.strip()


class OllamaClient:
    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        chat_timeout: float = 120.0,
        health_timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self._chat_timeout = chat_timeout
        self._health_timeout = health_timeout
        self._transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        timeout: float,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            async with self._client(timeout) as client:
                response = await client.request(method, path, json=json)
        except httpx.ConnectError as exc:
            LOGGER.error("Ollama connection refused at %s: %s", self.base_url, exc)
            raise UpstreamConnectionError(
                "Ollama is not running. Please start it with: ollama serve"
            ) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(
                f"Ollama did not respond within {timeout:g} seconds"
            ) from exc
        except httpx.TransportError as exc:
            LOGGER.error("Ollama transport failure at %s: %s", self.base_url, exc)
            raise UpstreamConnectionError(
                f"Cannot connect to Ollama. Make sure it is running on {self.base_url}"
            ) from exc

        if response.is_error:
            detail = _error_detail(response)
            LOGGER.error("Ollama API error %s: %s", response.status_code, detail)
            cause = f"Ollama returned status {response.status_code}"
            if detail:
                cause = f"{cause}: {detail}"
            raise UpstreamStatusError(cause, response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError("Ollama returned an unexpected response") from exc

    async def chat(self, turns: Sequence[ChatTurn]) -> str:
        LOGGER.info("Sending %s turns to Ollama at %s", len(turns), self.base_url)
        payload = {
            "model": self.model,
            "messages": [turn.to_message() for turn in turns],
            "stream": False,
            "options": dict(CHAT_OPTIONS),
        }
        data = await self._request(
            "POST", "/api/chat", timeout=self._chat_timeout, json=payload
        )
        message = data.get("message") if isinstance(data, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise UpstreamError("Ollama returned an unexpected response")
        LOGGER.info("Received response from Ollama (%s chars)", len(content))
        return content

    async def list_models(self) -> list[str]:
        data = await self._request("GET", "/api/tags", timeout=self._health_timeout)
        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list):
            raise UpstreamError("Ollama returned an unexpected response")
        return [
            str(item["name"])
            for item in models
            if isinstance(item, dict) and isinstance(item.get("name"), str)
        ]
