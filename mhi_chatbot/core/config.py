from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    app_name: str
    app_version: str
    host: str
    port: int
    ollama_url: str
    ollama_model: str
    ollama_chat_timeout: float
    ollama_health_timeout: float
    max_history_turns: int
    resources_path: str
    static_dir: str
    cors_allow_origins: tuple[str, ...]
    log_level: str


def load_dotenv_file(path: str = ".env") -> bool:
    """Seed ``os.environ`` from ``KEY=value`` lines; the shell always wins."""
    env_path = Path(path)
    if not env_path.is_file():
        return False

    for line in env_path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().removeprefix("export ").partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        os.environ.setdefault(key, value.strip().strip("'\""))
    return True


def _read_optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if not value:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _read_str_env(name: str, default: str) -> str:
    return _read_optional_env(name) or default


def _read_int_env(name: str, default: int) -> int:
    value = _read_optional_env(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_float_env(name: str, default: float) -> float:
    value = _read_optional_env(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = _read_optional_env(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


def load_app_config() -> AppConfig:
    return AppConfig(
        app_name=_read_str_env("APP_NAME", "MHI Health Chatbot (Ollama)"),
        app_version=_read_str_env("APP_VERSION", "2.0.0"),
        host=_read_str_env("HOST", "0.0.0.0"),
        port=_read_int_env("PORT", default=3000),
        ollama_url=_read_str_env("OLLAMA_URL", "http://localhost:11434").rstrip("/"),
        ollama_model=_read_str_env("OLLAMA_MODEL", "llama2"),
        ollama_chat_timeout=_read_float_env("OLLAMA_CHAT_TIMEOUT", default=120.0),
        ollama_health_timeout=_read_float_env("OLLAMA_HEALTH_TIMEOUT", default=5.0),
        max_history_turns=_read_int_env("MAX_HISTORY_TURNS", default=21),
        resources_path=_read_str_env("RESOURCES_PATH", "data/resources.json"),
        static_dir=_read_str_env("STATIC_DIR", "public"),
        cors_allow_origins=_read_list_env("CORS_ALLOW_ORIGINS", ("*",)),
        log_level=_read_str_env("LOG_LEVEL", "INFO").upper(),
    )
