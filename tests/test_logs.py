import logging

from mhi_chatbot.core.logs import LOG_FORMAT, configure_logging


def _record_basic_config(monkeypatch) -> list[dict[str, object]]:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(
        "mhi_chatbot.core.logs.logging.basicConfig",
        lambda **kwargs: calls.append(kwargs),
    )
    return calls


def test_configure_logging_uses_requested_level(monkeypatch) -> None:
    calls = _record_basic_config(monkeypatch)

    configure_logging("debug")

    assert calls == [{"level": logging.DEBUG, "format": LOG_FORMAT}]


def test_configure_logging_falls_back_to_info(monkeypatch) -> None:
    calls = _record_basic_config(monkeypatch)

    configure_logging("chatty")

    assert calls[0]["level"] == logging.INFO
