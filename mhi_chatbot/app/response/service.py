from __future__ import annotations

FAILURE_HEADER = "I'm having trouble connecting to my AI system right now.\n\n"

FALLBACK_CONTACTS = (
    "**Meanwhile, you can:**\n"
    "• Call **1-800-MHI-CARE** for direct assistance\n"
    "• Visit **the-mhi.org**\n"
    "• For crisis support: **Call 988** (24/7)"
)

CONNECTION_GUIDANCE = (
    "**The issue:** Ollama is not running.\n\n"
    "**To fix:**\n"
    "1. Open a new terminal\n"
    "2. Run: `ollama serve`\n"
    "3. Keep that terminal open\n"
    "4. Try your message again\n\n"
)

MODEL_GUIDANCE = (
    "**The issue:** Model '{model}' is not installed.\n\n"
    "**To fix:**\n"
    "1. Run: `ollama pull {model}`\n"
    "2. Wait for download to complete\n"
    "3. Try again\n\n"
)


def _is_connection_failure(cause: str) -> bool:
    return "not running" in cause or "Cannot connect" in cause


def _is_missing_model(cause: str) -> bool:
    normalized = cause.lower()
    return "model" in normalized and "not found" in normalized


def build_failure_guidance(cause: str, model: str) -> str:
    if _is_connection_failure(cause):
        detail = CONNECTION_GUIDANCE
    elif _is_missing_model(cause):
        detail = MODEL_GUIDANCE.format(model=model)
    else:
        detail = f"**Error:** {cause}\n\n"
    return f"{FAILURE_HEADER}{detail}{FALLBACK_CONTACTS}"
