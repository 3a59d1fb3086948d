from __future__ import annotations

CRISIS_KEYWORDS = (
    "suicide",
    "suicidal",
    "kill myself",
    "end my life",
    "self harm",
    "hurt myself",
)

CRISIS_RESPONSE = """🚨 **IMMEDIATE CRISIS RESOURCES** 🚨

I'm very concerned. Please reach out for immediate help:

• **Call 988** - National Suicide & Crisis Lifeline (24/7)
• **Text "HELLO" to 741741** - Crisis Text Line
• **Call 911** if in immediate danger
• **MHI Crisis: 1-800-MHI-HELP** (24/7)

**You are not alone.** Trained professionals want to help you right now."""


def detect_crisis(message: str) -> bool:
    # Plain substring match, so "suicidesque" still trips it.
    normalized = message.lower()
    return any(keyword in normalized for keyword in CRISIS_KEYWORDS)


def crisis_response() -> str:
    return CRISIS_RESPONSE
