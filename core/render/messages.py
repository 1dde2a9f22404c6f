"""Fixed user-facing texts shared by the API and CLI."""

from __future__ import annotations

GREETING_MESSAGE = (
    "Send me a list of codes.\n\n"
    "I will:\n"
    "• show invalid codes with original numbers\n"
    "• show duplicate codes with original numbers\n"
    "• give final unique valid codes with copy button"
)

PING_MESSAGE = "✅ Bot is awake and responding"

FALLBACK_MESSAGE = (
    "⚠️ Bot is currently unstable.\n"
    "Please wait a moment and try again.\n\n"
    "If this continues, redeploy the bot."
)

# Transports must render the report with this mode so the code block stays monospace.
REPORT_PARSE_MODE = "Markdown"
