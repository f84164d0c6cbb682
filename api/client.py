import logging
from typing import Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

ASSISTANT_SYSTEM_PROMPT = "You are a helpful assistant for an electrician. Answer briefly."
GREETING = "Hi! I'm the electrical assistant. How can I help you?"
FALLBACK_REPLY = "Sorry, I did not understand."
FAILURE_REPLY = "Something got stuck, please try again."

def ask_assistant(
    history: List[Dict[str, str]],
    api_base: str,
    session: Optional[requests.Session] = None,
    timeout_s: float = 60.0,
) -> str:
    """
    Sends the conversation (with the assistant system prompt in front) to the chat proxy.
    Never raises: transport or parsing failures become a generic reply for the user.
    """
    http = session or requests
    payload = {"messages": [{"role": "system", "content": ASSISTANT_SYSTEM_PROMPT}] + list(history)}
    try:
        res = http.post(f"{api_base.rstrip('/')}/api/chat", json=payload, timeout=timeout_s)
        data = res.json()
    except (requests.RequestException, ValueError):
        logger.exception("Chat request failed")
        return FAILURE_REPLY

    reply = data.get("reply") if isinstance(data, dict) else None
    if not isinstance(reply, str) or not reply:
        if isinstance(data, dict) and data.get("error"):
            logger.warning("Chat proxy error: %s", data.get("error"))
        return FALLBACK_REPLY
    return reply
