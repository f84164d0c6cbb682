# Chat proxy: forwards the widget's conversation to the completions API unchanged
import logging
from typing import Any, List, Optional

import requests
from flask import Blueprint, Response, jsonify, request

from config import ChatSettings

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# Every method is routed here so non-POST requests get the JSON 405 body
ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

def extract_reply(data: Any) -> str:
    """First choice's message text, or '' when the payload has none."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0] if isinstance(choices[0], dict) else {}
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if content is not None else ""

class ChatProxy:
    def __init__(self, settings: ChatSettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def build_messages(self, messages: List[Any]) -> List[Any]:
        prompt = self.settings.system_prompt
        if not prompt:
            return list(messages)
        first = messages[0] if messages else None
        if isinstance(first, dict) and first.get("role") == "system":
            return list(messages)
        return [{"role": "system", "content": prompt}] + list(messages)

    def forward(self, messages: List[Any]) -> requests.Response:
        payload = {
            "model": self.settings.model,
            "messages": self.build_messages(messages),
            "temperature": self.settings.temperature,
        }
        logger.info("Forwarding %d messages to %s", len(payload["messages"]), self.settings.model)
        return self.session.post(
            self.settings.api_url,
            headers={
                "Authorization": f"Bearer {self.settings.api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
            timeout=self.settings.timeout_s,
        )

def create_chat_blueprint(proxy: ChatProxy) -> Blueprint:
    api = Blueprint("chat", __name__)

    @api.after_request
    def add_cors_headers(response):
        for header, value in CORS_HEADERS.items():
            response.headers[header] = value
        return response

    @api.route("/api/chat", methods=ROUTED_METHODS)
    def chat():
        if request.method == "OPTIONS":
            return Response(status=204)

        if request.method != "POST":
            return jsonify({"error": "Method not allowed"}), 405

        data = request.get_json(silent=True)
        messages = data.get("messages") if isinstance(data, dict) else None
        if not isinstance(messages, list):
            return jsonify({"error": "Missing messages[]"}), 400

        if not proxy.settings.api_key:
            return jsonify({"error": "OPENAI_API_KEY not set"}), 500

        try:
            upstream = proxy.forward(messages)
            if not upstream.ok:
                logger.warning("Upstream returned %s", upstream.status_code)
                return Response(
                    upstream.content,
                    status=upstream.status_code,
                    content_type=upstream.headers.get("Content-Type", "application/json"),
                )
            reply = extract_reply(upstream.json())
            return jsonify({"reply": reply}), 200
        except (requests.RequestException, ValueError) as e:
            logger.exception("Chat proxy request failed")
            return jsonify({"error": "Proxy failed", "details": str(e)}), 500

    return api
