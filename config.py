import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o"

@dataclass(frozen=True)
class ChatSettings:
    api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    temperature: float = 0.2
    system_prompt: Optional[str] = None
    timeout_s: float = 60.0

@dataclass(frozen=True)
class Settings:
    chat: ChatSettings
    chat_api_base: str = "http://localhost:5000"
    proxy_host: str = "127.0.0.1"
    proxy_port: int = 5000
    log_level: str = "INFO"
    money_locale: str = "sk-SK"

def _float(env: Mapping[str, str], key: str, default: float) -> float:
    try:
        return float(env.get(key, default))
    except (TypeError, ValueError):
        return default

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

def _log_level(env: Mapping[str, str]) -> str:
    level = env.get("LOG_LEVEL", "INFO").strip().upper()
    return level if level in LOG_LEVELS else "INFO"

def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Builds Settings from the environment (plus a local .env file).
    Passing env explicitly skips .env loading, which keeps tests hermetic.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    chat = ChatSettings(
        api_key=env.get("OPENAI_API_KEY") or None,
        api_url=env.get("OPENAI_API_URL", DEFAULT_API_URL),
        model=env.get("OPENAI_MODEL", DEFAULT_MODEL),
        temperature=_float(env, "OPENAI_TEMPERATURE", 0.2),
        system_prompt=env.get("CHAT_SYSTEM_PROMPT") or None,
        timeout_s=_float(env, "CHAT_TIMEOUT_S", 60.0),
    )
    return Settings(
        chat=chat,
        chat_api_base=env.get("CHAT_API_BASE", "http://localhost:5000").rstrip("/"),
        proxy_host=env.get("PROXY_HOST", "127.0.0.1"),
        proxy_port=int(_float(env, "PROXY_PORT", 5000)),
        log_level=_log_level(env),
        money_locale=env.get("MONEY_LOCALE", "sk-SK"),
    )
