from typing import Optional

import requests
from flask import Flask

from api.chat import ChatProxy, create_chat_blueprint
from config import Settings, load_settings

def create_app(settings: Optional[Settings] = None, session: Optional[requests.Session] = None) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.json.sort_keys = False
    proxy = ChatProxy(settings.chat, session=session)
    app.register_blueprint(create_chat_blueprint(proxy))
    return app
