import logging

from api.server import create_app
from config import load_settings

logger = logging.getLogger(__name__)

def main():
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    if not settings.chat.api_key:
        logger.warning("OPENAI_API_KEY is not set; /api/chat will answer 500")

    app = create_app(settings)
    logger.info("Chat proxy listening on %s:%s", settings.proxy_host, settings.proxy_port)
    app.run(host=settings.proxy_host, port=settings.proxy_port)

if __name__ == "__main__":
    main()
