# app/main.py

import logging
import sys

import uvicorn

from api.application import create_app, create_asgi_app
from config.settings import get_settings
from exceptions.domain_exceptions import ConfigurationError

logger = logging.getLogger(__name__)

try:
    settings = get_settings()
except ConfigurationError as e:
    logging.basicConfig(level=logging.INFO)
    logger.critical(f"Refusing to start: {e.message}")
    sys.exit(1)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

fastapi_app = create_app(settings)

# This allows Socket.IO to handle /socket.io/* paths and pass everything else to FastAPI
app = create_asgi_app(fastapi_app)


if __name__ == "__main__":
    # uvicorn stops accepting connections on SIGINT/SIGTERM, then runs the lifespan shutdown
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
