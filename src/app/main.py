import logging

import uvicorn

from src.app.application import create_app
from src.app.config import get_settings
from src.app.containers import Container
from src.app.logging import configure_logging

settings = get_settings()

# Configure logging at module load time
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

container = Container()
container.config.override(settings)
app = create_app(container=container)


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
