import logging

import uvicorn

from src.api import create_app
from src.config import get_config, get_environment


def main():
    """Load configuration, set up logging and serve the API."""
    config = get_config()

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    app = create_app(config)
    logger.info(
        f"Starting {config.api.title} ({get_environment()} environment) "
        f"on {config.server.host}:{config.server.port}"
    )

    if config.server.reload:
        # Reload needs an import string; the module-level app uses default settings
        uvicorn.run("src.api:app", host=config.server.host, port=config.server.port, reload=True)
    else:
        uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
