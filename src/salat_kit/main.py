"""Main entry point for Salat-Kit application."""

import logging

import uvicorn

from salat_kit.api.app import create_app
from salat_kit.config import get_config, setup_logging


def main() -> None:
    """Run the Salat-Kit application."""
    config = get_config()
    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info("Salat-Kit başlatılıyor...")
    logger.info(f"Ayar dosyası: {config.settings_path}")
    logger.info(f"Vakit sağlayıcı: {config.prayer_provider}")

    app = create_app(config)

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
