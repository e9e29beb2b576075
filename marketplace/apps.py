import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class MarketplaceConfig(AppConfig):
    name = "marketplace"
    verbose_name = "Marketplace"

    container = None

    def ready(self):
        from infrastructure.container import ServiceContainer

        self.container = ServiceContainer()
        # Creates the upload directories; a failure here stops startup.
        self.container.storage()
        logger.info("Marketplace service container ready")
