import logging

from django.core.management.base import BaseCommand, CommandError
from pymongo.errors import PyMongoError

from infrastructure.container import get_container
from infrastructure.database import DatabaseInitializer

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Creates MongoDB collections and indexes and seeds the initial categories."

    def handle(self, *args, **options):
        context = get_container().database()
        self.stdout.write(self.style.SUCCESS(f"Initializing database '{context.settings.database_name}'..."))

        initializer = DatabaseInitializer(context)
        try:
            created = initializer.create_collections()
            initializer.create_indexes()
            seeded = initializer.seed_categories()
        except PyMongoError as e:
            logger.error(f"Database initialization failed: {e}", exc_info=True)
            raise CommandError(f"Database initialization failed: {e}") from e

        for name in created:
            self.stdout.write(self.style.SUCCESS(f"Created collection: {name}"))
        if seeded:
            self.stdout.write(self.style.SUCCESS(f"Seeded {seeded} categories"))
        else:
            self.stdout.write(self.style.WARNING("Categories already exist, seeding skipped"))

        self.stdout.write(self.style.SUCCESS("Database initialization complete."))
