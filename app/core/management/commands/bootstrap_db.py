"""
Management command that prepares the SQLite database.

Usage:
    python manage.py bootstrap_db
    python manage.py bootstrap_db --database default
"""

from django.core.management.base import BaseCommand

from core.database import bootstrap_database


class Command(BaseCommand):
    help = (
        "Verify database integrity, recreate the file if it is corrupt, "
        "and apply migrations."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--database",
            default="default",
            help="Database alias to bootstrap (default: 'default').",
        )

    def handle(self, *args, **options):
        report = bootstrap_database(
            using=options["database"],
            verbosity=options["verbosity"],
        )

        if report.recreated:
            self.stdout.write(
                self.style.WARNING(
                    f"Database {report.path} failed the integrity check "
                    "and was recreated."
                )
            )
        self.stdout.write(self.style.SUCCESS(f"Database '{report.database}' is ready."))
