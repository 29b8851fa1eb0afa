"""
Core application configuration.

Registers the SQLite connection setup that every new database connection
goes through.
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Core"

    def ready(self):
        from django.db.backends.signals import connection_created

        from core.database import configure_sqlite_connection

        connection_created.connect(
            configure_sqlite_connection,
            dispatch_uid="core.configure_sqlite_connection",
        )
