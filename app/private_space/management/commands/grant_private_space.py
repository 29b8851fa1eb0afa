"""
Management command that gives a user access to the private space.

Usage:
    python manage.py grant_private_space alice
"""

from django.core.management.base import BaseCommand, CommandError

from authentication.models import User
from private_space.services import PrivateSpaceService


class Command(BaseCommand):
    help = "Grant a user access to the private space (two members at most)."

    def add_arguments(self, parser):
        parser.add_argument("username", help="Username to grant access to.")

    def handle(self, *args, **options):
        user = User.objects.filter(username=options["username"]).first()
        if user is None:
            raise CommandError(f"User '{options['username']}' does not exist.")

        result = PrivateSpaceService.grant_access(user)
        if not result:
            raise CommandError(result.error)

        self.stdout.write(self.style.SUCCESS(f"{user.username} can now use the private space."))
