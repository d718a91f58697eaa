"""Create the initial administrator account."""

from __future__ import annotations

from django.core.management.base import BaseCommand

from accounts.models import User
from accounts.services import generate_temp_password


class Command(BaseCommand):
    help = "Create the initial ADMIN user if no account exists for the given email."

    def add_arguments(self, parser):
        parser.add_argument("--email", default="admin@pililokal.com")
        parser.add_argument("--name", default="Admin User")
        parser.add_argument(
            "--password",
            default="",
            help="Initial password. A random temporary password is generated when omitted.",
        )

    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            self.stdout.write(self.style.WARNING(f"User {email} already exists, nothing to do."))
            return

        password = options["password"] or generate_temp_password()
        User.objects.create_user(
            email=email,
            password=password,
            name=options["name"],
            role=User.Role.ADMIN,
            is_staff=True,
        )
        self.stdout.write(self.style.SUCCESS(f"Admin {email} created."))
        if not options["password"]:
            self.stdout.write(f"Temporary password: {password}")
