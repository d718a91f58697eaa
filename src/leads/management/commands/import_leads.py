"""Load the merchants workbook into the lead table."""

from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.exceptions import ActionError
from leads.services import import_workbook


class Command(BaseCommand):
    help = "Replace all leads with the rows of the merchants workbook."

    def add_arguments(self, parser):
        parser.add_argument(
            "path",
            nargs="?",
            default="",
            help="Workbook path (defaults to LEADS_WORKBOOK_PATH).",
        )

    def handle(self, *args, **options):
        path = Path(options["path"] or settings.LEADS_WORKBOOK_PATH)
        if not path.exists():
            raise CommandError(f"Workbook not found: {path}")

        try:
            result = import_workbook(path)
        except ActionError as exc:
            raise CommandError(exc.message) from exc

        for sheet, count in result.by_sheet.items():
            self.stdout.write(f"  {sheet}: {count}")
        self.stdout.write(self.style.SUCCESS(f"Imported {result.count} leads from {path.name}."))
