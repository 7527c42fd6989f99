# activity/management/commands/cleanup_activity.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from activity.services.notifications import NotificationService
from activity.services.tracker import cleanup_old_updates


class Command(BaseCommand):
    help = "Delete recent updates and read notifications older than --days, per designer."

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=int,
            default=30,
            help="Keep rows newer than this many days (default 30).",
        )
        parser.add_argument(
            "--email",
            help="Only clean up this designer's rows.",
        )

    def handle(self, *args, **options):
        days = options["days"]
        if days < 1:
            raise CommandError("--days must be at least 1")

        users = get_user_model().objects.all()
        if options.get("email"):
            users = users.filter(email__iexact=options["email"])
            if not users.exists():
                raise CommandError(f"No designer with email {options['email']}")

        notifications = NotificationService()
        total_updates = 0
        total_notifications = 0

        for user in users.only("id", "email"):
            updates = cleanup_old_updates(user.pk, days_to_keep=days)
            read = notifications.cleanup_old_notifications(user.pk, days_to_keep=days)
            total_updates += updates
            total_notifications += read
            if updates or read:
                self.stdout.write(f"{user.email}: {updates} updates, {read} notifications")

        self.stdout.write(
            self.style.SUCCESS(
                f"Done. Removed {total_updates} updates and {total_notifications} notifications."
            )
        )
