"""
Django management command to remove old per-day order counters.

Order codes use one counter row per calendar day. Once a day is over its
row is never incremented again, so rows older than the retention period
can go.

Usage:
    python manage.py prune_order_counters
    python manage.py prune_order_counters --days 30 --dry-run
"""

from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from orders.models import OrderCounter


class Command(BaseCommand):
    help = 'Delete per-day order counters older than the retention period'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=7,
            help='Keep counters for this many most recent days (default: 7)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without making changes',
        )

    def handle(self, *args, **options):
        days = options['days']
        if days < 1:
            self.stderr.write(self.style.ERROR("--days must be at least 1"))
            return

        cutoff = (timezone.localdate() - timedelta(days=days)).strftime('%Y%m%d')

        # Names sort like their dates: order-YYYYMMDD
        stale = OrderCounter.all_objects.filter(
            name__startswith='order-',
            name__lt=f'order-{cutoff}',
        )
        total = stale.count()

        self.stdout.write(f"Found {total} counters older than order-{cutoff}")

        if options['dry_run']:
            for counter in stale.order_by('name'):
                self.stdout.write(f"  {counter.name}: {counter.seq}")
            self.stdout.write(self.style.WARNING("DRY RUN - No actual changes were made"))
            return

        deleted, _ = stale.delete()
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} counters"))
