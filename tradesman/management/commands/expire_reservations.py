"""
Management command to expire past-due reservations.

Usage:
    python manage.py expire_reservations
    python manage.py expire_reservations --dry-run
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from tradesman.adapters.noop import AllowAllGate
from tradesman.models import StockReservation
from tradesman.services.reservations import StockReservations


class Command(BaseCommand):
    """Expire reservations command."""

    help = 'Expira reservas de estoque vencidas'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Mostra o que seria expirado sem executar'
        )

    def handle(self, *args, **options):
        if options['dry_run']:
            expired = StockReservation.objects.past_due(timezone.now()).count()
            self.stdout.write(f'{expired} reserva(s) seria(m) expirada(s)')
        else:
            # System job: no user to check permissions against
            count = StockReservations(gate=AllowAllGate()).expire()
            self.stdout.write(
                self.style.SUCCESS(f'{count} reserva(s) expirada(s)')
            )
