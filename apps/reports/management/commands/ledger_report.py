"""
Management command to print the ledger's financial summary.

Loads purchase inputs and labour wages from the Record Store (falling back
to the Local Fallback Cache), applies a filter context and prints the
report.

Usage:
    python manage.py ledger_report --year 2024
    python manage.py ledger_report --date-from 2024-01-01 --date-to 2024-03-31 --product husk
    python manage.py ledger_report --passphrase husk-ledger --reduce 100
"""

from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError

from apps.ledger.session import LedgerSession
from apps.ledger.sync import LoadSource
from apps.reports.dashboard import ReportDashboard
from apps.reports.exceptions import InvalidFilterError, ReportsServiceError
from apps.reports.serializers import parse_report_filter

CENTS = Decimal('0.01')


def _money(value):
    return value.quantize(CENTS)


class Command(BaseCommand):
    help = 'Print revenue, costs, profit and product totals for a filter context'

    def add_arguments(self, parser):
        parser.add_argument('--year', default='all', help="'all' or a 4-digit year")
        parser.add_argument('--date-from', help='Inclusive start date (YYYY-MM-DD)')
        parser.add_argument('--date-to', help='Inclusive end date (YYYY-MM-DD)')
        parser.add_argument('--product', help='coconut, husk, shell or all (outputs only)')
        parser.add_argument('--passphrase', help='Unlock the capital panel to show capital')
        parser.add_argument('--reduce', help='Manual reduction of the coconuts-bought figure')

    def handle(self, *args, **options):
        try:
            filters = parse_report_filter({
                'year': options['year'],
                'dateFrom': options['date_from'],
                'dateTo': options['date_to'],
                'productType': options['product'],
            })
        except InvalidFilterError as e:
            raise CommandError(f"{e}: {e.errors}")

        session = LedgerSession.from_settings()
        dashboard = None
        try:
            sources = session.load()
            for name, source in sources.items():
                if source is LoadSource.CACHE:
                    self.stdout.write(
                        self.style.WARNING(f'{name}: Record Store unavailable, using local cache')
                    )

            if options['passphrase'] is not None and not session.capital.unlock(options['passphrase']):
                self.stdout.write(self.style.WARNING('Wrong passphrase: capital stays hidden'))

            dashboard = ReportDashboard(session, filters)
            if options['reduce'] is not None:
                try:
                    dashboard.reduce_coconut_count(options['reduce'])
                except ReportsServiceError as e:
                    raise CommandError(str(e))

            self._print_summary(dashboard.summary())
        finally:
            if dashboard is not None:
                dashboard.close()
            session.close()

    def _print_summary(self, data):
        self.stdout.write('\nFinancial summary')
        self.stdout.write(f"  Total revenue:  {_money(data['total_revenue'])}")
        self.stdout.write(f"  Input costs:    {_money(data['input_costs'])}")
        self.stdout.write(f"  Labour costs:   {_money(data['labour_costs'])}")
        self.stdout.write(f"  Total costs:    {_money(data['total_costs'])}")
        self.stdout.write(f"  Net profit:     {_money(data['net_profit'])}")
        self.stdout.write(f"  Profit margin:  {_money(data['profit_margin'])}%")

        self.stdout.write('\nProducts')
        for product in data['products'].values():
            self.stdout.write(
                f"  {product['label']}: {product['quantity']} {product['unit']} "
                f"({_money(product['revenue'])})"
            )
        self.stdout.write(f"  Husk drying area: {data['husk_square_feet']} sq ft")
        self.stdout.write(f"\nCoconuts bought: {data['coconuts_bought']}")

        if data['capital'] is not None:
            self.stdout.write(f"Capital: {_money(data['capital'])}")

        self.stdout.write(self.style.SUCCESS('\nReport complete'))
