"""
Report Queries
==============

Aggregation over the three ledger record kinds for a filter context.

Classes:
    ReportQueries: Static methods computing filtered sets and aggregates.

Example:
    Summarizing a year::

        from apps.reports.analytics import ReportQueries
        from apps.reports.filters import ReportFilter

        filters = ReportFilter(year='2023')
        summary = ReportQueries.financial_summary(
            outputs=session.outputs,
            purchase_inputs=session.purchase_inputs,
            labour_wages=session.labour_wages,
            filters=filters,
        )
        print(f"Net profit: {summary['net_profit']}")

Note:
    Methods return plain dictionaries of Decimals; rounding is left to the
    caller's display code.
"""

from datetime import date
from decimal import Decimal

from apps.ledger.entities import ProductType
from .filters import ReportFilter

HUSK_SQUARE_FEET_PER_LOAD = 630
FIRST_REPORT_YEAR = 2020

ZERO = Decimal('0')


class ReportQueries:
    """
    Pure aggregation helpers.

    Methods:
        filter_records: Purchase inputs or labour wages within the filter.
        filter_outputs: Outputs within the filter (product type included).
        financial_summary: Revenue, costs, profit and margin.
        product_breakdown: Quantity and revenue per product type.
        cost_breakdown: Revenue against input and labour costs.
        total_coconut_count: Coconuts in the filtered purchase inputs.
        coconuts_bought: Count less a manual reduction, floored at zero.
        available_years: Year choices offered to the user.
    """

    @staticmethod
    def filter_records(records, filters=None):
        filters = filters or ReportFilter()
        return [record for record in records if filters.matches_date(record)]

    @staticmethod
    def filter_outputs(outputs, filters=None):
        filters = filters or ReportFilter()
        return [output for output in outputs if filters.matches_output(output)]

    @staticmethod
    def financial_summary(outputs, purchase_inputs, labour_wages, filters=None):
        """
        Calculate the headline figures for a filter context.

        Returns:
            dict: {
                'total_revenue': Decimal,
                'input_costs': Decimal,
                'labour_costs': Decimal,
                'total_costs': Decimal,
                'net_profit': Decimal,
                'profit_margin': Decimal  # percent; 0 when revenue is 0
            }
        """
        total_revenue = sum(
            (output.total_price for output in ReportQueries.filter_outputs(outputs, filters)), ZERO
        )
        input_costs = sum(
            (record.total_price for record in ReportQueries.filter_records(purchase_inputs, filters)), ZERO
        )
        labour_costs = sum(
            (wage.total_wage for wage in ReportQueries.filter_records(labour_wages, filters)), ZERO
        )
        total_costs = input_costs + labour_costs
        net_profit = total_revenue - total_costs
        profit_margin = net_profit / total_revenue * 100 if total_revenue else ZERO

        return {
            'total_revenue': total_revenue,
            'input_costs': input_costs,
            'labour_costs': labour_costs,
            'total_costs': total_costs,
            'net_profit': net_profit,
            'profit_margin': profit_margin,
        }

    @staticmethod
    def product_breakdown(outputs, filters=None):
        """
        Sum quantities and revenue per product type.

        Returns:
            dict: {
                'products': {
                    'coconut': {'label', 'unit', 'quantity', 'revenue'},
                    'husk': {...},
                    'shell': {...},
                },
                'husk_square_feet': Decimal  # husk loads × 630
            }
        """
        products = {
            product.value: {
                'label': product.label,
                'unit': product.unit,
                'quantity': ZERO,
                'revenue': ZERO,
            }
            for product in ProductType
        }
        for output in ReportQueries.filter_outputs(outputs, filters):
            entry = products[output.product_type]
            entry['quantity'] += output.quantity
            entry['revenue'] += output.total_price

        husk_loads = products[ProductType.HUSK.value]['quantity']
        return {
            'products': products,
            'husk_square_feet': husk_loads * HUSK_SQUARE_FEET_PER_LOAD,
        }

    @staticmethod
    def cost_breakdown(outputs, purchase_inputs, labour_wages, filters=None):
        """Revenue, input costs and labour costs as chart rows."""
        summary = ReportQueries.financial_summary(outputs, purchase_inputs, labour_wages, filters)
        return [
            {'name': 'Revenue', 'amount': summary['total_revenue']},
            {'name': 'Input Costs', 'amount': summary['input_costs']},
            {'name': 'Labour Costs', 'amount': summary['labour_costs']},
        ]

    @staticmethod
    def total_coconut_count(purchase_inputs, filters=None):
        return sum(record.count for record in ReportQueries.filter_records(purchase_inputs, filters))

    @staticmethod
    def coconuts_bought(purchase_inputs, filters=None, reduced_count=0):
        """Filtered coconut count less ``reduced_count``, never below zero."""
        return max(ReportQueries.total_coconut_count(purchase_inputs, filters) - reduced_count, 0)

    @staticmethod
    def available_years(today=None):
        """Years from the current one back to 2020, newest first, as strings."""
        current = (today or date.today()).year
        return [str(year) for year in range(current, FIRST_REPORT_YEAR - 1, -1)]
