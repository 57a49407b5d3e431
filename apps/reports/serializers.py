"""
Serializers for reports app.

Input Serializers:
    ReportFilterSerializer - Validates the filter context (year, date range, product)
"""

from rest_framework import serializers

from apps.ledger.entities import ProductType
from .exceptions import InvalidFilterError
from .filters import ALL, ReportFilter


class ReportFilterSerializer(serializers.Serializer):
    """
    Validate report filter parameters.

    Query Parameters:
        year (str): 'all' or a 4-digit year (default 'all')
        dateFrom (date): Inclusive lower bound
        dateTo (date): Inclusive upper bound
        productType (str): coconut, husk, shell or 'all' (outputs only)
    """

    year = serializers.RegexField(
        regex=r'^(all|\d{4})$',
        required=False,
        default=ALL,
        help_text="'all' or a 4-digit year",
    )
    dateFrom = serializers.DateField(source='date_from', required=False, allow_null=True)
    dateTo = serializers.DateField(source='date_to', required=False, allow_null=True)
    productType = serializers.ChoiceField(
        source='product_type',
        choices=[ALL] + [product.value for product in ProductType],
        required=False,
        allow_null=True,
    )

    def validate(self, attrs):
        start = attrs.get('date_from')
        end = attrs.get('date_to')
        if start and end and start > end:
            raise serializers.ValidationError({
                'dateFrom': 'dateFrom must be on or before dateTo'
            })
        if attrs.get('product_type') == ALL:
            attrs['product_type'] = None
        return attrs

    def to_filter(self):
        data = self.validated_data
        return ReportFilter(
            year=data.get('year') or ALL,
            date_from=data.get('date_from'),
            date_to=data.get('date_to'),
            product_type=data.get('product_type'),
        )


def parse_report_filter(params):
    """
    Build a ReportFilter from raw parameters.

    Raises:
        InvalidFilterError: If any parameter is invalid.
    """
    serializer = ReportFilterSerializer(data={
        key: value for key, value in params.items() if value not in (None, '')
    })
    if not serializer.is_valid():
        raise InvalidFilterError("Invalid report filter", errors=serializer.errors)
    return serializer.to_filter()
