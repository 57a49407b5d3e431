from decimal import Decimal

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from .models import CoconutInput, LabourWage, Client, PaymentStatus
from .timestamps import parse_timestamp, normalize_timestamp


class TimestampField(serializers.CharField):
    """Raw date string on the way in, canonical ISO-8601 UTC on the way out."""

    default_error_messages = {
        'invalid_timestamp': 'Enter an ISO-8601 date or datetime.',
    }

    def __init__(self, **kwargs):
        kwargs.setdefault('max_length', 40)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if parse_timestamp(value) is None:
            self.fail('invalid_timestamp')
        return value

    def to_representation(self, value):
        return normalize_timestamp(value)


def _amount_field(**kwargs):
    return serializers.DecimalField(max_digits=14, decimal_places=4, **kwargs)


# =============================================================================
# Output Serializers (snake_case rows -> camelCase wire shape)
# =============================================================================

class CoconutInputSerializer(serializers.ModelSerializer):
    """Purchase input as returned by GET /api/coconut."""

    date = TimestampField(read_only=True)
    pricePerUnit = _amount_field(source='price_per_unit', read_only=True)
    totalPrice = _amount_field(source='total_price', read_only=True)
    clientName = serializers.CharField(source='client_name', read_only=True)
    paymentStatus = serializers.CharField(source='payment_status', read_only=True)

    class Meta:
        model = CoconutInput
        fields = [
            'id',
            'date',
            'count',
            'pricePerUnit',
            'totalPrice',
            'clientName',
            'paymentStatus',
        ]
        read_only_fields = fields


class LabourWageSerializer(serializers.ModelSerializer):
    """Labour wage as returned by GET /api/labour."""

    date = TimestampField(read_only=True)
    workerName = serializers.CharField(source='worker_name', read_only=True)
    days = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    ratePerDay = _amount_field(source='rate_per_day', read_only=True)
    totalWage = _amount_field(source='total_wage', read_only=True)

    class Meta:
        model = LabourWage
        fields = [
            'id',
            'date',
            'workerName',
            'days',
            'ratePerDay',
            'totalWage',
        ]
        read_only_fields = fields


class ClientSerializer(serializers.ModelSerializer):
    """Client as returned by GET /api/clients."""

    class Meta:
        model = Client
        fields = ['id', 'name']
        read_only_fields = fields


class SuccessSerializer(serializers.Serializer):
    """Acknowledgement body for writes."""

    success = serializers.BooleanField()


# =============================================================================
# Input Serializers
# =============================================================================

class CoconutInputUpdateSerializer(serializers.Serializer):
    """
    Validate the editable fields of a purchase input.

    Fields:
        count (int): Number of coconuts, at least 1
        pricePerUnit (decimal): Price per coconut, non-negative
        totalPrice (decimal): Must equal count × pricePerUnit
        clientName (str): Client the coconuts were bought from
        paymentStatus (str): pending, paid or partial; defaults to pending
    """

    count = serializers.IntegerField(min_value=1)
    pricePerUnit = _amount_field(source='price_per_unit', min_value=Decimal('0'))
    totalPrice = _amount_field(source='total_price', min_value=Decimal('0'))
    clientName = serializers.CharField(source='client_name', max_length=200)
    paymentStatus = serializers.ChoiceField(
        source='payment_status',
        choices=PaymentStatus.choices,
        required=False,
        allow_null=True,
    )

    def validate(self, attrs):
        """Reject totals that were not computed from their factors."""
        expected = attrs['count'] * attrs['price_per_unit']
        if attrs['total_price'] != expected:
            raise serializers.ValidationError({
                'totalPrice': f'Must equal count × pricePerUnit ({expected})'
            })
        return attrs


class CoconutInputCreateSerializer(CoconutInputUpdateSerializer):
    """Validate a new purchase input (caller supplies id and date)."""

    id = serializers.CharField(
        max_length=64,
        validators=[UniqueValidator(queryset=CoconutInput.objects.all())]
    )
    date = TimestampField()


class LabourWageUpdateSerializer(serializers.Serializer):
    """
    Validate the editable fields of a labour wage.

    Fields:
        workerName (str): Worker paid
        days (decimal): Days worked, positive
        ratePerDay (decimal): Daily rate, non-negative
        totalWage (decimal): Must equal days × ratePerDay
    """

    workerName = serializers.CharField(source='worker_name', max_length=200)
    days = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    ratePerDay = _amount_field(source='rate_per_day', min_value=Decimal('0'))
    totalWage = _amount_field(source='total_wage', min_value=Decimal('0'))

    def validate(self, attrs):
        expected = attrs['days'] * attrs['rate_per_day']
        if attrs['total_wage'] != expected:
            raise serializers.ValidationError({
                'totalWage': f'Must equal days × ratePerDay ({expected})'
            })
        return attrs


class LabourWageCreateSerializer(LabourWageUpdateSerializer):
    """Validate a new labour wage (caller supplies id and date)."""

    id = serializers.CharField(
        max_length=64,
        validators=[UniqueValidator(queryset=LabourWage.objects.all())]
    )
    date = TimestampField()


class ClientCreateSerializer(serializers.Serializer):
    """Validate a new client; names are unique."""

    id = serializers.CharField(
        max_length=64,
        validators=[UniqueValidator(queryset=Client.objects.all())]
    )
    name = serializers.CharField(
        max_length=200,
        validators=[UniqueValidator(queryset=Client.objects.all())]
    )
