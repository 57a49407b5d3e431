from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'
    PARTIAL = 'partial', 'Partial'


class CoconutInput(models.Model):
    """Coconuts bought from a client (a purchase input)."""

    # Caller-generated identifier
    id = models.CharField(primary_key=True, max_length=64)

    # Stored as received; normalized to ISO-8601 on read
    date = models.CharField(max_length=40)

    count = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price_per_unit = models.DecimalField(
        max_digits=14,
        decimal_places=4,
        validators=[MinValueValidator(Decimal('0'))]
    )
    total_price = models.DecimalField(max_digits=14, decimal_places=4)

    # References Client.name by value, no foreign key
    client_name = models.CharField(max_length=200, db_column='client')

    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING
    )

    class Meta:
        db_table = 'coconut_inputs'
        indexes = [
            models.Index(fields=['date'], name='coconut_inputs_date_idx'),
        ]
        ordering = ['-date']

    def __str__(self):
        return f"{self.count} coconuts from {self.client_name} - {self.total_price}"


class LabourWage(models.Model):
    """Wage paid to a worker for a number of days."""

    id = models.CharField(primary_key=True, max_length=64)
    date = models.CharField(max_length=40)

    worker_name = models.CharField(max_length=200)
    days = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    rate_per_day = models.DecimalField(
        max_digits=14,
        decimal_places=4,
        validators=[MinValueValidator(Decimal('0'))]
    )
    total_wage = models.DecimalField(max_digits=14, decimal_places=4)

    class Meta:
        db_table = 'labour_wages'
        indexes = [
            models.Index(fields=['date'], name='labour_wages_date_idx'),
        ]
        ordering = ['-date']

    def __str__(self):
        return f"{self.worker_name}: {self.days} days - {self.total_wage}"


class Client(models.Model):
    """Supplier of coconuts, referenced by name from purchase inputs."""

    id = models.CharField(primary_key=True, max_length=64)
    name = models.CharField(max_length=200, unique=True)

    class Meta:
        db_table = 'clients'
        ordering = ['name']

    def __str__(self):
        return self.name
