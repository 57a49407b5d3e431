import django.core.validators
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, unique=True)),
            ],
            options={
                'db_table': 'clients',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='CoconutInput',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('date', models.CharField(max_length=40)),
                ('count', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('price_per_unit', models.DecimalField(decimal_places=4, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('total_price', models.DecimalField(decimal_places=4, max_digits=14)),
                ('client_name', models.CharField(db_column='client', max_length=200)),
                ('payment_status', models.CharField(choices=[('pending', 'Pending'), ('paid', 'Paid'), ('partial', 'Partial')], default='pending', max_length=10)),
            ],
            options={
                'db_table': 'coconut_inputs',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['date'], name='coconut_inputs_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='LabourWage',
            fields=[
                ('id', models.CharField(max_length=64, primary_key=True, serialize=False)),
                ('date', models.CharField(max_length=40)),
                ('worker_name', models.CharField(max_length=200)),
                ('days', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('rate_per_day', models.DecimalField(decimal_places=4, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('total_wage', models.DecimalField(decimal_places=4, max_digits=14)),
            ],
            options={
                'db_table': 'labour_wages',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['date'], name='labour_wages_date_idx')],
            },
        ),
    ]
