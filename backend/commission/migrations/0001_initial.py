from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CompensationProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('has_fixed_salary', models.BooleanField(default=False)),
                ('fixed_salary', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('hour_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('effective_from', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='updated_compensation_profiles', to=settings.AUTH_USER_MODEL)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='compensation_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['user__email'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('hour_rate__gte', 0)), name='compensation_hour_rate_non_negative'),
                    models.CheckConstraint(condition=models.Q(('fixed_salary__isnull', True), ('fixed_salary__gte', 0), _connector='OR'), name='compensation_fixed_salary_non_negative'),
                ],
            },
        ),
    ]
