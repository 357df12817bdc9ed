from decimal import Decimal

from django.conf import settings
from django.db import models

CENTS = Decimal('0.01')


class CompensationProfile(models.Model):
    """
    How a user is paid: an optional fixed salary plus an hourly rate applied
    to the estimated minutes of the tasks they complete.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='compensation_profile'
    )
    has_fixed_salary = models.BooleanField(default=False)
    fixed_salary = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    hour_rate = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    effective_from = models.DateField(null=True, blank=True)

    # Audit fields
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='updated_compensation_profiles',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['user__email']
        constraints = [
            models.CheckConstraint(condition=models.Q(hour_rate__gte=0), name='compensation_hour_rate_non_negative'),
            models.CheckConstraint(
                condition=models.Q(fixed_salary__isnull=True) | models.Q(fixed_salary__gte=0),
                name='compensation_fixed_salary_non_negative',
            ),
        ]

    def __str__(self):
        return f"Compensation for {self.user.email}"

    @classmethod
    def default_for(cls, user):
        """Unsaved profile used when a user has none: no salary, rate 0."""
        return cls(user=user, has_fixed_salary=False, fixed_salary=None, hour_rate=Decimal('0.00'))

    @property
    def effective_fixed_salary(self):
        if not self.has_fixed_salary:
            return Decimal('0.00')
        return (self.fixed_salary or Decimal('0')).quantize(CENTS)
