from django.contrib.auth import get_user_model
from django.db import transaction

from core.services import BaseService
from .models import CompensationProfile


class CompensationService(BaseService):

    def upsert_profile(self, user_id, data):
        """
        Create or replace the compensation profile of ``user_id``.

        Args:
            user_id: owner of the profile
            data: validated fields (has_fixed_salary, fixed_salary,
                hour_rate, effective_from)
        """
        with transaction.atomic():
            user = self.get_or_404(get_user_model().objects.all(), 'User', pk=user_id)
            profile, created = CompensationProfile.objects.update_or_create(
                user=user,
                defaults={**data, 'updated_by': self.user},
            )

        self.logger.info(
            f"Compensation profile for user {user.pk} {'created' if created else 'updated'} by {self.actor}: "
            f"fixed={profile.fixed_salary if profile.has_fixed_salary else 'none'} rate={profile.hour_rate}"
        )
        return profile
