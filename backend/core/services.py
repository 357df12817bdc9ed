"""
Base class for business-logic services.

Services carry the acting user and a module logger. They raise the
exceptions from ``core.exceptions`` instead of returning result objects, so
a failure inside ``transaction.atomic()`` rolls the whole operation back.
"""

import logging

from .exceptions import NotFound


class BaseService:

    def __init__(self, user=None):
        """
        Args:
            user: The user making the request (None for system calls)
        """
        self.user = user
        self.logger = logging.getLogger(self.__class__.__module__)

    @property
    def actor(self):
        """Short description of the acting user for log lines."""
        if self.user is None:
            return 'system'
        return getattr(self.user, 'email', None) or f"user#{self.user.pk}"

    def get_or_404(self, queryset, label, **lookup):
        """Fetch one row or raise NotFound naming ``label``."""
        try:
            return queryset.get(**lookup)
        except (queryset.model.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"{label} not found.")
