"""
User model for the software-house manager.

Users log in with their email. ``role`` scopes the portal a user sees
(admin, team or client) and ``commissions_access`` is the explicit grant
that controls who may read or edit compensation data.
"""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class CustomUserManager(BaseUserManager):
    """
    Custom user model manager where email is the unique identifier
    for authentication instead of usernames.
    """
    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a User with the given email and password.
        """
        if not email:
            raise ValueError('The Email must be set')
        email = self.normalize_email(email)
        if 'username' not in extra_fields:
            extra_fields['username'] = email
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password, **extra_fields):
        """
        Create and save a SuperUser with the given email and password.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', User.Role.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):

    class Role(models.TextChoices):
        ADMIN = 'ADMIN', 'Admin'
        TEAM = 'TEAM', 'Team member'
        CLIENT = 'CLIENT', 'Client'

    class CommissionsAccess(models.TextChoices):
        NONE = 'NONE', 'No access'
        OWN_READ = 'OWN_READ', 'Read own commission'
        OWN_EDIT = 'OWN_EDIT', 'Edit own compensation profile'
        ALL = 'ALL', 'Read all commissions'
        ALL_EDIT = 'ALL_EDIT', 'Read and edit all commissions'

    username = models.CharField(max_length=150, unique=False, blank=True)
    email = models.EmailField('email address', unique=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    role = models.CharField(max_length=10, choices=Role.choices, default=Role.TEAM, db_index=True)
    commissions_access = models.CharField(
        max_length=10,
        choices=CommissionsAccess.choices,
        default=CommissionsAccess.OWN_READ,
    )

    objects = CustomUserManager()

    class Meta:
        ordering = ['email']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(role__in=['ADMIN', 'TEAM', 'CLIENT']),
                name='user_role_valid',
            ),
            models.CheckConstraint(
                condition=models.Q(commissions_access__in=['NONE', 'OWN_READ', 'OWN_EDIT', 'ALL', 'ALL_EDIT']),
                name='user_commissions_access_valid',
            ),
        ]

    def __str__(self):
        return self.email

    @property
    def name(self):
        return f"{self.first_name} {self.last_name}".strip() or self.username or self.email

    @property
    def is_admin(self):
        return self.is_superuser or self.role == self.Role.ADMIN

    @property
    def is_client(self):
        return self.role == self.Role.CLIENT and not self.is_superuser
