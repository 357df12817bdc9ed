import pytest
from faker import Faker
from rest_framework.test import APIClient

from authentication.models import User
from project.models import Project

fake = Faker()


@pytest.fixture
def make_user(db):
    def _make_user(role=User.Role.TEAM, **extra):
        return User.objects.create_user(
            email=fake.unique.email(),
            password='password123',
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            role=role,
            **extra,
        )
    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user(role=User.Role.ADMIN)


@pytest.fixture
def member(make_user):
    return make_user()


@pytest.fixture
def project(db, admin_user):
    return Project.objects.create(name=fake.catch_phrase(), created_by=admin_user)


@pytest.fixture
def api_client(member):
    client = APIClient()
    client.force_authenticate(user=member)
    return client
