import pytest
from django.db import IntegrityError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from .models import User


class LoginTests(APITestCase):
    def setUp(self):
        self.login_url = reverse('authentication:login')
        self.user = User.objects.create_user(
            email='dev@softhouse.test', password='s3cret-pass', first_name='Dana', last_name='Dev'
        )

    def test_login_returns_token(self):
        response = self.client.post(
            self.login_url, {'email': 'dev@softhouse.test', 'password': 's3cret-pass'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('token', response.data)
        self.assertEqual(response.data['user']['email'], 'dev@softhouse.test')

    def test_token_authenticates_api_calls(self):
        response = self.client.post(
            self.login_url, {'email': 'dev@softhouse.test', 'password': 's3cret-pass'}, format='json'
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {response.data['token']}")
        response = self.client.get(reverse('task-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_login_failure(self):
        response = self.client.post(
            self.login_url, {'email': 'dev@softhouse.test', 'password': 'wrong'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'error': 'Invalid credentials'})

    def test_unauthenticated_request_is_rejected(self):
        response = self.client.get(reverse('task-list'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.data)


@pytest.mark.django_db
def test_user_defaults():
    user = User.objects.create_user(email='new@softhouse.test', password='x')
    assert user.role == User.Role.TEAM
    assert user.commissions_access == User.CommissionsAccess.OWN_READ
    assert user.username == 'new@softhouse.test'
    assert not user.is_admin


@pytest.mark.django_db
def test_superuser_is_admin():
    user = User.objects.create_superuser(email='root@softhouse.test', password='x')
    assert user.role == User.Role.ADMIN
    assert user.is_admin


@pytest.mark.django_db
def test_commissions_access_is_constrained():
    with pytest.raises(IntegrityError):
        User.objects.create_user(email='bad@softhouse.test', password='x', commissions_access='EVERYTHING')
