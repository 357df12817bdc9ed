import datetime
from decimal import Decimal

from django.urls import reverse
from faker import Faker
from rest_framework import status
from rest_framework.test import APITestCase

from authentication.models import User
from commission.models import CompensationProfile
from project.models import Project
from scrum.models import Task

fake = Faker()
Access = User.CommissionsAccess


class CommissionAPITests(APITestCase):
    """
    Test suite for the Commission API endpoints.
    """

    def make_user(self, role=User.Role.TEAM, access=Access.OWN_READ):
        return User.objects.create_user(
            email=fake.unique.email(), password='password123', role=role, commissions_access=access,
            first_name=fake.first_name(), last_name=fake.last_name(),
        )

    def setUp(self):
        self.admin = self.make_user(role=User.Role.ADMIN)
        self.developer = self.make_user()
        self.designer = self.make_user(access=Access.OWN_EDIT)
        self.finance = self.make_user(access=Access.ALL)
        self.manager = self.make_user(access=Access.ALL_EDIT)
        self.outsider = self.make_user(access=Access.NONE)
        self.client_user = self.make_user(role=User.Role.CLIENT)

        CompensationProfile.objects.create(
            user=self.developer, has_fixed_salary=True, fixed_salary=Decimal('1000.00'), hour_rate=Decimal('50.00'),
        )
        project = Project.objects.create(name='Storefront', created_by=self.admin)
        self.june_task = Task.objects.create(
            title='Cart', project=project, assignee=self.developer, status=Task.Status.COMPLETED,
            estimated_minutes=120, actual_minutes=400, order=0,
        )
        self.july_task = Task.objects.create(
            title='Wishlist', project=project, assignee=self.developer, status=Task.Status.COMPLETED,
            estimated_minutes=60, order=1,
        )
        Task.objects.create(title='Search', project=project, assignee=self.developer, estimated_minutes=90, order=2)

        Task.objects.filter(pk=self.june_task.pk).update(
            completed_at=datetime.datetime(2025, 6, 12, 15, tzinfo=datetime.timezone.utc),
            updated_at=datetime.datetime(2025, 6, 12, 15, tzinfo=datetime.timezone.utc),
        )
        Task.objects.filter(pk=self.july_task.pk).update(
            completed_at=datetime.datetime(2025, 7, 3, 9, tzinfo=datetime.timezone.utc),
            updated_at=datetime.datetime(2025, 7, 3, 9, tzinfo=datetime.timezone.utc),
        )

        self.list_url = reverse('commission-list')
        self.developer_url = reverse('commission-detail', kwargs={'user_id': self.developer.pk})

    def test_user_reads_own_commission(self):
        self.client.force_authenticate(user=self.developer)
        response = self.client.get(self.developer_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        summary = response.data['summary']
        self.assertEqual(summary['minutesCompleted'], 180)
        self.assertEqual(summary['variablePay'], Decimal('150.00'))
        self.assertEqual(summary['fixedSalary'], Decimal('1000.00'))
        self.assertEqual(summary['totalPay'], Decimal('1150.00'))
        self.assertEqual(response.data['profile']['hourRate'], Decimal('50.00'))
        self.assertEqual([task['title'] for task in response.data['tasks']], ['Wishlist', 'Cart'])

    def test_date_range_filters_tasks(self):
        self.client.force_authenticate(user=self.developer)
        response = self.client.get(self.developer_url, {'from': '2025-06-01', 'to': '2025-06-30'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['summary']['minutesCompleted'], 120)
        self.assertEqual(response.data['summary']['totalPay'], Decimal('1100.00'))
        self.assertEqual(response.data['tasks'][0]['projectName'], 'Storefront')
        self.assertEqual(response.data['tasks'][0]['minutes'], 120)

    def test_half_range_is_rejected(self):
        self.client.force_authenticate(user=self.developer)
        response = self.client.get(self.developer_url, {'from': '2025-06-01'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('to', response.data['details'])

    def test_reversed_range_is_rejected(self):
        self.client.force_authenticate(user=self.developer)
        response = self.client.get(self.developer_url, {'from': '2025-07-01', 'to': '2025-06-01'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_user_without_profile_gets_defaults(self):
        self.client.force_authenticate(user=self.designer)
        response = self.client.get(reverse('commission-detail', kwargs={'user_id': self.designer.pk}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['profile']['hasFixedSalary'], False)
        self.assertEqual(response.data['summary']['totalPay'], Decimal('0.00'))
        self.assertEqual(response.data['tasks'], [])

    def test_read_access_matrix(self):
        cases = [
            (self.admin, status.HTTP_200_OK),
            (self.finance, status.HTTP_200_OK),
            (self.manager, status.HTTP_200_OK),
            (self.designer, status.HTTP_403_FORBIDDEN),
            (self.outsider, status.HTTP_403_FORBIDDEN),
            (self.client_user, status.HTTP_403_FORBIDDEN),
        ]
        for user, expected in cases:
            with self.subTest(user=user.email):
                self.client.force_authenticate(user=user)
                response = self.client.get(self.developer_url)
                self.assertEqual(response.status_code, expected)

    def test_no_access_user_cannot_read_own(self):
        self.client.force_authenticate(user=self.outsider)
        response = self.client.get(reverse('commission-detail', kwargs={'user_id': self.outsider.pk}))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_write_access_matrix(self):
        body = {'hasFixedSalary': False, 'hourRate': '65.00'}
        cases = [
            (self.developer, self.developer, status.HTTP_403_FORBIDDEN),
            (self.finance, self.developer, status.HTTP_403_FORBIDDEN),
            (self.designer, self.developer, status.HTTP_403_FORBIDDEN),
            (self.designer, self.designer, status.HTTP_200_OK),
            (self.manager, self.developer, status.HTTP_200_OK),
            (self.admin, self.finance, status.HTTP_200_OK),
        ]
        for actor, target, expected in cases:
            with self.subTest(actor=actor.email, target=target.email):
                self.client.force_authenticate(user=actor)
                url = reverse('commission-detail', kwargs={'user_id': target.pk})
                response = self.client.put(url, body, format='json')
                self.assertEqual(response.status_code, expected)

    def test_put_upserts_profile(self):
        self.client.force_authenticate(user=self.admin)
        url = reverse('commission-detail', kwargs={'user_id': self.designer.pk})

        response = self.client.put(url, {'hasFixedSalary': True, 'fixedSalary': '2500.00', 'hourRate': '20'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['summary']['totalPay'], Decimal('2500.00'))

        response = self.client.put(url, {'hasFixedSalary': False, 'hourRate': '30'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        profile = CompensationProfile.objects.get(user=self.designer)
        self.assertFalse(profile.has_fixed_salary)
        self.assertEqual(profile.hour_rate, Decimal('30.00'))
        self.assertEqual(profile.updated_by, self.admin)
        self.assertEqual(CompensationProfile.objects.filter(user=self.designer).count(), 1)

    def test_put_validation(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.put(self.developer_url, {'hasFixedSalary': True}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('fixedSalary', response.data['details'])

        response = self.client.put(self.developer_url, {'hourRate': '-5'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_put_for_missing_user(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.put(reverse('commission-detail', kwargs={'user_id': 9999}), {'hourRate': '10'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_scope(self):
        self.client.force_authenticate(user=self.finance)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        user_ids = {row['userId'] for row in response.data}
        self.assertIn(self.developer.pk, user_ids)
        self.assertNotIn(self.client_user.pk, user_ids)
        self.assertEqual(len(user_ids), 6)

        row = next(row for row in response.data if row['userId'] == self.developer.pk)
        self.assertEqual(row['totalPay'], Decimal('1150.00'))
        self.assertEqual(row['email'], self.developer.email)

        self.client.force_authenticate(user=self.developer)
        response = self.client.get(self.list_url, {'from': '2025-07-01', 'to': '2025-07-31'})
        self.assertEqual([row['userId'] for row in response.data], [self.developer.pk])
        self.assertEqual(response.data[0]['minutesCompleted'], 60)

        self.client.force_authenticate(user=self.outsider)
        self.assertEqual(self.client.get(self.list_url).data, [])

    def test_client_cannot_list(self):
        self.client.force_authenticate(user=self.client_user)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
