from django.urls import reverse
from faker import Faker
from rest_framework import status
from rest_framework.test import APITestCase

from authentication.models import User
from .models import Project, Milestone

fake = Faker()


class ProjectEndpointTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user(email=fake.unique.email(), password='password', role=User.Role.ADMIN)
        self.member = User.objects.create_user(email=fake.unique.email(), password='password', role=User.Role.TEAM)
        self.client_user = User.objects.create_user(email=fake.unique.email(), password='password', role=User.Role.CLIENT)

        self.project1 = Project.objects.create(name="Project 1", description="Website rebuild", created_by=self.admin)
        Milestone.objects.create(project=self.project1, name="MVP", order=0)

        self.list_create_url = reverse('project-list')
        self.detail_url = reverse('project-detail', kwargs={'pk': self.project1.pk})

    def test_member_can_list_projects(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get(self.list_create_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['name'], "Project 1")
        self.assertEqual(response.data[0]['milestones'][0]['name'], "MVP")

    def test_admin_can_create_project(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(self.list_create_url, {"name": "Mobile app"}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        project = Project.objects.get(name="Mobile app")
        self.assertEqual(project.created_by, self.admin)

    def test_member_cannot_create_project(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.post(self.list_create_url, {"name": "Side project"}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn('error', response.data)

    def test_client_user_cannot_read_projects(self):
        self.client.force_authenticate(user=self.client_user)
        response = self.client.get(self.detail_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_missing_project_returns_404(self):
        self.client.force_authenticate(user=self.member)
        response = self.client.get(reverse('project-detail', kwargs={'pk': 9999}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'error': 'Resource not found.'})
