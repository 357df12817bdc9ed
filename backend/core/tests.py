from django.http import Http404
from rest_framework.test import APIRequestFactory, APITestCase
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from .exceptions import ValidationError, Conflict, DataIntegrityError, require_fields

factory = APIRequestFactory()


def view_raising(exc):
    class RaisingView(APIView):
        permission_classes = [AllowAny]
        authentication_classes = []

        def get(self, request):
            raise exc

    return RaisingView.as_view()


class ExceptionHandlerTests(APITestCase):

    def render(self, exc):
        return view_raising(exc)(factory.get('/api/anything'))

    def test_validation_error_carries_details(self):
        response = self.render(ValidationError("Missing required field(s): taskId", details={'taskId': 'This field is required.'}))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {
            'error': 'Missing required field(s): taskId',
            'details': {'taskId': 'This field is required.'},
        })

    def test_conflict(self):
        response = self.render(Conflict("Email already registered."))
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data, {'error': 'Email already registered.'})

    def test_data_integrity_error_hides_detail(self):
        response = self.render(DataIntegrityError("entry 12 ends before it starts"))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {'error': 'Internal server error'})

    def test_django_404(self):
        response = self.render(Http404("no such row"))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data, {'error': 'Resource not found.'})

    def test_unexpected_exception_is_generic_500(self):
        with self.assertLogs('core.exception_handler', level='ERROR'):
            response = self.render(KeyError('secret internals'))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {'error': 'Internal server error'})

    def test_require_fields_lists_every_missing_field(self):
        with self.assertRaises(ValidationError) as ctx:
            require_fields({'taskId': 3, 'destinationIndex': None}, 'taskId', 'destinationIndex', 'userId')
        self.assertEqual(set(ctx.exception.details), {'destinationIndex', 'userId'})
