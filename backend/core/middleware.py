import logging

from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(MiddlewareMixin):
    """
    Log API requests (method, path, client IP, user) and their status code.
    """

    def process_response(self, request, response):
        if request.path.startswith('/api/'):
            user_info = 'Anonymous'
            user = getattr(request, 'user', None)
            if user is not None and user.is_authenticated:
                user_info = getattr(user, 'email', 'Authenticated')

            logger.info(
                f"{request.method} {request.path} -> {response.status_code} "
                f"from {self.get_client_ip(request)} - User: {user_info}"
            )
        return response

    def get_client_ip(self, request):
        """Get client IP address"""
        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
        if x_forwarded_for:
            ip = x_forwarded_for.split(',')[0].strip()
        else:
            ip = request.META.get('REMOTE_ADDR')
        return ip
