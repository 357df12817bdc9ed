import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from .serializers import UserLoginSerializer, UserLiteSerializer

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([AnonRateThrottle])
def login_view(request):
    """
    Exchange email and password for an API token.
    """
    serializer = UserLoginSerializer(data=request.data, context={'request': request})
    if not serializer.is_valid():
        logger.info(f"Failed login attempt for {request.data.get('email', 'unknown')}")
        return Response({'error': 'Invalid credentials'}, status=status.HTTP_401_UNAUTHORIZED)

    user = serializer.validated_data['user']
    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    token, _ = Token.objects.get_or_create(user=user)
    logger.info(f"Login successful for {user.email} (role: {user.role})")
    return Response({'token': token.key, 'user': UserLiteSerializer(user).data}, status=status.HTTP_200_OK)
