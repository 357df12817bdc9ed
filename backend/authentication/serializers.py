from django.contrib.auth import authenticate
from rest_framework import serializers

from .models import User


class UserLiteSerializer(serializers.ModelSerializer):
    """Lightweight user representation for nested objects."""
    name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role']
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""
    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True, style={'input_type': 'password'})

    def validate(self, attrs):
        email = attrs.get('email')
        password = attrs.get('password')
        user = authenticate(request=self.context.get('request'), email=email, password=password)
        if not user:
            raise serializers.ValidationError("Invalid credentials.", code='authorization')
        if not user.is_active:
            raise serializers.ValidationError("User account is disabled.", code='authorization')
        attrs['user'] = user
        return attrs
