from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Standard User Serializer for reading user data.
    """
    class Meta:
        model = User
        fields = [
            'id', 'email', 'full_name', 'phone_number', 'role', 'enabled', 'date_joined'
        ]
        read_only_fields = ['id', 'email', 'role', 'enabled', 'date_joined']


class RegistrationSerializer(serializers.ModelSerializer):
    """
    Handles sign-up with role selection. Admin accounts cannot be self-registered.
    """
    password = serializers.CharField(write_only=True, validators=[validate_password])
    role = serializers.ChoiceField(choices=[User.Roles.JOB_SEEKER, User.Roles.EMPLOYER])

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name', 'password', 'phone_number', 'role']
        read_only_fields = ['id']

    def create(self, validated_data):
        return User.objects.create_user(
            email=validated_data['email'],
            username=validated_data['email'],  # Use email as username
            full_name=validated_data['full_name'],
            phone_number=validated_data.get('phone_number'),
            password=validated_data['password'],
            role=validated_data['role'],
        )


class UserStatusSerializer(serializers.Serializer):
    enabled = serializers.BooleanField()
