from rest_framework import generics, permissions
from django.contrib.auth import get_user_model
from workflow.exceptions import AccountDisabled
from .serializers import UserSerializer, RegistrationSerializer

User = get_user_model()


class RegisterView(generics.CreateAPIView):
    queryset = User.objects.all()
    permission_classes = (permissions.AllowAny,)
    serializer_class = RegistrationSerializer


class UserProfileView(generics.RetrieveUpdateAPIView):
    """
    Get or Update own profile (e.g., change name, phone). Role and status are read-only.
    """
    permission_classes = (permissions.IsAuthenticated,)
    serializer_class = UserSerializer

    def get_object(self):
        return self.request.user

    def perform_update(self, serializer):
        if not self.request.user.enabled:
            raise AccountDisabled()
        serializer.save()
