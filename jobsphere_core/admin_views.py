from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from users.serializers import UserSerializer, UserStatusSerializer
from workflow.orchestrator import Workflow
from workflow.principal import Principal

# --- USER MANAGEMENT ---

class AdminUserListView(APIView):
    """The admin dashboard uses this to show all users, optionally filtered by ?role="""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        users = Workflow.list_users(Principal.from_user(request.user), request.query_params.get('role'))
        return Response(UserSerializer(users, many=True).data)

class AdminUserStatusView(APIView):
    """Enable or disable an account. Disabled users keep their data but can no longer write."""
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, user_id):
        serializer = UserStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = Workflow.set_user_enabled(
            Principal.from_user(request.user), user_id, serializer.validated_data['enabled']
        )
        return Response(UserSerializer(user).data)

# --- PLATFORM OVERVIEW ---

class AdminSystemStatsView(APIView):
    """The 'Big Picture' for the admin dashboard home"""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(Workflow.system_stats(Principal.from_user(request.user)))
