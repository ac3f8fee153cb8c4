from rest_framework import generics, permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from workflow.orchestrator import Workflow
from workflow.principal import Principal
from .serializers import NotificationSerializer
from .services import NotificationService


class NotificationListView(generics.ListAPIView):
    """
    My notifications, newest first.
    """
    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return NotificationService.for_user(self.request.user.pk)


class UnreadCountView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response({"unread": NotificationService.unread_count(request.user.pk)})


class MarkNotificationReadView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        notification = Workflow.mark_notification_read(Principal.from_user(request.user), pk)
        return Response(NotificationSerializer(notification).data)
