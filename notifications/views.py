import logging

from django.utils import timezone
from rest_framework import permissions, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import IsAdmin
from .models import NotificationRecipient
from .serializers import BroadcastSerializer, NotificationSerializer
from .utils import broadcast_to_role

logger = logging.getLogger(__name__)


def _receipts_for(user):
    return NotificationRecipient.objects.filter(user=user).select_related('notification')


class NotificationListView(APIView):
    """Notifications addressed to the caller, newest first."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        receipts = _receipts_for(request.user).order_by('-notification__created_at', '-notification__id')

        notification_type = request.query_params.get('type')
        if notification_type:
            receipts = receipts.filter(notification__notification_type=notification_type)
        priority = request.query_params.get('priority')
        if priority:
            receipts = receipts.filter(notification__priority=priority)
        if request.query_params.get('unread') == 'true':
            receipts = receipts.filter(is_read=False)

        notifications = []
        for receipt in receipts:
            notification = receipt.notification
            notification.receipt = receipt
            notifications.append(notification)

        logger.info(f"[GET /api/notifications] {len(notifications)} for user {request.user.id}")
        return Response({
            'success': True,
            'count': len(notifications),
            'unread_count': _receipts_for(request.user).filter(is_read=False).count(),
            'notifications': NotificationSerializer(notifications, many=True).data,
        })


class UnreadCountView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        count = _receipts_for(request.user).filter(is_read=False).count()
        return Response({'success': True, 'data': {'unread_count': count}})


class MarkNotificationReadView(APIView):
    """Mark one notification read for the caller only."""
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, pk):
        try:
            receipt = _receipts_for(request.user).get(notification_id=pk)
        except NotificationRecipient.DoesNotExist:
            logger.error(f"[PUT /api/notifications/{pk}/mark-read] Not found for user {request.user.id}")
            raise NotFound("Notification not found")

        if not receipt.is_read:
            receipt.is_read = True
            receipt.read_at = timezone.now()
            receipt.save(update_fields=['is_read', 'read_at'])

        notification = receipt.notification
        notification.receipt = receipt
        logger.info(f"[PUT /api/notifications/{pk}/mark-read] Read by user {request.user.id}")
        return Response({
            'success': True,
            'message': 'Notification marked as read',
            'data': NotificationSerializer(notification).data,
        })


class MarkAllNotificationsReadView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request):
        updated = _receipts_for(request.user).filter(is_read=False).update(
            is_read=True, read_at=timezone.now()
        )
        logger.info(f"[PUT /api/notifications/mark-all-read] {updated} marked for user {request.user.id}")
        return Response({
            'success': True,
            'message': f'{updated} notification(s) marked as read',
            'data': {'updated': updated},
        })


class BroadcastNotificationView(APIView):
    """Admins send a message to every user of a role."""
    permission_classes = [permissions.IsAuthenticated, IsAdmin]

    def post(self, request):
        serializer = BroadcastSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        notification = broadcast_to_role(
            data['role'],
            sender=request.user,
            notification_type='BROADCAST_MESSAGE',
            title=data['title'],
            message=data['message'],
            priority=data['priority'],
            link=data.get('link') or None,
        )
        if notification is None:
            return Response({
                'success': True,
                'message': f"No {data['role']} users to notify",
                'data': {'recipients': 0},
            })

        logger.info(f"[POST /api/notifications/broadcast] #{notification.id} to role {data['role']}")
        return Response({
            'success': True,
            'message': 'Broadcast sent',
            'data': {'id': notification.id, 'recipients': notification.recipients.count()},
        }, status=status.HTTP_201_CREATED)
