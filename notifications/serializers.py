# notifications/serializers.py
from django.utils import timezone
from rest_framework import serializers
from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """
    A notification as seen by one recipient.

    ``is_read``/``read_at`` come from the caller's own recipient row, which
    the view attaches as ``receipt``.
    """
    type = serializers.CharField(source='notification_type')
    sender = serializers.SerializerMethodField()
    related_entity = serializers.SerializerMethodField()
    is_read = serializers.SerializerMethodField()
    read_at = serializers.SerializerMethodField()
    time_ago = serializers.SerializerMethodField()

    class Meta:
        model = Notification
        fields = ['id', 'type', 'title', 'message', 'link', 'priority', 'sender',
                  'related_entity', 'status_change', 'marks_data',
                  'is_read', 'read_at', 'created_at', 'time_ago']

    def get_sender(self, obj):
        return {
            'id': obj.sender_id,
            'model': obj.sender_model,
            'name': obj.sender_name,
        }

    def get_related_entity(self, obj):
        return obj.related_entity

    def get_is_read(self, obj):
        receipt = getattr(obj, 'receipt', None)
        return receipt.is_read if receipt else False

    def get_read_at(self, obj):
        receipt = getattr(obj, 'receipt', None)
        return receipt.read_at if receipt else None

    def get_time_ago(self, obj):
        diff = timezone.now() - obj.created_at

        if diff.days > 0:
            return f"{diff.days}d ago"
        elif diff.seconds >= 3600:
            return f"{diff.seconds // 3600}h ago"
        elif diff.seconds >= 60:
            return f"{diff.seconds // 60}m ago"
        else:
            return "Just now"


class BroadcastSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=['admin', 'guide', 'student'])
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    priority = serializers.ChoiceField(choices=['low', 'medium', 'high'], default='medium')
    link = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
