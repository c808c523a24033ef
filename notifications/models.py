# notifications/models.py
from django.conf import settings
from django.db import models


class Notification(models.Model):
    NOTIFICATION_TYPES = [
        ('WEEKLY_REPORT_SUBMISSION', 'Weekly Report Submitted'),
        ('WEEKLY_REPORT_STATUS_CHANGE', 'Weekly Report Feedback'),
        ('MARKS_CHANGE', 'Marks Updated'),
        ('GUIDE_REPORT_FEEDBACK', 'Guide Feedback'),
        ('GUIDE_REPORT_EVALUATION', 'Guide Evaluation'),
        ('STUDENT_ASSIGNMENT', 'New Student Assignment'),
        ('BROADCAST_MESSAGE', 'Broadcast Message'),
    ]

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
    ]

    # sender may be the system, so the user link is optional
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        related_name='sent_notifications', null=True, blank=True
    )
    sender_model = models.CharField(max_length=20, default='admin')
    sender_name = models.CharField(max_length=255)

    notification_type = models.CharField(max_length=50, choices=NOTIFICATION_TYPES)
    title = models.CharField(max_length=255)
    message = models.TextField()
    link = models.CharField(max_length=500, blank=True, null=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='medium')

    related_entity_id = models.PositiveBigIntegerField(blank=True, null=True)
    related_entity_model = models.CharField(max_length=50, blank=True, null=True)
    status_change = models.JSONField(blank=True, null=True, help_text="{'to': status, 'reason': comments}")
    marks_data = models.JSONField(blank=True, null=True, help_text="{'marks': marks, 'week': week}")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.title} ({self.notification_type})"

    @property
    def related_entity(self):
        if self.related_entity_id is None:
            return None
        return {'id': self.related_entity_id, 'model': self.related_entity_model}


class NotificationRecipient(models.Model):
    """One addressee of a notification, with its own read state."""
    notification = models.ForeignKey(Notification, on_delete=models.CASCADE, related_name='recipients')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notification_receipts'
    )
    recipient_model = models.CharField(max_length=20)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        unique_together = ['notification', 'user']
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notif_recipient_unread_idx'),
        ]

    def __str__(self):
        return f"{self.notification.title} -> {self.user.username}"
