import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sender_model', models.CharField(default='admin', max_length=20)),
                ('sender_name', models.CharField(max_length=255)),
                ('notification_type', models.CharField(choices=[('WEEKLY_REPORT_SUBMISSION', 'Weekly Report Submitted'), ('WEEKLY_REPORT_STATUS_CHANGE', 'Weekly Report Feedback'), ('MARKS_CHANGE', 'Marks Updated'), ('GUIDE_REPORT_FEEDBACK', 'Guide Feedback'), ('GUIDE_REPORT_EVALUATION', 'Guide Evaluation'), ('STUDENT_ASSIGNMENT', 'New Student Assignment'), ('BROADCAST_MESSAGE', 'Broadcast Message')], max_length=50)),
                ('title', models.CharField(max_length=255)),
                ('message', models.TextField()),
                ('link', models.CharField(blank=True, max_length=500, null=True)),
                ('priority', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High')], default='medium', max_length=10)),
                ('related_entity_id', models.PositiveBigIntegerField(blank=True, null=True)),
                ('related_entity_model', models.CharField(blank=True, max_length=50, null=True)),
                ('status_change', models.JSONField(blank=True, help_text="{'to': status, 'reason': comments}", null=True)),
                ('marks_data', models.JSONField(blank=True, help_text="{'marks': marks, 'week': week}", null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('sender', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sent_notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='NotificationRecipient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('recipient_model', models.CharField(max_length=20)),
                ('is_read', models.BooleanField(default=False)),
                ('read_at', models.DateTimeField(blank=True, null=True)),
                ('notification', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='recipients', to='notifications.notification')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notification_receipts', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [models.Index(fields=['user', 'is_read'], name='notif_recipient_unread_idx')],
                'unique_together': {('notification', 'user')},
            },
        ),
    ]
