import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from .models import Notification, NotificationRecipient

logger = logging.getLogger(__name__)

User = get_user_model()


def create_notification(recipients, sender, notification_type, title, message,
                        priority='medium', link=None, related_entity=None,
                        status_change=None, marks_data=None,
                        sender_name=None, sender_model=None):
    """
    Create one notification addressed to every recipient.

    Writes a single ``Notification`` row and one ``NotificationRecipient``
    row per distinct recipient, all in one transaction. The sender is never
    one of its own recipients. Returns ``None`` when nobody is left to notify.
    """
    unique_recipients = []
    seen = set()
    for recipient in recipients:
        if recipient.pk in seen:
            continue
        if sender is not None and recipient.pk == sender.pk:
            continue
        seen.add(recipient.pk)
        unique_recipients.append(recipient)

    if not unique_recipients:
        logger.warning(f"[Notification] No recipients for {notification_type}, nothing created")
        return None

    if sender_name is None:
        sender_name = sender.display_name if sender is not None else settings.SYSTEM_SENDER_NAME
    if sender_model is None:
        sender_model = sender.role if sender is not None else 'admin'

    related_entity = related_entity or {}

    with transaction.atomic():
        notification = Notification.objects.create(
            sender=sender,
            sender_model=sender_model,
            sender_name=sender_name,
            notification_type=notification_type,
            title=title,
            message=message,
            link=link,
            priority=priority,
            related_entity_id=related_entity.get('id'),
            related_entity_model=related_entity.get('model'),
            status_change=status_change,
            marks_data=marks_data,
        )
        NotificationRecipient.objects.bulk_create([
            NotificationRecipient(
                notification=notification,
                user=recipient,
                recipient_model=recipient.role,
            )
            for recipient in unique_recipients
        ])

    logger.info(
        f"[Notification] Created {notification_type} #{notification.id} "
        f"for {len(unique_recipients)} recipient(s)"
    )
    return notification


def role_recipients(role):
    return list(User.objects.filter(role=role, is_active=True))


def broadcast_to_role(role, **kwargs):
    """Send one notification to every active user holding ``role``."""
    recipients = role_recipients(role)
    if not recipients:
        logger.warning(f"[Notification] No {role} users found to notify")
        return None
    return create_notification(recipients=recipients, **kwargs)


def dispatch(send, **kwargs):
    """
    Best-effort outbound send.

    Runs ``send`` (``create_notification`` or ``broadcast_to_role``) in its
    own savepoint. Any failure is logged and discarded so the caller's state
    change is never blocked or rolled back by it.
    """
    try:
        with transaction.atomic():
            return send(**kwargs)
    except Exception as e:
        logger.error(f"[Notification] Error sending {kwargs.get('notification_type')}: {e}")
        return None


# ===== Weekly report notifications =====

STATUS_CHANGE_COPY = {
    'admin': {
        'type': 'WEEKLY_REPORT_STATUS_CHANGE',
        'sender_name': None,
        'Approved': ("Weekly Report Approved",
                     'Your weekly report for "{project}" (Week {week}) has been approved.'),
        'Rejected': ("Weekly Report Requires Changes",
                     'Your weekly report for "{project}" (Week {week}) needs changes.'),
        'Pending': ("Weekly Report Status Updated",
                    'Status updated for your weekly report ({project}, Week {week}).'),
    },
    'guide': {
        'type': 'GUIDE_REPORT_FEEDBACK',
        'sender_name': 'Guide Feedback',
        'Approved': ("Weekly Report Approved by Guide",
                     'Your guide has approved your weekly report for "{project}" (Week {week}).'),
        'Rejected': ("Weekly Report Feedback from Guide",
                     'Your guide has provided feedback on your weekly report for "{project}" (Week {week}).'),
        'Pending': ("Weekly Report Status Update",
                    'Your guide has updated the status of your weekly report ({project}, Week {week}).'),
    },
}

MARKS_COPY = {
    'admin': {
        'type': 'MARKS_CHANGE',
        'sender_name': None,
        'title': "Marks Updated",
        'message': 'You received {marks}/10 for your weekly report on "{project}" (Week {week}).',
    },
    'guide': {
        'type': 'GUIDE_REPORT_EVALUATION',
        'sender_name': 'Guide Evaluation',
        'title': "Weekly Report Evaluation",
        'message': 'Your guide has evaluated your weekly report on "{project}" (Week {week}) with {marks}/10.',
    },
}


def _report_entity(report):
    return {'id': report.id, 'model': 'WeeklyReport'}


def notify_on_report_submitted(report, student, guide=None):
    """Notify every admin and, when assigned, the guide about a new report."""
    admin_notification = dispatch(
        broadcast_to_role,
        role='admin',
        sender=student,
        notification_type='WEEKLY_REPORT_SUBMISSION',
        title="New Weekly Report Submission",
        message=f"{report.student_name} has submitted a weekly report (Week {report.report_week}).",
        link=f"/admin/weekly-reports/{report.id}",
        priority='medium',
        related_entity=_report_entity(report),
    )

    guide_notification = None
    if guide is not None:
        guide_notification = dispatch(
            create_notification,
            recipients=[guide],
            sender=student,
            notification_type='WEEKLY_REPORT_SUBMISSION',
            title="New Weekly Report Submission",
            message=f"{report.student_name} has submitted a new weekly report (Week {report.report_week}).",
            link=f"/guide/weekly-reports/{report.id}",
            priority='high',
            related_entity=_report_entity(report),
        )
    return admin_notification, guide_notification


def notify_on_status_change(report, actor, scope, comments=None):
    """Tell the student their report's approval status changed."""
    copy = STATUS_CHANGE_COPY[scope]
    status = report.approval_status
    title, template = copy[status]
    message = template.format(project=report.project_title, week=report.report_week)
    if status == 'Rejected' and comments:
        message += f" Feedback: {comments}"

    status_change = {'to': status}
    if comments:
        status_change['reason'] = comments

    return dispatch(
        create_notification,
        recipients=[report.student],
        sender=actor,
        sender_name=copy['sender_name'] or settings.SYSTEM_SENDER_NAME,
        notification_type=copy['type'],
        title=title,
        message=message,
        link=f"/student/weekly-reports/{report.id}",
        priority='high' if status in ('Approved', 'Rejected') else 'medium',
        related_entity=_report_entity(report),
        status_change=status_change,
    )


def notify_on_marks_updated(report, actor, scope):
    """Tell the student their report was marked."""
    copy = MARKS_COPY[scope]
    return dispatch(
        create_notification,
        recipients=[report.student],
        sender=actor,
        sender_name=copy['sender_name'] or settings.SYSTEM_SENDER_NAME,
        notification_type=copy['type'],
        title=copy['title'],
        message=copy['message'].format(
            marks=report.marks, project=report.project_title, week=report.report_week
        ),
        link=f"/student/weekly-reports/{report.id}",
        priority='high',
        related_entity=_report_entity(report),
        marks_data={'marks': report.marks, 'week': report.report_week},
    )


def notify_on_guide_assigned(internship, assigned_by):
    """Notify the guide and the student when a guide is assigned."""
    student = internship.student
    guide = internship.guide
    return dispatch(
        create_notification,
        recipients=[guide, student],
        sender=assigned_by,
        notification_type='STUDENT_ASSIGNMENT',
        title="Guide Assigned",
        message=f"{guide.display_name} is now guiding {student.display_name}'s internship.",
        link=f"/internships/{internship.id}",
        priority='medium',
        related_entity={'id': internship.id, 'model': 'StudentInternship'},
    )
