import logging
from unittest.mock import patch

import pytest

from notifications.models import Notification, NotificationRecipient
from notifications.utils import (
    broadcast_to_role,
    create_notification,
    dispatch,
    notify_on_guide_assigned,
    notify_on_status_change,
)

pytestmark = pytest.mark.django_db


@pytest.fixture
def alice(make_user):
    return make_user('alice', 'student')


@pytest.fixture
def bob(make_user):
    return make_user('bob', 'guide')


def test_one_notification_many_recipients(alice, bob):
    notification = create_notification(
        recipients=[alice, bob, alice],
        sender=None,
        notification_type='BROADCAST_MESSAGE',
        title='Hello',
        message='Welcome aboard',
    )

    assert Notification.objects.count() == 1
    receipts = NotificationRecipient.objects.filter(notification=notification)
    assert {(r.user_id, r.recipient_model) for r in receipts} == {(alice.id, 'student'), (bob.id, 'guide')}
    assert not any(r.is_read for r in receipts)
    assert notification.sender_name == 'System Notification'
    assert notification.sender_model == 'admin'


def test_sender_is_not_notified(alice, bob):
    notification = create_notification(
        recipients=[alice, bob],
        sender=bob,
        notification_type='BROADCAST_MESSAGE',
        title='Hello',
        message='Hi',
    )

    assert list(notification.recipients.values_list('user_id', flat=True)) == [alice.id]
    assert notification.sender_model == 'guide'
    assert notification.sender_name == 'Bob'


def test_no_recipients_creates_nothing(alice):
    assert create_notification(
        recipients=[alice], sender=alice, notification_type='BROADCAST_MESSAGE', title='t', message='m'
    ) is None
    assert Notification.objects.count() == 0


def test_broadcast_resolves_active_role_members(make_user, alice):
    active = make_user('admin1', 'admin')
    make_user('admin2', 'admin', is_active=False)

    notification = broadcast_to_role(
        'admin', sender=alice, notification_type='WEEKLY_REPORT_SUBMISSION', title='t', message='m'
    )

    assert list(notification.recipients.values_list('user_id', flat=True)) == [active.id]


def test_broadcast_without_members_returns_none(alice, caplog):
    with caplog.at_level(logging.WARNING, logger='notifications.utils'):
        result = broadcast_to_role(
            'admin', sender=alice, notification_type='WEEKLY_REPORT_SUBMISSION', title='t', message='m'
        )

    assert result is None
    assert 'No admin users found' in caplog.text


def test_dispatch_swallows_and_logs_failures(alice, caplog):
    def broken_send(**kwargs):
        raise RuntimeError('store unavailable')

    with caplog.at_level(logging.ERROR, logger='notifications.utils'):
        result = dispatch(broken_send, notification_type='MARKS_CHANGE')

    assert result is None
    assert 'store unavailable' in caplog.text


def test_dispatch_rolls_back_partial_writes(alice):
    with patch('notifications.utils.NotificationRecipient') as recipient_model:
        recipient_model.objects.bulk_create.side_effect = RuntimeError('disk')
        result = dispatch(
            create_notification,
            recipients=[alice], sender=None,
            notification_type='BROADCAST_MESSAGE', title='t', message='m',
        )

    assert result is None
    assert Notification.objects.count() == 0


@pytest.mark.parametrize('approval_status, priority, title', [
    ('Approved', 'high', 'Weekly Report Approved'),
    ('Rejected', 'high', 'Weekly Report Requires Changes'),
    ('Pending', 'medium', 'Weekly Report Status Updated'),
])
def test_status_change_priority(report, admin_user, approval_status, priority, title):
    report.approval_status = approval_status
    notification = notify_on_status_change(report, admin_user, 'admin', comments='Needs work')

    assert notification.priority == priority
    assert notification.title == title
    assert notification.link == f"/student/weekly-reports/{report.id}"


def test_guide_assignment_notifies_guide_and_student(internship, admin_user, guide, student):
    notification = notify_on_guide_assigned(internship, admin_user)

    assert notification.notification_type == 'STUDENT_ASSIGNMENT'
    assert set(notification.recipients.values_list('user_id', flat=True)) == {guide.id, student.id}
