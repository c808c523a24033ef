import logging
from unittest.mock import patch

import pytest
from rest_framework import status

from notifications.models import Notification, NotificationRecipient
from reports.models import WeeklyReport

pytestmark = pytest.mark.django_db


def test_student_submits_guide_approves_end_to_end(client_for, student, guide, admin_user, internship):
    response = client_for(student).post(
        '/api/weekly-reports/',
        {'project_title': 'Project X', 'report_week': 3, 'summary': 'Built the intake form'},
        format='json',
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.data['success'] is True
    report_id = response.data['data']['id']
    assert response.data['data']['student_name'] == 'Asha Rao'

    admin_notification = Notification.objects.get(recipients__user=admin_user)
    assert admin_notification.priority == 'medium'
    guide_notification = Notification.objects.get(recipients__user=guide)
    assert guide_notification.priority == 'high'

    response = client_for(guide).patch(
        f'/api/weekly-reports/{report_id}/approval/',
        {'approval_status': 'Approved'},
        format='json',
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.data['data']['approval_status'] == 'Approved'
    assert response.data['data']['comments'] is None
    assert response.data['data']['approved_by'] == guide.id

    student_notification = Notification.objects.get(recipients__user=student)
    assert student_notification.priority == 'high'
    assert student_notification.title == 'Weekly Report Approved by Guide'


def test_admin_marks_end_to_end(client_for, admin_user, student, report):
    response = client_for(admin_user).patch(
        f'/api/weekly-reports/{report.id}/marks/', {'marks': 7}, format='json'
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.data['data']['marks'] == 7

    receipts = NotificationRecipient.objects.filter(user=student)
    assert receipts.count() == 1
    notification = receipts.get().notification
    assert notification.notification_type == 'MARKS_CHANGE'
    assert notification.marks_data == {'marks': 7, 'week': 3}


def test_submit_without_internship_is_404(client_for, student):
    response = client_for(student).post(
        '/api/weekly-reports/', {'project_title': 'Project X', 'report_week': 1}, format='json'
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.data == {'success': False, 'message': 'Student internship record not found.'}
    assert WeeklyReport.objects.count() == 0


def test_submit_requires_fields(client_for, student, internship):
    response = client_for(student).post('/api/weekly-reports/', {'report_week': 0}, format='json')

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data['success'] is False
    assert 'project_title' in response.data['errors']


def test_only_students_submit(client_for, guide):
    response = client_for(guide).post(
        '/api/weekly-reports/', {'project_title': 'Project X', 'report_week': 1}, format='json'
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.parametrize('comments', [None, ''])
def test_reject_without_comments_is_400(client_for, admin_user, report, comments):
    payload = {'approval_status': 'Rejected'}
    if comments is not None:
        payload['comments'] = comments

    response = client_for(admin_user).patch(f'/api/weekly-reports/{report.id}/approval/', payload, format='json')

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data == {'success': False, 'message': 'Comments are required for rejected status'}
    report.refresh_from_db()
    assert report.approval_status == 'Pending'


def test_invalid_status_is_400(client_for, admin_user, report):
    response = client_for(admin_user).patch(
        f'/api/weekly-reports/{report.id}/approval/', {'approval_status': 'Done'}, format='json'
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.parametrize('marks', [-1, 11])
def test_marks_out_of_range_is_400(client_for, admin_user, report, marks):
    report.marks = 4
    report.save()

    response = client_for(admin_user).patch(f'/api/weekly-reports/{report.id}/marks/', {'marks': marks}, format='json')

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    report.refresh_from_db()
    assert report.marks == 4


def test_students_cannot_review(client_for, student, report):
    response = client_for(student).patch(
        f'/api/weekly-reports/{report.id}/approval/', {'approval_status': 'Approved'}, format='json'
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_unauthenticated_is_rejected(report):
    from rest_framework.test import APIClient

    response = APIClient().get('/api/weekly-reports/')
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.data['success'] is False


def test_guide_unassigned_report_matches_missing_report(client_for, other_guide, report):
    client = client_for(other_guide)

    unassigned = client.get(f'/api/weeklyReport/guide/{report.id}/')
    missing = client.get('/api/weeklyReport/guide/999999/')

    assert unassigned.status_code == status.HTTP_404_NOT_FOUND
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert unassigned.data == missing.data


def test_guide_alias_routes_share_the_workflow(client_for, guide, report):
    response = client_for(guide).patch(
        f'/api/weeklyReport/guide/{report.id}/marks/', {'marks': '8'}, format='json'
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.data['data']['marks'] == 8
    assert response.data['data']['marked_by'] == guide.id


def test_guide_list(client_for, guide, internship, make_report):
    make_report(internship, report_week=1)
    make_report(internship, report_week=2)

    response = client_for(guide).get('/api/weeklyReport/guide/', {'limit': 1})

    assert response.status_code == status.HTTP_200_OK
    assert response.data['total'] == 2
    assert response.data['pages'] == 2
    # newest first by default
    assert response.data['data'][0]['report_week'] == 2


def test_admin_list_envelope(client_for, admin_user, internship, make_report):
    for week in range(1, 4):
        make_report(internship, report_week=week)

    response = client_for(admin_user).get(
        '/api/weekly-reports/', {'sort_by': 'report_week', 'order': 'desc', 'limit': 2}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.data['success'] is True
    assert response.data['total'] == 3
    assert response.data['page'] == 1
    assert response.data['pages'] == 2
    assert [r['report_week'] for r in response.data['data']] == [3, 2]


def test_admin_list_bad_page_is_400(client_for, admin_user):
    response = client_for(admin_user).get('/api/weekly-reports/', {'page': 0})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_student_sees_own_reports(client_for, student, report):
    response = client_for(student).get('/api/weekly-reports/mine/')

    assert response.status_code == status.HTTP_200_OK
    assert [r['id'] for r in response.data['data']] == [report.id]


def test_restore_live_report_is_404(client_for, admin_user, report):
    response = client_for(admin_user).patch(f'/api/weekly-reports/{report.id}/restore/')

    assert response.status_code == status.HTTP_404_NOT_FOUND
    report.refresh_from_db()
    assert report.is_deleted is False


def test_delete_restore_cycle(client_for, admin_user, report):
    client = client_for(admin_user)

    assert client.delete(f'/api/weekly-reports/{report.id}/').status_code == status.HTTP_200_OK
    assert client.get(f'/api/weekly-reports/{report.id}/').status_code == status.HTTP_404_NOT_FOUND

    response = client.patch(f'/api/weekly-reports/{report.id}/restore/')
    assert response.status_code == status.HTTP_200_OK
    assert response.data['data']['is_deleted'] is False


def test_admin_updates_report(client_for, admin_user, report):
    response = client_for(admin_user).put(
        f'/api/weekly-reports/{report.id}/', {'project_title': 'Project Y'}, format='json'
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.data['data']['project_title'] == 'Project Y'
    assert response.data['data']['report_week'] == 3


def test_export_to_sheet(client_for, admin_user, report):
    with patch('reports.views.export_reports_to_google_sheet', return_value=1) as export:
        response = client_for(admin_user).post('/api/weekly-reports/export-to-sheet/')

    assert response.status_code == status.HTTP_200_OK
    assert response.data['data'] == {'exported': 1}
    assert list(export.call_args.args[0]) == [report]


def test_export_to_sheet_failure(client_for, admin_user):
    with patch('reports.views.export_reports_to_google_sheet', side_effect=ValueError('no credentials')):
        response = client_for(admin_user).post('/api/weekly-reports/export-to-sheet/')

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data['success'] is False


@pytest.mark.parametrize('params', [{'page': 10 ** 20}, {'limit': 10 ** 20}, {'page': 10 ** 20, 'limit': 10 ** 20}])
def test_admin_list_huge_pagination_values(client_for, admin_user, report, params):
    response = client_for(admin_user).get('/api/weekly-reports/', params)

    assert response.status_code == status.HTTP_200_OK
    assert response.data['total'] == 1


def test_admin_list_past_last_page_is_empty(client_for, admin_user, report):
    response = client_for(admin_user).get('/api/weekly-reports/', {'page': 10 ** 20})
    assert response.data['data'] == []


@pytest.mark.parametrize('comments', [['a', 'b'], {'text': 'redo'}])
def test_non_text_comments_are_400(client_for, admin_user, student, report, comments):
    response = client_for(admin_user).patch(
        f'/api/weekly-reports/{report.id}/approval/',
        {'approval_status': 'Rejected', 'comments': comments},
        format='json',
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert 'comments' in response.data['errors']
    report.refresh_from_db()
    assert report.approval_status == 'Pending'
    assert report.comments is None
    assert not NotificationRecipient.objects.filter(user=student).exists()


def test_detail_reads_are_logged(client_for, admin_user, guide, report, caplog):
    with caplog.at_level(logging.INFO, logger='reports.views'):
        client_for(admin_user).get(f'/api/weekly-reports/{report.id}/')
        client_for(guide).get(f'/api/weeklyReport/guide/{report.id}/')

    assert f'[GET /api/weekly-reports/{report.id}] Fetched by admin {admin_user.id}' in caplog.text
    assert f'[GET /api/weeklyReport/guide/{report.id}] Fetched by guide {guide.id}' in caplog.text
