import pytest
from rest_framework import status

from internships.models import StudentInternship
from notifications.models import Notification

pytestmark = pytest.mark.django_db


def test_admin_creates_internship(client_for, admin_user, student):
    response = client_for(admin_user).post(
        '/api/internships/create/',
        {'student_id': student.id, 'company_name': 'Acme', 'project_title': 'Intake'},
        format='json',
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.data['data']['student']['id'] == student.id
    assert response.data['data']['guide'] is None
    assert response.data['data']['report_count'] == 0


def test_duplicate_internship_is_400(client_for, admin_user, student, internship):
    response = client_for(admin_user).post(
        '/api/internships/create/', {'student_id': student.id, 'company_name': 'Other'}, format='json'
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert 'student_id' in response.data['errors']
    assert StudentInternship.objects.count() == 1


def test_only_admins_create(client_for, guide, student):
    response = client_for(guide).post('/api/internships/create/', {'student_id': student.id}, format='json')
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_assign_guide_notifies_both_parties(client_for, admin_user, make_user, other_guide, internship):
    response = client_for(admin_user).patch(
        f'/api/internships/{internship.id}/assign-guide/', {'guide_id': other_guide.id}, format='json'
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.data['data']['guide']['id'] == other_guide.id
    notification = Notification.objects.get(notification_type='STUDENT_ASSIGNMENT')
    assert set(notification.recipients.values_list('user_id', flat=True)) == {
        other_guide.id, internship.student_id
    }


def test_assign_guide_requires_guide_id(client_for, admin_user, internship):
    response = client_for(admin_user).patch(f'/api/internships/{internship.id}/assign-guide/', {}, format='json')
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_assign_non_guide_is_404(client_for, admin_user, student, internship):
    response = client_for(admin_user).patch(
        f'/api/internships/{internship.id}/assign-guide/', {'guide_id': student.id}, format='json'
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.data['message'] == 'Guide not found'
    internship.refresh_from_db()
    assert internship.guide_id != student.id


def test_guide_lists_own_internships(client_for, make_user, guide, other_guide, internship):
    StudentInternship.objects.create(student=make_user('ravi', 'student'), guide=other_guide)

    response = client_for(guide).get('/api/internships/')

    assert response.status_code == status.HTTP_200_OK
    assert response.data['total'] == 1
    assert response.data['data'][0]['id'] == internship.id


def test_student_cannot_see_other_internship(client_for, make_user, internship):
    outsider = make_user('ravi', 'student')
    response = client_for(outsider).get(f'/api/internships/{internship.id}/')
    assert response.status_code == status.HTTP_404_NOT_FOUND
