import pytest
from rest_framework.test import APIClient


@pytest.fixture
def make_user(db):
    def _make_user(username, role, **extra):
        from authentication.models import User

        extra.setdefault('first_name', username.capitalize())
        return User.objects.create_user(
            username=username,
            email=f"{username}@example.com",
            password='s3cure-pass-123',
            role=role,
            **extra
        )
    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user('admin', 'admin')


@pytest.fixture
def guide(make_user):
    return make_user('guide', 'guide', last_name='Menon')


@pytest.fixture
def other_guide(make_user):
    return make_user('otherguide', 'guide')


@pytest.fixture
def student(make_user):
    return make_user('asha', 'student', last_name='Rao')


@pytest.fixture
def internship(student, guide):
    from internships.models import StudentInternship

    return StudentInternship.objects.create(
        student=student, guide=guide, company_name='Acme', project_title='Project X'
    )


@pytest.fixture
def make_report(db):
    def _make_report(internship, **fields):
        from reports.models import WeeklyReport

        fields.setdefault('project_title', 'Project X')
        fields.setdefault('report_week', 1)
        report = WeeklyReport.objects.create(
            student=internship.student,
            student_name=internship.student.display_name,
            **fields
        )
        internship.weekly_reports.add(report)
        return report
    return _make_report


@pytest.fixture
def report(internship, make_report):
    return make_report(internship, report_week=3)


@pytest.fixture
def client_for():
    def _client_for(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client_for
