"""
Weekly report review workflow.

Every operation that admins and guides share takes the acting user and
derives an actor scope from their role:

- ``admin`` may act on any report that is not soft-deleted.
- ``guide`` may only act on reports listed in the ``weekly_reports`` of a
  live internship they guide. Anything else raises ``AuthorizationError``,
  which renders as a 404.

Notifications are sent through ``notifications.utils.dispatch`` after the
report has been written; a failed send never undoes the report change.
"""
import logging
import math

from django.utils import timezone

from internships.models import StudentInternship
from notifications.utils import (
    notify_on_marks_updated,
    notify_on_report_submitted,
    notify_on_status_change,
)
from .exceptions import AuthorizationError, NotFoundError, ValidationError
from .models import WeeklyReport

logger = logging.getLogger(__name__)

APPROVAL_STATUSES = [choice for choice, _ in WeeklyReport.APPROVAL_STATUS_CHOICES]
SORT_FIELDS = ['created_at', 'student_name', 'report_week']
MIN_MARKS = 0
MAX_MARKS = 10
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
MAX_REPORT_WEEK = 2147483647


def actor_scope(actor):
    return 'guide' if actor.role == 'guide' else 'admin'


def guide_owns_report(guide, report_id):
    return StudentInternship.objects.filter(
        guide=guide,
        weekly_reports__id=report_id,
        is_deleted=False,
    ).exists()


def get_report(report_id, actor):
    """Load a live report the actor is allowed to see."""
    if actor_scope(actor) == 'guide' and not guide_owns_report(actor, report_id):
        raise AuthorizationError()

    try:
        return WeeklyReport.objects.select_related('student').get(pk=report_id, is_deleted=False)
    except WeeklyReport.DoesNotExist:
        raise NotFoundError()


def submit_report(student, report_data):
    """
    Create a weekly report for ``student`` and tell admins and the guide.

    The internship is looked up first so a student without one never leaves
    a report behind.
    """
    try:
        internship = StudentInternship.objects.select_related('guide').get(student=student, is_deleted=False)
    except StudentInternship.DoesNotExist:
        raise NotFoundError("Student internship record not found.")

    report = WeeklyReport.objects.create(
        student=student,
        student_name=student.display_name,
        **report_data
    )
    internship.weekly_reports.add(report)
    logger.info(f"[Workflow] Report {report.id} linked to internship {internship.id}")

    notify_on_report_submitted(report, student, guide=internship.guide)
    return report


def clean_approval(new_status, comments):
    if not new_status or new_status not in APPROVAL_STATUSES:
        raise ValidationError("Invalid approval status")
    if comments is not None and not isinstance(comments, str):
        raise ValidationError("Comments must be text")

    if isinstance(comments, str):
        comments = comments.strip()
    if new_status == 'Rejected' and not comments:
        raise ValidationError("Comments are required for rejected status")

    return new_status, comments if new_status == 'Rejected' else None


def set_approval_status(report_id, new_status, comments, actor):
    """Approve, reject or reset a report and notify its student."""
    new_status, comments = clean_approval(new_status, comments)
    scope = actor_scope(actor)
    report = get_report(report_id, actor)

    now = timezone.now()
    report.approval_status = new_status
    report.comments = comments
    report.status_updated_at = now
    update_fields = ['approval_status', 'comments', 'status_updated_at', 'updated_at']
    if scope == 'guide':
        report.approved_by = actor
        report.approval_date = now
        update_fields += ['approved_by', 'approval_date']
    report.save(update_fields=update_fields)

    notify_on_status_change(report, actor, scope, comments=comments)
    return report


def clean_marks(marks):
    """Accept whole numbers (``7``, ``7.0``, ``"7"``) in range, nothing else."""
    if isinstance(marks, bool) or marks is None:
        raise ValidationError(f"Marks must be an integer between {MIN_MARKS} and {MAX_MARKS}")

    if isinstance(marks, str):
        try:
            marks = int(marks.strip())
        except ValueError:
            raise ValidationError(f"Marks must be an integer between {MIN_MARKS} and {MAX_MARKS}")
    elif isinstance(marks, float):
        if not marks.is_integer():
            raise ValidationError(f"Marks must be an integer between {MIN_MARKS} and {MAX_MARKS}")
        marks = int(marks)
    elif not isinstance(marks, int):
        raise ValidationError(f"Marks must be an integer between {MIN_MARKS} and {MAX_MARKS}")

    if marks < MIN_MARKS or marks > MAX_MARKS:
        raise ValidationError(f"Marks must be between {MIN_MARKS} and {MAX_MARKS}")
    return marks


def set_marks(report_id, marks, actor):
    """Store marks out of 10 and notify the student."""
    marks = clean_marks(marks)
    scope = actor_scope(actor)
    report = get_report(report_id, actor)

    report.marks = marks
    update_fields = ['marks', 'updated_at']
    if scope == 'guide':
        report.marked_by = actor
        report.marking_date = timezone.now()
        update_fields += ['marked_by', 'marking_date']
    report.save(update_fields=update_fields)

    notify_on_marks_updated(report, actor, scope)
    return report


def _positive_int(value, default, name):
    if value in (None, ''):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid pagination parameters: {name} must be a positive integer")
    if number < 1:
        raise ValidationError(f"Invalid pagination parameters: {name} must be a positive integer")
    return number


def scoped_reports(scope, user=None, include_deleted=False):
    if scope == 'guide':
        return WeeklyReport.objects.filter(
            internships__guide=user,
            internships__is_deleted=False,
            student__internship__guide=user,
            student__internship__is_deleted=False,
            is_deleted=False,
        ).distinct()
    if scope == 'student':
        return WeeklyReport.objects.filter(student=user, is_deleted=False)

    queryset = WeeklyReport.objects.all()
    if not include_deleted:
        queryset = queryset.filter(is_deleted=False)
    return queryset


def list_reports(params, scope, user=None, default_order='asc'):
    """
    Filter, sort and paginate reports visible in ``scope``.

    ``params`` is a mapping of query parameters. Returns a dict with the page
    of ``results`` plus ``total``, ``page`` and ``pages``.
    """
    page = _positive_int(params.get('page'), 1, 'page')
    limit = min(_positive_int(params.get('limit'), DEFAULT_PAGE_SIZE, 'limit'), MAX_PAGE_SIZE)

    include_deleted = scope == 'admin' and params.get('include_deleted') == 'true'
    queryset = scoped_reports(scope, user=user, include_deleted=include_deleted)

    student_name = params.get('student_name')
    if student_name:
        queryset = queryset.filter(student_name__icontains=student_name)

    report_week = params.get('report_week')
    if report_week:
        try:
            week = int(report_week)
        except ValueError:
            raise ValidationError("report_week must be an integer")
        # weeks outside the column range cannot match any row
        if 1 <= week <= MAX_REPORT_WEEK:
            queryset = queryset.filter(report_week=week)
        else:
            queryset = queryset.none()

    approval_status = params.get('approval_status')
    if approval_status:
        queryset = queryset.filter(approval_status=approval_status)

    sort_field = params.get('sort_by')
    if sort_field not in SORT_FIELDS:
        sort_field = 'created_at'
    order = params.get('order') or default_order
    prefix = '-' if order == 'desc' else ''
    queryset = queryset.select_related('student').order_by(f"{prefix}{sort_field}", f"{prefix}id")

    total = queryset.count()
    offset = (page - 1) * limit
    # past the last page there is nothing to fetch
    results = list(queryset[offset:offset + limit]) if offset < total else []
    return {
        'results': results,
        'total': total,
        'page': page,
        'pages': math.ceil(total / limit),
    }


def update_report(report_id, data):
    try:
        report = WeeklyReport.objects.get(pk=report_id, is_deleted=False)
    except WeeklyReport.DoesNotExist:
        raise NotFoundError()

    for attr, value in data.items():
        setattr(report, attr, value)
    report.save()
    return report


def soft_delete_report(report_id):
    try:
        report = WeeklyReport.objects.get(pk=report_id, is_deleted=False)
    except WeeklyReport.DoesNotExist:
        raise NotFoundError("Weekly report not found or already deleted")

    report.is_deleted = True
    report.deleted_at = timezone.now()
    report.save(update_fields=['is_deleted', 'deleted_at', 'updated_at'])
    return report


def restore_report(report_id):
    """Bring back a soft-deleted report; live reports are reported missing."""
    try:
        report = WeeklyReport.objects.get(pk=report_id, is_deleted=True)
    except WeeklyReport.DoesNotExist:
        raise NotFoundError("Weekly report not found or not soft-deleted")

    report.is_deleted = False
    report.deleted_at = None
    report.save(update_fields=['is_deleted', 'deleted_at', 'updated_at'])
    return report
