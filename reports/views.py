import logging
from contextlib import contextmanager

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import IsAdmin, IsAdminOrGuide, IsGuide, IsStudent
from . import workflow
from .export import export_reports_to_google_sheet
from .models import WeeklyReport
from .serializers import ApprovalSerializer, WeeklyReportSerializer, WeeklyReportSubmitSerializer

logger = logging.getLogger(__name__)


@contextmanager
def logged(route):
    """Log and re-raise anything that escapes a handler."""
    try:
        yield
    except Exception as e:
        logger.error(f"[{route}] Error: {e}")
        raise


def paginated_response(result):
    return Response({
        'success': True,
        'total': result['total'],
        'page': result['page'],
        'pages': result['pages'],
        'data': WeeklyReportSerializer(result['results'], many=True).data,
    })


# ===== Weekly Report Views =====
class WeeklyReportListCreateView(APIView):
    """
    GET: admins list every report (filters, sorting, pagination).
    POST: a student submits a new weekly report.
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [permissions.IsAuthenticated(), IsStudent()]
        return [permissions.IsAuthenticated(), IsAdmin()]

    def get(self, request):
        with logged("GET /api/weekly-reports"):
            result = workflow.list_reports(request.query_params, scope='admin')
        logger.info(f"[GET /api/weekly-reports] {len(result['results'])} of {result['total']}")
        return paginated_response(result)

    def post(self, request):
        route = "POST /api/weekly-reports"
        with logged(route):
            serializer = WeeklyReportSubmitSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            report = workflow.submit_report(request.user, serializer.validated_data)

        logger.info(f"[{route}] Created ID: {report.id}")
        return Response(
            {'success': True, 'message': 'Weekly report submitted', 'data': WeeklyReportSerializer(report).data},
            status=status.HTTP_201_CREATED
        )


class StudentWeeklyReportsView(APIView):
    """A student's own reports."""
    permission_classes = [permissions.IsAuthenticated, IsStudent]

    def get(self, request):
        with logged("GET /api/weekly-reports/mine"):
            result = workflow.list_reports(request.query_params, scope='student', user=request.user,
                                           default_order='desc')
        logger.info(f"[GET /api/weekly-reports/mine] {result['total']} for student {request.user.id}")
        return paginated_response(result)


class WeeklyReportDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdmin]

    def get(self, request, pk):
        with logged(f"GET /api/weekly-reports/{pk}"):
            report = workflow.get_report(pk, request.user)
        logger.info(f"[GET /api/weekly-reports/{pk}] Fetched by admin {request.user.id}")
        return Response({'success': True, 'data': WeeklyReportSerializer(report).data})

    def put(self, request, pk):
        route = f"PUT /api/weekly-reports/{pk}"
        with logged(route):
            serializer = WeeklyReportSubmitSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            report = workflow.update_report(pk, serializer.validated_data)

        logger.info(f"[{route}] Updated")
        return Response({
            'success': True,
            'message': 'Weekly report updated successfully',
            'data': WeeklyReportSerializer(report).data
        })

    def delete(self, request, pk):
        route = f"DELETE /api/weekly-reports/{pk}"
        with logged(route):
            workflow.soft_delete_report(pk)

        logger.info(f"[{route}] Soft deleted")
        return Response({'success': True, 'message': 'Weekly report deleted successfully'})


class WeeklyReportApprovalView(APIView):
    """Admins review any report; guides only reports of their own students."""
    permission_classes = [permissions.IsAuthenticated, IsAdminOrGuide]

    def patch(self, request, pk):
        route = f"PATCH /api/weekly-reports/{pk}/approval"
        with logged(route):
            serializer = ApprovalSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            report = workflow.set_approval_status(
                pk,
                serializer.validated_data['approval_status'],
                serializer.validated_data.get('comments'),
                request.user,
            )

        logger.info(f"[{route}] {report.approval_status} by {request.user.role} {request.user.id}")
        return Response({
            'success': True,
            'message': 'Approval status updated successfully',
            'data': WeeklyReportSerializer(report).data
        })


class WeeklyReportMarksView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdminOrGuide]

    def patch(self, request, pk):
        route = f"PATCH /api/weekly-reports/{pk}/marks"
        with logged(route):
            report = workflow.set_marks(pk, request.data.get('marks'), request.user)

        logger.info(f"[{route}] Marks {report.marks} by {request.user.role} {request.user.id}")
        return Response({
            'success': True,
            'message': 'Marks updated successfully',
            'data': WeeklyReportSerializer(report).data
        })


class WeeklyReportRestoreView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdmin]

    def patch(self, request, pk):
        route = f"PATCH /api/weekly-reports/{pk}/restore"
        with logged(route):
            report = workflow.restore_report(pk)

        logger.info(f"[{route}] Restored")
        return Response({
            'success': True,
            'message': 'Weekly report restored successfully',
            'data': WeeklyReportSerializer(report).data
        })


class ExportReportsToGoogleSheetView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdmin]

    def post(self, request):
        reports = WeeklyReport.objects.filter(is_deleted=False).select_related('student').order_by('created_at')
        try:
            exported = export_reports_to_google_sheet(reports)
        except Exception as e:
            logger.error(f"[POST /api/weekly-reports/export-to-sheet] Error: {e}")
            return Response(
                {'success': False, 'message': f"Google Sheet export failed: {e}"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response({
            'success': True,
            'message': f'{exported} weekly report(s) exported to Google Sheet.',
            'data': {'exported': exported}
        })


# ===== Guide Weekly Report Views =====
class GuideWeeklyReportsView(APIView):
    """Reports of students whose internships this guide supervises."""
    permission_classes = [permissions.IsAuthenticated, IsGuide]

    def get(self, request):
        with logged("GET /api/weeklyReport/guide"):
            result = workflow.list_reports(request.query_params, scope='guide', user=request.user,
                                           default_order='desc')
        logger.info(f"[GET /api/weeklyReport/guide] {result['total']} for guide {request.user.id}")
        return paginated_response(result)


class GuideWeeklyReportDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsGuide]

    def get(self, request, pk):
        with logged(f"GET /api/weeklyReport/guide/{pk}"):
            report = workflow.get_report(pk, request.user)
        logger.info(f"[GET /api/weeklyReport/guide/{pk}] Fetched by guide {request.user.id}")
        return Response({'success': True, 'data': WeeklyReportSerializer(report).data})
