import logging

from rest_framework import generics, permissions, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.models import User
from authentication.permissions import IsAdmin
from notifications.utils import notify_on_guide_assigned
from .models import StudentInternship
from .serializers import StudentInternshipSerializer

logger = logging.getLogger(__name__)


def visible_internships(user):
    """Admins see every internship, guides their own students, students their own record."""
    queryset = StudentInternship.objects.filter(is_deleted=False).select_related('student', 'guide')
    if user.role == 'admin':
        return queryset
    elif user.role == 'guide':
        return queryset.filter(guide=user)
    return queryset.filter(student=user)


class InternshipListView(generics.ListAPIView):
    serializer_class = StudentInternshipSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return visible_internships(self.request.user)

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'success': True, 'total': len(serializer.data), 'data': serializer.data})


class InternshipCreateView(generics.CreateAPIView):
    serializer_class = StudentInternshipSerializer
    permission_classes = [permissions.IsAuthenticated, IsAdmin]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        internship = serializer.save()
        logger.info(f"[POST /api/internships] Created ID: {internship.id} for student {internship.student_id}")
        return Response(
            {'success': True, 'message': 'Internship created', 'data': self.get_serializer(internship).data},
            status=status.HTTP_201_CREATED
        )


class InternshipDetailView(generics.RetrieveAPIView):
    serializer_class = StudentInternshipSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return visible_internships(self.request.user)

    def retrieve(self, request, *args, **kwargs):
        return Response({'success': True, 'data': self.get_serializer(self.get_object()).data})


class AssignGuideView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdmin]

    def patch(self, request, pk):
        guide_id = request.data.get('guide_id')
        if not guide_id:
            raise ValidationError({'guide_id': 'Guide ID is required'})

        try:
            internship = StudentInternship.objects.select_related('student').get(pk=pk, is_deleted=False)
        except StudentInternship.DoesNotExist:
            logger.error(f"[PATCH /api/internships/{pk}/assign-guide] Internship not found")
            raise NotFound("Internship not found")

        try:
            guide = User.objects.get(id=guide_id, role='guide')
        except (User.DoesNotExist, ValueError):
            logger.error(f"[PATCH /api/internships/{pk}/assign-guide] Guide {guide_id} not found")
            raise NotFound("Guide not found")

        internship.guide = guide
        internship.save(update_fields=['guide', 'updated_at'])

        notify_on_guide_assigned(internship, request.user)

        logger.info(f"[PATCH /api/internships/{pk}/assign-guide] Guide {guide.id} assigned")
        return Response({
            'success': True,
            'message': 'Guide assigned successfully',
            'data': StudentInternshipSerializer(internship).data
        })
