from rest_framework import serializers
from .models import WeeklyReport


class WeeklyReportSerializer(serializers.ModelSerializer):
    student_email = serializers.EmailField(source='student.email', read_only=True)
    approved_by_name = serializers.SerializerMethodField()
    marked_by_name = serializers.SerializerMethodField()

    class Meta:
        model = WeeklyReport
        fields = [
            'id',
            'student',
            'student_name',
            'student_email',
            'project_title',
            'report_week',
            'summary',
            'approval_status',
            'comments',
            'status_updated_at',
            'approved_by',
            'approved_by_name',
            'approval_date',
            'marks',
            'marked_by',
            'marked_by_name',
            'marking_date',
            'is_deleted',
            'deleted_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_approved_by_name(self, obj):
        return obj.approved_by.display_name if obj.approved_by else None

    def get_marked_by_name(self, obj):
        return obj.marked_by.display_name if obj.marked_by else None


class WeeklyReportSubmitSerializer(serializers.ModelSerializer):
    """Fields a student fills in; review fields are never writable here."""

    class Meta:
        model = WeeklyReport
        fields = ['project_title', 'report_week', 'summary']

    def validate_report_week(self, value):
        if value < 1:
            raise serializers.ValidationError("Report week must be at least 1")
        return value


class ApprovalSerializer(serializers.Serializer):
    approval_status = serializers.ChoiceField(
        choices=WeeklyReport.APPROVAL_STATUS_CHOICES,
        error_messages={'invalid_choice': 'Invalid approval status'},
    )
    comments = serializers.CharField(required=False, allow_null=True, allow_blank=True)
