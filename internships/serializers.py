from rest_framework import serializers
from .models import StudentInternship
from authentication.models import User
from authentication.serializers import UserSerializer


class StudentInternshipSerializer(serializers.ModelSerializer):
    student = UserSerializer(read_only=True)
    student_id = serializers.IntegerField(write_only=True)
    guide = UserSerializer(read_only=True)
    weekly_report_ids = serializers.PrimaryKeyRelatedField(source='weekly_reports', many=True, read_only=True)
    report_count = serializers.SerializerMethodField()

    class Meta:
        model = StudentInternship
        fields = [
            'id', 'student', 'student_id', 'guide', 'company_name', 'project_title',
            'weekly_report_ids', 'report_count', 'is_deleted', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'is_deleted', 'created_at', 'updated_at']

    def get_report_count(self, obj):
        return obj.weekly_reports.count()

    def validate_student_id(self, value):
        if not User.objects.filter(id=value, role='student').exists():
            raise serializers.ValidationError("Student not found")
        if StudentInternship.objects.filter(student_id=value).exists():
            raise serializers.ValidationError("This student already has an internship record")
        return value
