from django.contrib import admin
from .models import WeeklyReport


@admin.register(WeeklyReport)
class WeeklyReportAdmin(admin.ModelAdmin):
    list_display = ['student_name', 'project_title', 'report_week', 'approval_status', 'marks', 'is_deleted']
    list_filter = ['approval_status', 'is_deleted', 'report_week']
    search_fields = ['student_name', 'project_title']
