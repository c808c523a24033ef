from django.contrib import admin
from .models import StudentInternship


@admin.register(StudentInternship)
class StudentInternshipAdmin(admin.ModelAdmin):
    list_display = ['student', 'guide', 'company_name', 'is_deleted', 'created_at']
    list_filter = ['is_deleted']
