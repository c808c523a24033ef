from django.db import models
from authentication.models import User


class StudentInternship(models.Model):
    student = models.OneToOneField(User, on_delete=models.CASCADE, related_name='internship',
                                   limit_choices_to={'role': 'student'})
    guide = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True,
                              related_name='guided_internships', limit_choices_to={'role': 'guide'})
    company_name = models.CharField(max_length=200, blank=True)
    project_title = models.CharField(max_length=200, blank=True)
    weekly_reports = models.ManyToManyField('reports.WeeklyReport', related_name='internships', blank=True)
    is_deleted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.student.username} - {self.company_name or 'Internship'}"

    class Meta:
        ordering = ['-created_at']
