from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from authentication.models import User


class WeeklyReport(models.Model):
    APPROVAL_STATUS_CHOICES = [
        ('Pending', 'Pending'),
        ('Approved', 'Approved'),
        ('Rejected', 'Rejected'),
    ]

    student = models.ForeignKey(User, on_delete=models.CASCADE, related_name='weekly_reports')
    student_name = models.CharField(max_length=200)
    project_title = models.CharField(max_length=200)
    report_week = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    summary = models.TextField(blank=True, default='')

    approval_status = models.CharField(max_length=20, choices=APPROVAL_STATUS_CHOICES, default='Pending')
    # set only while Rejected
    comments = models.TextField(blank=True, null=True)
    status_updated_at = models.DateTimeField(blank=True, null=True)
    approved_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='approved_reports')
    approval_date = models.DateTimeField(blank=True, null=True)

    marks = models.IntegerField(blank=True, null=True,
                                validators=[MinValueValidator(0), MaxValueValidator(10)])
    marked_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True,
                                  related_name='marked_reports')
    marking_date = models.DateTimeField(blank=True, null=True)

    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.student_name} - Week {self.report_week} - {self.approval_status}"
