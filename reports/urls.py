from django.urls import path
from . import views

urlpatterns = [
    # ===== Weekly Report URLs =====
    path('weekly-reports/', views.WeeklyReportListCreateView.as_view(), name='weekly-report-list'),
    path('weekly-reports/mine/', views.StudentWeeklyReportsView.as_view(), name='student-weekly-reports'),
    path('weekly-reports/export-to-sheet/', views.ExportReportsToGoogleSheetView.as_view(),
         name='weekly-report-export'),
    path('weekly-reports/<int:pk>/', views.WeeklyReportDetailView.as_view(), name='weekly-report-detail'),
    path('weekly-reports/<int:pk>/approval/', views.WeeklyReportApprovalView.as_view(),
         name='weekly-report-approval'),
    path('weekly-reports/<int:pk>/marks/', views.WeeklyReportMarksView.as_view(), name='weekly-report-marks'),
    path('weekly-reports/<int:pk>/restore/', views.WeeklyReportRestoreView.as_view(),
         name='weekly-report-restore'),

    # ===== Guide URLs =====
    path('weeklyReport/guide/', views.GuideWeeklyReportsView.as_view(), name='guide-weekly-reports'),
    path('weeklyReport/guide/<int:pk>/', views.GuideWeeklyReportDetailView.as_view(),
         name='guide-weekly-report-detail'),
    path('weeklyReport/guide/<int:pk>/approval/', views.WeeklyReportApprovalView.as_view(),
         name='guide-weekly-report-approval'),
    path('weeklyReport/guide/<int:pk>/marks/', views.WeeklyReportMarksView.as_view(),
         name='guide-weekly-report-marks'),
]
