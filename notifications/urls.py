from django.urls import path
from . import views

urlpatterns = [
    path('', views.NotificationListView.as_view(), name='notification-list'),
    path('unread-count/', views.UnreadCountView.as_view(), name='notification-unread-count'),
    path('mark-all-read/', views.MarkAllNotificationsReadView.as_view(), name='notification-mark-all-read'),
    path('broadcast/', views.BroadcastNotificationView.as_view(), name='notification-broadcast'),
    path('<int:pk>/mark-read/', views.MarkNotificationReadView.as_view(), name='notification-mark-read'),
]
