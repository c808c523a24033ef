from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from .views import CreateAccountView, LoginView, MeView, UserListView

urlpatterns = [
    # ===== Authentication URLs =====
    path('login/', LoginView.as_view(), name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('me/', MeView.as_view(), name='me'),

    # ===== Admin User Management URLs =====
    path('users/', UserListView.as_view(), name='user-list'),
    path('create-guide/', CreateAccountView.as_view(role='guide'), name='create-guide'),
    path('create-student/', CreateAccountView.as_view(role='student'), name='create-student'),
]
