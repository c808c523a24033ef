import logging

from django.contrib.auth import authenticate
from rest_framework import generics, permissions, status
from rest_framework.exceptions import AuthenticationFailed, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User
from .serializers import AccountCreateSerializer, UserSerializer
from .permissions import IsAdmin

logger = logging.getLogger(__name__)


class LoginView(APIView):
    """Exchange username and password for a JWT access/refresh pair."""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        credentials = {
            'username': request.data.get('username'),
            'password': request.data.get('password'),
        }
        missing = [field for field, value in credentials.items() if not value]
        if missing:
            raise ValidationError({field: 'This field is required.' for field in missing})

        user = authenticate(**credentials)
        if user is None:
            logger.warning(f"[POST /api/auth/login] Failed login for '{credentials['username']}'")
            raise AuthenticationFailed("Invalid credentials")

        tokens = RefreshToken.for_user(user)
        logger.info(f"[POST /api/auth/login] User {user.id} ({user.role}) signed in")
        return Response({
            "success": True,
            "message": "Login successful",
            "refresh": str(tokens),
            "access": str(tokens.access_token),
            "data": UserSerializer(user).data,
        })


class MeView(APIView):
    """Identity of the authenticated caller."""

    def get(self, request):
        return Response({"success": True, "data": UserSerializer(request.user).data})


class UserListView(generics.ListAPIView):
    """View for admins to see all users, optionally by role."""
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated, IsAdmin]

    def get_queryset(self):
        role = self.request.query_params.get('role', None)
        if role:
            return User.objects.filter(role=role)
        return User.objects.all()

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'success': True, 'total': len(serializer.data), 'data': serializer.data})


class CreateAccountView(generics.CreateAPIView):
    """Admins create guide or student accounts; the role comes from the URL."""
    serializer_class = AccountCreateSerializer
    permission_classes = [permissions.IsAuthenticated, IsAdmin]
    role = None

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['role'] = self.role
        return context

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"[POST /api/auth/create-{self.role}] Created user {user.id}")
        return Response(
            {
                "success": True,
                "message": f"{self.role.capitalize()} created successfully",
                "data": UserSerializer(user).data
            },
            status=status.HTTP_201_CREATED
        )
