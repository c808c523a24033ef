from rest_framework import permissions


class HasRole(permissions.BasePermission):
    """Grants access when the caller's role is one of ``roles``."""
    roles = ()

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role in self.roles)


class IsAdmin(HasRole):
    roles = ('admin',)


class IsGuide(HasRole):
    roles = ('guide',)


class IsStudent(HasRole):
    roles = ('student',)


class IsAdminOrGuide(HasRole):
    roles = ('admin', 'guide')
