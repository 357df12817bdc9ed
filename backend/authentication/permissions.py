from rest_framework.permissions import BasePermission


class IsAdminUser(BasePermission):
    """
    Allow access to admins (role ADMIN) and superusers only.
    """
    message = 'Admin access required.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_admin)


class IsTeamOrAdmin(BasePermission):
    """
    Allow access to the internal portal: admins and team members.
    Client-portal users are refused.
    """
    message = 'Team or admin access required.'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return not request.user.is_client


class IsAdminOrReadOnly(BasePermission):
    """
    Read access for any team member, write access for admins.
    """
    def has_permission(self, request, view):
        from rest_framework import permissions

        if not request.user or not request.user.is_authenticated or request.user.is_client:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return request.user.is_admin
