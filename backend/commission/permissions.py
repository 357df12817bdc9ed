from rest_framework.permissions import BasePermission

from authentication.models import User

Access = User.CommissionsAccess


def can_view_all_commissions(user):
    return user.is_admin or user.commissions_access in (Access.ALL, Access.ALL_EDIT)


def can_read_commission(user, target_id):
    """
    Self (unless access is NONE), admins and holders of an ALL/ALL_EDIT
    grant may read a user's commission.
    """
    if can_view_all_commissions(user):
        return True
    return str(user.pk) == str(target_id) and user.commissions_access != Access.NONE


def can_edit_commission(user, target_id):
    """Admins, ALL_EDIT holders, and the user themself with OWN_EDIT."""
    if user.is_admin or user.commissions_access == Access.ALL_EDIT:
        return True
    return str(user.pk) == str(target_id) and user.commissions_access == Access.OWN_EDIT


def commission_scope(user):
    """Users whose summaries appear in the caller's commission list."""
    if can_view_all_commissions(user):
        return User.objects.exclude(role=User.Role.CLIENT).filter(is_active=True)
    if user.commissions_access == Access.NONE:
        return User.objects.none()
    return User.objects.filter(pk=user.pk)


class HasCommissionPermission(BasePermission):
    """
    Commission endpoints: authenticated non-client users, then the access
    matrix for the ``user_id`` in the URL.
    """
    message = 'You do not have access to this commission.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated or user.is_client:
            return False

        target_id = view.kwargs.get('user_id')
        if target_id is None:
            return True
        if request.method == 'PUT':
            return can_edit_commission(user, target_id)
        return can_read_commission(user, target_id)
