from rest_framework.permissions import BasePermission


def owner_id_of(obj):
    for attr in ('owner_id', 'created_by_id'):
        if hasattr(obj, attr):
            return getattr(obj, attr)
    return None


class IsOwner(BasePermission):
    """Authenticated user that owns the object (``owner`` or ``created_by``)."""

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        if request.user.is_superuser:
            return True
        return owner_id_of(obj) == request.user.id
