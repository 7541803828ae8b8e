from rest_framework.permissions import BasePermission


class IsAdministrador(BasePermission):
    """
    Acesso ao painel: superusuário ou usuário com o papel 'admin'.
    """
    message = "Acesso restrito aos administradores da loja."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'is_admin', False))
