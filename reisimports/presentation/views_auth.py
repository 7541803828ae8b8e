# reisimports/presentation/views_auth.py
"""
Views para autenticação, registro e perfil de usuários.
O login é feito por JWT (e-mail e senha).
"""
import logging

from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .serializers import PerfilSerializer, RegistroSerializer

logger = logging.getLogger(__name__)


class RegistroAPIView(APIView):
    """
    Cadastro de cliente. Aceita multipart para o envio do documento (RG).
    """
    permission_classes = [AllowAny]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def post(self, request):
        serializer = RegistroSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        usuario = serializer.save()
        logger.info("Novo cliente cadastrado: %s", usuario.email)
        return Response(
            {
                'message': 'Cadastro realizado com sucesso! Faça login para continuar.',
                'usuario': PerfilSerializer(usuario).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginAPIView(TokenObtainPairView):
    """Recebe e-mail e senha e devolve o par de tokens (access/refresh)."""
    permission_classes = [AllowAny]


class RefreshTokenAPIView(TokenRefreshView):
    permission_classes = [AllowAny]


class PerfilAPIView(APIView):
    """Perfil do usuário logado."""
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get(self, request):
        return Response(PerfilSerializer(request.user).data)

    def patch(self, request):
        serializer = PerfilSerializer(request.user, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        serializer.save()
        return Response(serializer.data)
