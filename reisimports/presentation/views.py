from django.db import transaction
from django.http import HttpResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from reisimports.core import dependency_injection as di
from reisimports.core.entities import DadosEntrega
from reisimports.core.exceptions import BaseErroCore
from reisimports.infrastructure.mappers import UsuarioMapper

from .cart_manager import CartManager
from .respostas import resposta_de_erro
from .serializers import (
    AdicionarItemCarrinhoSerializer,
    AtualizarItemCarrinhoSerializer,
    CarrinhoSerializer,
    CheckoutSerializer,
    PedidoSerializer,
    ProdutoSerializer,
)


# ====================================================================
# VIEWS: Orquestram a requisição, a execução dos casos de uso e a resposta.
# ====================================================================

def usuario_da_requisicao(request):
    """Entidade Usuario do solicitante autenticado."""
    return UsuarioMapper.to_entity(request.user)


# ====================================================================
# CATÁLOGO
# ====================================================================

class ProdutoListAPIView(APIView):
    """
    Vitrine: produtos ativos, com busca por nome/descrição (?busca=) e filtro de categoria (?categoria=).
    """
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            produtos = di.get_listar_produtos_use_case().executar(
                busca=request.query_params.get('busca'),
                categoria=request.query_params.get('categoria'),
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ProdutoSerializer(produtos, many=True).data)


class ProdutoDetailAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, produto_id):
        try:
            produto = di.get_detalhar_produto_use_case().executar(str(produto_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ProdutoSerializer(produto).data)


# ====================================================================
# CARRINHO (sessão)
# ====================================================================

class CarrinhoAPIView(APIView):
    """
    API View para gerenciar o carrinho guardado na sessão.
    """
    permission_classes = [AllowAny]

    def _resposta(self, cart_manager, codigo=status.HTTP_200_OK):
        contexto = cart_manager.get_carrinho_context(di.get_valor_minimo_pedido())
        return Response(CarrinhoSerializer(contexto).data, status=codigo)

    def get(self, request):
        try:
            cart_manager = CartManager(request)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return self._resposta(cart_manager)

    def post(self, request):
        """Adiciona um item ao carrinho."""
        serializer = AdicionarItemCarrinhoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            cart_manager = CartManager(request)
            cart_manager.add_item(**serializer.validated_data)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return self._resposta(cart_manager, status.HTTP_201_CREATED)

    def patch(self, request):
        """Altera a quantidade de um item (mínimo 1, limitada ao máximo do produto)."""
        serializer = AtualizarItemCarrinhoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            cart_manager = CartManager(request)
            cart_manager.update_quantity(**serializer.validated_data)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return self._resposta(cart_manager)

    def delete(self, request):
        """Remove um item do carrinho; sem produto_id, esvazia o carrinho."""
        produto_id = request.data.get('produto_id') or request.query_params.get('produto_id')
        try:
            cart_manager = CartManager(request)
            if produto_id:
                cart_manager.remove_item(str(produto_id))
            else:
                cart_manager.clear_carrinho()
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return self._resposta(cart_manager)


# ====================================================================
# CHECKOUT E PEDIDOS DO CLIENTE
# ====================================================================

class CheckoutAPIView(APIView):
    """
    API View para finalizar o pedido (pagamento na entrega).
    Campos de entrega omitidos são preenchidos com os dados do perfil.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        dados = serializer.validated_data
        user = request.user
        dados_entrega = DadosEntrega(
            endereco=dados.get('endereco') or user.endereco or '',
            telefone=dados.get('telefone') or user.telefone or '',
            cpf=dados.get('cpf') or user.cpf or '',
            forma_pagamento=dados['forma_pagamento'],
            observacoes=dados.get('observacoes') or None,
        )

        finalizar_uc = di.get_finalizar_pedido_use_case()
        try:
            cart_manager = CartManager(request)
            with transaction.atomic():
                pedido = finalizar_uc.executar(
                    carrinho=cart_manager.get_carrinho(),
                    usuario_id=str(user.pk),
                    dados=dados_entrega,
                    dia=timezone.localdate(),
                )
        except BaseErroCore as e:
            return resposta_de_erro(e)

        cart_manager.clear_carrinho()
        return Response(
            {
                'message': 'Pedido realizado com sucesso!',
                'pedido_id': pedido.id,
                'pedido': PedidoSerializer(pedido).data,
            },
            status=status.HTTP_201_CREATED,
        )


class MeusPedidosAPIView(APIView):
    """Histórico de pedidos do usuário logado."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            pedidos = di.get_listar_pedidos_usuario_use_case().executar(str(request.user.pk))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedidos, many=True).data)


class PedidoDetailAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pedido_id):
        try:
            pedido = di.get_detalhar_pedido_use_case().executar(
                str(pedido_id), usuario_da_requisicao(request)
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(PedidoSerializer(pedido).data)


class DeclaracaoConteudoAPIView(APIView):
    """Download do PDF de declaração de conteúdo do pedido."""
    permission_classes = [IsAuthenticated]

    def get(self, request, pedido_id):
        try:
            nome_arquivo, conteudo = di.get_gerar_declaracao_use_case().executar(
                str(pedido_id), usuario_da_requisicao(request)
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)

        response = HttpResponse(conteudo, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{nome_arquivo}"'
        return response
