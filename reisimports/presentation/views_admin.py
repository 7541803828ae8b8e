# reisimports/presentation/views_admin.py
"""
Views (API) para o painel de administração: pedidos, produtos, clientes,
mais vendidos e financeiro.
"""
from django.utils import timezone
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from reisimports.core import dependency_injection as di
from reisimports.core.entities import Produto
from reisimports.core.exceptions import BaseErroCore

from .permissions import IsAdministrador
from .respostas import resposta_de_erro
from .serializers import (
    ClienteSerializer,
    ClienteUpdateSerializer,
    FiltroPeriodoSerializer,
    MaisVendidoSerializer,
    MesReferenciaSerializer,
    PedidoAdminSerializer,
    ProdutoAdminSerializer,
    ProdutoSerializer,
    SalvarMetasSerializer,
    StatusPedidoSerializer,
)


class AdminAPIView(APIView):
    """Base das views do painel: apenas administradores."""
    permission_classes = [IsAdministrador]


# ====================================================================
# GERENCIAMENTO DE PEDIDOS
# ====================================================================

class PedidosAdminAPIView(AdminAPIView):
    """
    Lista os pedidos (filtro opcional por status) com a contagem por status
    e o link de WhatsApp de cada cliente.
    """

    def get(self, request):
        gerenciar_pedidos_uc = di.get_gerenciar_pedidos_admin_use_case()
        try:
            pedidos = gerenciar_pedidos_uc.listar_todos(request.query_params.get('status') or None)
            contagem = gerenciar_pedidos_uc.contagem_por_status()
        except BaseErroCore as e:
            return resposta_de_erro(e)

        contexto = {'gerar_link_whatsapp': gerenciar_pedidos_uc.link_whatsapp}
        return Response({
            'contagem': contagem,
            'pedidos': PedidoAdminSerializer(pedidos, many=True, context=contexto).data,
        })


class PedidoAdminDetailAPIView(AdminAPIView):

    def get(self, request, pedido_id):
        gerenciar_pedidos_uc = di.get_gerenciar_pedidos_admin_use_case()
        try:
            pedido = gerenciar_pedidos_uc.detalhar_pedido(str(pedido_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        contexto = {'gerar_link_whatsapp': gerenciar_pedidos_uc.link_whatsapp}
        return Response(PedidoAdminSerializer(pedido, context=contexto).data)

    def patch(self, request, pedido_id):
        """Atualiza o status do pedido (qualquer status é aceito a partir de qualquer outro)."""
        serializer = StatusPedidoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        gerenciar_pedidos_uc = di.get_gerenciar_pedidos_admin_use_case()
        try:
            pedido = gerenciar_pedidos_uc.atualizar_status_manual(
                str(pedido_id), serializer.validated_data['status']
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        contexto = {'gerar_link_whatsapp': gerenciar_pedidos_uc.link_whatsapp}
        return Response(PedidoAdminSerializer(pedido, context=contexto).data)


# ====================================================================
# GERENCIAMENTO DE PRODUTOS
# ====================================================================

class ProdutosAdminAPIView(AdminAPIView):
    """Lista todos os produtos (inclusive inativos) e cadastra novos."""
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get(self, request):
        try:
            produtos = di.get_gerenciar_produtos_admin_use_case().listar()
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ProdutoSerializer(produtos, many=True).data)

    def post(self, request):
        serializer = ProdutoAdminSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        dados = dict(serializer.validated_data)
        imagem = dados.pop('imagem', None)
        try:
            produto = di.get_gerenciar_produtos_admin_use_case().salvar(Produto(**dados), imagem=imagem)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ProdutoSerializer(produto).data, status=status.HTTP_201_CREATED)


class ProdutoAdminDetailAPIView(AdminAPIView):
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get(self, request, produto_id):
        try:
            produto = di.get_gerenciar_produtos_admin_use_case().detalhar(str(produto_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ProdutoSerializer(produto).data)

    def _atualizar(self, request, produto_id, parcial):
        gerenciar_produtos_uc = di.get_gerenciar_produtos_admin_use_case()
        try:
            produto = gerenciar_produtos_uc.detalhar(str(produto_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)

        serializer = ProdutoAdminSerializer(data=request.data, partial=parcial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        dados = dict(serializer.validated_data)
        imagem = dados.pop('imagem', None)
        for campo, valor in dados.items():
            setattr(produto, campo, valor)

        try:
            produto = gerenciar_produtos_uc.salvar(produto, imagem=imagem)
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ProdutoSerializer(produto).data)

    def put(self, request, produto_id):
        return self._atualizar(request, produto_id, parcial=False)

    def patch(self, request, produto_id):
        return self._atualizar(request, produto_id, parcial=True)

    def delete(self, request, produto_id):
        try:
            di.get_gerenciar_produtos_admin_use_case().deletar(str(produto_id))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ====================================================================
# GERENCIAMENTO DE CLIENTES
# ====================================================================

class ClientesAdminAPIView(AdminAPIView):
    """Lista os clientes com busca por nome, CPF ou telefone (?busca=)."""

    def get(self, request):
        try:
            clientes = di.get_gerenciar_clientes_admin_use_case().listar(request.query_params.get('busca'))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(ClienteSerializer(clientes, many=True).data)


class ClienteAdminDetailAPIView(AdminAPIView):

    def patch(self, request, usuario_id):
        serializer = ClienteUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            usuario = di.get_gerenciar_clientes_admin_use_case().atualizar(
                str(usuario_id), **serializer.validated_data
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)

        return Response({
            'id': usuario.id,
            'nome_completo': usuario.nome_completo,
            'email': usuario.email,
            'telefone': usuario.telefone,
            'cpf': usuario.cpf,
            'endereco': usuario.endereco,
        })


# ====================================================================
# RELATÓRIOS
# ====================================================================

class MaisVendidosAPIView(AdminAPIView):
    """Ranking de mais vendidos no período (?inicio=&fim=&ordenar_por=qty|revenue)."""

    def get(self, request):
        filtro = FiltroPeriodoSerializer(data=request.query_params)
        if not filtro.is_valid():
            return Response(filtro.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            linhas = di.get_relatorio_mais_vendidos_use_case().executar(
                hoje=timezone.localdate(), **filtro.validated_data
            )
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response(MaisVendidoSerializer(linhas, many=True).data)


class ResumoMensalMixin:
    """Mês de referência e montagem do resumo financeiro."""

    def _mes_referencia(self, dados):
        filtro = MesReferenciaSerializer(data=dados)
        filtro.is_valid(raise_exception=True)
        hoje = timezone.localdate()
        return filtro.validated_data.get('ano', hoje.year), filtro.validated_data.get('mes', hoje.month)

    def _resumo(self, ano, mes):
        resumo = di.get_resumo_financeiro_use_case().executar(ano, mes)
        dias = sorted(set(resumo.vendas_por_dia) | set(resumo.metas_por_dia))
        return {
            'ano': resumo.ano,
            'mes': resumo.mes,
            'total_mes': f"{resumo.total_mes:.2f}",
            'total_ano': f"{resumo.total_ano:.2f}",
            'dias': [
                {
                    'data': dia.isoformat(),
                    'vendido': f"{resumo.vendas_por_dia.get(dia, 0):.2f}",
                    'meta': (f"{resumo.metas_por_dia[dia]:.2f}" if dia in resumo.metas_por_dia else None),
                }
                for dia in dias
            ],
        }


class FinanceiroAPIView(ResumoMensalMixin, AdminAPIView):
    """
    GET: resumo do mês (?ano=&mes=), com vendas e metas por dia.
    POST: grava as metas diárias informadas (valores vazios ou zero são ignorados).
    """

    def get(self, request):
        ano, mes = self._mes_referencia(request.query_params)
        try:
            return Response(self._resumo(ano, mes))
        except BaseErroCore as e:
            return resposta_de_erro(e)

    def post(self, request):
        serializer = SalvarMetasSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        metas = {linha['data']: linha['valor'] for linha in serializer.validated_data['metas']}
        try:
            gravadas = di.get_resumo_financeiro_use_case().salvar_metas(metas, str(request.user.pk))
        except BaseErroCore as e:
            return resposta_de_erro(e)
        return Response({'message': f'{gravadas} meta(s) salva(s).', 'gravadas': gravadas})


class GerarMetasAPIView(ResumoMensalMixin, AdminAPIView):
    """Gera as metas do mês repetindo as vendas da semana anterior."""

    def post(self, request):
        ano, mes = self._mes_referencia(request.data)
        try:
            metas = di.get_resumo_financeiro_use_case().gerar_metas_semana_anterior(
                ano, mes, usuario_id=str(request.user.pk), hoje=timezone.localdate()
            )
            resumo = self._resumo(ano, mes)
        except BaseErroCore as e:
            return resposta_de_erro(e)

        resumo['geradas'] = len([valor for valor in metas.values() if valor > 0])
        return Response(resumo, status=status.HTTP_201_CREATED)
