"""
Camada de Infraestrutura: Implementação de Repositórios.

Esta camada traduz as operações abstratas definidas nas Portas da Core
em chamadas concretas ao Django ORM.
"""
import logging
from datetime import date
from decimal import Decimal
from functools import wraps
from typing import Dict, List, Optional

from django.apps import apps
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import (
    Count, DecimalField, Exists, F, Max, OuterRef, Prefetch, Q, Subquery, Sum,
)
from django.db.models.functions import TruncDate

from reisimports.core.entities import (
    ClienteResumo, ItemPedido, MetaVenda, Pedido, Produto, ProdutoMaisVendido,
    StatusPedido, Usuario,
)
from reisimports.core.exceptions import (
    FalhaAcessoDadosError,
    PedidoNaoEncontradoError,
    ProdutoNaoEncontradoError,
    UsuarioNaoEncontradoError,
)
from reisimports.core.ports import (
    IMetaVendaRepository,
    IPedidoRepository,
    IProdutoRepository,
    IUsuarioRepository,
)

from .mappers import (
    ItemPedidoMapper, MetaVendaMapper, PedidoMapper, ProdutoMapper, UsuarioMapper,
)

logger = logging.getLogger(__name__)


# Helper para Lazy Loading
def get_model(app_label, model_name):
    """Busca o modelo Django de forma segura (Lazy Loading)."""
    return apps.get_model(app_label, model_name)


def traduzir_erros_banco(metodo):
    """Converte falhas do banco em FalhaAcessoDadosError, sem nova tentativa."""
    @wraps(metodo)
    def wrapper(*args, **kwargs):
        try:
            return metodo(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("Falha de acesso ao banco em %s.", metodo.__qualname__)
            raise FalhaAcessoDadosError() from exc
    return wrapper


# ====================================================================
# 1. PRODUTOS
# ====================================================================

class ProdutoRepositoryDjango(IProdutoRepository):
    """Implementação do ProdutoRepository usando o Django ORM."""

    @property
    def ProdutoModel(self):
        return get_model('catalog', 'Produto')

    @property
    def ProdutoImagemModel(self):
        return get_model('catalog', 'ProdutoImagem')

    def _queryset(self):
        return self.ProdutoModel.objects.prefetch_related(
            Prefetch('imagens', queryset=self.ProdutoImagemModel.objects.all(), to_attr='imagens_list_for_mapper')
        )

    @traduzir_erros_banco
    def buscar_por_id(self, produto_id: str) -> Optional[Produto]:
        try:
            return ProdutoMapper.to_entity(self._queryset().get(pk=produto_id))
        except (self.ProdutoModel.DoesNotExist, ValidationError, ValueError):
            return None

    @traduzir_erros_banco
    def listar_ativos(self, busca: Optional[str] = None, categoria: Optional[str] = None) -> List[Produto]:
        qs = self._queryset().filter(ativo=True)
        if busca:
            qs = qs.filter(Q(nome__icontains=busca) | Q(descricao__icontains=busca))
        if categoria:
            qs = qs.filter(categoria=categoria)
        return [ProdutoMapper.to_entity(model) for model in qs.order_by('-data_criacao')]

    @traduzir_erros_banco
    def listar_todos(self) -> List[Produto]:
        qs = self._queryset().order_by('-data_atualizacao')
        return [ProdutoMapper.to_entity(model) for model in qs]

    @traduzir_erros_banco
    @transaction.atomic
    def salvar(self, produto: Produto) -> Produto:
        """Cria ou atualiza o produto e substitui a galeria de imagens extras."""
        model = None
        if produto.id:
            model = self.ProdutoModel.objects.filter(pk=produto.id).first()

        model = ProdutoMapper.to_model(produto, model)
        model.save()

        self.ProdutoImagemModel.objects.filter(produto=model).delete()
        self.ProdutoImagemModel.objects.bulk_create([
            self.ProdutoImagemModel(produto=model, imagem_url=url, ordem=ordem)
            for ordem, url in enumerate(produto.imagens_extras)
            if url
        ])
        return self.buscar_por_id(model.pk)

    @traduzir_erros_banco
    def salvar_imagem(self, produto_id: str, imagem) -> Produto:
        try:
            model = self.ProdutoModel.objects.get(pk=produto_id)
        except (self.ProdutoModel.DoesNotExist, ValidationError, ValueError):
            raise ProdutoNaoEncontradoError(f"Produto {produto_id} não encontrado.")
        model.imagem = imagem
        model.save(update_fields=['imagem', 'data_atualizacao'])
        return self.buscar_por_id(model.pk)

    @traduzir_erros_banco
    def deletar(self, produto_id: str):
        try:
            self.ProdutoModel.objects.get(pk=produto_id).delete()
        except (self.ProdutoModel.DoesNotExist, ValidationError, ValueError):
            raise ProdutoNaoEncontradoError(f"Produto {produto_id} não pode ser excluído, pois não existe.")


# ====================================================================
# 2. PEDIDOS
# ====================================================================

class PedidoRepositoryDjango(IPedidoRepository):
    """Implementação do PedidoRepository usando o Django ORM."""

    @property
    def PedidoModel(self):
        return get_model('pedidos', 'Pedido')

    @property
    def ItemPedidoModel(self):
        return get_model('pedidos', 'ItemPedido')

    def _queryset(self):
        return self.PedidoModel.objects.select_related('usuario').prefetch_related(
            Prefetch('itens', queryset=self.ItemPedidoModel.objects.order_by('id'), to_attr='itens_list_for_mapper')
        )

    @traduzir_erros_banco
    def criar_pedido(self, pedido: Pedido) -> Pedido:
        """Grava somente o pedido. Os itens vêm em uma segunda escrita."""
        model = PedidoMapper.to_model(pedido)
        model.save()
        pedido.id = str(model.pk)
        pedido.data_criacao = model.data_criacao
        return pedido

    @traduzir_erros_banco
    @transaction.atomic
    def criar_itens(self, pedido_id: str, itens: List[ItemPedido]) -> List[ItemPedido]:
        item_models = [ItemPedidoMapper.to_model(item, pedido_id=pedido_id) for item in itens]
        self.ItemPedidoModel.objects.bulk_create(item_models)
        for item in itens:
            item.pedido_id = str(pedido_id)
        return itens

    @traduzir_erros_banco
    def quantidade_comprada_no_dia(self, cpf: str, produto_id: str, dia: date) -> int:
        resultado = (
            self.ItemPedidoModel.objects
            .filter(
                pedido__cpf=cpf,
                produto_id=produto_id,
                pedido__data_criacao__date=dia,
            )
            .exclude(pedido__status=StatusPedido.CANCELADO)
            .aggregate(total=Sum('quantidade'))
        )
        return resultado['total'] or 0

    @traduzir_erros_banco
    def buscar_por_id(self, pedido_id: str) -> Optional[Pedido]:
        try:
            return PedidoMapper.to_entity(self._queryset().get(pk=pedido_id))
        except (self.PedidoModel.DoesNotExist, ValidationError, ValueError):
            return None

    @traduzir_erros_banco
    def listar_pedidos_por_usuario(self, usuario_id: str) -> List[Pedido]:
        qs = self._queryset().filter(usuario_id=usuario_id).order_by('-data_criacao')
        return [PedidoMapper.to_entity(model) for model in qs]

    @traduzir_erros_banco
    def listar_todos_pedidos(self, status: Optional[str] = None) -> List[Pedido]:
        qs = self._queryset()
        if status:
            qs = qs.filter(status=status)
        return [PedidoMapper.to_entity(model) for model in qs.order_by('-data_criacao')]

    @traduzir_erros_banco
    def contar_por_status(self) -> Dict[str, int]:
        linhas = self.PedidoModel.objects.order_by().values('status').annotate(total=Count('pk'))
        return {linha['status']: linha['total'] for linha in linhas}

    @traduzir_erros_banco
    def atualizar_status(self, pedido_id: str, novo_status: str) -> Pedido:
        try:
            atualizados = self.PedidoModel.objects.filter(pk=pedido_id).update(status=novo_status)
        except (ValidationError, ValueError):
            atualizados = 0
        if not atualizados:
            raise PedidoNaoEncontradoError(f"Pedido {pedido_id} não encontrado.")
        return self.buscar_por_id(pedido_id)

    @traduzir_erros_banco
    def mais_vendidos(self, inicio: date, fim: date, status: List[str]) -> List[ProdutoMaisVendido]:
        linhas = (
            self.ItemPedidoModel.objects
            .filter(
                pedido__status__in=status,
                pedido__data_criacao__date__gte=inicio,
                pedido__data_criacao__date__lte=fim,
            )
            .order_by()
            .values('produto_id')
            .annotate(
                nome=Max('nome_produto'),
                quantidade_total=Sum('quantidade'),
                receita_total=Sum(
                    F('quantidade') * F('preco_unitario'),
                    output_field=DecimalField(max_digits=14, decimal_places=2),
                ),
                ocorrencias=Count('pk'),
            )
        )

        produtos = get_model('catalog', 'Produto').objects.in_bulk(
            [linha['produto_id'] for linha in linhas if linha['produto_id']]
        )
        resultado = []
        for linha in linhas:
            produto = produtos.get(linha['produto_id'])
            resultado.append(ProdutoMaisVendido(
                produto_id=str(linha['produto_id']) if linha['produto_id'] else None,
                nome=produto.nome if produto else linha['nome'],
                imagem_url=produto.url_imagem_principal if produto else None,
                quantidade_total=linha['quantidade_total'] or 0,
                receita_total=Decimal(linha['receita_total'] or 0).quantize(Decimal('0.01')),
                ocorrencias=linha['ocorrencias'],
            ))
        return resultado

    @traduzir_erros_banco
    def totais_por_dia(self, inicio: date, fim: date, status: List[str]) -> Dict[date, Decimal]:
        linhas = (
            self.PedidoModel.objects
            .filter(
                status__in=status,
                data_criacao__date__gte=inicio,
                data_criacao__date__lte=fim,
            )
            .annotate(dia=TruncDate('data_criacao'))
            .order_by('dia')
            .values('dia')
            .annotate(soma=Sum('total'))
        )
        return {linha['dia']: linha['soma'] for linha in linhas}


# ====================================================================
# 3. USUÁRIOS (CLIENTES)
# ====================================================================

class UsuarioRepositoryDjango(IUsuarioRepository):
    """Implementação do UsuarioRepository usando o Django ORM."""

    @property
    def UsuarioModel(self):
        return get_model('infrastructure', 'Usuario')

    @property
    def PapelModel(self):
        return get_model('infrastructure', 'PapelUsuario')

    @traduzir_erros_banco
    def buscar_por_id(self, usuario_id: str) -> Optional[Usuario]:
        try:
            return UsuarioMapper.to_entity(self.UsuarioModel.objects.get(pk=usuario_id))
        except (self.UsuarioModel.DoesNotExist, ValidationError, ValueError):
            return None

    @traduzir_erros_banco
    def listar_clientes(self) -> List[ClienteResumo]:
        PedidoModel = get_model('pedidos', 'Pedido')
        ultimo_endereco = (
            PedidoModel.objects
            .filter(usuario=OuterRef('pk'))
            .order_by('-data_criacao')
            .values('endereco_entrega')[:1]
        )
        papel_admin = self.PapelModel.objects.filter(usuario=OuterRef('pk'), papel=self.PapelModel.ADMIN)

        qs = (
            self.UsuarioModel.objects
            .annotate(
                total_pedidos=Count('pedidos'),
                ultimo_endereco=Subquery(ultimo_endereco),
                tem_papel_admin=Exists(papel_admin),
            )
            .order_by('nome_completo', 'email')
        )
        return [
            ClienteResumo(
                usuario=UsuarioMapper.to_entity(model, is_admin=model.is_superuser or model.tem_papel_admin),
                total_pedidos=model.total_pedidos,
                ultimo_endereco_pedido=model.ultimo_endereco,
            )
            for model in qs
        ]

    @traduzir_erros_banco
    def atualizar_perfil(self, usuario: Usuario) -> Usuario:
        try:
            model = self.UsuarioModel.objects.get(pk=usuario.id)
        except (self.UsuarioModel.DoesNotExist, ValidationError, ValueError):
            raise UsuarioNaoEncontradoError(f"Cliente {usuario.id} não encontrado.")
        UsuarioMapper.to_model(usuario, model)
        model.save(update_fields=['nome_completo', 'telefone', 'endereco', 'cpf'])
        return UsuarioMapper.to_entity(model)


# ====================================================================
# 4. METAS DE VENDA
# ====================================================================

class MetaVendaRepositoryDjango(IMetaVendaRepository):
    """Implementação do MetaVendaRepository usando o Django ORM."""

    @property
    def MetaModel(self):
        return get_model('infrastructure', 'MetaVenda')

    @traduzir_erros_banco
    def listar_periodo(self, inicio: date, fim: date) -> List[MetaVenda]:
        qs = self.MetaModel.objects.filter(data_meta__gte=inicio, data_meta__lte=fim).order_by('data_meta')
        return [MetaVendaMapper.to_entity(model) for model in qs]

    @traduzir_erros_banco
    @transaction.atomic
    def salvar_metas(self, metas: List[MetaVenda]) -> int:
        for meta in metas:
            self.MetaModel.objects.update_or_create(
                data_meta=meta.data_meta,
                defaults={'valor_alvo': meta.valor_alvo, 'criado_por_id': meta.criado_por_id},
            )
        return len(metas)
