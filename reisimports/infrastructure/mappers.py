"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM
2. Entidades de Domínio (reisimports.core.entities)
"""
from typing import Any, Optional

from django.apps import apps

from reisimports.core.entities import (
    Usuario as UsuarioEntity,
    Produto as ProdutoEntity,
    Pedido as PedidoEntity,
    ItemPedido as ItemPedidoEntity,
    MetaVenda as MetaVendaEntity,
)


def get_model(app_label: str, model_name: str):
    """Retorna um modelo do Django de forma segura (lazy loading)."""
    return apps.get_model(app_label, model_name)


# ====================================================================
# MAPPERS DO CATÁLOGO
# ====================================================================

class ProdutoMapper:
    """Mapeador para Produto."""

    @staticmethod
    def to_entity(model: Any) -> Optional[ProdutoEntity]:
        if not model:
            return None
        # Usa a lista pré-carregada, se existir, para evitar uma consulta por produto
        imagens = getattr(model, 'imagens_list_for_mapper', None)
        if imagens is None:
            imagens = list(model.imagens.all())
        return ProdutoEntity(
            id=str(model.pk),
            nome=model.nome,
            descricao=model.descricao or '',
            preco=model.preco,
            estoque=model.estoque,
            limite_por_cpf=model.limite_por_cpf,
            categoria=model.categoria,
            ativo=model.ativo,
            imagem_url=model.url_imagem_principal,
            imagens_extras=[imagem.imagem_url for imagem in imagens],
            data_criacao=model.data_criacao,
            data_atualizacao=model.data_atualizacao,
        )

    @staticmethod
    def to_model(entity: ProdutoEntity, model: Optional[Any] = None) -> Any:
        """Preenche (ou cria) o modelo a partir da entidade. Não salva."""
        if model is None:
            model = get_model('catalog', 'Produto')()
        model.nome = entity.nome.strip()
        model.descricao = entity.descricao or ''
        model.preco = entity.preco
        model.estoque = entity.estoque
        model.limite_por_cpf = entity.limite_por_cpf
        model.categoria = entity.categoria
        model.ativo = entity.ativo
        if not model.imagem:
            model.imagem_url = entity.imagem_url or None
        return model


# ====================================================================
# MAPPERS DE PEDIDOS
# ====================================================================

class ItemPedidoMapper:
    """Mapeador para ItemPedido."""

    @staticmethod
    def to_entity(model: Any) -> ItemPedidoEntity:
        return ItemPedidoEntity(
            pedido_id=str(model.pedido_id),
            produto_id=str(model.produto_id) if model.produto_id else None,
            nome_produto=model.nome_produto,
            preco_unitario=model.preco_unitario,
            quantidade=model.quantidade,
        )

    @staticmethod
    def to_model(entity: ItemPedidoEntity, pedido_id: Any) -> Any:
        return get_model('pedidos', 'ItemPedido')(
            pedido_id=pedido_id,
            produto_id=entity.produto_id,
            nome_produto=entity.nome_produto,
            preco_unitario=entity.preco_unitario,
            quantidade=entity.quantidade,
        )


class PedidoMapper:
    """Mapeador para Pedido."""

    @staticmethod
    def to_entity(model: Any, com_itens: bool = True) -> Optional[PedidoEntity]:
        if not model:
            return None

        itens = []
        if com_itens:
            itens_models = getattr(model, 'itens_list_for_mapper', None)
            if itens_models is None:
                itens_models = model.itens.all()
            itens = [ItemPedidoMapper.to_entity(item) for item in itens_models]

        usuario = model.usuario if model.usuario_id else None
        return PedidoEntity(
            id=str(model.pk),
            usuario_id=str(model.usuario_id) if model.usuario_id else None,
            total=model.total,
            forma_pagamento=model.forma_pagamento,
            endereco_entrega=model.endereco_entrega,
            telefone=model.telefone,
            cpf=model.cpf,
            observacoes=model.observacoes,
            status=model.status,
            itens=itens,
            data_criacao=model.data_criacao,
            cliente_nome=(usuario.nome_completo or usuario.email) if usuario else None,
            cliente_email=usuario.email if usuario else None,
        )

    @staticmethod
    def to_model(entity: PedidoEntity) -> Any:
        return get_model('pedidos', 'Pedido')(
            usuario_id=entity.usuario_id,
            total=entity.total,
            forma_pagamento=entity.forma_pagamento,
            endereco_entrega=entity.endereco_entrega,
            telefone=entity.telefone,
            cpf=entity.cpf,
            observacoes=entity.observacoes,
            status=entity.status,
        )


# ====================================================================
# MAPPERS DE USUÁRIO E FINANCEIRO
# ====================================================================

class UsuarioMapper:
    """Mapeador para o Usuário (perfil do cliente)."""

    @staticmethod
    def to_entity(model: Any, is_admin: Optional[bool] = None) -> Optional[UsuarioEntity]:
        if not model:
            return None
        return UsuarioEntity(
            id=str(model.pk),
            nome_completo=model.nome_completo or '',
            email=model.email,
            telefone=model.telefone,
            endereco=model.endereco,
            cpf=model.cpf,
            documento_rg_url=model.documento_rg.url if model.documento_rg else None,
            is_admin=model.is_admin if is_admin is None else is_admin,
        )

    @staticmethod
    def to_model(entity: UsuarioEntity, model: Any) -> Any:
        """Copia apenas os campos de perfil editáveis."""
        model.nome_completo = entity.nome_completo
        model.telefone = entity.telefone
        model.endereco = entity.endereco
        model.cpf = entity.cpf
        return model


class MetaVendaMapper:

    @staticmethod
    def to_entity(model: Any) -> MetaVendaEntity:
        return MetaVendaEntity(
            data_meta=model.data_meta,
            valor_alvo=model.valor_alvo,
            criado_por_id=str(model.criado_por_id) if model.criado_por_id else None,
        )
