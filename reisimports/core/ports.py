# reisimports/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositorios, Gateways)
DEVE seguir para se conectar à camada Core (Casos de Uso).
"""

from typing import Any, Protocol, List, Optional, Dict
from abc import abstractmethod
from datetime import date
from decimal import Decimal

from reisimports.core.entities import (
    Produto, Pedido, ItemPedido, Usuario, MetaVenda, ProdutoMaisVendido, ClienteResumo
)


# ====================================================================
# 1. REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class IProdutoRepository(Protocol):
    """Protocolo para a persistência e busca de Produtos."""

    @abstractmethod
    def buscar_por_id(self, produto_id: str) -> Optional[Produto]: ...

    @abstractmethod
    def listar_ativos(self, busca: Optional[str] = None, categoria: Optional[str] = None) -> List[Produto]: ...

    @abstractmethod
    def listar_todos(self) -> List[Produto]: ...

    @abstractmethod
    def salvar(self, produto: Produto) -> Produto: ...

    @abstractmethod
    def salvar_imagem(self, produto_id: str, imagem: Any) -> Produto:
        """Grava o arquivo enviado como imagem principal do produto."""
        ...

    @abstractmethod
    def deletar(self, produto_id: str): ...


class IPedidoRepository(Protocol):
    """Protocolo para a persistência e gestão de Pedidos."""

    @abstractmethod
    def criar_pedido(self, pedido: Pedido) -> Pedido:
        """Grava apenas o cabeçalho do pedido e devolve a entidade com id."""
        ...

    @abstractmethod
    def criar_itens(self, pedido_id: str, itens: List[ItemPedido]) -> List[ItemPedido]:
        """Grava as linhas de um pedido já existente."""
        ...

    @abstractmethod
    def quantidade_comprada_no_dia(self, cpf: str, produto_id: str, dia: date) -> int:
        """Soma das quantidades do produto nos pedidos não cancelados do CPF no dia."""
        ...

    @abstractmethod
    def buscar_por_id(self, pedido_id: str) -> Optional[Pedido]: ...

    @abstractmethod
    def listar_pedidos_por_usuario(self, usuario_id: str) -> List[Pedido]: ...

    @abstractmethod
    def listar_todos_pedidos(self, status: Optional[str] = None) -> List[Pedido]: ...

    @abstractmethod
    def contar_por_status(self) -> Dict[str, int]: ...

    @abstractmethod
    def atualizar_status(self, pedido_id: str, novo_status: str) -> Pedido: ...

    @abstractmethod
    def mais_vendidos(self, inicio: date, fim: date, status: List[str]) -> List[ProdutoMaisVendido]: ...

    @abstractmethod
    def totais_por_dia(self, inicio: date, fim: date, status: List[str]) -> Dict[date, Decimal]: ...


class IUsuarioRepository(Protocol):
    """Protocolo para a persistência de Usuários (clientes e perfis)."""

    @abstractmethod
    def buscar_por_id(self, usuario_id: str) -> Optional[Usuario]: ...

    @abstractmethod
    def listar_clientes(self) -> List[ClienteResumo]: ...

    @abstractmethod
    def atualizar_perfil(self, usuario: Usuario) -> Usuario: ...


class IMetaVendaRepository(Protocol):
    """Protocolo para as metas diárias de vendas."""

    @abstractmethod
    def listar_periodo(self, inicio: date, fim: date) -> List[MetaVenda]: ...

    @abstractmethod
    def salvar_metas(self, metas: List[MetaVenda]) -> int:
        """Insere ou atualiza (pela data) as metas. Retorna quantas foram gravadas."""
        ...


# ====================================================================
# 2. GATEWAYS (Portas de Serviços Externos)
# ====================================================================

class IDeclaracaoConteudoGateway(Protocol):
    """Gera o documento de declaração de conteúdo de um pedido."""

    @abstractmethod
    def gerar(self, pedido: Pedido, cliente: Optional[Usuario]) -> bytes: ...


class IWhatsappGateway(Protocol):
    """Monta links de conversa com o cliente via WhatsApp."""

    @abstractmethod
    def gerar_link(self, telefone: str, mensagem: str) -> Optional[str]: ...
