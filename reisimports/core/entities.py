from dataclasses import dataclass, field
from decimal import Decimal
from datetime import date, datetime
from typing import List, Optional, Dict
import uuid

# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

class StatusPedido:
    """Valores possíveis para o status de um pedido."""
    PENDENTE = 'pending'
    APROVADO = 'approved'
    EM_ROTA = 'in_route'
    ENTREGUE = 'delivered'
    CANCELADO = 'cancelled'

    TODOS = (PENDENTE, APROVADO, EM_ROTA, ENTREGUE, CANCELADO)

    # Status que contam como venda efetivada (relatórios e metas)
    VENDAS = (APROVADO, EM_ROTA, ENTREGUE)

    ROTULOS = {
        PENDENTE: 'Pendente',
        APROVADO: 'Aprovado',
        EM_ROTA: 'Em rota',
        ENTREGUE: 'Entregue',
        CANCELADO: 'Cancelado',
    }


class FormaPagamento:
    """Formas de pagamento aceitas. Todas são pagas na entrega."""
    DINHEIRO = 'cash'
    PIX = 'pix'
    CARTAO = 'card'

    TODAS = (DINHEIRO, PIX, CARTAO)

    ROTULOS = {
        DINHEIRO: 'Dinheiro',
        PIX: 'PIX',
        CARTAO: 'Cartão',
    }


class CategoriaProduto:
    EXCLUSIVOS = 'exclusivos'
    DECOR = 'decor'

    TODAS = (EXCLUSIVOS, DECOR)


@dataclass
class Usuario:
    """Entidade do Usuário (cliente), com os dados de perfil usados no checkout."""
    nome_completo: str
    email: str
    telefone: Optional[str] = None
    endereco: Optional[str] = None
    cpf: Optional[str] = None
    documento_rg_url: Optional[str] = None
    is_admin: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Produto:
    """Entidade do Produto vendido na loja."""
    nome: str
    preco: Decimal
    estoque: int
    descricao: str = ''
    # None = sem limite; 0 = compra bloqueada
    limite_por_cpf: Optional[int] = None
    categoria: str = CategoriaProduto.EXCLUSIVOS
    ativo: bool = True
    imagem_url: Optional[str] = None
    imagens_extras: List[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    data_criacao: datetime = field(default_factory=datetime.now)
    data_atualizacao: Optional[datetime] = None

    @property
    def bloqueado(self) -> bool:
        """Produto com limite zero não pode ser comprado."""
        return self.limite_por_cpf == 0

    @property
    def max_por_pedido(self) -> int:
        """Quantidade máxima que pode ir para o carrinho (estoque limitado pelo CPF)."""
        if self.limite_por_cpf is None:
            return max(self.estoque, 0)
        return max(min(self.estoque, self.limite_por_cpf), 0)


@dataclass
class ItemCarrinho:
    """Entidade que representa um item no carrinho (uma linha por produto)."""
    produto_id: str
    nome: str
    preco_unitario: Decimal
    quantidade: int
    imagem_url: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        """Calcula o subtotal do item."""
        return self.preco_unitario * self.quantidade


@dataclass
class Carrinho:
    """Entidade do Carrinho de Compras."""
    itens: List[ItemCarrinho] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        """Calcula o total do carrinho."""
        return sum((item.subtotal for item in self.itens), Decimal('0.00'))

    @property
    def total_itens(self) -> int:
        return sum(item.quantidade for item in self.itens)

    def get_item(self, produto_id: str) -> Optional[ItemCarrinho]:
        return next((item for item in self.itens if item.produto_id == produto_id), None)

    def is_empty(self) -> bool:
        return not self.itens


@dataclass
class DadosEntrega:
    """Dados informados no formulário de checkout."""
    endereco: str
    telefone: str
    cpf: str
    forma_pagamento: str
    observacoes: Optional[str] = None


@dataclass
class ItemPedido:
    """Snapshot de um item no momento da compra (imutável)."""
    produto_id: str
    nome_produto: str
    preco_unitario: Decimal
    quantidade: int
    pedido_id: Optional[str] = None
    subtotal: Decimal = field(init=False)

    def __post_init__(self):
        """Calcula o subtotal após a inicialização."""
        self.subtotal = self.preco_unitario * self.quantidade


@dataclass
class Pedido:
    """Entidade do Pedido de Venda."""
    usuario_id: str
    total: Decimal
    forma_pagamento: str
    endereco_entrega: str
    telefone: str
    cpf: Optional[str] = None
    observacoes: Optional[str] = None
    status: str = StatusPedido.PENDENTE
    itens: List[ItemPedido] = field(default_factory=list)
    id: Optional[str] = None
    data_criacao: datetime = field(default_factory=datetime.now)
    # Dados do cliente, preenchidos apenas nas consultas administrativas
    cliente_nome: Optional[str] = None
    cliente_email: Optional[str] = None

    @property
    def numero(self) -> str:
        """Número curto exibido ao cliente (primeiros 8 caracteres do id)."""
        return str(self.id)[:8] if self.id else ''


@dataclass
class MetaVenda:
    """Meta de vendas diária definida pelo administrador."""
    data_meta: date
    valor_alvo: Decimal
    criado_por_id: Optional[str] = None


@dataclass
class ProdutoMaisVendido:
    """Linha do ranking de itens mais vendidos."""
    produto_id: str
    nome: str
    imagem_url: Optional[str] = None
    quantidade_total: int = 0
    receita_total: Decimal = Decimal('0.00')
    ocorrencias: int = 0


@dataclass
class ResumoFinanceiro:
    """Totais de vendas e metas de um mês."""
    ano: int
    mes: int
    total_mes: Decimal
    total_ano: Decimal
    vendas_por_dia: Dict[date, Decimal] = field(default_factory=dict)
    metas_por_dia: Dict[date, Decimal] = field(default_factory=dict)


@dataclass
class ClienteResumo:
    """Cliente listado no painel, com endereço e contagem de pedidos."""
    usuario: Usuario
    total_pedidos: int = 0
    ultimo_endereco_pedido: Optional[str] = None

    @property
    def endereco_exibicao(self) -> Optional[str]:
        """Endereço do perfil ou, na falta dele, o do pedido mais recente."""
        return self.usuario.endereco or self.ultimo_endereco_pedido
