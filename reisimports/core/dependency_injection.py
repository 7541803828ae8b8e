# reisimports/core/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar os Use Cases com suas dependências de Repositórios/Gateways
concretos da camada de Infraestrutura.
"""
from decimal import Decimal

from django.conf import settings

from reisimports.infrastructure.repositories import (
    ProdutoRepositoryDjango,
    PedidoRepositoryDjango,
    UsuarioRepositoryDjango,
    MetaVendaRepositoryDjango,
)
from reisimports.infrastructure.gateways import (
    DeclaracaoConteudoReportLabGateway,
    WhatsAppLinkGateway,
)
from .use_cases import (
    VALOR_MINIMO_PEDIDO,
    ListarProdutosUseCase,
    DetalharProdutoUseCase,
    GerenciarCarrinhoUseCase,
    ValidarCheckoutUseCase,
    FinalizarPedidoUseCase,
    ListarPedidosDoUsuarioUseCase,
    DetalharPedidoUseCase,
    GerarDeclaracaoConteudoUseCase,
    GerenciarPedidosAdminUseCase,
    GerenciarProdutosAdminUseCase,
    GerenciarClientesAdminUseCase,
    RelatorioMaisVendidosUseCase,
    ResumoFinanceiroUseCase,
)

# Repositórios e Gateways Concretos
produto_repo = ProdutoRepositoryDjango()
pedido_repo = PedidoRepositoryDjango()
usuario_repo = UsuarioRepositoryDjango()
meta_repo = MetaVendaRepositoryDjango()
whatsapp_gateway = WhatsAppLinkGateway()


def get_valor_minimo_pedido() -> Decimal:
    return Decimal(str(getattr(settings, 'VALOR_MINIMO_PEDIDO', VALOR_MINIMO_PEDIDO)))


# ====================================================================
# Use Cases de Catálogo e Carrinho
# ====================================================================

def get_listar_produtos_use_case() -> ListarProdutosUseCase:
    return ListarProdutosUseCase(produto_repo)

def get_detalhar_produto_use_case() -> DetalharProdutoUseCase:
    return DetalharProdutoUseCase(produto_repo)

def get_gerenciar_carrinho_use_case() -> GerenciarCarrinhoUseCase:
    return GerenciarCarrinhoUseCase(produto_repo)


# ====================================================================
# Use Cases de Pedidos
# ====================================================================

def get_validar_checkout_use_case() -> ValidarCheckoutUseCase:
    return ValidarCheckoutUseCase(produto_repo, pedido_repo, valor_minimo=get_valor_minimo_pedido())

def get_finalizar_pedido_use_case() -> FinalizarPedidoUseCase:
    return FinalizarPedidoUseCase(
        validador=get_validar_checkout_use_case(),
        pedido_repo=pedido_repo,
    )

def get_listar_pedidos_usuario_use_case() -> ListarPedidosDoUsuarioUseCase:
    return ListarPedidosDoUsuarioUseCase(pedido_repo)

def get_detalhar_pedido_use_case() -> DetalharPedidoUseCase:
    return DetalharPedidoUseCase(pedido_repo)

def get_gerar_declaracao_use_case() -> GerarDeclaracaoConteudoUseCase:
    return GerarDeclaracaoConteudoUseCase(
        pedido_repo=pedido_repo,
        usuario_repo=usuario_repo,
        declaracao_gateway=DeclaracaoConteudoReportLabGateway(),
    )


# ====================================================================
# Use Cases Administrativos
# ====================================================================

def get_gerenciar_pedidos_admin_use_case() -> GerenciarPedidosAdminUseCase:
    return GerenciarPedidosAdminUseCase(pedido_repo, whatsapp_gateway)

def get_gerenciar_produtos_admin_use_case() -> GerenciarProdutosAdminUseCase:
    return GerenciarProdutosAdminUseCase(produto_repo)

def get_gerenciar_clientes_admin_use_case() -> GerenciarClientesAdminUseCase:
    return GerenciarClientesAdminUseCase(usuario_repo)

def get_relatorio_mais_vendidos_use_case() -> RelatorioMaisVendidosUseCase:
    return RelatorioMaisVendidosUseCase(pedido_repo)

def get_resumo_financeiro_use_case() -> ResumoFinanceiroUseCase:
    return ResumoFinanceiroUseCase(pedido_repo, meta_repo)
