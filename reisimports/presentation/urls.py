"""
Rotas da API REST da loja: catálogo, carrinho, checkout, autenticação,
área do cliente e painel administrativo.
"""
from django.urls import path

from . import views, views_admin, views_auth

urlpatterns = [
    # ====================================================================
    # 1. ROTAS DE CATÁLOGO (LOJA)
    # ====================================================================
    path('produtos/', views.ProdutoListAPIView.as_view(), name='api_produtos'),
    path('produtos/<uuid:produto_id>/', views.ProdutoDetailAPIView.as_view(), name='api_produto_detalhe'),

    # ====================================================================
    # 2. ROTAS DE COMPRA (CARRINHO E CHECKOUT)
    # ====================================================================
    path('carrinho/', views.CarrinhoAPIView.as_view(), name='api_carrinho'),
    path('checkout/', views.CheckoutAPIView.as_view(), name='api_checkout'),

    # ====================================================================
    # 3. ROTAS DE AUTENTICAÇÃO
    # ====================================================================
    path('auth/registro/', views_auth.RegistroAPIView.as_view(), name='api_registro'),
    path('auth/token/', views_auth.LoginAPIView.as_view(), name='api_token'),
    path('auth/token/refresh/', views_auth.RefreshTokenAPIView.as_view(), name='api_token_refresh'),

    # ====================================================================
    # 4. ROTAS DE PERFIL (ÁREA DO CLIENTE)
    # ====================================================================
    path('minha-conta/', views_auth.PerfilAPIView.as_view(), name='api_perfil'),
    path('meus-pedidos/', views.MeusPedidosAPIView.as_view(), name='api_meus_pedidos'),
    path('pedidos/<uuid:pedido_id>/', views.PedidoDetailAPIView.as_view(), name='api_pedido_detalhe'),
    path('pedidos/<uuid:pedido_id>/declaracao/', views.DeclaracaoConteudoAPIView.as_view(), name='api_declaracao'),

    # ====================================================================
    # 5. ROTAS ADMINISTRATIVAS
    # ====================================================================
    path('painel/pedidos/', views_admin.PedidosAdminAPIView.as_view(), name='painel_pedidos'),
    path('painel/pedidos/<uuid:pedido_id>/', views_admin.PedidoAdminDetailAPIView.as_view(), name='painel_pedido'),
    path('painel/produtos/', views_admin.ProdutosAdminAPIView.as_view(), name='painel_produtos'),
    path('painel/produtos/<uuid:produto_id>/', views_admin.ProdutoAdminDetailAPIView.as_view(), name='painel_produto'),
    path('painel/clientes/', views_admin.ClientesAdminAPIView.as_view(), name='painel_clientes'),
    path('painel/clientes/<str:usuario_id>/', views_admin.ClienteAdminDetailAPIView.as_view(), name='painel_cliente'),
    path('painel/mais-vendidos/', views_admin.MaisVendidosAPIView.as_view(), name='painel_mais_vendidos'),
    path('painel/financeiro/', views_admin.FinanceiroAPIView.as_view(), name='painel_financeiro'),
    path('painel/financeiro/gerar-metas/', views_admin.GerarMetasAPIView.as_view(), name='painel_gerar_metas'),
]
