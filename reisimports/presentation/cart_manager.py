# reisimports/presentation/cart_manager.py
# Gerencia a persistência do Carrinho de Compras na sessão do Django.

from typing import Dict, Any, Optional

from django.http import HttpRequest

from reisimports.core.entities import Carrinho, ItemCarrinho
from reisimports.core.dependency_injection import produto_repo, get_gerenciar_carrinho_use_case
from reisimports.core.use_cases import GerenciarCarrinhoUseCase


class CartManager:
    """
    Guarda o carrinho na sessão do Django entre requisições.
    As regras (limites, estoque, produto bloqueado) ficam no GerenciarCarrinhoUseCase.
    """

    SESSION_KEY = 'carrinho_reisimports'

    def __init__(self, request: HttpRequest, use_case: Optional[GerenciarCarrinhoUseCase] = None):
        """Inicializa o CartManager e carrega o carrinho da sessão."""
        self.request = request
        self.use_case = use_case or get_gerenciar_carrinho_use_case()
        self.carrinho: Carrinho = self._load_carrinho_from_session()

    # --- Métodos de Persistência ---

    def _load_carrinho_from_session(self) -> Carrinho:
        """
        Reconstrói o Carrinho a partir da sessão com os dados atuais de cada produto.
        Produtos removidos, inativos ou bloqueados saem do carrinho. A quantidade pedida
        é mantida; estoque e limite são conferidos novamente no checkout.
        """
        raw_cart = self.request.session.get(self.SESSION_KEY) or {}

        itens = []
        # O carrinho armazenado é um dicionário {produto_id: quantidade}
        for produto_id, quantidade in raw_cart.items():
            produto = produto_repo.buscar_por_id(produto_id)
            if not produto or not produto.ativo or produto.max_por_pedido <= 0:
                continue

            itens.append(ItemCarrinho(
                produto_id=produto.id,
                nome=produto.nome,
                preco_unitario=produto.preco,
                quantidade=int(quantidade),
                imagem_url=produto.imagem_url,
            ))

        carrinho = Carrinho(itens=itens)
        if len(itens) != len(raw_cart):
            self.carrinho = carrinho
            self._save_carrinho_to_session()
        return carrinho

    def _save_carrinho_to_session(self):
        """
        Apenas o ID e a quantidade são armazenados para evitar dados desatualizados.
        """
        cart_data = {str(item.produto_id): item.quantidade for item in self.carrinho.itens}
        self.request.session[self.SESSION_KEY] = cart_data
        self.request.session.modified = True

    def clear_carrinho(self):
        """Limpa o carrinho na sessão (usado após o checkout)."""
        if self.SESSION_KEY in self.request.session:
            del self.request.session[self.SESSION_KEY]
            self.request.session.modified = True
        self.carrinho = Carrinho()

    # --- Métodos de Manipulação ---

    def add_item(self, produto_id: str, quantidade: int = 1) -> Carrinho:
        self.carrinho = self.use_case.adicionar_item(self.carrinho, produto_id, quantidade)
        self._save_carrinho_to_session()
        return self.carrinho

    def update_quantity(self, produto_id: str, quantidade: int) -> Carrinho:
        self.carrinho = self.use_case.atualizar_quantidade(self.carrinho, produto_id, quantidade)
        self._save_carrinho_to_session()
        return self.carrinho

    def remove_item(self, produto_id: str) -> Carrinho:
        self.carrinho = self.use_case.remover_item(self.carrinho, produto_id)
        self._save_carrinho_to_session()
        return self.carrinho

    # --- Métodos de Consulta ---

    def get_carrinho(self) -> Carrinho:
        return self.carrinho

    def get_carrinho_context(self, valor_minimo) -> Dict[str, Any]:
        """Resumo do carrinho para a resposta da API."""
        return {
            'carrinho': self.carrinho,
            'total': self.carrinho.total,
            'total_itens': self.carrinho.total_itens,
            'valor_minimo': valor_minimo,
            'falta_para_minimo': self.use_case.falta_para_minimo(self.carrinho, valor_minimo),
        }
