from decimal import Decimal


class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    def __init__(self, message="Não foi possível concluir a operação."):
        self.message = message
        super().__init__(self.message)


class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos."""
    def __init__(self, message="Os dados fornecidos são inválidos."):
        super().__init__(message)


class CpfInvalidoError(DadosInvalidosError):
    """CPF ausente ou que não normaliza para 11 dígitos válidos."""
    def __init__(self, message="CPF inválido. Informe os 11 dígitos do CPF."):
        super().__init__(message)


# ===============================================
# ERROS DE PERSISTÊNCIA E ENTIDADE
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="O item solicitado não foi encontrado."):
        super().__init__(message)


class ProdutoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro levantado quando um produto específico não é encontrado ou está inativo."""
    def __init__(self, message="O produto solicitado não foi encontrado."):
        super().__init__(message)


class PedidoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Pedidos não encontrados."""
    def __init__(self, message="O pedido solicitado não foi encontrado."):
        super().__init__(message)


class UsuarioNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Usuários não encontrados."""
    def __init__(self, message="O cliente solicitado não foi encontrado."):
        super().__init__(message)


class FalhaAcessoDadosError(BaseErroCore):
    """Falha ao ler ou gravar no banco de dados. Não há nova tentativa automática."""
    def __init__(self, message="Erro ao acessar os dados. Tente novamente."):
        super().__init__(message)


# ===============================================
# ERROS DE FLUXO DE COMPRA
# ===============================================

class CarrinhoVazioError(BaseErroCore):
    """Erro levantado ao tentar fazer checkout com carrinho vazio."""
    def __init__(self, message="O carrinho de compras está vazio."):
        super().__init__(message)


class ValorMinimoNaoAtingidoError(BaseErroCore):
    """Subtotal do carrinho abaixo do valor mínimo do pedido."""
    def __init__(self, valor_minimo: Decimal, subtotal: Decimal, message=None):
        self.valor_minimo = valor_minimo
        self.subtotal = subtotal
        self.falta = valor_minimo - subtotal
        if message is None:
            message = (f"O pedido mínimo é de R$ {valor_minimo:.2f}. "
                       f"Faltam R$ {self.falta:.2f}.")
        super().__init__(message)


class EstoqueInsuficienteError(BaseErroCore):
    """Erro levantado quando a quantidade solicitada excede o estoque."""
    def __init__(self, produto_nome: str, estoque_atual: int, quantidade_solicitada: int, message=None):
        self.produto_nome = produto_nome
        self.estoque_atual = estoque_atual
        self.quantidade_solicitada = quantidade_solicitada
        if message is None:
            message = (f"Estoque insuficiente para {produto_nome}. "
                       f"Disponível: {estoque_atual}, Solicitado: {quantidade_solicitada}.")
        super().__init__(message)


class ProdutoBloqueadoError(BaseErroCore):
    """Produto com limite por CPF igual a zero."""
    def __init__(self, produto_nome: str, message=None):
        self.produto_nome = produto_nome
        if message is None:
            message = f"{produto_nome} está indisponível para compra no momento."
        super().__init__(message)


class LimitePorCpfExcedidoError(BaseErroCore):
    """A quantidade pedida hoje por este CPF ultrapassaria o limite do produto."""
    def __init__(self, produto_nome: str, limite: int, ja_comprado: int, quantidade_solicitada: int, message=None):
        self.produto_nome = produto_nome
        self.limite = limite
        self.ja_comprado = ja_comprado
        self.quantidade_solicitada = quantidade_solicitada
        self.disponivel = max(limite - ja_comprado, 0)
        if message is None:
            message = (f"Limite por CPF excedido para {produto_nome}. "
                       f"Limite diário: {limite}, já comprado hoje: {ja_comprado}, "
                       f"máximo disponível: {self.disponivel}.")
        super().__init__(message)


class StatusInvalidoError(BaseErroCore):
    """Erro levantado ao tentar definir um status de pedido inválido."""
    def __init__(self, message="O status fornecido não é válido para um pedido."):
        super().__init__(message)


class AcessoNegadoError(BaseErroCore):
    """Usuário sem permissão para acessar o recurso."""
    def __init__(self, message="Você não tem permissão para acessar este recurso."):
        super().__init__(message)
