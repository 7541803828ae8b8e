# reisimports/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import calendar
import logging
from typing import Any, List, Optional, Dict, Tuple
from decimal import Decimal
from datetime import date, timedelta

# Entidades e Exceções
from reisimports.core.entities import (
    Produto, Carrinho, ItemCarrinho, Pedido, ItemPedido, Usuario, DadosEntrega,
    MetaVenda, ProdutoMaisVendido, ResumoFinanceiro, ClienteResumo,
    StatusPedido, FormaPagamento, CategoriaProduto,
)
from reisimports.core.exceptions import (
    AcessoNegadoError,
    CarrinhoVazioError,
    CpfInvalidoError,
    DadosInvalidosError,
    EstoqueInsuficienteError,
    LimitePorCpfExcedidoError,
    PedidoNaoEncontradoError,
    ProdutoBloqueadoError,
    ProdutoNaoEncontradoError,
    StatusInvalidoError,
    UsuarioNaoEncontradoError,
    ValorMinimoNaoAtingidoError,
)
from reisimports.core.validadores import normalizar_cpf, somente_digitos

# Portas (Interfaces) - Importadas do reisimports/core/ports.py
from reisimports.core.ports import (
    IProdutoRepository,
    IPedidoRepository,
    IUsuarioRepository,
    IMetaVendaRepository,
    IDeclaracaoConteudoGateway,
    IWhatsappGateway,
)

logger = logging.getLogger(__name__)

VALOR_MINIMO_PEDIDO = Decimal('70.00')
LIMITE_URGENCIA_ESTOQUE = 10


# ====================================================================
# 1. CASOS DE USO DO CATÁLOGO
# ====================================================================

class ListarProdutosUseCase:
    """Caso de Uso responsável por listar os produtos ativos da vitrine."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def executar(self, busca: Optional[str] = None, categoria: Optional[str] = None) -> List[Produto]:
        if categoria and categoria not in CategoriaProduto.TODAS:
            raise DadosInvalidosError(f"Categoria '{categoria}' inexistente.")
        busca = (busca or '').strip() or None
        return self.produto_repo.listar_ativos(busca=busca, categoria=categoria)


class DetalharProdutoUseCase:
    """Caso de Uso para obter os detalhes de um produto da vitrine."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def executar(self, produto_id: str) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto or not produto.ativo:
            raise ProdutoNaoEncontradoError(f"Produto {produto_id} não encontrado.")
        return produto


def urgencia_estoque(produto: Produto, limite: int = LIMITE_URGENCIA_ESTOQUE) -> Optional[Dict]:
    """
    Dados da barra de "últimas unidades". Só existe quando 0 < estoque <= limite.
    """
    if limite <= 0 or produto.estoque <= 0 or produto.estoque > limite:
        return None
    percentual = min(max(round(produto.estoque / limite * 100), 0), 100)
    return {'restante': produto.estoque, 'limite': limite, 'percentual': percentual}


# ====================================================================
# 2. CASOS DE USO DO CARRINHO
# ====================================================================

class GerenciarCarrinhoUseCase:
    """
    Caso de Uso que centraliza a lógica de gestão do carrinho (adicionar, atualizar, remover).
    O carrinho em si vive fora do banco; quem o persiste é a camada de apresentação.
    """
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def _produto_compravel(self, produto_id: str) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto or not produto.ativo:
            raise ProdutoNaoEncontradoError(f"Produto {produto_id} não encontrado.")
        if produto.bloqueado:
            raise ProdutoBloqueadoError(produto.nome)
        if produto.max_por_pedido <= 0:
            raise EstoqueInsuficienteError(produto.nome, produto.estoque, 1)
        return produto

    def adicionar_item(self, carrinho: Carrinho, produto_id: str, quantidade: int = 1) -> Carrinho:
        """Adiciona ou incrementa um item, limitando ao máximo permitido por pedido."""
        if quantidade <= 0:
            raise DadosInvalidosError("A quantidade a adicionar deve ser positiva.")

        produto = self._produto_compravel(produto_id)
        item = carrinho.get_item(produto.id)
        atual = item.quantidade if item else 0
        nova_quantidade = min(atual + quantidade, produto.max_por_pedido)

        if item:
            item.quantidade = nova_quantidade
            item.preco_unitario = produto.preco
        else:
            carrinho.itens.append(ItemCarrinho(
                produto_id=produto.id,
                nome=produto.nome,
                preco_unitario=produto.preco,
                quantidade=nova_quantidade,
                imagem_url=produto.imagem_url,
            ))
        return carrinho

    def atualizar_quantidade(self, carrinho: Carrinho, produto_id: str, quantidade: int) -> Carrinho:
        """Define a quantidade de um item já existente (mínimo 1)."""
        item = carrinho.get_item(produto_id)
        if not item:
            raise ProdutoNaoEncontradoError("Item não encontrado no carrinho.")

        produto = self._produto_compravel(produto_id)
        item.quantidade = min(max(quantidade, 1), produto.max_por_pedido)
        return carrinho

    def remover_item(self, carrinho: Carrinho, produto_id: str) -> Carrinho:
        """Remove um item do carrinho completamente."""
        if not carrinho.get_item(produto_id):
            raise ProdutoNaoEncontradoError("Item não encontrado no carrinho.")
        carrinho.itens = [item for item in carrinho.itens if item.produto_id != produto_id]
        return carrinho

    @staticmethod
    def falta_para_minimo(carrinho: Carrinho, valor_minimo: Decimal = VALOR_MINIMO_PEDIDO) -> Decimal:
        return max(valor_minimo - carrinho.total, Decimal('0.00'))


# ====================================================================
# 3. CASOS DE USO DE PEDIDO E CHECKOUT
# ====================================================================

class ValidarCheckoutUseCase:
    """
    Decide se o pedido pode ser enviado e monta os dados a gravar.
    Somente leitura: nada é gravado aqui.
    """
    def __init__(self,
                 produto_repo: IProdutoRepository,
                 pedido_repo: IPedidoRepository,
                 valor_minimo: Decimal = VALOR_MINIMO_PEDIDO):
        self.produto_repo = produto_repo
        self.pedido_repo = pedido_repo
        self.valor_minimo = valor_minimo

    def _validar_dados_entrega(self, dados: DadosEntrega) -> str:
        if not (dados.endereco or '').strip():
            raise DadosInvalidosError("Informe o endereço de entrega.")
        if not (dados.telefone or '').strip():
            raise DadosInvalidosError("Informe um telefone para contato.")
        cpf = normalizar_cpf(dados.cpf)
        if not cpf:
            raise CpfInvalidoError()
        if dados.forma_pagamento not in FormaPagamento.TODAS:
            raise DadosInvalidosError(f"Forma de pagamento '{dados.forma_pagamento}' inválida.")
        return cpf

    def _validar_item(self, item: ItemCarrinho, cpf: str, dia: date):
        produto = self.produto_repo.buscar_por_id(item.produto_id)
        if not produto or not produto.ativo:
            raise ProdutoNaoEncontradoError(f"O produto {item.nome} não está mais disponível.")

        limite = produto.limite_por_cpf
        if limite == 0:
            raise ProdutoBloqueadoError(produto.nome)

        if limite is not None:
            ja_comprado = self.pedido_repo.quantidade_comprada_no_dia(cpf, produto.id, dia)
            if ja_comprado + item.quantidade > limite:
                raise LimitePorCpfExcedidoError(
                    produto_nome=produto.nome,
                    limite=limite,
                    ja_comprado=ja_comprado,
                    quantidade_solicitada=item.quantidade,
                )

        if item.quantidade > produto.estoque:
            raise EstoqueInsuficienteError(produto.nome, produto.estoque, item.quantidade)

    def executar(
        self,
        carrinho: Carrinho,
        usuario_id: str,
        dados: DadosEntrega,
        dia: Optional[date] = None,
    ) -> Tuple[Pedido, List[ItemPedido]]:
        if carrinho.is_empty():
            raise CarrinhoVazioError("Não é possível finalizar o pedido com o carrinho vazio.")

        subtotal = carrinho.total
        if subtotal < self.valor_minimo:
            raise ValorMinimoNaoAtingidoError(self.valor_minimo, subtotal)

        cpf = self._validar_dados_entrega(dados)
        dia = dia or date.today()

        for item in carrinho.itens:
            if item.quantidade <= 0:
                raise DadosInvalidosError(f"Quantidade inválida para {item.nome}.")
            self._validar_item(item, cpf, dia)

        # Preço congelado a partir do carrinho, sem nova consulta
        itens = [
            ItemPedido(
                produto_id=item.produto_id,
                nome_produto=item.nome,
                preco_unitario=item.preco_unitario,
                quantidade=item.quantidade,
            )
            for item in carrinho.itens
        ]
        pedido = Pedido(
            usuario_id=usuario_id,
            total=subtotal,
            forma_pagamento=dados.forma_pagamento,
            endereco_entrega=dados.endereco.strip(),
            telefone=dados.telefone.strip(),
            cpf=cpf,
            observacoes=(dados.observacoes or '').strip() or None,
            status=StatusPedido.PENDENTE,
        )
        return pedido, itens


class FinalizarPedidoUseCase:
    """
    Coordena o checkout: valida, grava o pedido e, só depois, grava os itens.
    """
    def __init__(self, validador: ValidarCheckoutUseCase, pedido_repo: IPedidoRepository):
        self.validador = validador
        self.pedido_repo = pedido_repo

    def executar(
        self,
        carrinho: Carrinho,
        usuario_id: str,
        dados: DadosEntrega,
        dia: Optional[date] = None,
    ) -> Pedido:
        pedido, itens = self.validador.executar(carrinho, usuario_id, dados, dia=dia)

        # 1. Cabeçalho do pedido
        pedido_criado = self.pedido_repo.criar_pedido(pedido)

        # 2. Itens, apenas se o cabeçalho foi gravado
        pedido_criado.itens = self.pedido_repo.criar_itens(pedido_criado.id, itens)

        logger.info(
            "Pedido %s criado para o usuário %s (total R$ %s, %d itens).",
            pedido_criado.id, usuario_id, pedido_criado.total, len(itens),
        )
        return pedido_criado


class ListarPedidosDoUsuarioUseCase:
    """Caso de Uso para listar os pedidos de um cliente específico."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, usuario_id: str) -> List[Pedido]:
        return self.pedido_repo.listar_pedidos_por_usuario(usuario_id)


class DetalharPedidoUseCase:
    """Busca um pedido que pertença ao solicitante (ou qualquer um, para administradores)."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, pedido_id: str, solicitante: Usuario) -> Pedido:
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError(f"Pedido {pedido_id} não encontrado.")
        if not solicitante.is_admin and str(pedido.usuario_id) != str(solicitante.id):
            raise AcessoNegadoError("Este pedido não pertence a você.")
        return pedido


class GerarDeclaracaoConteudoUseCase:
    """Gera o PDF de declaração de conteúdo de um pedido."""
    def __init__(
        self,
        pedido_repo: IPedidoRepository,
        usuario_repo: IUsuarioRepository,
        declaracao_gateway: IDeclaracaoConteudoGateway,
    ):
        self.detalhar_pedido = DetalharPedidoUseCase(pedido_repo)
        self.usuario_repo = usuario_repo
        self.declaracao_gateway = declaracao_gateway

    def executar(self, pedido_id: str, solicitante: Usuario) -> Tuple[str, bytes]:
        """Retorna (nome do arquivo, conteúdo do PDF)."""
        pedido = self.detalhar_pedido.executar(pedido_id, solicitante)
        cliente = self.usuario_repo.buscar_por_id(pedido.usuario_id) if pedido.usuario_id else None
        conteudo = self.declaracao_gateway.gerar(pedido, cliente)
        return f"Declaracao_Conteudo_{pedido.numero}.pdf", conteudo


# ====================================================================
# 4. CASOS DE USO ADMINISTRATIVOS
# ====================================================================

class GerenciarPedidosAdminUseCase:
    """Caso de Uso para listagem e atualização de pedidos (acesso administrativo)."""

    def __init__(self, pedido_repo: IPedidoRepository, whatsapp_gateway: IWhatsappGateway):
        self.pedido_repo = pedido_repo
        self.whatsapp_gateway = whatsapp_gateway

    def listar_todos(self, status: Optional[str] = None) -> List[Pedido]:
        """Lista todos os pedidos no sistema, com filtro opcional por status."""
        if status and status not in StatusPedido.TODOS:
            raise StatusInvalidoError(f"O status '{status}' não é um status de pedido válido.")
        return self.pedido_repo.listar_todos_pedidos(status)

    def contagem_por_status(self) -> Dict[str, int]:
        contagem = {status: 0 for status in StatusPedido.TODOS}
        contagem.update(self.pedido_repo.contar_por_status())
        return contagem

    def detalhar_pedido(self, pedido_id: str) -> Pedido:
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError(f"Pedido {pedido_id} não encontrado.")
        return pedido

    def atualizar_status_manual(self, pedido_id: str, novo_status: str) -> Pedido:
        """Qualquer status pode ser definido a partir de qualquer outro."""
        novo_status = (novo_status or '').strip().lower()
        if novo_status not in StatusPedido.TODOS:
            raise StatusInvalidoError(f"O status '{novo_status}' não é um status de pedido válido.")

        pedido = self.pedido_repo.atualizar_status(pedido_id, novo_status)
        logger.info("Status do pedido %s alterado para %s.", pedido_id, novo_status)
        return pedido

    def link_whatsapp(self, pedido: Pedido) -> Optional[str]:
        """Link de conversa com o cliente, já com uma mensagem sobre o pedido."""
        nome = pedido.cliente_nome or 'cliente'
        mensagem = (f"Olá {nome}! Sobre o seu pedido #{pedido.numero} na ReisImports: "
                    f"status {StatusPedido.ROTULOS.get(pedido.status, pedido.status)}.")
        return self.whatsapp_gateway.gerar_link(pedido.telefone, mensagem)


class GerenciarProdutosAdminUseCase:
    """Cadastro, edição e remoção de produtos."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def _validar(self, produto: Produto):
        if not (produto.nome or '').strip():
            raise DadosInvalidosError("O nome do produto é obrigatório.")
        if produto.preco is None or produto.preco < 0:
            raise DadosInvalidosError("O preço deve ser maior ou igual a zero.")
        if produto.estoque is None or produto.estoque < 0:
            raise DadosInvalidosError("O estoque deve ser maior ou igual a zero.")
        if produto.limite_por_cpf is not None and produto.limite_por_cpf < 0:
            raise DadosInvalidosError("O limite por CPF deve ser maior ou igual a zero, ou vazio.")
        if produto.categoria not in CategoriaProduto.TODAS:
            raise DadosInvalidosError(f"Categoria '{produto.categoria}' inexistente.")

    def listar(self) -> List[Produto]:
        return self.produto_repo.listar_todos()

    def detalhar(self, produto_id: str) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError(f"Produto {produto_id} não encontrado.")
        return produto

    def salvar(self, produto: Produto, imagem: Optional[Any] = None) -> Produto:
        """Valida e grava o produto; a imagem enviada, se houver, vira a imagem principal."""
        self._validar(produto)
        produto = self.produto_repo.salvar(produto)
        if imagem is not None:
            produto = self.produto_repo.salvar_imagem(produto.id, imagem)
        return produto

    def deletar(self, produto_id: str):
        self.produto_repo.deletar(produto_id)
        logger.info("Produto %s excluído.", produto_id)


class GerenciarClientesAdminUseCase:
    """Caso de Uso para listagem e edição de clientes no painel administrativo."""
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def listar(self, busca: Optional[str] = None) -> List[ClienteResumo]:
        """Filtra por nome (sem diferenciar maiúsculas) ou pelos dígitos do CPF/telefone."""
        clientes = self.usuario_repo.listar_clientes()
        termo = (busca or '').strip().lower()
        if not termo:
            return clientes

        digitos = somente_digitos(termo)

        def corresponde(cliente: ClienteResumo) -> bool:
            usuario = cliente.usuario
            if termo in (usuario.nome_completo or '').lower():
                return True
            if digitos and digitos in somente_digitos(usuario.cpf):
                return True
            return bool(digitos) and digitos in somente_digitos(usuario.telefone)

        return [cliente for cliente in clientes if corresponde(cliente)]

    def atualizar(
        self,
        usuario_id: str,
        nome_completo: str,
        telefone: str,
        cpf: Optional[str] = None,
        endereco: Optional[str] = None,
    ) -> Usuario:
        usuario = self.usuario_repo.buscar_por_id(usuario_id)
        if not usuario:
            raise UsuarioNaoEncontradoError(f"Cliente {usuario_id} não encontrado.")

        nome_completo = (nome_completo or '').strip()
        telefone = somente_digitos(telefone)
        if not nome_completo:
            raise DadosInvalidosError("O nome é obrigatório.")
        if not telefone:
            raise DadosInvalidosError("O telefone é obrigatório.")

        usuario.nome_completo = nome_completo
        usuario.telefone = telefone
        usuario.cpf = somente_digitos(cpf) or None
        usuario.endereco = (endereco or '').strip() or None
        return self.usuario_repo.atualizar_perfil(usuario)


def _limites_do_mes(ano: int, mes: int) -> Tuple[date, date]:
    ultimo_dia = calendar.monthrange(ano, mes)[1]
    return date(ano, mes, 1), date(ano, mes, ultimo_dia)


class RelatorioMaisVendidosUseCase:
    """Ranking de produtos vendidos no período (pedidos aprovados, em rota ou entregues)."""

    ORDENACOES = ('qty', 'revenue')

    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(
        self,
        inicio: Optional[date] = None,
        fim: Optional[date] = None,
        ordenar_por: str = 'qty',
        hoje: Optional[date] = None,
    ) -> List[ProdutoMaisVendido]:
        if ordenar_por not in self.ORDENACOES:
            raise DadosInvalidosError(f"Ordenação '{ordenar_por}' inválida. Use 'qty' ou 'revenue'.")

        hoje = hoje or date.today()
        inicio_padrao, fim_padrao = _limites_do_mes(hoje.year, hoje.month)
        inicio = inicio or inicio_padrao
        fim = fim or fim_padrao
        if inicio > fim:
            raise DadosInvalidosError("A data inicial deve ser anterior à data final.")

        linhas = self.pedido_repo.mais_vendidos(inicio, fim, list(StatusPedido.VENDAS))
        if ordenar_por == 'qty':
            return sorted(linhas, key=lambda linha: linha.quantidade_total, reverse=True)
        return sorted(linhas, key=lambda linha: linha.receita_total, reverse=True)


class ResumoFinanceiroUseCase:
    """Totais do mês e do ano, vendas por dia e metas diárias."""
    def __init__(self, pedido_repo: IPedidoRepository, meta_repo: IMetaVendaRepository):
        self.pedido_repo = pedido_repo
        self.meta_repo = meta_repo

    def executar(self, ano: int, mes: int) -> ResumoFinanceiro:
        if not 1 <= mes <= 12:
            raise DadosInvalidosError("Mês inválido.")

        status = list(StatusPedido.VENDAS)
        inicio_mes, fim_mes = _limites_do_mes(ano, mes)

        vendas_mes = self.pedido_repo.totais_por_dia(inicio_mes, fim_mes, status)
        vendas_ano = self.pedido_repo.totais_por_dia(date(ano, 1, 1), date(ano, 12, 31), status)
        metas = self.meta_repo.listar_periodo(inicio_mes, fim_mes)

        return ResumoFinanceiro(
            ano=ano,
            mes=mes,
            total_mes=sum(vendas_mes.values(), Decimal('0.00')),
            total_ano=sum(vendas_ano.values(), Decimal('0.00')),
            vendas_por_dia=vendas_mes,
            metas_por_dia={meta.data_meta: meta.valor_alvo for meta in metas},
        )

    def salvar_metas(self, metas: Dict[date, Decimal], usuario_id: Optional[str] = None) -> int:
        """Grava (insere ou atualiza pela data) apenas as metas com valor positivo."""
        linhas = [
            MetaVenda(data_meta=dia, valor_alvo=valor, criado_por_id=usuario_id)
            for dia, valor in sorted(metas.items())
            if valor is not None and valor > 0
        ]
        if not linhas:
            return 0
        return self.meta_repo.salvar_metas(linhas)

    def gerar_metas_semana_anterior(
        self,
        ano: int,
        mes: int,
        usuario_id: Optional[str] = None,
        hoje: Optional[date] = None,
    ) -> Dict[date, Decimal]:
        """
        Repete, em cada dia do mês, o total vendido no mesmo dia da semana
        da semana passada (segunda a domingo).
        """
        hoje = hoje or date.today()
        segunda_atual = hoje - timedelta(days=hoje.weekday())
        inicio = segunda_atual - timedelta(days=7)
        fim = inicio + timedelta(days=6)

        vendas = self.pedido_repo.totais_por_dia(inicio, fim, list(StatusPedido.VENDAS))
        if not vendas:
            raise DadosInvalidosError("Não há vendas na última semana para gerar metas.")

        por_dia_semana: Dict[int, Decimal] = {}
        for dia, total in vendas.items():
            por_dia_semana[dia.weekday()] = por_dia_semana.get(dia.weekday(), Decimal('0.00')) + total

        inicio_mes, fim_mes = _limites_do_mes(ano, mes)
        metas = {}
        dia = inicio_mes
        while dia <= fim_mes:
            metas[dia] = por_dia_semana.get(dia.weekday(), Decimal('0.00'))
            dia += timedelta(days=1)

        self.salvar_metas(metas, usuario_id)
        return metas
