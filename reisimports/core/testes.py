# reisimports/core/testes.py

import unittest
from datetime import date
from decimal import Decimal
from unittest.mock import Mock

from reisimports.core.entities import (
    Carrinho, ClienteResumo, DadosEntrega, ItemCarrinho, MetaVenda, Pedido,
    Produto, ProdutoMaisVendido, StatusPedido, Usuario,
)
from reisimports.core.exceptions import (
    AcessoNegadoError,
    CarrinhoVazioError,
    CpfInvalidoError,
    DadosInvalidosError,
    EstoqueInsuficienteError,
    FalhaAcessoDadosError,
    LimitePorCpfExcedidoError,
    PedidoNaoEncontradoError,
    ProdutoBloqueadoError,
    ProdutoNaoEncontradoError,
    StatusInvalidoError,
    ValorMinimoNaoAtingidoError,
)
from reisimports.core.use_cases import (
    DetalharPedidoUseCase,
    DetalharProdutoUseCase,
    FinalizarPedidoUseCase,
    GerarDeclaracaoConteudoUseCase,
    GerenciarCarrinhoUseCase,
    GerenciarClientesAdminUseCase,
    GerenciarPedidosAdminUseCase,
    GerenciarProdutosAdminUseCase,
    ListarProdutosUseCase,
    RelatorioMaisVendidosUseCase,
    ResumoFinanceiroUseCase,
    ValidarCheckoutUseCase,
    urgencia_estoque,
)
from reisimports.core.validadores import cpf_valido, formatar_cpf, normalizar_cpf

CPF_VALIDO = '52998224725'
HOJE = date(2025, 3, 14)


def produto_de_teste(**kwargs):
    dados = {
        'id': 'prod-1',
        'nome': 'Perfume Importado',
        'preco': Decimal('40.00'),
        'estoque': 10,
        'limite_por_cpf': None,
    }
    dados.update(kwargs)
    return Produto(**dados)


def dados_entrega(**kwargs):
    dados = {
        'endereco': 'Rua das Flores, 10 - Centro',
        'telefone': '(11) 98888-7777',
        'cpf': '529.982.247-25',
        'forma_pagamento': 'pix',
    }
    dados.update(kwargs)
    return DadosEntrega(**dados)


# ====================================================================
# VALIDADORES
# ====================================================================

class TestValidadores(unittest.TestCase):

    def test_normalizar_cpf_remove_pontuacao(self):
        self.assertEqual(normalizar_cpf('529.982.247-25'), CPF_VALIDO)
        self.assertIsNone(normalizar_cpf('529.982.247-2'))
        self.assertIsNone(normalizar_cpf(None))

    def test_cpf_valido_confere_digitos_verificadores(self):
        self.assertTrue(cpf_valido('529.982.247-25'))
        self.assertFalse(cpf_valido('529.982.247-24'))
        self.assertFalse(cpf_valido('111.111.111-11'))

    def test_formatar_cpf(self):
        self.assertEqual(formatar_cpf(CPF_VALIDO), '529.982.247-25')
        self.assertEqual(formatar_cpf('123'), '123')


# ====================================================================
# CATÁLOGO
# ====================================================================

class TestCatalogo(unittest.TestCase):

    def setUp(self):
        self.produto_repo_mock = Mock()

    def test_listar_rejeita_categoria_inexistente(self):
        """
        Cenário: Filtro por uma categoria que não existe.
        """
        with self.assertRaises(DadosInvalidosError):
            ListarProdutosUseCase(self.produto_repo_mock).executar(categoria='eletronicos')
        self.produto_repo_mock.listar_ativos.assert_not_called()

    def test_listar_normaliza_busca_vazia(self):
        ListarProdutosUseCase(self.produto_repo_mock).executar(busca='   ', categoria='decor')
        self.produto_repo_mock.listar_ativos.assert_called_once_with(busca=None, categoria='decor')

    def test_detalhar_produto_inativo_nao_e_encontrado(self):
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(ativo=False)
        with self.assertRaises(ProdutoNaoEncontradoError):
            DetalharProdutoUseCase(self.produto_repo_mock).executar('prod-1')

    def test_max_por_pedido_respeita_limite_e_estoque(self):
        self.assertEqual(produto_de_teste(estoque=10, limite_por_cpf=None).max_por_pedido, 10)
        self.assertEqual(produto_de_teste(estoque=10, limite_por_cpf=3).max_por_pedido, 3)
        self.assertEqual(produto_de_teste(estoque=2, limite_por_cpf=5).max_por_pedido, 2)
        self.assertTrue(produto_de_teste(limite_por_cpf=0).bloqueado)

    def test_urgencia_estoque(self):
        self.assertEqual(
            urgencia_estoque(produto_de_teste(estoque=4), limite=10),
            {'restante': 4, 'limite': 10, 'percentual': 40},
        )
        self.assertIsNone(urgencia_estoque(produto_de_teste(estoque=11), limite=10))
        self.assertIsNone(urgencia_estoque(produto_de_teste(estoque=0), limite=10))


# ====================================================================
# CARRINHO
# ====================================================================

class TestGerenciarCarrinho(unittest.TestCase):

    def setUp(self):
        """
        Prepara o ambiente com um repositório "Mock" simulando o banco de dados.
        """
        self.produto_repo_mock = Mock()
        self.use_case = GerenciarCarrinhoUseCase(self.produto_repo_mock)

    def test_adicionar_item_com_sucesso(self):
        """
        Cenário: Adicionar um item a um carrinho vazio com sucesso.
        """
        # ARRANGE
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste()

        # ACT
        carrinho = self.use_case.adicionar_item(Carrinho(), 'prod-1', 2)

        # ASSERT
        self.assertEqual(len(carrinho.itens), 1)
        self.assertEqual(carrinho.itens[0].quantidade, 2)
        self.assertEqual(carrinho.total, Decimal('80.00'))

    def test_adicionar_item_limita_ao_maximo_por_pedido(self):
        """
        Cenário: Adicionar acima do limite por CPF; a quantidade fica no máximo permitido.
        """
        # ARRANGE
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(limite_por_cpf=3)
        carrinho = Carrinho(itens=[ItemCarrinho('prod-1', 'Perfume Importado', Decimal('40.00'), 2)])

        # ACT
        carrinho = self.use_case.adicionar_item(carrinho, 'prod-1', 5)

        # ASSERT
        self.assertEqual(carrinho.itens[0].quantidade, 3)

    def test_adicionar_produto_bloqueado_falha(self):
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(limite_por_cpf=0)
        with self.assertRaises(ProdutoBloqueadoError):
            self.use_case.adicionar_item(Carrinho(), 'prod-1', 1)

    def test_adicionar_produto_sem_estoque_falha(self):
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(estoque=0)
        with self.assertRaises(EstoqueInsuficienteError):
            self.use_case.adicionar_item(Carrinho(), 'prod-1', 1)

    def test_atualizar_quantidade_tem_minimo_um(self):
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste()
        carrinho = Carrinho(itens=[ItemCarrinho('prod-1', 'Perfume Importado', Decimal('40.00'), 2)])

        carrinho = self.use_case.atualizar_quantidade(carrinho, 'prod-1', 0)

        self.assertEqual(carrinho.itens[0].quantidade, 1)

    def test_remover_item(self):
        carrinho = Carrinho(itens=[ItemCarrinho('prod-1', 'Perfume Importado', Decimal('40.00'), 2)])
        carrinho = self.use_case.remover_item(carrinho, 'prod-1')
        self.assertTrue(carrinho.is_empty())

    def test_falta_para_minimo(self):
        carrinho = Carrinho(itens=[ItemCarrinho('prod-1', 'Perfume Importado', Decimal('32.50'), 2)])
        self.assertEqual(GerenciarCarrinhoUseCase.falta_para_minimo(carrinho, Decimal('70.00')), Decimal('5.00'))


# ====================================================================
# VALIDAÇÃO DO CHECKOUT (limite diário por CPF)
# ====================================================================

class TestValidarCheckout(unittest.TestCase):

    def setUp(self):
        self.produto_repo_mock = Mock()
        self.pedido_repo_mock = Mock()
        self.pedido_repo_mock.quantidade_comprada_no_dia.return_value = 0
        self.use_case = ValidarCheckoutUseCase(
            produto_repo=self.produto_repo_mock,
            pedido_repo=self.pedido_repo_mock,
            valor_minimo=Decimal('70.00'),
        )

    def _carrinho(self, quantidade, preco='40.00'):
        return Carrinho(itens=[ItemCarrinho('prod-1', 'Perfume Importado', Decimal(preco), quantidade)])

    def test_limite_respeitado_com_compras_anteriores(self):
        """
        Cenário: Limite 5, já comprados 3 hoje, pedindo 2. Deve passar.
        """
        # ARRANGE
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(limite_por_cpf=5)
        self.pedido_repo_mock.quantidade_comprada_no_dia.return_value = 3

        # ACT
        pedido, itens = self.use_case.executar(self._carrinho(2), 'user-1', dados_entrega(), dia=HOJE)

        # ASSERT
        self.assertEqual(pedido.cpf, CPF_VALIDO)
        self.assertEqual(pedido.status, StatusPedido.PENDENTE)
        self.assertEqual(len(itens), 1)
        self.pedido_repo_mock.quantidade_comprada_no_dia.assert_called_once_with(CPF_VALIDO, 'prod-1', HOJE)

    def test_limite_excedido_informa_quantidade_disponivel(self):
        """
        Cenário: Limite 5, já comprados 3 hoje, pedindo 3. Deve falhar com "máximo disponível: 2".
        """
        # ARRANGE
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(limite_por_cpf=5)
        self.pedido_repo_mock.quantidade_comprada_no_dia.return_value = 3

        # ACT e ASSERT
        with self.assertRaises(LimitePorCpfExcedidoError) as contexto:
            self.use_case.executar(self._carrinho(3), 'user-1', dados_entrega(), dia=HOJE)

        self.assertEqual(contexto.exception.disponivel, 2)
        self.assertIn('máximo disponível: 2', str(contexto.exception))

    def test_produto_com_limite_zero_e_bloqueado(self):
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(limite_por_cpf=0)
        with self.assertRaises(ProdutoBloqueadoError):
            self.use_case.executar(self._carrinho(2), 'user-1', dados_entrega(), dia=HOJE)

    def test_sem_limite_aceita_ate_o_estoque(self):
        """
        Cenário: Produto sem limite por CPF; vale apenas o estoque.
        """
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(estoque=10, limite_por_cpf=None)

        pedido, itens = self.use_case.executar(self._carrinho(10), 'user-1', dados_entrega(), dia=HOJE)

        self.assertEqual(itens[0].quantidade, 10)
        self.pedido_repo_mock.quantidade_comprada_no_dia.assert_not_called()

        with self.assertRaises(EstoqueInsuficienteError):
            self.use_case.executar(self._carrinho(11), 'user-1', dados_entrega(), dia=HOJE)

    def test_subtotal_abaixo_do_minimo_informa_quanto_falta(self):
        """
        Cenário: Subtotal de R$ 65,00 com mínimo de R$ 70,00.
        """
        with self.assertRaises(ValorMinimoNaoAtingidoError) as contexto:
            self.use_case.executar(self._carrinho(2, '32.50'), 'user-1', dados_entrega(), dia=HOJE)

        self.assertEqual(contexto.exception.falta, Decimal('5.00'))
        self.produto_repo_mock.buscar_por_id.assert_not_called()

    def test_carrinho_vazio_falha(self):
        with self.assertRaises(CarrinhoVazioError):
            self.use_case.executar(Carrinho(), 'user-1', dados_entrega(), dia=HOJE)

    def test_cpf_sem_onze_digitos_falha(self):
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste()
        with self.assertRaises(CpfInvalidoError):
            self.use_case.executar(self._carrinho(2), 'user-1', dados_entrega(cpf='123.456'), dia=HOJE)

    def test_endereco_obrigatorio(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(self._carrinho(2), 'user-1', dados_entrega(endereco='  '), dia=HOJE)

    def test_produto_desativado_depois_de_ir_para_o_carrinho(self):
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(ativo=False)
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.executar(self._carrinho(2), 'user-1', dados_entrega(), dia=HOJE)

    def test_preco_vem_do_carrinho(self):
        """
        Cenário: O preço do produto mudou depois de ir para o carrinho; vale o do carrinho.
        """
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(preco=Decimal('99.00'))

        pedido, itens = self.use_case.executar(self._carrinho(2), 'user-1', dados_entrega(), dia=HOJE)

        self.assertEqual(itens[0].preco_unitario, Decimal('40.00'))
        self.assertEqual(pedido.total, Decimal('80.00'))

    def test_validacao_nao_grava_nada(self):
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste()
        self.use_case.executar(self._carrinho(2), 'user-1', dados_entrega(), dia=HOJE)
        self.pedido_repo_mock.criar_pedido.assert_not_called()
        self.pedido_repo_mock.criar_itens.assert_not_called()


# ====================================================================
# FINALIZAR PEDIDO
# ====================================================================

class TestFinalizarPedido(unittest.TestCase):

    def setUp(self):
        self.produto_repo_mock = Mock()
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste()
        self.pedido_repo_mock = Mock()
        self.pedido_repo_mock.quantidade_comprada_no_dia.return_value = 0
        validador = ValidarCheckoutUseCase(self.produto_repo_mock, self.pedido_repo_mock, Decimal('70.00'))
        self.use_case = FinalizarPedidoUseCase(validador, self.pedido_repo_mock)
        self.carrinho = Carrinho(itens=[ItemCarrinho('prod-1', 'Perfume Importado', Decimal('40.00'), 2)])

    def test_grava_itens_depois_do_pedido(self):
        """
        Cenário: Checkout válido. O pedido é gravado primeiro e os itens usam o id gerado.
        """
        # ARRANGE
        def criar_pedido(pedido):
            pedido.id = 'pedido-1'
            return pedido
        self.pedido_repo_mock.criar_pedido.side_effect = criar_pedido
        self.pedido_repo_mock.criar_itens.side_effect = lambda pedido_id, itens: itens

        # ACT
        pedido = self.use_case.executar(self.carrinho, 'user-1', dados_entrega(), dia=HOJE)

        # ASSERT
        self.assertEqual(pedido.id, 'pedido-1')
        self.assertEqual(len(pedido.itens), 1)
        nomes_chamadas = [chamada[0] for chamada in self.pedido_repo_mock.method_calls]
        self.assertLess(nomes_chamadas.index('criar_pedido'), nomes_chamadas.index('criar_itens'))
        self.assertEqual(self.pedido_repo_mock.criar_itens.call_args[0][0], 'pedido-1')

    def test_falha_ao_gravar_pedido_nao_grava_itens(self):
        """
        Cenário: O banco falha ao gravar o pedido; os itens não são gravados.
        """
        self.pedido_repo_mock.criar_pedido.side_effect = FalhaAcessoDadosError()

        with self.assertRaises(FalhaAcessoDadosError):
            self.use_case.executar(self.carrinho, 'user-1', dados_entrega(), dia=HOJE)

        self.pedido_repo_mock.criar_itens.assert_not_called()

    def test_checkout_invalido_nao_grava(self):
        self.produto_repo_mock.buscar_por_id.return_value = produto_de_teste(limite_por_cpf=0)

        with self.assertRaises(ProdutoBloqueadoError):
            self.use_case.executar(self.carrinho, 'user-1', dados_entrega(), dia=HOJE)

        self.pedido_repo_mock.criar_pedido.assert_not_called()


# ====================================================================
# PEDIDOS DO CLIENTE E DECLARAÇÃO
# ====================================================================

class TestDetalharPedido(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.pedido = Pedido(
            usuario_id='user-1', total=Decimal('80.00'), forma_pagamento='pix',
            endereco_entrega='Rua A, 1', telefone='11988887777', cpf=CPF_VALIDO, id='abcdef12-3456',
        )
        self.pedido_repo_mock.buscar_por_id.return_value = self.pedido

    def test_dono_acessa_o_pedido(self):
        dono = Usuario(nome_completo='Ana', email='ana@example.com', id='user-1')
        self.assertIs(DetalharPedidoUseCase(self.pedido_repo_mock).executar('abcdef12-3456', dono), self.pedido)

    def test_outro_cliente_nao_acessa(self):
        outro = Usuario(nome_completo='Bia', email='bia@example.com', id='user-2')
        with self.assertRaises(AcessoNegadoError):
            DetalharPedidoUseCase(self.pedido_repo_mock).executar('abcdef12-3456', outro)

    def test_administrador_acessa_qualquer_pedido(self):
        admin = Usuario(nome_completo='Admin', email='adm@example.com', id='user-9', is_admin=True)
        self.assertIs(DetalharPedidoUseCase(self.pedido_repo_mock).executar('abcdef12-3456', admin), self.pedido)

    def test_declaracao_usa_numero_do_pedido_no_nome_do_arquivo(self):
        usuario_repo_mock = Mock()
        gateway_mock = Mock()
        gateway_mock.gerar.return_value = b'%PDF-fake'
        dono = Usuario(nome_completo='Ana', email='ana@example.com', id='user-1')

        nome, conteudo = GerarDeclaracaoConteudoUseCase(
            self.pedido_repo_mock, usuario_repo_mock, gateway_mock
        ).executar('abcdef12-3456', dono)

        self.assertEqual(nome, 'Declaracao_Conteudo_abcdef12.pdf')
        self.assertEqual(conteudo, b'%PDF-fake')
        usuario_repo_mock.buscar_por_id.assert_called_once_with('user-1')


# ====================================================================
# CASOS DE USO ADMINISTRATIVOS
# ====================================================================

class TestGerenciarPedidosAdmin(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.whatsapp_mock = Mock()
        self.use_case = GerenciarPedidosAdminUseCase(self.pedido_repo_mock, self.whatsapp_mock)

    def test_atualizar_status_aceita_qualquer_transicao(self):
        """
        Cenário: Um pedido entregue volta para pendente (não há regra de transição).
        """
        self.use_case.atualizar_status_manual('pedido-1', 'PENDING')
        self.pedido_repo_mock.atualizar_status.assert_called_once_with('pedido-1', StatusPedido.PENDENTE)

    def test_atualizar_status_invalido_falha(self):
        with self.assertRaises(StatusInvalidoError):
            self.use_case.atualizar_status_manual('pedido-1', 'PROCESSANDO')
        self.pedido_repo_mock.atualizar_status.assert_not_called()

    def test_pedido_inexistente(self):
        self.pedido_repo_mock.atualizar_status.side_effect = PedidoNaoEncontradoError()
        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.atualizar_status_manual('pedido-x', 'approved')

    def test_contagem_preenche_todos_os_status(self):
        self.pedido_repo_mock.contar_por_status.return_value = {'pending': 2, 'delivered': 1}

        contagem = self.use_case.contagem_por_status()

        self.assertEqual(contagem['pending'], 2)
        self.assertEqual(contagem['cancelled'], 0)
        self.assertEqual(set(contagem), set(StatusPedido.TODOS))

    def test_link_whatsapp_usa_telefone_do_pedido(self):
        pedido = Pedido(usuario_id='u', total=Decimal('1'), forma_pagamento='pix',
                        endereco_entrega='x', telefone='11988887777', id='abcdef12-0000')
        self.use_case.link_whatsapp(pedido)
        telefone, mensagem = self.whatsapp_mock.gerar_link.call_args[0]
        self.assertEqual(telefone, '11988887777')
        self.assertIn('#abcdef12', mensagem)


class TestGerenciarProdutosAdmin(unittest.TestCase):

    def test_salvar_valida_campos(self):
        produto_repo_mock = Mock()
        use_case = GerenciarProdutosAdminUseCase(produto_repo_mock)

        for invalido in (
            produto_de_teste(nome=' '),
            produto_de_teste(preco=Decimal('-1')),
            produto_de_teste(estoque=-1),
            produto_de_teste(limite_por_cpf=-2),
            produto_de_teste(categoria='eletronicos'),
        ):
            with self.assertRaises(DadosInvalidosError):
                use_case.salvar(invalido)
        produto_repo_mock.salvar.assert_not_called()

        use_case.salvar(produto_de_teste(limite_por_cpf=0))
        produto_repo_mock.salvar.assert_called_once()
        produto_repo_mock.salvar_imagem.assert_not_called()

    def test_salvar_com_imagem_grava_o_arquivo_depois_do_produto(self):
        """
        Cenário: O produto é gravado primeiro; o arquivo enviado vai para o id gravado.
        """
        # ARRANGE
        produto_repo_mock = Mock()
        produto_repo_mock.salvar.return_value = produto_de_teste(id='prod-gravado')
        produto_repo_mock.salvar_imagem.return_value = produto_de_teste(
            id='prod-gravado', imagem_url='/media/produtos/vaso.gif'
        )
        arquivo = Mock(name='vaso.gif')

        # ACT
        produto = GerenciarProdutosAdminUseCase(produto_repo_mock).salvar(produto_de_teste(), imagem=arquivo)

        # ASSERT
        produto_repo_mock.salvar_imagem.assert_called_once_with('prod-gravado', arquivo)
        self.assertEqual(produto.imagem_url, '/media/produtos/vaso.gif')


class TestGerenciarClientesAdmin(unittest.TestCase):

    def setUp(self):
        self.usuario_repo_mock = Mock()
        self.usuario_repo_mock.listar_clientes.return_value = [
            ClienteResumo(Usuario('Ana Souza', 'ana@example.com', telefone='11988887777', cpf=CPF_VALIDO, id='u1')),
            ClienteResumo(Usuario('Bruno Lima', 'bruno@example.com', telefone='21977776666', id='u2'),
                          total_pedidos=2, ultimo_endereco_pedido='Rua B, 2'),
        ]
        self.use_case = GerenciarClientesAdminUseCase(self.usuario_repo_mock)

    def test_busca_por_nome_cpf_e_telefone(self):
        self.assertEqual([c.usuario.id for c in self.use_case.listar('ana')], ['u1'])
        self.assertEqual([c.usuario.id for c in self.use_case.listar('529.982')], ['u1'])
        self.assertEqual([c.usuario.id for c in self.use_case.listar('(21) 9777')], ['u2'])
        self.assertEqual(len(self.use_case.listar('')), 2)

    def test_endereco_exibido_vem_do_ultimo_pedido(self):
        bruno = self.use_case.listar('bruno')[0]
        self.assertEqual(bruno.endereco_exibicao, 'Rua B, 2')

    def test_atualizar_exige_nome_e_telefone(self):
        self.usuario_repo_mock.buscar_por_id.return_value = Usuario('Ana', 'ana@example.com', id='u1')
        with self.assertRaises(DadosInvalidosError):
            self.use_case.atualizar('u1', nome_completo='Ana', telefone='')

        self.use_case.atualizar('u1', nome_completo=' Ana Souza ', telefone='(11) 98888-7777', cpf='529.982.247-25')
        salvo = self.usuario_repo_mock.atualizar_perfil.call_args[0][0]
        self.assertEqual(salvo.nome_completo, 'Ana Souza')
        self.assertEqual(salvo.telefone, '11988887777')
        self.assertEqual(salvo.cpf, CPF_VALIDO)


class TestRelatorioMaisVendidos(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.pedido_repo_mock.mais_vendidos.return_value = [
            ProdutoMaisVendido('p1', 'Perfume', quantidade_total=5, receita_total=Decimal('100.00')),
            ProdutoMaisVendido('p2', 'Relógio', quantidade_total=2, receita_total=Decimal('500.00')),
        ]
        self.use_case = RelatorioMaisVendidosUseCase(self.pedido_repo_mock)

    def test_ordenacao_por_quantidade_e_por_receita(self):
        por_quantidade = self.use_case.executar(ordenar_por='qty', hoje=HOJE)
        por_receita = self.use_case.executar(ordenar_por='revenue', hoje=HOJE)

        self.assertEqual([linha.produto_id for linha in por_quantidade], ['p1', 'p2'])
        self.assertEqual([linha.produto_id for linha in por_receita], ['p2', 'p1'])

    def test_periodo_padrao_e_o_mes_atual_com_status_de_venda(self):
        self.use_case.executar(hoje=HOJE)
        self.pedido_repo_mock.mais_vendidos.assert_called_with(
            date(2025, 3, 1), date(2025, 3, 31), list(StatusPedido.VENDAS)
        )

    def test_ordenacao_invalida(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(ordenar_por='nome', hoje=HOJE)


class TestResumoFinanceiro(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.meta_repo_mock = Mock()
        self.use_case = ResumoFinanceiroUseCase(self.pedido_repo_mock, self.meta_repo_mock)

    def test_totais_do_mes_e_do_ano(self):
        self.pedido_repo_mock.totais_por_dia.side_effect = [
            {date(2025, 3, 2): Decimal('100.00'), date(2025, 3, 3): Decimal('50.00')},
            {date(2025, 1, 5): Decimal('30.00'), date(2025, 3, 2): Decimal('100.00'), date(2025, 3, 3): Decimal('50.00')},
        ]
        self.meta_repo_mock.listar_periodo.return_value = [MetaVenda(date(2025, 3, 2), Decimal('120.00'))]

        resumo = self.use_case.executar(2025, 3)

        self.assertEqual(resumo.total_mes, Decimal('150.00'))
        self.assertEqual(resumo.total_ano, Decimal('180.00'))
        self.assertEqual(resumo.metas_por_dia, {date(2025, 3, 2): Decimal('120.00')})

    def test_salvar_metas_ignora_valores_vazios_ou_zero(self):
        self.meta_repo_mock.salvar_metas.return_value = 1

        gravadas = self.use_case.salvar_metas(
            {date(2025, 3, 1): Decimal('200.00'), date(2025, 3, 2): Decimal('0'), date(2025, 3, 3): None},
            usuario_id='admin-1',
        )

        self.assertEqual(gravadas, 1)
        metas = self.meta_repo_mock.salvar_metas.call_args[0][0]
        self.assertEqual([meta.data_meta for meta in metas], [date(2025, 3, 1)])

    def test_gerar_metas_repete_semana_anterior(self):
        """
        Cenário: Hoje é sexta, 14/03/2025. A semana anterior vai de 03/03 a 09/03.
        """
        # ARRANGE
        self.pedido_repo_mock.totais_por_dia.return_value = {
            date(2025, 3, 3): Decimal('100.00'),  # segunda
            date(2025, 3, 8): Decimal('250.00'),  # sábado
        }

        # ACT
        metas = self.use_case.gerar_metas_semana_anterior(2025, 3, usuario_id='admin-1', hoje=HOJE)

        # ASSERT
        inicio, fim, _ = self.pedido_repo_mock.totais_por_dia.call_args[0]
        self.assertEqual((inicio, fim), (date(2025, 3, 3), date(2025, 3, 9)))
        self.assertEqual(len(metas), 31)
        self.assertEqual(metas[date(2025, 3, 10)], Decimal('100.00'))
        self.assertEqual(metas[date(2025, 3, 15)], Decimal('250.00'))
        self.assertEqual(metas[date(2025, 3, 11)], Decimal('0.00'))
        self.meta_repo_mock.salvar_metas.assert_called_once()

    def test_gerar_metas_sem_vendas_falha(self):
        self.pedido_repo_mock.totais_por_dia.return_value = {}
        with self.assertRaises(DadosInvalidosError):
            self.use_case.gerar_metas_semana_anterior(2025, 3, hoje=HOJE)
        self.meta_repo_mock.salvar_metas.assert_not_called()


if __name__ == '__main__':
    unittest.main()
