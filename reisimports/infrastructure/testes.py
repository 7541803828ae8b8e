# reisimports/infrastructure/testes.py

from datetime import date, datetime, timedelta
from decimal import Decimal
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError
from django.db.utils import OperationalError
from django.test import TestCase
from django.utils import timezone

from reisimports.catalog.models import Produto as ProdutoModel
from reisimports.core.entities import ItemPedido, MetaVenda, Pedido, Produto, StatusPedido
from reisimports.core.exceptions import FalhaAcessoDadosError, PedidoNaoEncontradoError
from reisimports.infrastructure.gateways import (
    DeclaracaoConteudoReportLabGateway,
    WhatsAppLinkGateway,
    formatar_moeda,
)
from reisimports.infrastructure.models import PapelUsuario, Usuario
from reisimports.infrastructure.repositories import (
    MetaVendaRepositoryDjango,
    PedidoRepositoryDjango,
    ProdutoRepositoryDjango,
    UsuarioRepositoryDjango,
    traduzir_erros_banco,
)
from reisimports.pedidos.models import Pedido as PedidoModel

CPF = '52998224725'


def momento_local(dia, hora=12):
    return timezone.make_aware(datetime(dia.year, dia.month, dia.day, hora, 0))


class RepositorioTestCase(TestCase):
    """Base com um cliente, um produto e um atalho para gravar pedidos em uma data."""

    def setUp(self):
        self.pedido_repo = PedidoRepositoryDjango()
        self.cliente = Usuario.objects.create_user(
            email='ana@example.com', password='segredo123', nome_completo='Ana Souza',
            telefone='11988887777', cpf=CPF,
        )
        self.produto = ProdutoModel.objects.create(
            nome='Perfume Importado', preco=Decimal('40.00'), estoque=10, limite_por_cpf=5,
        )
        self.dia = date(2025, 3, 14)

    def gravar_pedido(self, quantidade, dia=None, status=StatusPedido.PENDENTE, cpf=CPF, produto=None, hora=12):
        produto = produto or self.produto
        pedido = self.pedido_repo.criar_pedido(Pedido(
            usuario_id=str(self.cliente.pk),
            total=produto.preco * quantidade,
            forma_pagamento='pix',
            endereco_entrega='Rua das Flores, 10',
            telefone='11988887777',
            cpf=cpf,
            status=status,
        ))
        self.pedido_repo.criar_itens(pedido.id, [
            ItemPedido(produto_id=str(produto.pk), nome_produto=produto.nome,
                       preco_unitario=produto.preco, quantidade=quantidade),
        ])
        PedidoModel.objects.filter(pk=pedido.id).update(data_criacao=momento_local(dia or self.dia, hora))
        return pedido


# ====================================================================
# PEDIDOS
# ====================================================================

class TestPedidoRepository(RepositorioTestCase):

    def test_quantidade_comprada_no_dia_soma_pedidos_do_mesmo_cpf(self):
        """
        Cenário: Dois pedidos no dia, um cancelado, um de ontem e um de outro CPF.
        """
        # ARRANGE
        self.gravar_pedido(2)
        self.gravar_pedido(1, hora=22)
        self.gravar_pedido(4, status=StatusPedido.CANCELADO)
        self.gravar_pedido(3, dia=self.dia - timedelta(days=1))
        self.gravar_pedido(3, cpf='11144477735')

        # ACT
        total = self.pedido_repo.quantidade_comprada_no_dia(CPF, str(self.produto.pk), self.dia)

        # ASSERT
        self.assertEqual(total, 3)

    def test_quantidade_comprada_sem_pedidos_e_zero(self):
        self.assertEqual(self.pedido_repo.quantidade_comprada_no_dia(CPF, str(self.produto.pk), self.dia), 0)

    def test_pedido_gravado_mantem_snapshot_dos_itens(self):
        pedido = self.gravar_pedido(2)
        ProdutoModel.objects.filter(pk=self.produto.pk).update(preco=Decimal('99.00'), nome='Outro nome')

        salvo = self.pedido_repo.buscar_por_id(pedido.id)

        self.assertEqual(salvo.status, StatusPedido.PENDENTE)
        self.assertEqual(salvo.cliente_nome, 'Ana Souza')
        self.assertEqual(salvo.itens[0].nome_produto, 'Perfume Importado')
        self.assertEqual(salvo.itens[0].preco_unitario, Decimal('40.00'))
        self.assertEqual(salvo.itens[0].subtotal, Decimal('80.00'))

    def test_buscar_por_id_invalido_retorna_none(self):
        self.assertIsNone(self.pedido_repo.buscar_por_id('nao-e-uuid'))

    def test_atualizar_status_de_pedido_inexistente(self):
        with self.assertRaises(PedidoNaoEncontradoError):
            self.pedido_repo.atualizar_status('8a1f0f4e-7d1b-4f7a-9a57-2d3c4b5a6f70', StatusPedido.APROVADO)

    def test_contar_por_status(self):
        self.gravar_pedido(1)
        self.gravar_pedido(1)
        self.gravar_pedido(1, status=StatusPedido.ENTREGUE)

        self.assertEqual(self.pedido_repo.contar_por_status(), {'pending': 2, 'delivered': 1})

    def test_mais_vendidos_considera_apenas_vendas_no_periodo(self):
        """
        Cenário: Pedidos aprovados e entregues contam; pendentes e fora do período não.
        """
        # ARRANGE
        relogio = ProdutoModel.objects.create(nome='Relógio', preco=Decimal('250.00'), estoque=5)
        self.gravar_pedido(2, status=StatusPedido.APROVADO)
        self.gravar_pedido(1, status=StatusPedido.ENTREGUE)
        self.gravar_pedido(5, status=StatusPedido.PENDENTE)
        self.gravar_pedido(1, status=StatusPedido.APROVADO, produto=relogio)
        self.gravar_pedido(9, status=StatusPedido.APROVADO, dia=date(2025, 2, 10))

        # ACT
        linhas = self.pedido_repo.mais_vendidos(date(2025, 3, 1), date(2025, 3, 31), list(StatusPedido.VENDAS))

        # ASSERT
        por_produto = {linha.produto_id: linha for linha in linhas}
        perfume = por_produto[str(self.produto.pk)]
        self.assertEqual(perfume.quantidade_total, 3)
        self.assertEqual(perfume.receita_total, Decimal('120.00'))
        self.assertEqual(perfume.ocorrencias, 2)
        self.assertEqual(por_produto[str(relogio.pk)].receita_total, Decimal('250.00'))

    def test_totais_por_dia(self):
        self.gravar_pedido(2, status=StatusPedido.APROVADO)
        self.gravar_pedido(1, status=StatusPedido.EM_ROTA)
        self.gravar_pedido(1, status=StatusPedido.CANCELADO)
        self.gravar_pedido(1, status=StatusPedido.APROVADO, dia=date(2025, 3, 15))

        totais = self.pedido_repo.totais_por_dia(date(2025, 3, 1), date(2025, 3, 31), list(StatusPedido.VENDAS))

        self.assertEqual(totais, {date(2025, 3, 14): Decimal('120.00'), date(2025, 3, 15): Decimal('40.00')})


class TestTraduzirErrosBanco(TestCase):

    def test_erro_de_banco_vira_falha_de_acesso(self):
        @traduzir_erros_banco
        def consulta():
            raise DatabaseError('conexão perdida')

        with self.assertRaises(FalhaAcessoDadosError):
            consulta()


# ====================================================================
# PRODUTOS, CLIENTES E METAS
# ====================================================================

class TestProdutoRepository(TestCase):

    def test_salvar_substitui_imagens_extras(self):
        repo = ProdutoRepositoryDjango()
        produto = repo.salvar(Produto(
            nome='Vaso', preco=Decimal('59.90'), estoque=3, categoria='decor',
            imagens_extras=['https://cdn.example.com/a.jpg', 'https://cdn.example.com/b.jpg'],
        ))
        self.assertEqual(len(produto.imagens_extras), 2)

        produto.imagens_extras = ['https://cdn.example.com/c.jpg']
        produto.limite_por_cpf = 0
        produto = repo.salvar(produto)

        self.assertEqual(produto.imagens_extras, ['https://cdn.example.com/c.jpg'])
        self.assertTrue(produto.bloqueado)
        self.assertEqual(ProdutoModel.objects.count(), 1)

    def test_listar_ativos_ignora_inativos(self):
        ProdutoModel.objects.create(nome='Ativo', preco=Decimal('10.00'), estoque=1)
        ProdutoModel.objects.create(nome='Inativo', preco=Decimal('10.00'), estoque=1, ativo=False)

        nomes = [produto.nome for produto in ProdutoRepositoryDjango().listar_ativos()]

        self.assertEqual(nomes, ['Ativo'])


class TestUsuarioRepository(RepositorioTestCase):

    def test_listar_clientes_com_pedidos_e_ultimo_endereco(self):
        self.gravar_pedido(1, dia=date(2025, 3, 1))
        ultimo = self.gravar_pedido(1, dia=date(2025, 3, 10))
        PedidoModel.objects.filter(pk=ultimo.id).update(endereco_entrega='Av. Central, 500')
        admin = Usuario.objects.create_user(email='adm@example.com', password='segredo123', nome_completo='Zeca')
        PapelUsuario.objects.create(usuario=admin, papel=PapelUsuario.ADMIN)

        clientes = {c.usuario.email: c for c in UsuarioRepositoryDjango().listar_clientes()}

        self.assertEqual(clientes['ana@example.com'].total_pedidos, 2)
        self.assertEqual(clientes['ana@example.com'].endereco_exibicao, 'Av. Central, 500')
        self.assertFalse(clientes['ana@example.com'].usuario.is_admin)
        self.assertTrue(clientes['adm@example.com'].usuario.is_admin)


class TestMetaVendaRepository(TestCase):

    def test_salvar_metas_atualiza_pela_data(self):
        repo = MetaVendaRepositoryDjango()
        repo.salvar_metas([MetaVenda(date(2025, 3, 1), Decimal('100.00'))])
        repo.salvar_metas([MetaVenda(date(2025, 3, 1), Decimal('150.00')), MetaVenda(date(2025, 3, 2), Decimal('80.00'))])

        metas = repo.listar_periodo(date(2025, 3, 1), date(2025, 3, 31))

        self.assertEqual([(m.data_meta, m.valor_alvo) for m in metas],
                         [(date(2025, 3, 1), Decimal('150.00')), (date(2025, 3, 2), Decimal('80.00'))])


# ====================================================================
# GATEWAYS
# ====================================================================

class TestGateways(TestCase):

    def test_declaracao_gera_pdf(self):
        pedido = Pedido(
            usuario_id='1', total=Decimal('80.00'), forma_pagamento='cash',
            endereco_entrega='Rua das Flores, 10', telefone='11988887777', cpf=CPF,
            id='abcdef12-3456-7890', data_criacao=timezone.now(), cliente_nome='Ana & Cia',
            itens=[ItemPedido('p1', 'Perfume <Importado>', Decimal('40.00'), 2)],
        )

        conteudo = DeclaracaoConteudoReportLabGateway(razao_social='reisimports', cnpj='39433448000134').gerar(pedido, None)

        self.assertTrue(conteudo.startswith(b'%PDF'))

    def test_link_whatsapp(self):
        gateway = WhatsAppLinkGateway()
        self.assertEqual(gateway.gerar_link('(11) 98888-7777'), 'https://wa.me/5511988887777')
        self.assertEqual(gateway.gerar_link('5511988887777', 'Olá pedido'), 'https://wa.me/5511988887777?text=Ol%C3%A1%20pedido')
        self.assertIsNone(gateway.gerar_link(''))

    def test_formatar_moeda(self):
        self.assertEqual(formatar_moeda(Decimal('1234.5')), 'R$ 1.234,50')


# ====================================================================
# COMANDOS
# ====================================================================

class TestCriarAdmin(TestCase):

    def test_cria_admin_e_pode_ser_repetido(self):
        """
        Cenário: O comando roda duas vezes; usuário e papel existem uma única vez.
        """
        saida = StringIO()
        for _ in range(2):
            call_command('criar_admin', email='dono@example.com', password='Admin#2025!', nome='Dono', stdout=saida)

        usuario = Usuario.objects.get(email='dono@example.com')
        self.assertTrue(usuario.is_admin)
        self.assertTrue(usuario.is_staff)
        self.assertTrue(usuario.check_password('Admin#2025!'))
        self.assertEqual(PapelUsuario.objects.filter(usuario=usuario, papel=PapelUsuario.ADMIN).count(), 1)

    def test_sem_email_ou_senha_falha(self):
        with self.assertRaises(CommandError):
            call_command('criar_admin', email='', password='', stdout=StringIO())


class TestLoadInitialData(TestCase):

    def test_carrega_produtos_sem_duplicar(self):
        call_command('load_initial_data', stdout=StringIO())
        total = ProdutoModel.objects.count()
        call_command('load_initial_data', stdout=StringIO())

        self.assertGreater(total, 0)
        self.assertEqual(ProdutoModel.objects.count(), total)


class TestWaitForDb(TestCase):

    def test_banco_disponivel(self):
        saida = StringIO()
        call_command('wait_for_db', tentativas=1, intervalo=0, stdout=saida)
        self.assertIn('Banco de dados disponível!', saida.getvalue())

    def test_banco_indisponivel_esgota_tentativas(self):
        with patch('reisimports.core.management.commands.wait_for_db.connections') as conexoes:
            conexoes.__getitem__.return_value.ensure_connection.side_effect = OperationalError()
            with self.assertRaises(CommandError):
                call_command('wait_for_db', tentativas=2, intervalo=0, stdout=StringIO())
