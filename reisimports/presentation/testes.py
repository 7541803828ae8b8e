# reisimports/presentation/testes.py

import tempfile
from decimal import Decimal
from io import BytesIO
from unittest.mock import patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from PIL import Image
from rest_framework import status
from rest_framework.test import APIClient

from reisimports.catalog.models import Produto
from reisimports.core.entities import StatusPedido
from reisimports.infrastructure.models import MetaVenda, PapelUsuario, Usuario
from reisimports.infrastructure.repositories import ProdutoRepositoryDjango
from reisimports.pedidos.models import ItemPedido, Pedido

CPF = '52998224725'


def imagem_de_teste(nome='vaso.gif'):
    conteudo = BytesIO()
    Image.new('RGB', (1, 1)).save(conteudo, format='GIF')
    return SimpleUploadedFile(nome, conteudo.getvalue(), content_type='image/gif')


class APITestCase(TestCase):
    """Base: cliente com perfil completo e um produto de R$ 40,00 com limite 5 por CPF."""

    def setUp(self):
        self.client = APIClient()
        self.cliente = Usuario.objects.create_user(
            email='ana@example.com', password='segredo123', nome_completo='Ana Souza',
            telefone='11988887777', cpf=CPF, endereco='Rua das Flores, 10',
        )
        self.produto = Produto.objects.create(
            nome='Perfume Importado', preco=Decimal('40.00'), estoque=10, limite_por_cpf=5,
        )

    def adicionar_ao_carrinho(self, produto, quantidade):
        return self.client.post(
            reverse('api_carrinho'),
            {'produto_id': str(produto.pk), 'quantidade': quantidade},
            format='json',
        )

    def checkout(self, **dados):
        dados.setdefault('forma_pagamento', 'pix')
        return self.client.post(reverse('api_checkout'), dados, format='json')

    def pedido_anterior(self, quantidade, status_pedido=StatusPedido.PENDENTE):
        pedido = Pedido.objects.create(
            usuario=self.cliente, total=self.produto.preco * quantidade, forma_pagamento='cash',
            endereco_entrega='Rua das Flores, 10', telefone='11988887777', cpf=CPF, status=status_pedido,
        )
        ItemPedido.objects.create(
            pedido=pedido, produto=self.produto, nome_produto=self.produto.nome,
            preco_unitario=self.produto.preco, quantidade=quantidade,
        )
        return pedido


# ====================================================================
# CATÁLOGO E CARRINHO
# ====================================================================

class TestCatalogoAPI(APITestCase):

    def test_vitrine_lista_apenas_produtos_ativos(self):
        Produto.objects.create(nome='Fora de linha', preco=Decimal('10.00'), estoque=3, ativo=False)

        response = self.client.get(reverse('api_produtos'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['nome'] for p in response.data], ['Perfume Importado'])
        self.assertEqual(response.data[0]['max_por_pedido'], 5)
        self.assertEqual(response.data[0]['urgencia']['restante'], 10)

    def test_busca_por_nome_ou_descricao(self):
        Produto.objects.create(nome='Vaso Decor', descricao='Cerâmica', preco=Decimal('59.90'), estoque=3)

        response = self.client.get(reverse('api_produtos'), {'busca': 'cerâmica'})

        self.assertEqual([p['nome'] for p in response.data], ['Vaso Decor'])

    def test_detalhe_de_produto_inexistente(self):
        response = self.client.get(
            reverse('api_produto_detalhe', args=['8a1f0f4e-7d1b-4f7a-9a57-2d3c4b5a6f70'])
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class TestCarrinhoAPI(APITestCase):

    def test_adicionar_item_limita_ao_maximo_por_pedido(self):
        """
        Cenário: Pedir 8 unidades de um produto com limite 5; o carrinho fica com 5.
        """
        response = self.adicionar_ao_carrinho(self.produto, 8)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['itens'][0]['quantidade'], 5)
        self.assertEqual(response.data['total'], '200.00')
        self.assertEqual(response.data['falta_para_minimo'], '0.00')

    def test_produto_bloqueado_nao_entra_no_carrinho(self):
        bloqueado = Produto.objects.create(nome='Kit', preco=Decimal('90.00'), estoque=5, limite_por_cpf=0)

        response = self.adicionar_ao_carrinho(bloqueado, 1)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['erro'], 'ProdutoBloqueadoError')

    def test_carrinho_persiste_na_sessao_e_pode_ser_alterado(self):
        self.adicionar_ao_carrinho(self.produto, 1)

        response = self.client.patch(
            reverse('api_carrinho'), {'produto_id': str(self.produto.pk), 'quantidade': 3}, format='json'
        )
        self.assertEqual(response.data['itens'][0]['quantidade'], 3)

        response = self.client.delete(reverse('api_carrinho'), {'produto_id': str(self.produto.pk)}, format='json')
        self.assertEqual(response.data['itens'], [])

    def test_remover_item_que_nao_esta_no_carrinho(self):
        response = self.client.delete(reverse('api_carrinho') + f'?produto_id={self.produto.pk}')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['erro'], 'ProdutoNaoEncontradoError')

    def test_quantidade_do_carrinho_nao_e_reduzida_ao_carregar(self):
        self.adicionar_ao_carrinho(self.produto, 5)
        Produto.objects.filter(pk=self.produto.pk).update(estoque=2)

        response = self.client.get(reverse('api_carrinho'))

        self.assertEqual(response.data['itens'][0]['quantidade'], 5)

    def test_falha_de_banco_ao_carregar_carrinho(self):
        self.adicionar_ao_carrinho(self.produto, 2)

        with patch.object(ProdutoRepositoryDjango, '_queryset', side_effect=DatabaseError('conexão perdida')):
            response = self.client.get(reverse('api_carrinho'))

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['erro'], 'FalhaAcessoDadosError')

    def test_produto_desativado_sai_do_carrinho(self):
        self.adicionar_ao_carrinho(self.produto, 2)
        Produto.objects.filter(pk=self.produto.pk).update(ativo=False)

        response = self.client.get(reverse('api_carrinho'))

        self.assertEqual(response.data['itens'], [])


# ====================================================================
# CHECKOUT
# ====================================================================

class TestCheckoutAPI(APITestCase):

    def setUp(self):
        super().setUp()
        self.client.force_authenticate(user=self.cliente)

    def test_checkout_exige_login(self):
        self.client.force_authenticate(user=None)
        self.adicionar_ao_carrinho(self.produto, 2)

        response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_checkout_com_sucesso_usa_dados_do_perfil(self):
        """
        Cenário: Carrinho de R$ 80,00; endereço, telefone e CPF vêm do perfil.
        """
        # ARRANGE
        self.adicionar_ao_carrinho(self.produto, 2)

        # ACT
        response = self.checkout(observacoes='Portão azul')

        # ASSERT
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        pedido = Pedido.objects.get(pk=response.data['pedido_id'])
        self.assertEqual(pedido.status, StatusPedido.PENDENTE)
        self.assertEqual(pedido.cpf, CPF)
        self.assertEqual(pedido.total, Decimal('80.00'))
        self.assertEqual(pedido.endereco_entrega, 'Rua das Flores, 10')
        self.assertEqual(pedido.itens.get().quantidade, 2)

        # O carrinho é esvaziado após o pedido
        self.assertEqual(self.client.get(reverse('api_carrinho')).data['itens'], [])

    def test_checkout_abaixo_do_minimo(self):
        barato = Produto.objects.create(nome='Vaso', preco=Decimal('32.50'), estoque=10)
        self.adicionar_ao_carrinho(barato, 2)

        response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['falta'], '5.00')
        self.assertFalse(Pedido.objects.exists())

    def test_limite_diario_por_cpf_considera_pedidos_anteriores(self):
        """
        Cenário: Limite 5, já comprados 3 hoje (mais um cancelado). Pedir 3 falha; pedir 2 passa.
        """
        # ARRANGE
        self.pedido_anterior(3)
        self.pedido_anterior(4, status_pedido=StatusPedido.CANCELADO)
        self.adicionar_ao_carrinho(self.produto, 3)

        # ACT
        response = self.checkout(cpf='529.982.247-25')

        # ASSERT
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('máximo disponível: 2', response.data['message'])
        self.assertEqual(response.data['disponivel'], 2)
        self.assertEqual(Pedido.objects.count(), 2)

        self.client.patch(
            reverse('api_carrinho'), {'produto_id': str(self.produto.pk), 'quantidade': 2}, format='json'
        )
        self.assertEqual(self.checkout().status_code, status.HTTP_201_CREATED)

    def test_estoque_reduzido_depois_de_adicionar_bloqueia_o_checkout(self):
        """
        Cenário: 5 unidades no carrinho, estoque cai para 2. O pedido é recusado, sem gravar 2 unidades.
        """
        # ARRANGE
        self.adicionar_ao_carrinho(self.produto, 5)
        Produto.objects.filter(pk=self.produto.pk).update(estoque=2)

        # ACT
        response = self.checkout()

        # ASSERT
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['erro'], 'EstoqueInsuficienteError')
        self.assertIn('Disponível: 2, Solicitado: 5', response.data['message'])
        self.assertFalse(Pedido.objects.exists())

    def test_falha_de_banco_no_checkout(self):
        """
        Cenário: O banco falha ao recarregar os produtos do carrinho; a resposta é 503 e nada é gravado.
        """
        self.adicionar_ao_carrinho(self.produto, 2)

        with patch.object(ProdutoRepositoryDjango, '_queryset', side_effect=DatabaseError('conexão perdida')):
            response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['erro'], 'FalhaAcessoDadosError')
        self.assertFalse(Pedido.objects.exists())

    def test_cpf_invalido(self):
        self.adicionar_ao_carrinho(self.produto, 2)

        response = self.checkout(cpf='123.456.789')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['erro'], 'CpfInvalidoError')

    def test_carrinho_vazio(self):
        response = self.checkout()
        self.assertEqual(response.data['erro'], 'CarrinhoVazioError')


# ====================================================================
# ÁREA DO CLIENTE
# ====================================================================

class TestAreaDoClienteAPI(APITestCase):

    def test_registro_valida_cpf(self):
        dados = {
            'email': 'bia@example.com', 'password': 'segredo123', 'confirmar_senha': 'segredo123',
            'nome_completo': 'Bia Lima', 'telefone': '(21) 97777-6666', 'cpf': '111.111.111-11',
        }
        response = self.client.post(reverse('api_registro'), dados, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('cpf', response.data)

        dados['cpf'] = '111.444.777-35'
        response = self.client.post(reverse('api_registro'), dados, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        usuario = Usuario.objects.get(email='bia@example.com')
        self.assertEqual(usuario.cpf, '11144477735')
        self.assertTrue(PapelUsuario.objects.filter(usuario=usuario, papel=PapelUsuario.CLIENTE).exists())

    def test_login_por_email_devolve_tokens(self):
        response = self.client.post(
            reverse('api_token'), {'email': 'ana@example.com', 'password': 'segredo123'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    def test_pedido_de_outro_cliente_e_negado(self):
        pedido = self.pedido_anterior(1)
        outro = Usuario.objects.create_user(email='bia@example.com', password='segredo123')
        self.client.force_authenticate(user=outro)

        response = self.client.get(reverse('api_pedido_detalhe', args=[pedido.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_meus_pedidos_e_declaracao(self):
        pedido = self.pedido_anterior(2)
        self.client.force_authenticate(user=self.cliente)

        response = self.client.get(reverse('api_meus_pedidos'))
        self.assertEqual([p['id'] for p in response.data], [str(pedido.pk)])

        response = self.client.get(reverse('api_declaracao', args=[pedido.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertIn(f'Declaracao_Conteudo_{str(pedido.pk)[:8]}.pdf', response['Content-Disposition'])
        self.assertTrue(response.content.startswith(b'%PDF'))


# ====================================================================
# PAINEL ADMINISTRATIVO
# ====================================================================

class TestPainelAdminAPI(APITestCase):

    def setUp(self):
        super().setUp()
        self.admin = Usuario.objects.create_user(email='adm@example.com', password='segredo123', nome_completo='Admin')
        PapelUsuario.objects.create(usuario=self.admin, papel=PapelUsuario.ADMIN)
        self.client.force_authenticate(user=self.admin)

    def test_cliente_comum_nao_acessa_o_painel(self):
        self.client.force_authenticate(user=self.cliente)
        response = self.client.get(reverse('painel_pedidos'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_lista_pedidos_com_contagem_e_whatsapp(self):
        self.pedido_anterior(1)

        response = self.client.get(reverse('painel_pedidos'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['contagem']['pending'], 1)
        self.assertEqual(response.data['contagem']['delivered'], 0)
        self.assertTrue(response.data['pedidos'][0]['link_whatsapp'].startswith('https://wa.me/5511988887777'))

    def test_atualizar_status(self):
        pedido = self.pedido_anterior(1, status_pedido=StatusPedido.ENTREGUE)

        response = self.client.patch(reverse('painel_pedido', args=[pedido.pk]), {'status': 'pending'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'pending')

        response = self.client.patch(reverse('painel_pedido', args=[pedido.pk]), {'status': 'perdido'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cadastrar_e_excluir_produto(self):
        response = self.client.post(reverse('painel_produtos'), {
            'nome': 'Vaso', 'preco': '59.90', 'estoque': 3, 'categoria': 'decor', 'limite_por_cpf': None,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        produto_id = response.data['id']
        response = self.client.patch(reverse('painel_produto', args=[produto_id]), {'limite_por_cpf': 0}, format='json')
        self.assertTrue(response.data['bloqueado'])

        response = self.client.delete(reverse('painel_produto', args=[produto_id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Produto.objects.filter(pk=produto_id).exists())

    def test_cadastrar_produto_com_upload_de_imagem(self):
        with tempfile.TemporaryDirectory() as media, self.settings(MEDIA_ROOT=media):
            response = self.client.post(reverse('painel_produtos'), {
                'nome': 'Vaso', 'preco': '59.90', 'estoque': 3, 'categoria': 'decor',
                'imagem': imagem_de_teste(),
            }, format='multipart')

            self.assertEqual(response.status_code, status.HTTP_201_CREATED)
            produto = Produto.objects.get(pk=response.data['id'])
            self.assertTrue(produto.imagem.name.startswith('produtos/'))
            self.assertTrue(produto.ativo)
            self.assertEqual(response.data['imagem_url'], produto.imagem.url)

            response = self.client.patch(
                reverse('painel_produto', args=[produto.pk]),
                {'imagem': imagem_de_teste('vaso_novo.gif')},
                format='multipart',
            )
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            produto.refresh_from_db()
            self.assertIn('vaso_novo', produto.imagem.name)
            self.assertEqual(produto.estoque, 3)

    def test_busca_e_edicao_de_clientes(self):
        response = self.client.get(reverse('painel_clientes'), {'busca': '529982'})
        self.assertEqual([c['email'] for c in response.data], ['ana@example.com'])

        response = self.client.patch(
            reverse('painel_cliente', args=[self.cliente.pk]),
            {'nome_completo': 'Ana S.', 'telefone': '(11) 97777-0000'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.cliente.refresh_from_db()
        self.assertEqual(self.cliente.telefone, '11977770000')

    def test_edicao_de_cliente_recusa_cpf_sem_11_digitos(self):
        response = self.client.patch(
            reverse('painel_cliente', args=[self.cliente.pk]),
            {'nome_completo': 'Ana Souza', 'telefone': '11988887777', 'cpf': '529.982.247-251'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('cpf', response.data)
        self.cliente.refresh_from_db()
        self.assertEqual(self.cliente.cpf, CPF)

    def test_mais_vendidos(self):
        self.pedido_anterior(2, status_pedido=StatusPedido.APROVADO)
        self.pedido_anterior(5, status_pedido=StatusPedido.PENDENTE)

        response = self.client.get(reverse('painel_mais_vendidos'), {'ordenar_por': 'revenue'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['quantidade_total'], 2)
        self.assertEqual(response.data[0]['receita_total'], '80.00')

    def test_salvar_metas_do_financeiro(self):
        response = self.client.post(reverse('painel_financeiro'), {
            'metas': [
                {'data': '2025-03-01', 'valor': '100.00'},
                {'data': '2025-03-02', 'valor': None},
            ],
        }, format='json')
        self.assertEqual(response.data['gravadas'], 1)
        self.assertEqual(MetaVenda.objects.get().criado_por, self.admin)

        response = self.client.get(reverse('painel_financeiro'), {'ano': 2025, 'mes': 3})
        self.assertEqual(response.data['dias'], [{'data': '2025-03-01', 'vendido': '0.00', 'meta': '100.00'}])
