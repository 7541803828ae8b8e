import uuid

from django.db import models
from django.conf import settings

from reisimports.catalog.models import Produto


class Pedido(models.Model):
    """
    Modelo para pedidos de compra. Todas as formas de pagamento são na entrega.
    """
    STATUS_CHOICES = [
        ('pending', 'Pendente'),
        ('approved', 'Aprovado'),
        ('in_route', 'Em rota'),
        ('delivered', 'Entregue'),
        ('cancelled', 'Cancelado'),
    ]

    PAGAMENTO_CHOICES = [
        ('cash', 'Dinheiro'),
        ('pix', 'PIX'),
        ('card', 'Cartão'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='pedidos',
        verbose_name="Cliente"
    )

    data_criacao = models.DateTimeField(auto_now_add=True, verbose_name="Data do Pedido")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', verbose_name="Status")
    total = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Total do Pedido")
    forma_pagamento = models.CharField(max_length=10, choices=PAGAMENTO_CHOICES, verbose_name="Forma de Pagamento")

    # Snapshot dos dados de entrega no momento da compra
    endereco_entrega = models.TextField(verbose_name="Endereço de Entrega")
    telefone = models.CharField(max_length=20, verbose_name="Telefone de Contato")
    cpf = models.CharField(max_length=11, blank=True, null=True, db_index=True, verbose_name="CPF")
    observacoes = models.TextField(blank=True, null=True, verbose_name="Observações")

    class Meta:
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'
        ordering = ['-data_criacao']
        db_table = 'pedido_compra'

    def __str__(self):
        user_info = str(self.usuario) if self.usuario else 'Cliente removido'
        return f"Pedido {str(self.id)[:8]} - {user_info} - {self.get_status_display()}"

    @property
    def total_formatado(self):
        return f"R$ {self.total:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


class ItemPedido(models.Model):
    """
    Modelo para os itens contidos em um pedido.
    """
    pedido = models.ForeignKey(Pedido, on_delete=models.CASCADE, related_name='itens')

    produto = models.ForeignKey(
        Produto,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='itens_pedido',
        verbose_name="Produto Original"
    )

    # Snapshots (cópia dos dados do produto no momento da compra)
    nome_produto = models.CharField(max_length=255, verbose_name="Nome do Produto")
    preco_unitario = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Preço Unitário na Compra")
    quantidade = models.PositiveIntegerField(verbose_name="Quantidade")

    class Meta:
        verbose_name = 'Item do Pedido'
        verbose_name_plural = 'Itens do Pedido'
        db_table = 'pedido_item'

    def __str__(self):
        return f"{self.quantidade}x {self.nome_produto}"

    @property
    def subtotal(self):
        return self.quantidade * self.preco_unitario
