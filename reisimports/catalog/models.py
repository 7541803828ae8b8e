import uuid

from django.db import models
from django.core.validators import MinValueValidator

# ====================================================================
# Produto
# ====================================================================

class Produto(models.Model):
    """Modelo para representar um produto no catálogo."""

    CATEGORIA_CHOICES = [
        ('exclusivos', 'Exclusivos'),
        ('decor', 'Decor'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    nome = models.CharField(max_length=255, verbose_name="Nome do Produto")
    descricao = models.TextField(blank=True, default='', verbose_name="Descrição")
    categoria = models.CharField(max_length=20, choices=CATEGORIA_CHOICES, default='exclusivos')

    # Preço, Estoque e Disponibilidade
    preco = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)], verbose_name="Preço de Venda"
    )
    estoque = models.PositiveIntegerField(default=0, verbose_name="Estoque Atual")
    limite_por_cpf = models.PositiveIntegerField(
        blank=True,
        null=True,
        verbose_name="Limite por CPF",
        help_text="Quantidade máxima por CPF por dia. Vazio = sem limite; 0 = bloqueado.",
    )
    ativo = models.BooleanField(default=True)

    # Imagem: upload próprio ou URL externa
    imagem = models.ImageField(upload_to='produtos/', blank=True, null=True, verbose_name="Imagem Principal")
    imagem_url = models.URLField(max_length=500, blank=True, null=True, verbose_name="URL da Imagem")

    data_criacao = models.DateTimeField(auto_now_add=True)
    data_atualizacao = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Produto"
        verbose_name_plural = "Produtos"
        ordering = ['-data_criacao']
        db_table = 'catalogo_produto'

    def __str__(self):
        return self.nome

    @property
    def url_imagem_principal(self):
        if self.imagem:
            return self.imagem.url
        return self.imagem_url or None

    @property
    def preco_formatado(self):
        """Retorna o preço formatado em Real Brasileiro."""
        return f"R$ {self.preco:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


class ProdutoImagem(models.Model):
    """Imagens adicionais (galeria) de um produto."""
    produto = models.ForeignKey(Produto, on_delete=models.CASCADE, related_name='imagens')
    imagem_url = models.URLField(max_length=500)
    ordem = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = "Imagem do Produto"
        verbose_name_plural = "Imagens do Produto"
        ordering = ['ordem', 'id']
        db_table = 'catalogo_produto_imagem'

    def __str__(self):
        return f"{self.produto.nome} #{self.ordem}"
