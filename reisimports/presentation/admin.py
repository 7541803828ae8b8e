# Configuração da interface administrativa do Django para os modelos da ReisImports.

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserChangeForm, UserCreationForm

from reisimports.catalog.models import Produto, ProdutoImagem
from reisimports.infrastructure.models import MetaVenda, PapelUsuario, Usuario
from reisimports.pedidos.models import ItemPedido, Pedido


# ====================================================================
# 1. ADMIN PERSONALIZADO PARA USUÁRIOS (login por e-mail)
# ====================================================================

class UsuarioCreationForm(UserCreationForm):
    class Meta:
        model = Usuario
        fields = ('email', 'nome_completo')


class UsuarioChangeForm(UserChangeForm):
    class Meta:
        model = Usuario
        fields = '__all__'


class PapelUsuarioInline(admin.TabularInline):
    model = PapelUsuario
    extra = 0


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """O campo 'username' não existe no modelo Usuario; pesquisa e ordenação usam o e-mail."""
    add_form = UsuarioCreationForm
    form = UsuarioChangeForm
    inlines = [PapelUsuarioInline]

    list_display = ('email', 'nome_completo', 'telefone', 'cpf', 'is_staff', 'is_active')
    list_filter = ('is_staff', 'is_superuser', 'is_active')

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Informações de Perfil', {'fields': ('nome_completo', 'telefone', 'cpf', 'endereco', 'documento_rg')}),
        ('Permissões', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Datas', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'nome_completo', 'password1', 'password2'),
        }),
    )

    search_fields = ('email', 'nome_completo', 'cpf', 'telefone')
    ordering = ('email',)


@admin.register(MetaVenda)
class MetaVendaAdmin(admin.ModelAdmin):
    list_display = ('data_meta', 'valor_alvo', 'criado_por', 'data_atualizacao')
    date_hierarchy = 'data_meta'
    ordering = ('-data_meta',)


# ====================================================================
# 2. ADMIN PARA PRODUTOS
# ====================================================================

class ProdutoImagemInline(admin.TabularInline):
    """Imagens extras exibidas na página do produto."""
    model = ProdutoImagem
    extra = 1


@admin.register(Produto)
class ProdutoAdmin(admin.ModelAdmin):
    list_display = ('nome', 'preco', 'estoque', 'limite_por_cpf', 'categoria', 'ativo', 'data_criacao')
    list_filter = ('ativo', 'categoria')
    list_editable = ('estoque', 'limite_por_cpf', 'ativo')
    search_fields = ('nome', 'descricao')
    ordering = ('nome',)
    inlines = [ProdutoImagemInline]
    fieldsets = (
        ('Informações Básicas', {
            'fields': ('nome', 'descricao', 'categoria', 'preco', 'ativo'),
        }),
        ('Estoque e Limite', {
            'description': 'Limite por CPF vazio = sem limite; 0 = compra bloqueada.',
            'fields': ('estoque', 'limite_por_cpf'),
        }),
        ('Imagens', {
            'fields': ('imagem', 'imagem_url'),
        }),
    )


# ====================================================================
# 3. ADMIN PARA PEDIDOS
# ====================================================================

class ItemPedidoInline(admin.TabularInline):
    """Exibe os itens comprados dentro do detalhe do Pedido."""
    model = ItemPedido
    readonly_fields = ('produto', 'nome_produto', 'preco_unitario', 'quantidade', 'subtotal')
    extra = 0
    can_delete = False


@admin.register(Pedido)
class PedidoAdmin(admin.ModelAdmin):
    list_display = ('id', 'usuario', 'cpf', 'data_criacao', 'total', 'status', 'forma_pagamento')
    list_filter = ('status', 'forma_pagamento', 'data_criacao')
    search_fields = ('id', 'usuario__email', 'usuario__nome_completo', 'cpf', 'telefone')
    date_hierarchy = 'data_criacao'
    inlines = [ItemPedidoInline]

    # Apenas o status pode ser alterado por aqui
    readonly_fields = (
        'usuario',
        'data_criacao',
        'total',
        'forma_pagamento',
        'endereco_entrega',
        'telefone',
        'cpf',
        'observacoes',
    )

    def has_add_permission(self, request):
        """Pedidos só são criados pelo checkout."""
        return False
