from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from reisimports.core.entities import CategoriaProduto, FormaPagamento, StatusPedido
from reisimports.core.use_cases import urgencia_estoque
from reisimports.core.validadores import cpf_valido, formatar_cpf, normalizar_cpf, somente_digitos
from reisimports.infrastructure.models import PapelUsuario

Usuario = get_user_model()


# ====================================================================
# CATÁLOGO
# ====================================================================

class ProdutoSerializer(serializers.Serializer):
    """Produto da vitrine (a partir da entidade da Core)."""
    id = serializers.CharField()
    nome = serializers.CharField()
    descricao = serializers.CharField()
    preco = serializers.DecimalField(max_digits=10, decimal_places=2)
    estoque = serializers.IntegerField()
    limite_por_cpf = serializers.IntegerField(allow_null=True)
    categoria = serializers.CharField()
    ativo = serializers.BooleanField()
    imagem_url = serializers.CharField(allow_null=True)
    imagens_extras = serializers.ListField(child=serializers.CharField())
    bloqueado = serializers.BooleanField()
    max_por_pedido = serializers.IntegerField()
    urgencia = serializers.SerializerMethodField()

    def get_urgencia(self, produto):
        return urgencia_estoque(produto, getattr(settings, 'LIMITE_URGENCIA_ESTOQUE', 10))


class ProdutoAdminSerializer(serializers.Serializer):
    """Dados de cadastro/edição de produto no painel."""
    nome = serializers.CharField(max_length=255)
    descricao = serializers.CharField(required=False, allow_blank=True, default='')
    preco = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    estoque = serializers.IntegerField(min_value=0)
    limite_por_cpf = serializers.IntegerField(min_value=0, required=False, allow_null=True, default=None)
    categoria = serializers.ChoiceField(choices=CategoriaProduto.TODAS, default=CategoriaProduto.EXCLUSIVOS)
    ativo = serializers.BooleanField(default=True)
    imagem_url = serializers.URLField(required=False, allow_blank=True, allow_null=True, default=None)
    imagens_extras = serializers.ListField(child=serializers.URLField(), required=False, default=list)
    # Upload opcional (multipart); tem prioridade sobre imagem_url
    imagem = serializers.ImageField(required=False, allow_null=True)


# ====================================================================
# SERIALIZERS PARA O CARRINHO
# ====================================================================

class ItemCarrinhoSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    nome = serializers.CharField()
    preco_unitario = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantidade = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    imagem_url = serializers.CharField(allow_null=True)


class CarrinhoSerializer(serializers.Serializer):
    """Recebe o contexto montado pelo CartManager."""
    itens = ItemCarrinhoSerializer(many=True, source='carrinho.itens')
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_itens = serializers.IntegerField()
    valor_minimo = serializers.DecimalField(max_digits=10, decimal_places=2)
    falta_para_minimo = serializers.DecimalField(max_digits=10, decimal_places=2)


class AdicionarItemCarrinhoSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    quantidade = serializers.IntegerField(min_value=1, default=1)


class AtualizarItemCarrinhoSerializer(serializers.Serializer):
    produto_id = serializers.CharField()
    quantidade = serializers.IntegerField()


# ====================================================================
# SERIALIZER PARA CHECKOUT
# ====================================================================

class CheckoutSerializer(serializers.Serializer):
    """
    Dados de entrega. Endereço, telefone e CPF podem vir do perfil quando omitidos;
    a validação final é feita pelo ValidarCheckoutUseCase.
    """
    endereco = serializers.CharField(required=False, allow_blank=True)
    telefone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    cpf = serializers.CharField(max_length=14, required=False, allow_blank=True)
    forma_pagamento = serializers.ChoiceField(choices=FormaPagamento.TODAS)
    observacoes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


# ====================================================================
# PEDIDOS
# ====================================================================

class ItemPedidoSerializer(serializers.Serializer):
    produto_id = serializers.CharField(allow_null=True)
    nome_produto = serializers.CharField()
    quantidade = serializers.IntegerField()
    preco_unitario = serializers.DecimalField(max_digits=10, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class PedidoSerializer(serializers.Serializer):
    id = serializers.CharField()
    numero = serializers.CharField()
    status = serializers.CharField()
    status_rotulo = serializers.SerializerMethodField()
    total = serializers.DecimalField(max_digits=10, decimal_places=2)
    forma_pagamento = serializers.CharField()
    forma_pagamento_rotulo = serializers.SerializerMethodField()
    endereco_entrega = serializers.CharField()
    telefone = serializers.CharField()
    cpf = serializers.CharField(allow_null=True)
    observacoes = serializers.CharField(allow_null=True)
    data_criacao = serializers.DateTimeField()
    itens = ItemPedidoSerializer(many=True)

    def get_status_rotulo(self, pedido):
        return StatusPedido.ROTULOS.get(pedido.status, pedido.status)

    def get_forma_pagamento_rotulo(self, pedido):
        return FormaPagamento.ROTULOS.get(pedido.forma_pagamento, pedido.forma_pagamento)


class PedidoAdminSerializer(PedidoSerializer):
    usuario_id = serializers.CharField(allow_null=True)
    cliente_nome = serializers.CharField(allow_null=True)
    cliente_email = serializers.CharField(allow_null=True)
    link_whatsapp = serializers.SerializerMethodField()

    def get_link_whatsapp(self, pedido):
        gerar_link = self.context.get('gerar_link_whatsapp')
        return gerar_link(pedido) if gerar_link else None


class StatusPedidoSerializer(serializers.Serializer):
    status = serializers.CharField()


# ====================================================================
# CONTAS E PERFIL
# ====================================================================

class RegistroSerializer(serializers.ModelSerializer):
    """Cadastro de cliente, com validação completa do CPF."""
    password = serializers.CharField(write_only=True, min_length=6)
    confirmar_senha = serializers.CharField(write_only=True)

    class Meta:
        model = Usuario
        fields = ['id', 'email', 'password', 'confirmar_senha', 'nome_completo',
                  'telefone', 'endereco', 'cpf', 'documento_rg']
        extra_kwargs = {
            'nome_completo': {'required': True, 'allow_blank': False},
            'telefone': {'required': True, 'allow_blank': False},
            'cpf': {'required': True, 'allow_blank': False, 'max_length': 14},
            'documento_rg': {'required': False},
        }

    def validate_cpf(self, value):
        if not cpf_valido(value):
            raise serializers.ValidationError("CPF inválido.")
        return normalizar_cpf(value)

    def validate_telefone(self, value):
        digitos = somente_digitos(value)
        if len(digitos) < 10:
            raise serializers.ValidationError("Informe o telefone com DDD.")
        return digitos

    def validate(self, attrs):
        if attrs['password'] != attrs.pop('confirmar_senha'):
            raise serializers.ValidationError({'confirmar_senha': "As senhas não coincidem."})
        validate_password(attrs['password'])
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        usuario = Usuario.objects.create_user(password=password, **validated_data)
        PapelUsuario.objects.create(usuario=usuario, papel=PapelUsuario.CLIENTE)
        return usuario


class PerfilSerializer(serializers.ModelSerializer):
    """Leitura e edição do próprio perfil (inclui o envio do RG)."""
    cpf_formatado = serializers.SerializerMethodField()
    is_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = Usuario
        fields = ['id', 'email', 'nome_completo', 'telefone', 'endereco', 'cpf',
                  'cpf_formatado', 'documento_rg', 'is_admin']
        read_only_fields = ['id', 'email']
        extra_kwargs = {'cpf': {'max_length': 14}}

    def get_cpf_formatado(self, usuario):
        return formatar_cpf(usuario.cpf) if usuario.cpf else None

    def validate_cpf(self, value):
        if not value:
            return None
        if not cpf_valido(value):
            raise serializers.ValidationError("CPF inválido.")
        return normalizar_cpf(value)

    def validate_telefone(self, value):
        return somente_digitos(value) or None


# ====================================================================
# PAINEL ADMINISTRATIVO
# ====================================================================

class ClienteSerializer(serializers.Serializer):
    id = serializers.CharField(source='usuario.id')
    nome_completo = serializers.CharField(source='usuario.nome_completo')
    email = serializers.CharField(source='usuario.email')
    telefone = serializers.CharField(source='usuario.telefone', allow_null=True)
    cpf = serializers.CharField(source='usuario.cpf', allow_null=True)
    documento_rg_url = serializers.CharField(source='usuario.documento_rg_url', allow_null=True)
    is_admin = serializers.BooleanField(source='usuario.is_admin')
    endereco = serializers.CharField(source='endereco_exibicao', allow_null=True)
    total_pedidos = serializers.IntegerField()


class ClienteUpdateSerializer(serializers.Serializer):
    nome_completo = serializers.CharField(allow_blank=True)
    telefone = serializers.CharField(allow_blank=True)
    cpf = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    endereco = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_cpf(self, value):
        if not value:
            return None
        cpf = normalizar_cpf(value)
        if not cpf:
            raise serializers.ValidationError("O CPF deve ter 11 dígitos.")
        return cpf


class MaisVendidoSerializer(serializers.Serializer):
    produto_id = serializers.CharField(allow_null=True)
    nome = serializers.CharField()
    imagem_url = serializers.CharField(allow_null=True)
    quantidade_total = serializers.IntegerField()
    receita_total = serializers.DecimalField(max_digits=14, decimal_places=2)
    ocorrencias = serializers.IntegerField()


class FiltroPeriodoSerializer(serializers.Serializer):
    inicio = serializers.DateField(required=False)
    fim = serializers.DateField(required=False)
    ordenar_por = serializers.ChoiceField(choices=['qty', 'revenue'], default='qty')


class MesReferenciaSerializer(serializers.Serializer):
    ano = serializers.IntegerField(min_value=2000, max_value=2100, required=False)
    mes = serializers.IntegerField(min_value=1, max_value=12, required=False)


class MetaDiaSerializer(serializers.Serializer):
    data = serializers.DateField()
    valor = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)


class SalvarMetasSerializer(serializers.Serializer):
    metas = MetaDiaSerializer(many=True)
