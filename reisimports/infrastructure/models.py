# Define os modelos do banco de dados para a camada de infraestrutura
# (autenticação, perfil do cliente, papéis e metas de venda).

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.conf import settings
from django.core.validators import MinValueValidator

# ====================================================================
# GERENCIADOR DE USUÁRIOS PERSONALIZADO (Para usar email como login)
# ====================================================================

class CustomUserManager(BaseUserManager):
    """
    Gerenciador de modelos de usuário onde o email é o identificador único
    para autenticação, em vez dos nomes de usuário.
    """
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('O e-mail deve ser definido')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Cria e salva um Superusuário com o e-mail e senha fornecidos.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


# ====================================================================
# MODELO DE USUÁRIO (com os dados de perfil)
# ====================================================================

class Usuario(AbstractUser):
    """
    Modelo de Usuário Personalizado que utiliza o campo 'email' como identificador
    principal para login. Também guarda o perfil usado no checkout.
    """
    username = None

    email = models.EmailField('Endereço de E-mail', unique=True)

    nome_completo = models.CharField('Nome Completo', max_length=255, blank=True, default='')
    telefone = models.CharField(max_length=20, blank=True, null=True)
    endereco = models.TextField('Endereço', blank=True, null=True)
    cpf = models.CharField('CPF', max_length=11, blank=True, null=True)
    documento_rg = models.FileField('Documento (RG)', upload_to='documentos/', blank=True, null=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    class Meta:
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'
        db_table = 'infra_usuario'

    def __str__(self):
        return self.nome_completo or self.email

    @property
    def is_admin(self) -> bool:
        """Administrador é quem tem o papel 'admin' (ou é superusuário)."""
        if self.is_superuser:
            return True
        return self.papeis.filter(papel=PapelUsuario.ADMIN).exists()


class PapelUsuario(models.Model):
    """Atribuição de papel a um usuário. O papel 'admin' libera o painel."""
    ADMIN = 'admin'
    CLIENTE = 'cliente'

    PAPEL_CHOICES = [
        (ADMIN, 'Administrador'),
        (CLIENTE, 'Cliente'),
    ]

    usuario = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='papeis')
    papel = models.CharField(max_length=20, choices=PAPEL_CHOICES, default=CLIENTE)
    data_criacao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Papel do Usuário'
        verbose_name_plural = 'Papéis dos Usuários'
        db_table = 'usuario_papel'
        unique_together = ('usuario', 'papel')

    def __str__(self):
        return f"{self.usuario} - {self.get_papel_display()}"


class MetaVenda(models.Model):
    """Meta diária de faturamento, uma por data."""
    data_meta = models.DateField('Data', unique=True)
    valor_alvo = models.DecimalField(
        'Meta (R$)', max_digits=12, decimal_places=2, validators=[MinValueValidator(0)]
    )
    criado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='metas_criadas',
    )
    data_atualizacao = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Meta de Venda'
        verbose_name_plural = 'Metas de Venda'
        db_table = 'financeiro_meta_venda'
        ordering = ['data_meta']

    def __str__(self):
        return f"{self.data_meta:%d/%m/%Y}: R$ {self.valor_alvo}"
