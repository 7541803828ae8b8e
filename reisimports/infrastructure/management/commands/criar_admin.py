"""
Cria (ou completa) o administrador inicial da loja.
Pode ser executado várias vezes: usuário, perfil e papel só são criados se faltarem.
"""
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from reisimports.infrastructure.models import PapelUsuario

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Cria o usuário administrador (e-mail, senha e papel admin)'

    def add_arguments(self, parser):
        parser.add_argument('--email', default=settings.ADMIN_EMAIL)
        parser.add_argument('--password', default=settings.ADMIN_PASSWORD)
        parser.add_argument('--nome', default=settings.ADMIN_NOME)
        parser.add_argument('--telefone', default='')

    @transaction.atomic
    def handle(self, *args, **options):
        email = (options['email'] or '').strip().lower()
        password = options['password']
        if not email or not password:
            raise CommandError('Informe --email e --password (ou ADMIN_EMAIL e ADMIN_PASSWORD no ambiente).')

        Usuario = get_user_model()
        usuario, criado = Usuario.objects.get_or_create(
            email=email,
            defaults={
                'nome_completo': options['nome'],
                'telefone': options['telefone'] or None,
                'is_staff': True,
            },
        )
        if criado:
            usuario.set_password(password)
            usuario.save(update_fields=['password'])
            self.stdout.write(self.style.SUCCESS(f'Usuário "{email}" criado.'))
        else:
            self.stdout.write(f'Usuário "{email}" já existe.')

        # Perfil: completa apenas o que estiver vazio
        campos = []
        if not usuario.nome_completo and options['nome']:
            usuario.nome_completo = options['nome']
            campos.append('nome_completo')
        if not usuario.is_staff:
            usuario.is_staff = True
            campos.append('is_staff')
        if campos:
            usuario.save(update_fields=campos)

        _, papel_criado = PapelUsuario.objects.get_or_create(usuario=usuario, papel=PapelUsuario.ADMIN)
        if papel_criado:
            logger.info("Papel admin concedido a %s.", email)

        self.stdout.write(self.style.SUCCESS(f'Administrador "{email}" pronto.'))
