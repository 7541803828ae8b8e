# reisimports/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    # O nome completo do path da aplicação
    name = 'reisimports.core'
    label = 'core'
    verbose_name = 'Entidades e Regras de Negócio (Core)'

    # Esta camada não tem modelos; eles ficam na Infraestrutura.
    default_auto_field = 'django.db.models.BigAutoField'
