from decimal import Decimal

from django.core.management.base import BaseCommand

from reisimports.catalog.models import Produto


# (nome, descrição, categoria, preço, estoque, limite por CPF)
PRODUTOS_INICIAIS = [
    ('Perfume Importado 100ml', 'Fragrância importada, frasco de 100ml', 'exclusivos', Decimal('189.90'), 12, 2),
    ('Relógio Clássico Dourado', 'Relógio analógico com pulseira de aço', 'exclusivos', Decimal('249.90'), 6, 1),
    ('Fone Bluetooth Premium', 'Fone sem fio com estojo de carregamento', 'exclusivos', Decimal('129.90'), 25, 3),
    ('Kit Skincare Coreano', 'Kit com limpador, tônico e hidratante', 'exclusivos', Decimal('159.90'), 8, 0),
    ('Luminária de Mesa LED', 'Luminária articulada com três tons de luz', 'decor', Decimal('89.90'), 15, None),
    ('Vaso Cerâmica Minimalista', 'Vaso decorativo em cerâmica fosca', 'decor', Decimal('59.90'), 30, None),
    ('Difusor de Aromas', 'Difusor ultrassônico com luz ambiente', 'decor', Decimal('99.90'), 4, 5),
]


class Command(BaseCommand):
    help = 'Carrega produtos iniciais para teste da loja'

    def handle(self, *args, **kwargs):
        self.stdout.write('Criando dados iniciais...')

        for nome, descricao, categoria, preco, estoque, limite in PRODUTOS_INICIAIS:
            produto, created = Produto.objects.get_or_create(
                nome=nome,
                defaults={
                    'descricao': descricao,
                    'categoria': categoria,
                    'preco': preco,
                    'estoque': estoque,
                    'limite_por_cpf': limite,
                },
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'Criado produto "{produto.nome}"'))

        self.stdout.write(self.style.SUCCESS('Dados iniciais carregados com sucesso!'))
