"""
Camada de Infraestrutura: Gateways para serviços externos
(geração de PDF e links de conversa via WhatsApp).
"""
import logging
from io import BytesIO
from typing import Optional
from urllib.parse import quote
from xml.sax.saxutils import escape

from django.conf import settings
from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from reisimports.core.entities import FormaPagamento, Pedido, Usuario
from reisimports.core.ports import IDeclaracaoConteudoGateway, IWhatsappGateway
from reisimports.core.validadores import formatar_cpf, somente_digitos

logger = logging.getLogger(__name__)


def formatar_moeda(valor) -> str:
    """Formata em Real Brasileiro: R$ 1.234,56."""
    return f"R$ {valor:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


# ====================================================================
# 1. DECLARAÇÃO DE CONTEÚDO (PDF com reportlab)
# ====================================================================

TEXTO_DECLARACAO = (
    "Declaro, para os devidos fins, que o conteúdo desta remessa corresponde aos itens "
    "comercializados pela empresa acima identificada, destinados ao destinatário informado, "
    "sem fins de contrabando ou mercadoria proibida."
)

RODAPE_DECLARACAO = "Documento gerado automaticamente. Válido como declaração de conteúdo."


class DeclaracaoConteudoReportLabGateway(IDeclaracaoConteudoGateway):
    """Monta a declaração de conteúdo de um pedido em PDF (A4)."""

    def __init__(self, razao_social: Optional[str] = None, cnpj: Optional[str] = None):
        self.razao_social = razao_social or getattr(settings, 'STORE_RAZAO', 'reisimports')
        self.cnpj = cnpj or getattr(settings, 'STORE_CNPJ', '')

    def _tabela_campos(self, linhas, styles):
        dados = [
            [Paragraph(f"<b>{escape(rotulo)}</b>", styles["Normal"]), Paragraph(escape(valor or '-'), styles["Normal"])]
            for rotulo, valor in linhas
        ]
        tabela = Table(dados, colWidths=[110, 400])
        tabela.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ]))
        return tabela

    def gerar(self, pedido: Pedido, cliente: Optional[Usuario]) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=36, rightMargin=36, topMargin=48, bottomMargin=36)
        styles = getSampleStyleSheet()
        story = []

        # Cabeçalho
        story.append(Paragraph("<b>Declaração de Conteúdo</b>", styles["Title"]))
        story.append(Paragraph(
            f"{escape(self.razao_social)} | CNPJ {escape(self.cnpj)}", styles["Italic"]
        ))
        story.append(Spacer(1, 12))

        # Emitente
        story.append(Paragraph("<b>Emitente</b>", styles["Heading3"]))
        story.append(self._tabela_campos([
            ("Razão social", self.razao_social),
            ("CNPJ", self.cnpj),
        ], styles))
        story.append(Spacer(1, 8))

        # Destinatário
        nome = (cliente.nome_completo if cliente else None) or pedido.cliente_nome
        cpf = pedido.cpf or (cliente.cpf if cliente else None)
        story.append(Paragraph("<b>Destinatário</b>", styles["Heading3"]))
        story.append(self._tabela_campos([
            ("Nome", nome),
            ("CPF", formatar_cpf(cpf)),
            ("Telefone", pedido.telefone),
            ("Endereço", pedido.endereco_entrega),
        ], styles))
        story.append(Spacer(1, 8))

        # Pedido
        data_pedido = timezone.localtime(pedido.data_criacao) if timezone.is_aware(pedido.data_criacao) else pedido.data_criacao
        pagamento = FormaPagamento.ROTULOS.get(pedido.forma_pagamento, pedido.forma_pagamento)
        story.append(Paragraph("<b>Pedido</b>", styles["Heading3"]))
        story.append(self._tabela_campos([
            ("Número", pedido.numero),
            ("Data", f"{data_pedido:%d/%m/%Y %H:%M}"),
            ("Pagamento", f"{pagamento} na entrega"),
            ("Total", formatar_moeda(pedido.total)),
        ], styles))
        story.append(Spacer(1, 12))

        # Itens
        linhas = [["Item", "Qtd", "Unitário", "Subtotal"]]
        for item in pedido.itens:
            linhas.append([
                Paragraph(escape(item.nome_produto), styles["Normal"]),
                str(item.quantidade),
                formatar_moeda(item.preco_unitario),
                formatar_moeda(item.subtotal),
            ])
        tabela_itens = Table(linhas, colWidths=[260, 50, 100, 100], repeatRows=1)
        tabela_itens.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1F2937")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ]))
        story.append(tabela_itens)
        story.append(Spacer(1, 18))

        # Declaração e assinatura
        story.append(Paragraph("<b>Declaração</b>", styles["Heading3"]))
        story.append(Paragraph(TEXTO_DECLARACAO, styles["Normal"]))
        story.append(Spacer(1, 36))
        story.append(Paragraph("_" * 60, styles["Normal"]))
        story.append(Paragraph("Assinatura", styles["Normal"]))
        story.append(Spacer(1, 24))
        story.append(Paragraph(RODAPE_DECLARACAO, styles["Italic"]))

        doc.build(story)
        logger.info("Declaração de conteúdo gerada para o pedido %s.", pedido.id)
        return buffer.getvalue()


# ====================================================================
# 2. WHATSAPP (apenas link; nenhuma mensagem é enviada)
# ====================================================================

class WhatsAppLinkGateway(IWhatsappGateway):
    """Gera links https://wa.me para o atendente abrir a conversa com o cliente."""

    BASE_URL = "https://wa.me"
    DDI_BRASIL = "55"

    def gerar_link(self, telefone: str, mensagem: str = '') -> Optional[str]:
        digitos = somente_digitos(telefone)
        if not digitos:
            return None
        # Números nacionais (DDD + número) recebem o DDI do Brasil
        if not (digitos.startswith(self.DDI_BRASIL) and len(digitos) > 11):
            digitos = f"{self.DDI_BRASIL}{digitos}"
        link = f"{self.BASE_URL}/{digitos}"
        if mensagem:
            link = f"{link}?text={quote(mensagem)}"
        return link
