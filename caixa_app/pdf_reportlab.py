# caixa_app/pdf_reportlab.py

from io import BytesIO

from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.utils import formatar_data, formatar_moeda


def gerar_pdf_livro_caixa(livro, titulo="Livro caixa", filtros=None):
    """
    Gera o PDF (bytes) do livro caixa: cabeçalho, tabela com saldo acumulado,
    totais do período e rodapé com paginação.
    """
    filtros = filtros or {}

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=1.2 * cm,
        rightMargin=1.2 * cm,
        topMargin=1.2 * cm,
        bottomMargin=1.2 * cm,
        title=titulo,
    )

    styles = getSampleStyleSheet()
    style_h = styles["Heading2"]
    style_n = styles["Normal"]

    story = [Paragraph(titulo, style_h), Spacer(1, 6)]

    gerado = timezone.localtime().strftime("%d/%m/%Y %H:%M")
    story.append(Paragraph(f"Gerado em: {gerado}", style_n))

    partes = []
    if filtros.get("caixa"):
        partes.append(f'Caixa: <b>{filtros["caixa"]}</b>')
    if filtros.get("inicio") or filtros.get("fim"):
        partes.append(
            f'Período: <b>{formatar_data(filtros.get("inicio")) or "..."}</b>'
            f' a <b>{formatar_data(filtros.get("fim")) or "..."}</b>'
        )
    if filtros.get("tipo"):
        partes.append(f'Tipo: <b>{filtros["tipo"]}</b>')
    if partes:
        story.append(Spacer(1, 4))
        story.append(Paragraph(" | ".join(partes), style_n))

    story.append(Spacer(1, 10))

    data = [["Data", "Caixa", "Tipo", "Categoria", "Descrição", "Entrada", "Saída", "Saldo"]]
    data.append(["", "", "", "", "Saldo anterior", "", "", formatar_moeda(livro["saldo_anterior"])])

    for linha in livro["linhas"]:
        mov = linha["movimentacao"]
        entrada = formatar_moeda(mov.valor) if mov.tipo == "entrada" else ""
        saida = formatar_moeda(mov.valor) if mov.tipo == "saida" else ""
        data.append([
            formatar_data(mov.data),
            mov.caixa.nome,
            mov.get_tipo_display(),
            mov.categoria,
            mov.descricao[:60],
            entrada,
            saida,
            formatar_moeda(linha["saldo"]),
        ])

    data.append([
        "", "", "", "", "Totais do período",
        formatar_moeda(livro["total_entradas"]),
        formatar_moeda(livro["total_saidas"]),
        formatar_moeda(livro["saldo_final"]),
    ])

    col_widths = [2.2 * cm, 3.8 * cm, 2.4 * cm, 3.4 * cm, 8.0 * cm, 2.8 * cm, 2.8 * cm, 2.8 * cm]
    table = Table(data, colWidths=col_widths, repeatRows=1)

    table.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 9),
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F2F2F2")),
        ("ALIGN", (5, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#DDDDDD")),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
        ("FONTSIZE", (0, 1), (-1, -1), 8),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("FONTNAME", (0, 1), (-1, 1), "Helvetica-Oblique"),
    ]))

    for r in range(2, len(data) - 1):
        if r % 2 == 0:
            table.setStyle(TableStyle([
                ("BACKGROUND", (0, r), (-1, r), colors.HexColor("#FAFAFA")),
            ]))

    story.append(table)

    def _on_page(canvas, _doc):
        canvas.saveState()
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(colors.HexColor("#666666"))
        canvas.drawRightString(
            _doc.pagesize[0] - 1.2 * cm,
            0.7 * cm,
            f"Página {_doc.page}",
        )
        canvas.restoreState()

    doc.build(story, onFirstPage=_on_page, onLaterPages=_on_page)

    pdf = buffer.getvalue()
    buffer.close()
    return pdf
