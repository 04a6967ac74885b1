import io
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from utils.covid import TODOS, Filtros, ResultadoPeriodo, resultado_atual
from utils.formatacao import formatar_data, formatar_numero, titulo_periodo


def gerar_relatorio(filtros: Filtros, resultados: List[ResultadoPeriodo]) -> str:
    regiao = "Nordeste (todos os estados)" if filtros.provincia == TODOS else filtros.provincia
    linhas = [
        "# Relatório – Painel COVID-19 no Nordeste Brasileiro\n",
        f"**País:** {filtros.pais}\n",
        f"**Região:** {regiao}\n",
        f"**Data específica:** {formatar_data(filtros.data_especifica)}\n",
    ]

    if resultados:
        linhas.append(f"**Período:** {titulo_periodo([r.data for r in resultados])}\n\n")

        atual = resultado_atual(resultados).dados
        linhas.append("## Números do dia\n")
        linhas.append(f"- Total de casos: {formatar_numero(atual.confirmados)}\n")
        linhas.append(f"- Óbitos: {formatar_numero(atual.obitos)}\n")
        linhas.append(f"- Recuperados: {formatar_numero(atual.recuperados)}\n")
        linhas.append(f"- Ativos: {formatar_numero(atual.ativos)}\n")

        linhas.append("\n## Série diária\n")
        for r in resultados:
            d = r.dados
            aviso = "" if r.sucesso else " (falha na busca)"
            linhas.append(
                f"- {formatar_data(r.data)}: casos={d.confirmados}, mortes={d.obitos}, "
                f"recuperados={d.recuperados}, ativos={d.ativos}{aviso}\n"
            )
    else:
        linhas.append("\nNenhum dado carregado.\n")

    linhas.append("\n---\n**Fonte:** COVID-API (https://covid-api.com/).\n")
    return "".join(linhas)


# estilo do reportlab para cada prefixo de linha do Markdown
ESTILOS_PDF = (("## ", "Heading2"), ("# ", "Title"))


def paragrafo_pdf(linha: str, estilos) -> Paragraph:
    """Paragraph com o texto escapado; o reportlab interpreta &, < e > como markup."""
    texto = linha.strip()
    for prefixo, estilo in ESTILOS_PDF:
        if texto.startswith(prefixo):
            return Paragraph(f"<b>{escape(texto[len(prefixo):].strip())}</b>", estilos[estilo])
    return Paragraph(escape(texto.replace("**", "")), estilos["Normal"])


def gerar_pdf(texto: str) -> bytes:
    buffer = io.BytesIO()
    estilos = getSampleStyleSheet()
    elementos = []
    for linha in texto.splitlines():
        if linha.strip():
            elementos.append(paragrafo_pdf(linha, estilos))
        elementos.append(Spacer(1, 8))

    SimpleDocTemplate(buffer).build(elementos)
    pdf = buffer.getvalue()
    buffer.close()
    return pdf
