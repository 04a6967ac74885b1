from datetime import date, datetime

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from utils.covid import ESTADOS_NORDESTE, TODOS, provincia_do_estado
from utils.estado import ControladorPainel
from utils.formatacao import formatar_data
from utils.relatorio import gerar_pdf

st.set_page_config(page_title="Painel COVID-19 no Nordeste Brasileiro", page_icon=None, layout="wide")

# ========================
# Estilos customizados
# ========================
st.markdown(
    """
    <style>
    .stApp {
        background: linear-gradient(135deg, #f3f4f6, #e5e7eb);
        font-family: "Segoe UI", sans-serif;
        color: #1f2937;
    }
    h1, h2, h3 {
        color: #1f2937;
        font-weight: 600;
    }
    .stCard {
        background: white;
        padding: 20px;
        border-radius: 16px;
        box-shadow: 0 4px 12px rgba(0,0,0,0.1);
        margin-bottom: 20px;
    }
    .cartao-valor {
        font-size: 2rem;
        font-weight: 700;
        color: #1f2937;
    }
    .cartao-titulo {
        font-size: 0.9rem;
        color: #4b5563;
    }
    section[data-testid="stSidebar"] {
        background-color: #f1f3f6;
        border-right: 2px solid #dee2e6;
    }
    div.stButton > button {
        background-color: #3b82f6;
        color: white;
        border-radius: 8px;
        padding: 0.6em 1.2em;
        border: none;
        font-weight: 600;
        transition: 0.3s;
    }
    div.stButton > button:hover {
        background-color: #2563eb;
    }
    </style>
    """,
    unsafe_allow_html=True
)


def indice_estado(provincia: str) -> int:
    if provincia == TODOS or provincia not in ESTADOS_NORDESTE:
        return 0
    return ESTADOS_NORDESTE.index(provincia)


def grafico_serie(df: pd.DataFrame):
    fig, ax = plt.subplots(figsize=(8, 3))
    ax.plot(df["data"], df["casos"], marker="o", color="#3b82f6", label="Casos")
    ax.plot(df["data"], df["mortes"], marker="o", color="#ef4444", label="Mortes")
    ax.set_xlabel("Data")
    ax.set_ylabel("Total acumulado")
    ax.set_title("Evolução no período", fontsize=12, weight="bold", color="#1f2937")
    ax.grid(axis="y", linestyle="--", alpha=0.7)
    ax.legend()
    fig.autofmt_xdate()
    return fig


# ---------------------------
# Sessão
# ---------------------------
if "controlador" not in st.session_state:
    st.session_state.controlador = ControladorPainel()
    st.session_state.filtros_buscados = None

controlador: ControladorPainel = st.session_state.controlador

# ---------------------------
# Barra lateral
# ---------------------------
with st.sidebar:
    st.title("Filtros de Busca")
    st.caption("Estatísticas da COVID-19 nos estados do Nordeste.")

    estado_escolhido = st.selectbox(
        "Estado",
        ESTADOS_NORDESTE,
        index=indice_estado(controlador.filtros.provincia),
    )
    data_escolhida = st.date_input(
        "Data específica",
        value=date.fromisoformat(controlador.filtros.data_especifica),
        format="DD/MM/YYYY",
    )

    buscar_btn = st.button(
        controlador.rotulo_busca,
        disabled=controlador.carregando,
    )

provincia = provincia_do_estado(estado_escolhido)
if provincia != controlador.filtros.provincia:
    controlador.alterar_filtro("provincia", provincia)
if data_escolhida.isoformat() != controlador.filtros.data_especifica:
    controlador.alterar_filtro("data_especifica", data_escolhida.isoformat())

if buscar_btn or st.session_state.filtros_buscados != controlador.filtros:
    with st.spinner("Carregando..."):
        if not controlador.atualizar():
            st.error("Não foi possível atualizar os dados. Exibindo a última consulta.")
    st.session_state.filtros_buscados = controlador.filtros

# ---------------------------
# Conteúdo principal
# ---------------------------
st.title("Painel COVID-19 no Nordeste Brasileiro")

colunas = st.columns(4)
for coluna, cartao in zip(colunas, controlador.cartoes()):
    with coluna:
        st.markdown(
            f'<div class="stCard" style="border-left: 6px solid {cartao.cor};">'
            f'<div class="cartao-titulo">{cartao.titulo}</div>'
            f'<div class="cartao-valor">{cartao.valor}</div>'
            "</div>",
            unsafe_allow_html=True
        )

falhas = [r for r in controlador.resultados if not r.sucesso]
if falhas:
    st.warning(
        "Sem resposta da COVID-API para: "
        + ", ".join(formatar_data(r.data) for r in falhas)
        + ". Esses dias aparecem zerados."
    )

st.markdown('<div class="stCard">', unsafe_allow_html=True)
st.subheader(controlador.titulo_tabela())
tabela = controlador.tabela_dataframe()
if tabela.empty:
    st.info("Nenhum dado disponível.")
else:
    st.dataframe(tabela, use_container_width=True, hide_index=True)
st.markdown('</div>', unsafe_allow_html=True)

if controlador.resultados:
    serie = pd.DataFrame({
        "data": [pd.to_datetime(r.data) for r in controlador.resultados],
        "casos": [r.dados.confirmados for r in controlador.resultados],
        "mortes": [r.dados.obitos for r in controlador.resultados],
    })
    st.markdown('<div class="stCard">', unsafe_allow_html=True)
    st.pyplot(grafico_serie(serie), use_container_width=True)
    st.markdown('</div>', unsafe_allow_html=True)

    # ----------------------- Relatório -----------------------
    st.markdown('<div class="stCard">', unsafe_allow_html=True)
    st.subheader("Relatório")
    relatorio = controlador.relatorio()
    aplicados = controlador.filtros_aplicados or controlador.filtros
    sufixo = f"{aplicados.data_especifica}_{aplicados.provincia.replace(' ', '_')}"
    st.download_button(
        "Baixar relatório (Markdown)",
        data=relatorio.encode("utf-8"),
        file_name=f"relatorio_{sufixo}.md",
        mime="text/markdown"
    )
    st.download_button(
        "Baixar relatório (PDF)",
        data=gerar_pdf(relatorio),
        file_name=f"relatorio_{sufixo}.pdf",
        mime="application/pdf"
    )
    st.markdown('</div>', unsafe_allow_html=True)

st.caption(
    f"Dados: COVID-API (https://covid-api.com/). Gerado em {datetime.now().strftime('%d/%m/%Y %H:%M')}."
)
