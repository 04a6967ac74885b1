import os

import streamlit as st


def get_configuracao(chave: str, padrao: str | None = None):
    """Obtém configuração do secrets.toml ou de variáveis de ambiente."""
    try:
        return st.secrets[chave]
    except Exception:
        return os.getenv(chave, padrao)


def get_timeout(chave: str = "COVID_API_TIMEOUT") -> float | None:
    """Timeout em segundos; vazio ou ausente significa esperar indefinidamente."""
    valor = get_configuracao(chave)
    if valor in (None, ""):
        return None
    return float(valor)


COVID_API_BASE_URL = str(get_configuracao("COVID_API_BASE_URL", "https://covid-api.com/api")).rstrip("/")
COVID_API_TIMEOUT = get_timeout()
PAIS_PADRAO = get_configuracao("PAIS_PADRAO", "BRA")
DATA_PADRAO = get_configuracao("DATA_PADRAO", "2022-07-01")
LOG_LEVEL = get_configuracao("LOG_LEVEL", "INFO")
