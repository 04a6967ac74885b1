import re
import unicodedata
from typing import List

# Bloco Unicode de diacríticos combinantes (U+0300–U+036F)
DIACRITICOS = re.compile(r"[\u0300-\u036f]")


def normalizar_texto(texto: str | None) -> str:
    """Remove acentos e passa para minúsculas ("Ceará" -> "ceara")."""
    if not texto:
        return ""
    texto = unicodedata.normalize("NFD", str(texto))
    return DIACRITICOS.sub("", texto).lower()


def formatar_numero(numero: int) -> str:
    if numero >= 1_000_000:
        return f"{numero / 1_000_000:.1f}M"
    if numero >= 1_000:
        return f"{numero / 1_000:.1f}k"
    return str(int(numero))


def formatar_data(data_iso: str) -> str:
    """YYYY-MM-DD -> DD/MM/YYYY"""
    ano, mes, dia = data_iso.split("-")
    return f"{dia}/{mes}/{ano}"


def titulo_periodo(datas: List[str]) -> str:
    if not datas:
        return ""
    return f"{formatar_data(datas[0])} - {formatar_data(datas[-1])}"
