from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional

import requests

from utils.config import COVID_API_BASE_URL, COVID_API_TIMEOUT
from utils.formatacao import normalizar_texto
from utils.logs import get_logger

logger = get_logger(__name__)

COVID_API_REPORTS_URL = f"{COVID_API_BASE_URL}/reports"

TODOS = "All"
DIAS_ANTES_DEPOIS = 3
INDICE_ATUAL = DIAS_ANTES_DEPOIS

ESTADOS_NORDESTE = [
    "Todos os estados",
    "Alagoas",
    "Bahia",
    "Ceará",
    "Maranhão",
    "Paraíba",
    "Pernambuco",
    "Piauí",
    "Rio Grande do Norte",
    "Sergipe",
]

# campo da API -> atributo de DadosCovid
CAMPOS = {
    "confirmed": "confirmados",
    "deaths": "obitos",
    "recovered": "recuperados",
    "active": "ativos",
}


@dataclass(frozen=True)
class Filtros:
    pais: str = "BRA"
    provincia: str = TODOS
    data_especifica: str = "2022-07-01"


@dataclass(frozen=True)
class DadosCovid:
    confirmados: int = 0
    obitos: int = 0
    recuperados: int = 0
    ativos: int = 0

    @classmethod
    def zero(cls) -> "DadosCovid":
        return cls()

    def __add__(self, outro: "DadosCovid") -> "DadosCovid":
        return DadosCovid(
            confirmados=self.confirmados + outro.confirmados,
            obitos=self.obitos + outro.obitos,
            recuperados=self.recuperados + outro.recuperados,
            ativos=self.ativos + outro.ativos,
        )


@dataclass(frozen=True)
class ResultadoPeriodo:
    """
    Dados agregados de um dia da janela.
    `sucesso` distingue "sem casos" de "falha na busca"; em ambos os casos
    `dados` é o que o painel exibe.
    """
    data: str
    dados: DadosCovid
    sucesso: bool = True
    erro: Optional[str] = None


def provincia_do_estado(estado: str) -> str:
    """Converte a opção do seletor de estados no valor do filtro."""
    return TODOS if estado == ESTADOS_NORDESTE[0] else estado


def calcular_periodo(data_central: str) -> List[str]:
    """
    Retorna as 7 datas (ISO) de data_central-3 até data_central+3, em ordem.
    Levanta ValueError se a data for inválida.
    """
    centro = date.fromisoformat(data_central)
    return [
        (centro + timedelta(days=deslocamento)).isoformat()
        for deslocamento in range(-DIAS_ANTES_DEPOIS, DIAS_ANTES_DEPOIS + 1)
    ]


def extrair_linhas(corpo) -> List[Dict]:
    if not isinstance(corpo, dict):
        return []
    linhas = corpo.get("data")
    if not isinstance(linhas, list):
        return []
    return [linha for linha in linhas if isinstance(linha, dict)]


def filtrar_linhas(linhas: List[Dict], provincia: str) -> List[Dict]:
    alvo = normalizar_texto(provincia)
    filtradas = []
    for linha in linhas:
        regiao = linha.get("region")
        # "" / 0 / None contam como sem região; {} vazio conta como presente
        if regiao is None or (not regiao and not isinstance(regiao, dict)):
            continue
        if provincia == TODOS:
            filtradas.append(linha)
            continue
        nome = regiao.get("province") if isinstance(regiao, dict) else None
        if normalizar_texto(nome) == alvo:
            filtradas.append(linha)
    return filtradas


def somar_linhas(linhas: List[Dict]) -> DadosCovid:
    total = DadosCovid.zero()
    for linha in linhas:
        total = total + DadosCovid(**{
            atributo: int(linha.get(campo) or 0)
            for campo, atributo in CAMPOS.items()
        })
    return total


def consultar_dia(data: str, filtros: Filtros) -> ResultadoPeriodo:
    """
    Busca os relatórios de um dia e soma as linhas da província filtrada.
    Qualquer falha (status HTTP, rede, JSON inválido) vira o registro zero.
    """
    try:
        resposta = requests.get(
            COVID_API_REPORTS_URL,
            params={"date": data, "iso": filtros.pais},
            timeout=COVID_API_TIMEOUT,
        )
        resposta.raise_for_status()
        linhas = extrair_linhas(resposta.json())
        if not linhas:
            return ResultadoPeriodo(data=data, dados=DadosCovid.zero())
        dados = somar_linhas(filtrar_linhas(linhas, filtros.provincia))
    except (requests.RequestException, ValueError, TypeError) as erro:
        logger.warning(f"Erro ao buscar dados para {data}: {erro}")
        return ResultadoPeriodo(data=data, dados=DadosCovid.zero(), sucesso=False, erro=str(erro))

    return ResultadoPeriodo(data=data, dados=dados)


def buscar_dados_dia(data: str, filtros: Filtros) -> DadosCovid:
    return consultar_dia(data, filtros).dados


def buscar_dados_periodo(filtros: Filtros) -> List[ResultadoPeriodo]:
    """
    Busca os 7 dias da janela em paralelo e devolve os resultados na ordem
    das datas, independente da ordem em que as respostas chegaram.
    """
    datas = calcular_periodo(filtros.data_especifica)
    logger.info(
        f"Buscando {len(datas)} dias ({datas[0]} a {datas[-1]}) "
        f"iso={filtros.pais} provincia={filtros.provincia}"
    )

    with ThreadPoolExecutor(max_workers=len(datas), thread_name_prefix="covid") as executor:
        resultados = list(executor.map(lambda d: consultar_dia(d, filtros), datas))

    falhas = sum(1 for r in resultados if not r.sucesso)
    if falhas:
        logger.warning(f"{falhas} de {len(resultados)} dias sem dados por falha na busca")
    return resultados


def resultado_atual(resultados: List[ResultadoPeriodo]) -> ResultadoPeriodo:
    """O dia central da janela (a data específica escolhida)."""
    return resultados[INDICE_ATUAL]
