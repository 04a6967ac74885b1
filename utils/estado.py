import threading
from dataclasses import dataclass, field, fields, replace
from typing import Callable, List

import pandas as pd

from utils.config import DATA_PADRAO, PAIS_PADRAO
from utils.covid import (
    TODOS,
    Filtros,
    ResultadoPeriodo,
    buscar_dados_periodo,
    calcular_periodo,
    resultado_atual,
)
from utils.formatacao import formatar_data, formatar_numero, titulo_periodo
from utils.logs import get_logger
from utils.relatorio import gerar_relatorio

logger = get_logger(__name__)

COLUNAS_TABELA = {
    "data": "Data",
    "casos": "Casos",
    "mortes": "Mortes",
    "recuperados": "Recup.",
    "ativos": "Ativos",
}


@dataclass(frozen=True)
class Estatisticas:
    total: str = "0"
    mortes: str = "0"
    recuperados: str = "0"
    ativos: str = "0"


@dataclass(frozen=True)
class LinhaTabela:
    data: str
    casos: str
    mortes: str
    recuperados: str
    ativos: str


@dataclass(frozen=True)
class CartaoEstatistica:
    titulo: str
    valor: str
    cor: str


@dataclass
class EstadoPainel:
    filtros: Filtros = field(default_factory=lambda: Filtros(pais=PAIS_PADRAO, data_especifica=DATA_PADRAO))
    estatisticas: Estatisticas = field(default_factory=Estatisticas)
    linhas_tabela: List[LinhaTabela] = field(default_factory=list)
    resultados: List[ResultadoPeriodo] = field(default_factory=list)
    filtros_aplicados: Filtros | None = None
    carregando: bool = False


def montar_estatisticas(resultados: List[ResultadoPeriodo]) -> Estatisticas:
    dados = resultado_atual(resultados).dados
    return Estatisticas(
        total=formatar_numero(dados.confirmados),
        mortes=formatar_numero(dados.obitos),
        recuperados=formatar_numero(dados.recuperados),
        ativos=formatar_numero(dados.ativos),
    )


def montar_linhas(resultados: List[ResultadoPeriodo]) -> List[LinhaTabela]:
    return [
        LinhaTabela(
            data=formatar_data(r.data),
            casos=formatar_numero(r.dados.confirmados),
            mortes=formatar_numero(r.dados.obitos),
            recuperados=formatar_numero(r.dados.recuperados),
            ativos=formatar_numero(r.dados.ativos),
        )
        for r in resultados
    ]


class ControladorPainel:
    """
    Único ponto de mutação do EstadoPainel.

    Cada chamada de `atualizar` recebe um número de geração; quando duas
    atualizações se sobrepõem, só a iniciada por último é aplicada e o
    resultado da anterior é descartado.
    """

    def __init__(
        self,
        estado: EstadoPainel | None = None,
        buscar: Callable[[Filtros], List[ResultadoPeriodo]] = buscar_dados_periodo,
    ):
        self.estado = estado or EstadoPainel()
        self._buscar = buscar
        self._lock = threading.Lock()
        self._geracao = 0

    # ---------------------------
    # Leitura
    # ---------------------------
    @property
    def filtros(self) -> Filtros:
        return self.estado.filtros

    @property
    def estatisticas(self) -> Estatisticas:
        return self.estado.estatisticas

    @property
    def linhas_tabela(self) -> List[LinhaTabela]:
        return list(self.estado.linhas_tabela)

    @property
    def resultados(self) -> List[ResultadoPeriodo]:
        return list(self.estado.resultados)

    @property
    def filtros_aplicados(self) -> Filtros | None:
        """Filtros da última atualização aplicada (os que geraram tabela e resultados)."""
        return self.estado.filtros_aplicados

    @property
    def carregando(self) -> bool:
        return self.estado.carregando

    @property
    def rotulo_busca(self) -> str:
        return "Carregando..." if self.estado.carregando else "Buscar"

    def cartoes(self) -> List[CartaoEstatistica]:
        e = self.estado.estatisticas
        return [
            CartaoEstatistica("Total de Casos", e.total, "#3b82f6"),
            CartaoEstatistica("Óbitos", e.mortes, "#ef4444"),
            CartaoEstatistica("Recuperados", e.recuperados, "#22c55e"),
            CartaoEstatistica("Ativos", e.ativos, "#eab308"),
        ]

    def titulo_tabela(self) -> str:
        filtros = self.estado.filtros_aplicados or self.estado.filtros
        periodo = titulo_periodo(calcular_periodo(filtros.data_especifica))
        if filtros.provincia != TODOS:
            return f"Tabela de Resultados do estado: {filtros.provincia} entre ({periodo})"
        return f"Tabela de Resultados do Nordeste em: ({periodo})"

    def tabela_dataframe(self) -> pd.DataFrame:
        linhas = [vars(linha) for linha in self.estado.linhas_tabela]
        return pd.DataFrame(linhas, columns=list(COLUNAS_TABELA)).rename(columns=COLUNAS_TABELA)

    def relatorio(self) -> str:
        """Relatório em Markdown da última atualização aplicada."""
        return gerar_relatorio(self.estado.filtros_aplicados or self.estado.filtros, self.resultados)

    # ---------------------------
    # Transições
    # ---------------------------
    def alterar_filtro(self, campo: str, valor: str) -> Filtros:
        """Substitui os filtros por uma cópia com um campo alterado."""
        if campo not in {f.name for f in fields(Filtros)}:
            raise KeyError(campo)
        with self._lock:
            self.estado.filtros = replace(self.estado.filtros, **{campo: valor})
            return self.estado.filtros

    def atualizar(self, filtros: Filtros | None = None) -> bool:
        """
        Busca a janela de 7 dias e substitui estatísticas e tabela de uma vez.
        Retorna False se a busca falhou por completo ou se outra atualização
        mais recente foi iniciada nesse meio tempo.
        """
        with self._lock:
            if filtros is not None:
                self.estado.filtros = filtros
            filtros = self.estado.filtros
            self._geracao += 1
            geracao = self._geracao
            self.estado.carregando = True

        logger.info(f"Atualização {geracao} iniciada para {filtros}")
        try:
            resultados = self._buscar(filtros)
            estatisticas = montar_estatisticas(resultados)
            linhas = montar_linhas(resultados)
        except Exception:
            logger.exception(f"Erro ao buscar dados (atualização {geracao})")
            self._finalizar(geracao)
            return False

        with self._lock:
            if geracao != self._geracao:
                logger.info(f"Atualização {geracao} descartada; geração atual é {self._geracao}")
                return False
            self.estado.estatisticas = estatisticas
            self.estado.linhas_tabela = linhas
            self.estado.resultados = list(resultados)
            self.estado.filtros_aplicados = filtros
            self.estado.carregando = False

        logger.info(f"Atualização {geracao} aplicada")
        return True

    def _finalizar(self, geracao: int) -> None:
        with self._lock:
            if geracao == self._geracao:
                self.estado.carregando = False
