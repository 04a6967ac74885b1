import pytest

from utils.formatacao import formatar_data, formatar_numero, normalizar_texto, titulo_periodo


class TestFormatarNumero:

    @pytest.mark.parametrize("numero, esperado", [
        (0, "0"),
        (999, "999"),
        (1000, "1.0k"),
        (1500, "1.5k"),
        (999_999, "1000.0k"),
        (1_000_000, "1.0M"),
        (2_500_000, "2.5M"),
    ])
    def test_faixas(self, numero, esperado):
        assert formatar_numero(numero) == esperado


class TestFormatarData:

    def test_iso_para_brasileiro(self):
        assert formatar_data("2022-07-01") == "01/07/2022"

    def test_titulo_periodo_usa_primeira_e_ultima_data(self):
        datas = ["2022-06-28", "2022-06-29", "2022-07-04"]
        assert titulo_periodo(datas) == "28/06/2022 - 04/07/2022"

    def test_titulo_periodo_vazio(self):
        assert titulo_periodo([]) == ""


class TestNormalizarTexto:

    def test_remove_acentos_e_caixa(self):
        assert normalizar_texto("Ceará") == normalizar_texto("ceara") == "ceara"

    @pytest.mark.parametrize("texto, esperado", [
        ("Maranhão", "maranhao"),
        ("PARAÍBA", "paraiba"),
        ("Piauí", "piaui"),
        ("Rio Grande do Norte", "rio grande do norte"),
    ])
    def test_estados_do_nordeste(self, texto, esperado):
        assert normalizar_texto(texto) == esperado

    @pytest.mark.parametrize("vazio", [None, ""])
    def test_vazio_vira_string_vazia(self, vazio):
        assert normalizar_texto(vazio) == ""
