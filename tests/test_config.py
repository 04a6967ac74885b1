from utils.config import get_configuracao, get_timeout


class TestConfiguracao:

    def test_le_variavel_de_ambiente(self, monkeypatch):
        monkeypatch.setenv("PAINEL_TESTE", "valor")
        assert get_configuracao("PAINEL_TESTE") == "valor"

    def test_padrao_quando_ausente(self, monkeypatch):
        monkeypatch.delenv("PAINEL_TESTE", raising=False)
        assert get_configuracao("PAINEL_TESTE", "padrao") == "padrao"

    def test_timeout_ausente_e_none(self, monkeypatch):
        monkeypatch.delenv("PAINEL_TIMEOUT", raising=False)
        assert get_timeout("PAINEL_TIMEOUT") is None

    def test_timeout_em_segundos(self, monkeypatch):
        monkeypatch.setenv("PAINEL_TIMEOUT", "2.5")
        assert get_timeout("PAINEL_TIMEOUT") == 2.5
