import logging

from utils.config import LOG_LEVEL

FORMATO_LOG = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(nome: str = "painel") -> logging.Logger:
    logging.basicConfig(level=str(LOG_LEVEL).upper(), format=FORMATO_LOG)
    return logging.getLogger(nome)
