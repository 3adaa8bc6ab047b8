"""
Configuração centralizada de logging para a aplicação
Configura o logger AWS Lambda Powertools (JSON estruturado) escrevendo em stderr,
para não misturar logs com o resumo do clima impresso em stdout
"""
import logging
import os
import sys
from aws_lambda_powertools import Logger

DEFAULT_SERVICE_NAME = 'weather-cli'
DEFAULT_LOG_LEVEL = 'WARNING'
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def resolve_log_level(level: str = None) -> str:
    """Nível em maiúsculas; valor desconhecido volta ao padrão (WARNING)"""
    if level and level.strip().upper() in VALID_LOG_LEVELS:
        return level.strip().upper()
    return DEFAULT_LOG_LEVEL


def get_logger(service_name: str = None, child: bool = False) -> Logger:
    """
    Retorna uma instância configurada do Logger

    Args:
        service_name: Nome do serviço (se None, usa POWERTOOLS_SERVICE_NAME do ambiente)
        child: Se True, cria um child logger (herda handler e nível do principal)

    Returns:
        Logger configurado
    """
    if service_name is None:
        service_name = os.environ.get('POWERTOOLS_SERVICE_NAME', DEFAULT_SERVICE_NAME)

    if child:
        child_logger = Logger(service=service_name, child=True)
        # Powertools fixa INFO no child; NOTSET delega o nível ao logger principal
        logging.getLogger(child_logger.name).setLevel(logging.NOTSET)
        return child_logger

    return Logger(
        service=service_name,
        level=resolve_log_level(os.environ.get('LOG_LEVEL')),
        stream=sys.stderr
    )


def set_log_level(level: str) -> None:
    """Ajusta o nível do logger principal; child loggers herdam via NOTSET"""
    logger.setLevel(resolve_log_level(level))
    prefix = f"{logger.name}."
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith(prefix):
            logging.getLogger(name).setLevel(logging.NOTSET)


# Logger principal da aplicação
logger = get_logger()
