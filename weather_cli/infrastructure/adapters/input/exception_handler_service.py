"""
Exception Handler Service
Centraliza a conversão de exceções em mensagem de erro (stderr) e exit code
"""
import sys
from typing import Optional, TextIO

from weather_cli.domain.exceptions import (
    CacheIOException,
    ConfigurationError,
    InvalidCredentialException,
    LocationNotFoundException,
    MalformedResponseException,
    ProviderUnavailableException,
)
from weather_cli.shared.config.logger_config import logger as app_logger


class ExitCode:
    """Códigos de saída do processo"""
    SUCCESS = 0
    FAILURE = 1


class ExceptionHandlerService:
    """
    Service para centralizar tratamento de exceções do CLI
    Responsável por escrever a mensagem ao usuário e devolver o exit code
    """
    logger = app_logger

    def __init__(self, stream: Optional[TextIO] = None, logger=app_logger):
        self.stream = stream
        if logger:
            ExceptionHandlerService.logger = logger

    def _write(self, *lines: str) -> None:
        stream = self.stream or sys.stderr
        for line in lines:
            print(line, file=stream)

    def handle(self, ex: Exception) -> int:
        """Despacha para o handler específico do tipo da exceção"""
        handlers = (
            (ConfigurationError, self.handle_configuration_error),
            (LocationNotFoundException, self.handle_location_not_found),
            (InvalidCredentialException, self.handle_invalid_credential),
            (ProviderUnavailableException, self.handle_provider_unavailable),
            (MalformedResponseException, self.handle_malformed_response),
            (CacheIOException, self.handle_cache_io_error),
            (ValueError, self.handle_value_error),
        )
        for exception_type, handler in handlers:
            if isinstance(ex, exception_type):
                return handler(ex)
        return self.handle_unexpected_error(ex)

    def handle_configuration_error(self, ex: ConfigurationError) -> int:
        """Credencial ausente - nenhuma chamada de rede foi feita"""
        self.logger.warning("Configuration error", error=str(ex), details=ex.details)
        self._write(f"Error: {ex.message}")
        signup_url = ex.details.get("signup_url")
        if signup_url:
            self._write(f"You can get a free API key from {signup_url}")
        return ExitCode.FAILURE

    def handle_location_not_found(self, ex: LocationNotFoundException) -> int:
        self.logger.warning("Location not found", error=str(ex), details=ex.details)
        self._write(f"Error: City '{ex.location_query}' not found.")
        return ExitCode.FAILURE

    def handle_invalid_credential(self, ex: InvalidCredentialException) -> int:
        self.logger.warning("Invalid credential", error=str(ex), details=ex.details)
        self._write("Error: Invalid API key. Please update your API key.")
        return ExitCode.FAILURE

    def handle_provider_unavailable(self, ex: ProviderUnavailableException) -> int:
        self.logger.error("Provider unavailable", error=str(ex), details=ex.details)
        self._write(f"Error connecting to weather service: {ex.message}")
        return ExitCode.FAILURE

    def handle_malformed_response(self, ex: MalformedResponseException) -> int:
        self.logger.error("Malformed provider response", error=str(ex), details=ex.details)
        detail = f" ({ex.details['field']})" if 'field' in ex.details else ""
        self._write(f"Error: weather service returned an invalid response{detail}.")
        return ExitCode.FAILURE

    def handle_cache_io_error(self, ex: CacheIOException) -> int:
        """Só chega aqui em --clear-cache/--prune-cache; no fetch vira warning"""
        self.logger.error("Cache IO error", error=str(ex), details=ex.details)
        error = ex.details.get("error")
        self._write(f"Error: {ex.message}: {error}" if error else f"Error: {ex.message}")
        return ExitCode.FAILURE

    def handle_value_error(self, ex: ValueError) -> int:
        self.logger.warning("Validation error", error=str(ex))
        self._write(f"Error: {ex}")
        return ExitCode.FAILURE

    def handle_unexpected_error(self, ex: Exception) -> int:
        self.logger.error("Unexpected error", error=str(ex), exc_info=True)
        self._write("Error: an unexpected error occurred.")
        return ExitCode.FAILURE
