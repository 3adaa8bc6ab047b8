"""
Validators Utility
Validação de entrada do usuário antes de tocar cache ou rede
"""
from typing import Type


class GenericValidator:
    """Validador genérico para reduzir duplicação de código"""

    @staticmethod
    def validate_not_empty(
        value: str,
        param_name: str,
        exception_class: Type[Exception] = ValueError
    ) -> str:
        """
        Valida se string não está vazia

        Args:
            value: String a validar
            param_name: Nome do parâmetro (para mensagem de erro)
            exception_class: Classe de exceção a lançar

        Returns:
            String validada e trimmed

        Raises:
            exception_class: Se string vazia
        """
        if not value or not value.strip():
            raise exception_class(f"{param_name} cannot be empty")
        return value.strip()


class LocationValidator:
    """Validador da consulta de localidade (nome da cidade)"""

    @staticmethod
    def validate(location_query: str) -> str:
        """Retorna a consulta sem espaços nas pontas; vazia lança ValueError"""
        return GenericValidator.validate_not_empty(location_query, "location")

    @staticmethod
    def normalize_key(location_query: str) -> str:
        """
        Chave de cache: consulta trimmed e case-folded

        "Paris", "PARIS" e "  paris " resultam em "paris".
        """
        return LocationValidator.validate(location_query).casefold()
