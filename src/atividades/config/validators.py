"""
Funções de validação reutilizáveis.

Funções puras para validar dados de configuração antes do uso.
"""

from pathlib import Path
from typing import Any, Optional, Set

from atividades.core.exceptions import InvalidConfigException


def validate_positive_int(value: int, field_name: str, min_value: int = 1) -> None:
    """
    Valida se um número inteiro é maior ou igual a um mínimo.

    Args:
        value: O valor a ser validado.
        field_name: Nome do campo para mensagem de erro.
        min_value: Valor mínimo aceitável (default: 1).

    Raises:
        InvalidConfigException: Se o valor não for inteiro ou for menor que min_value.
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidConfigException(
            f"{field_name} deve ser um número inteiro.",
            details={"value": value, "type": type(value).__name__}
        )

    if value < min_value:
        raise InvalidConfigException(
            f"{field_name} deve ser >= {min_value}",
            details={"value": value, "min_value": min_value}
        )


def validate_choice(value: str, valid_choices: Set[str], field_name: str) -> None:
    """
    Valida se um valor único está dentro das opções permitidas.

    Args:
        value: Valor a validar.
        valid_choices: Conjunto de escolhas permitidas.
        field_name: Nome do campo.
    """
    if value not in valid_choices:
        raise InvalidConfigException(
            f"{field_name} inválido: {value}. Use um dos: {', '.join(sorted(valid_choices))}",
            details={"value": value, "valid_choices": sorted(valid_choices)}
        )


def validate_type(value: Any, expected_type: type, field_name: str) -> None:
    """
    Valida estritamente se o valor corresponde ao tipo esperado.
    Não aceita conversão implícita (ex: "true" para bool).

    Args:
        value: Valor a validar.
        expected_type: Tipo esperado (int, bool, str, float, list, dict).
        field_name: Nome do campo.

    Raises:
        InvalidConfigException: Se o tipo estiver incorreto.
    """
    if value is None:
        return  # Optionals são tratados pelo default do dataclass

    if not isinstance(value, expected_type):
        raise InvalidConfigException(
            f"{field_name} deve ser do tipo {expected_type.__name__}.",
            details={
                "value": value,
                "expected": expected_type.__name__,
                "got": type(value).__name__
            }
        )

    # bool é subclasse de int, mas queremos diferenciar
    if expected_type is int and isinstance(value, bool):
        raise InvalidConfigException(
            f"{field_name} deve ser um inteiro, não booleano.",
            details={"value": value, "expected": "int", "got": "bool"}
        )


def ensure_parent_exists(path: Optional[str | Path]) -> Optional[Path]:
    """
    Garante que o diretório pai de um arquivo exista.

    Args:
        path: Caminho do arquivo.

    Returns:
        Path: Caminho resolvido ou None se path for None.
    """
    if path is None:
        return None
    resolved = Path(path).expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved
