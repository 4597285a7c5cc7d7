"""
Módulo de Configuração do Atividades.

Este pacote centraliza toda a lógica de configuração do sistema.
Use `get_config()` para obter a instância global da configuração.
"""

from typing import Optional

from atividades.config.models import (
    AppConfig,
    APIConfig,
    SessionConfig,
    LoggerConfig,
    ServerConfig,
    ActivitiesConfig,
)
from atividades.config.loader import ConfigLoader, ConfigLoaderException
from atividades.config.constants import ACTIVITIES, PUBLIC_PATHS, LOGIN_PATH

# Singleton global
_CONFIG_INSTANCE: Optional[AppConfig] = None


def get_config(reload: bool = False, config_path: str = None) -> AppConfig:
    """
    Obtém a instância global de configuração via Singleton.

    Args:
        reload: Se True, recarrega do disco.
        config_path: Caminho opcional para arquivo de config.

    Returns:
        AppConfig: Instância da configuração atual.
    """
    global _CONFIG_INSTANCE

    if _CONFIG_INSTANCE is None or reload:
        _CONFIG_INSTANCE = ConfigLoader.load(config_path)

    return _CONFIG_INSTANCE


def set_config(config: AppConfig) -> None:
    """Substitui a configuração global (útil em testes)."""
    global _CONFIG_INSTANCE
    _CONFIG_INSTANCE = config


def reset_config() -> None:
    """Descarta a configuração global; o próximo get_config() recarrega."""
    global _CONFIG_INSTANCE
    _CONFIG_INSTANCE = None


__all__ = [
    "get_config",
    "set_config",
    "reset_config",
    "AppConfig",
    "APIConfig",
    "SessionConfig",
    "LoggerConfig",
    "ServerConfig",
    "ActivitiesConfig",
    "ConfigLoader",
    "ConfigLoaderException",
    "ACTIVITIES",
    "PUBLIC_PATHS",
    "LOGIN_PATH",
]
