"""Infraestrutura transversal: logging."""

from atividades.infrastructure.logging import AtividadesLogger, configurar_logging, get_logger

__all__ = ["AtividadesLogger", "configurar_logging", "get_logger"]
