"""
Camada HTTP (FastAPI).

Use ``create_app()`` para obter a aplicação.
"""

from .main import create_app

__all__ = ["create_app"]
