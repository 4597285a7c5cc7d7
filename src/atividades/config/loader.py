"""
Carregador de configuração (Loader).

Responsável por ler o arquivo YAML e aplicar overrides via variáveis de
ambiente, retornando uma instância válida de AppConfig.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from atividades.config.constants import DEFAULTS
from atividades.config.models import AppConfig
from atividades.core.exceptions import ConfigurationException


class ConfigLoaderException(ConfigurationException):
    """Erro ao carregar configurações."""
    pass


class ConfigLoader:
    """Carregador de configurações."""

    DEFAULT_FILENAME = DEFAULTS["config_file"]

    @classmethod
    def load(cls, path: Optional[Path | str] = None, *, use_dotenv: bool = True) -> AppConfig:
        """
        Carrega a configuração completa.

        Ordem de precedência:
        1. Defaults do código
        2. Arquivo YAML
        3. Variáveis de Ambiente (ATIVIDADES_*, SUPABASE_*)

        Args:
            path: Caminho opcional para o arquivo config.yaml
            use_dotenv: Se True, carrega o arquivo .env antes de ler o ambiente.

        Returns:
            AppConfig: Configuração validada e carregada.

        Raises:
            ConfigLoaderException: Se houver erro de parsing ou IO.
        """
        if use_dotenv:
            load_dotenv()

        config_path = Path(path) if path else Path(cls.DEFAULT_FILENAME)

        # 1. Carregar do Arquivo
        file_data = cls._read_yaml(config_path)

        # 2. Aplicar Variáveis de Ambiente
        merged_data = cls._apply_env_overrides(file_data)

        # 3. Construir e Validar Modelo
        try:
            return AppConfig.from_dict(merged_data)
        except Exception as e:
            raise ConfigLoaderException(f"Erro ao validar configuração: {e}", cause=e) from e

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """Lê arquivo YAML com segurança."""
        if not path.exists():
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoaderException(f"Erro ao ler arquivo {path}: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise ConfigLoaderException(f"Arquivo {path} deve conter um mapeamento YAML")
        return data

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Aplica overrides via variáveis de ambiente."""
        # Cópia para não mutar o original
        out = {k: (dict(v) if isinstance(v, dict) else v) for k, v in data.items()}

        # Mapeamento: ENV_VAR -> (path.no.dict, type_func)
        overrides = {
            "ATIVIDADES_DEBUG": (["debug"], cls._parse_bool),
            "ATIVIDADES_ENVIRONMENT": (["environment"], str),
            "SUPABASE_URL": (["api", "supabase_url"], str),
            "SUPABASE_KEY": (["api", "supabase_key"], str),
            "SUPABASE_SERVICE_ROLE_KEY": (["api", "supabase_service_key"], str),
            "ATIVIDADES_SESSION_FILE": (["session", "storage_file"], str),
            "ATIVIDADES_PERSIST_SESSION": (["session", "persist_session"], cls._parse_bool),
            "ATIVIDADES_HOST": (["server", "host"], str),
            "ATIVIDADES_PORT": (["server", "port"], int),
            "LOG_LEVEL": (["logging", "nivel_minimo"], str),
            "LOG_FILE": (["logging", "arquivo_log"], str),
            "LOG_COLOR": (["logging", "usar_cores"], cls._parse_bool),
            "LOG_RICH_TRACEBACK": (["logging", "registrar_traceback_rico"], cls._parse_bool),
        }

        for env_var, (keys, type_func) in overrides.items():
            val = os.getenv(env_var)
            if val is None or not val.strip():
                continue
            try:
                cls._set_nested(out, keys, type_func(val.strip()))
            except ValueError as e:
                raise ConfigLoaderException(
                    f"Valor inválido em {env_var}: {val!r}",
                    details={"env": env_var},
                    cause=e,
                ) from e

        return out

    @staticmethod
    def _set_nested(data: Dict[str, Any], keys: list, value: Any) -> None:
        """Helper para setar valor em dict aninhado."""
        current = data
        for key in keys[:-1]:
            current = current.setdefault(key, {})
        current[keys[-1]] = value

    @staticmethod
    def _parse_bool(val: str) -> bool:
        """Parse seguro de boolean."""
        return val.lower() in ("true", "1", "yes", "on", "sim")
