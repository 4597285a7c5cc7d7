"""
Modelos de dados de configuração.

Define a estrutura tipada das configurações usando Dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from atividades.config.constants import DEFAULTS, LEVEL_VALUES, VALID_ENVIRONMENTS
from atividades.config.validators import (
    ensure_parent_exists,
    validate_choice,
    validate_positive_int,
    validate_type,
)


@dataclass
class LoggerConfig:
    """Configuração para o sistema de logging."""

    nome: str = "atividades"
    nivel_minimo: str = "INFO"
    arquivo_log: Optional[Path] = None
    sobrescrever_arquivo: bool = False
    mostrar_tempo: bool = True
    registrar_traceback_rico: bool = True
    usar_cores: bool = True

    def __post_init__(self):
        validate_choice(self.nivel_minimo.upper(), set(LEVEL_VALUES.keys()), "nivel_minimo")
        if self.arquivo_log:
            self.arquivo_log = ensure_parent_exists(self.arquivo_log)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LoggerConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "nivel_minimo" in clean: validate_type(clean["nivel_minimo"], str, "logging.nivel_minimo")
        if "usar_cores" in clean: validate_type(clean["usar_cores"], bool, "logging.usar_cores")
        if "mostrar_tempo" in clean: validate_type(clean["mostrar_tempo"], bool, "logging.mostrar_tempo")

        if clean.get("arquivo_log"):
            clean["arquivo_log"] = Path(clean["arquivo_log"])

        return cls(**clean)


@dataclass
class APIConfig:
    """Credenciais do projeto Supabase."""

    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_key: str = ""
    default_timeout: int = DEFAULTS["timeout_api"]

    def __post_init__(self):
        validate_positive_int(self.default_timeout, "default_timeout")

    @property
    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def has_service_key(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> APIConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        for campo in ("supabase_url", "supabase_key", "supabase_service_key"):
            if campo in clean: validate_type(clean[campo], str, f"api.{campo}")
        if "default_timeout" in clean: validate_type(clean["default_timeout"], int, "api.default_timeout")

        return cls(**clean)


@dataclass
class SessionConfig:
    """Configuração da sessão de autenticação."""

    persist_session: bool = True
    auto_refresh_token: bool = True
    storage_file: Path = Path(DEFAULTS["session_file"])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SessionConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "persist_session" in clean: validate_type(clean["persist_session"], bool, "session.persist_session")
        if "auto_refresh_token" in clean: validate_type(clean["auto_refresh_token"], bool, "session.auto_refresh_token")
        if clean.get("storage_file"):
            clean["storage_file"] = Path(clean["storage_file"])

        return cls(**clean)


@dataclass
class ServerConfig:
    """Configuração do servidor HTTP."""

    host: str = "127.0.0.1"
    port: int = 8000
    reload: bool = False

    def __post_init__(self):
        validate_positive_int(self.port, "port")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ServerConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "port" in clean: validate_type(clean["port"], int, "server.port")
        if "reload" in clean: validate_type(clean["reload"], bool, "server.reload")

        return cls(**clean)


@dataclass
class ActivitiesConfig:
    """Tabelas e limites das atividades."""

    todos_table: str = DEFAULTS["todos_table"]
    page_size: int = DEFAULTS["page_size"]

    def __post_init__(self):
        validate_positive_int(self.page_size, "page_size")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ActivitiesConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "todos_table" in clean: validate_type(clean["todos_table"], str, "activities.todos_table")
        if "page_size" in clean: validate_type(clean["page_size"], int, "activities.page_size")

        return cls(**clean)


@dataclass
class AppConfig:
    """
    Configuração raiz da aplicação.
    Agrega todas as outras configurações.
    """

    app_name: str = "Atividades"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = "prod"

    api: Optional[APIConfig] = None
    session: Optional[SessionConfig] = None
    logging: Optional[LoggerConfig] = None
    server: Optional[ServerConfig] = None
    activities: Optional[ActivitiesConfig] = None

    def __post_init__(self):
        validate_choice(self.environment, VALID_ENVIRONMENTS, "environment")

        if self.api is None: self.api = APIConfig()
        if self.session is None: self.session = SessionConfig()
        if self.logging is None: self.logging = LoggerConfig()
        if self.server is None: self.server = ServerConfig()
        if self.activities is None: self.activities = ActivitiesConfig()

    @property
    def is_dev(self) -> bool:
        return self.environment == "dev"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        api = APIConfig.from_dict(data.get("api") or {})
        session = SessionConfig.from_dict(data.get("session") or {})
        logging = LoggerConfig.from_dict(data.get("logging") or {})
        server = ServerConfig.from_dict(data.get("server") or {})
        activities = ActivitiesConfig.from_dict(data.get("activities") or {})

        nested_keys = {"api", "session", "logging", "server", "activities"}
        root_args = {k: v for k, v in data.items() if k in cls.__annotations__ and k not in nested_keys}

        if "debug" in root_args: validate_type(root_args["debug"], bool, "debug")
        if "environment" in root_args: validate_type(root_args["environment"], str, "environment")

        return cls(
            **root_args,
            api=api,
            session=session,
            logging=logging,
            server=server,
            activities=activities,
        )
