"""Logger do Atividades: terminal colorido via Rich e arquivo opcional.

Todos os escopos derivados com ``com_contexto`` escrevem no mesmo destino,
então reconfigurar o logger global vale para a aplicação inteira.

Uso típico::

    log = configurar_logging(config.logging)
    sessao_log = log.com_contexto(componente="sessao")
    sessao_log.info("Transição de sessão", evento="SIGNED_IN")

    with log.etapa("Exclusão de conta", usuario=user_id):
        ...

Campos com nomes de credencial (``password``, ``access_token`` etc.) nunca
são escritos; o valor aparece como ``***``.
"""

from __future__ import annotations

import atexit
import dataclasses
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, TextIO

from rich.console import Console
from rich.text import Text
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

from atividades.config.constants import LEVEL_VALUES
from atividades.config.models import LoggerConfig

# Nome do método -> nível declarado na configuração
_NIVEIS: Dict[str, str] = {
    "debug": "DEBUG",
    "info": "INFO",
    "sucesso": "SUCCESS",
    "aviso": "WARNING",
    "erro": "ERROR",
    "critico": "CRITICAL",
}

_CAMPOS_SENSIVEIS = frozenset(
    {
        "password",
        "senha",
        "access_token",
        "refresh_token",
        "token",
        "service_key",
        "supabase_key",
        "apikey",
    }
)
_MASCARA = "***"

_TEMA = Theme(
    {
        "log.time": "cyan dim",
        "log.debug": "dim",
        "log.info": "white",
        "log.sucesso": "bold green",
        "log.aviso": "yellow",
        "log.erro": "bold red",
        "log.critico": "white on red",
        "log.contexto": "bright_black",
    }
)

_TRACEBACK_INSTALADO = False


def mascarar(dados: Mapping[str, Any]) -> Dict[str, Any]:
    """Descarta valores ``None`` e esconde campos de credencial."""
    return {
        chave: (_MASCARA if chave.lower() in _CAMPOS_SENSIVEIS else valor)
        for chave, valor in dados.items()
        if valor is not None
    }


def _formatar_valor(valor: Any) -> str:
    if isinstance(valor, str) and valor and " " not in valor:
        return valor
    if isinstance(valor, (int, float)):
        return str(valor)
    return repr(valor)


def _pares(valores: Mapping[str, Any]) -> list[str]:
    return [f"{chave}={_formatar_valor(valores[chave])}" for chave in sorted(valores)]


class _Destino:
    """Console e arquivo compartilhados entre o logger global e seus escopos."""

    def __init__(self, config: LoggerConfig) -> None:
        self._arquivo: Optional[TextIO] = None
        self._atexit_registrado = False
        self.aplicar(config)

    def aplicar(self, config: LoggerConfig) -> None:
        global _TRACEBACK_INSTALADO

        self.fechar()
        self.config = config
        self.nivel_minimo = LEVEL_VALUES[config.nivel_minimo.upper()]
        if config.usar_cores:
            self.console = Console(theme=_TEMA, highlight=False, stderr=True)
        else:
            self.console = Console(highlight=False, no_color=True, stderr=True)

        if config.registrar_traceback_rico and not _TRACEBACK_INSTALADO:
            install_rich_traceback(show_locals=False)
            _TRACEBACK_INSTALADO = True

    def emite(self, metodo: str) -> bool:
        return LEVEL_VALUES[_NIVEIS[metodo]] >= self.nivel_minimo

    def escrever(self, metodo: str, mensagem: str, contexto: Mapping[str, Any], dados: Mapping[str, Any]) -> None:
        texto = Text()
        if self.config.mostrar_tempo:
            texto.append(datetime.now().strftime("%H:%M:%S"), style="log.time")
            texto.append("  ")
        estilo = f"log.{metodo}"
        texto.append(f"[{metodo.upper()}]  ", style=estilo)
        texto.append(mensagem, style=estilo)
        extras = _pares(contexto) + _pares(dados)
        if extras:
            texto.append("  " + " ".join(extras), style="log.contexto")
        self.console.print(texto)

        if self.config.arquivo_log:
            partes = [datetime.now().strftime("%Y-%m-%d %H:%M:%S"), metodo.upper(), mensagem]
            if contexto:
                partes.append("contexto=" + ",".join(_pares(contexto)))
            if dados:
                partes.append("dados=" + ",".join(_pares(dados)))
            handle = self._abrir()
            handle.write(" | ".join(partes) + "\n")
            handle.flush()

    def _abrir(self) -> TextIO:
        if self._arquivo is None:
            caminho = Path(self.config.arquivo_log)
            caminho.parent.mkdir(parents=True, exist_ok=True)
            self._arquivo = caminho.open("w" if self.config.sobrescrever_arquivo else "a", encoding="utf-8")
            if not self._atexit_registrado:
                atexit.register(self.fechar)
                self._atexit_registrado = True
        return self._arquivo

    def fechar(self) -> None:
        if self._arquivo is not None:
            self._arquivo.close()
            self._arquivo = None


class AtividadesLogger:
    """Logger com API em português; ``com_contexto`` deriva escopos."""

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        *,
        _destino: Optional[_Destino] = None,
        _contexto: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._destino = _destino or _Destino(config or LoggerConfig())
        self._contexto: Dict[str, Any] = dict(_contexto or {})

    def configure(self, config: LoggerConfig) -> None:
        """Reconfigura o destino compartilhado (vale para todos os escopos)."""
        self._destino.aplicar(config)

    def com_contexto(self, **dados: Any) -> AtividadesLogger:
        """Novo escopo que acrescenta ``dados`` a todas as mensagens."""
        return AtividadesLogger(_destino=self._destino, _contexto={**self._contexto, **mascarar(dados)})

    def close(self) -> None:
        self._destino.fechar()

    def debug(self, mensagem: str, **dados: Any) -> None:
        self._log("debug", mensagem, dados)

    def info(self, mensagem: str, **dados: Any) -> None:
        self._log("info", mensagem, dados)

    def sucesso(self, mensagem: str, **dados: Any) -> None:
        self._log("sucesso", mensagem, dados)

    def aviso(self, mensagem: str, **dados: Any) -> None:
        self._log("aviso", mensagem, dados)

    def erro(self, mensagem: str, **dados: Any) -> None:
        self._log("erro", mensagem, dados)

    def critico(self, mensagem: str, **dados: Any) -> None:
        self._log("critico", mensagem, dados)

    @contextmanager
    def etapa(
        self,
        titulo: str,
        mensagem_inicial: Optional[str] = None,
        mensagem_sucesso: Optional[str] = None,
        mensagem_falha: Optional[str] = None,
        **dados: Any,
    ) -> Iterator[None]:
        """
        Registra início, sucesso ou falha do bloco.

        A exceção do bloco é registrada em nível ERRO e propagada.
        """
        self._log("info", mensagem_inicial or f"Iniciando etapa: {titulo}", dados)
        try:
            yield
        except Exception as exc:
            self._log("erro", mensagem_falha or f"Falha na etapa: {titulo}", {**dados, "erro": str(exc)})
            raise
        self._log("sucesso", mensagem_sucesso or f"Etapa concluída: {titulo}", dados)

    def _log(self, metodo: str, mensagem: str, dados: Mapping[str, Any]) -> None:
        if self._destino.emite(metodo):
            self._destino.escrever(metodo, mensagem, self._contexto, mascarar(dados))


_logger_instance: Optional[AtividadesLogger] = None


def get_logger() -> AtividadesLogger:
    """Retorna a instância singleton do logger."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = AtividadesLogger()
    return _logger_instance


def configurar_logging(config: Optional[LoggerConfig] = None, **overrides: Any) -> AtividadesLogger:
    """
    Configura o logger global e o retorna.

    Args:
        config: Configuração a aplicar; padrão ``LoggerConfig()``
        **overrides: Campos que substituem os da configuração
    """
    config = config or LoggerConfig()
    if overrides:
        config = dataclasses.replace(config, **overrides)
    logger = get_logger()
    logger.configure(config)
    return logger


__all__ = ["AtividadesLogger", "configurar_logging", "get_logger", "mascarar"]
