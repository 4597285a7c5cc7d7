"""
Implementações do armazenamento de credenciais persistidas.

Seguem o protocolo de storage assíncrono do cliente de auth do Supabase
(``get_item``/``set_item``/``remove_item``), então podem ser entregues
diretamente ao cliente.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from atividades.core.exceptions import RepositoryException, wrap_exception
from atividades.core.interfaces import SessionStorage
from atividades.infrastructure.logging import get_logger


class InMemorySessionStorage(SessionStorage):
    """
    Implementação em memória (não persistente entre reinícios).
    Usada quando a persistência de sessão está desativada.
    """

    def __init__(self) -> None:
        self._storage: Dict[str, str] = {}

    async def get_item(self, key: str) -> Optional[str]:
        return self._storage.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._storage[key] = value

    async def remove_item(self, key: str) -> None:
        self._storage.pop(key, None)


class FileSessionStorage(SessionStorage):
    """
    Persiste as chaves do cliente de auth em um arquivo JSON.

    Permite que um reinício do processo retome a sessão anterior.
    """

    def __init__(self, caminho: Path | str) -> None:
        self.caminho = Path(caminho)
        self.logger = get_logger()

    async def get_item(self, key: str) -> Optional[str]:
        return self._ler().get(key)

    async def set_item(self, key: str, value: str) -> None:
        dados = self._ler()
        dados[key] = value
        self._gravar(dados)

    async def remove_item(self, key: str) -> None:
        dados = self._ler()
        if key in dados:
            del dados[key]
            self._gravar(dados)

    def _ler(self) -> Dict[str, str]:
        if not self.caminho.exists():
            return {}
        try:
            conteudo = self.caminho.read_text(encoding="utf-8")
        except OSError as exc:
            raise wrap_exception(exc, RepositoryException, "Erro ao ler sessão persistida", arquivo=str(self.caminho))

        if not conteudo.strip():
            return {}
        try:
            dados = json.loads(conteudo)
        except json.JSONDecodeError:
            # Arquivo corrompido equivale a nenhuma sessão salva
            self.logger.aviso("Arquivo de sessão inválido; ignorando", arquivo=str(self.caminho))
            return {}
        if not isinstance(dados, dict):
            return {}
        return {str(k): str(v) for k, v in dados.items()}

    def _gravar(self, dados: Dict[str, str]) -> None:
        try:
            self.caminho.parent.mkdir(parents=True, exist_ok=True)
            temporario = self.caminho.with_suffix(self.caminho.suffix + ".tmp")
            temporario.write_text(json.dumps(dados, ensure_ascii=False, indent=2), encoding="utf-8")
            temporario.replace(self.caminho)
        except OSError as exc:
            raise wrap_exception(exc, RepositoryException, "Erro ao gravar sessão persistida", arquivo=str(self.caminho))
