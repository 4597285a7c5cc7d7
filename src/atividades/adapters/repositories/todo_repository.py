"""
Repositórios da atividade de tarefas.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from atividades.config.constants import DEFAULTS
from atividades.core.exceptions import AtividadesBaseException, DatabaseException, wrap_exception
from atividades.core.interfaces import TodoRepository
from atividades.core.models import Todo


class SupabaseTodoRepository(TodoRepository):
    """
    Tarefas na tabela ``todos`` do Supabase.

    Usa o cliente já autenticado do backend de auth, então as políticas de
    linha do banco enxergam o usuário logado. Toda consulta também filtra
    por ``user_id`` explicitamente.
    """

    def __init__(
        self,
        backend: Any,
        table_name: str = DEFAULTS["todos_table"],
        page_size: int = DEFAULTS["page_size"],
        logger: Any = None,
    ) -> None:
        self.backend = backend
        self.table_name = table_name
        self.page_size = page_size
        if not logger:
            from atividades.infrastructure.logging import get_logger
            logger = get_logger().com_contexto(componente="todos")
        self.logger = logger

    def _tabela(self):
        return self.backend.client.table(self.table_name)

    async def listar(self, user_id: str) -> List[Todo]:
        try:
            response = await (
                self._tabela()
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .limit(self.page_size)
                .execute()
            )
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise wrap_exception(exc, DatabaseException, "Erro ao listar tarefas", usuario=user_id)
        return [Todo.from_dict(row) for row in response.data or []]

    async def obter(self, user_id: str, todo_id: str) -> Optional[Todo]:
        try:
            response = await (
                self._tabela().select("*").eq("id", todo_id).eq("user_id", user_id).limit(1).execute()
            )
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise wrap_exception(exc, DatabaseException, "Erro ao buscar tarefa", usuario=user_id, tarefa=todo_id)
        linhas = response.data or []
        return Todo.from_dict(linhas[0]) if linhas else None

    async def adicionar(self, user_id: str, title: str) -> None:
        try:
            await self._tabela().insert({"user_id": user_id, "title": title}).execute()
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise wrap_exception(exc, DatabaseException, "Erro ao adicionar tarefa", usuario=user_id)

    async def definir_conclusao(self, user_id: str, todo_id: str, is_complete: bool) -> None:
        try:
            await (
                self._tabela()
                .update({"is_complete": is_complete})
                .eq("id", todo_id)
                .eq("user_id", user_id)
                .execute()
            )
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise wrap_exception(exc, DatabaseException, "Erro ao atualizar tarefa", usuario=user_id, tarefa=todo_id)

    async def remover(self, user_id: str, todo_id: str) -> None:
        try:
            await self._tabela().delete().eq("id", todo_id).eq("user_id", user_id).execute()
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise wrap_exception(exc, DatabaseException, "Erro ao remover tarefa", usuario=user_id, tarefa=todo_id)


class InMemoryTodoRepository(TodoRepository):
    """
    Implementação em memória (não persistente entre reinícios).
    Usada junto do backend de auth em memória.
    """

    def __init__(self, page_size: int = DEFAULTS["page_size"]) -> None:
        self.page_size = page_size
        self._rows: Dict[str, Dict[str, Any]] = {}
        self._ordem = 0

    async def listar(self, user_id: str) -> List[Todo]:
        linhas = [row for row in self._rows.values() if row["user_id"] == user_id]
        linhas.sort(key=lambda row: (row["created_at"], row["_ordem"]), reverse=True)
        return [Todo.from_dict(row) for row in linhas[: self.page_size]]

    async def obter(self, user_id: str, todo_id: str) -> Optional[Todo]:
        row = self._linha(user_id, todo_id)
        return Todo.from_dict(row) if row is not None else None

    async def adicionar(self, user_id: str, title: str) -> None:
        self._ordem += 1
        todo_id = str(uuid.uuid4())
        self._rows[todo_id] = {
            "id": todo_id,
            "user_id": user_id,
            "title": title,
            "is_complete": False,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "_ordem": self._ordem,
        }

    async def definir_conclusao(self, user_id: str, todo_id: str, is_complete: bool) -> None:
        row = self._linha(user_id, todo_id)
        if row is not None:
            row["is_complete"] = is_complete

    async def remover(self, user_id: str, todo_id: str) -> None:
        if self._linha(user_id, todo_id) is not None:
            del self._rows[todo_id]

    def _linha(self, user_id: str, todo_id: str) -> Optional[Dict[str, Any]]:
        # Linhas de outro usuário se comportam como inexistentes
        row = self._rows.get(todo_id)
        if row is None or row["user_id"] != user_id:
            return None
        return row
