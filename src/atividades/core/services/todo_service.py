"""
Serviço da atividade de tarefas.

Cada mutação é seguida de uma nova leitura, devolvendo a lista atualizada
do usuário.
"""

from __future__ import annotations

from typing import Any, List, Optional

from atividades.core.exceptions import MissingRequiredFieldException
from atividades.core.interfaces import TodoRepository
from atividades.core.models import Todo


class TodoService:
    """Fluxo buscar/alterar/rebuscar das tarefas, sempre escopado por usuário."""

    def __init__(self, repository: TodoRepository, logger: Optional[Any] = None) -> None:
        self.repository = repository
        if not logger:
            from atividades.infrastructure.logging import get_logger
            logger = get_logger().com_contexto(componente="todos")
        self.logger = logger

    async def listar(self, user_id: str) -> List[Todo]:
        return await self.repository.listar(user_id)

    async def adicionar(self, user_id: str, title: Optional[str]) -> List[Todo]:
        titulo = (title or "").strip()
        if not titulo:
            raise MissingRequiredFieldException("Título da tarefa é obrigatório", details={"campo": "title"})
        await self.repository.adicionar(user_id, titulo)
        self.logger.debug("Tarefa adicionada", usuario=user_id)
        return await self.listar(user_id)

    async def alternar(self, user_id: str, todo_id: str) -> List[Todo]:
        """Inverte o estado de conclusão da tarefa indicada; id desconhecido não altera nada."""
        todo = await self.repository.obter(user_id, todo_id)
        if todo is not None:
            await self.repository.definir_conclusao(user_id, todo_id, not todo.is_complete)
        return await self.listar(user_id)

    async def remover(self, user_id: str, todo_id: str) -> List[Todo]:
        await self.repository.remover(user_id, todo_id)
        self.logger.debug("Tarefa removida", usuario=user_id, tarefa=todo_id)
        return await self.listar(user_id)
