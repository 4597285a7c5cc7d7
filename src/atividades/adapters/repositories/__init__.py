"""Repositórios (persistência)."""

from .session_storage import FileSessionStorage, InMemorySessionStorage
from .todo_repository import InMemoryTodoRepository, SupabaseTodoRepository

__all__ = [
    "FileSessionStorage",
    "InMemorySessionStorage",
    "InMemoryTodoRepository",
    "SupabaseTodoRepository",
]
