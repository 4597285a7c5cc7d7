"""
Entidades da atividade de tarefas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Todo:
    """Linha da tabela ``todos``, sempre pertencente a um usuário."""

    id: str
    user_id: str
    title: str
    is_complete: bool = False
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> Todo:
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            title=row.get("title") or "",
            is_complete=bool(row.get("is_complete", False)),
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "is_complete": self.is_complete,
            "created_at": self.created_at,
        }
