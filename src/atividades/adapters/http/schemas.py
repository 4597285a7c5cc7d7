"""Modelos Pydantic expostos pela camada de API."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from atividades.core.models import AuthState, Session, Todo


class CredentialsRequest(BaseModel):
    """Dados para login ou cadastro."""

    email: str = Field(..., description="Email da conta.")
    password: str = Field(..., description="Senha da conta.")


class OperationResponse(BaseModel):
    status: str
    message: Optional[str] = None


class SignUpResponse(BaseModel):
    status: str = "created"
    confirmation_required: bool = Field(
        ..., description="True quando a conta precisa ser confirmada por email antes do login."
    )
    message: str
    session_id: Optional[str] = None


class IdentityResponse(BaseModel):
    id: str
    email: str


class SessionResponse(BaseModel):
    """Estado da sessão visto pelo cliente. Tokens do backend nunca são expostos."""

    state: AuthState
    signed_in: bool
    user: Optional[IdentityResponse] = None
    expires_at: Optional[int] = None
    session_id: Optional[str] = Field(
        default=None, description="Credencial da requisição; também enviada no cookie HttpOnly"
    )

    @classmethod
    def from_session(cls, state: AuthState, session: Optional[Session]) -> SessionResponse:
        if session is None:
            return cls(state=state, signed_in=False)
        return cls(
            state=state,
            signed_in=True,
            user=IdentityResponse(id=session.user_id, email=session.email),
            expires_at=session.expires_at,
        )


class NavLink(BaseModel):
    label: str
    href: str


class NavbarResponse(BaseModel):
    visible: bool
    brand: str = "Multiple Activities"
    links: List[NavLink] = Field(default_factory=list)
    user_email: Optional[str] = None
    actions: List[str] = Field(default_factory=list)


class HomeResponse(BaseModel):
    signed_in: bool
    title: str
    message: str
    navbar: Optional[NavbarResponse] = None


class TodoCreateRequest(BaseModel):
    title: str = Field(..., description="Título da tarefa; espaços nas bordas são removidos.")


class TodoResponse(BaseModel):
    id: str
    title: str
    is_complete: bool
    created_at: Optional[str] = None

    @classmethod
    def from_todo(cls, todo: Todo) -> TodoResponse:
        return cls(id=todo.id, title=todo.title, is_complete=todo.is_complete, created_at=todo.created_at)


class TodoListResponse(BaseModel):
    todos: List[TodoResponse]
    total: int
    completed: int

    @classmethod
    def from_todos(cls, todos: List[Todo]) -> TodoListResponse:
        return cls(
            todos=[TodoResponse.from_todo(todo) for todo in todos],
            total=len(todos),
            completed=sum(1 for todo in todos if todo.is_complete),
        )
