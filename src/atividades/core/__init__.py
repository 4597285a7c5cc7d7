"""
Núcleo do Atividades.

- atividades.core.models -> Entidades (Session, Identity, Todo)
- atividades.core.interfaces -> Portas (AuthBackend, SessionStorage, TodoRepository)
- atividades.core.services -> Regras de negócio (SessionManager, GatedView)
- atividades.core.exceptions -> Hierarquia de exceções
"""
