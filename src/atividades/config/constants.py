"""
Constantes globais do Atividades.

Centraliza valores 'hardcoded' (ambientes, níveis de log, rotas e
atividades) para evitar duplicação entre módulos.
"""

from typing import Dict, FrozenSet, List, Set, Tuple

# ============================================================================
# Definições de Domínio
# ============================================================================

# Ambientes de execução suportados
VALID_ENVIRONMENTS: Set[str] = {"dev", "staging", "prod"}

# Atividades exibidas na barra de navegação (rótulo, rota)
ACTIVITIES: List[Tuple[str, str]] = [
    ("Todo", "/activities/todos"),
    ("Drive", "/activities/drive"),
    ("Food", "/activities/food"),
    ("Pokémon", "/activities/pokemon"),
    ("Notes", "/activities/notes"),
]

# Rotas que nunca exibem a barra de navegação
PUBLIC_PATHS: FrozenSet[str] = frozenset({"/", "/auth"})

# Rota de login para onde as views protegidas redirecionam
LOGIN_PATH: str = "/"

# ============================================================================
# Logging
# ============================================================================

LEVEL_VALUES: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "SUCCESS": 25,  # Nível customizado
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

# ============================================================================
# Padrões
# ============================================================================

DEFAULTS = {
    "config_file": "config.yaml",
    "session_file": ".atividades/session.json",
    "todos_table": "todos",
    "page_size": 100,
    "timeout_api": 30,
}
