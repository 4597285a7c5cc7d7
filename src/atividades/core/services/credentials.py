"""
Funções utilitárias para credenciais.

Normalização e validação local feitas antes de qualquer chamada ao backend.
"""

from __future__ import annotations

from atividades.core.exceptions import InvalidCredentialsError


def normalize_credentials(email: str | None, senha: str | None) -> tuple[str, str]:
    """
    Normaliza credenciais. Só o email perde os espaços nas bordas; a senha
    segue exatamente como digitada.

    Args:
        email: Email a normalizar
        senha: Senha a normalizar

    Returns:
        Tupla (email_normalizado, senha_normalizada)
    """
    email_normalizado = str(email or "").strip()
    senha_normalizada = str(senha or "")
    return email_normalizado, senha_normalizada


def is_valid_email(email: str) -> bool:
    """
    Valida se o email está em formato minimamente aceitável.

    Args:
        email: Email a validar

    Returns:
        True se válido, False caso contrário
    """
    if not email or email.count("@") != 1:
        return False
    local, dominio = email.split("@")
    return bool(local and dominio)


def validar_credenciais(email: str | None, senha: str | None) -> tuple[str, str]:
    """
    Normaliza e valida credenciais.

    Raises:
        InvalidCredentialsError: Se o email for inválido ou a senha estiver em branco.
    """
    email_normalizado, senha_normalizada = normalize_credentials(email, senha)
    if not is_valid_email(email_normalizado):
        raise InvalidCredentialsError("Email inválido", details={"email": email_normalizado})
    if not senha_normalizada.strip():
        raise InvalidCredentialsError("Senha não pode estar vazia")
    return email_normalizado, senha_normalizada
