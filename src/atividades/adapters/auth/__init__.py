"""Backends de autenticação."""

from .memory_auth import InMemoryAuthBackend
from .supabase_auth import SupabaseAuthBackend

__all__ = ["InMemoryAuthBackend", "SupabaseAuthBackend"]
