"""
Adapters Module

Contains:
- auth: Backends de autenticação (Supabase e memória)
- repositories: Persistência de sessão e de tarefas
- http: API FastAPI
"""
