"""Ponto de entrada da Interface de Linha de Comando (CLI) do Atividades."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from atividades.config import get_config
from atividades.container import ApplicationContainer, get_container
from atividades.core.exceptions import AtividadesBaseException, AuthError
from atividades.core.models import Session
from atividades.core.services import GatedView, SessionManager

T = TypeVar("T")

# --- Configuração da Aplicação CLI ---
app = typer.Typer(
    name="atividades",
    help="CLI para gerenciar a sessão e servir a API do Atividades.",
    add_completion=False,
    rich_markup_mode="rich",
)

# --- Instâncias Globais ---
console = Console()


def _executar(operacao: Callable[[ApplicationContainer, SessionManager], Awaitable[T]]) -> T:
    """Inicia o gerenciador de sessão, executa a operação e encerra tudo."""
    container = get_container()

    async def _run() -> T:
        manager = container.session_manager()
        async with manager:
            return await operacao(container, manager)

    try:
        return asyncio.run(_run())
    except AuthError as exc:
        console.print(f"[bold red]❌ {exc.message}[/bold red]")
        raise typer.Exit(code=1)
    except AtividadesBaseException as exc:
        console.print(f"[bold red]❌ {exc}[/bold red]")
        raise typer.Exit(code=1)


def _tabela_sessao(session: Session) -> Table:
    table = Table(title="Sessão Atual", show_header=True, header_style="bold magenta")
    table.add_column("Email")
    table.add_column("ID do Usuário")
    table.add_column("Expira em")
    table.add_row(session.email, session.user_id, str(session.expires_at or "-"))
    return table


@app.command(help="Entra com email e senha.")
def login(
    email: Annotated[str, typer.Option("-e", "--email", prompt=True, help="Email da conta.")],
    password: Annotated[
        str, typer.Option("-p", "--password", prompt=True, hide_input=True, help="Senha da conta.")
    ],
) -> None:
    async def _login(container: ApplicationContainer, manager: SessionManager) -> Optional[Session]:
        await manager.sign_in(email, password)
        return manager.current()

    session = _executar(_login)
    if session is None:
        console.print("[yellow]Credenciais aceitas; sessão ainda não confirmada pelo backend.[/yellow]")
        return
    console.print(f"[bold green]✅ Sessão iniciada para {session.email}[/bold green]")


@app.command(help="Cria uma nova conta.")
def signup(
    email: Annotated[str, typer.Option("-e", "--email", prompt=True, help="Email da nova conta.")],
    password: Annotated[
        str,
        typer.Option(
            "-p", "--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Senha da nova conta."
        ),
    ],
) -> None:
    async def _signup(container: ApplicationContainer, manager: SessionManager) -> bool:
        return await manager.sign_up(email, password)

    if _executar(_signup):
        console.print("[bold green]✅ Conta criada! Confirme pelo link enviado ao seu email.[/bold green]")
    else:
        console.print("[bold green]✅ Conta criada e sessão iniciada.[/bold green]")


@app.command(help="Encerra a sessão atual.")
def logout() -> None:
    async def _logout(container: ApplicationContainer, manager: SessionManager) -> None:
        await manager.sign_out()

    _executar(_logout)
    console.print("[bold green]✅ Sessão encerrada.[/bold green]")


@app.command(help="Mostra o usuário da sessão persistida.")
def whoami() -> None:
    async def _whoami(container: ApplicationContainer, manager: SessionManager):
        with GatedView(manager, render=_tabela_sessao, redirect=lambda: None) as view:
            return view.output

    table = _executar(_whoami)
    if table is None:
        console.print("[yellow]Nenhuma sessão ativa. Use [b]atividades login[/b].[/yellow]")
        raise typer.Exit(code=1)
    console.print(table)


@app.command("delete-account", help="[bold red]Exclui definitivamente a conta logada.[/bold red]")
def delete_account(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Confirma sem perguntar.")] = False,
) -> None:
    if not yes:
        yes = typer.confirm("Are you sure you want to delete your account? This action cannot be undone.")

    async def _delete(container: ApplicationContainer, manager: SessionManager) -> None:
        await container.account_service().delete_account(confirm=yes)

    _executar(_delete)
    console.print("[bold green]✅ Conta excluída.[/bold green]")


@app.command(help="Sobe a API HTTP com uvicorn.")
def serve(
    host: Annotated[Optional[str], typer.Option(help="Host de escuta.")] = None,
    port: Annotated[Optional[int], typer.Option(help="Porta de escuta.")] = None,
) -> None:
    import uvicorn

    from atividades.adapters.http import create_app

    config = get_config()
    host = host or config.server.host
    port = port or config.server.port
    console.print(f"[bold cyan]🚀 Servindo em http://{host}:{port}[/bold cyan]")
    uvicorn.run(create_app(get_container()), host=host, port=port)


if __name__ == "__main__":
    app()
