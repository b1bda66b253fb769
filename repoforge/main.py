import os
import json
from typing import Mapping
import requests
import typer
from dotenv import load_dotenv
from rich import box
from rich.table import Table
from rich.console import Console
from rich.panel import Panel

from repoforge.clients.errors import APIError
from repoforge.core.factory import PROVIDERS, new_provider
from repoforge.core.provider import AuthOptions, CreateRepoOptions, ProviderError, ProviderOptions
from repoforge.core.utils import coalesce, env_bool, load_config

app = typer.Typer(
    help="Создание удалённых репозиториев в GitLab / GitFlic",
    no_args_is_help=False,
    add_completion=False,
    rich_markup_mode=None,
)
console = Console()

# provider -> (base url, token, username)
ENV_KEYS = {
    "gitlab": ("GITLAB_BASE_URL", "GITLAB_TOKEN", "GITLAB_USERNAME"),
    "gitflic": ("GITFLIC_API_BASE_URL", "GITFLIC_API_TOKEN", "GITFLIC_USERNAME"),
}


@app.callback(invoke_without_command=True)
def root(ctx: typer.Context):
    if ctx.invoked_subcommand is None:
        typer.echo("Укажите подкоманду. Например: repoforge create my-repo")
        raise typer.Exit(2)


def build_provider_options(env: Mapping[str, str], provider_type: str, cfg: dict) -> ProviderOptions:
    """
    Собирает ProviderOptions из переменных окружения (.env).
    GitLab:  GITLAB_BASE_URL, GITLAB_TOKEN, GITLAB_USERNAME
    GitFlic: GITFLIC_API_BASE_URL, GITFLIC_API_TOKEN, GITFLIC_USERNAME, GITFLIC_OWNER_ALIAS_TYPE
    Общие:   VERIFY_TLS, CA_CERT, HTTP_TIMEOUT
    """
    kind = (provider_type or "").strip().lower()
    if kind not in PROVIDERS:
        raise ValueError(f"Неизвестный провайдер: {provider_type} (доступны: {', '.join(sorted(PROVIDERS))})")

    host_key, token_key, user_key = ENV_KEYS[kind]
    token = env.get(token_key)
    if not token:
        raise ValueError(f"Не задан {token_key}")

    try:
        timeout = float(env.get("HTTP_TIMEOUT") or 30)
    except ValueError:
        raise ValueError(f"HTTP_TIMEOUT должен быть числом: {env.get('HTTP_TIMEOUT')}")
    if timeout <= 0:
        raise ValueError(f"HTTP_TIMEOUT должен быть больше нуля: {env.get('HTTP_TIMEOUT')}")

    return ProviderOptions(
        type=kind,
        host=(env.get(host_key) or "").rstrip("/"),
        auth=AuthOptions(username=env.get(user_key) or "", password=token),
        verify=env_bool(env, "VERIFY_TLS", True),
        ca_cert=env.get("CA_CERT") or None,
        timeout=timeout,
        owner_type=(env.get("GITFLIC_OWNER_ALIAS_TYPE") or "TEAM").upper(),
        naming=cfg.get("naming") or {},
    )


@app.command()
def create(
    names: list[str] = typer.Argument(..., help="Имена репозиториев (можно несколько)"),
    owner: str = typer.Option(None, "--owner", "-o", help="Владелец: пользователь или организация"),
    provider: str = typer.Option(None, "--provider", "-p", help="gitlab или gitflic (переопределяет REPOFORGE_PROVIDER)"),
    private: bool = typer.Option(None, "--private/--public", help="Видимость (переопределяет VISIBILITY_PRIVATE)"),
    description: str = typer.Option("", "--description", "-d", help="Описание репозитория"),
):
    load_dotenv()

    env = os.environ
    try:
        cfg = load_config()
        provider_type = coalesce(provider, env.get("REPOFORGE_PROVIDER"), cfg.get("provider"), "gitlab")
        opts = build_provider_options(env, provider_type, cfg)
        prov = new_provider(opts)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(2)

    owner = coalesce(owner, env.get("REPO_OWNER"), opts.auth.username)
    if not owner:
        typer.echo("Укажите --owner или задайте REPO_OWNER в .env", err=True)
        raise typer.Exit(2)
    if private is None:
        private = env_bool(env, "VISIBILITY_PRIVATE", True)

    console.rule(f"[bold]Создание репозиториев: {opts.type}[/bold]")
    info_tbl = Table(show_header=False, box=None)
    info_tbl.add_row("Провайдер", opts.type)
    info_tbl.add_row("API", opts.host or "(по умолчанию)")
    info_tbl.add_row("Владелец", owner)
    info_tbl.add_row("Visibility", "private" if private else "public")
    console.print(info_tbl)

    report = {"provider": opts.type, "owner": owner, "created": 0, "errors": 0, "items": []}
    for name in names:
        item = {"repo": name, "status": "PENDING", "url": "", "message": ""}
        try:
            url = prov.create_repository(
                CreateRepoOptions(name=name, owner=owner, private=private, description=description)
            )
        except (ProviderError, APIError, requests.RequestException) as e:
            console.print(f"[red]Ошибка создания {name}[/red]: {e}")
            report["errors"] += 1
            item["status"] = "FAILED"
            item["message"] = str(e)
        else:
            console.print(f"[green]Создан[/green] {name}: {url}")
            report["created"] += 1
            item["status"] = "OK"
            item["url"] = url
        report["items"].append(item)

    res_tbl = Table(box=box.SIMPLE_HEAVY)
    res_tbl.add_column("Репозиторий", style="bold")
    res_tbl.add_column("Статус")
    res_tbl.add_column("URL / ошибка")
    for it in report["items"]:
        res_tbl.add_row(it["repo"], it["status"], it["url"] or it["message"])
    console.print(res_tbl)
    console.print(Panel(
        f"[green]Создано:[/green] {report['created']}    [red]Ошибок:[/red] {report['errors']}",
        title="Сводка",
        border_style="blue",
    ))

    report_path = (cfg.get("report") or {}).get("path")
    if report_path:
        try:
            with open(report_path, "w", encoding="utf-8") as f:
                json.dump(report, f, ensure_ascii=False, indent=2)
        except OSError as e:
            console.print(f"[yellow]Не удалось записать отчёт {report_path}[/yellow]: {e}")

    if report["errors"]:
        raise typer.Exit(1)


@app.command("providers")
def providers_cmd():
    """Список поддерживаемых провайдеров."""
    for name in sorted(PROVIDERS):
        typer.echo(name)


@app.command("help")
def help_cmd():
    """Краткая справка по командам."""
    typer.echo(
        "Использование:\n"
        "  repoforge create NAME [NAME...] [ОПЦИИ]\n"
        "  repoforge providers\n\n"
        "Опции create:\n"
        "  -o, --owner TEXT          Владелец (пользователь или организация)\n"
        "  -p, --provider TEXT       gitlab | gitflic (переопределяет REPOFORGE_PROVIDER)\n"
        "  --private / --public      Видимость (переопределяет VISIBILITY_PRIVATE)\n"
        "  -d, --description TEXT    Описание\n\n"
        "Примеры:\n"
        "  repoforge create my-service -o my-group --private\n"
        "  repoforge create a b c -p gitflic -o my-team\n"
    )


if __name__ == "__main__":
    app()
