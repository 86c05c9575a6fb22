"""Command-line client: sign up, pick a career, browse steps and resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from apps.generation import CurriculumService, FallbackCatalog, ResourceService, build_client
from careerpath.core.config import AppConfig, default_config_path, load_app_config
from careerpath.core.errors import AccountError
from careerpath.core.events import GenerationEventLog
from careerpath.core.models import RESOURCE_CATEGORIES, CareerStep, ResourceBundle
from user_store import SessionContext, SessionHolder, SQLiteKeyValueStore

app = typer.Typer(help="Generate a career learning path and browse resources for each step.")
console = Console()

CATEGORY_LABELS = {
    "videos": "Videos",
    "documents": "Documentation",
    "projects": "Projects",
    "practice": "Practice",
}


@dataclass
class CliState:
    config: AppConfig
    session: SessionHolder
    curriculum: CurriculumService
    resources: ResourceService


def build_state(config: AppConfig) -> CliState:
    store = SQLiteKeyValueStore(config.storage.path)
    event_log = GenerationEventLog(config.events_path) if config.events_path else None
    client = build_client(config.generation)
    return CliState(
        config=config,
        session=SessionHolder(store),
        curriculum=CurriculumService(client, event_log=event_log),
        resources=ResourceService(client, event_log=event_log),
    )


def career_display_name(career: str) -> str:
    return " ".join(part.capitalize() for part in career.replace("_", "-").split("-") if part)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="App config YAML (defaults to $CAREERPATH_CONFIG, else built-in defaults).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    if isinstance(ctx.obj, CliState):
        return
    load_dotenv()
    try:
        config = load_app_config(config_path or default_config_path())
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    ctx.obj = build_state(config)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


def _require_user(state: CliState):
    user = state.session.get_current()
    if user is None:
        _fail("Not logged in. Run `careerpath login` or `careerpath signup` first.")
    return user


def _step_at(steps: List[CareerStep], position: int) -> CareerStep:
    if position < 1 or position > len(steps):
        _fail(f"Step {position} is out of range (1-{len(steps)}).")
    return steps[position - 1]


@app.command()
def signup(
    ctx: typer.Context,
    name: str = typer.Option(..., prompt=True),
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
    confirm_password: str = typer.Option(..., "--confirm-password", prompt="Confirm password", hide_input=True),
) -> None:
    """Create an account and log in."""
    state = _state(ctx)
    try:
        user = state.session.signup(name, email, password, confirm_password)
    except AccountError as exc:
        _fail(str(exc))
    console.print(f"[green]Account created successfully![/green] Welcome, {user.name}!")


@app.command()
def login(
    ctx: typer.Context,
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Log in with an existing account."""
    state = _state(ctx)
    try:
        user = state.session.login(email, password)
    except AccountError as exc:
        _fail(str(exc))
    console.print(f"[green]Login successful![/green] Welcome, {user.name}!")


@app.command()
def logout(ctx: typer.Context) -> None:
    """Forget the current user."""
    _state(ctx).session.logout()
    console.print("Logged out.")


@app.command()
def whoami(ctx: typer.Context) -> None:
    """Show the current user and selected career."""
    user = _require_user(_state(ctx))
    career = career_display_name(user.selected_career) if user.selected_career else "none"
    console.print(f"{user.name} <{user.email}> | career: {career} | joined {user.join_date:%Y-%m-%d}")


@app.command()
def careers() -> None:
    """List career tracks that have a built-in default curriculum."""
    for career in FallbackCatalog().known_careers():
        console.print(f"- {career} ({career_display_name(career)})")


@app.command()
def choose(ctx: typer.Context, career: str = typer.Argument(..., help="Career identifier, e.g. web-development.")) -> None:
    """Select the career track to generate a learning path for."""
    state = _state(ctx)
    _require_user(state)
    state.session.select_career(career)
    console.print(f"[green]Selected {career_display_name(career)}![/green] Run `careerpath steps` to see your path.")


@app.command()
def steps(
    ctx: typer.Context,
    refresh: bool = typer.Option(False, "--refresh", help="Generate a new path instead of reusing the saved one."),
) -> None:
    """Show the learning path for the selected career with progress."""
    state = _state(ctx)
    user = _require_user(state)
    if not user.selected_career:
        _fail("No career selected. Run `careerpath choose <career>` first.")

    path = [] if refresh else state.session.get_steps()
    if not path:
        with console.status("Generating your learning path..."):
            outcome = state.curriculum.generate(user.selected_career)
        if outcome.used_fallback:
            console.print("[dim]Error generating learning path. Using default curriculum.[/dim]")
        path = outcome.steps
        state.session.set_steps(path)

    _print_steps(user.selected_career, state.session.load_context())


def _print_steps(career: str, context: SessionContext) -> None:
    path = context.steps
    console.print(f"[bold]{career_display_name(career)} Learning Path[/bold]")
    console.print(f"Complete this {len(path)}-step learning journey to master {career.replace('-', ' ')}.")
    table = Table(show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Step")
    table.add_column("Duration")
    table.add_column("Skills")
    table.add_column("Done", justify="center")
    for index, step in enumerate(path):
        table.add_row(
            str(index + 1),
            step.title,
            step.duration,
            ", ".join(step.skills),
            "x" if context.is_completed(index) else "",
        )
    console.print(table)
    console.print(f"Progress: {context.progress_percent:.0f}%")


@app.command()
def resources(
    ctx: typer.Context,
    position: int = typer.Argument(..., help="Step number as listed by `careerpath steps` (starting at 1)."),
) -> None:
    """Show videos, documentation, projects and practice platforms for a step."""
    state = _state(ctx)
    user = _require_user(state)
    path = state.session.get_steps()
    if not path:
        _fail("No learning path yet. Run `careerpath steps` first.")
    step = _step_at(path, position)
    state.session.set_current_step(step)

    with console.status(f"Finding resources for {step.title}..."):
        outcome = state.resources.resources_for_step(user.selected_career or "", step)
    if outcome.used_fallback:
        console.print("[dim]Error generating resources. Using default resources.[/dim]")
    console.print(f"[bold]Resources: {step.title}[/bold]")
    console.print(step.description)
    _print_resources(outcome.resources)


def _print_resources(bundle: ResourceBundle) -> None:
    for category in RESOURCE_CATEGORIES:
        items = getattr(bundle, category)
        table = Table(title=CATEGORY_LABELS[category], title_justify="left")
        table.add_column("Title")
        table.add_column("Difficulty")
        table.add_column("Duration")
        table.add_column("Link")
        for item in items:
            table.add_row(item.title, item.difficulty, item.duration, item.url or "")
        console.print(table)


@app.command()
def complete(
    ctx: typer.Context,
    position: int = typer.Argument(..., help="Step number as listed by `careerpath steps` (starting at 1)."),
) -> None:
    """Mark a step as completed."""
    state = _state(ctx)
    _require_user(state)
    path = state.session.get_steps()
    if not path:
        _fail("No learning path yet. Run `careerpath steps` first.")
    step = _step_at(path, position)
    state.session.complete_step(position - 1)
    context = state.session.load_context()
    console.print(f"[green]Completed:[/green] {step.title} | progress {context.progress_percent:.0f}%")


@app.command()
def serve(ctx: typer.Context) -> None:  # pragma: no cover - starts a server
    """Run the portal backend (static pages + generation API)."""
    import uvicorn

    portal = _state(ctx).config.portal
    uvicorn.run("apps.portal_backend.main:app", host=portal.host, port=portal.port)


if __name__ == "__main__":  # pragma: no cover
    app()
