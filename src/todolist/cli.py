"""todolist CLI - task list manager."""

import json
import logging
import sys
import threading
from datetime import timedelta

import click
from apscheduler.schedulers.background import BackgroundScheduler

from .adapters.file_kv import FileKeyValueStore
from .adapters.storage import KeyValueTaskStore
from .config import Config, load_config
from .controller import TodoController
from .core.tasks import TaskIndexError
from .core.view import TaskFilter, TaskSort
from .notifications import Notifier
from .render import format_stats, render_view, view_to_json

logger = logging.getLogger(__name__)

FILTER_CHOICES = [f.value for f in TaskFilter]
SORT_CHOICES = [s.value for s in TaskSort]

SHELL_HELP = """\
Commands:
  text <words>       Set the task text
  deadline [<when>]  Set the deadline (e.g. 2024-01-05T18:00), empty clears it
  submit             Add the task, or save the one being edited
  add <words>        Add a task in one step
  edit <n>           Load task n into the form
  cancel             Stop editing and clear the form
  toggle <n>         Mark task n done / not done
  delete <n>         Delete task n
  filter <f>         all | completed | notCompleted
  sort <s>           default | alphabetical | completed
  help               Show this help
  quit               Exit"""


def build_controller(config: Config, scheduler=None) -> TodoController:
    """Wire the file-backed store and notifier into a controller."""
    store = KeyValueTaskStore(FileKeyValueStore(config.storage_path))
    notifier = Notifier(scheduler=scheduler, duration=config.notification_seconds)
    return TodoController(
        store,
        notifier=notifier,
        due_soon_window=timedelta(hours=config.due_soon_hours),
    )


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _text(words: tuple[str, ...]) -> str:
    return " ".join(words)


@click.group()
@click.version_option()
@click.option("--storage", type=click.Path(dir_okay=False), help="Storage file to use")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, storage: str | None, verbose: bool):
    """todolist - add, edit, complete and sort tasks."""
    config = load_config()
    if storage:
        config.storage_file = storage

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING),
    )
    ctx.obj = config


@main.command()
@click.argument("words", nargs=-1, required=True)
@click.option("--deadline", "-d", default=None, help="Deadline, e.g. 2024-01-05T18:00")
@click.pass_obj
def add(config: Config, words: tuple[str, ...], deadline: str | None):
    """Add a task."""
    controller = build_controller(config)
    task = controller.add(_text(words), deadline)
    if task is None:
        click.echo("Nothing to add.")
        return
    click.echo(controller.notifier.current)


@main.command("list")
@click.option("--filter", "-f", "task_filter", type=click.Choice(FILTER_CHOICES), default="all")
@click.option("--sort", "-s", "task_sort", type=click.Choice(SORT_CHOICES), default="default")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_tasks(config: Config, task_filter: str, task_sort: str, as_json: bool):
    """List tasks."""
    controller = build_controller(config)
    controller.set_filter(task_filter)
    controller.set_sort(task_sort)
    view = controller.view()

    if as_json:
        click.echo(json.dumps(view_to_json(view), indent=2))
        return

    for line in render_view(view, color=config.color):
        click.echo(line)


@main.command()
@click.argument("number", type=click.IntRange(min=1))
@click.argument("words", nargs=-1, required=True)
@click.option("--deadline", "-d", default=None, help="New deadline; empty string clears it")
@click.pass_obj
def edit(config: Config, number: int, words: tuple[str, ...], deadline: str | None):
    """Change the text (and optionally deadline) of task NUMBER."""
    controller = build_controller(config)
    try:
        task = controller.edit(number - 1, _text(words), deadline)
    except TaskIndexError as e:
        _fail(e)
    if task is None:
        click.echo("Nothing to save.")
        return
    click.echo(controller.notifier.current)


@main.command()
@click.argument("number", type=click.IntRange(min=1))
@click.pass_obj
def toggle(config: Config, number: int):
    """Mark task NUMBER done or not done."""
    controller = build_controller(config)
    try:
        task = controller.toggle_completed(number - 1)
    except TaskIndexError as e:
        _fail(e)
    state = "done" if task.completed else "not done"
    click.echo(f"{task.text}: {state}")


@main.command()
@click.argument("number", type=click.IntRange(min=1))
@click.pass_obj
def delete(config: Config, number: int):
    """Delete task NUMBER."""
    controller = build_controller(config)
    try:
        controller.remove(number - 1)
    except TaskIndexError as e:
        _fail(e)
    click.echo(controller.notifier.current)


main.add_command(delete, "rm")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def stats(config: Config, as_json: bool):
    """Show completion statistics."""
    view = build_controller(config).view()
    if as_json:
        click.echo(json.dumps({"completed": view.stats.completed, "total": view.stats.total}))
    else:
        click.echo(format_stats(view.stats))


# ============== Interactive shell ==============


def _position(arg: str) -> int:
    """Parse a 1-based task number into an index."""
    try:
        number = int(arg)
    except ValueError:
        raise ValueError(f"expected a task number, got {arg!r}") from None
    if number < 1:
        raise ValueError(f"task numbers start at 1, got {number}")
    return number - 1


def run_shell_command(controller: TodoController, line: str) -> bool:
    """
    Apply one shell input line to the controller.

    Returns False when the user asked to quit. Errors are reported and the
    shell keeps running.
    """
    command, _, arg = line.strip().partition(" ")
    arg = arg.strip()

    try:
        match command.lower():
            case "":
                pass
            case "text":
                controller.set_text(arg)
            case "deadline":
                controller.set_deadline(arg)
            case "submit":
                controller.commit()
            case "add":
                controller.add(arg)
            case "edit":
                controller.begin_edit(_position(arg))
            case "cancel":
                controller.cancel_edit()
            case "toggle":
                controller.toggle_completed(_position(arg))
            case "delete" | "rm":
                controller.remove(_position(arg))
            case "filter":
                controller.set_filter(arg)
            case "sort":
                controller.set_sort(arg)
            case "help" | "?":
                click.echo(SHELL_HELP)
            case "quit" | "exit" | "q":
                return False
            case _:
                click.echo(f"Unknown command: {command}. Type 'help' for commands.")
    except (TaskIndexError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
    return True


def _render_screen(controller: TodoController, color: bool) -> None:
    for line in render_view(controller.view(), color=color):
        click.echo(line)
    session = controller.state.session
    deadline = session.deadline or "-"
    click.echo(f"Text: {session.text or '-'} | Deadline: {deadline} | [{controller.primary_action_label}]")


@main.command()
@click.pass_obj
def shell(config: Config):
    """Interactive task list."""
    scheduler = BackgroundScheduler()
    controller = build_controller(config, scheduler=scheduler)

    changed = threading.Event()
    changed.set()
    controller.subscribe(lambda state: changed.set())

    scheduler.start()
    logger.info("Scheduler started")
    click.echo("Type 'help' for commands.")
    try:
        while True:
            if changed.is_set():
                changed.clear()
                _render_screen(controller, config.color)
            try:
                line = click.prompt(">", default="", show_default=False, prompt_suffix=" ")
            except click.Abort:
                click.echo()
                break
            if not run_shell_command(controller, line):
                break
    finally:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
