"""
Click command definitions for the mjprompt CLI.

Every invocation is one session: the stored prompt is loaded, the command
applies its change, and the document is saved again on the way out.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from mjprompt import (
    AXES,
    Algorithm,
    Aspect,
    PromptConfig,
    PromptSession,
    PromptStore,
    Settings,
    ValidationError,
    __version__,
)
from mjprompt.cli import progress
from mjprompt.cli.handlers import run_with_error_handling
from mjprompt.cli.utils import to_index
from mjprompt.logging_config import configure_logging, get_verbosity_from_env

ALGORITHM_NAMES = [algorithm.value for algorithm in Algorithm]
ASPECT_NAMES = [aspect.value for aspect in Aspect]


@contextmanager
def _open_session(ctx: click.Context) -> Iterator[PromptSession]:
    """Load the stored prompt and save it when the block exits."""
    session = PromptSession.open(ctx.obj["store"])
    try:
        yield session
    finally:
        session.close()


def _quiet(ctx: click.Context) -> bool:
    return bool(ctx.obj.get("quiet"))


def _report(ctx: click.Context, session: PromptSession, message: str) -> None:
    if _quiet(ctx):
        return
    progress.print_success(message)
    progress.console.print(session.command, style="dim", markup=False, highlight=False)


@click.group(
    help=f"""Build Midjourney /imagine commands from saved style choices.

\b
Version: {__version__}
"""
)
@click.version_option(version=__version__, package_name="mjprompt")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the prompt document (default: MJPROMPT_DATA_DIR or the user data dir).",
)
@click.option("--quiet", "-q", is_flag=True, help="Only print the command or errors.")
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase verbosity: -v also logs commands, -vv shows store detail.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, quiet: bool, verbose_count: int) -> None:
    verbose_level = min(verbose_count, 2) if verbose_count > 0 else get_verbosity_from_env()
    configure_logging(verbose_level=verbose_level, quiet=quiet)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    def load_settings() -> None:
        settings = Settings.from_env()
        if data_dir is not None:
            settings.data_dir = data_dir
        ctx.obj["settings"] = settings
        ctx.obj["store"] = PromptStore(settings.document_path)

    run_with_error_handling(load_settings, quiet=quiet)


@cli.command()
@click.option("--text", "-t", default="", help="Subject of the image (not saved).")
@click.option("--options", "show_options", is_flag=True, help="Also list every editable option.")
@click.pass_context
def show(ctx: click.Context, text: str, show_options: bool) -> None:
    """Print the compiled command."""

    def do_show() -> None:
        with _open_session(ctx) as session:
            session.config.set_text(text)
            command = session.command
            if not _quiet(ctx):
                progress.print_command_summary(session.config, command)
                if show_options:
                    progress.print_options(session.config)
            click.echo(command)

    run_with_error_handling(do_show, quiet=_quiet(ctx))


@cli.command()
@click.option("--text", "-t", required=True, help="Subject of the image (not saved).")
@click.pass_context
def copy(ctx: click.Context, text: str) -> None:
    """Compile the command and copy it to the clipboard."""

    def do_copy() -> None:
        with _open_session(ctx) as session:
            session.config.set_text(text)
            if not session.can_copy:
                raise ValidationError("Enter a prompt to copy the command.", field="text")
            status = session.copy()
            if session.last_error is not None:
                raise session.last_error
            if not _quiet(ctx):
                progress.print_success(status)
            click.echo(session.command)

    run_with_error_handling(do_copy, quiet=_quiet(ctx))


@cli.command(name="set")
@click.option("--algorithm", type=click.Choice(ALGORITHM_NAMES), help="Rendering algorithm.")
@click.option("--aspect", type=click.Choice(ASPECT_NAMES), help="Aspect preset.")
@click.option("--stylize", type=int, help="Stylize strength (625-60000).")
@click.option("--reset-stylize", is_flag=True, help="Restore the default stylize strength.")
@click.option("--seed", type=int, help="Seed value (enables --sameseed).")
@click.option("--use-seed/--no-seed", default=None, help="Emit or omit --sameseed.")
@click.option("--video/--no-video", default=None, help="Emit or omit --video.")
@click.option(
    "--copy-on-change/--no-copy-on-change",
    default=None,
    help="Copy the command whenever it changes (UI preference).",
)
@click.pass_context
def set_(
    ctx: click.Context,
    algorithm: str | None,
    aspect: str | None,
    stylize: int | None,
    reset_stylize: bool,
    seed: int | None,
    use_seed: bool | None,
    video: bool | None,
    copy_on_change: bool | None,
) -> None:
    """Change algorithm, aspect, stylize, seed and flags."""

    def do_set() -> None:
        with _open_session(ctx) as session:
            config = session.config
            # Aspect first so an algorithm switch can still remap it
            if aspect is not None:
                config.set_aspect(Aspect(aspect))
            if algorithm is not None:
                config.set_algorithm(Algorithm(algorithm))
                if aspect is not None and config.aspect.value != aspect and not _quiet(ctx):
                    progress.print_warning(
                        f"{aspect} is not available for {algorithm}; using {config.aspect.value}."
                    )
            if reset_stylize:
                config.reset_stylize()
            elif stylize is not None:
                config.set_stylize(stylize)
            if seed is not None:
                config.set_seed(seed)
                config.set_use_seed(True)
            if use_seed is not None:
                config.set_use_seed(use_seed)
            if video is not None:
                config.set_video(video)
            if copy_on_change is not None:
                config.set_copy_on_change(copy_on_change)
            _report(ctx, session, "Settings updated.")

    run_with_error_handling(do_set, quiet=_quiet(ctx))


@cli.command()
@click.argument("axis", type=click.Choice(AXES))
@click.argument("value", required=False)
@click.pass_context
def choose(ctx: click.Context, axis: str, value: str | None) -> None:
    """Select VALUE on AXIS; omit VALUE to clear the selection."""

    def do_choose() -> None:
        with _open_session(ctx) as session:
            choice_set = session.config.axis(axis)
            if value is not None and value not in choice_set.selectable():
                raise ValidationError(
                    f"{value!r} is not an option for {axis}. "
                    f"Choose one of: {', '.join(choice_set.selectable())}.",
                    field=axis,
                )
            choice_set.select(value)
            _report(ctx, session, f"{axis}: {value if value is not None else 'none'}")

    run_with_error_handling(do_choose, quiet=_quiet(ctx))


@cli.group()
def option() -> None:
    """Edit the candidate options of an axis."""


@option.command(name="add")
@click.argument("axis", type=click.Choice(AXES))
@click.argument("text", required=False, default="")
@click.pass_context
def option_add(ctx: click.Context, axis: str, text: str) -> None:
    """Append an option to AXIS."""

    def do_add() -> None:
        with _open_session(ctx) as session:
            choice_set = session.config.axis(axis)
            choice_set.add_option()
            choice_set.edit_option(len(choice_set.options) - 1, text)
            _report(ctx, session, f"Added option {len(choice_set.options)} to {axis}.")

    run_with_error_handling(do_add, quiet=_quiet(ctx))


@option.command(name="remove")
@click.argument("axis", type=click.Choice(AXES))
@click.argument("position", type=int)
@click.pass_context
def option_remove(ctx: click.Context, axis: str, position: int) -> None:
    """Remove the option at POSITION (1-based) from AXIS."""

    def do_remove() -> None:
        with _open_session(ctx) as session:
            choice_set = session.config.axis(axis)
            index = to_index(position, len(choice_set.options), axis)
            if len(choice_set.options) == 1:
                raise ValidationError(f"{axis} must keep at least one option.", field=axis)
            choice_set.remove_option(index)
            _report(ctx, session, f"Removed option {position} from {axis}.")

    run_with_error_handling(do_remove, quiet=_quiet(ctx))


@option.command(name="edit")
@click.argument("axis", type=click.Choice(AXES))
@click.argument("position", type=int)
@click.argument("text")
@click.pass_context
def option_edit(ctx: click.Context, axis: str, position: int, text: str) -> None:
    """Replace the option at POSITION (1-based) on AXIS with TEXT."""

    def do_edit() -> None:
        with _open_session(ctx) as session:
            choice_set = session.config.axis(axis)
            index = to_index(position, len(choice_set.options), axis)
            choice_set.edit_option(index, text)
            _report(ctx, session, f"Edited option {position} on {axis}.")

    run_with_error_handling(do_edit, quiet=_quiet(ctx))


@cli.group()
def theme() -> None:
    """Edit the theme list."""


@theme.command(name="add")
@click.argument("label", required=False, default="")
@click.option("--disabled", is_flag=True, help="Add the theme switched off.")
@click.pass_context
def theme_add(ctx: click.Context, label: str, disabled: bool) -> None:
    """Append a theme (enabled unless --disabled)."""

    def do_add() -> None:
        with _open_session(ctx) as session:
            themes = session.config.themes
            themes.add()
            themes.edit_label(len(themes) - 1, label)
            if disabled:
                themes.set_enabled(len(themes) - 1, False)
            _report(ctx, session, f"Added theme {len(themes)}.")

    run_with_error_handling(do_add, quiet=_quiet(ctx))


@theme.command(name="remove")
@click.argument("position", type=int)
@click.pass_context
def theme_remove(ctx: click.Context, position: int) -> None:
    """Remove the theme at POSITION (1-based)."""

    def do_remove() -> None:
        with _open_session(ctx) as session:
            themes = session.config.themes
            themes.remove(to_index(position, len(themes), "themes"))
            _report(ctx, session, f"Removed theme {position}.")

    run_with_error_handling(do_remove, quiet=_quiet(ctx))


@theme.command(name="toggle")
@click.argument("position", type=int)
@click.pass_context
def theme_toggle(ctx: click.Context, position: int) -> None:
    """Switch the theme at POSITION (1-based) on or off."""

    def do_toggle() -> None:
        with _open_session(ctx) as session:
            themes = session.config.themes
            index = to_index(position, len(themes), "themes")
            themes.toggle(index)
            label, enabled = themes.entries[index]
            _report(ctx, session, f"Theme {label!r} {'enabled' if enabled else 'disabled'}.")

    run_with_error_handling(do_toggle, quiet=_quiet(ctx))


@theme.command(name="edit")
@click.argument("position", type=int)
@click.argument("label")
@click.pass_context
def theme_edit(ctx: click.Context, position: int, label: str) -> None:
    """Rename the theme at POSITION (1-based)."""

    def do_edit() -> None:
        with _open_session(ctx) as session:
            themes = session.config.themes
            themes.edit_label(to_index(position, len(themes), "themes"), label)
            _report(ctx, session, f"Edited theme {position}.")

    run_with_error_handling(do_edit, quiet=_quiet(ctx))


@cli.command()
@click.pass_context
def reset(ctx: click.Context) -> None:
    """Replace the stored prompt with the built-in defaults."""

    def do_reset() -> None:
        store: PromptStore = ctx.obj["store"]
        if not store.save(PromptConfig.default()):
            raise click.ClickException(f"Could not write {store.path}")
        if not _quiet(ctx):
            progress.print_success(f"Reset {store.path}")

    run_with_error_handling(do_reset, quiet=_quiet(ctx))


@cli.command()
@click.pass_context
def path(ctx: click.Context) -> None:
    """Print the location of the prompt document."""
    click.echo(str(ctx.obj["store"].path))


@cli.command()
@click.option("--port", "-p", type=int, default=None, help="Port (default: MJPROMPT_UI_PORT or 7860).")
@click.option("--host", type=str, default=None, help="Host (default: MJPROMPT_UI_HOST or 127.0.0.1).")
@click.option("--share", is_flag=True, default=None, help="Create a public share link.")
@click.pass_context
def ui(ctx: click.Context, port: int | None, host: str | None, share: bool | None) -> None:
    """Launch the Gradio prompt builder."""
    from mjprompt.ui.gradio_app import launch as launch_ui

    settings: Settings = ctx.obj["settings"]
    if port is not None:
        settings.ui_port = port
    if host is not None:
        settings.ui_host = host
    if share is not None:
        settings.ui_share = share

    def do_launch() -> None:
        settings.validate()
        launch_ui(settings)

    run_with_error_handling(do_launch, quiet=_quiet(ctx))


def main() -> None:
    """Entry point for the mjprompt console script."""
    cli()


__all__ = ["cli", "main"]
