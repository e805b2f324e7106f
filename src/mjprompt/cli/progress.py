"""
Rich displays for CLI output.

All rich output goes to stderr so stdout carries only the compiled command.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mjprompt.core.prompt import AXES, DEFAULT_STYLIZE, PromptConfig

# Console for stderr output (preserves stdout for machine output)
console = Console(stderr=True)


def _summary_table(config: PromptConfig) -> Table:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="cyan", justify="right", vertical="top")
    table.add_column(style="white")

    table.add_row("Algorithm", config.algorithm.value)
    table.add_row("Aspect", config.aspect.label)
    stylize = str(config.stylize)
    if config.stylize == DEFAULT_STYLIZE:
        stylize += " [dim](default)[/dim]"
    table.add_row("Stylize", stylize)
    table.add_row("Seed", str(config.seed) if config.use_seed else "[dim]off[/dim]")
    table.add_row("Video", "[green]✓[/green]" if config.video else "[dim]off[/dim]")
    for name in AXES:
        value = config.axis(name).render()
        table.add_row(name.capitalize(), escape(value) if value else "[dim]none[/dim]")
    themes = config.themes.render()
    table.add_row("Themes", escape(", ".join(themes)) if themes else "[dim]none[/dim]")
    return table


def print_command_summary(config: PromptConfig, command: str) -> None:
    """Print a panel with the current choices and the compiled command."""
    table = _summary_table(config)
    table.add_row("Command", f"[bold green]{escape(command)}[/bold green]")
    panel = Panel(
        table,
        title="[bold]Prompt[/bold]",
        border_style="green",
        padding=(1, 2),
    )
    console.print()
    console.print(panel)


def print_options(config: PromptConfig) -> None:
    """Print every editable list with the 1-based positions the CLI accepts."""
    table = Table(title="Options", show_lines=False)
    table.add_column("Axis", style="cyan")
    table.add_column("#", justify="right")
    table.add_column("Option")
    table.add_column("Selected", justify="center")

    for name in AXES:
        choice_set = config.axis(name)
        for position, option in enumerate(choice_set.options, start=1):
            selected = "[green]●[/green]" if option and option == choice_set.current else ""
            table.add_row(name, str(position), escape(option) or "[dim](empty)[/dim]", selected)
    for position, (label, enabled) in enumerate(config.themes.entries, start=1):
        mark = "[green]✓[/green]" if enabled else ""
        table.add_row("themes", str(position), escape(label) or "[dim](empty)[/dim]", mark)

    console.print(table)


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]✓[/green] {escape(message)}")
