"""Main CLI entry point for Kit.

``kit <command> [args...]`` dispatches to an operation or shortcut; every
argument after the command name is passed through to its handler untouched.

    kit                       Show the command listing
    kit -h / --help           Same as above
    kit --search <keyword>    Search command names
    kit --list-categories     Category summary with counts
    kit --validate            Check shortcuts.conf and editor.conf

Performance Note: the registry modules are imported inside the command so
``kit --version`` stays fast.
"""

import logging
import sys

import click

# Fix Windows console encoding to support Unicode characters (✓, ✗, ⚠️, etc.)
if sys.platform == "win32":
    try:
        import io

        if sys.stdout.encoding.lower() != "utf-8":
            sys.stdout = io.TextIOWrapper(
                sys.stdout.buffer, encoding="utf-8", errors="replace", line_buffering=True
            )
        if sys.stderr.encoding.lower() != "utf-8":
            sys.stderr = io.TextIOWrapper(
                sys.stderr.buffer, encoding="utf-8", errors="replace", line_buffering=True
            )
    except (AttributeError, OSError):
        # The CLI still works without fancy Unicode characters
        pass

from kit import __version__

CONTEXT_SETTINGS = {
    # -h/--help are handled by the dispatcher, not by click
    "help_option_names": [],
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
}


def report_diagnostics(report) -> None:
    """Surface the startup diagnostics once, with totals."""
    from kit.cli.styles import Messages, err_console
    from kit.commands import ShortcutKind

    for kind in ShortcutKind:
        conflicts = report.conflict_count(kind)
        if conflicts:
            source = report.shortcut_sources[kind].name
            err_console.print(
                Messages.error(
                    f"Found {conflicts} {kind.label} conflict(s). Please fix {source}"
                )
            )

    if report.has_problems:
        err_console.print(
            Messages.warning(
                f"{len(report.diagnostics)} problem(s) while loading commands "
                f"({len(report.errors)} error(s), {len(report.warnings)} warning(s)). "
                "Run 'kit --validate' for details."
            )
        )


def run_validation(report) -> int:
    """Print every shortcut diagnostic plus missing navigation targets."""
    from rich.markup import escape

    from kit.cli.styles import Messages, Styles, console
    from kit.commands import ExitStatus, find_missing_targets

    console.print()
    for kind, path in report.shortcut_sources.items():
        console.print(f"🔍 Validated {kind.value} shortcuts: [path]{escape(str(path))}[/path]")
    console.print()

    for diagnostic in report.diagnostics:
        if diagnostic.is_error:
            console.print(Messages.error(escape(str(diagnostic))))
        else:
            console.print(Messages.warning(escape(str(diagnostic))))

    missing = find_missing_targets(report)
    for command in missing:
        console.print(
            Messages.error(f"{escape(command.name)}: path does not exist ({escape(command.value)})")
        )

    error_count = len(report.errors) + len(missing)
    console.print()
    console.print("Results:", style=Styles.BOLD)
    console.print(f"  Errors:   {error_count}")
    console.print(f"  Warnings: {len(report.warnings)}")
    console.print()

    if error_count:
        console.print(Messages.error("Validation failed. Fix issues before using shortcuts."))
        return ExitStatus.RUNTIME_ERROR
    if report.warnings:
        console.print(Messages.warning("Validation completed with warnings"))
    else:
        console.print(Messages.success("All shortcuts validated successfully"))
    return ExitStatus.SUCCESS


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("-h", "--help", "show_help", is_flag=True, help="Show the command listing.")
@click.option("--search", "search_term", metavar="KEYWORD", help="Search command names.")
@click.option("--list-categories", "list_categories", is_flag=True, help="List categories.")
@click.option("--validate", is_flag=True, help="Validate shortcut configuration files.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="KIT_CONFIG",
    help="Path to config.yml.",
)
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="kit")
@click.argument("command", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx, show_help, search_term, list_categories, validate, config_path, debug, command, args):
    """Kit - personal shell toolkit.

    Runs COMMAND with ARGS. Commands come from operation modules plus the
    shortcuts declared in shortcuts.conf and editor.conf.

    \b
      kit mklink <target> <link>   Run an operation
      kit <command> -h             Detailed help for a command
      kit --search png             Search command names
      kit --list-categories        Category summary
    """
    from kit.base.errors import ToolkitError
    from kit.cli.styles import Styles, err_console, initialize_theme_from_config
    from kit.commands import Dispatcher, RegistrySettings, build_registry
    from kit.utils.config import reset_config, set_default_config
    from kit.utils.logger import set_log_level

    if debug:
        set_log_level(logging.DEBUG)

    try:
        if config_path:
            reset_config()
            set_default_config(config_path)
        initialize_theme_from_config()
        report = build_registry(RegistrySettings.from_config())
    except ToolkitError as e:
        err_console.print(f"Error: {e}", style=Styles.ERROR, markup=False)
        ctx.exit(1)

    report_diagnostics(report)

    if validate:
        ctx.exit(int(run_validation(report)))

    dispatcher = Dispatcher(report.registry, report.help_service)
    if search_term is not None:
        status = dispatcher.dispatch("search", [search_term])
    elif list_categories:
        status = dispatcher.dispatch("list-categories")
    elif show_help:
        status = dispatcher.dispatch("--help")
    else:
        status = dispatcher.dispatch(command, args)

    ctx.exit(int(status))


def main():
    """Entry point for the kit CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
