"""Entry point for the fracture command."""

import signal
import sys

from rich.console import Console
from rich.markup import escape

from fracture.cli.args import parse_args
from fracture.config import Config
from fracture.core import FractureManager
from fracture.exceptions import BulkDeletionError, CreationError, DeletionError, FractureError
from fracture.logging_config import setup_logging

err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _handle_sigterm(signum, frame):
    """Turn SIGTERM into SystemExit so running child processes are killed on the way out."""
    sys.exit(128 + signum)


def _report(error: FractureError) -> None:
    """Print a fracture error on stderr, prefixed with the phase that failed."""
    if isinstance(error, CreationError):
        err_console.print("[red]failed to create worktree:[/red]")
        err_console.print(escape(error.stderr), highlight=False)
    elif isinstance(error, BulkDeletionError):
        for fracture_id, message in error.failures:
            err_console.print(f"[red]failed to delete {escape(fracture_id)}:[/red] {escape(message)}", highlight=False)
    elif isinstance(error, DeletionError):
        err_console.print("[red]failed to remove worktree:[/red]")
        err_console.print(escape(error.stderr), highlight=False)
    else:
        err_console.print(f"[red]{escape(str(error))}[/red]", highlight=False)


def run_command(manager: FractureManager, args) -> int:
    """Dispatch parsed arguments to the manager and return the exit code."""
    if args.command == "list":
        manager.list()
    elif args.command == "enter":
        manager.enter(args.id)
    elif args.command == "delete":
        if args.all:
            try:
                manager.delete_all(force=args.force)
            except BulkDeletionError as e:
                # per-item failures do not fail the batch
                _report(e)
        else:
            manager.delete(args.id, force=args.force)
    else:
        manager.create(new_branch=args.branch)
    return EXIT_OK


def main(argv=None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)
    signal.signal(signal.SIGTERM, _handle_sigterm)

    try:
        config = Config.from_env(
            verbose=args.verbose,
            debug=args.debug,
            install_deps=not args.no_install,
            copy_env=not args.no_env,
        )
        setup_logging(verbose=args.verbose, debug=args.debug, log_dir=config.fracture_home)

        if args.debug:
            err_console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                err_console.print(f"  {key}: {value}", highlight=False)

        return run_command(FractureManager(config), args)
    except FractureError as e:
        _report(e)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return EXIT_INTERRUPTED
    except Exception as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        if args.debug:
            err_console.print_exception()
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
