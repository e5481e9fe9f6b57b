"""Command-line entry point for VoxSettings."""

import sys
import asyncio
import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

import click
from rich.console import Console

from .backend import FileCredentialBackend, JsonConfigurationBackend, PubSubHotkeyBinder
from .backend.credentials import DEFAULT_BASE_URL
from .config import VoxSettingsConfig
from .errors import BackendError
from .models.credential import ValidationState
from .models.launch import LaunchContext
from .models.status import OutcomeKind, SaveOutcome
from .services.settings_session import SettingsSession
from .services.status_notifier import StatusNotifier
from .ui.settings_screen import SettingsScreen

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_PARTIAL = 2


class App:
    """Wires runtime configuration, backends and the console together."""

    def __init__(self, config: VoxSettingsConfig, launch_context: LaunchContext, console: Optional[Console] = None):
        self.config = config
        self.launch_context = launch_context
        self.screen = SettingsScreen(console or Console())

    def create_session(self) -> SettingsSession:
        app_dir = self.config.get_app_directory()
        config_backend = JsonConfigurationBackend(app_dir)

        # Validation URL and the live hotkey come from the persisted settings
        base_url = DEFAULT_BASE_URL
        live_hotkey = None
        try:
            persisted = config_backend.read_configuration()
            base_url = persisted.api_base_url
            live_hotkey = persisted.hotkey
        except BackendError as e:
            logger.warning(f"Could not read persisted settings while starting: {e}")

        credential_backend = FileCredentialBackend(
            app_dir,
            base_url=base_url,
            timeout_sec=self.config.get('credentials.validation_timeout_sec', 10.0),
        )
        hotkey_backend = PubSubHotkeyBinder(
            reserved=self.config.get('hotkey.reserved', []),
            current=live_hotkey,
        )
        notifier = StatusNotifier(expiry_seconds=self.config.get('status.expiry_seconds', 3.0))

        return SettingsSession(config_backend, credential_backend, hotkey_backend, notifier)


def setup_logging(config: VoxSettingsConfig, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get_log_file_path()
    console_output = config.get('logging.console_output', True)

    # Create logs directory if it doesn't exist
    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)  # Status lines are printed by the screen
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("VoxSettings starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")


def parse_assignments(assignments: Sequence[str]) -> Tuple[Tuple[str, str], ...]:
    """Split ``field=value`` arguments."""
    parsed = []
    for item in assignments:
        field, sep, value = item.partition("=")
        if not sep or not field.strip():
            raise click.BadParameter(f"expected FIELD=VALUE, got {item!r}", param_hint="ASSIGNMENTS")
        parsed.append((field.strip(), value))
    return tuple(parsed)


def exit_code_for(outcome: Optional[SaveOutcome]) -> int:
    if outcome is None or outcome.kind is OutcomeKind.FAILURE:
        return EXIT_FAILURE
    if outcome.kind is OutcomeKind.PARTIAL_SUCCESS:
        return EXIT_PARTIAL
    return 0


async def _show(app: App) -> int:
    session = app.create_session()
    try:
        available = await session.activate(app.launch_context)
        app.screen.render(session)
        return 0 if available else EXIT_FAILURE
    finally:
        session.close()


async def _edit_and_save(app: App, assignments: Tuple[Tuple[str, str], ...]) -> int:
    session = app.create_session()
    try:
        if not await session.activate(app.launch_context):
            app.screen.render(session)
            return EXIT_FAILURE

        for field, value in assignments:
            if not session.edit(field, value):
                app.screen.render_status(session.notifier.current)
                return EXIT_FAILURE

        outcome = await session.save()
        app.screen.render(session)
        return exit_code_for(outcome)
    finally:
        session.close()


async def _reset(app: App) -> int:
    session = app.create_session()
    try:
        if not await session.activate(app.launch_context):
            app.screen.render(session)
            return EXIT_FAILURE
        outcome = await session.reset()
        app.screen.render(session)
        return exit_code_for(outcome)
    finally:
        session.close()


async def _api_key(app: App, action: str, candidate: Optional[str] = None) -> int:
    session = app.create_session()
    try:
        await session.activate(app.launch_context)
        if action == "set":
            ok = await session.save_api_key(candidate)
        elif action == "validate":
            ok = await session.validate_api_key(candidate) is ValidationState.VALID
        else:
            ok = await session.delete_api_key()
        app.screen.render(session)
        return 0 if ok else EXIT_FAILURE
    finally:
        session.close()


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to runtime configuration YAML file")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]), default=None,
              help="Override the logging level from the configuration file")
@click.option("--launch", "launch_parameter", default=None,
              help="Activation parameter, e.g. 'onboarding=1'")
@click.option("--onboarding", is_flag=True, help="Open the settings in first-run mode")
@click.version_option(version="0.1.0", prog_name="VoxSettings")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], log_level: Optional[str],
        launch_parameter: Optional[str], onboarding: bool) -> None:
    """VoxSettings - view and edit dictation settings."""
    try:
        config = VoxSettingsConfig(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))

    setup_logging(config, log_level or config.get('logging.level', 'INFO'))

    launch_context = LaunchContext.from_parameter(launch_parameter)
    if onboarding:
        launch_context = LaunchContext(onboarding=True, parameter=launch_parameter)

    ctx.obj = App(config, launch_context)


@cli.command()
@click.pass_obj
def show(app: App) -> None:
    """Show current settings and API key status."""
    sys.exit(asyncio.run(_show(app)))


@cli.command("set")
@click.argument("assignments", nargs=-1, required=True)
@click.pass_obj
def set_command(app: App, assignments: Tuple[str, ...]) -> None:
    """Edit one or more settings (FIELD=VALUE ...) and save them."""
    parsed = parse_assignments(assignments)
    sys.exit(asyncio.run(_edit_and_save(app, parsed)))


@cli.command()
@click.confirmation_option(prompt="Reset all settings to defaults?")
@click.pass_obj
def reset(app: App) -> None:
    """Reset all settings to their defaults."""
    sys.exit(asyncio.run(_reset(app)))


@cli.group("api-key")
def api_key() -> None:
    """Manage the API key."""


@api_key.command("set")
@click.option("--key", prompt="API key", hide_input=True, help="API key to store")
@click.pass_obj
def api_key_set(app: App, key: str) -> None:
    """Store a new API key."""
    sys.exit(asyncio.run(_api_key(app, "set", key)))


@api_key.command("validate")
@click.option("--key", prompt="API key", hide_input=True, help="API key to check")
@click.pass_obj
def api_key_validate(app: App, key: str) -> None:
    """Check an API key against the service without storing it."""
    sys.exit(asyncio.run(_api_key(app, "validate", key)))


@api_key.command("delete")
@click.confirmation_option(prompt="Remove the stored API key?")
@click.pass_obj
def api_key_delete(app: App) -> None:
    """Remove the stored API key."""
    sys.exit(asyncio.run(_api_key(app, "delete")))


def main() -> None:
    """Main entry point for VoxSettings."""
    cli(obj=None)


if __name__ == "__main__":
    main()
