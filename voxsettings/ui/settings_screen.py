"""Rich rendering of a settings session."""

import logging
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.configuration import SETTING_RANGES, Configuration
from ..models.credential import ValidationState
from ..models.status import Severity, StatusMessage
from ..services.settings_session import SettingsSession

logger = logging.getLogger(__name__)

SEVERITY_STYLES = {
    Severity.SUCCESS: "green",
    Severity.INFO: "blue",
    Severity.WARNING: "yellow",
    Severity.ERROR: "bold red",
}

VALIDATION_LABELS = {
    ValidationState.UNCHECKED: ("not checked", "dim"),
    ValidationState.CHECKING: ("checking...", "blue"),
    ValidationState.VALID: ("valid", "green"),
    ValidationState.INVALID: ("invalid", "red"),
}


class SettingsScreen:
    """Renders the settings form, credential panel and current status."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, session: SettingsSession) -> None:
        """Print the whole settings view for the session's current state."""
        parts = []

        if session.onboarding_active:
            parts.append(self._onboarding_banner())

        parts.append(self._credential_panel(session))

        if session.form_available:
            parts.append(self._settings_table(session.store.config))
        else:
            parts.append(self._load_failure_panel(session.store.load_error))

        self.console.print(Group(*parts))
        self.render_status(session.notifier.current)

    def render_status(self, status: Optional[StatusMessage]) -> None:
        if status is None:
            return
        style = SEVERITY_STYLES.get(status.severity, "")
        self.console.print(Text(status.message, style=style))

    def _onboarding_banner(self) -> Panel:
        text = Text()
        text.append("Welcome! ", style="bold")
        text.append("Add your API key to start dictating.\n")
        text.append("Run: ", style="dim")
        text.append("voxsettings api-key set", style="cyan")
        return Panel(text, title="Getting started", border_style="cyan")

    def _credential_panel(self, session: SettingsSession) -> Panel:
        api_keys = session.api_keys
        text = Text()

        if api_keys.has_credential and not api_keys.editing:
            text.append("Configured", style="green")
        elif api_keys.has_credential:
            text.append("Configured, editing replacement key", style="yellow")
        else:
            text.append("No API key stored", style="red")

        if api_keys.editing and api_keys.buffer:
            label, style = VALIDATION_LABELS[api_keys.validation]
            text.append("\nCandidate: ")
            text.append(label, style=style)

        return Panel(text, title="API key", border_style="blue")

    def _settings_table(self, config: Configuration) -> Table:
        table = Table(title="Dictation settings", show_header=True, header_style="bold")
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        table.add_column("Allowed", style="dim")

        for name, value in config.model_dump(mode="json").items():
            bounds = SETTING_RANGES.get(name)
            allowed = f"{bounds[0]}-{bounds[1]}" if bounds else ""
            table.add_row(name, str(value), allowed)

        return table

    def _load_failure_panel(self, error: Optional[str]) -> Panel:
        text = Text("Settings could not be loaded.", style="bold red")
        if error:
            text.append(f"\n{error}", style="red")
        text.append("\nCheck the configuration file and try again.", style="dim")
        return Panel(text, title="Settings unavailable", border_style="red")
