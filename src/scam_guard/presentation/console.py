"""Rich-based console rendering for Scam Guard.

:class:`ConsoleDashboard` renders verdicts, the activity history, reward
counters, settings and the module menu.  Comfort mode switches to a softer
colour palette; it has no other effect.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from scam_guard.domain.enums import Feature, RiskLevel
from scam_guard.domain.events import DetectionCredited, DomainEvent, ReportCredited
from scam_guard.domain.values import AnalysisResult, HistoryItem, RewardSnapshot, Settings

_PALETTE = {
    RiskLevel.SAFE: "green",
    RiskLevel.SUSPICIOUS: "yellow",
    RiskLevel.SCAM: "red",
}

_COMFORT_PALETTE = {
    RiskLevel.SAFE: "dark_sea_green4",
    RiskLevel.SUSPICIOUS: "light_goldenrod3",
    RiskLevel.SCAM: "indian_red",
}

_ICONS = {
    RiskLevel.SAFE: "✓",
    RiskLevel.SUSPICIOUS: "!",
    RiskLevel.SCAM: "×",
}

_SETTING_LABELS = {
    "notifications": "Live Alerts",
    "stronger_encryption": "Double Encryption",
    "comfort_mode": "Eye Comfort Mode",
    "auto_scan": "Auto-Scan Links",
}


class ConsoleDashboard:
    """Console presentation layer for the dashboard.

    Parameters
    ----------
    file:
        Output stream.  Defaults to ``sys.stdout``.
    comfort_mode:
        Start with the softer palette.
    width:
        Optional fixed console width (useful for tests).
    """

    def __init__(
        self,
        file: Any = None,
        comfort_mode: bool = False,
        width: int | None = None,
    ) -> None:
        self._console = Console(file=file or sys.stdout, width=width, highlight=False)
        self.comfort_mode = comfort_mode

    @property
    def console(self) -> Console:
        return self._console

    def _colour(self, level: RiskLevel) -> str:
        palette = _COMFORT_PALETTE if self.comfort_mode else _PALETTE
        return palette[level]

    # -- public API --------------------------------------------------------

    def print_modules(self) -> None:
        """List the analysis modules with their descriptions."""
        table = Table(title="Analysis Modules", show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right")
        table.add_column("Module", style="bold")
        table.add_column("Description")
        for idx, feature in enumerate(Feature, start=1):
            table.add_row(str(idx), feature.title, feature.description)
        self._console.print(table)

    def print_result(
        self,
        feature: Feature,
        result: AnalysisResult,
        reported: bool | None = None,
    ) -> None:
        """Render a verdict panel.

        ``reported`` controls the report hint shown under scam verdicts:
        ``None`` hides it, ``False`` offers the report action, ``True``
        marks it as done.
        """
        colour = self._colour(result.risk_level)
        lines = [
            f"[bold {colour}]{_ICONS[result.risk_level]} Verdict: "
            f"{result.verdict_label(feature)}[/bold {colour}]  "
            f"[dim]confidence {result.confidence_score}%[/dim]",
            "",
            "[bold]Reasons[/bold]",
        ]
        lines.extend(f"  • {escape(reason)}" for reason in result.reasons)
        lines.extend(["", f'[bold]Recommendation[/bold]\n  "{escape(result.recommendation)}"'])

        if feature is Feature.PAYMENT_PROOF:
            lines.extend(
                ["", "[dim]Always confirm the credit in your bank or UPI app "
                 "before releasing goods.[/dim]"]
            )
        if result.is_scam and reported is not None:
            hint = "Threat Reported" if reported else "Report Threat"
            lines.extend(["", f"[{colour}]{hint}[/{colour}]"])

        self._console.print(
            Panel("\n".join(lines), title=feature.title, border_style=colour)
        )

    def print_error(self, message: str) -> None:
        self._console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def print_history(self, items: list[HistoryItem] | tuple[HistoryItem, ...]) -> None:
        """Render the activity history, most recent first."""
        if not items:
            self._console.print("[dim]No recent activity.[/dim]")
            return
        table = Table(title="Recent Activity", show_header=True, header_style="bold cyan")
        table.add_column("Time")
        table.add_column("Type")
        table.add_column("Input", overflow="ellipsis", max_width=40)
        table.add_column("Verdict", justify="center")
        for item in items:
            colour = self._colour(item.result.risk_level)
            table.add_row(
                datetime.fromtimestamp(item.timestamp).strftime("%H:%M:%S"),
                item.type,
                escape(item.input),
                f"[{colour}]{item.result.risk_level.value}[/{colour}]",
            )
        self._console.print(table)

    def print_rewards(self, rewards: RewardSnapshot) -> None:
        self._console.print(
            f"[bold]Reward points:[/bold] {rewards.points}    "
            f"[bold]Threats reported:[/bold] {rewards.report_count}"
        )

    def print_settings(self, settings: Settings) -> None:
        table = Table(title="Settings & Security", show_header=True, header_style="bold cyan")
        table.add_column("Key")
        table.add_column("Setting", style="bold")
        table.add_column("State", justify="center")
        for name in Settings.names():
            state = "[green]on[/green]" if getattr(settings, name) else "[dim]off[/dim]"
            table.add_row(name, _SETTING_LABELS.get(name, name), state)
        self._console.print(table)

    def print_alert(self, event: DomainEvent) -> None:
        """One-line live alert for a reward credit; other events are ignored."""
        if isinstance(event, ReportCredited):
            text = (
                f"Threat reported: +{event.points_awarded} points "
                f"(total {event.total_points}, reports {event.report_count})"
            )
        elif isinstance(event, DetectionCredited):
            text = (
                f"Scam detected: +{event.points_awarded} points "
                f"(total {event.total_points})"
            )
        else:
            return
        colour = self._colour(RiskLevel.SCAM)
        self._console.print(f"[bold {colour}]🔔 {text}[/bold {colour}]")
