"""Console reporting with Rich tables and progress bars."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import final

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from webtoon_dashboard.models.project import ParsedProject, TeamMember, TeamSummary
from webtoon_dashboard.models.upload import ExportResult


def format_chapters(chapters: Sequence[int]) -> str:
    """Render chapter numbers for a table cell."""
    if not chapters:
        return "-"
    return ", ".join(str(c) for c in chapters)


@final
class ConsoleReporter:
    """Renders work logs, summaries and progress to the console."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the reporter.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console()

    def display_projects(self, projects: Sequence[ParsedProject], title: str = "Projects") -> None:
        """Display one member's parsed projects.

        Args:
            projects: Parsed projects
            title: Table title
        """
        if not projects:
            self.console.print(f"[dim]{title}: no work entries[/dim]")
            return

        table = Table(title=title)
        table.add_column("Project", style="cyan")
        table.add_column("Chapters", style="white")
        table.add_column("Count", style="green", justify="right")

        for project in projects:
            table.add_row(project.name, format_chapters(project.chapters), str(project.count))

        table.add_row("[bold]Total[/bold]", "", f"[bold]{sum(p.count for p in projects)}[/bold]")
        self.console.print(table)

    def display_member(self, member: TeamMember) -> None:
        """Display a member card."""
        self.display_projects(member.projects, title=f"{member.name} ({member.total_chapters} chapters)")

    def display_team_summary(self, summary: TeamSummary) -> None:
        """Display the team-wide summary.

        Args:
            summary: Aggregated team summary
        """
        stats = Table(title="Global Summary")
        stats.add_column("Metric", style="cyan")
        stats.add_column("Count", style="green", justify="right")
        stats.add_row("Total Chapters", str(summary.total_chapters))
        stats.add_row("Active Members", str(summary.active_members))
        stats.add_row("Total Projects", str(summary.total_projects))

        self.console.print("\n")
        self.console.print(stats)

        if not summary.projects:
            self.console.print("[dim]No work entries yet. Add members and paste their work to see the summary.[/dim]")
            return

        breakdown = Table(title="Project Breakdown")
        breakdown.add_column("Project", style="cyan")
        breakdown.add_column("Total", style="green", justify="right")
        breakdown.add_column("Contributors", style="white")

        for project in summary.projects:
            breakdown.add_row(project.name, str(project.total_count), ", ".join(project.contributors))

        self.console.print(breakdown)

    def display_export_result(self, result: ExportResult) -> None:
        """Display the outcome of a Drive export."""
        if result.success:
            self.display_success(f"Uploaded {result.uploaded_files} images to Google Drive")
        else:
            self.display_error(
                f"Export failed ({result.uploaded_files}/{result.total_files} uploaded): {result.error_message}"
            )

    @contextmanager
    def track_progress(self, description: str, total: int) -> Iterator[ProgressContext]:
        """Context manager for tracking a counted task.

        Args:
            description: Progress bar label
            total: Number of steps

        Yields:
            ProgressContext whose ``callback`` fits the tools' progress callbacks
        """
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
        ) as progress:
            task_id = progress.add_task(description, total=total)
            yield ProgressContext(progress, task_id)

    def display_error(self, message: str, exception: Exception | None = None) -> None:
        """Display an error message with optional exception details.

        Args:
            message: Error message to display
            exception: Optional exception for additional context
        """
        self.console.print(f"[red]Error: {message}[/red]")
        if exception:
            self.console.print(f"[dim]Details: {exception}[/dim]")

    def display_success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def display_info(self, message: str) -> None:
        """Display an info message."""
        self.console.print(f"[blue]Info: {message}[/blue]")


@final
class ProgressContext:
    """Context for updating a progress bar."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        """Initialize the context.

        Args:
            progress: Rich Progress instance
            task_id: Task ID for the progress bar
        """
        self.progress = progress
        self.task_id = task_id

    def callback(self, completed: int, total: int) -> None:
        """Set absolute progress, as reported by the image tools and exporter."""
        self.progress.update(self.task_id, completed=completed, total=total)
