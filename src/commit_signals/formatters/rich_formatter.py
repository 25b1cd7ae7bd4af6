"""Rich terminal formatter for Commit Signals."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..dashboard import DashboardView
from ..platforms import technologies
from ..runner import RepositoryReport
from .base import BaseFormatter

# Developers shown in the leaderboard
TOP_DEVELOPERS = 10


def _score_label(score: float) -> str:
    if score >= 75:
        return f"[green]{score:.0f}[/green]"
    elif score >= 50:
        return f"[yellow]{score:.0f}[/yellow]"
    else:
        return f"[red]{score:.0f}[/red]"


def _age_label(days: float) -> str:
    if days == float("inf"):
        return "[dim]no commits[/dim]"
    return f"{days:.1f}d"


class RichFormatter(BaseFormatter):
    """Summary panel followed by one table per analyzer."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, view: DashboardView) -> None:
        self._print_summary(view)
        if view.reports:
            self._print_health(view)
            self._print_security(view)
            self._print_collaboration(view)
            self._print_debt(view)
            self._print_developers(view)
        if view.failures:
            self._print_failures(view)

    def format(self, view: DashboardView) -> str:
        # Rich output goes directly to console; return empty string
        self.render(view)
        return ""

    def _print_summary(self, view: DashboardView) -> None:
        lines = [
            f"Repositories analyzed: [bold]{view.repository_count}[/bold]",
            f"Developers: [bold]{len(view.developers)}[/bold]",
            f"Average health: {_score_label(view.average_health_score)}",
            f"Average technical debt: [bold]{view.average_technical_debt:.1f}%[/bold]",
            f"Suspicious patterns: [bold]{view.total_suspicious_patterns}[/bold]",
        ]
        if view.failures:
            lines.append(f"Failed repositories: [red]{len(view.failures)}[/red]")
        self.console.print(
            Panel("\n".join(lines), title="[bold cyan]Commit Signals[/bold cyan]", expand=False)
        )

    def _print_health(self, view: DashboardView) -> None:
        table = Table(title="Repository health", show_lines=False)
        table.add_column("Repository", style="bold")
        table.add_column("Status")
        table.add_column("Stack", style="dim")
        table.add_column("Health", justify="right")
        table.add_column("Last commit", justify="right")
        table.add_column("Active devs", justify="right")
        table.add_column("Churn %", justify="right")
        table.add_column("Tests %", justify="right")
        table.add_column("Docs %", justify="right")
        table.add_column("Issue days", justify="right")

        for report in view.reports:
            h = report.health
            table.add_row(
                report.repository.name,
                report.status.value,
                ", ".join(technologies(report.repository)),
                _score_label(h.health_score),
                _age_label(h.last_commit_age_days),
                str(h.active_developer_count),
                f"{h.code_churn_rate:.0f}",
                f"{h.test_coverage_estimate:.0f}",
                f"{h.documentation_score:.0f}",
                f"{h.issue_resolution_estimate_days:.1f}",
            )
        self.console.print(table)

    def _print_security(self, view: DashboardView) -> None:
        table = Table(title="Security signals")
        table.add_column("Repository", style="bold")
        table.add_column("Compliance", justify="right")
        table.add_column("Vuln commits", justify="right")
        table.add_column("Secrets", justify="right")
        table.add_column("Dependency risk", justify="right")
        table.add_column("Patterns")

        for report in view.reports:
            s = report.security
            table.add_row(
                report.repository.name,
                _score_label(s.compliance_score),
                str(s.vulnerability_commit_count),
                f"[red]{s.secrets_exposed_count}[/red]" if s.secrets_exposed_count else "0",
                f"{s.dependency_risk_score:.0f}",
                "\n".join(s.suspicious_patterns) or "[dim]none[/dim]",
            )
        self.console.print(table)

    def _print_collaboration(self, view: DashboardView) -> None:
        table = Table(title="Collaboration")
        table.add_column("Repository", style="bold")
        for label in ("Review", "Cross-team", "Knowledge", "Mentorship", "Communication", "Conflict"):
            table.add_column(label, justify="right")

        for report in view.reports:
            c = report.collaboration
            table.add_row(
                report.repository.name,
                *(
                    f"{v:.0f}"
                    for v in (
                        c.code_review_participation,
                        c.cross_team_contributions,
                        c.knowledge_sharing,
                        c.mentorship_activity,
                        c.communication_frequency,
                        c.conflict_resolution,
                    )
                ),
            )
        self.console.print(table)

    def _print_debt(self, view: DashboardView) -> None:
        table = Table(title="Technical debt")
        table.add_column("Repository", style="bold")
        table.add_column("Test debt", justify="right")
        table.add_column("Doc debt", justify="right")
        table.add_column("Dep. updates", justify="right")
        table.add_column("Pattern")
        table.add_column("Advice")

        for report in view.reports:
            d = report.debt
            table.add_row(
                report.repository.name,
                f"{d.test_debt:.0f}",
                f"{d.documentation_debt:.0f}",
                str(d.outdated_dependencies),
                _pattern_summary(report),
                "\n".join(d.refactoring_opportunities),
            )
        self.console.print(table)

    def _print_developers(self, view: DashboardView) -> None:
        ranked = sorted(view.developers, key=lambda d: d.engagement_score, reverse=True)
        table = Table(title=f"Top {min(len(ranked), TOP_DEVELOPERS)} developers")
        table.add_column("Developer", style="bold")
        table.add_column("Commits", justify="right")
        table.add_column("Per day", justify="right")
        table.add_column("Last activity")
        table.add_column("Engagement", justify="right")

        for dev in ranked[:TOP_DEVELOPERS]:
            table.add_row(
                dev.name,
                str(dev.total_commits),
                f"{dev.commit_frequency:.2f}",
                dev.last_activity.strftime("%Y-%m-%d %H:%M"),
                _score_label(dev.engagement_score),
            )
        self.console.print(table)

    def _print_failures(self, view: DashboardView) -> None:
        self.console.print("\n[bold red]Failed repositories[/bold red]")
        for failure in view.failures:
            self.console.print(f"  [red]•[/red] {escape(failure.repo_name)}: {escape(failure.reason)}")


def _pattern_summary(report: RepositoryReport) -> str:
    p = report.patterns
    parts = [f"quality {p.message_quality:.0f}", f"gap {p.average_gap_hours:.1f}h"]
    if p.burst_detected:
        parts.append("[yellow]burst[/yellow]")
    return ", ".join(parts)
