"""Command-line dashboard: ingest exports, report metrics and ask for insights."""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from helpdesk import config as helpdesk_config
from helpdesk.config import HelpdeskConfig
from helpdesk.domains import insights, tickets
from helpdesk.domains.insights import InsightCache, InsightClient, LLMProvider, LLMSettings
from helpdesk.domains.tickets.models import agents_to_frame
from helpdesk.domains.tickets.persistence import TicketRepository
from helpdesk.domains.tickets.sample import generate_sample_tickets
from helpdesk.utils.io import write_output
from helpdesk.utils.store import JsonFileStore, KeyValueStore
from helpdesk.utils.types import TimeRange

console = Console()
logger = logging.getLogger("helpdesk")

EXPORT_FORMATS = {".csv": "csv", ".xlsx": "excel", ".json": "json"}


@dataclass
class Workspace:
    config: HelpdeskConfig
    store: KeyValueStore
    cache: InsightCache
    repository: TicketRepository


def load_config(env: str, override_path: Path | None = None) -> HelpdeskConfig:
    cfg = helpdesk_config.load_helpdesk_config(env)
    cfg = helpdesk_config.apply_overrides(cfg, helpdesk_config.get_env_config())

    override_path = override_path or Path.cwd() / "helpdesk.yaml"
    if override_path.exists():
        with open(override_path) as f:
            cfg = helpdesk_config.apply_overrides(cfg, yaml.safe_load(f) or {})
    return cfg


def open_workspace(cfg: HelpdeskConfig, store: KeyValueStore | None = None) -> Workspace:
    store = store or JsonFileStore(cfg.storage.data_dir)
    cache = InsightCache(store, key=cfg.storage.insights_key)
    repository = TicketRepository(store, key=cfg.storage.tickets_key, dependents=[cache])
    return Workspace(config=cfg, store=store, cache=cache, repository=repository)


def load_llm_settings(workspace: Workspace) -> LLMSettings:
    """Saved settings win over the environment defaults; the key always comes from env."""
    llm = workspace.config.llm
    saved = workspace.store.get(workspace.config.storage.settings_key)
    if saved:
        return LLMSettings.from_dict(saved, api_key=llm.api_key)
    return LLMSettings(
        provider=LLMProvider(llm.provider),
        model=llm.model,
        api_key=llm.api_key,
        base_url=llm.base_url,
    )


def save_llm_settings(workspace: Workspace, settings: LLMSettings) -> None:
    workspace.store.set(workspace.config.storage.settings_key, settings.to_dict())
    console.print(f"[green]Saved LLM settings: {settings.provider} / {settings.model}[/green]")


def load_tickets(workspace: Workspace) -> tuple[list[tickets.Ticket], bool]:
    """Saved tickets, or demo data for an empty store; the flag is True for saved data."""
    stored = workspace.repository.load()
    if stored:
        return stored, True
    if workspace.config.demo_on_empty:
        console.print("[yellow]No saved tickets, showing demo data[/yellow]")
        return generate_sample_tickets(), False
    return [], False


def _trend_cell(trend) -> str:
    color = "green" if trend.favorable else "red"
    return f"[{color}]{trend.text}[/{color}]"


def print_dashboard(report: dict) -> None:
    stats, trends = report["stats"], report["trends"]

    table = Table(title=f"Helpdesk Dashboard: {report['label']}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("Trend", justify="right")
    table.add_row("Total Tickets", str(stats.total), _trend_cell(trends.total))
    table.add_row("Avg Resolution Time", f"{stats.avg_resolution_hours:.1f} hrs", _trend_cell(trends.resolution))
    table.add_row("CSAT Rating", f"{stats.avg_rating:.1f} / 5", _trend_cell(trends.rating))
    table.add_row("Pending Tickets", str(stats.open), _trend_cell(trends.open))
    console.print(table)

    types = Table(title="Ticket Distribution by Type")
    types.add_column("Type")
    types.add_column("Tickets", justify="right")
    for entry in report["type_distribution"]:
        types.add_row(str(entry["name"]), str(entry["value"]))
    console.print(types)


def print_agents(agents: list[tickets.AgentMetrics]) -> None:
    table = Table(title="Agent Performance")
    table.add_column("Agent")
    table.add_column("Tickets", justify="right")
    table.add_column("Active", justify="right")
    table.add_column("Avg Rating", justify="right")
    table.add_column("Avg Resolution", justify="right")
    for a in agents:
        table.add_row(
            a.email,
            str(a.total_tickets),
            str(a.active_tickets),
            f"{a.avg_rating:.1f}",
            f"{a.avg_resolution_hours:.1f} hrs",
        )
    console.print(table)


def print_recommendation(rec: insights.Recommendation) -> None:
    console.print(f"[bold]{rec.period_context}[/bold]")
    console.print(rec.summary)
    console.print(f"\n[cyan]Resource allocation:[/cyan] {rec.resource_allocation}")
    console.print(f"[cyan]Ticket reduction:[/cyan] {rec.ticket_reduction_strategy}")
    for team in rec.team_analysis:
        console.print(f"  [bold]{team.team_name}[/bold]: {team.insight} -> {team.recommendation}")
    perf = rec.agent_performance
    console.print(f"\n[green]Top performer:[/green] {perf.top_performer}")
    console.print(f"[yellow]Needs attention:[/yellow] {perf.needs_attention} ({perf.suggestion})")


def validate_all(collection: list[tickets.Ticket]) -> bool:
    table = Table(title="Validation Results")
    table.add_column("Source")
    table.add_column("Valid")
    table.add_column("Details")

    valid = True
    for source in ("tickets", "agents"):
        match tickets.validate(collection, source=source):
            case {"status": "ok", "row_count": n}:
                table.add_row(source, "[green]✓[/green]", f"{n} tickets")
            case {"status": "error", "message": msg}:
                valid = False
                table.add_row(source, "[red]✗[/red]", msg)

    console.print(table)
    return valid


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Helpdesk ticket analytics")
    parser.add_argument("--env", default="production", help="Configuration environment")
    parser.add_argument("--upload", type=Path, help="Replace saved tickets with an export (.csv/.xlsx/.xls)")
    parser.add_argument("--demo", action="store_true", help="Replace saved tickets with demo data")
    parser.add_argument("--reset", action="store_true", help="Clear saved tickets and cached insights")
    parser.add_argument("--range", choices=[r.value for r in TimeRange], help="Reporting range")
    parser.add_argument("--agents", action="store_true", help="Show per-agent metrics")
    parser.add_argument("--insights", action="store_true", help="Generate AI insights for the range")
    parser.add_argument("--refresh", action="store_true", help="Ignore cached insights")
    parser.add_argument("--ask", type=str, help="Ask the data assistant a question")
    parser.add_argument("--provider", choices=[p.value for p in LLMProvider], help="Save the LLM provider")
    parser.add_argument("--model", help="Save the LLM model name")
    parser.add_argument("--base-url", help="Save a custom OpenAI-compatible base URL")
    parser.add_argument("--export", type=Path, help="Write the agent table to .csv, .xlsx or .json")
    parser.add_argument("--validate", action="store_true", help="Validate saved tickets only")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        cfg = load_config(args.env)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        return 1
    workspace = open_workspace(cfg)
    logger.debug("Loaded %s config, data in %s", args.env, cfg.storage.data_dir)

    if args.reset:
        workspace.repository.reset()
        console.print("[green]Saved tickets cleared[/green]")
        return 0

    if args.provider or args.model or args.base_url:
        current = load_llm_settings(workspace)
        save_llm_settings(workspace, LLMSettings(
            provider=LLMProvider(args.provider or current.provider),
            model=args.model or current.model,
            api_key=current.api_key,
            base_url=args.base_url if args.base_url is not None else current.base_url,
        ))

    if args.upload:
        try:
            uploaded = tickets.ingest_file(args.upload)
        except (tickets.IngestError, ValueError, FileNotFoundError) as exc:
            console.print(f"[red]Upload failed:[/red] {exc}")
            return 1
        workspace.repository.save(uploaded)
        console.print(f"[green]Saved {len(uploaded)} tickets from {args.upload.name}[/green]")
    elif args.demo:
        workspace.repository.save(generate_sample_tickets())

    collection, saved = load_tickets(workspace)
    # Saved exports can be old, so they default to all time
    if args.range:
        time_range = TimeRange(args.range)
    else:
        time_range = TimeRange.ALL if saved else cfg.default_range

    if args.validate:
        return 0 if validate_all(collection) else 1

    report = tickets.run(collection, time_range, top_n=cfg.top_n)
    print_dashboard(report)

    if args.agents:
        print_agents(report["agents"])

    if args.export:
        fmt = EXPORT_FORMATS.get(args.export.suffix.lower())
        if fmt is None:
            console.print(f"[red]Unsupported export format: {args.export.suffix}[/red]")
            return 1
        write_output(agents_to_frame(report["agents"]), args.export, fmt)
        console.print(f"[green]Exported {len(report['agents'])} agents to {args.export}[/green]")

    if args.insights or args.ask:
        client = InsightClient(load_llm_settings(workspace), timeout=cfg.llm.timeout)
        if args.insights:
            rec = insights.get_insights(
                report["tickets"],
                report["agents"],
                report["label"],
                client=client,
                cache=workspace.cache,
                refresh=args.refresh,
            )
            print_recommendation(rec)
        if args.ask:
            answer = insights.ask(args.ask, report["tickets"], report["agents"], time_range, client)
            console.print(f"\n[bold]Assistant:[/bold] {answer}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
