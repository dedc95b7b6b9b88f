"""CLI interface for zaap."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click

from zaap.core.bundles import BundleListingError, find_bundle, identifier_of, list_bundles
from zaap.core.catalog import LocationCatalog, RuleKind
from zaap.core.config import DEFAULT_SYSTEM_ROOT, ScanConfig
from zaap.core.executor import DeletionExecutor
from zaap.core.planner import Selection, plan
from zaap.core.scanner import Scanner
from zaap.models import ApplicationIdentity, ArtifactRecord, DeletionOutcome, OutcomeStatus
from zaap.settings import Settings


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@dataclass
class AppContext:
    """State shared by all subcommands."""

    settings: Settings
    install_dir: Path
    config: ScanConfig

    def scanner(self) -> Scanner:
        return Scanner(self.config, resolver=identifier_of)


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option(
    "--dir",
    "install_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Applications directory (default: /Applications or the install_dir setting)",
)
@click.option(
    "--system-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_SYSTEM_ROOT,
    hidden=True,
)
@click.pass_context
def main(ctx: click.Context, verbose: int, install_dir: Path | None, system_root: Path) -> None:
    """zaap: remove macOS applications together with the files they leave behind."""
    _setup_logging(verbose)
    settings = Settings()
    ctx.obj = AppContext(
        settings=settings,
        install_dir=install_dir or settings.install_dir,
        config=ScanConfig(
            home=Path.home(),
            system_root=system_root,
            verbose=verbose > 0,
            parallel=settings.parallel_scan,
        ),
    )
    if ctx.invoked_subcommand is None:
        ctx.invoke(interactive)


# ── helpers ──────────────────────────────────────────────────────────────

def _load_bundles(app: AppContext) -> list[tuple[str, Path]]:
    try:
        return list_bundles(app.install_dir)
    except BundleListingError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _find(app: AppContext, name: str) -> tuple[str, Path]:
    try:
        bundle = find_bundle(app.install_dir, name)
    except BundleListingError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    if bundle is None:
        click.echo(f"Application not found: {name}", err=True)
        sys.exit(1)
    return bundle


def _scan(app: AppContext, name: str, path: Path) -> ArtifactRecord:
    return app.scanner().scan(ApplicationIdentity(name=name, bundle_path=path))


def _print_record(name: str, path: Path, record: ArtifactRecord) -> None:
    click.echo(f"\nSelected: {click.style(name, bold=True)}")
    click.echo(f"Location: {path}")
    for category, paths in record.items():
        if not paths:
            continue
        click.echo(f"\n{click.style(category.label, fg='blue', bold=True)}:")
        for p in paths:
            click.echo(f"  - {p}")
    if record.is_empty:
        click.echo("\nNo associated items found.")


def _record_to_json(name: str, path: Path, record: ArtifactRecord) -> dict:
    return {
        "name": name,
        "path": str(path),
        "artifacts": {category.name.lower(): [str(p) for p in paths] for category, paths in record.items()},
    }


def _echo_outcome(outcome: DeletionOutcome) -> None:
    match outcome.status:
        case OutcomeStatus.WOULD_DELETE:
            click.echo(f"Would delete: {outcome.path}")
        case OutcomeStatus.DELETED:
            click.echo(f"{click.style('Deleted', fg='green')}: {outcome.path}")
        case OutcomeStatus.FAILED:
            click.echo(f"{click.style('Error', fg='red')} deleting {outcome.path}: {outcome.reason}", err=True)


def _outcomes_to_json(outcomes: list[DeletionOutcome]) -> list[dict]:
    return [{"path": str(o.path), "result": o.status.value, "reason": o.reason} for o in outcomes]


def _run(
    app_path: Path,
    record: ArtifactRecord,
    selection: Selection,
    dry_run: bool,
    as_json: bool = False,
) -> list[DeletionOutcome]:
    actions = plan(record, app_path, selection, dry_run=dry_run)
    executor = DeletionExecutor(on_outcome=None if as_json else _echo_outcome)
    return executor.execute(actions)


def _finish(outcomes: list[DeletionOutcome], dry_run: bool) -> None:
    if dry_run:
        click.echo("\nDry run complete. No files were actually deleted.")
    failed = [o for o in outcomes if o.failed]
    if failed:
        click.echo(f"\n{len(failed)} item(s) could not be deleted.", err=True)
        sys.exit(1)
    click.echo("\nDone!")


# ── list ─────────────────────────────────────────────────────────────────

@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_cmd(app: AppContext, as_json: bool) -> None:
    """List installed applications."""
    bundles = _load_bundles(app)

    if as_json:
        click.echo(json.dumps([{"name": n, "path": str(p)} for n, p in bundles], indent=2))
        return

    click.echo("Installed Applications:")
    click.echo("----------------------")
    for i, (name, _path) in enumerate(bundles, 1):
        click.echo(f"{i}. {name}")


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def scan(app: AppContext, name: str, as_json: bool) -> None:
    """Show the files associated with an application (never deletes)."""
    app_name, app_path = _find(app, name)
    record = _scan(app, app_name, app_path)

    if as_json:
        click.echo(json.dumps(_record_to_json(app_name, app_path, record), indent=2))
        return
    _print_record(app_name, app_path, record)


# ── delete ───────────────────────────────────────────────────────────────

@main.command()
@click.argument("name")
@click.option("--dry-run", "-n", is_flag=True, help="Show what would be deleted without deleting")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON (requires --yes or --dry-run)")
@click.pass_obj
def delete(app: AppContext, name: str, dry_run: bool, yes: bool, as_json: bool) -> None:
    """Delete an application and all of its associated files."""
    if as_json and not (yes or dry_run):
        raise click.UsageError("--json cannot prompt for confirmation; pass --yes or --dry-run")
    app_name, app_path = _find(app, name)
    record = _scan(app, app_name, app_path)

    if not as_json:
        _print_record(app_name, app_path, record)
        if not dry_run and not yes:
            click.confirm(f"\nDelete {app_name} and {record.total} associated item(s)?", abort=True)
        click.echo()

    outcomes = _run(app_path, record, Selection.all(), dry_run, as_json=as_json)

    if as_json:
        click.echo(json.dumps({"dry_run": dry_run, "results": _outcomes_to_json(outcomes)}, indent=2))
        if any(o.failed for o in outcomes):
            sys.exit(1)
        return
    _finish(outcomes, dry_run)


# ── interactive ──────────────────────────────────────────────────────────

@main.command()
@click.option("--dry-run", "-n", is_flag=True, help="Show what would be deleted without deleting")
@click.pass_obj
def interactive(app: AppContext, dry_run: bool = False) -> None:
    """Pick an application and confirm what to delete."""
    bundles = _load_bundles(app)
    if not bundles:
        click.echo("No applications found.")
        return

    click.echo("Select an application to delete:")
    click.echo("---------------------------------")
    for i, (name, _path) in enumerate(bundles, 1):
        click.echo(f"{i}. {name}")
    click.echo("0. Exit")

    choice = click.prompt("\nEnter number", type=click.IntRange(0, len(bundles)))
    if choice == 0:
        click.echo("Exiting.")
        return

    app_name, app_path = bundles[choice - 1]
    record = _scan(app, app_name, app_path)
    _print_record(app_name, app_path, record)

    if not click.confirm("\nDelete this application?", default=False):
        click.echo("Cancelled.")
        return

    selection = Selection.none()
    if not record.is_empty:
        answer = click.prompt(
            "Delete associated items? (y/n/all)",
            type=click.Choice(["y", "n", "all"], case_sensitive=False),
            default="n",
            show_choices=False,
        )
        match answer.lower():
            case "all":
                selection = Selection.all()
            case "y":
                selection = Selection.per_item(
                    lambda path: click.confirm(f"Delete {path.name}?", default=False)
                )

    click.echo()
    outcomes = _run(app_path, record, selection, dry_run)
    _finish(outcomes, dry_run)


# ── locations ────────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def locations(app: AppContext, as_json: bool) -> None:
    """Show where zaap looks for associated files."""
    catalog = LocationCatalog()
    resolved = catalog.resolve(app.config)

    if as_json:
        data = [
            {
                "category": rule.category.name.lower(),
                "kind": rule.kind.value,
                "directory": str(directory),
                "suffix": rule.suffix,
                "match": rule.predicate.__name__ if rule.kind is RuleKind.LISTING else "exists",
            }
            for rule, directory in resolved
        ]
        click.echo(json.dumps(data, indent=2))
        return

    current = None
    for rule, directory in resolved:
        if rule.category is not current:
            current = rule.category
            click.echo(f"\n{click.style(current.label, fg='blue', bold=True)}:")
        if rule.kind is RuleKind.DIRECT:
            click.echo(f"  {directory}/<bundle id>{rule.suffix}")
        else:
            click.echo(f"  {directory}/*  ({rule.predicate.__name__.replace('_', ' ')})")
    click.echo()


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Read and change settings."""


@config.command("get")
@click.argument("key")
@click.pass_obj
def config_get(app: AppContext, key: str) -> None:
    """Print a setting (dot-notation key, e.g. scan.parallel)."""
    value = app.settings.get(key)
    if value is None:
        click.echo(f"Unknown setting: {key}", err=True)
        sys.exit(1)
    click.echo(json.dumps(value))


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(app: AppContext, key: str, value: str) -> None:
    """Change a setting. VALUE is parsed as JSON when possible."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    app.settings.set(key, parsed)
    click.echo(f"{key} = {json.dumps(parsed)}  ({app.settings.path})")
