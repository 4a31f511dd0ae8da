"""Gold purchase cost calculator CLI."""

import argparse
import dataclasses
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from gold_purchase.formulas.gold_purchase import (
    CANNOT_PURCHASE,
    BuildingPurchaseOptions,
    UnitPurchaseOptions,
    building_purchase_cost,
    gold_to_production_ratio,
    project_purchase_cost,
    unit_purchase_cost,
)
from gold_purchase.models import Catalog, EntityKind, HurryModifierSource
from gold_purchase.models.game_context import (
    GOLD_PURCHASE_PRESETS,
    GameContext,
    GoldPurchaseConstants,
)
from gold_purchase.utils.catalog_loader import load_catalog
from gold_purchase.utils.config_loader import load_config
from gold_purchase.utils.correlation import (
    ProductionColumnCorrelation,
    build_correlation,
    column_from_correlation,
    samples_from_entities,
    tech_progress_from_correlation,
    techs_from_correlation,
)
from gold_purchase.utils.hurry_modifiers import (
    index_sources,
    industry_policy_sources,
    total_modifier,
)
from gold_purchase.utils.tech_progress import (
    TechProgressData,
    build_tech_progress_data,
    format_tech_progress,
)

console = Console()
logger = logging.getLogger("gold_purchase")


@dataclasses.dataclass
class CostRow:
    """One line of the cost table."""

    production: int
    gold: int
    ratio: float
    column: float | None = None
    tech_progress: int | None = None
    techs: int | None = None


def format_gold(gold: int) -> str:
    """Format a gold cost, showing "n/a" when it cannot be purchased."""
    if gold == CANNOT_PURCHASE:
        return "n/a"
    return f"{gold:,}"


def create_cost_table(rows: list[CostRow], kind: str, total_techs: int | None) -> Table:
    """Create a rich table of gold costs over the production range."""
    table = Table(
        title=f"Gold Purchase Cost ({kind.title()})",
        show_header=True,
        header_style="bold magenta",
    )

    table.add_column("Production", style="cyan", justify="right")
    table.add_column("Gold", style="yellow", justify="right")
    table.add_column("Gold/Prod", style="green", justify="right")
    if total_techs is not None:
        table.add_column("Column", style="blue", justify="right")
        table.add_column("Tech Progress", style="white")

    for row in rows:
        cells = [str(row.production), format_gold(row.gold), f"{row.ratio:.2f}"]
        if total_techs is not None and row.column is not None:
            cells.append(f"{row.column:.1f}")
            cells.append(format_tech_progress(row.techs or 0, total_techs))
        table.add_row(*cells)

    return table


def create_sources_table(sources: list[HurryModifierSource]) -> Table:
    """Create a rich table of enabled hurry modifier sources."""
    table = Table(title="Hurry Modifiers", show_header=True, header_style="bold magenta")

    table.add_column("Source", style="cyan")
    table.add_column("Modifier", style="green", justify="right")
    table.add_column("Scope", style="blue")

    for source in sources:
        table.add_row(source.name, f"{source.modifier:+d}%", source.scope.value)

    return table


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Gold purchase cost calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # Unit costs, production 50-1000
  %(prog)s --kind building --purchase       # Full building purchase costs
  %(prog)s --preset cp --exponent 0.7       # Tweak conversion constants
  %(prog)s --catalog catalog.json           # Estimate tech progress per cost
  %(prog)s --hurry-source POLICY_COMMERCE   # Enable a discount source
  %(prog)s --export costs.json              # Export the table to JSON
        """,
    )

    parser.add_argument(
        "--kind",
        type=str,
        default="unit",
        choices=["unit", "building", "project"],
        help="What is being purchased (default: unit)",
    )
    parser.add_argument("--min", type=int, default=50, help="Lowest production cost")
    parser.add_argument("--max", type=int, default=1000, help="Highest production cost")
    parser.add_argument("--step", type=int, default=50, help="Production cost step")

    parser.add_argument(
        "--preset",
        type=str,
        choices=sorted(GOLD_PURCHASE_PRESETS),
        help="Gold purchase constants preset (default: from config, else vp)",
    )
    parser.add_argument("--exponent", type=float, help="Override the cost exponent")

    parser.add_argument(
        "--config", type=Path, help="Path to session configuration JSON file"
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        help="Path to catalog JSON file (enables tech progress estimates)",
    )

    parser.add_argument(
        "--tech-progress",
        type=int,
        help="Fixed tech progress percent (default: estimated from the catalog)",
    )
    parser.add_argument(
        "--hurry-source",
        action="append",
        default=[],
        metavar="ID",
        help="Enable a hurry modifier source (building or policy id, repeatable)",
    )
    parser.add_argument(
        "--purchase",
        action="store_true",
        help="Full building purchase instead of investment",
    )

    parser.add_argument("--export", type=Path, help="Export cost table to JSON file")
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Minimal output (only production and gold)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logging"
    )

    return parser.parse_args()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def resolve_constants(
    args: argparse.Namespace, constants: GoldPurchaseConstants
) -> GoldPurchaseConstants:
    """Apply --preset and --exponent on top of the configured constants."""
    if args.preset:
        constants = GOLD_PURCHASE_PRESETS[args.preset]
    if args.exponent is not None:
        constants = dataclasses.replace(constants, production_exponent=args.exponent)
    return constants


def build_correlation_for_kind(
    catalog: Catalog, tech_data: TechProgressData, kind: str
) -> ProductionColumnCorrelation:
    """Correlate catalog production costs with prerequisite tech columns."""
    # Projects have no catalog entries of their own; buildings are the closest
    entity_kind = EntityKind.UNIT if kind == "unit" else EntityKind.BUILDING
    samples = samples_from_entities(catalog.entities, tech_data, entity_kind)
    return build_correlation(samples, entity_kind)


def compute_cost(
    kind: str,
    production: int,
    context: GameContext,
    constants: GoldPurchaseConstants,
    hurry_modifier: int,
    tech_progress: int,
    is_investment: bool,
) -> int:
    """Gold cost for one production value."""
    if kind == "unit":
        return unit_purchase_cost(
            production,
            context,
            UnitPurchaseOptions(
                hurry_modifier=hurry_modifier,
                tech_progress=tech_progress,
                constants=constants,
            ),
        )
    if kind == "building":
        return building_purchase_cost(
            production,
            context,
            BuildingPurchaseOptions(
                hurry_modifier=hurry_modifier,
                tech_progress=tech_progress,
                is_investment=is_investment,
                constants=constants,
            ),
        )
    return project_purchase_cost(production, context, hurry_modifier, constants)


def main() -> None:
    """Print gold purchase costs over a production range."""
    args = parse_args()
    configure_logging(args.verbose)

    if args.step <= 0 or args.min <= 0 or args.max < args.min:
        console.print("[red]Production range must be positive and ascending[/red]")
        return

    try:
        context, constants = load_config(args.config)
        constants = resolve_constants(args, constants)
    except (OSError, ValueError) as e:
        console.print(f"[red]✗ Invalid configuration: {e}[/red]")
        return

    try:
        catalog = load_catalog(args.catalog) if args.catalog else Catalog()
    except (OSError, ValueError) as e:
        console.print(f"[red]✗ Could not load catalog: {e}[/red]")
        return

    tech_data = None
    correlation = None
    if catalog.technologies:
        tech_data = build_tech_progress_data(catalog.technologies)
        correlation = build_correlation_for_kind(catalog, tech_data, args.kind)

    # Hurry modifier sources: catalog buildings plus Industry policies
    source_index = industry_policy_sources()
    source_index.update(index_sources(catalog.entities))
    # Repeated ids count once, in the order given
    enabled_ids = list(dict.fromkeys(args.hurry_source))
    unknown = [s for s in enabled_ids if s not in source_index]
    for source_id in unknown:
        logger.warning("Unknown hurry modifier source %s, ignoring", source_id)
    enabled_sources = [
        source
        for source_id in enabled_ids
        if source_id in source_index
        for source in source_index[source_id]
    ]
    hurry_modifier = total_modifier(enabled_ids, source_index)

    if not args.quiet:
        console.print(
            Panel.fit(
                "[bold cyan]Gold Purchase[/bold cyan]\n"
                "[yellow]Cost Calculator[/yellow]",
                border_style="blue",
            )
        )
        console.print(
            f"\n[bold]Game speed:[/bold] "
            f"[magenta]{context.game_speed.speed_type.value}[/magenta] "
            f"(hurry {context.game_speed.hurry_percent}%)"
        )
        console.print(
            f"[bold]Constants:[/bold] gold/prod "
            f"[cyan]{constants.gold_per_production}[/cyan], exponent "
            f"[cyan]{constants.production_exponent}[/cyan], divisor "
            f"[cyan]{constants.visible_divisor}[/cyan]"
        )
        if enabled_sources:
            console.print(create_sources_table(enabled_sources))
            console.print(f"[bold]Total hurry modifier:[/bold] {hurry_modifier:+d}%")

    rows: list[CostRow] = []
    for production in range(args.min, args.max + 1, args.step):
        row = CostRow(
            production=production,
            gold=0,
            ratio=gold_to_production_ratio(production, context, constants),
        )

        if tech_data is not None and correlation is not None:
            row.column = column_from_correlation(correlation, production)
            row.tech_progress = tech_progress_from_correlation(
                tech_data, correlation, production
            )
            row.techs = techs_from_correlation(tech_data, correlation, production)

        if args.tech_progress is not None:
            tech_progress = args.tech_progress
        else:
            tech_progress = row.tech_progress or 0

        row.gold = compute_cost(
            args.kind,
            production,
            context,
            constants,
            hurry_modifier,
            tech_progress,
            is_investment=not args.purchase,
        )
        rows.append(row)

    if args.quiet:
        for row in rows:
            print(f"{row.production}\t{row.gold}")
    else:
        total_techs = tech_data.total_techs if tech_data is not None else None
        console.print(create_cost_table(rows, args.kind, total_techs))

    if args.export:
        export_data = {
            "kind": args.kind,
            "game_speed": context.game_speed.speed_type.value,
            "constants": dataclasses.asdict(constants),
            "hurry_modifier": hurry_modifier,
            "hurry_sources": [s.id for s in enabled_sources],
            "rows": [dataclasses.asdict(row) for row in rows],
        }

        args.export.write_text(json.dumps(export_data, indent=2))
        console.print(f"\n[green]✓ Exported to {args.export}[/green]")


if __name__ == "__main__":
    main()
