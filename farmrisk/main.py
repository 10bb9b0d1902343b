"""CLI entry point for FarmRisk."""

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from farmrisk.api.services.assessment_service import AssessmentService
from farmrisk.config import get_settings
from farmrisk.errors import FarmNotFoundError, PersistenceFailure, PredictionFailure, RequestValidationError
from farmrisk.logger import get_logger
from farmrisk.models.assessment import AssessmentResult
from farmrisk.models.farm import AssessmentRequest
from farmrisk.services.fraud_cases import FraudCaseStore
from farmrisk.services.predictor import RiskPredictorClient

console = Console()
logger = get_logger(__name__)

RISK_COLORS = {"low": "green", "medium": "yellow", "high": "red"}


@click.group()
@click.version_option(version="1.0.0", prog_name="farmrisk")
def cli():
    """FarmRisk: farm credit and insurance risk assessment.

    Combines KCC registry, satellite and weather data with a risk model.
    """
    pass


@cli.command()
@click.option("--farm-id", "-f", required=True, help="KCC registry identifier")
@click.option("--crop", "-c", "crop_type", required=True, help="Crop being insured")
@click.option("--season", "-s", required=True, help="Season (e.g. kharif, rabi)")
@click.option("--lat", type=float, required=True, help="Farm latitude")
@click.option("--lng", type=float, required=True, help="Farm longitude")
@click.option(
    "--irrigation",
    type=click.Choice(["rainfed", "flood", "drip", "sprinkler", "canal", "borewell"]),
    default="rainfed",
    help="Irrigation type (default: rainfed)",
)
@click.option("--borewells", type=int, default=0, help="Number of borewells")
@click.option("--canal", is_flag=True, help="Farm has canal access")
@click.option("--tractor", is_flag=True, help="Farmer owns a tractor")
@click.option("--storage", is_flag=True, help="Farm has storage")
@click.option("--livestock", type=int, default=0, help="Number of livestock")
@click.option("--sum-insured", type=float, default=None, help="Insured sum (default from config)")
def assess(farm_id, crop_type, season, lat, lng, irrigation, borewells, canal, tractor, storage, livestock, sum_insured):
    """Assess risk, premium and improvements for a farm."""
    logger.info("=" * 60)
    logger.info(f"CLI assessment started for farm {farm_id}")

    try:
        settings = get_settings()
    except Exception as e:
        logger.error(f"Configuration error: {e}")
        console.print(f"[red]Configuration error:[/red] {e}")
        raise SystemExit(1)

    request = AssessmentRequest(
        farm_id=farm_id,
        crop_type=crop_type,
        season=season,
        gps_latitude=lat,
        gps_longitude=lng,
        irrigation_type=irrigation,
        borewell_count=borewells,
        has_canal_access=canal,
        owns_tractor=tractor,
        has_storage=storage,
        livestock_count=livestock,
        sum_insured=sum_insured,
    )

    service = AssessmentService(settings)
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Assessing farm...", total=None)
            result = service.assess(request)
            progress.update(task, completed=True)

        _display_assessment(result)
        logger.info("CLI assessment completed successfully")

    except (RequestValidationError, FarmNotFoundError) as e:
        logger.warning(str(e))
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
    except PredictionFailure as e:
        console.print(f"[red]Risk predictor unavailable:[/red] {e}")
        console.print("Check [bold]farmrisk ml-health[/bold] and PREDICTOR_BASE_URL.")
        raise SystemExit(1)
    except Exception as e:
        logger.error(f"Error during assessment: {e}", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
    finally:
        service.close()


def _display_assessment(result: AssessmentResult):
    """Display an assessment result."""
    color = RISK_COLORS.get(result.risk_category, "white")
    console.print()
    console.print(
        Panel(
            f"[bold]Farmer:[/bold] {result.farmer_name} ({result.farmer_id})\n"
            f"[bold]Risk score:[/bold] [{color}]{result.final_risk_score:.1f} "
            f"({result.risk_category.upper()})[/{color}]  "
            f"confidence {result.confidence_level:.0%}\n"
            f"[bold]Premium:[/bold] ₹{result.recommended_premium:,.0f} "
            f"(district avg ₹{result.district_avg_premium:,.0f}, "
            f"savings {result.savings_percent:+.1f}%)\n"
            f"[bold]Trust score:[/bold] {result.trust_score:.1f}  "
            f"[bold]Fraud score:[/bold] {result.fraud_score:.0f} ({result.fraud_recommendation})",
            title="Risk Assessment",
            border_style=color,
        )
    )

    if result.scores:
        table = Table(title="Score Breakdown", show_header=True)
        table.add_column("Component", style="bold")
        table.add_column("Score", justify="right")
        for name, score in result.scores.items():
            table.add_row(name.replace("_", " ").title(), f"{score:.1f}")
        console.print(table)

    if result.risk_factors:
        console.print()
        console.print("[bold]Risk factors[/bold]")
        for factor in result.risk_factors:
            console.print(f"  • {factor}")

    if result.improvement_suggestions:
        table = Table(title="Improvement Suggestions", show_header=True)
        table.add_column("#", style="dim")
        table.add_column("Action", style="bold")
        table.add_column("Impact", justify="center")
        table.add_column("Score +", justify="right")
        table.add_column("Premium saving", justify="right")
        table.add_column("Cost", justify="right")
        table.add_column("Subsidy", justify="right")

        for s in result.improvement_suggestions:
            table.add_row(
                str(s.priority_rank),
                s.action,
                s.impact,
                str(s.score_increase),
                f"₹{s.premium_savings:,}",
                f"₹{s.estimated_cost:,.0f}",
                f"{s.subsidy_percent}%" if s.govt_subsidy_available else "-",
            )
        console.print()
        console.print(table)

    console.print()
    console.print(
        f"[dim]Sources: {', '.join(result.data_sources)} | "
        f"{result.processing_time_ms} ms | {result.assessment_id}[/dim]"
    )


@cli.command()
def ml_health():
    """Check whether the risk predictor is reachable."""
    settings = get_settings()
    predictor = RiskPredictorClient(settings)
    try:
        health = predictor.health()
    finally:
        predictor.close()

    color = "green" if health.status == "healthy" else "red"
    latency = f" ({health.latency_ms:.0f} ms)" if health.latency_ms is not None else ""
    console.print(f"[{color}]{health.status}[/{color}] {health.message}{latency}")
    if health.status != "healthy":
        raise SystemExit(1)


@cli.command()
@click.option("--limit", "-n", type=int, default=20, help="Number of cases to show (default: 20)")
@click.option(
    "--severity",
    type=click.Choice(["critical", "high", "medium"]),
    default=None,
    help="Only show cases of this severity",
)
def fraud_cases(limit: int, severity: str | None):
    """List recorded fraud cases."""
    settings = get_settings()
    store = FraudCaseStore(settings.fraud_db_path)
    try:
        cases = store.list_cases(limit=limit, severity=severity)
    except PersistenceFailure as e:
        logger.error(str(e))
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if not cases:
        console.print("[yellow]No fraud cases recorded.[/yellow]")
        return

    table = Table(title="Fraud Cases", show_header=True)
    table.add_column("Case", style="dim")
    table.add_column("Farm", style="bold")
    table.add_column("Farmer")
    table.add_column("Severity", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Date")
    table.add_column("Flags")

    for case in cases:
        severity_color = "red" if case.severity == "critical" else "yellow"
        table.add_row(
            case.id,
            case.farm_id,
            case.farmer_name,
            f"[{severity_color}]{case.severity}[/{severity_color}]",
            f"{case.fraud_score:.0f}",
            case.assessment_date,
            ", ".join(f.type for f in case.flags),
        )

    console.print(table)


if __name__ == "__main__":
    cli()
