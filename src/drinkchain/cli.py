import os
import sys

import typer

from drinkchain.config import settings
from drinkchain.logging import logger, get_run_id

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main():
    """
    DrinkChain supply-chain assistant CLI.
    """
    pass


@app.command(name="doctor")
def doctor():
    """
    Check system configuration and environment health.
    """
    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🩺 DrinkChain Doctor\n")

    # ── Check 1: Environment / Interpreter ──────────────────────────────────
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Prefix: {sys.prefix}")
    print(f"  Run ID: {get_run_id()}")
    passed += 1

    # ── Check 2: OpenAI API Key ──────────────────────────────────────────────
    print("\n[Configuration]")
    api_key_ok = bool(
        settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.get_secret_value()
    )
    if api_key_ok:
        print("  OPENAI_API_KEY:              ✅ Set")
        passed += 1
    else:
        print("  OPENAI_API_KEY:              ❌ Missing")
        failures.append("OPENAI_API_KEY is not set — add it to .env")

    print(f"  OPENAI_MODEL_SYNTHESIS:      {settings.OPENAI_MODEL_SYNTHESIS}")
    print(f"  STRATEGY_STORE_KEY:          {settings.STRATEGY_STORE_KEY}")
    print(f"  DATABASE_URL:                {settings.DATABASE_URL}")

    # ── Check 3: Data directory ──────────────────────────────────────────────
    print("\n[Data Directory]")
    data_dir = settings.data_dir
    if data_dir.exists() and data_dir.is_dir():
        if os.access(data_dir, os.W_OK):
            print(f"  {data_dir}/                   ✅ Found and writable: {data_dir.absolute()}")
            passed += 1
        else:
            print(f"  {data_dir}/                   ❌ Not writable")
            failures.append(f"{data_dir} is not writable — strategies cannot be persisted")
    else:
        print(f"  {data_dir}/                   ⚠️  Missing (created on first save): {data_dir.absolute()}")
        passed += 1

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    else:
        print(f"Result: {passed}/{total} checks passed — all good ✅")
        print()


strategies_app = typer.Typer(help="Saved custom strategies.")
app.add_typer(strategies_app, name="strategies")


def _store():
    from drinkchain.infra.storage import SQLiteKeyValueStorage
    from drinkchain.strategies.store import StrategyStore
    return StrategyStore(SQLiteKeyValueStorage())


@strategies_app.command("list")
def strategies_list():
    """List saved strategies in creation order."""
    strategies = _store().list()
    if not strategies:
        print("No saved strategies.")
        return
    for s in strategies:
        factors = ", ".join(f for f in s.factors if f)
        print(f"[{s.id}] {s.name}: {factors}")


@strategies_app.command("create")
def strategies_create(
    name: str,
    factors: list[str] = typer.Argument(..., help="Up to three factors, highest priority first"),
):
    """Save a new custom strategy."""
    try:
        strategy = _store().create(name, factors)
    except ValueError as e:
        print(f"❌ Invalid strategy: {e}")
        raise typer.Exit(code=1)
    print(f"✅ Saved strategy {strategy.name} ({strategy.id})")


@strategies_app.command("delete")
def strategies_delete(strategy_id: str):
    """Delete a saved strategy."""
    if not _store().delete(strategy_id):
        print(f"❌ Strategy {strategy_id} not found")
        raise typer.Exit(code=1)
    print(f"✅ Deleted strategy {strategy_id}")


def _lens(strategy: str, strategy_id: str | None, context: str | None):
    from drinkchain.domain.models import StrategyType
    from drinkchain.strategies.resolver import StrategyResolver

    resolver = StrategyResolver(_store())
    resolver.select(StrategyType(strategy.upper()), context, strategy_id)
    return resolver.lens()


@app.command(name="trends")
def trends(
    strategy: str = typer.Option("DEFAULT", help="DEFAULT, COST, UNIQUE, QUALITY or CUSTOM"),
    strategy_id: str | None = typer.Option(None, "--id", help="Saved strategy id"),
    context: str | None = typer.Option(None, help="Factors for an unsaved CUSTOM strategy"),
):
    """Print a trend analysis for the chosen strategy."""
    from drinkchain.services.trends_service import TrendService
    from drinkchain.synthesis.client import SynthesisClient

    result = TrendService(SynthesisClient()).analyze(_lens(strategy, strategy_id, context))
    print(f"\n市场现状分析: {result.market_analysis}")
    print(f"策略结论: {result.strategic_conclusion}")
    print(f"来源: {result.source.label} · {result.source.name}\n")
    for i, item in enumerate(result.items, 1):
        print(f"{i}. {item.title} [{item.category}] {item.growth_rate}")
        print(f"   {item.description}")


@app.command(name="supply")
def supply(
    category: str = typer.Option("general", help="Listing category"),
    strategy: str = typer.Option("DEFAULT", help="DEFAULT, COST, UNIQUE, QUALITY or CUSTOM"),
    strategy_id: str | None = typer.Option(None, "--id", help="Saved strategy id"),
    type_filter: str = typer.Option("ALL", "--type", help="ALL, SUPPLY or DEMAND"),
):
    """Print synthesized supply/demand listings."""
    from datetime import datetime, timezone

    from drinkchain.services.supply_service import SupplyService
    from drinkchain.supply.lifecycle import TypeFilter, remaining_days
    from drinkchain.synthesis.client import SynthesisClient

    service = SupplyService(SynthesisClient())
    service.refresh(_lens(strategy, strategy_id, None), category)
    now = datetime.now(timezone.utc)
    listings = service.listings(TypeFilter(type_filter.upper()), now=now)
    if not listings:
        print("No listings available.")
        return
    for item in listings:
        print(
            f"[{item.type.value}] {item.product} — {item.company_name}, {item.location}, "
            f"{item.price} (剩 {remaining_days(item, now)} 天)"
        )


if __name__ == "__main__":
    app()
