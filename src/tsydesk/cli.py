"""TSYDesk CLI."""

import logging
import sys
import tempfile

import click

from tsydesk.app import TradingSystem
from tsydesk.config_loader import load_config_with_overrides
from tsydesk.constants import LOG_FORMAT
from tsydesk.feeds.generator import generate_feeds


@click.group()
def cli():
    """TSYDesk Command Line Interface."""
    pass


@cli.command()
@click.option("--config", type=click.Path(exists=True), help="Path to configuration file")
@click.option("--data-dir", help="Override input feed directory")
@click.option("--output-dir", help="Override output directory")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override log level",
)
@click.option(
    "--listener-errors",
    type=click.Choice(["propagate", "isolate"], case_sensitive=False),
    help="Abort on a failing listener, or log it and carry on",
)
def run(config, data_dir, output_dir, log_level, listener_errors):
    """Replay the input feeds through the trading system."""
    cfg = load_config_with_overrides(
        config,
        data_dir=data_dir,
        output_dir=output_dir,
        log_level=log_level,
        listener_errors=listener_errors,
    )
    system = TradingSystem(cfg)
    system.setup_logging()

    try:
        summary = system.run()
    except Exception as e:
        click.echo(f"Fatal error: {e}", err=True)
        sys.exit(1)

    for name, stats in summary.feeds.items():
        click.echo(f"{name}: {stats.ingested} ingested, {stats.skipped} skipped")
    click.echo(f"Output written to {cfg.output_path}")


@cli.command()
@click.option("--data-dir", default="./data", show_default=True, help="Directory to write feeds to")
@click.option("--prices", default=100, show_default=True, help="Price records per ticker")
@click.option("--trades", default=10, show_default=True, help="Trade records per ticker")
@click.option("--market-data", default=100, show_default=True, help="Order book records per ticker")
@click.option("--inquiries", default=10, show_default=True, help="Inquiry records per ticker")
@click.option("--seed", default=0, show_default=True, help="Random seed")
def generate(data_dir, prices, trades, market_data, inquiries, seed):
    """Generate sample input feeds."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    feeds = generate_feeds(
        data_dir,
        prices=prices,
        trades=trades,
        market_data=market_data,
        inquiries=inquiries,
        seed=seed,
    )
    for path in (feeds.prices, feeds.trades, feeds.market_data, feeds.inquiries):
        click.echo(f"Wrote {path}")


@cli.command()
@click.option("--config", type=click.Path(exists=True), help="Path to configuration file")
def smoke_test(config):
    """Run generated sample feeds through a fresh system in a temp directory."""
    try:
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config_with_overrides(config, data_dir=f"{tmp}/data", output_dir=f"{tmp}/output")
            generate_feeds(cfg.data_path, prices=5, trades=2, market_data=5, inquiries=2)
            summary = TradingSystem(cfg).run()
        if summary.skipped:
            raise RuntimeError(f"{summary.skipped} generated records were skipped")
        click.echo(f"Smoke test passed: {summary.ingested} records flowed through the system.")
    except Exception as e:
        click.echo(f"Smoke test failed: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()

# Console script entry point
main = cli
