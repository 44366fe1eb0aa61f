"""Tests for the command line interface."""

from click.testing import CliRunner

from tsydesk.cli import cli


def test_generate_then_run(tmp_path):
    runner = CliRunner()
    data_dir = tmp_path / "data"
    output_dir = tmp_path / "output"

    result = runner.invoke(cli, ["generate", "--data-dir", str(data_dir), "--prices", "3", "--market-data", "6"])
    assert result.exit_code == 0, result.output
    assert (data_dir / "prices.txt").exists()

    result = runner.invoke(
        cli, ["run", "--data-dir", str(data_dir), "--output-dir", str(output_dir), "--log-level", "warning"]
    )
    assert result.exit_code == 0, result.output
    assert "market_data: 42 ingested, 0 skipped" in result.output
    assert (output_dir / "streaming.txt").exists()
    assert (output_dir / "allinquiries.txt").exists()


def test_run_with_config_file(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(f"environment:\n  data_dir: {tmp_path / 'empty'}\n  output_dir: {tmp_path / 'out'}\n")

    result = CliRunner().invoke(cli, ["run", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert f"Output written to {tmp_path / 'out'}" in result.output


def test_run_rejects_unknown_policy():
    result = CliRunner().invoke(cli, ["run", "--listener-errors", "retry"])
    assert result.exit_code != 0


def test_smoke_test():
    result = CliRunner().invoke(cli, ["smoke-test"])
    assert result.exit_code == 0, result.output
    assert "Smoke test passed" in result.output
