"""Integration tests for the gnomad-pli CLI using CliRunner."""

import json
from pathlib import Path
from unittest.mock import patch

import httpx
import polars as pl
import pytest
from click.testing import CliRunner

from gnomad_pli.cli.main import cli


@pytest.fixture
def values_file(tmp_path: Path) -> Path:
    values_path = tmp_path / "gnomADpLI_values.txt"
    values_path.write_text(
        "gene\toe_mis\toe_syn\tpLI\toe_lof\toe_syn_upper\toe_mis_upper\toe_lof_upper\tsyn_z\tmis_z\tlof_z\n"
        "BRCA1\t0.85\t1.02\t0.99951\t0.12\t1.10\t0.91\t0.20\t-0.52\t1.81\t5.43\n"
        "TP53\t0.71\t0.98\t0.1\t0.33\t1.05\t0.80\t0.51\t0.10\t2.20\t0\n"
    )
    return values_path


@pytest.fixture
def test_config(tmp_path: Path, values_file: Path) -> Path:
    """Create a config YAML pointing at the test values file."""
    config_path = tmp_path / "test_config.yaml"
    config_path.write_text(f"""
values_file: {values_file}

source:
  constraint_url: https://example.org/constraint.tsv
  timeout_seconds: 10
  gnomad_version: v2.1.1
""")
    return config_path


def test_cli_help():
    """Test top-level help lists the commands."""
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])

    assert result.exit_code == 0
    for command in ('info', 'header', 'lookup', 'annotate', 'build-values'):
        assert command in result.output


def test_info_with_config(test_config: Path, values_file: Path):
    """Test info shows the configured values file."""
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'info'])

    assert result.exit_code == 0
    assert str(values_file) in result.output
    assert "Exists: yes" in result.output
    assert "https://example.org/constraint.tsv" in result.output


def test_info_invalid_config(tmp_path: Path):
    """Test info reports an invalid config and exits non-zero."""
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("source:\n  timeout_seconds: -5\n")

    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(config_path), 'info'])

    assert result.exit_code == 1
    assert "Error loading config" in result.output


def test_header():
    """Test header lists the ten output fields."""
    runner = CliRunner()
    result = runner.invoke(cli, ['header'])

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 10
    assert lines[0] == "gnomADpLI\tgnomAD pLI value for gene"


def test_lookup_tsv(test_config: Path):
    """Test lookup prints one TSV row per symbol."""
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'lookup', 'brca1', 'TP53', 'NOPE'])

    assert result.exit_code == 0
    lines = result.output.strip("\n").splitlines()
    assert lines[0].startswith("gene\tgnomADpLI\tgnomADsyn_z")

    rows = {line.split("\t")[0]: line.split("\t") for line in lines[1:]}
    assert rows["brca1"][1] == "1.00"
    assert rows["TP53"][1] == "0.10"
    # lof_z of "0" is reported empty
    assert rows["TP53"][4] == ""
    assert rows["NOPE"][1:] == [""] * 10


def test_lookup_repeated_symbol(test_config: Path):
    """Test lookup prints a row for every argument, repeats included."""
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(test_config), 'lookup', 'BRCA1', 'BRCA1', 'brca1'])

    assert result.exit_code == 0
    lines = result.output.strip("\n").splitlines()
    assert [line.split("\t")[0] for line in lines[1:]] == ['BRCA1', 'BRCA1', 'brca1']
    assert all(line.split("\t")[1] == "1.00" for line in lines[1:])


def test_lookup_values_file_overrides_config(test_config: Path, tmp_path: Path):
    """Test --values-file takes precedence over values_file in the config."""
    other_values = tmp_path / "other_values.txt"
    other_values.write_text("BRCA1 1 1 0.25 1 1 1 1 1 1 1\n")

    runner = CliRunner()
    result = runner.invoke(cli, [
        '--config', str(test_config),
        'lookup', '--values-file', str(other_values), 'BRCA1',
    ])

    assert result.exit_code == 0
    row = result.output.strip("\n").splitlines()[1].split("\t")
    assert row[:2] == ['BRCA1', '0.25']


def test_lookup_json(values_file: Path):
    """Test lookup --format json with --values-file override."""
    runner = CliRunner()
    result = runner.invoke(cli, [
        'lookup', '--values-file', str(values_file), '--format', 'json', 'BRCA1'
    ])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["BRCA1"]["gnomADpLI"] == "1.00"
    assert data["BRCA1"]["gnomADoe_lof_upper"] == "0.20"


def test_lookup_missing_values_file(tmp_path: Path):
    """Test lookup fails cleanly when the values file is missing."""
    runner = CliRunner()
    result = runner.invoke(cli, [
        'lookup', '--values-file', str(tmp_path / 'missing.txt'), 'BRCA1'
    ])

    assert result.exit_code == 1
    assert "Error loading values file" in result.output


def test_annotate_to_file(test_config: Path, tmp_path: Path):
    """Test annotate appends the gnomAD columns."""
    input_path = tmp_path / "variants.tsv"
    input_path.write_text(
        "Uploaded_variation\tSYMBOL\n"
        "rs1\tBRCA1\n"
        "rs2\ttp53\n"
        "rs3\t-\n"
    )
    output_path = tmp_path / "annotated.tsv"

    runner = CliRunner()
    result = runner.invoke(cli, [
        '--config', str(test_config),
        'annotate', str(input_path),
        '--output', str(output_path),
    ])

    assert result.exit_code == 0
    assert output_path.exists()

    df = pl.read_csv(output_path, separator="\t", infer_schema_length=0)
    assert df.height == 3
    assert df.columns[:2] == ["Uploaded_variation", "SYMBOL"]
    assert "gnomADpLI" in df.columns
    assert df["gnomADpLI"].to_list()[:2] == ["1.00", "0.10"]
    assert df["gnomADpLI"][2] in (None, "")


def test_annotate_stdout_custom_column(values_file: Path, tmp_path: Path):
    """Test annotate to stdout with a custom gene column."""
    input_path = tmp_path / "genes.tsv"
    input_path.write_text("gene_symbol\nBRCA1\n")

    runner = CliRunner()
    result = runner.invoke(cli, [
        'annotate', str(input_path),
        '--gene-column', 'gene_symbol',
        '--values-file', str(values_file),
    ])

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0].split("\t")[:2] == ["gene_symbol", "gnomADpLI"]
    assert lines[1].split("\t")[:2] == ["BRCA1", "1.00"]


def test_annotate_missing_column(values_file: Path, tmp_path: Path):
    """Test annotate exits non-zero when the gene column is absent."""
    input_path = tmp_path / "genes.tsv"
    input_path.write_text("other\nBRCA1\n")

    runner = CliRunner()
    result = runner.invoke(cli, [
        'annotate', str(input_path), '--values-file', str(values_file),
    ])

    assert result.exit_code == 1
    assert "Column 'SYMBOL' not found" in result.output


def test_build_values_from_source(tmp_path: Path):
    """Test build-values converts a local gnomAD table."""
    source = tmp_path / "constraint.tsv"
    source.write_text(
        "gene\ttranscript\toe_mis\toe_syn\tpLI\toe_lof\toe_syn_upper\toe_mis_upper\t"
        "oe_lof_upper\tsyn_z\tmis_z\tlof_z\n"
        "BRCA1\tENST1\t0.85\t1.02\t0.99951\t0.12\t1.10\t0.91\t0.20\t-0.52\t1.81\t5.43\n"
        "brca1\tENST2\t0.50\t0.50\t0.25\t0.50\t0.50\t0.50\t0.50\t0.50\t0.50\t0.50\n"
    )
    output = tmp_path / "values.txt"

    runner = CliRunner()
    result = runner.invoke(cli, [
        'build-values', '--source', str(source), '--output', str(output),
    ])

    assert result.exit_code == 0
    assert "Wrote 1 genes" in result.output
    assert "1 duplicate gene symbols" in result.output
    assert output.read_text().splitlines()[0].startswith("gene\toe_mis\toe_syn\tpLI")


def test_build_values_download(test_config: Path, tmp_path: Path):
    """Test build-values downloads from the configured URL."""
    downloaded = tmp_path / "downloaded.tsv"
    downloaded.write_text("gene\tpLI\nBRCA1\t0.5\n")
    output = tmp_path / "values.txt"

    with patch(
        "gnomad_pli.cli.build_cmd.download_constraint_table", return_value=downloaded
    ) as mock_download:
        runner = CliRunner()
        result = runner.invoke(cli, [
            '--config', str(test_config),
            'build-values', '--output', str(output), '--download-dir', str(tmp_path / 'dl'),
        ])

    assert result.exit_code == 0
    mock_download.assert_called_once()
    assert mock_download.call_args.kwargs["url"] == "https://example.org/constraint.tsv"
    assert mock_download.call_args.kwargs["timeout"] == 10
    assert "Wrote 1 genes" in result.output


def test_build_values_download_error(tmp_path: Path):
    """Test build-values exits non-zero when the download fails."""
    with patch(
        "gnomad_pli.cli.build_cmd.download_constraint_table",
        side_effect=httpx.ConnectError("connection refused"),
    ):
        runner = CliRunner()
        result = runner.invoke(cli, [
            'build-values', '--output', str(tmp_path / 'values.txt'),
            '--download-dir', str(tmp_path / 'dl'),
        ])

    assert result.exit_code == 1
    assert "Error downloading" in result.output
