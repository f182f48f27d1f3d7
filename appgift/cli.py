import typer
from pathlib import Path
from typing import Optional
from docx.opc.exceptions import PackageNotFoundError
from appgift.adapters.sources import read_source_text
from appgift.core.config import load_config
from appgift.core.enricher import enrich_json_with_mapping
from appgift.core.exporter import build_gift_from_json, export_gift, load_questions
from appgift.core.parser import parse_gift, parse_gift_file, questions_to_json
from appgift.services.pipeline import run_pipeline

app = typer.Typer(add_completion=False, no_args_is_help=True)

RUNTIME_ERROR = 1

def _fail(e: Exception):
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=RUNTIME_ERROR)

def _config(path: Optional[Path], quiet: bool):
    cfg = load_config(str(path) if path else None)
    # stdout carries the result when no output file is given
    return {**cfg, "verbose": False} if quiet else cfg

@app.command()
def parse(
    input_file: Path,
    output: Optional[Path] = typer.Argument(None),
    config: Optional[Path] = typer.Option(None, "--config"),
):
    """GIFT (.gift/.txt/.docx) -> JSON."""
    cfg = _config(config, quiet=output is None)
    try:
        if output is None:
            typer.echo(questions_to_json(parse_gift(read_source_text(input_file), cfg), cfg))
        else:
            jp = parse_gift_file(input_file, output, cfg)
            typer.echo(f"JSON: {jp}", err=True)
    except (ValueError, OSError, PackageNotFoundError) as e:
        _fail(e)

@app.command()
def export(
    input_file: Path,
    output: Optional[Path] = typer.Argument(None),
    config: Optional[Path] = typer.Option(None, "--config"),
):
    """JSON -> GIFT."""
    cfg = _config(config, quiet=output is None)
    try:
        if output is None:
            typer.echo(export_gift(load_questions(input_file)), nl=False)
        else:
            gp = build_gift_from_json(input_file, output, cfg)
            typer.echo(f"GIFT: {gp}", err=True)
    except (ValueError, OSError) as e:
        _fail(e)

@app.command()
def enrich(
    json_file: Path,
    mapping_dir: Path,
    out: Optional[Path] = typer.Option(None, "--out"),
    config: Optional[Path] = typer.Option(None, "--config"),
):
    """Fill names/categories from Excel sheets keyed by idnumber."""
    cfg = _config(config, quiet=False)
    try:
        jp = enrich_json_with_mapping(str(json_file), str(mapping_dir), json_out=str(out) if out else None, config=cfg)
    except (ValueError, OSError) as e:
        _fail(e)
    typer.echo(f"Enriched JSON: {jp}")

@app.command()
def batch(
    input_dir: Path,
    output_dir: Path,
    mapping_dir: Optional[Path] = typer.Option(None, "--mapping-dir"),
    config: Optional[Path] = typer.Option(None, "--config"),
):
    """Convert every file of a folder (GIFT/Word -> JSON, JSON -> GIFT)."""
    cfg = _config(config, quiet=False)
    try:
        total = run_pipeline(str(input_dir), str(output_dir),
                             mapping_dir=str(mapping_dir) if mapping_dir else None, config=cfg)
    except (ValueError, OSError) as e:
        _fail(e)
    typer.echo(f"Done: {total} file(s) -> {output_dir}")

if __name__ == "__main__":
    app()
