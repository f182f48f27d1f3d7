# -*- coding: utf-8 -*-
from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from docx.opc.exceptions import PackageNotFoundError

# --- Core steps ---
from appgift.core.config import load_config
from appgift.core.enricher import enrich_json_with_mapping
from appgift.core.exporter import build_gift_from_json
from appgift.core.parser import parse_gift_file

# per-file failures that are reported and skipped; GiftError is a ValueError
_FILE_ERRORS = (ValueError, OSError, KeyError, PackageNotFoundError)


# ========== Small helpers ==========
def _safe_progress(cb: Optional[Callable[[int, int, str], None]], i: int, total: int, msg: str):
    try:
        if cb:
            cb(i, total, msg)
    except Exception:
        # never let the caller's UI break the run
        pass

def _file_ok(p: Optional[Path]) -> bool:
    try:
        return bool(p and p.exists() and p.stat().st_size > 0)
    except OSError:
        return False

def _discover(in_dir: Path, patterns: List[str]) -> Tuple[List[Path], List[Path]]:
    sources = sorted({
        p for pat in patterns for p in in_dir.rglob(pat)
        if not p.name.startswith("~$")  # Word temp files
    })
    jsons = sorted(p for p in in_dir.rglob("*.json") if not p.name.startswith("~$"))
    return sources, jsons


# ========== GIFT/DOCX -> JSON ==========
def _process_one_source(
    src: Path,
    out_root: Path,
    in_root: Path,
    mapping_dir: Optional[str],
    cfg: Dict[str, Any],
) -> Tuple[Optional[Path], Optional[str]]:
    """
    src (.gift/.txt/.docx) -> <out_root>/<relative path>.json -> (enrich)
    Returns: (json_path | None, error | None)
    """
    verbose = cfg["verbose"]
    try:
        out_json = (out_root / src.relative_to(in_root)).with_suffix(".json")
        if verbose:
            print(f"[GIFT] Parse: {src}")
        json_path = Path(parse_gift_file(src, out_json, cfg))
        if not _file_ok(json_path):
            raise OSError(f"Parser did not write JSON for '{src.name}': {json_path}")

        if mapping_dir:
            if verbose:
                print(f"[GIFT] Enrich with mapping_dir={mapping_dir!r}")
            json_path = Path(enrich_json_with_mapping(str(json_path), mapping_dir, config=cfg))
        return json_path, None

    except _FILE_ERRORS as e:
        if verbose:
            print(f"[GIFT] FAIL {src} :: {e}")
        return None, str(e)


# ========== JSON -> GIFT ==========
def _process_one_json(
    src_json: Path,
    out_root: Path,
    in_root: Path,
    cfg: Dict[str, Any],
) -> Tuple[Optional[Path], Optional[str]]:
    """JSON mode: mirror the input tree as <out_root>/<relative path>.gift"""
    try:
        out_gift = (out_root / src_json.relative_to(in_root)).with_suffix(".gift")
        if not _file_ok(src_json):
            raise OSError(f"Empty or missing JSON file: {src_json}")
        gift_path = Path(build_gift_from_json(src_json, out_gift, cfg))
        return gift_path, None

    except _FILE_ERRORS as e:
        if cfg["verbose"]:
            print(f"[JSON] FAIL {src_json} :: {e}")
        return None, str(e)


# ========== Public API ==========
def run_pipeline(
    input_folder: str,
    output_folder: str,
    progress_cb: Optional[Callable[[int, int, str], None]] = None,
    mapping_dir: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> int:
    """
    GIFT mode:
        *.gift / *.txt / *.docx -> parse -> (enrich) -> <stem>.json
    JSON mode:
        *.json -> <stem>.gift
    A failing file is reported through progress_cb and the run goes on.
    Returns: total number of input files attempted.
    """
    cfg = {**load_config(None), **(config or {})}
    in_dir = Path(input_folder)
    out_dir = Path(output_folder)

    if not in_dir.exists():
        raise FileNotFoundError(f"Input folder not found: {in_dir}")
    out_dir.mkdir(parents=True, exist_ok=True)

    sources, jsons = _discover(in_dir, list(cfg["input_patterns"]))
    total = len(sources) + len(jsons)
    if not total:
        raise FileNotFoundError(f"No GIFT, Word or JSON files in input folder: {in_dir}")

    if cfg["verbose"]:
        print(f"[RUN] {len(sources)} source(s), {len(jsons)} JSON file(s) | input={in_dir} -> output={out_dir}")

    done = 0
    for src in sources:
        _safe_progress(progress_cb, done, total, f"START GIFT {src}")
        json_path, err = _process_one_source(src, out_dir, in_dir, mapping_dir, cfg)
        done += 1
        if err:
            _safe_progress(progress_cb, done, total, f"FAIL  GIFT {src} :: {err}")
        else:
            _safe_progress(progress_cb, done, total, f"OK    GIFT {src} -> {json_path}")

    for jp in jsons:
        _safe_progress(progress_cb, done, total, f"START JSON {jp}")
        gift_path, err = _process_one_json(jp, out_dir, in_dir, cfg)
        done += 1
        if err:
            _safe_progress(progress_cb, done, total, f"FAIL  JSON {jp} :: {err}")
        else:
            _safe_progress(progress_cb, done, total, f"OK    JSON {jp} -> {gift_path}")

    _safe_progress(progress_cb, total, total, f"SUMMARY :: TOTAL={total}")
    return total
