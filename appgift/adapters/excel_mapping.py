# appgift/adapters/excel_mapping.py
# -*- coding: utf-8 -*-
from __future__ import annotations

import pandas as pd
from pathlib import Path
from typing import Optional, Tuple

COLUMNS = ["A", "B", "C"]  # idnumber, name, category


# ---------- Read Excel ----------
def normalise_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Keep the first three columns as A/B/C, strings, stripped."""
    df = df.copy()
    while df.shape[1] < 3:
        df[df.shape[1]] = ""
    df = df.iloc[:, :3]
    df.columns = COLUMNS
    for c in COLUMNS:
        df[c] = df[c].fillna("").astype(str).str.strip()
    return df


def _read_one_excel(p: Path) -> pd.DataFrame:
    return normalise_frame(pd.read_excel(p, sheet_name=0, header=None, dtype=str))


def load_mapping_dir(dir_path: str) -> pd.DataFrame:
    d = Path(dir_path)
    if not d.exists():
        raise FileNotFoundError(f"Mapping folder not found: {dir_path}")
    frames = []
    for pat in ("*.xlsx", "*.xls"):
        for p in sorted(d.glob(pat)):
            if p.name.startswith("~$"):
                continue
            frames.append(_read_one_excel(p))
    if not frames:
        return pd.DataFrame(columns=COLUMNS)
    return pd.concat(frames, ignore_index=True)


# ---------- Base code ----------
def base_code(idnumber: str) -> str:
    """
    'TO12.04.1.F02.a' -> 'TO12.04.1.F02';
    a last part that is not purely letters is kept.
    """
    idnumber = (idnumber or "").strip()
    if not idnumber:
        return ""
    parts = idnumber.split(".")
    if len(parts) >= 2 and parts[-1].isalpha():
        return ".".join(parts[:-1])
    return idnumber


# ---------- Lookup ----------
def lookup_name_category(idnumber: str, df: "pd.DataFrame") -> Tuple[Optional[str], Optional[str]]:
    """
    Rows where A == idnumber win; otherwise A == base code, then A starting
    with the base code. Among candidates, a row with a category (C not
    empty/"0") is preferred.
    Returns (name, category) where name = "<idnumber> <B>"; (None, None) if no row.
    """
    if df is None or df.empty:
        return None, None

    qid = (idnumber or "").strip()
    if not qid:
        return None, None

    base = base_code(qid)
    candidates = df[df["A"] == qid]
    if candidates.empty:
        candidates = pd.concat([df[df["A"] == base], df[df["A"].str.startswith(base)]], ignore_index=True)
    if candidates.empty:
        return None, None

    c_series = candidates["C"].astype(str).str.strip()
    non_empty_c = candidates[(c_series != "") & (c_series != "0")]
    row = non_empty_c.iloc[0] if not non_empty_c.empty else candidates.iloc[0]

    col_b = str(row.get("B") or "").strip()
    col_c = str(row.get("C") or "").strip()
    if col_c == "0":
        col_c = ""

    name = f"{qid} {col_b}".strip()
    return name, (col_c or None)
