# -*- coding: utf-8 -*-
from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from appgift.adapters.excel_mapping import load_mapping_dir, lookup_name_category
from appgift.core.config import load_config
from appgift.core.exporter import load_questions
from appgift.core.models import Question
from appgift.core.parser import questions_to_json


def enrich_questions(questions: List[Question], df: "pd.DataFrame", overwrite: bool = True) -> List[Question]:
    """
    - Look up each question's idnumber in the mapping (A=id, B=name, C=category).
    - Name becomes "<id> <B>" (only replaces an existing name when overwrite=True).
    - A category pseudo-question is inserted before the question whenever the
      mapped category changes.
    Returns new values; `questions` is left as is.
    """
    out: List[Question] = []
    last_category: Optional[str] = None
    for q in questions:
        if q.qtype == "category":
            last_category = q.category
            out.append(q)
            continue

        new_name, new_cat = lookup_name_category(q.idnumber, df)
        if new_cat and new_cat != last_category:
            out.append(Question(qtype="category", category=new_cat))
            last_category = new_cat
        if new_name and (overwrite or not q.name):
            q = dataclasses.replace(q, name=new_name)
        out.append(q)
    return out


def enrich_json_with_mapping(
    json_path: str,
    mapping_dir: str,
    json_out: Optional[str] = None,
    overwrite: bool = True,
    config: Optional[Dict[str, Any]] = None,
) -> str:
    """Read question JSON, enrich from the Excel folder, write JSON (in place by default)."""
    cfg = {**load_config(None), **(config or {})}
    p = Path(json_path)
    questions = load_questions(p)
    df = load_mapping_dir(mapping_dir)

    enriched = enrich_questions(questions, df, overwrite=overwrite)

    out = Path(json_out) if json_out else p
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(questions_to_json(enriched, cfg) + "\n", encoding="utf-8")

    if cfg["verbose"]:
        added = len(enriched) - len(questions)
        print(f"[JSON] Enriched {len(questions)} question(s), {added} category block(s) added -> {out}")
    return str(out)
