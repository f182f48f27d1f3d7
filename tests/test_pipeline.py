import json

import pandas as pd
import pytest

from appgift.core.parser import parse_gift, questions_to_json
from appgift.services.pipeline import run_pipeline

QUIET = {"verbose": False}


@pytest.fixture
def folders(tmp_path):
    src = tmp_path / "in"
    (src / "sub").mkdir(parents=True)
    (src / "good.gift").write_text("// [id:SA-1]\nQ {T}\n", encoding="utf-8")
    (src / "sub" / "bad.gift").write_text("Q {\n", encoding="utf-8")
    (src / "quiz.json").write_text(questions_to_json(parse_gift("::A::Q {=a ~b}")), encoding="utf-8")
    (src / "notes.md").write_text("not a quiz", encoding="utf-8")
    return src, tmp_path / "out"


def test_run_pipeline_reports_failures_and_continues(folders):
    src, out = folders
    messages = []
    total = run_pipeline(str(src), str(out), progress_cb=lambda i, n, m: messages.append(m), config=QUIET)

    assert total == 3
    assert (out / "good.json").exists()
    assert not (out / "sub" / "bad.json").exists()
    assert parse_gift((out / "quiz.gift").read_text(encoding="utf-8"))[0].name == "A"
    assert any(m.startswith("FAIL  GIFT") and "bad.gift" in m for m in messages)
    assert messages[-1] == "SUMMARY :: TOTAL=3"


def test_run_pipeline_with_mapping(folders, tmp_path):
    src, out = folders
    maps = tmp_path / "maps"
    maps.mkdir()
    pd.DataFrame([["SA-1", "Capitals", "Geo"]]).to_excel(maps / "ids.xlsx", header=False, index=False)

    run_pipeline(str(src), str(out), mapping_dir=str(maps), config=QUIET)
    data = json.loads((out / "good.json").read_text(encoding="utf-8"))
    assert data[0] == {"qtype": "category", "category": "Geo"}
    assert data[1]["name"] == "SA-1 Capitals"


def test_broken_progress_callback_is_ignored(folders):
    src, out = folders

    def boom(i, n, m):
        raise RuntimeError("ui gone")

    assert run_pipeline(str(src), str(out), progress_cb=boom, config=QUIET) == 3


def test_missing_or_empty_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        run_pipeline(str(tmp_path / "missing"), str(tmp_path / "out"), config=QUIET)
    (tmp_path / "empty").mkdir()
    with pytest.raises(FileNotFoundError):
        run_pipeline(str(tmp_path / "empty"), str(tmp_path / "out"), config=QUIET)
