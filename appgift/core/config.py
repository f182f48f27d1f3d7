import json
from pathlib import Path
_DEFAULT = {
    "blank_fill": "_____", "name_length": 30,
    "json_indent": 2, "ensure_ascii": False, "verbose": True,
    "input_patterns": ["*.gift", "*.txt", "*.docx"],
}
def load_config(path: str | None):
    if not path: return dict(_DEFAULT)
    p=Path(path)
    if not p.exists(): return dict(_DEFAULT)
    try: return {**_DEFAULT, **json.loads(p.read_text(encoding="utf-8"))}
    except (OSError, ValueError, TypeError): return dict(_DEFAULT)
