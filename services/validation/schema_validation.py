# services/validation/schema_validation.py
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Tuple

import jsonschema

REPO_ROOT = Path(__file__).resolve().parents[2]
SCHEMA_DIR = REPO_ROOT / "config" / "schemas"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict:
    schema_path = SCHEMA_DIR / f"{name}.schema.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    jsonschema.Draft7Validator.check_schema(schema)
    return schema


def _where(error: jsonschema.exceptions.ValidationError) -> str:
    # e.g. items[0].volumeInfo.authors
    out = ""
    for part in error.absolute_path:
        out += f"[{part}]" if isinstance(part, int) else (f".{part}" if out else str(part))
    return out


def validate_with_schema(data: Any, name: str) -> Tuple[bool, str]:
    """
    Returns (is_valid, message); never raises.
    The message names the offending location in the payload, e.g.
    "items[0].volumeInfo.pageCount: 'many' is not of type 'integer', 'null'".
    """
    try:
        schema = load_schema(name)
    except Exception as e:
        return False, str(e)

    error = jsonschema.exceptions.best_match(jsonschema.Draft7Validator(schema).iter_errors(data))
    if error is None:
        return True, "Valid"
    where = _where(error)
    return False, f"{where}: {error.message}" if where else error.message
