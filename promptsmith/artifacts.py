import json
import os
import secrets
from datetime import datetime, timezone
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Iterable

from pydantic import BaseModel

from .models import Decomposition, Part


def make_timestamp() -> str:
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
    return f"{timestamp}_{os.getpid()}_{secrets.token_hex(3)}"


def ensure_runs_dir(path: str = "runs") -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def _as_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return _as_jsonable(value.model_dump())
    if isinstance(value, (list, tuple)):
        return [_as_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: _as_jsonable(val) for key, val in value.items()}
    return value


def _dumps(value: Any) -> str:
    return json.dumps(_as_jsonable(value), separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _atomic_write(path: Path, content: str) -> None:
    with NamedTemporaryFile("w", encoding="utf-8", dir=path.parent, delete=False) as tmp_file:
        tmp_file.write(content)
        tmp_path = Path(tmp_file.name)
    os.replace(tmp_path, path)


def save_run(raw_text: str, decomposition: Decomposition, runs_dir: str = "runs") -> dict[str, str]:
    ensure_runs_dir(runs_dir)
    ts = make_timestamp()

    prompt_path = Path(runs_dir) / f"prompt_{ts}.txt"
    decomposition_path = Path(runs_dir) / f"decomposition_{ts}.json"

    _atomic_write(prompt_path, raw_text)
    _atomic_write(decomposition_path, _dumps(decomposition))

    return {
        "prompt_path": str(prompt_path),
        "decomposition_path": str(decomposition_path),
    }


def save_confirmed(prompt: str, parts: Iterable[Part], runs_dir: str = "runs") -> dict[str, str]:
    ensure_runs_dir(runs_dir)
    ts = make_timestamp()

    confirmed_path = Path(runs_dir) / f"confirmed_{ts}.txt"
    parts_path = Path(runs_dir) / f"parts_{ts}.json"

    _atomic_write(confirmed_path, prompt)
    _atomic_write(parts_path, _dumps(list(parts)))

    return {
        "confirmed_path": str(confirmed_path),
        "parts_path": str(parts_path),
    }


def save_json_error(raw: str, error: str, kind: str, runs_dir: str = "runs") -> str:
    ensure_runs_dir(runs_dir)
    ts = make_timestamp()
    err_path = Path(runs_dir) / f"json_error_{ts}.txt"

    contents = (
        f"MODEL_OUTPUT_FAILURE\n"
        f"kind: {kind}\n"
        f"error: {error}\n\n"
        f"---- RAW OUTPUT ----\n{raw}"
    )
    _atomic_write(err_path, contents)
    return str(err_path)
