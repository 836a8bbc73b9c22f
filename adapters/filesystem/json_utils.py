from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import orjson
from filelock import FileLock


def load_json_value(path: Path) -> Any:
    return orjson.loads(strip_line_comments(path.read_text(encoding="utf-8")))


def load_json(path: Path) -> dict[str, Any]:
    data = load_json_value(path)
    return data if isinstance(data, dict) else {}


def dump_json_bytes(payload: Any) -> bytes:
    try:
        return orjson.dumps(payload, option=orjson.OPT_INDENT_2)
    except TypeError:
        return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def write_json_atomic(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    tmp_path.write_bytes(dump_json_bytes(payload))
    tmp_path.replace(path)


def write_json_locked(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    lock_path = path.with_suffix(f"{path.suffix}.lock")
    with FileLock(str(lock_path)):
        write_json_atomic(path, payload)


def strip_line_comments(content: str) -> str:
    result_lines: list[str] = []
    for line in content.splitlines():
        in_string = False
        escaped = False
        cleaned: list[str] = []
        for idx, char in enumerate(line):
            if char == '"' and not escaped:
                in_string = not in_string
            if not in_string and char == "/" and idx + 1 < len(line) and line[idx + 1] == "/":
                break
            cleaned.append(char)
            escaped = char == "\\" and not escaped
        result_lines.append("".join(cleaned))
    return "\n".join(result_lines)
