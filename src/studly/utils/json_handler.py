# ♥♥─── JSON Handler ─────────────────────────────────────────────────────────────
from __future__ import annotations

import os
import json
from typing import Any, TypeVar
from pathlib import Path
import tempfile

from pydantic import BaseModel, ValidationError

from studly.custom_logger import log


JSONSerializable = dict[str, Any] | list[Any]
T = TypeVar("T", bound=BaseModel)


# ─── Resolve Path ─────────────────────────────────────────────────────────────
def _resolve_path(filepath: str | Path, folder: str | Path | None) -> Path:
    """Resolve the full file path.

    :param filepath: The base file path or filename.
    :param folder: Optional folder path.
    :return: The resolved absolute path.
    """
    if folder:
        return Path(folder).resolve() / Path(filepath).name
    return Path(filepath).resolve()


# ─── Atomic Write ─────────────────────────────────────────────────────────────
def write_text_atomic(output_path: Path, text: str) -> None:
    """Write ``text`` next to ``output_path`` and swap it into place.

    Readers see either the previous content or the new one, never a half-written file.

    :param output_path: Destination file.
    :param text: Full file content.
    :raises OSError: If the temporary file cannot be written or renamed.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        Path(tmp_name).replace(output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


# ─── Save JSON ────────────────────────────────────────────────────────────────
def save_json(data: JSONSerializable, filepath: str | Path, folder: str | Path | None = None, indent: int = 2) -> bool:
    """Save a dictionary or list to a JSON file atomically.

    :param data: The Python dictionary or list to save.
    :param filepath: The full path or filename for the output file.
    :param folder: Optional folder path.
    :param indent: JSON indentation level.
    :return: True if successful, False otherwise.
    """
    output_path = _resolve_path(filepath, folder)
    try:
        write_text_atomic(output_path, json.dumps(data, indent=indent, ensure_ascii=False, default=str))
    except (TypeError, ValueError, OSError) as e:
        log.error("Failed to save JSON to '{}'. Error: {}", output_path, e)
        return False
    else:
        log.debug("Saved JSON to: '{}'", output_path)
        return True


# ─── Load JSON ────────────────────────────────────────────────────────────────
def load_json(filepath: str | Path, folder: str | Path | None = None) -> JSONSerializable | None:
    """Load data from a JSON file.

    :param filepath: The path or filename of the JSON file.
    :param folder: Optional folder path.
    :return: The loaded data, or None on failure.
    """
    input_path = _resolve_path(filepath, folder)
    if not input_path.is_file():
        log.warning("JSON file not found at: '{}'", input_path)
        return None
    try:
        with input_path.open(encoding="utf-8") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        log.error("Failed to load or parse JSON from '{}'. Error: {}", input_path, e)
        return None


# ─── Save Model ───────────────────────────────────────────────────────────────
def save_pydantic_model(model: BaseModel, filepath: str | Path, folder: str | Path | None = None, indent: int = 2) -> bool:
    """Save a Pydantic model to a JSON file using its aliases.

    :param model: The Pydantic model instance to save.
    :param filepath: The path or filename for the JSON file.
    :param folder: Optional folder path.
    :param indent: JSON indentation level.
    :return: True if successful, False otherwise.
    """
    output_path = _resolve_path(filepath, folder)
    try:
        write_text_atomic(output_path, model.model_dump_json(indent=indent, by_alias=True))
    except (TypeError, OSError, ValidationError) as e:
        log.error("Failed to save Pydantic model to '{}'. Error: {}", output_path, e)
        return False
    else:
        log.debug("Saved {} to: '{}'", type(model).__name__, output_path)
        return True


# ─── Load Model ───────────────────────────────────────────────────────────────
def load_pydantic_model(model_class: type[T], filepath: str | Path, folder: str | Path | None = None) -> T | None:
    """Load a JSON file into a Pydantic model instance.

    :param model_class: The Pydantic model class.
    :param filepath: The path or filename of the JSON file.
    :param folder: Optional folder path.
    :return: An instance of `model_class`, or None on failure.
    """
    json_data = load_json(filepath, folder)
    if not isinstance(json_data, dict):
        if json_data is not None:
            log.warning("JSON from '{}' is not an object, cannot create {} model.", _resolve_path(filepath, folder), model_class.__name__)
        return None
    try:
        return model_class.model_validate(json_data)
    except ValidationError as e:
        log.error("Pydantic validation failed for {}: {}", model_class.__name__, e)
        return None
