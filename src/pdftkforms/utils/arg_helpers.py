# src/pdftkforms/utils/arg_helpers.py
import json
import sys
from pathlib import Path

from pdftkforms.exceptions import FileAccessError, InvalidArgumentError

# Optional: Support YAML if PyYAML is installed
try:
    import yaml

    HAS_YAML = True
except ImportError:
    HAS_YAML = False


def load_mapping_file(path_str: str) -> dict:
    """
    Loads a JSON (or YAML) object from disk, or from stdin when path is '-'.

    Used for the field values and document info given to the CLI.
    """
    if path_str == "-":
        return _ensure_mapping(json.load(sys.stdin), "<stdin>")

    path = Path(path_str)
    if not path.is_file():
        raise FileAccessError(path, "no such file")

    with open(path, encoding="utf-8") as f:
        # Simple extension check
        if path.suffix.lower() in (".yaml", ".yml"):
            if not HAS_YAML:
                raise InvalidArgumentError(
                    f"{path}: PyYAML is required to load .yaml files. Install it with: pip install pyyaml"
                )
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise InvalidArgumentError(f"{path}: invalid YAML: {exc}") from exc
        else:
            # Default to JSON
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise InvalidArgumentError(f"{path}: invalid JSON: {exc}") from exc

    return _ensure_mapping(data, path)


def _ensure_mapping(data, source) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidArgumentError(f"{source}: expected an object, got {type(data).__name__}")
    return data
