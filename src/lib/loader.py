"""
Documentation model loader

Reads a serialized Source Documentation Model (JSON or YAML) and validates
it into frozen PackageModel values with pydantic.

Example model (JSON):
    {
      "name": "loghttp",
      "import_path": "github.com/motemen/go-loghttp",
      "doc": "Package loghttp provides automatic logging functionalities to http.Client.",
      "funcs": ["New"],
      "types": ["Transport"],
      "examples": [
        {
          "name": "Transport",
          "code": {
            "kind": "block",
            "span": {"start": 10, "end": 14},
            "statements": [
              {"source": "http.DefaultTransport = &loghttp.Transport{}", "span": {"start": 11, "end": 11}}
            ]
          },
          "comments": [
            {"lines": ["// Output:", "// ok"], "span": {"start": 12, "end": 13}}
          ]
        }
      ]
    }
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter, ValidationError

from ..models.source import PackageModel
from .errors import ModelLoadError
from .log import LOG

_model_adapter: TypeAdapter[PackageModel] = TypeAdapter(PackageModel)


def model_parse(data: Any) -> PackageModel:
    """
    Validate already-decoded model data

    Raises:
        ModelLoadError: If the data does not describe a valid model
    """
    try:
        return _model_adapter.validate_python(data)
    except ValidationError as e:
        raise ModelLoadError(f"Invalid documentation model: {e}") from e


def model_load(path: Path) -> PackageModel:
    """
    Load a documentation model file

    `.yaml` and `.yml` files are read with PyYAML; everything else is
    treated as JSON.

    Raises:
        ModelLoadError: If the file cannot be read, decoded or validated
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ModelLoadError(f"Failed to read model file {path}: {e}") from e

    LOG(f"Read {len(raw)} characters from {path.name}", level=2)

    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ModelLoadError(f"Failed to parse {path.name}: {e}") from e
        return model_parse(data)

    try:
        return _model_adapter.validate_json(raw)
    except ValidationError as e:
        raise ModelLoadError(f"Invalid documentation model in {path.name}: {e}") from e
