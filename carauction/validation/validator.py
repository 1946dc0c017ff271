"""Schema validation helpers wired to the JSON Schema definitions in this repo."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator, validators
from referencing import Registry, Resource


def _is_strict_integer(checker, instance: Any) -> bool:
    # orjson decodes 4000.0 and 1e3 to float; only real ints count.
    return isinstance(instance, int) and not isinstance(instance, bool)


LedgerValidator = validators.extend(
    Draft202012Validator,
    type_checker=Draft202012Validator.TYPE_CHECKER.redefine("integer", _is_strict_integer),
)


class SchemaRegistry:
    def __init__(self, schema_dir: Path) -> None:
        self._schema_dir = schema_dir
        self._validators: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        schemas: dict[str, dict[str, Any]] = {}
        for schema_path in sorted(self._schema_dir.glob("*.json")):
            data = json.loads(schema_path.read_text())
            Draft202012Validator.check_schema(data)
            schemas[schema_path.stem] = data
        registry = Registry().with_resources(
            (data["$id"], Resource.from_contents(data)) for data in schemas.values()
        )
        for name, data in schemas.items():
            self._validators[name] = LedgerValidator(
                data,
                registry=registry,
                format_checker=Draft202012Validator.FORMAT_CHECKER,
            )

    def validate(self, schema_name: str, payload: Any) -> None:
        try:
            validator = self._validators[schema_name]
        except KeyError as exc:
            raise ValueError(f"unknown schema {schema_name}") from exc
        validator.validate(payload)

    def names(self) -> list[str]:
        return sorted(self._validators)


@lru_cache(maxsize=1)
def get_schema_registry() -> SchemaRegistry:
    schema_dir = Path(__file__).resolve().parent.parent / "schemas"
    return SchemaRegistry(schema_dir)
