"""Password policy documents.

A policy is a small JSON document validated against
``schemas/password_policy.schema.json``::

    {"version": "1", "level": "high"}
    {"version": "1", "rules": {"length": 12, "numeral_min": 2}, "min_entropy": 60}

Explicit ``rules`` win over ``level``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import jsonschema

from .errors import InvalidPolicy
from .password_tests import PasswordTests, default_test_params, entropy, qualitative_strength

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "password_policy.schema.json"

_schema_cache: Optional[dict] = None


def load_schema() -> dict:
    global _schema_cache
    if _schema_cache is None:
        with _SCHEMA_PATH.open("r", encoding="utf-8") as f:
            _schema_cache = json.load(f)
    return _schema_cache


def validate_policy(obj: Any) -> List[str]:
    """Return human-readable schema errors for an already parsed document."""
    validator = jsonschema.Draft7Validator(load_schema())
    errors = []
    for err in sorted(validator.iter_errors(obj), key=lambda e: list(e.absolute_path)):
        loc = "/".join(str(p) for p in err.absolute_path) or "(root)"
        errors.append(f"{loc}: {err.message}")
    return errors


def validate_policy_text(txt: str) -> Tuple[bool, List[str]]:
    """Validate policy JSON text.

    Returns (valid, errors). If valid is True, errors==[].
    """
    try:
        obj = json.loads(txt)
    except ValueError as e:
        return False, [f"JSON parse error: {e}"]
    errors = validate_policy(obj)
    return (not errors), errors


@dataclass(frozen=True)
class PasswordPolicy:
    version: str
    level: Optional[str] = None
    rules: Dict[str, float] = field(default_factory=dict)
    min_strength: Optional[int] = None
    min_entropy: Optional[float] = None
    description: str = ""

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "PasswordPolicy":
        errors = validate_policy(obj)
        if errors:
            raise InvalidPolicy(errors)
        return cls(
            version=str(obj["version"]),
            level=obj.get("level"),
            rules=dict(obj.get("rules") or {}),
            min_strength=obj.get("min_strength"),
            min_entropy=obj.get("min_entropy"),
            description=obj.get("description", ""),
        )

    def test_params(self) -> Dict[str, float]:
        if self.rules:
            return dict(self.rules)
        return default_test_params(self.level)

    def check(self, password: str) -> Dict[str, bool]:
        """Rule results plus ``min_strength``/``min_entropy`` when configured."""
        results = PasswordTests(password, self.test_params()).run()
        if self.min_strength is not None:
            results["min_strength"] = qualitative_strength(password) >= self.min_strength
        if self.min_entropy is not None:
            results["min_entropy"] = entropy(password) >= self.min_entropy
        return results

    def accepts(self, password: str) -> bool:
        return all(self.check(password).values())


def load_policy(source: Union[str, Path]) -> PasswordPolicy:
    """Load a policy from a file path or from JSON text."""
    if isinstance(source, Path) or not str(source).lstrip().startswith("{"):
        with Path(source).open("r", encoding="utf-8") as f:
            txt = f.read()
    else:
        txt = str(source)
    try:
        obj = json.loads(txt)
    except ValueError as e:
        raise InvalidPolicy([f"JSON parse error: {e}"]) from None
    return PasswordPolicy.from_dict(obj)
