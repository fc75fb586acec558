from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple


@dataclass(frozen=True)
class Violation:
    """One reason an instance does not satisfy its schema."""

    keyword: str
    schema_path: str
    instance_path: str
    message: str
    causes: Tuple["Violation", ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "keyword": self.keyword,
            "schema_path": self.schema_path,
            "instance_path": self.instance_path,
            "message": self.message,
        }
        if self.causes:
            data["causes"] = [cause.to_dict() for cause in self.causes]
        return data

    def __str__(self) -> str:
        return f"{self.instance_path or '/'}: {self.message} ({self.schema_path or '/'})"


@dataclass(frozen=True)
class Annotation:
    keyword: str
    schema_path: str
    instance_path: str
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "schema_path": self.schema_path,
            "instance_path": self.instance_path,
            "value": self.value,
        }


@dataclass
class ValidationOutcome:
    """Result of applying a schema (or one keyword) to an instance location.

    ``evaluated_properties`` / ``evaluated_items`` describe members of the
    instance at *this* location that some keyword has already accounted for;
    ``unevaluatedProperties`` / ``unevaluatedItems`` consume them.
    """

    violations: List[Violation] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    evaluated_properties: Set[str] = field(default_factory=set)
    evaluated_items: Set[int] = field(default_factory=set)

    @property
    def valid(self) -> bool:
        return not self.violations

    def add(self, violation: Violation) -> "ValidationOutcome":
        self.violations.append(violation)
        return self

    def merge(self, other: Optional["ValidationOutcome"]) -> None:
        """Fold in a keyword result produced at the same instance location."""
        if other is None:
            return
        self.violations.extend(other.violations)
        self.annotations.extend(other.annotations)
        self.evaluated_properties |= other.evaluated_properties
        self.evaluated_items |= other.evaluated_items

    def add_in_place(self, child: "ValidationOutcome") -> None:
        """Fold in a subschema applied to the same instance.

        Annotations and evaluated members only survive from a passing subschema.
        """
        self.violations.extend(child.violations)
        if child.valid:
            self.annotations.extend(child.annotations)
            self.evaluated_properties |= child.evaluated_properties
            self.evaluated_items |= child.evaluated_items

    def add_nested(self, child: "ValidationOutcome") -> None:
        """Fold in a subschema applied to a member of the instance."""
        self.violations.extend(child.violations)
        if child.valid:
            self.annotations.extend(child.annotations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "violations": [violation.to_dict() for violation in self.violations],
            "annotations": [annotation.to_dict() for annotation in self.annotations],
        }
