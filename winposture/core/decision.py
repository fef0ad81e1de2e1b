"""Decision tables and verdict synthesis.

Every check turns raw configuration values into findings through one of two
immutable rule types defined here:

* ``SwitchRule`` - the absent / enabled / disabled decision used by single
  value checks and by each step of the UAC cascade.
* ``DecisionTable`` - an ordered set of ``FieldRule`` entries, each with a
  default, an inclusive integer domain and one description per value. Used
  for the BitLocker FVE policy fields.

Descriptions depend only on the raw value and the rule, so the same input
always yields the same text.
"""
import logging
from collections import abc
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, NamedTuple, Optional, Tuple

from .result import Compliance, Finding

logger = logging.getLogger(__name__)


class Verdict(NamedTuple):
    """A description paired with a compliance verdict."""
    description: str
    compliance: Compliance


def as_int(value: Any) -> Optional[int]:
    """Interpret a registry value as an integer, or None if it is not one."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 0)
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class SwitchRule:
    """Three-way decision on a single optional integer value."""
    absent: Verdict
    enabled: Verdict
    disabled: Verdict
    threshold: int = 1

    def evaluate(self, value: Any) -> Verdict:
        """Map a raw value (None when absent) to a verdict."""
        if value is None:
            return self.absent
        number = as_int(value)
        if number is None:
            return Verdict(
                f"The value has an unexpected type or format ({value!r}).",
                Compliance.UNKNOWN,
            )
        if number >= self.threshold:
            return self.enabled
        return self.disabled

    def finding(self, subject: str, field_name: str, value: Any) -> Finding:
        """Build the finding for a value read from subject\\field_name."""
        verdict = self.evaluate(value)
        return Finding(
            subject=subject,
            field_name=field_name,
            value=value,
            description=verdict.description,
            compliance=verdict.compliance,
        )


@dataclass(frozen=True)
class FieldRule:
    """Policy field with a default, a valid domain and per-value descriptions."""
    name: str
    default: int
    minimum: int
    maximum: int
    descriptions: Tuple[str, ...]

    def __post_init__(self):
        if len(self.descriptions) != self.maximum - self.minimum + 1:
            raise ValueError(f"{self.name}: one description per domain value is required")
        if not self.minimum <= self.default <= self.maximum:
            raise ValueError(f"{self.name}: default {self.default} is outside its domain")

    @property
    def domain(self) -> range:
        return range(self.minimum, self.maximum + 1)

    def describe(self, value: int) -> str:
        return self.descriptions[value - self.minimum]

    def resolve(self, raw: Any) -> "FieldVerdict":
        """Validate a raw read against the domain, substituting the default if absent."""
        if raw is None:
            return FieldVerdict(
                rule=self,
                raw=None,
                value=self.default,
                assumed_default=True,
                valid=True,
            )

        number = as_int(raw)
        if number is None or number not in self.domain:
            logger.warning(
                "%s has unexpected value %r (expected %d-%d), excluding it",
                self.name, raw, self.minimum, self.maximum
            )
            return FieldVerdict(rule=self, raw=raw, value=None, assumed_default=False, valid=False)

        return FieldVerdict(rule=self, raw=raw, value=number, assumed_default=False, valid=True)


@dataclass(frozen=True)
class FieldVerdict:
    """Outcome of resolving one field against its rule."""
    rule: FieldRule
    raw: Any
    value: Optional[int]
    assumed_default: bool
    valid: bool

    @property
    def description(self) -> str:
        if not self.valid:
            return (
                f"{self.rule.name} has an unexpected value ({self.raw!r}, expected "
                f"{self.rule.minimum}-{self.rule.maximum}) and was ignored."
            )
        text = self.rule.describe(self.value)
        if self.assumed_default:
            return f"{text} [not configured, default assumed]"
        return text


class DecisionTable(abc.Mapping):
    """Immutable, ordered collection of field rules keyed by field name."""

    def __init__(self, *rules: FieldRule):
        self._rules = MappingProxyType({rule.name: rule for rule in rules})

    def __getitem__(self, name: str) -> FieldRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def resolve(self, raw_values: Mapping[str, Any]) -> Dict[str, FieldVerdict]:
        """Resolve every field in table order; missing keys count as absent."""
        return {name: rule.resolve(raw_values.get(name)) for name, rule in self._rules.items()}


def describe_fields(verdicts: Mapping[str, FieldVerdict]) -> str:
    """Concatenate field descriptions in table order."""
    parts = []
    for verdict in verdicts.values():
        text = verdict.description
        parts.append(text if text.endswith(".") else f"{text}.")
    return " ".join(parts)
