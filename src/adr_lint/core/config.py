"""Typed lint configuration.

:class:`LintConfig` is a frozen value object.  Construction from a raw
mapping (as produced by the YAML loader in ``infra``) lives here so the
validation rules stay pure and testable; reading the file does not.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from adr_lint.core.models import Severity
from adr_lint.exceptions import ConfigError
from adr_lint.utils.text import normalize_heading

DEFAULT_REQUIRED_SECTIONS: tuple[str, ...] = (
    "Overview",
    "Requirements",
    "Options Evaluated",
    "Comparison Matrix",
    "Recommendation",
    "Recommended Architecture",
    "Implementation Plan",
    "Decision Summary",
    "Open Questions",
    "References",
)

DEFAULT_FRONT_MATTER: tuple[str, ...] = ("Date", "Status", "Author")
FRONT_MATTER_KEYS: frozenset[str] = frozenset(k.lower() for k in DEFAULT_FRONT_MATTER)

DEFAULT_STATUSES: tuple[str, ...] = (
    "Draft",
    "Proposed",
    "Accepted",
    "Rejected",
    "Deprecated",
    "Superseded",
)


@dataclass(frozen=True, slots=True)
class LintConfig:
    """Settings consumed by the rule set."""

    expected_option_count: int = 4
    required_sections: tuple[str, ...] = DEFAULT_REQUIRED_SECTIONS
    required_front_matter: tuple[str, ...] = DEFAULT_FRONT_MATTER
    allowed_statuses: tuple[str, ...] = DEFAULT_STATUSES
    internal_reference_markers: tuple[str, ...] = ("internal",)
    disabled_rules: frozenset[str] = frozenset()
    severity_overrides: Mapping[str, Severity] = field(default_factory=dict)

    @property
    def section_keys(self) -> tuple[str, ...]:
        """Normalised form of :attr:`required_sections`."""
        return tuple(normalize_heading(name) for name in self.required_sections)

    def is_enabled(self, rule_id: str) -> bool:
        return rule_id not in self.disabled_rules

    # ------------------------------------------------------------------
    # Construction from raw data
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any] | None,
        *,
        known_rules: frozenset[str],
    ) -> LintConfig:
        """Build a config from a raw mapping, validating every key.

        Keys use either ``snake_case`` or ``kebab-case``.  ``None`` or an
        empty mapping yields the defaults.

        Raises
        ------
        ConfigError
            On unknown keys, wrong value types, unknown rule ids or
            invalid severities.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(
                "Configuration must be a mapping of settings.",
                hint="Top-level YAML content should be 'key: value' pairs.",
            )
        if not data:
            return cls()

        allowed = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for raw_key, raw_value in data.items():
            key = str(raw_key).replace("-", "_")
            if key not in allowed:
                raise ConfigError(
                    f"Unknown configuration key: {raw_key}",
                    hint="Valid keys: " + ", ".join(sorted(allowed)),
                )
            values[key] = raw_value

        kwargs: dict[str, Any] = {}
        if "expected_option_count" in values:
            kwargs["expected_option_count"] = _positive_int(
                "expected_option_count", values["expected_option_count"],
            )
        for key in (
            "required_sections",
            "required_front_matter",
            "allowed_statuses",
            "internal_reference_markers",
        ):
            if key in values:
                kwargs[key] = _string_tuple(key, values[key])
        if "required_front_matter" in kwargs:
            unknown = [
                name for name in kwargs["required_front_matter"]
                if name.lower() not in FRONT_MATTER_KEYS
            ]
            if unknown:
                raise ConfigError(
                    "Unsupported front-matter key(s): " + ", ".join(unknown),
                    hint="Supported keys: " + ", ".join(DEFAULT_FRONT_MATTER),
                )
        if "disabled_rules" in values:
            disabled = _string_tuple("disabled_rules", values["disabled_rules"])
            _check_rule_ids(disabled, known_rules)
            kwargs["disabled_rules"] = frozenset(disabled)
        if "severity_overrides" in values:
            kwargs["severity_overrides"] = _severity_map(
                values["severity_overrides"], known_rules,
            )
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Value validators
# ---------------------------------------------------------------------------

def _positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"'{key}' must be a positive integer, got {value!r}.")
    return value


def _string_tuple(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"'{key}' must be a list of strings.")
    if not all(isinstance(item, str) and item.strip() for item in value):
        raise ConfigError(f"'{key}' must contain only non-empty strings.")
    return tuple(item.strip() for item in value)


def _check_rule_ids(rule_ids: tuple[str, ...], known_rules: frozenset[str]) -> None:
    unknown = sorted(set(rule_ids) - known_rules)
    if unknown:
        raise ConfigError(
            "Unknown rule id(s): " + ", ".join(unknown),
            hint="Run 'adr-lint rules' to list available rules.",
        )


def _severity_map(value: Any, known_rules: frozenset[str]) -> dict[str, Severity]:
    if not isinstance(value, Mapping):
        raise ConfigError("'severity_overrides' must map rule ids to severities.")
    _check_rule_ids(tuple(str(k) for k in value), known_rules)
    result: dict[str, Severity] = {}
    for rule_id, raw in value.items():
        try:
            result[str(rule_id)] = Severity(str(raw).lower())
        except ValueError as exc:
            raise ConfigError(
                f"Invalid severity for {rule_id}: {raw!r}",
                hint="Use 'error' or 'warning'.",
            ) from exc
    return result
