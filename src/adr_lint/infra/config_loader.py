"""Infrastructure: locate and load ``.adr-lint.yaml``.

PyYAML is imported lazily so that commands which never read a config
file keep working when it is missing.  Validation of the loaded mapping
lives in :meth:`adr_lint.core.config.LintConfig.from_mapping`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from adr_lint.core.config import LintConfig
from adr_lint.core.rules import KNOWN_RULES
from adr_lint.exceptions import ConfigError, EnvironmentError, append_config_hint

logger = logging.getLogger(__name__)

CONFIG_FILENAMES: tuple[str, ...] = (".adr-lint.yaml", ".adr-lint.yml")


def _import_yaml() -> Any:
    try:
        import yaml
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "PyYAML is not installed. Install with: pip install PyYAML",
        ) from exc
    return yaml


def find_config(cwd: Path | None = None) -> Path | None:
    """Return the first config file found in *cwd*, or ``None``."""
    base = cwd or Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, *, cwd: Path | None = None) -> LintConfig:
    """Load the lint configuration.

    An explicit *path* must exist.  Without one, :func:`find_config`
    is consulted and the defaults apply when nothing is found.

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, not valid YAML, or fails
        validation.
    EnvironmentError
        If a config file is present but PyYAML is not installed.
    """
    if path is None:
        path = find_config(cwd)
        if path is None:
            logger.debug("No config file found; using defaults")
            return LintConfig()
    elif not path.is_file():
        raise ConfigError(
            f"Config file not found: {path}",
            hint="Pass an existing file to --config.",
        )

    logger.debug("Loading config from %s", path)
    try:
        raw_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    yaml = _import_yaml()
    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise ConfigError(
            "Config file is not valid YAML.",
            hint=append_config_hint(str(exc), str(path)),
        ) from exc

    try:
        return LintConfig.from_mapping(data, known_rules=KNOWN_RULES)
    except ConfigError as exc:
        raise ConfigError(
            str(exc),
            hint=append_config_hint(exc.hint or "Fix the setting below.", str(path)),
        ) from exc
