"""Infrastructure layer — filesystem and configuration-file access.

This layer wraps all interaction with the operating system and PyYAML.
Every raw ``OSError``, ``UnicodeDecodeError`` and ``yaml.YAMLError``
must be caught here and re-raised as an
:class:`~adr_lint.exceptions.AdrLintError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from adr_lint.infra.config_loader import CONFIG_FILENAMES, find_config, load_config
from adr_lint.infra.document_store import FileDocumentSource

__all__: list[str] = [
    "CONFIG_FILENAMES",
    "FileDocumentSource",
    "find_config",
    "load_config",
]
