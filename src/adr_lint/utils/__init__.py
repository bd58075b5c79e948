"""Shared utilities — text normalisation helpers used across layers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from adr_lint.utils.text import normalize_heading, split_list_item, strip_decoration

__all__: list[str] = ["normalize_heading", "split_list_item", "strip_decoration"]
