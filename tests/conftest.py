"""Shared pytest fixtures and configuration for the adr-lint test suite.

Guidelines
----------
* No network access in any test.
* Filesystem access only through ``tmp_path``.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state or the caller's working directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

VALID_MEMO = """\
# Solution QA: Execution Engine Decision

**Date:** 2025-01-15
**Status:** Proposed
**Author:** Platform Team

## Overview

We need an LLM-driven Solution QA system that checks delivered solutions.

## Requirements

- Run database checks against the delivered schema
- Measure page performance

## Options Evaluated

### Option 1: Codex CLI + MCP

**Pros:**
- Mature agent loop
- Tool calls over MCP

**Cons:**
- External dependency

### Option 2: Custom Agent Loop

**Pros:**
- Full control

**Cons:**
- More code to own

### Option 3: LangGraph

- **Pros:** Graph orchestration; Checkpointing
- **Cons:** Heavy framework

### Option 4: Scripted Checks

**Pros:** Deterministic
**Cons:** No reasoning

## Comparison Matrix

| Criterion | Codex + MCP | Custom | LangGraph | Scripted |
|-----------|-------------|--------|-----------|----------|
| Effort | Low | High | Medium | Low |
| Flexibility | High | High | High | Low |

## Recommendation

Adopt option 1.

## Recommended Architecture

```
orchestrator -> codex -> mcp_server
## not a heading
- not a list item
```

## Implementation Plan

| Phase | Tools | Purpose |
|-------|-------|---------|
| Phase 1 | `query_postgres`, `list_tables` | Database checks |
| Phase 2 | `measure_load_time` | Performance checks |

## Decision Summary

Adopt Codex CLI with an MCP tool server.

## Open Questions

1. How are credentials passed to the tool server?
2. Should scoring run inside the agent?

## References

- Codex CLI: https://github.com/openai/codex
- MCP specification: https://modelcontextprotocol.io
- Internal repo: solution-qa-agents
"""


@pytest.fixture()
def memo_text() -> str:
    """A decision memo that passes every rule under the default config."""
    return VALID_MEMO


@pytest.fixture()
def memo_path(tmp_path: Path, memo_text: str) -> Path:
    path = tmp_path / "decision.md"
    path.write_text(memo_text, encoding="utf-8")
    return path


@pytest.fixture()
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory so no stray config is found."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir
