"""
Token usage auditor.

Compares a resolved graph against what an external scanner observed in
consuming files:

- unused: declared tokens whose names were never referenced directly
- hardcoded candidates: raw literal values that exactly equal a resolved
  token literal and should probably reference that token instead
- unknown usages: referenced names that are not declared tokens

Matching is exact string equality on the canonical literal form. No colour
distance or unit normalisation is attempted.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .ir import ResolvedGraph


class HardcodedCandidate(BaseModel):
    """A raw value seen in consuming code that matches a token literal."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(description="Observed literal value")
    matching_token: str = Field(description="First token (insertion order) with this literal")
    alternatives: tuple[str, ...] = Field(
        default=(), description="Other tokens resolving to the same literal"
    )


class AuditReport(BaseModel):
    """Result of auditing one theme's resolved graph."""

    model_config = ConfigDict(frozen=True)

    theme: str
    unused: list[str] = Field(default_factory=list)
    hardcoded_candidates: list[HardcodedCandidate] = Field(default_factory=list)
    unknown_usages: list[str] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.unused or self.hardcoded_candidates or self.unknown_usages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": self.theme,
            "unused": list(self.unused),
            "hardcodedCandidates": [
                {
                    "value": candidate.value,
                    "matchingToken": candidate.matching_token,
                    "alternatives": list(candidate.alternatives),
                }
                for candidate in self.hardcoded_candidates
            ],
            "unknownUsages": list(self.unknown_usages),
        }


def audit(
    graph: ResolvedGraph,
    used_names: Iterable[str],
    observed_values: Iterable[str],
) -> AuditReport:
    """
    Audit token usage against one resolved graph.

    Args:
        graph: Resolved graph to audit.
        used_names: Token names referenced by consuming files.
        observed_values: Raw literal values found in consuming files.

    Returns:
        AuditReport. ``unused`` follows token insertion order; candidates and
        unknown usages are sorted so reports are reproducible.
    """
    used = set(used_names)
    unused = [name for name in graph if name not in used]
    unknown = sorted(name for name in used if name not in graph)

    by_literal: dict[str, list[str]] = {}
    for entry in graph.entries:
        by_literal.setdefault(entry.text, []).append(entry.name)

    candidates: list[HardcodedCandidate] = []
    for value in sorted(set(observed_values)):
        matches = by_literal.get(value)
        if not matches:
            continue
        candidates.append(
            HardcodedCandidate(
                value=value,
                matching_token=matches[0],
                alternatives=tuple(matches[1:]),
            )
        )

    return AuditReport(
        theme=graph.theme,
        unused=unused,
        hardcoded_candidates=candidates,
        unknown_usages=unknown,
    )
