"""Tests for the usage auditor."""

from __future__ import annotations

import pytest

from tokenweave.core.audit import audit
from tokenweave.core.ir import Token
from tokenweave.core.resolver import resolve_theme
from tokenweave.core.store import TokenStore


@pytest.fixture
def base_graph(example_store: TokenStore):
    return resolve_theme(example_store.snapshot())


class TestAudit:
    def test_unused_in_insertion_order(self, base_graph):
        report = audit(base_graph, {"colorPrimary", "buttonBg"}, set())
        assert report.unused == ["colorBlue500", "spacing4"]
        assert report.hardcoded_candidates == []
        assert report.unknown_usages == []

    def test_hardcoded_candidate_with_alternatives(self, base_graph):
        report = audit(base_graph, {"colorPrimary"}, {"#3b82f6"})

        assert len(report.hardcoded_candidates) == 1
        candidate = report.hardcoded_candidates[0]
        assert candidate.value == "#3b82f6"
        assert candidate.matching_token == "colorBlue500"
        assert candidate.alternatives == ("colorPrimary", "buttonBg")

    def test_match_is_exact(self, base_graph):
        report = audit(base_graph, set(), {"#3B82F6", "16 px", "#60a5fa"})
        assert report.hardcoded_candidates == []

    def test_candidates_sorted_by_value(self, base_graph):
        report = audit(base_graph, set(), {"16px", "#3b82f6", "unrelated"})
        assert [c.value for c in report.hardcoded_candidates] == ["#3b82f6", "16px"]

    def test_unknown_usages(self, base_graph):
        report = audit(base_graph, {"colorPrimary", "colorGhost", "aMissing"}, set())
        assert report.unknown_usages == ["aMissing", "colorGhost"]

    def test_theme_specific_literals(self, example_store: TokenStore):
        dark = resolve_theme(example_store.snapshot(), "dark")
        report = audit(dark, set(), {"#60a5fa"})
        assert report.theme == "dark"
        assert report.hardcoded_candidates[0].matching_token == "colorPrimary"
        assert report.hardcoded_candidates[0].alternatives == ("buttonBg",)

    def test_numeric_literal_matches_canonical_text(self):
        store = TokenStore()
        store.add_token(Token(name="weight", category="typography", layer="global", value=600.0))
        report = audit(resolve_theme(store.snapshot()), {"weight"}, {"600"})
        assert report.hardcoded_candidates[0].matching_token == "weight"

    def test_clean_report(self, base_graph):
        report = audit(base_graph, list(base_graph), [])
        assert report.is_clean

    def test_to_dict(self, base_graph):
        report = audit(base_graph, {"colorPrimary", "nope"}, {"16px"})
        assert report.to_dict() == {
            "theme": "default",
            "unused": ["colorBlue500", "buttonBg", "spacing4"],
            "hardcodedCandidates": [
                {"value": "16px", "matchingToken": "spacing4", "alternatives": []}
            ],
            "unknownUsages": ["nope"],
        }
