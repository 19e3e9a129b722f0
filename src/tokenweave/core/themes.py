"""
Theme layer engine for tokenweave.

Enumerates the base theme plus every theme named in the override set and
materializes one ResolvedGraph per theme:

1. Base theme ("default"): base declarations only, all overrides ignored
2. Named theme: base declarations with that theme's overrides applied

Themes never inherit from one another; every named theme sits directly on
top of the base layer.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from .errors import ResolutionError, UnknownThemeError
from .ir import BASE_THEME, ResolvedGraph
from .resolver import ResolutionTrace, normalize_theme, resolve_theme, resolve_token
from .store import TokenStore

logger = logging.getLogger(__name__)


@dataclass
class ThemeResolution:
    """Outcome of resolving several themes independently."""

    graphs: dict[str, ResolvedGraph] = field(default_factory=dict)
    errors: dict[str, ResolutionError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __repr__(self) -> str:
        return f"ThemeResolution(graphs={list(self.graphs)}, errors={list(self.errors)})"


class ThemeEngine:
    """
    Resolve a token store into per-theme graphs.

    The store is snapshotted on construction; later store mutations are not
    seen by this engine.
    """

    def __init__(self, store: TokenStore):
        self._snapshot = store.snapshot()

    def themes(self) -> list[str]:
        """Base theme first, then named themes in declaration order."""
        return [BASE_THEME, *self._snapshot.themes]

    def has_theme(self, theme: str | None) -> bool:
        return normalize_theme(theme) in self.themes()

    def resolve(self, theme: str | None = BASE_THEME) -> ResolvedGraph:
        """
        Resolve one theme.

        Raises:
            UnknownThemeError: If no overrides were declared for theme.
            ResolutionError: If the theme's graph cannot be resolved.
        """
        theme_name = self._check_theme(theme)
        logger.debug(f"Resolving theme {theme_name}")
        return resolve_theme(self._snapshot, theme_name)

    def inspect(self, name: str, theme: str | None = BASE_THEME) -> ResolutionTrace:
        """Resolve a single token and return its alias chain."""
        theme_name = self._check_theme(theme)
        return resolve_token(self._snapshot, name, theme_name)

    def resolve_all(self, max_workers: int | None = None) -> dict[str, ResolvedGraph]:
        """
        Resolve every theme.

        Raises the first failure in theme order; use resolve_each() to keep
        going past failing themes.
        """
        outcome = self.resolve_each(max_workers=max_workers)
        for theme in self.themes():
            if theme in outcome.errors:
                raise outcome.errors[theme]
        return outcome.graphs

    def resolve_each(
        self,
        themes: list[str] | None = None,
        max_workers: int | None = None,
    ) -> ThemeResolution:
        """
        Resolve themes independently, collecting per-theme failures.

        Args:
            themes: Themes to resolve (default: all).
            max_workers: Resolve in a thread pool when greater than 1.

        Returns:
            ThemeResolution with graphs for themes that resolved and errors
            for those that did not, both in theme order.
        """
        selected = [self._check_theme(theme) for theme in (themes or self.themes())]
        outcome = ThemeResolution()

        if max_workers and max_workers > 1 and len(selected) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                futures = {
                    theme: pool.submit(resolve_theme, self._snapshot, theme) for theme in selected
                }
                for theme, future in futures.items():
                    try:
                        outcome.graphs[theme] = future.result()
                    except ResolutionError as e:
                        outcome.errors[theme] = e
        else:
            for theme in selected:
                try:
                    outcome.graphs[theme] = resolve_theme(self._snapshot, theme)
                except ResolutionError as e:
                    outcome.errors[theme] = e

        for theme, error in outcome.errors.items():
            logger.warning(f"Theme {theme} failed to resolve: {error.message}")
        logger.info(
            f"Resolved {len(outcome.graphs)}/{len(selected)} themes "
            f"({len(self._snapshot.tokens)} tokens)"
        )
        return outcome

    def _check_theme(self, theme: str | None) -> str:
        theme_name = normalize_theme(theme)
        if theme_name not in self.themes():
            raise UnknownThemeError(theme_name, self.themes())
        return theme_name
