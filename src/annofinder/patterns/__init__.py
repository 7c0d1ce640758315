"""Lexical pattern rules."""

from annofinder.patterns.registry import (
    DEFAULT_REGISTRY,
    PatternRegistry,
    PatternRule,
    build_default_registry,
)

__all__ = ["DEFAULT_REGISTRY", "PatternRegistry", "PatternRule", "build_default_registry"]
