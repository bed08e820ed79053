from __future__ import annotations

from .corpus import generate_corpus_files, generate_gomod_sources
from .shape import without_ranges

__all__ = ["generate_corpus_files", "generate_gomod_sources", "without_ranges"]
