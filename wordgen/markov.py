#!/usr/bin/env python3
"""
Character-Level Markov Word Generator
=====================================
Learns P(next_char | previous depth symbols) from wordlists and text, then
walks the chain to produce new words.

Pipeline:
- MarkovTrainer accumulates raw context -> next-symbol counts
- MarkovModel compiles each context into a cumulative-frequency table
- MarkovModel.generate_word() samples the chain from START until END

Theory:
-------
Every word is padded with `depth` START symbols in front and `depth` END
symbols behind. Each window of `depth` symbols is a context; the symbol
right after it is the observed continuation. A word of length L yields
L + depth observations, so the first characters are learned with partially
START-padded contexts and every word teaches the chain how to stop.

Sampling is an inverse-CDF draw: pick r uniformly in [0, total) and take
the first symbol whose cumulative count exceeds r. With the cumulative
counts sorted this is a binary search.
"""

from __future__ import annotations

import logging
import random
import secrets
from bisect import bisect_right
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum
from itertools import accumulate
from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

from .corpus import (
    CorpusFormatError,
    extract_words,
    parse_wordlist_line,
    read_lines,
)

logger = logging.getLogger(__name__)


# =============================================================================
# SYMBOLS
# =============================================================================

class Boundary(Enum):
    """Word boundary markers. Never confused with learned characters."""
    START = "start"
    END = "end"

    def __repr__(self) -> str:
        return f"Boundary.{self.name}"


# A symbol is a Boundary or a single code point
Symbol = Union[Boundary, str]
Context = tuple


def symbol_sort_key(symbol: Symbol) -> tuple[int, str]:
    """Total order over symbols: START < characters (by code point) < END."""
    if symbol is Boundary.START:
        return (0, "")
    if symbol is Boundary.END:
        return (2, "")
    return (1, symbol)


class RandomSource(Protocol):
    """Anything with random.Random's randrange()."""

    def randrange(self, stop: int) -> int:
        ...


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """
    Seeded sources are reproducible; unseeded ones draw from the OS
    entropy pool.
    """
    if seed is not None:
        return random.Random(seed)
    return secrets.SystemRandom()


# =============================================================================
# TRAINING
# =============================================================================

class MarkovTrainer:
    """Accumulates context -> next-symbol counts"""

    def __init__(self, depth: int = 2):
        if isinstance(depth, bool) or not isinstance(depth, int):
            raise ValueError(f"depth must be an integer, got {depth!r}")
        if depth < 1:
            raise ValueError(f"depth must be at least 1, got {depth}")
        self.depth = depth
        self.transitions: defaultdict[Context, Counter] = defaultdict(Counter)
        self.words_observed = 0
        self.observations = 0

    def add_transition(self, context: Context, symbol: Symbol, count: int = 1):
        """Record that `context` was followed by `symbol` `count` times."""
        self.transitions[context][symbol] += count
        self.observations += count

    def observe_word(self, word: str, weight: int = 1):
        """
        Learn every transition of one word, `weight` times.

        Args:
            word: Characters of the word; empty words are ignored
            weight: Occurrence count (e.g. wordlist frequency column)
        """
        if isinstance(weight, bool) or not isinstance(weight, int) or weight < 1:
            raise ValueError(f"weight must be a positive integer, got {weight!r}")
        if not word:
            return

        padded = [Boundary.START] * self.depth + list(word) + [Boundary.END] * self.depth
        for i in range(len(word) + self.depth):
            context = tuple(padded[i:i + self.depth])
            self.add_transition(context, padded[i + self.depth], weight)
        self.words_observed += weight

    def ingest_wordlist(self, lines: Iterable[str], source: str = "<lines>"):
        """Train on `word[TAB]frequency` lines."""
        for lineno, line in enumerate(lines, 1):
            try:
                word, weight = parse_wordlist_line(line)
                self.observe_word(word, weight)
            except ValueError as e:
                raise CorpusFormatError(f"{source}:{lineno}: {e}") from e

    def ingest_text(self, lines: Iterable[str]):
        """Train on every alphabetic run of free text, weight 1 each."""
        for line in lines:
            for word in extract_words(line):
                self.observe_word(word)

    def add_wordlist_file(self, path, encoding: Optional[str] = None):
        before = self.words_observed
        self.ingest_wordlist(read_lines(path, encoding), source=str(path))
        logger.info(f"Wordlist {path}: {self.words_observed - before} words")

    def add_text_file(self, path, encoding: Optional[str] = None):
        before = self.words_observed
        self.ingest_text(read_lines(path, encoding))
        logger.info(f"Text file {path}: {self.words_observed - before} words")

    def counts(self, context: Context) -> dict[Symbol, int]:
        """Copy of the raw counts for one context (empty if never seen)."""
        return dict(self.transitions.get(tuple(context), {}))


# =============================================================================
# COMPILED MODEL
# =============================================================================

class UnknownContextError(LookupError):
    """Generation reached a context the model never learned."""


@dataclass(frozen=True)
class Distribution:
    """
    Next-symbol distribution of one context.

    `symbols` is sorted by symbol_sort_key; `cumulative[i]` is the summed
    count of symbols[0..i]. Cumulative counts are strictly increasing and
    the last one is the context's total.
    """
    symbols: tuple
    cumulative: tuple

    @classmethod
    def from_counts(cls, counts: dict[Symbol, int]) -> 'Distribution':
        symbols = tuple(sorted(counts, key=symbol_sort_key))
        return cls(symbols, tuple(accumulate(counts[s] for s in symbols)))

    @property
    def total(self) -> int:
        return self.cumulative[-1]

    def entries(self) -> list[tuple[Symbol, int]]:
        """(symbol, cumulative count) pairs in table order"""
        return list(zip(self.symbols, self.cumulative))

    def counts(self) -> dict[Symbol, int]:
        """Per-symbol counts recovered from the cumulative table."""
        previous = (0,) + self.cumulative[:-1]
        return {s: c - p for s, c, p in zip(self.symbols, self.cumulative, previous)}

    def sample(self, rng: RandomSource) -> Symbol:
        """Draw one symbol with probability count / total."""
        r = rng.randrange(self.total)
        return self.symbols[bisect_right(self.cumulative, r)]


@dataclass(frozen=True)
class ModelStats:
    """Summary numbers for a compiled model"""
    depth: int
    contexts: int
    transitions: int
    observations: int
    alphabet: int


@dataclass
class MarkovModel:
    """Compiled, read-only character-level Markov chain"""
    depth: int
    transitions: dict = field(default_factory=dict)

    @classmethod
    def from_trainer(cls, trainer: MarkovTrainer) -> 'MarkovModel':
        """Compile a trainer's raw counts. The trainer is left untouched."""
        transitions = {
            context: Distribution.from_counts(followers)
            for context, followers in trainer.transitions.items()
        }
        logger.debug(
            f"Compiled {len(transitions)} contexts at depth {trainer.depth} "
            f"from {trainer.words_observed} words"
        )
        return cls(depth=trainer.depth, transitions=transitions)

    def distribution(self, context: Context) -> Distribution:
        try:
            return self.transitions[tuple(context)]
        except KeyError:
            raise UnknownContextError(
                f"context {tuple(context)!r} not in model (depth {self.depth})"
            ) from None

    def generate_word(self, rng: RandomSource) -> str:
        """
        Walk the chain from START until END is drawn.

        There is no length cap: the walk ends only when END is sampled.

        Raises:
            UnknownContextError: If the model lacks a reachable context,
                which means a depth mismatch or a damaged model file
        """
        result = []
        window = [Boundary.START] * self.depth
        while True:
            symbol = self.distribution(window).sample(rng)
            if symbol is Boundary.END:
                return ''.join(result)
            result.append(symbol)
            window.pop(0)
            window.append(symbol)

    def generate(self, count: int, rng: RandomSource) -> list[str]:
        """Generate `count` words (duplicates allowed)."""
        return [self.generate_word(rng) for _ in range(count)]

    def stats(self) -> ModelStats:
        alphabet = set()
        transitions = 0
        observations = 0
        for dist in self.transitions.values():
            transitions += len(dist.symbols)
            observations += dist.total
            alphabet.update(s for s in dist.symbols if isinstance(s, str))
        return ModelStats(
            depth=self.depth,
            contexts=len(self.transitions),
            transitions=transitions,
            observations=observations,
            alphabet=len(alphabet),
        )


def train_model(depth: int,
                wordlists: Iterable = (),
                text_files: Iterable = (),
                encoding: Optional[str] = None) -> MarkovModel:
    """Train on files (wordlists first, then text) and compile."""
    trainer = MarkovTrainer(depth)
    for path in wordlists:
        trainer.add_wordlist_file(Path(path), encoding)
    for path in text_files:
        trainer.add_text_file(Path(path), encoding)
    return MarkovModel.from_trainer(trainer)


__all__ = [
    "Boundary",
    "Symbol",
    "symbol_sort_key",
    "RandomSource",
    "make_random_source",
    "MarkovTrainer",
    "UnknownContextError",
    "Distribution",
    "ModelStats",
    "MarkovModel",
    "train_model",
]
