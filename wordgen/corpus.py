#!/usr/bin/env python3
"""
Training Sources
================
Reads wordlists and free text for the trainer.

Wordlist format (one entry per line, tab separated):

    word<TAB>frequency<TAB>ignored...

The frequency column is optional and defaults to 1. Free text is split
into maximal runs of alphabetic characters; everything else (whitespace,
punctuation, digits) ends a run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import regex

from .settings import get_setting

logger = logging.getLogger(__name__)

# Unicode Alphabetic property: letters, letter-numbers and combining vowel signs
WORD_RE = regex.compile(r"\p{Alphabetic}+")
FREQUENCY_RE = regex.compile(r"[+-]?[0-9]+")


class CorpusFormatError(ValueError):
    """A training source line could not be parsed."""


def read_lines(path, encoding: str | None = None) -> Iterator[str]:
    """
    Yield the lines of a text file without their line terminators.

    The file is closed when the generator is exhausted, closed, or
    garbage collected, including when the consumer raises mid-iteration.
    """
    if encoding is None:
        encoding = get_setting("corpus.encoding", "utf-8")
    path = Path(path)
    logger.debug(f"Reading {path} ({encoding})")
    with path.open("r", encoding=encoding, newline="") as f:
        for line in f:
            yield line.rstrip("\r\n")


def parse_wordlist_line(line: str) -> tuple[str, int]:
    """
    Split a wordlist line into (word, weight).

    Raises:
        ValueError: If the frequency field is present but not an integer
    """
    fields = line.split("\t")
    word = fields[0]
    if len(fields) > 1:
        if not FREQUENCY_RE.fullmatch(fields[1]):
            raise ValueError(f"invalid frequency {fields[1]!r}")
        return word, int(fields[1])
    return word, 1


def extract_words(line: str) -> list[str]:
    """Return the maximal runs of Unicode Alphabetic characters, in order."""
    return WORD_RE.findall(line)


__all__ = [
    "CorpusFormatError",
    "read_lines",
    "parse_wordlist_line",
    "extract_words",
]
