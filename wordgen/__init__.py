#!/usr/bin/env python3
"""
wordgen - Random Word Generator
===============================

Learns a character-level n-gram model from wordlists and text, then
generates new words that look like they belong to the training language.

Quick Start
-----------
    from wordgen import MarkovTrainer, MarkovModel, make_random_source

    trainer = MarkovTrainer(depth=3)
    trainer.add_wordlist_file("cs.dict")
    model = MarkovModel.from_trainer(trainer)

    rng = make_random_source(seed=42)
    words = model.generate(10, rng)

    save_model(model, "cs.model")
    model = load_model("cs.model")

Modules
-------
    wordgen.markov      - Trainer, compiled model, sampling
    wordgen.corpus      - Wordlist/text line sources
    wordgen.persistence - Compressed model files
    wordgen.settings    - YAML configuration

CLI Usage
---------
    python -m wordgen learn -d 3 -i words.txt -f book.txt -t cs.model
    python -m wordgen generate -n 20 -s 7 -t cs.model
    python -m wordgen info -t cs.model
"""

__version__ = "1.0.0"
__author__ = "wordgen"

import sys
from pathlib import Path

# Ensure parent directory is in path for imports
_parent = Path(__file__).parent.parent
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))

from .corpus import CorpusFormatError, extract_words, parse_wordlist_line, read_lines
from .markov import (
    Boundary,
    Distribution,
    MarkovModel,
    MarkovTrainer,
    ModelStats,
    UnknownContextError,
    make_random_source,
    symbol_sort_key,
    train_model,
)
from .persistence import ModelFormatError, load_model, save_model

__all__ = [
    "__version__",
    "Boundary",
    "Distribution",
    "MarkovModel",
    "MarkovTrainer",
    "ModelStats",
    "UnknownContextError",
    "make_random_source",
    "symbol_sort_key",
    "train_model",
    "CorpusFormatError",
    "extract_words",
    "parse_wordlist_line",
    "read_lines",
    "ModelFormatError",
    "load_model",
    "save_model",
]
