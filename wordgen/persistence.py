#!/usr/bin/env python3
"""
Model Persistence
=================
Saves a compiled MarkovModel as zlib-compressed JSON and loads it back.

Document layout (before compression):

    {
      "format": "wordgen-model",
      "version": 1,
      "depth": 2,
      "transitions": [
        [["<START>", "<START>"], [["c", 1], ["d", 3]]],
        ...
      ]
    }

Characters are stored as themselves. Boundaries are stored as "<START>"
and "<END>", which are longer than one character and so never clash with
a learned symbol.
"""

from __future__ import annotations

import json
import logging
import zlib
from pathlib import Path
from typing import Optional

from .markov import Boundary, Distribution, MarkovModel, symbol_sort_key
from .settings import get_setting

logger = logging.getLogger(__name__)

FORMAT_NAME = "wordgen-model"
FORMAT_VERSION = 1

_BOUNDARY_TOKENS = {
    Boundary.START: "<START>",
    Boundary.END: "<END>",
}
_TOKEN_BOUNDARIES = {token: b for b, token in _BOUNDARY_TOKENS.items()}


class ModelFormatError(ValueError):
    """Model file is corrupt or not a wordgen model."""


def encode_symbol(symbol) -> str:
    if isinstance(symbol, Boundary):
        return _BOUNDARY_TOKENS[symbol]
    return symbol


def decode_symbol(value):
    if not isinstance(value, str):
        raise ModelFormatError(f"symbol must be a string, got {value!r}")
    if value in _TOKEN_BOUNDARIES:
        return _TOKEN_BOUNDARIES[value]
    if len(value) != 1:
        raise ModelFormatError(f"invalid symbol {value!r}")
    return value


def _context_sort_key(context: tuple) -> tuple:
    return tuple(symbol_sort_key(s) for s in context)


def model_to_dict(model: MarkovModel) -> dict:
    """Serialize model to a JSON-compatible dictionary"""
    transitions = []
    for context in sorted(model.transitions, key=_context_sort_key):
        dist = model.transitions[context]
        transitions.append([
            [encode_symbol(s) for s in context],
            [[encode_symbol(s), cf] for s, cf in dist.entries()],
        ])
    return {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "depth": model.depth,
        "transitions": transitions,
    }


def _decode_distribution(context: tuple, entries) -> Distribution:
    if not isinstance(entries, list) or not entries:
        raise ModelFormatError(f"context {context!r} has no transitions")

    symbols = []
    cumulative = []
    for entry in entries:
        if not isinstance(entry, list) or len(entry) != 2:
            raise ModelFormatError(f"bad transition entry {entry!r}")
        symbol, cf = decode_symbol(entry[0]), entry[1]
        if isinstance(cf, bool) or not isinstance(cf, int):
            raise ModelFormatError(f"cumulative count must be an integer, got {cf!r}")
        if cf <= (cumulative[-1] if cumulative else 0):
            raise ModelFormatError(
                f"cumulative counts for context {context!r} are not strictly increasing"
            )
        symbols.append(symbol)
        cumulative.append(cf)

    keys = [symbol_sort_key(s) for s in symbols]
    if any(a >= b for a, b in zip(keys, keys[1:])):
        raise ModelFormatError(f"symbols for context {context!r} are not sorted")
    return Distribution(tuple(symbols), tuple(cumulative))


def model_from_dict(data: dict) -> MarkovModel:
    """
    Deserialize model from dictionary.

    Raises:
        ModelFormatError: If the document is not a valid model
    """
    if not isinstance(data, dict):
        raise ModelFormatError("model document must be a JSON object")
    if data.get("format") != FORMAT_NAME:
        raise ModelFormatError(f"not a wordgen model (format={data.get('format')!r})")
    if data.get("version") != FORMAT_VERSION:
        raise ModelFormatError(f"unsupported model version {data.get('version')!r}")

    depth = data.get("depth")
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
        raise ModelFormatError(f"invalid depth {depth!r}")

    raw_transitions = data.get("transitions")
    if not isinstance(raw_transitions, list):
        raise ModelFormatError("transitions must be a list")

    transitions = {}
    for item in raw_transitions:
        if not isinstance(item, list) or len(item) != 2 or not isinstance(item[0], list):
            raise ModelFormatError(f"bad transition record {item!r}")
        context = tuple(decode_symbol(s) for s in item[0])
        if len(context) != depth:
            raise ModelFormatError(
                f"context {context!r} has length {len(context)}, expected {depth}"
            )
        if context in transitions:
            raise ModelFormatError(f"duplicate context {context!r}")
        transitions[context] = _decode_distribution(context, item[1])

    return MarkovModel(depth=depth, transitions=transitions)


def save_model(model: MarkovModel, filepath, level: Optional[int] = None):
    """Save a compiled model to a compressed file"""
    if level is None:
        level = get_setting("persistence.compression_level", -1)
    payload = json.dumps(model_to_dict(model), ensure_ascii=False, separators=(",", ":"))
    data = zlib.compress(payload.encode("utf-8"), level)
    with open(filepath, "wb") as f:
        f.write(data)
    logger.info(f"Saved model to {filepath} ({len(model.transitions)} contexts, {len(data)} bytes)")


def load_model(filepath) -> MarkovModel:
    """
    Load a compiled model from a compressed file.

    Raises:
        FileNotFoundError: If the file does not exist
        ModelFormatError: If the file is not a valid model
    """
    with open(filepath, "rb") as f:
        data = f.read()
    try:
        document = json.loads(zlib.decompress(data).decode("utf-8"))
    except (zlib.error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ModelFormatError(f"{filepath}: cannot decode model: {e}") from e

    try:
        model = model_from_dict(document)
    except ModelFormatError as e:
        raise ModelFormatError(f"{Path(filepath)}: {e}") from e
    logger.info(f"Loaded model from {filepath} (depth {model.depth}, {len(model.transitions)} contexts)")
    return model


__all__ = [
    "FORMAT_NAME",
    "FORMAT_VERSION",
    "ModelFormatError",
    "encode_symbol",
    "decode_symbol",
    "model_to_dict",
    "model_from_dict",
    "save_model",
    "load_model",
]
