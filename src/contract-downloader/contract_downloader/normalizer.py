"""
Normalization of Etherscan ``SourceCode`` values into a ContractTree.

Etherscan returns verified source in one of three encodings:

- Solidity multiple files: a JSON object ``{path: {"content": ...}}``.
- Solidity standard JSON input: the compiler input object wrapped in an extra
  pair of braces, ``{{"language": ..., "sources": {...}, ...}}``.
- Single file: the raw Solidity text.

Detection is by trial decoding in that order. A successful multi-file decode
wins; otherwise a ``{{`` prefix selects standard JSON input, and anything else
is a single file.
"""

import json
from typing import Any, Dict, Optional, Tuple

from .errors import MalformedStandardJsonInput
from .models import SOURCE_KEY, ContractTree, SourceEncoding

STANDARD_JSON_PREFIX = "{{"
SINGLE_FILE_NAME = "Contract.sol"


def _try_decode(text: str) -> Optional[Any]:
    try:
        return json.loads(text)
    except ValueError:
        return None


def _as_tree(value: Any) -> Optional[ContractTree]:
    """Return value when it has the file-path -> field-mapping shape, else None."""
    if not isinstance(value, dict):
        return None
    for path, fields in value.items():
        if not isinstance(path, str) or not isinstance(fields, dict):
            return None
        if not isinstance(fields.get(SOURCE_KEY), str):
            return None
    return value


def _parse_multi_file(raw_source: str) -> Optional[ContractTree]:
    return _as_tree(_try_decode(raw_source))


def detect_encoding(raw_source: str) -> SourceEncoding:
    if _parse_multi_file(raw_source) is not None:
        return SourceEncoding.MULTI_FILE
    if raw_source.startswith(STANDARD_JSON_PREFIX):
        return SourceEncoding.STANDARD_JSON_INPUT
    return SourceEncoding.SINGLE_FILE


def parse_standard_json_input(raw_source: str) -> ContractTree:
    """Extract ``sources`` from a brace-wrapped standard JSON input string."""
    if not raw_source.startswith(STANDARD_JSON_PREFIX) or not raw_source.endswith("}"):
        raise MalformedStandardJsonInput("expected a {{...}} wrapped standard JSON input", raw_source)

    # Etherscan wraps the compiler input in one extra pair of braces.
    inner = raw_source[1:-1]
    decoded = _try_decode(inner)
    if decoded is None:
        raise MalformedStandardJsonInput("invalid JSON", inner)
    if not isinstance(decoded, dict):
        raise MalformedStandardJsonInput("standard JSON input is not an object", inner)

    sources = decoded.get("sources")
    if not isinstance(sources, dict):
        raise MalformedStandardJsonInput("missing 'sources' object", inner)

    tree = _as_tree(sources)
    if tree is None:
        raise MalformedStandardJsonInput(f"every source needs a string '{SOURCE_KEY}'", inner)
    return tree


def single_file_tree(raw_source: str, contract_name: str) -> ContractTree:
    # contract_name is used as-is; sanitizing paths is left to the caller.
    return {f"{contract_name}/{SINGLE_FILE_NAME}": {SOURCE_KEY: raw_source}}


def classify_and_normalize(raw_source: str, contract_name: str) -> Tuple[SourceEncoding, ContractTree]:
    tree = _parse_multi_file(raw_source)
    if tree is not None:
        return SourceEncoding.MULTI_FILE, tree

    if raw_source.startswith(STANDARD_JSON_PREFIX):
        return SourceEncoding.STANDARD_JSON_INPUT, parse_standard_json_input(raw_source)

    return SourceEncoding.SINGLE_FILE, single_file_tree(raw_source, contract_name)


def normalize_source(raw_source: str, contract_name: str) -> ContractTree:
    """Convert an Etherscan ``SourceCode`` value into ``{path: {"content": ...}}``."""
    _, tree = classify_and_normalize(raw_source, contract_name)
    return tree


def tree_contents(tree: ContractTree) -> Dict[str, str]:
    return {path: fields[SOURCE_KEY] for path, fields in tree.items()}
