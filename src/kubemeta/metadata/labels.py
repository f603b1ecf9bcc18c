"""Builders turning label/annotation mappings into nested-document-safe maps."""

from typing import Any, Dict, Iterable, Optional

from kubemeta.core.utils import dedot, safe_put


def generate_map(mapping: Optional[Dict[str, str]], dedot_keys: bool) -> Dict[str, Any]:
    """Build a document from every entry of ``mapping``.

    With ``dedot_keys`` set, dots in keys are replaced so each key stays a
    single field; otherwise dotted keys are nested with ``safe_put``.
    """
    output: Dict[str, Any] = {}
    for key, value in (mapping or {}).items():
        if dedot_keys:
            output[dedot(key)] = value
        else:
            safe_put(output, key, value)
    return output


def generate_map_subset(
    mapping: Optional[Dict[str, str]],
    keys: Iterable[str],
    dedot_keys: bool
) -> Dict[str, Any]:
    """Build a document from the entries of ``mapping`` listed in ``keys``."""
    output: Dict[str, Any] = {}
    if not mapping:
        return output

    for key in keys:
        if key not in mapping:
            continue
        if dedot_keys:
            output[dedot(key)] = mapping[key]
        else:
            safe_put(output, key, mapping[key])
    return output
