"""Utility functions for logging and nested metadata documents."""

import copy
import logging.config
import structlog
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Key used by safe_put when a scalar has to share a path with a nested map
ALTERNATIVE_KEY = "value"


def setup_logging(
    config_path: Optional[Union[str, Path]] = None,
    log_level: str = "INFO",
    log_format: str = "text"
) -> None:
    """Setup structured logging configuration."""
    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(
            level=getattr(logging, log_level.upper()),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    use_json = log_format == "json" or bool(config_path)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def safe_get(dictionary: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Safely get a value from a nested dictionary using dot notation."""
    keys = key.split('.')
    value = dictionary

    try:
        for k in keys:
            value = value[k]
        return value
    except (KeyError, TypeError):
        return default


def safe_put(data: Dict[str, Any], key: str, value: Any) -> None:
    """Put a dotted key into a nested dictionary without clobbering siblings.

    Dotted keys never override each other: when a scalar already sits where a
    nested map is needed, the scalar is moved under ``"value"`` of a new map.

        >>> doc = {}
        >>> safe_put(doc, "com.docker.swarm.task", "x")
        >>> safe_put(doc, "com.docker.swarm.task.id", 1)
        >>> doc
        {'com': {'docker': {'swarm': {'task': {'value': 'x', 'id': 1}}}}}
    """
    target, last_key = _find_slot(data, key)
    target[last_key] = value


def _find_slot(data: Dict[str, Any], key: str):
    while True:
        if key in data:
            if isinstance(data[key], dict):
                return data[key], ALTERNATIVE_KEY
            return data, key

        head, sep, rest = key.partition('.')
        if not sep:
            return data, key

        child = data.get(head)
        if child is None and head not in data:
            child = {}
            data[head] = child
        elif not isinstance(child, dict):
            child = {ALTERNATIVE_KEY: child}
            data[head] = child

        data = child
        key = rest


def dotted_put(data: Dict[str, Any], key: str, value: Any) -> None:
    """Put a value at a dotted path, replacing anything in the way."""
    *parents, last = key.split('.')
    for part in parents:
        child = data.get(part)
        if not isinstance(child, dict):
            child = {}
            data[part] = child
        data = child
    data[last] = value


def deep_update(target: Dict[str, Any], update: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Recursively merge ``update`` into ``target`` in place.

    Nested dictionaries are merged key by key; any other value in ``update``
    replaces the one in ``target``.
    """
    if not update:
        return target

    for key, value in update.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            deep_update(existing, value)
        else:
            target[key] = value
    return target


def deep_merge(base: Optional[Dict[str, Any]], update: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return a new document with ``update`` deep-merged over ``base``."""
    merged = copy.deepcopy(base) if base else {}
    return deep_update(merged, copy.deepcopy(update))


def dedot(key: str) -> str:
    """Replace dots in a label or annotation key."""
    return key.replace('.', '_')
