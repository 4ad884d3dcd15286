# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""
Simple runtime registry for steering behaviours.

Built-in behaviours register themselves when `models` is imported.
External modules listed in the config can register more behaviours by
calling `register_steering_behavior`; the agents only ever call
`get_steering_behavior`.
"""

import importlib
import logging
from typing import Any, Callable, Dict, Optional
from plugin_base import SteeringBehavior

logger = logging.getLogger("sim.plugin_registry")

# name -> factory(agent, settings) -> SteeringBehavior
_steering_behaviors: Dict[str, Callable[[Any, Any], SteeringBehavior]] = {}

def _normalize_name(name: str) -> str:
    """Normalize the name."""
    return (name or "").strip().lower()

def register_steering_behavior(name: str, factory: Callable[[Any, Any], SteeringBehavior]) -> None:
    """
    Register a new steering behaviour.

    Parameters
    ----------
    name:
        Identifier of the behaviour, e.g. ``"wander"`` or ``"pursuit"``.
    factory:
        A callable that receives an agent and the scenario settings and
        returns an object implementing the `SteeringBehavior` protocol.
    """
    _steering_behaviors[_normalize_name(name)] = factory

def get_steering_behavior(name: str, agent: Any, settings: Any = None) -> Optional[SteeringBehavior]:
    """
    Return a behaviour instance for the given agent.

    Returns None when nothing is registered under `name`.
    """
    factory = _steering_behaviors.get(_normalize_name(name))
    if factory is None:
        return None
    return factory(agent, settings)

def available_steering_behaviors() -> Dict[str, Callable[[Any, Any], SteeringBehavior]]:
    """Return the map of registered behaviour factories."""
    return dict(_steering_behaviors)

def load_plugins_from_config(config: Any) -> list:
    """
    Import the plugin modules listed in the config.

    Expected layout (optional): ``{"plugins": ["my_package.my_plugin"]}``.
    Each module is imported for its side effects, typically registration
    of steering behaviours. Modules that fail to import are logged and
    skipped. Returns the names of the modules that were imported.
    """
    modules = []
    data = getattr(config, "data", None)
    if isinstance(data, dict):
        modules.extend(data.get("plugins", []))

    loaded = []
    for mod in modules:
        try:
            importlib.import_module(mod)
        except ImportError as exc:
            logger.error("Failed to import plugin module '%s': %s", mod, exc)
            continue
        loaded.append(mod)
        logger.info("Loaded plugin module '%s'", mod)
    return loaded
