"""Domain model for Stronghold kingdoms.

This package holds every game rule in one place.  It exposes:

* Dataclasses describing the kingdom and its subsystems (see :mod:`models`).
* Enumerations shared across the rules layer (see :mod:`enums`).
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions, one module per subsystem, and the yearly
  orchestrator in :mod:`tick`.

Everything operates in memory; persistence lives in
:mod:`stronghold.savegame` and :mod:`stronghold.repository`.
"""

from . import (
    army,
    bank,
    diplomacy,
    economy,
    enums,
    events,
    kingdom,
    market,
    models,
    population,
    resources,
    results,
    rulers,
    rules_config,
    tick,
)

__all__ = [
    "army",
    "bank",
    "diplomacy",
    "economy",
    "enums",
    "events",
    "kingdom",
    "market",
    "models",
    "population",
    "resources",
    "results",
    "rulers",
    "rules_config",
    "tick",
]
