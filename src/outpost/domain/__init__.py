"""Rules layer for Outpost.

Everything in this package is synchronous and side-effect free.  It exposes:

* Value types for tiles, units and snapshots (see :mod:`models`,
  :mod:`snapshot`).
* The grid and unit registry built from a ledger snapshot.
* Reachability, selection and click resolution rules.
* Rule configuration objects (see :mod:`rules_config`).
"""

from . import (
    catalog,
    enums,
    grid,
    models,
    overlay,
    reachability,
    resolver,
    rules_config,
    selection,
    snapshot,
    units,
)

__all__ = [
    "catalog",
    "enums",
    "grid",
    "models",
    "overlay",
    "reachability",
    "resolver",
    "rules_config",
    "selection",
    "snapshot",
    "units",
]
