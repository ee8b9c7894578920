"""Central configuration for runtime-tunable parameters.

Rule constants (field size, fleet) are fixed. Everything else can be
overridden via environment variables so the interactive game runs with
sensible defaults while tests and bots can adjust behaviour.
"""

from __future__ import annotations

import os

# ===========================================================================
# Game Constants
# ===========================================================================
# Width and height of the square field. Not overridable: both peers must agree
# on it and the two-character move encoding only covers A-I / 1-9.
FIELD_SIZE: int = 9

# Fleet composition as ship lengths, largest first:
# one 4-cell, two 3-cell, three 2-cell and four 1-cell ships.
FLEET: tuple[int, ...] = (4, 3, 3, 2, 2, 2, 1, 1, 1, 1)

# Total number of ship cells on a complete board (20 for the standard fleet).
FLEET_CELLS: int = sum(FLEET)


# ===========================================================================
# Placement
# ===========================================================================
# SEABATTLE_PLACEMENT_ATTEMPTS: How many random positions are sampled for a
#   single ship before the whole board is discarded and generation restarts.
#   Defaults to 100.
#   Example: export SEABATTLE_PLACEMENT_ATTEMPTS=500
PLACEMENT_ATTEMPTS: int = int(os.getenv("SEABATTLE_PLACEMENT_ATTEMPTS", "100"))


# ===========================================================================
# Network Defaults
# ===========================================================================
# SEABATTLE_BIND_HOST: Address the server role listens on.
#   Defaults to "0.0.0.0" (all IPv4 interfaces).
#   Example: export SEABATTLE_BIND_HOST=127.0.0.1
BIND_HOST: str = os.getenv("SEABATTLE_BIND_HOST", "0.0.0.0")


# ===========================================================================
# Console
# ===========================================================================
# SEABATTLE_PROMPT: Text shown when the local player has to enter a move.
#   Defaults to "Your turn: ".
PROMPT: str = os.getenv("SEABATTLE_PROMPT", "Your turn: ")


# ===========================================================================
# Debugging and Logging
# ===========================================================================
# SEABATTLE_DEBUG: If "1", enables detailed debug logging across modules
#   (same effect as the --debug CLI flag).
#   Defaults to "0" (disabled).
#   Example: export SEABATTLE_DEBUG=1
DEBUG: bool = os.getenv("SEABATTLE_DEBUG", "0") == "1"
