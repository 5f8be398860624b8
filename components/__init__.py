"""components — Plain dataclasses shared by the tracker, organised by domain.

Submodules
----------
spatial        BlockPos
resources      FeatureConfig, LocationInfo, MayorInfo
dev_log        DevLog

All public names are re-exported here so code can do
``from components import BlockPos``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import BlockPos

# ── Host state ───────────────────────────────────────────────────────
from components.resources import FeatureConfig, LocationInfo, MayorInfo

# ── Diagnostics ──────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    "BlockPos",
    "FeatureConfig", "LocationInfo", "MayorInfo",
    "DevLog",
]
