"""logic — Tracker systems package.

Top-level modules
-----------------
spawn_cluster     — one tracked spawn point and its derived state
cluster_registry  — merge / expire / notify over all spawn points
corleone_timer    — host event validation and routing
notifications     — alert bursts and the tick-delayed sound queue
waypoints         — named markers, Hollows presets, the /sthw command
"""
