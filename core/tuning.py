"""core/tuning.py — Data-driven timer constants.

The defaults live in ``core.constants``; ``data/tuning.toml`` may
override any of them without touching code.  Any system can read a
value with::

    from core.tuning import get
    expiry = get("timer", "expiry", EXPIRY)

Values are read when a registry or feature object is built, so call
``reload()`` and rebuild the feature to pick up edits.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib                # pip install tomli


_data: dict = {}
_path: Path | None = None


def default_path() -> Path:
    """``data/tuning.toml`` relative to the project root."""
    return Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning values from *path*.

    A missing file is not an error: every lookup falls back to the
    caller's default.
    """
    global _data, _path

    path = default_path() if path is None else Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found — using defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk."""
    load(_path)


def clear() -> None:
    """Forget every loaded value (tests use this to get pure defaults)."""
    global _data
    _data = {}


def get(section: str, key: str, default=None):
    """Read a tuning value.

    *section* uses dot-notation to traverse nested tables, e.g.
    ``"timer"`` looks up ``[timer]``.

    >>> get("timer", "no_such_key", 60)
    60
    """
    node = _walk(section)
    if node is None:
        return default
    return node.get(key, default)


def section(section_path: str) -> dict:
    """Return an entire section dict (shallow copy), or empty dict."""
    node = _walk(section_path)
    return dict(node) if node is not None else {}


def _walk(section_path: str) -> dict | None:
    node = _data
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node if isinstance(node, dict) else None


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
