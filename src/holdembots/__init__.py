"""Decision heuristics and self-play verification for Hold'em bots."""

from __future__ import annotations

__all__: list[str] = []
