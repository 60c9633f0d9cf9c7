"""Release bounded context.

- domain: value types and release rules (stability, CI snapshots, changelog)
- flow: the next-release decision engine
- infra: GitHub adapter feeding the engine
- view: console rendering of a computed release
"""

from __future__ import annotations
