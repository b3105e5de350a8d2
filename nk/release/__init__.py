"""Release notes and version resolution engine.

Layers, leaf first:
- model / semver: immutable data shared by every step
- parser, tags, categorize, contributors, links: pure transformations
- render, changelog: text production and changelog merging
- vcs: the narrow interface the engine reads history through
- service: the two use cases (release notes, create release)

Only `service` talks to a console; nothing here imports the git adapter.
"""

from __future__ import annotations
