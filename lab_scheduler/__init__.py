"""Lab assistant session scheduler.

Modules:
- domain: availability grid, ORM rows, engine snapshots, repositories
- engine: greedy weekly assignment engine and orchestration
- services: constraint checks, schedule validation, read-only views
- io: configuration loading and CSV import/export
- cli: command-line interface entrypoints
"""

__all__ = [
    "domain",
    "engine",
    "services",
    "io",
    "cli",
]
