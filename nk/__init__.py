"""nk: release notes, changelog and version bookkeeping from git history."""

__version__ = "0.3.0"
