"""
External system integrations (OMDb).

New external metadata clients should live under this namespace so they remain
decoupled from app entrypoints (`api/`) and batch scripts (`scripts/`).
"""
