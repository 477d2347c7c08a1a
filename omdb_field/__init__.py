"""
Shared OMDb field app library code.

This package is intended to hold code that is reused across:
- the FastAPI app in `api/`
- batch scripts in `scripts/`

App entrypoints (FastAPI routers, CLI scripts) should live outside this package and
import from `omdb_field` rather than the other way around.
"""
