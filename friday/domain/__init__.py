"""
friday.domain — Canonical data models, enumerations and error types.

Nothing in here imports from other friday sub-packages (stdlib only), so
clients, controllers and routes can all share these types.
"""
