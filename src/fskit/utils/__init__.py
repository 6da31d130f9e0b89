"""Shared utilities: logging setup and cross-cutting concerns.

Rules
-----
* No business logic.
* No filesystem I/O.
* Importable by any layer.
"""
