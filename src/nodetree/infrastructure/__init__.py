"""
Infrastructure layer package.

This package contains modules for interacting with the outside world:
- Key-value storage backends
- File reading and saving
- Logging configuration
- Path utilities

Modules here must not import the command-line front end.
"""
