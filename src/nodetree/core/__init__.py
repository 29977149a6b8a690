"""Core domain logic package.

This package contains the pure tree-manipulation logic: node models, cursor
resolution, validation, mutations, reordering, persistence and export/import.
Modules here must not import the command-line front end.
"""
