"""Puzzle domain services: catalog, scoring and attempt recording.

This package contains the domain logic imported by HTTP routes and socket
handlers, keeping transport concerns separated from puzzle mechanics.
"""
