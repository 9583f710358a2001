"""Declarative record-to-geometry pipeline for area, bar, gauge and map charts."""

__version__ = "0.1.0"
