"""
tools/harmony/ — Harmony tools over the core/harmony engine.

Discovered automatically by tools.registry.ToolRegistry.
"""
