"""
domain - Entities, value objects, ports, and exceptions.

Pure Python with no I/O. Every other layer depends on it; it depends on
nothing in this project.
"""
