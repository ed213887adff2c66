"""Example simulations for simullm.

This package demonstrates engine usage but is not part of the core API.
"""
