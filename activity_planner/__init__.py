"""
Activity planner core: schema-driven validation and local event storage.
"""

__version__ = "0.1.0"
