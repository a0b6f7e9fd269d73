"""
Padel league manager: divisions, round-robin fixtures and set-based standings.
"""
__version__ = "0.1.0"
