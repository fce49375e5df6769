"""
pagewarden: scoped browser pages and request pacing.
"""

__version__ = "0.1.0"
