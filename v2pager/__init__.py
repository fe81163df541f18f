"""
Keyed pagination and HTML clean-up for V2EX forum listings.
"""

__version__ = "0.1.0"
