"""
Global Gourmet Scout backend.

Type a city, get its top three viral restaurants with images.
"""

__version__ = "0.1.0"
