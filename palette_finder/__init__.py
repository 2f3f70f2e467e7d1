"""
Palette Finder

Derives a color palette from a product photograph, synthesizes a reference
swatch from it and locates the places where that swatch pattern occurs.
"""

__version__ = "1.0.0"
