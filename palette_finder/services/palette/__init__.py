"""
Palette Finder Palette Module

Palette extraction by color quantization, swatch synthesis from the
extracted colors, and location of swatch occurrences on a correlation
surface.
"""
