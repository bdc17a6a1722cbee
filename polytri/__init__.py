"""Constrained Delaunay triangulation of polygons with holes and Steiner points."""

__version__ = "0.1.0"