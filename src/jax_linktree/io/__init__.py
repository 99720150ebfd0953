"""Loaders that build LinkTrees from robot description files."""

from .urdf_parser import load_urdf, load_urdf_string

__all__ = ["load_urdf", "load_urdf_string"]
