"""
Binding emission: IR construction and the Python printer.

`build_module_decl` turns resolved shapes into a declaration tree;
`render_module` prints that tree as a Python module.
"""

from .binding_builder import build_class_decl, build_module_decl
from .python_printer import render_module

__all__ = ["build_class_decl", "build_module_decl", "render_module"]
