# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
tlbind: TL schema -> Python bindings.

Packages:
  tlc: the schema compiler (parser, resolver, emitter, CLI)
  runtime: base classes imported by generated modules
"""

__all__ = ["tlc", "runtime"]
