# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
tlbind schema compiler package (`tlc`).

Passes live in sibling modules (parser, type_resolver, shapes, groups,
registry, layer, emit). The CLI entrypoint is `tlbind.tlc.tlc:main`.
"""

__all__ = []
