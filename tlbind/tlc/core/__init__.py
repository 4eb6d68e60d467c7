"""
tlbind.tlc.core: shared types/diagnostics used across compiler passes.

Modules:
  - span: source locations
  - diagnostics: Diagnostic record rendered by the driver
  - errors: SchemaParseError / UnresolvedTypeError / MissingVersionMarker
  - tags: tag formatting, inference and the skip list
  - types_core: ResolvedType variants
  - artifacts: canonical JSON and atomic writes
"""

__all__ = [
	"span",
	"diagnostics",
	"errors",
	"tags",
	"types_core",
	"artifacts",
]
