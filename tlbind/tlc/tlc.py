# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
tlbind compiler driver.

Pipeline (single pass, everything held in memory):

  parse -> build_shapes -> group_constructors -> check_references
        -> build_registry -> build_module_decl -> render_module

`compile_schema` is the library entry point and raises on the first fatal
error. `main` is the CLI: it converts errors into diagnostics, writes the
generated module (and the optional JSON dump) atomically, and propagates the
schema layer into a constants file when asked to.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from tlbind.tlc.core.artifacts import canonical_json_bytes, write_atomic
from tlbind.tlc.core.diagnostics import Diagnostic, has_errors
from tlbind.tlc.core.errors import CompileError, MissingVersionMarker
from tlbind.tlc.core.span import Span
from tlbind.tlc.core.tags import SKIP_TAGS
from tlbind.tlc.emit import build_module_decl, render_module
from tlbind.tlc.emit.ir import ModuleDecl
from tlbind.tlc.groups import GroupTable, group_constructors
from tlbind.tlc.layer import extract_layer, layer_patch_bytes, require_layer
from tlbind.tlc.parser import parse_schema, parse_schema_file
from tlbind.tlc.parser.ast import RawSchema
from tlbind.tlc.registry import Registry, build_registry, registry_to_json
from tlbind.tlc.shapes import Shape, build_shapes
from tlbind.tlc.type_resolver import check_references

DEFAULT_RUNTIME_MODULE = "tlbind.runtime"


@dataclass(frozen=True)
class CompileOptions:
	"""Everything one CLI invocation needs; built from argparse, never mutated."""

	schema_path: Path
	output_path: Path
	constants_path: Optional[Path] = None
	json_path: Optional[Path] = None
	runtime_module: str = DEFAULT_RUNTIME_MODULE
	skip_tags: FrozenSet[int] = SKIP_TAGS

	@classmethod
	def from_args(cls, args: argparse.Namespace) -> "CompileOptions":
		return cls(
			schema_path=args.schema,
			output_path=args.output,
			constants_path=args.constants,
			json_path=args.emit_json,
			runtime_module=args.runtime_module,
		)


@dataclass(frozen=True)
class CompileResult:
	"""Artifacts of one successful compile."""

	module: str  # generated Python source
	layer: Optional[int]
	schema: RawSchema
	shapes: Tuple[Shape, ...]
	groups: GroupTable
	registry: Registry
	decl: ModuleDecl

	def to_json(self) -> Dict[str, Any]:
		return registry_to_json(self.registry, layer=self.layer)


def compile_schema(
	text: str,
	*,
	source: Optional[str] = None,
	runtime_module: str = DEFAULT_RUNTIME_MODULE,
	skip_tags: Iterable[int] = SKIP_TAGS,
) -> CompileResult:
	"""
	Compile TL schema text into a Python bindings module.

	Raises SchemaParseError / UnresolvedTypeError on the first fatal error. A
	missing layer marker is not an error here: `layer` is simply None.
	"""
	schema = parse_schema(text, filename=source)
	return _compile_parsed(schema, text, source=source, runtime_module=runtime_module, skip_tags=skip_tags)


def _compile_parsed(
	schema: RawSchema,
	text: str,
	*,
	source: Optional[str],
	runtime_module: str,
	skip_tags: Iterable[int],
) -> CompileResult:
	shapes = build_shapes(schema.records, skip_tags=skip_tags)
	groups = group_constructors(shapes)
	check_references(
		shapes,
		groups=(g.name for g in groups.groups),
		constructors=(s.name for s in shapes if not s.is_function),
	)
	registry = build_registry(shapes)
	layer = extract_layer(text)
	decl = build_module_decl(shapes, groups, registry, source=source, layer=layer)
	module = render_module(decl, runtime_module=runtime_module)
	return CompileResult(
		module=module,
		layer=layer,
		schema=schema,
		shapes=shapes,
		groups=groups,
		registry=registry,
		decl=decl,
	)


def _io_error(path: Path, err: Union[OSError, UnicodeDecodeError], *, what: str) -> Diagnostic:
	return Diagnostic(
		message=f"cannot {what} {path}: {getattr(err, 'strerror', None) or err}",
		code="io",
		phase="emit",
		span=Span(file=str(path)),
	)


def run(opts: CompileOptions) -> List[Diagnostic]:
	"""
	Compile `opts.schema_path` and write the requested artifacts; returns diagnostics.

	Every artifact is rendered before the first one is written, so a constants
	file that cannot be read leaves the output module untouched as well.
	"""
	schema_file = str(opts.schema_path)
	schema, text, diagnostics = parse_schema_file(opts.schema_path)
	if schema is None:
		return diagnostics

	try:
		result = _compile_parsed(
			schema,
			text,
			source=schema_file,
			runtime_module=opts.runtime_module,
			skip_tags=opts.skip_tags,
		)
	except CompileError as err:
		return [err.to_diagnostic(file=schema_file)]

	layer: Optional[int] = None
	try:
		layer = require_layer(text)
	except MissingVersionMarker as err:
		diagnostics.append(err.to_diagnostic(file=schema_file))

	artifacts: List[Tuple[Path, bytes]] = [(opts.output_path, result.module.encode("utf-8"))]
	if opts.json_path is not None:
		artifacts.append((opts.json_path, canonical_json_bytes(result.to_json())))
	if opts.constants_path is not None and layer is not None:
		try:
			patched = layer_patch_bytes(opts.constants_path, layer)
		except (OSError, UnicodeDecodeError) as err:
			return diagnostics + [_io_error(opts.constants_path, err, what="update")]
		if patched is None:
			diagnostics.append(
				Diagnostic(
					message=f"no 'LAYER = <n>' constant found; layer {layer} not propagated",
					code="missing-layer-constant",
					phase="layer",
					severity="warning",
					span=Span(file=str(opts.constants_path)),
				)
			)
		else:
			artifacts.append((opts.constants_path, patched))

	for path, data in artifacts:
		try:
			write_atomic(path, data)
		except OSError as err:
			return diagnostics + [_io_error(path, err, what="write")]
	return diagnostics


def _report(diagnostics: List[Diagnostic], *, as_json: bool) -> int:
	exit_code = 1 if has_errors(diagnostics) else 0
	if as_json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [d.to_json() for d in diagnostics],
		}
		print(json.dumps(payload))
	else:
		for d in diagnostics:
			print(d.format_human(), file=sys.stderr)
	return exit_code


def main(argv: list[str] | None = None) -> int:
	"""
	CLI: compile one TL schema into a Python bindings module.

	With --json, prints structured diagnostics (phase/code/message/severity/
	file/line/column) and an exit_code; otherwise prints human-readable
	messages to stderr. Warnings do not fail the run.
	"""
	parser = argparse.ArgumentParser(description="Compile a TL schema into Python bindings")
	parser.add_argument("schema", type=Path, help="Path to the TL schema (.tl)")
	parser.add_argument("-o", "--output", type=Path, required=True, help="Path to the generated Python module")
	parser.add_argument(
		"--constants",
		type=Path,
		help="Source file whose `LAYER = <n>` constant receives the schema layer",
	)
	parser.add_argument("--emit-json", type=Path, help="Write the schema definitions as canonical JSON")
	parser.add_argument(
		"--runtime-module",
		default=DEFAULT_RUNTIME_MODULE,
		help=f"Module the generated code imports TLObject/TLRequest from (default: {DEFAULT_RUNTIME_MODULE})",
	)
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/code/message/severity/file/line/column)",
	)
	args = parser.parse_args(argv)
	return _report(run(CompileOptions.from_args(args)), as_json=args.json)


__all__ = ["CompileOptions", "CompileResult", "compile_schema", "run", "main"]
