# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Binding IR -> Python source.

The printer is the only place that knows Python spelling. Output layout:

  header, imports, optional `T` type variable and `LAYER` constant
  constructor/function classes (schema order)
  group unions (`TypeX = typing.Union[...]`, after every class they name)
  namespace holders (`class messages: SendMessage = messages_SendMessage`)
  registries (`CONSTRUCTORS`, `FUNCTIONS`, `ENUMS`, `NAMES`, `TYPES`)
  `AnyType` / `AnyFunction` / `AnyGenericFunction` / `AnyObject`

Annotations are written as source text; the generated module uses
`from __future__ import annotations` so forward references need no quoting
(class bases are the exception and are quoted explicitly).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from tlbind.tlc.core.errors import SchemaParseError
from tlbind.tlc.core.tags import format_tag
from tlbind.tlc.core.types_core import GenericPlaceholder, NamedType, ResolvedType, Scalar, ScalarKind, Vector
from tlbind.tlc.emit import naming
from tlbind.tlc.emit.ir import ClassDecl, FieldDecl, MemberKind, ModuleDecl, UnionDecl

INDENT = "    "
TYPE_VAR = "T"

_SCALAR_ANNOTATIONS: Dict[ScalarKind, str] = {
	ScalarKind.INT: "int",
	ScalarKind.LONG: "int",
	ScalarKind.INT128: "int",
	ScalarKind.INT256: "int",
	ScalarKind.DOUBLE: "float",
	ScalarKind.BOOL: "bool",
	ScalarKind.TRUE: "bool",
	ScalarKind.STRING: "str",
	ScalarKind.BYTES: "bytes",
	ScalarKind.OBJECT: "TLObject",
}

# Module-level names the generated module defines or imports itself.
RESERVED_NAMES = frozenset(
	{
		"TLObject",
		"TLRequest",
		TYPE_VAR,
		"typing",
		"annotations",
		"LAYER",
		"CONSTRUCTORS",
		"FUNCTIONS",
		"ENUMS",
		"NAMES",
		"TYPES",
		"AnyType",
		"AnyFunction",
		"AnyGenericFunction",
		"AnyObject",
	}
)


def annotation(ty: ResolvedType) -> str:
	"""Python annotation text for a resolved type."""
	if isinstance(ty, Scalar):
		return _SCALAR_ANNOTATIONS[ty.kind]
	if isinstance(ty, GenericPlaceholder):
		# `!X` params carry a request producing X; the result is X itself.
		return TYPE_VAR if ty.is_result else f"TLRequest[{TYPE_VAR}]"
	if isinstance(ty, Vector):
		return f"list[{annotation(ty.elem)}]"
	if isinstance(ty, NamedType):
		if ty.abstract:
			return naming.union_name(ty.qualified)
		return naming.class_name(ty.qualified)
	raise TypeError(f"unsupported resolved type {ty!r}")


def _literal(text: str) -> str:
	return json.dumps(text)


def _docstring(text: str) -> str:
	return '"""' + text.replace("\\", "\\\\").replace('"', '\\"') + '"""'


def schema_line(cls: ClassDecl) -> str:
	"""Reconstruct the combinator's schema line for the class docstring."""
	parts = [f"{cls.schema_name}#{cls.tag:08x}"]
	parts.extend(f"{f.name}:{f.raw_type}" for f in cls.fields)
	parts.append(f"= {cls.result_type};")
	return " ".join(parts)


def _check_names(decl: ModuleDecl) -> None:
	seen: Dict[str, str] = {}

	def claim(py_name: str, schema_name: str) -> None:
		if py_name in RESERVED_NAMES:
			raise SchemaParseError(f"'{schema_name}' maps to reserved binding name '{py_name}'")
		prior = seen.get(py_name)
		if prior is not None:
			raise SchemaParseError(
				f"'{schema_name}' and '{prior}' both map to binding name '{py_name}'",
			)
		seen[py_name] = schema_name

	for cls in decl.classes:
		claim(naming.class_name(cls.schema_name), cls.schema_name)
	for union in decl.unions:
		claim(naming.union_name(union.schema_name), union.schema_name)
	for ns in decl.namespaces:
		claim(naming.namespace_name(ns.name), ns.name)


@dataclass
class _ModulePrinter:
	decl: ModuleDecl
	runtime_module: str
	lines: List[str] = field(default_factory=list)

	def emit(self, text: str = "", depth: int = 0) -> None:
		self.lines.append(f"{INDENT * depth}{text}" if text else "")

	def render(self) -> str:
		_check_names(self.decl)
		self._emit_header()
		for cls in self.decl.classes:
			self._emit_class(cls)
		for union in self.decl.unions:
			self._emit_union(union)
		if self.decl.unions:
			self.emit()
			self.emit()
		self._emit_namespaces()
		self._emit_registries()
		self._emit_any_unions()
		while self.lines and self.lines[-1] == "":
			self.lines.pop()
		return "\n".join(self.lines) + "\n"

	def _emit_header(self) -> None:
		if self.decl.source:
			self.emit(f"# Generated by tlbind from {os.path.basename(self.decl.source)}; do not edit.")
		else:
			self.emit("# Generated by tlbind; do not edit.")
		self.emit()
		self.emit("from __future__ import annotations")
		self.emit()
		self.emit("import typing")
		self.emit()
		self.emit(f"from {self.runtime_module} import TLObject, TLRequest")
		consts = []
		if self.decl.layer is not None:
			consts.append(f"LAYER = {self.decl.layer}")
		if self.decl.has_generic:
			consts.append(f'{TYPE_VAR} = typing.TypeVar("{TYPE_VAR}")')
		if consts:
			self.emit()
			for line in consts:
				self.emit(line)
		self.emit()
		self.emit()

	def _base(self, cls: ClassDecl) -> str:
		if not cls.is_function:
			return "TLObject"
		if cls.is_generic:
			return f"TLRequest[{TYPE_VAR}]"
		if cls.returns is None:
			return "TLRequest[typing.Any]"
		return f"TLRequest[{_literal(annotation(cls.returns))}]"

	def _emit_class(self, cls: ClassDecl) -> None:
		name = naming.class_name(cls.schema_name)
		self.emit(f"class {name}({self._base(cls)}):")
		self.emit(_docstring(schema_line(cls)), 1)
		self.emit()
		self.emit(f"_name_ = {_literal(cls.schema_name)}", 1)
		self.emit(f"_tag_ = {format_tag(cls.tag)}", 1)
		self.emit(f"_result_ = {_literal(cls.result_type)}", 1)
		self._emit_tuple("_params_", [self._param_entry(f) for f in cls.fields])
		self._emit_tuple("_conditions_", [self._condition_entry(f) for f in cls.conditions])
		if cls.params:
			self._emit_init(cls.params)
		if cls.fields:
			self._emit_values(cls.fields)
		self.emit()
		self.emit()

	def _emit_tuple(self, attr: str, items: Sequence[str]) -> None:
		if not items:
			self.emit(f"{attr} = ()", 1)
			return
		self.emit(f"{attr} = (", 1)
		for item in items:
			self.emit(f"{item},", 2)
		self.emit(")", 1)

	def _param_entry(self, f: FieldDecl) -> str:
		return f"({_literal(f.name)}, {_literal(annotation(f.type))}, {_literal(f.raw_type)})"

	def _condition_entry(self, f: FieldDecl) -> str:
		return (
			f"({_literal(naming.attr_name(f.name))}, {_literal(f.bitmask_field or '')}, "
			f"{f.bound_bit}, {f.is_true_flag})"
		)

	def _emit_init(self, params: Sequence[FieldDecl]) -> None:
		self.emit()
		self.emit("def __init__(", 1)
		self.emit("self,", 2)
		self.emit("*,", 2)
		for p in params:
			attr = naming.attr_name(p.name)
			if p.optional:
				self.emit(f"{attr}: typing.Optional[{annotation(p.type)}] = None,", 2)
			else:
				self.emit(f"{attr}: {annotation(p.type)},", 2)
		self.emit(") -> None:", 1)
		for p in params:
			attr = naming.attr_name(p.name)
			self.emit(f"self.{attr} = {attr}", 2)

	def _emit_values(self, fields: Sequence[FieldDecl]) -> None:
		self.emit()
		self.emit("def _values_(self) -> tuple[tuple[str, typing.Any], ...]:", 1)
		self.emit("return (", 2)
		for f in fields:
			if f.is_bitmask:
				value = f"self._bitmask_({_literal(f.name)})"
			else:
				value = f"self.{naming.attr_name(f.name)}"
			self.emit(f"({_literal(f.name)}, {value}),", 3)
		self.emit(")", 2)

	def _emit_union(self, union: UnionDecl) -> None:
		name = naming.union_name(union.schema_name)
		self._emit_alias(name, [naming.class_name(m) for m in union.members], blank=False)

	def _emit_namespaces(self) -> None:
		for ns in self.decl.namespaces:
			self.emit(f"class {naming.namespace_name(ns.name)}:")
			for member in ns.members:
				if member.kind is MemberKind.CLASS:
					canonical = naming.class_name(member.schema_name)
				else:
					canonical = naming.union_name(member.schema_name)
				self.emit(f"{naming.alias_name(canonical, ns.name)} = {canonical}", 1)
			self.emit()
			self.emit()

	def _emit_mapping(self, header: str, entries: Sequence[tuple[str, str]]) -> None:
		if not entries:
			self.emit(f"{header} = {{}}")
			self.emit()
			return
		self.emit(f"{header} = {{")
		for key, value in entries:
			self.emit(f"{key}: {value},", 1)
		self.emit("}")
		self.emit()

	def _emit_registries(self) -> None:
		reg = self.decl.registry
		self._emit_mapping(
			"CONSTRUCTORS: dict[str, type[TLObject]]",
			[(_literal(n), naming.class_name(n)) for n in reg.constructors],
		)
		self._emit_mapping(
			"FUNCTIONS: dict[str, type[TLRequest]]",
			[(_literal(n), naming.class_name(n)) for n in reg.functions],
		)
		self._emit_mapping(
			"ENUMS: dict[str, typing.Any]",
			[(_literal(n), naming.union_name(n)) for n in reg.groups],
		)
		self.emit("NAMES: dict[str, type[TLObject]] = {**CONSTRUCTORS, **FUNCTIONS}")
		self.emit()
		self._emit_mapping(
			"TYPES: dict[int, type[TLObject]]",
			[(format_tag(tag), naming.class_name(n)) for tag, n in reg.by_tag],
		)
		self.emit()

	def _emit_alias(self, name: str, members: Sequence[str], *, blank: bool = True) -> bool:
		if not members:
			return False
		if len(members) == 1:
			self.emit(f"{name} = {members[0]}")
		else:
			self.emit(f"{name} = typing.Union[")
			for m in members:
				self.emit(f"{m},", 1)
			self.emit("]")
		if blank:
			self.emit()
		return True

	def _emit_any_unions(self) -> None:
		reg = self.decl.registry
		has_type = self._emit_alias("AnyType", [naming.class_name(n) for n in reg.constructors])
		has_function = self._emit_alias("AnyFunction", [naming.class_name(n) for n in reg.functions])
		self._emit_alias(
			"AnyGenericFunction",
			[f"{naming.class_name(n)}[{TYPE_VAR}]" for n in reg.generic_functions],
		)
		parts = [n for n, present in (("AnyType", has_type), ("AnyFunction", has_function)) if present]
		self._emit_alias("AnyObject", parts)


def render_module(decl: ModuleDecl, *, runtime_module: str = "tlbind.runtime") -> str:
	"""
	Render `decl` as the source of a Python module.

	Raises SchemaParseError when two schema names map to the same Python name
	(or to a name the module reserves for itself).
	"""
	return _ModulePrinter(decl=decl, runtime_module=runtime_module).render()


__all__ = ["render_module", "annotation", "schema_line", "RESERVED_NAMES"]
