# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
TL schema parser.

Parses schema text with the LALR grammar in `tl.lark` and builds frozen
`RawRecord`s. The same grammar exposes a `wire_type` start rule used to parse a
single param type token into a `WireTypeExpr`.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from tlbind.tlc.core.errors import SchemaParseError
from tlbind.tlc.core.tags import infer_tag, parse_tag

from .ast import (
	BITMASK_WIRE_TYPE,
	Condition,
	GenericTerm,
	Located,
	NamedTerm,
	RawParam,
	RawRecord,
	RawSchema,
	RecordKind,
	Term,
	VectorTerm,
	WireTypeExpr,
)

_GRAMMAR_PATH = Path(__file__).with_name("tl.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start=["schema", "wire_type"],
	propagate_positions=True,
	maybe_placeholders=False,
)

_SECTIONS = {
	"---types---": RecordKind.CONSTRUCTOR,
	"---functions---": RecordKind.FUNCTION,
}


def _name(node: Tree) -> str:
	data = node.data
	return data.value if isinstance(data, Token) else str(data)


def _loc(node: Tree | Token) -> Optional[Located]:
	if isinstance(node, Token):
		if node.line is None:
			return None
		return Located(line=node.line, column=node.column or 0)
	meta = node.meta
	if getattr(meta, "empty", True):
		return None
	return Located(line=meta.line, column=meta.column)


def _tokens(node: Tree, type_: str) -> List[Token]:
	return [c for c in node.children if isinstance(c, Token) and c.type == type_]


def _subtrees(node: Tree, name: str) -> List[Tree]:
	return [c for c in node.children if isinstance(c, Tree) and _name(c) == name]


def parse_schema(source: str, *, filename: Optional[str] = None) -> RawSchema:
	"""
	Parse TL schema text into a RawSchema.

	Records start in the types section; `---functions---` switches to
	functions. Builtin declarations (`int ? = Int;`) carry no wire shape and
	are dropped.
	"""
	try:
		tree = _PARSER.parse(source, start="schema")
	except UnexpectedInput as err:
		raise SchemaParseError(
			f"malformed schema: {_describe_unexpected(err)}",
			loc=Located(line=getattr(err, "line", 0) or 0, column=getattr(err, "column", 0) or 0),
		) from err
	return _build_schema(tree, filename=filename)


def parse_wire_type(text: str) -> WireTypeExpr:
	"""
	Parse one param wire type (`int`, `flags.2?Vector<%Message>`, `!X`, ...).

	Raises lark's `UnexpectedInput` on malformed input; the resolver converts it
	into an UnresolvedTypeError that names the offending combinator.
	"""
	tree = _PARSER.parse(text, start="wire_type")
	condition: Optional[Condition] = None
	term: Optional[Term] = None
	for child in tree.children:
		if not isinstance(child, Tree):
			continue
		kind = _name(child)
		if kind == "condition":
			name_tok = _tokens(child, "NAME")[0]
			bit_tok = _tokens(child, "INT")[0]
			condition = Condition(field=name_tok.value, bit=int(bit_tok.value))
		elif kind == "type_term":
			term = _build_term(child)
	assert term is not None  # the grammar requires a type_term
	return WireTypeExpr(term=term, condition=condition, raw=text)


def _build_term(node: Tree) -> Term:
	inner = next(c for c in node.children if isinstance(c, Tree))
	kind = _name(inner)
	if kind == "vector_term":
		keyword = _tokens(inner, "NAME")[0].value
		elem = next(c for c in inner.children if isinstance(c, Tree) and _name(c) == "type_term")
		return VectorTerm(keyword=keyword, elem=_build_term(elem))
	if kind == "generic_term":
		return GenericTerm(name=_tokens(inner, "NAME")[0].value)
	namespace, name = _split_full_name(_subtrees(inner, "full_name")[0])
	return NamedTerm(name=name, namespace=namespace, bare=kind == "bare_term")


def term_text(term: Term) -> str:
	"""Render a parsed term back to its schema spelling."""
	if isinstance(term, VectorTerm):
		return f"{term.keyword}<{term_text(term.elem)}>"
	if isinstance(term, GenericTerm):
		return f"!{term.name}"
	qualified = f"{term.namespace}.{term.name}" if term.namespace else term.name
	return f"%{qualified}" if term.bare else qualified


def _split_full_name(node: Tree) -> Tuple[Optional[str], str]:
	parts = [t.value for t in _tokens(node, "NAME")]
	if len(parts) == 2:
		return parts[0], parts[1]
	return None, parts[0]


def _full_name_text(node: Tree) -> str:
	return ".".join(t.value for t in _tokens(node, "NAME"))


def _build_schema(tree: Tree, *, filename: Optional[str]) -> RawSchema:
	records: List[RawRecord] = []
	kind = RecordKind.CONSTRUCTOR
	for child in tree.children:
		if not isinstance(child, Tree):
			continue
		item = _name(child)
		if item == "section":
			tok = child.children[0]
			marker = str(tok)
			if marker not in _SECTIONS:
				raise SchemaParseError(f"unknown schema section '{marker}'", loc=_loc(tok))
			kind = _SECTIONS[marker]
		elif item == "combinator":
			records.append(_build_combinator(child, kind))
		elif item == "builtin_decl":
			continue
	return RawSchema(records=tuple(records), source=filename)


def _build_combinator(node: Tree, kind: RecordKind) -> RawRecord:
	name = ""
	tag_tok: Optional[Token] = None
	generic_params: List[str] = []
	params: List[RawParam] = []
	result = ""
	# Canonical text pieces, used to infer the tag when `#tag` is omitted.
	canonical: List[str] = []
	for child in node.children:
		if isinstance(child, Token):
			if child.type == "TAG":
				tag_tok = child
			continue
		part = _name(child)
		if part == "full_name":
			name = _full_name_text(child)
			canonical.append(name)
		elif part == "generic_arg":
			arg_name, arg_type = (t.value for t in _tokens(child, "NAME"))
			generic_params.append(arg_name)
			canonical.append(f"{{{arg_name}:{arg_type}}}")
		elif part == "bitmask_param":
			param = RawParam(name=_tokens(child, "NAME")[0].value, wire_type=BITMASK_WIRE_TYPE)
			params.append(param)
			canonical.append(f"{param.name}:{param.wire_type}")
		elif part == "typed_param":
			param = RawParam(name=_tokens(child, "NAME")[0].value, wire_type=_tokens(child, "WIRE_TYPE")[0].value)
			params.append(param)
			canonical.append(f"{param.name}:{param.wire_type}")
		elif part == "nat_param":
			params.append(RawParam(name="", wire_type=BITMASK_WIRE_TYPE))
			canonical.append(BITMASK_WIRE_TYPE)
		elif part == "repeat_param":
			inner = " ".join(t.value for t in _tokens(child, "NAME"))
			params.append(RawParam(name="", wire_type=f"[ {inner} ]"))
			canonical.append(f"[ {inner} ]")
		elif part == "result_type":
			head = _full_name_text(_subtrees(child, "full_name")[0])
			arg_terms = _subtrees(child, "type_term")
			if arg_terms:
				result = f"{head}<{term_text(_build_term(arg_terms[0]))}>"
			else:
				result = " ".join([head] + [t.value for t in _tokens(child, "NAME")])
	canonical.extend(["=", result])
	loc = _loc(node)
	if tag_tok is not None:
		tag = parse_tag(tag_tok.value)
		inferred = False
	else:
		tag = infer_tag(" ".join(canonical))
		inferred = True
	seen: set[str] = set()
	for p in params:
		if not p.name:
			continue
		if p.name in seen:
			raise SchemaParseError(f"duplicate param '{p.name}' in combinator '{name}'", loc=loc)
		seen.add(p.name)
	return RawRecord(
		tag=tag,
		name=name,
		result_type=result,
		params=tuple(params),
		kind=kind,
		generic_params=tuple(generic_params),
		loc=loc,
		tag_inferred=inferred,
	)


def _describe_unexpected(err: UnexpectedInput) -> str:
	token = getattr(err, "token", None)
	if token is not None:
		return f"unexpected token {str(token)!r} at line {err.line}, column {err.column}"
	char = getattr(err, "char", None)
	if char is not None:
		return f"unexpected character {char!r} at line {err.line}, column {err.column}"
	return str(err)


__all__ = ["parse_schema", "parse_wire_type", "term_text"]
