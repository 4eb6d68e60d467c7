# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import types
from typing import Callable

import pytest

from tlbind.tlc.tlc import compile_schema

# Small slice of a real API schema: builtins, skipped combinators, namespaces,
# flags (true flags included), generics and both kinds of function returns.
SAMPLE_SCHEMA = """\
// LAYER 181
int ? = Int;
long ? = Long;
string ? = String;
vector {t:Type} # [ t ] = Vector t;

boolFalse#bc799737 = Bool;
boolTrue#997275b5 = Bool;
true#3fedd339 = True;

inputPeerEmpty#7f3b18ea = InputPeer;
inputPeerSelf#7da07ec9 = InputPeer;
inputPeerUser#dde8a54c user_id:long access_hash:long = InputPeer;

user#11223344 flags:# self:flags.10?true id:long first_name:flags.1?string = User;

message#abcdef02 flags:# out:flags.1?true id:int message:string reply_to:flags.3?int = Message;
messageEmpty#90a6ca84 id:int = Message;

messages.messages#8c718e87 messages:Vector<Message> users:Vector<User> = messages.Messages;

config#232566ac flags:# test_mode:flags.0?true limit:flags.1?int = Config;

---functions---

messages.getHistory#4423e6c5 peer:InputPeer limit:int = messages.Messages;
help.getConfig#c4f9186b = Config;
contacts.resolvePeer#22222222 username:string = InputPeer;
invokeWithLayer#da9b0d0d {X:Type} layer:int query:!X = X;
messages.getMessageIds#12345678 id:Vector<int> = Vector<long>;
"""


@pytest.fixture
def schema_text() -> str:
	return SAMPLE_SCHEMA


def exec_bindings(source: str, name: str = "tl_generated") -> types.ModuleType:
	"""Execute generated binding source as a fresh module."""
	module = types.ModuleType(name)
	exec(compile(source, f"<{name}>", "exec"), module.__dict__)
	return module


@pytest.fixture
def load_bindings() -> Callable[[str], types.ModuleType]:
	"""Compile schema text and return the executed bindings module."""

	def _load(text: str) -> types.ModuleType:
		return exec_bindings(compile_schema(text, source="api.tl").module)

	return _load


@pytest.fixture
def bindings(load_bindings, schema_text: str) -> types.ModuleType:
	return load_bindings(schema_text)
