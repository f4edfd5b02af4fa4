# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Minimal query syntax nodes.

The checkers never walk a query tree; they only need enough structure to point
a diagnostic at the right place: an operand of a call, the select list of a
sub-select, or the n-th item of that list. Front-ends build these nodes (with
spans) and hand them over inside a CallBinding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, List, Optional

from .span import Span

if TYPE_CHECKING:
	from sqlsetop.operators import SqlOperator


class SqlKind(Enum):
	"""Node kinds the locator helpers care about."""

	IDENTIFIER = auto()
	LITERAL = auto()
	NODE_LIST = auto()
	AS = auto()
	SELECT = auto()
	VALUES = auto()
	UNION = auto()
	INTERSECT = auto()
	EXCEPT = auto()
	OTHER_FUNCTION = auto()

	@property
	def is_set_query(self) -> bool:
		return self in (SqlKind.UNION, SqlKind.INTERSECT, SqlKind.EXCEPT)


@dataclass
class SqlNode:
	"""Base class for syntax nodes; every node may carry a span."""

	span: Span = field(default_factory=Span, kw_only=True)

	@property
	def kind(self) -> SqlKind:
		raise NotImplementedError


@dataclass
class SqlIdentifier(SqlNode):
	names: List[str]

	@property
	def kind(self) -> SqlKind:
		return SqlKind.IDENTIFIER

	def __str__(self) -> str:
		return ".".join(self.names)


@dataclass
class SqlLiteral(SqlNode):
	value: Any

	@property
	def kind(self) -> SqlKind:
		return SqlKind.LITERAL


@dataclass
class SqlNodeList(SqlNode):
	items: List[SqlNode] = field(default_factory=list)

	@property
	def kind(self) -> SqlKind:
		return SqlKind.NODE_LIST

	def __len__(self) -> int:
		return len(self.items)

	def __getitem__(self, idx: int) -> SqlNode:
		return self.items[idx]


@dataclass
class SqlAs(SqlNode):
	"""`expr AS alias`."""

	node: SqlNode
	alias: str

	@property
	def kind(self) -> SqlKind:
		return SqlKind.AS


@dataclass
class SqlSelect(SqlNode):
	select_list: SqlNodeList
	from_: Optional[SqlNode] = None

	@property
	def kind(self) -> SqlKind:
		return SqlKind.SELECT


@dataclass
class SqlValues(SqlNode):
	"""`VALUES (a, b), (c, d)`; each row is a node list."""

	rows: List[SqlNodeList]

	@property
	def kind(self) -> SqlKind:
		return SqlKind.VALUES


@dataclass
class SqlCall(SqlNode):
	"""Invocation of an operator; for set operations the operands are queries."""

	operator: "SqlOperator"
	operands: List[SqlNode]

	@property
	def kind(self) -> SqlKind:
		return self.operator.kind


def strip_as(node: Optional[SqlNode]) -> Optional[SqlNode]:
	"""Return the aliased expression of an AS node, or `node` itself."""
	if isinstance(node, SqlAs):
		return node.node
	return node


def get_select_list_item(query: SqlNode, i: int) -> SqlNode:
	"""
	Return the node for column `i` of a query.

	For a SELECT this is the i-th select item; a FROM clause that is a bare
	VALUES is looked through. If `i` is out of range (e.g. `SELECT *`) the
	first item is returned. For a set operation the first operand decides.
	"""
	if isinstance(query, SqlSelect):
		source = strip_as(query.from_)
		if isinstance(source, SqlValues):
			return get_select_list_item(source, i)
		fields = query.select_list
		if i >= len(fields):
			i = 0
		return fields[i]
	if isinstance(query, SqlValues):
		first_row = query.rows[0]
		return first_row[i]
	if isinstance(query, SqlCall) and query.kind.is_set_query:
		return get_select_list_item(query.operands[0], i)
	raise AssertionError(f"cannot locate column {i} in a {query.kind.name} node")


__all__ = [
	"SqlKind",
	"SqlNode",
	"SqlIdentifier",
	"SqlLiteral",
	"SqlNodeList",
	"SqlAs",
	"SqlSelect",
	"SqlValues",
	"SqlCall",
	"strip_as",
	"get_select_list_item",
]
