# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type core shared by the checkers and the operator layer.

TypeIds are opaque ints indexing into a TypeTable. The table interns SQL
scalar types, the NULL literal type and row (record) types, and implements the
least-restrictive widening used to decide union compatibility.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Protocol, Sequence, Tuple


TypeId = int  # opaque handle into the TypeTable


class TypeKind(Enum):
	"""Kinds of types understood by the type core."""

	SCALAR = auto()
	ROW = auto()
	NULL = auto()


class TypeFamily(Enum):
	"""Scalar families; widening never crosses a family boundary."""

	NUMERIC = auto()
	CHARACTER = auto()
	BINARY = auto()
	BOOLEAN = auto()
	DATETIME = auto()


@dataclass(frozen=True)
class ScalarSpec:
	"""Static facts about a built-in scalar type name."""

	family: TypeFamily
	rank: int = 0
	approximate: bool = False
	# Character/binary types accept a precision (maximum length).
	has_precision: bool = False
	# Name of the varying-length counterpart (CHAR -> VARCHAR).
	varying_name: Optional[str] = None


SQL_SCALARS: Dict[str, ScalarSpec] = {
	"TINYINT": ScalarSpec(TypeFamily.NUMERIC, rank=1),
	"SMALLINT": ScalarSpec(TypeFamily.NUMERIC, rank=2),
	"INTEGER": ScalarSpec(TypeFamily.NUMERIC, rank=3),
	"BIGINT": ScalarSpec(TypeFamily.NUMERIC, rank=4),
	"DECIMAL": ScalarSpec(TypeFamily.NUMERIC, rank=5),
	"REAL": ScalarSpec(TypeFamily.NUMERIC, rank=6, approximate=True),
	"FLOAT": ScalarSpec(TypeFamily.NUMERIC, rank=7, approximate=True),
	"DOUBLE": ScalarSpec(TypeFamily.NUMERIC, rank=8, approximate=True),
	"CHAR": ScalarSpec(TypeFamily.CHARACTER, rank=1, has_precision=True, varying_name="VARCHAR"),
	"VARCHAR": ScalarSpec(TypeFamily.CHARACTER, rank=2, has_precision=True, varying_name="VARCHAR"),
	"BINARY": ScalarSpec(TypeFamily.BINARY, rank=1, has_precision=True, varying_name="VARBINARY"),
	"VARBINARY": ScalarSpec(TypeFamily.BINARY, rank=2, has_precision=True, varying_name="VARBINARY"),
	"BOOLEAN": ScalarSpec(TypeFamily.BOOLEAN),
	"DATE": ScalarSpec(TypeFamily.DATETIME),
	"TIME": ScalarSpec(TypeFamily.DATETIME),
	"TIMESTAMP": ScalarSpec(TypeFamily.DATETIME),
}

TYPE_NAME_ALIASES: Dict[str, str] = {
	"INT": "INTEGER",
	"CHARACTER": "CHAR",
	"BOOL": "BOOLEAN",
	"NUMERIC": "DECIMAL",
}


def canonical_type_name(name: str) -> str:
	"""Upper-case `name` and resolve aliases (INT -> INTEGER)."""
	upper = name.upper()
	return TYPE_NAME_ALIASES.get(upper, upper)


@dataclass(frozen=True)
class RowField:
	"""One column of a row type."""

	name: str
	type_id: TypeId
	index: int


@dataclass(frozen=True)
class TypeDef:
	"""Definition of a type stored in the TypeTable."""

	kind: TypeKind
	name: str
	# Row field types in column order; empty for scalars.
	param_types: Tuple[TypeId, ...] = ()
	field_names: Tuple[str, ...] = ()
	family: Optional[TypeFamily] = None
	precision: Optional[int] = None  # only meaningful for character/binary scalars
	nullable: bool = True


class TypeLattice(Protocol):
	"""Capability consumed by the checkers: widen a sequence of types."""

	def least_restrictive(self, types: Sequence[TypeId]) -> TypeId | None:
		"""Return the narrowest type every input widens to, or None."""
		...


class TypeTable:
	"""
	Type table that owns TypeIds.

	Types are interned: asking for the same scalar (name, precision,
	nullability) or the same row field list twice yields the same TypeId, so
	TypeIds can be compared with `==`.

	Interning is guarded by a lock, so one table may be shared between threads.
	"""

	def __init__(self) -> None:
		self._defs: Dict[TypeId, TypeDef] = {}
		self._interned: Dict[tuple, TypeId] = {}
		self._next_id: TypeId = 1  # reserve 0 for "invalid"
		self._lock = threading.Lock()

	def ensure_scalar(self, name: str, precision: int | None = None, nullable: bool = True) -> TypeId:
		"""Return the TypeId for a built-in scalar, creating it once."""
		canonical = canonical_type_name(name)
		spec = SQL_SCALARS.get(canonical)
		if spec is None:
			raise ValueError(f"unknown SQL type '{name}'")
		if precision is not None:
			if not spec.has_precision:
				raise ValueError(f"type {canonical} does not take a precision")
			if precision <= 0:
				raise ValueError(f"precision of {canonical} must be positive, got {precision}")
		key = ("scalar", canonical, precision, nullable)
		return self._intern(
			key,
			TypeDef(kind=TypeKind.SCALAR, name=canonical, family=spec.family, precision=precision, nullable=nullable),
		)

	def ensure_int(self, nullable: bool = True) -> TypeId:
		"""Return a stable INTEGER TypeId."""
		return self.ensure_scalar("INTEGER", nullable=nullable)

	def ensure_bigint(self, nullable: bool = True) -> TypeId:
		"""Return a stable BIGINT TypeId."""
		return self.ensure_scalar("BIGINT", nullable=nullable)

	def ensure_double(self, nullable: bool = True) -> TypeId:
		"""Return a stable DOUBLE TypeId."""
		return self.ensure_scalar("DOUBLE", nullable=nullable)

	def ensure_varchar(self, precision: int | None = None, nullable: bool = True) -> TypeId:
		"""Return a stable VARCHAR(precision) TypeId."""
		return self.ensure_scalar("VARCHAR", precision=precision, nullable=nullable)

	def ensure_boolean(self, nullable: bool = True) -> TypeId:
		"""Return a stable BOOLEAN TypeId."""
		return self.ensure_scalar("BOOLEAN", nullable=nullable)

	def ensure_null(self) -> TypeId:
		"""Return the type of the NULL literal."""
		return self._intern(("null",), TypeDef(kind=TypeKind.NULL, name="NULL", nullable=True))

	def new_row(self, fields: Sequence[Tuple[str, TypeId]], nullable: bool = False) -> TypeId:
		"""Register a row type with the given (name, type) fields, reusing an identical one."""
		names = tuple(name for name, _ in fields)
		types = tuple(ty for _, ty in fields)
		for ty in types:
			if ty not in self._defs:
				raise ValueError(f"unknown TypeId {ty} in row field list")
		key = ("row", names, types, nullable)
		return self._intern(
			key,
			TypeDef(kind=TypeKind.ROW, name="RECORD", param_types=types, field_names=names, nullable=nullable),
		)

	def with_nullability(self, ty: TypeId, nullable: bool) -> TypeId:
		"""Return `ty` with the requested nullability (the same TypeId if unchanged)."""
		td = self.get(ty)
		if td.kind is TypeKind.NULL or td.nullable == nullable:
			return ty
		if td.kind is TypeKind.ROW:
			return self.new_row(list(zip(td.field_names, td.param_types)), nullable=nullable)
		return self.ensure_scalar(td.name, precision=td.precision, nullable=nullable)

	def get(self, ty: TypeId) -> TypeDef:
		"""Fetch the TypeDef for a given TypeId."""
		return self._defs[ty]

	def is_struct(self, ty: TypeId) -> bool:
		return self.get(ty).kind is TypeKind.ROW

	def field_list(self, ty: TypeId) -> List[RowField]:
		"""Return the ordered fields of a row type."""
		td = self.get(ty)
		if td.kind is not TypeKind.ROW:
			raise ValueError(f"type {self.label(ty)} is not a row type")
		return [
			RowField(name=name, type_id=field_ty, index=idx)
			for idx, (name, field_ty) in enumerate(zip(td.field_names, td.param_types))
		]

	def label(self, ty: TypeId) -> str:
		"""Render a type as SQL text, e.g. `VARCHAR(20) NOT NULL`."""
		td = self.get(ty)
		if td.kind is TypeKind.NULL:
			return "NULL"
		if td.kind is TypeKind.ROW:
			inner = ", ".join(f"{name} {self.label(field_ty)}" for name, field_ty in zip(td.field_names, td.param_types))
			return f"RECORD({inner})"
		text = td.name if td.precision is None else f"{td.name}({td.precision})"
		if not td.nullable:
			text += " NOT NULL"
		return text

	def least_restrictive(self, types: Sequence[TypeId]) -> TypeId | None:
		"""
		Return the narrowest type all `types` can be implicitly widened to.

		Returns None when no such type exists (empty input, different scalar
		families, rows of different widths, rows mixed with scalars). NULL
		literal types widen to anything and make the result nullable.
		"""
		if not types:
			return None
		defs = [self.get(ty) for ty in types]
		nullable = any(td.nullable for td in defs)
		candidates = [(ty, td) for ty, td in zip(types, defs) if td.kind is not TypeKind.NULL]
		if not candidates:
			return self.ensure_null()
		first_ty, first = candidates[0]
		if all(ty == first_ty for ty, _ in candidates):
			return self.with_nullability(first_ty, nullable)
		kinds = {td.kind for _, td in candidates}
		if kinds == {TypeKind.ROW}:
			return self._least_restrictive_row([td for _, td in candidates], nullable)
		if kinds != {TypeKind.SCALAR}:
			return None
		return self._least_restrictive_scalar([td for _, td in candidates], nullable)

	def _least_restrictive_row(self, rows: List[TypeDef], nullable: bool) -> TypeId | None:
		width = len(rows[0].param_types)
		if any(len(td.param_types) != width for td in rows):
			return None
		fields: List[Tuple[str, TypeId]] = []
		for idx in range(width):
			field_ty = self.least_restrictive([td.param_types[idx] for td in rows])
			if field_ty is None:
				return None
			# Field names come from the first row.
			fields.append((rows[0].field_names[idx], field_ty))
		return self.new_row(fields, nullable=nullable)

	def _least_restrictive_scalar(self, scalars: List[TypeDef], nullable: bool) -> TypeId | None:
		families = {td.family for td in scalars}
		if len(families) != 1:
			return None
		family = scalars[0].family
		names = {td.name for td in scalars}
		if family is TypeFamily.NUMERIC:
			approximate = [td for td in scalars if SQL_SCALARS[td.name].approximate]
			if approximate and len(approximate) != len(scalars):
				return self.ensure_double(nullable=nullable)
			widest = max(scalars, key=lambda td: SQL_SCALARS[td.name].rank)
			return self.ensure_scalar(widest.name, nullable=nullable)
		if family in (TypeFamily.CHARACTER, TypeFamily.BINARY):
			precisions = {td.precision for td in scalars}
			if len(names) == 1 and len(precisions) == 1:
				return self.ensure_scalar(scalars[0].name, precision=scalars[0].precision, nullable=nullable)
			varying = SQL_SCALARS[scalars[0].name].varying_name
			assert varying is not None
			# An unspecified length stays unspecified.
			precision = None if None in precisions else max(p for p in precisions if p is not None)
			return self.ensure_scalar(varying, precision=precision, nullable=nullable)
		if family is TypeFamily.BOOLEAN:
			return self.ensure_boolean(nullable=nullable)
		if len(names) != 1:
			return None
		return self.ensure_scalar(scalars[0].name, nullable=nullable)

	def _intern(self, key: tuple, td: TypeDef) -> TypeId:
		with self._lock:
			existing = self._interned.get(key)
			if existing is not None:
				return existing
			ty_id = self._next_id
			self._next_id += 1
			self._defs[ty_id] = td
			self._interned[key] = ty_id
			return ty_id


__all__ = [
	"TypeId",
	"TypeKind",
	"TypeFamily",
	"ScalarSpec",
	"SQL_SCALARS",
	"TYPE_NAME_ALIASES",
	"canonical_type_name",
	"RowField",
	"TypeDef",
	"TypeLattice",
	"TypeTable",
]
