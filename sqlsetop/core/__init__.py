"""
sqlsetop.core: shared primitives used by the checkers and the operator layer.

Modules:
  - span: source span attached to syntax nodes and diagnostics
  - diagnostics: Diagnostic record
  - types_core: TypeId/TypeTable primitives and the least-restrictive lattice
  - sql_nodes: minimal query syntax nodes used to locate errors
"""

__all__ = [
	"span",
	"diagnostics",
	"types_core",
	"sql_nodes",
]
