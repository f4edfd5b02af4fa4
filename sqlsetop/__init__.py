# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
sqlsetop: operand compatibility checking for SQL set operators.

Subpackages:
  core: spans, diagnostics, the type table and syntax nodes
  checker: operand type checker strategies and the call binding they consume
  typeexpr: row-type expression parser used by the command line
"""

__all__ = ["core", "checker", "operators", "typeexpr"]
