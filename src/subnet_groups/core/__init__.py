"""Naming, grouping and export store primitives."""
