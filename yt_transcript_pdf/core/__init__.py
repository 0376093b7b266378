"""Core text processing and data model modules.

WHY: The core package holds the pure, network-free heart of the
converter — the data model, the error taxonomy, and the three text
stages that turn raw caption fragments into paragraphs.

HOW: ir.py defines the data structures, errors.py the error kinds,
normalizer.py strips caption noise, grammar.py applies ordered rewrite
rules, assembler.py merges fragments into sentence-terminated paragraphs.

RULES:
- Nothing in core/ performs I/O
- Every function here is deterministic for a given input
"""
