"""Atheris fuzz targets for lexer security testing.

This package contains Atheris-based fuzz targets for detecting crashes
and contract violations in the Lux lexer. Requires Atheris installation
(pip install luxlex[fuzz]).

Targets:
    lexer.py - Lexer contract: no exceptions, spanned diagnostics, round trip

Usage:
    python fuzz/lexer.py -max_total_time=60
"""
