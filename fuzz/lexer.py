#!/usr/bin/env python3
"""Lexer Integrity Fuzzer (Atheris).

Targets: luxlex.syntax.lexer.core.Lexer
Feeds arbitrary text to the lexer and checks its contract: lex_result never
raises, failures always carry a diagnostic with a span inside the source,
and successful output survives a serialize/lex round trip.
"""

from __future__ import annotations

import atexit
import json
import logging
import sys

# --- PEP 695 Type Aliases ---
type FuzzStats = dict[str, int | str]

_fuzz_stats: FuzzStats = {
    "status": "incomplete",
    "iterations": 0,
    "lexed": 0,
    "rejected": 0,
    "findings": 0,
}

def _emit_final_report() -> None:
    report = json.dumps(_fuzz_stats)
    print(f"\n[SUMMARY-JSON-BEGIN]{report}[SUMMARY-JSON-END]", file=sys.stderr)

atexit.register(_emit_final_report)

try:
    import atheris
except ImportError:
    sys.exit(1)

logging.getLogger("luxlex").setLevel(logging.CRITICAL)

with atheris.instrument_imports(include=["luxlex"]):
    from luxlex.syntax import Lexer, serialize

# Shallow limit keeps deep-nesting inputs on the diagnostic path.
_lexer = Lexer(max_nesting_depth=32)

def _finding(msg: str) -> None:
    _fuzz_stats["findings"] = int(_fuzz_stats["findings"]) + 1
    raise RuntimeError(msg)

def test_one_input(data: bytes) -> None:
    """Atheris entry point: lex arbitrary source and check invariants."""
    _fuzz_stats["iterations"] = int(_fuzz_stats["iterations"]) + 1
    _fuzz_stats["status"] = "running"

    fdp = atheris.FuzzedDataProvider(data)
    source = fdp.ConsumeUnicodeNoSurrogates(2048)

    try:
        result = _lexer.lex_result(source, keep_comments=True)

        if not result.is_ok:
            _fuzz_stats["rejected"] = int(_fuzz_stats["rejected"]) + 1
            diagnostic = result.diagnostic
            assert diagnostic is not None
            if result.tokens:
                _finding(f"Failed lex returned tokens for {source!r}")
            span = diagnostic.span
            if span is None or not 0 <= span.start <= len(source):
                _finding(f"Diagnostic span outside source: {span!r}")
            return

        _fuzz_stats["lexed"] = int(_fuzz_stats["lexed"]) + 1
        relexed = _lexer.lex_with_comments(serialize(result.tokens))
        if relexed != result.tokens:
            _finding(f"Round trip changed tokens for {source!r}")

    except Exception:
        _fuzz_stats["findings"] = int(_fuzz_stats["findings"]) + 1
        raise

if __name__ == "__main__":
    atheris.Setup(sys.argv, test_one_input)
    atheris.Fuzz()
