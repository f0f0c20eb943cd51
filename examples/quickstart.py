"""Quickstart - Lexing Lux Source.

Demonstrates the main things you can do with luxlex:

1. Lex source to tokens
2. Walk the token tree with match statements
3. Keep comments for tooling
4. Handle lexing errors (raising and non-raising)
5. Serialize tokens back to canonical source

Python 3.13+.
"""

from __future__ import annotations


def example_1_basic_lexing() -> None:
    """Lex source and print the top-level tokens."""
    from luxlex import lex

    print("=" * 60)
    print("Example 1: Basic Lexing")
    print("=" * 60)

    source = """
(def: (greet name)
  ## Say hello
  (text/join ["Hello, " name "!"]))
"""

    tokens = lex(source)
    print(f"Lexed {len(tokens)} top-level form(s):")
    for token in tokens:
        print(f"  {token}")
    print()


def example_2_walking_tokens() -> None:
    """Count identifiers at every nesting level."""
    from luxlex import lex
    from luxlex.syntax.tokens import Ident, List, Record, Tag, Token, Tuple

    print("=" * 60)
    print("Example 2: Walking the Token Tree")
    print("=" * 60)

    def collect(tokens: tuple[Token, ...], names: set[str], tags: set[str]) -> None:
        for token in tokens:
            match token:
                case Ident(text=text):
                    names.add(text)
                case Tag(text=text):
                    tags.add(text)
                case List(members=members) | Tuple(members=members) | Record(
                    members=members
                ):
                    collect(members, names, tags)
                case _:
                    pass

    names: set[str] = set()
    tags: set[str] = set()
    collect(lex("{#name (first user) #age (+ 1 (age user))}"), names, tags)

    print(f"Identifiers: {sorted(names)}")
    print(f"Tags: {sorted(tags)}")
    print()


def example_3_comments() -> None:
    """Keep comments with lex_with_comments."""
    from luxlex import Lexer
    from luxlex.syntax.tokens import Comment

    print("=" * 60)
    print("Example 3: Comments")
    print("=" * 60)

    lexer = Lexer()
    tokens = lexer.lex_with_comments("## header\n#(block #(nested)# text)# 42")
    for token in tokens:
        if Comment.guard(token):
            print(f"  {token.style} comment: {token.text!r}")
        else:
            print(f"  {token}")
    print()


def example_4_errors() -> None:
    """Handle errors with exceptions or LexResult."""
    from luxlex import Lexer, LuxSyntaxError
    from luxlex.diagnostics import DiagnosticFormatter, OutputFormat

    print("=" * 60)
    print("Example 4: Error Handling")
    print("=" * 60)

    lexer = Lexer()

    try:
        lexer.lex('(print "tab\\x")')
    except LuxSyntaxError as error:
        print(f"{type(error).__name__}:")
        print(error)
    print()

    result = lexer.lex_result("(1 2")
    if not result.is_ok and result.diagnostic is not None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        print(formatter.format(result.diagnostic))
    print()


def example_5_serialization() -> None:
    """Round trip tokens through canonical source."""
    from luxlex import lex, serialize

    print("=" * 60)
    print("Example 5: Serialization")
    print("=" * 60)

    source = '(  list\n  1   2.5 #"\\n"  "tab\\there" )'
    tokens = lex(source)
    canonical = serialize(tokens)

    print(f"Original:  {source!r}")
    print(f"Canonical: {canonical!r}")
    print(f"Round trip equal: {lex(canonical) == tokens}")
    print()


def main() -> None:
    """Run all examples."""
    print()
    print("luxlex Quickstart")
    print()

    example_1_basic_lexing()
    example_2_walking_tokens()
    example_3_comments()
    example_4_errors()
    example_5_serialization()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
