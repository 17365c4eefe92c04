# sexpr_parser.py
# Hand-rolled parser for a minimal s-expression syntax: words, quoted
# strings and parenthesized lists.
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER AN EXPLICIT STACK
# =============================================================================
#
# The grammar is LL(1) with a single character of lookahead:
#
#     program  := object*
#     object   := list | quoted | word
#     list     := '(' object* ')'
#     quoted   := '"' ( any character except '"' )* '"'
#     word     := one or more characters, none of which are whitespace,
#                 '(', ')', or '"'
#
# Design Rationale:
# 1. No separate token pass. A word ends at the first delimiter and that
#    delimiter is left in the Scanner for the next dispatch, so `a(b)` is the
#    word `a` followed by the list `(b)` [craftinginterpreters.com, Scanning].
# 2. Open lists live on an explicit stack instead of the Python call stack,
#    so nesting depth is bounded by memory and not by the recursion limit
#    [cs.rochester.edu, Recursive-Descent Parsing].
# 3. Errors carry the position of the construct that opened them. The
#    position of `(` and `"` is read right after consuming the delimiter,
#    which is the delimiter's own position.
# 4. Atoms are the source text verbatim: quoted atoms keep their quotes and
#    no escape processing is done.
#
# Whitespace is whatever str.isspace() accepts. That covers space, tab,
# line-feed, carriage-return, form-feed and the Unicode separators.
#
# =============================================================================
#  REFERENCES
# =============================================================================
# [1] cs.rochester.edu - Recursive-Descent Parsing
# [2] craftinginterpreters.com - Scanning
# [3] hypertextbookshop.com - Parser Error Handling and Recovery
# =============================================================================

import argparse
import sys
from typing import Iterable, List, Tuple, Union

from scanner import Scanner, TextPosition, scan

# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------
OPEN_PAREN  = "("
CLOSE_PAREN = ")"
QUOTE       = '"'
DELIMITERS  = OPEN_PAREN + CLOSE_PAREN + QUOTE

# ---------------------------------------------------------------------------
# SYNTACTIC OBJECTS
# ---------------------------------------------------------------------------
class Atom(str):
    """
    Leaf object: a non-empty run of source characters, verbatim.

    Compares equal to the plain str with the same text, so trees can be
    checked against ordinary nested lists of strings.
    """
    __slots__ = ()

    @property
    def quoted(self) -> bool:
        return self.startswith(QUOTE)


SyntacticObject = Union[Atom, List["SyntacticObject"]]

# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class ParseError(SyntaxError):
    """
    Base for the three structural errors. Each carries exactly one position.

    Two errors are equal when they are the same kind at the same position.
    """
    description = "parse error"

    def __init__(self, position: Tuple[int, int]):
        self.position = TextPosition(*position)
        super().__init__(f"{self.description} at {self.position}")

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.position == other.position

    def __hash__(self):
        return hash((type(self).__name__, self.position))

    def __reduce__(self):
        return type(self), (tuple(self.position),)


class UnclosedQuote(ParseError):
    """End of input inside a quoted atom. Position is the opening quote."""
    description = "unclosed quote opened"


class UnclosedParenthesis(ParseError):
    """End of input inside a list. Position is the opening parenthesis."""
    description = "unclosed parenthesis opened"


class UnexpectedClosingParenthesis(ParseError):
    """A `)` with no list to close. Position is that `)`."""
    description = "unexpected closing parenthesis"

# ---------------------------------------------------------------------------
# CHARACTER CLASSES
# ---------------------------------------------------------------------------
def _is_word_terminator(character: str) -> bool:
    return character.isspace() or character in DELIMITERS


def _skip_whitespace(scanner: Scanner):
    """Consume whitespace and return the next (unconsumed) pair, or None."""
    pair = scanner.peek()
    while pair is not None and pair[1].isspace():
        next(scanner)
        pair = scanner.peek()
    return pair

# ---------------------------------------------------------------------------
# ATOM PARSERS
# ---------------------------------------------------------------------------
def _parse_quoted(scanner: Scanner) -> Atom:
    """
    Consume a quoted atom, opening quote included.

    Everything up to the next `"` is literal, line-feeds and backslashes
    included.
    """
    start, _ = next(scanner)
    opening_position = scanner.position
    for index, character in scanner:
        if character == QUOTE:
            return Atom(scanner.slice(start, index))
    raise UnclosedQuote(opening_position)


def _parse_word(scanner: Scanner) -> Atom:
    """
    Consume the longest run of word characters.

    The terminator is peeked, never consumed: it is the next dispatch
    character.
    """
    start, _ = next(scanner)
    end = start
    pair = scanner.peek()
    while pair is not None and not _is_word_terminator(pair[1]):
        end, _ = next(scanner)
        pair = scanner.peek()
    return Atom(scanner.slice(start, end))

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(program: str) -> List[SyntacticObject]:
    """
    Parse a whole program into its top-level objects.

    Raises the first ParseError met in a left-to-right scan; nothing is
    returned on failure.
    """
    scanner = Scanner(program)
    objects: List[SyntacticObject] = []
    # (children, position of the opening parenthesis) per open list
    open_lists: List[Tuple[List[SyntacticObject], TextPosition]] = []

    while True:
        pair = _skip_whitespace(scanner)
        if pair is None:
            if open_lists:
                raise UnclosedParenthesis(open_lists[-1][1])
            return objects

        character = pair[1]
        if character == OPEN_PAREN:
            next(scanner)
            open_lists.append(([], scanner.position))
            continue

        if character == CLOSE_PAREN:
            next(scanner)
            if not open_lists:
                raise UnexpectedClosingParenthesis(scanner.position)
            obj, _ = open_lists.pop()
        elif character == QUOTE:
            obj = _parse_quoted(scanner)
        else:
            obj = _parse_word(scanner)

        (open_lists[-1][0] if open_lists else objects).append(obj)


def _check_atom(obj) -> str:
    """Return obj as atom text, or raise if it would not parse back to itself."""
    if not isinstance(obj, str):
        raise TypeError(f"atoms must be str, got {type(obj).__name__}")
    if not obj:
        raise ValueError("atoms must be non-empty")
    if obj.startswith(QUOTE):
        if len(obj) < 2 or not obj.endswith(QUOTE) or QUOTE in obj[1:-1]:
            raise ValueError(f"malformed quoted atom {obj!r}")
    elif any(_is_word_terminator(character) for character in obj):
        raise ValueError(f"word atom {obj!r} contains whitespace or a delimiter")
    return str(obj)


def dump(objects: Iterable[SyntacticObject], separator: str = " ") -> str:
    """
    Render objects back to program text.

    Atoms are written verbatim and lists get their parentheses back, every
    token joined by `separator`. The result parses to a tree equal to the
    input. Atoms that could not survive that trip raise ValueError, and
    values that are neither str nor list raise TypeError.
    """
    if not separator or not separator.isspace():
        raise ValueError("separator must be non-empty whitespace")

    tokens: List[str] = []
    stack = [iter(objects)]
    while stack:
        for obj in stack[-1]:
            if isinstance(obj, list):
                tokens.append(OPEN_PAREN)
                stack.append(iter(obj))
                break
            tokens.append(_check_atom(obj))
        else:
            stack.pop()
            if stack:
                tokens.append(CLOSE_PAREN)
    return separator.join(tokens)

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _read_program(path: str) -> str:
    # newline="" keeps carriage returns, which count as columns;
    # utf-8-sig drops a leading byte-order mark
    if path == "-":
        return sys.stdin.buffer.read().decode("utf-8-sig")
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        return f.read()


def _cli(argv: List[str]):
    """
    Command-line interface for syntax checks.

    0 on success, 1 on ParseError, 2 on bad arguments (argparse), 3 when the
    input is not valid UTF-8.
    """
    ap = argparse.ArgumentParser(description="s-expression syntax checker")
    ap.add_argument("file", help="program file to check, or - for stdin")
    ap.add_argument("--debug", action="store_true",
                    help="dump the scanned character stream and exit")
    ap.add_argument("--tree", action="store_true",
                    help="print the parsed program, one top-level object per line")
    args = ap.parse_args(argv)

    try:
        data = _read_program(args.file)
    except UnicodeDecodeError as exc:
        print(f"UnicodeDecodeError: {exc}", file=sys.stderr)
        return 3

    if args.debug:
        for index, character, position in scan(data):
            print(f"{index}\t{character!r}\t{position.line}:{position.column}")
        return 0

    try:
        objects = parse(data)
    except ParseError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    if args.tree:
        for obj in objects:
            print(dump([obj]))
    print("OK")
    return 0


def main():
    return _cli(sys.argv[1:])


__all__ = [
    "Atom",
    "ParseError",
    "SyntacticObject",
    "TextPosition",
    "UnclosedParenthesis",
    "UnclosedQuote",
    "UnexpectedClosingParenthesis",
    "dump",
    "parse",
]

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
