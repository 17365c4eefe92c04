# scanner.py
# Character cursor and line/column bookkeeping for the s-expression parser.
#
# =============================================================================
#  SCANNER DESIGN
# =============================================================================
#
# The parser never tokenizes ahead of time. It pulls one (index, character)
# pair at a time from a Scanner and decides what to do with it, so the same
# character can end a word and start the next object [craftinginterpreters.com,
# Scanning].
#
# 1. PositionTracker owns the line/column rule and nothing else.
# 2. Scanner is a one-slot pushback cursor in the spirit of the LookAhead
#    iterator used for LL(1) parsing [geeksforgeeks.org, Top Down Parsing].
#    peek() never moves the position; only consumption does.
# 3. Indices are code-point offsets into the Python str, so slices taken from
#    them reproduce the source verbatim.
#
# =============================================================================

from typing import Iterator, NamedTuple, Optional, Tuple

NEWLINE = "\n"


class TextPosition(NamedTuple):
    """1-based (line, column) of a character in the program text."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


# ---------------------------------------------------------------------------
# POSITION TRACKER
# ---------------------------------------------------------------------------
class PositionTracker:
    """
    Maps each consumed character to the position of that character.

    A line-feed sits in the last column of its own line; the character after
    it opens the next line at column 1. Carriage returns and tabs are ordinary
    columns.
    """
    def __init__(self):
        # Primed as if a newline preceded the input, so the first character
        # lands on (1, 1).
        self._line = 0
        self._column = 1
        self._previous_was_newline = True

    @property
    def position(self) -> TextPosition:
        return TextPosition(self._line, self._column)

    def advance(self, character: str) -> TextPosition:
        if self._previous_was_newline:
            self._previous_was_newline = False
            self._column = 1
            self._line += 1
        else:
            self._column += 1
        if character == NEWLINE:
            self._previous_was_newline = True
        return self.position


# ---------------------------------------------------------------------------
# CHARACTER SCANNER
# ---------------------------------------------------------------------------
class Scanner:
    """
    Forward-only cursor over (index, character) pairs of one program.

    Iterating consumes; peek() looks at the next pair without consuming it.
    """
    def __init__(self, program: str):
        self._program = program
        self._iter = iter(enumerate(program))
        self._buf: Optional[Tuple[int, str]] = None
        self._tracker = PositionTracker()

    def __iter__(self):
        return self

    def __next__(self) -> Tuple[int, str]:
        if self._buf is not None:
            pair, self._buf = self._buf, None
        else:
            pair = next(self._iter)
        self._tracker.advance(pair[1])
        return pair

    def advance(self) -> Optional[Tuple[int, str]]:
        """Consume the next pair, or return None at end of input."""
        try:
            return next(self)
        except StopIteration:
            return None

    def peek(self) -> Optional[Tuple[int, str]]:
        if self._buf is None:
            self._buf = next(self._iter, None)
        return self._buf

    @property
    def position(self) -> TextPosition:
        return self._tracker.position

    def slice(self, start: int, end: int) -> str:
        """Source text from start through end, both inclusive."""
        return self._program[start:end + 1]


def scan(program: str) -> Iterator[Tuple[int, str, TextPosition]]:
    """
    Yield every character with its index and position.

    Debug view of exactly what the parser sees; used by the --debug CLI flag.
    """
    scanner = Scanner(program)
    for index, character in scanner:
        yield index, character, scanner.position


__all__ = ["NEWLINE", "PositionTracker", "Scanner", "TextPosition", "scan"]
