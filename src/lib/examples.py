"""
Example renderer

Turns one ExampleUnit into printable example code plus its expected output.

The comment whose text starts with "Output:" (or "Unordered output:") is
the Output Comment. It never appears in the printed code; its remaining
text becomes the example's expected output.

Two code shapes are supported:
- Block: a bare statement list, printed at indentation level 0 with no
  enclosing braces; a block with nothing to print shows as its empty
  braces, so example code is never empty
- Program: a full runnable program; when the Output Comment sits inside the
  entry-point function, that function's body is cut back to its last
  statement so the trailing output region is not printed

Example:
    >>> unit = ExampleUnit(
    ...     name="Hello",
    ...     code=Block(statements=(Statement('fmt.Println("hello")', Span(2, 2)),), span=Span(1, 5)),
    ...     comments=(CommentBlock(("// Output:", "// hello"), Span(3, 4)),),
    ... )
    >>> ExampleRenderer().example_render(unit).pair()
    ('fmt.Println("hello")\\n', 'hello\\n')
"""

import re
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from ..models.source import Block, CommentBlock, ExampleUnit, FuncDecl, Program, Span
from .errors import PrettyPrintFailure, UnsupportedFragmentKind
from .log import LOG
from .printer import SourcePrinter, comments_sort

RX_OUTPUT_PREFIX = re.compile(r"^\s*(unordered\s+)?output:", re.IGNORECASE)
EMPTY_BLOCK = "{\n}\n"


@dataclass(frozen=True)
class RenderedExample:
    """
    Printable form of an example

    Attributes:
        name: Example display name
        code: Printed example code
        output: Expected output, None when the example has no Output Comment
        unordered: Output lines may appear in any order
    """
    name: str
    code: str
    output: Optional[str] = None
    unordered: bool = False

    def pair(self) -> Tuple[str, Optional[str]]:
        return self.code, self.output


@dataclass(frozen=True)
class CommentPartition:
    """Comments to print, and the Output Comment if there is one"""
    kept: Tuple[CommentBlock, ...]
    output_comment: Optional[CommentBlock]


def comment_isOutput(comment: CommentBlock) -> bool:
    return RX_OUTPUT_PREFIX.match(comment.text) is not None


def comments_partition(comments: Iterable[CommentBlock]) -> CommentPartition:
    """
    Separate Output Comments from the comments to print

    Every comment starting with "output:" is withheld from the code; the
    last one by position is the Output Comment.
    """
    kept: List[CommentBlock] = []
    output_comment: Optional[CommentBlock] = None
    for comment in comments_sort(comments):
        if comment_isOutput(comment):
            output_comment = comment
        else:
            kept.append(comment)
    return CommentPartition(kept=tuple(kept), output_comment=output_comment)


def output_extract(comment: CommentBlock) -> Tuple[str, bool]:
    """
    Expected output text of an Output Comment

    Returns:
        (output, unordered): output without the "Output:" token and
        surrounding whitespace, newline-terminated unless empty

    Example:
        >>> output_extract(CommentBlock(("// Output:", "// hello"), Span(1, 2)))
        ('hello\\n', False)
    """
    text = comment.text
    match = RX_OUTPUT_PREFIX.match(text)
    if match is None:
        return "", False
    body = text[match.end():].strip()
    return (body + "\n" if body else ""), match.group(1) is not None


class ExampleRenderer:
    """
    Renders ExampleUnits to code and expected output
    """

    def __init__(self, printer: Optional[SourcePrinter] = None, entry_point: Optional[str] = None) -> None:
        """
        Args:
            printer: Source printer (defaults to one built from settings)
            entry_point: Entry-point function name (defaults to settings)
        """
        if entry_point is None:
            from ..config import appsettings
            entry_point = appsettings.entry_point
        self.printer = printer or SourcePrinter()
        self.entry_point = entry_point

    def example_render(self, unit: ExampleUnit) -> RenderedExample:
        """
        Render one example

        Raises:
            UnsupportedFragmentKind: If the code is neither Block nor Program
            PrettyPrintFailure: If the code is malformed; carries the
                                example name
        """
        LOG(f"Rendering example '{unit.name}'", level=3)

        partition = comments_partition(unit.comments)
        output: Optional[str] = None
        unordered = False
        if partition.output_comment is not None:
            output, unordered = output_extract(partition.output_comment)

        code = unit.code
        try:
            if isinstance(code, Program):
                program = self.entryPoint_truncate(code, partition.output_comment)
                text = self.printer.program_print(program, partition.kept)
            elif isinstance(code, Block):
                text = self.printer.block_print(code, partition.kept, level=0) or EMPTY_BLOCK
            else:
                raise UnsupportedFragmentKind(type(code).__name__, unit.name)
        except PrettyPrintFailure as e:
            if e.fragment:
                raise
            raise PrettyPrintFailure(e.message, fragment=unit.name) from e

        return RenderedExample(name=unit.name, code=text, output=output, unordered=unordered)

    def entryPoint_truncate(self, program: Program, output_comment: Optional[CommentBlock]) -> Program:
        """
        Pull the entry point's body end back to its last statement when the
        Output Comment lies inside the entry-point function

        Returns a new Program; the given one is left untouched.
        """
        if output_comment is None:
            return program

        decls = []
        for decl in program.decls:
            if (
                isinstance(decl, FuncDecl)
                and decl.name == self.entry_point
                and decl.span.contains(output_comment.span.start)
            ):
                body = decl.body
                end = body.statements[-1].span.end if body.statements else body.span.start
                LOG(f"Truncating body of {decl.name}() at line {end}", level=3)
                decl = replace(decl, body=replace(body, span=Span(body.span.start, end)))
            decls.append(decl)

        return replace(program, decls=tuple(decls))
