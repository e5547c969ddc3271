"""
Source printer for example code

Prints example code fragments with their comments re-attached by line
position, using a fixed indentation unit (4 spaces by default).

Two entry points:
- block_print(): a statement list without enclosing braces, at a chosen
  indentation level (level 0 for bare example blocks)
- program_print(): a complete program: package clause, declarations and
  functions

Statement and declaration sources never contain comments; every comment
comes from the comment list and is placed by line number.

Comment placement rules:
1. Comments are sorted by position; input order never matters
2. A comment goes right before the first item that starts after it
3. A one-line comment on the first or last line of a statement trails
   that line
4. A comment starting strictly inside a statement is spliced in before the
   source line it precedes, at that line's indentation
5. Any other comment starting within a statement follows the statement
6. A gap of more than one source line between items becomes one blank line
7. Comments inside a function but outside its body are dropped
"""

from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..models.source import Block, CommentBlock, Decl, FuncDecl, Program, Span, Statement
from .errors import PrettyPrintFailure


def comments_sort(comments: Iterable[CommentBlock]) -> List[CommentBlock]:
    return sorted(comments, key=lambda comment: (comment.span.start, comment.span.end))


def span_check(span: Span, what: str) -> None:
    if span.start < 1 or span.end < span.start:
        raise PrettyPrintFailure(f"Invalid span {span.start}-{span.end} of {what}")


class SourcePrinter:
    """
    Pretty-printer for Block and Program fragments

    Attributes:
        unit: String used for one indentation level
    """

    def __init__(self, tab_width: Optional[int] = None, use_spaces: Optional[bool] = None) -> None:
        from ..config import appsettings

        settings = appsettings
        if tab_width is not None or use_spaces is not None:
            settings = appsettings.model_copy(
                update={
                    "tab_width": appsettings.tab_width if tab_width is None else tab_width,
                    "use_spaces": appsettings.use_spaces if use_spaces is None else use_spaces,
                }
            )
        self.tab_width = settings.tab_width
        self.use_spaces = settings.use_spaces
        self.unit = settings.indentUnit_get()

    def node_print(self, node: Union[Block, Program], comments: Iterable[CommentBlock] = ()) -> str:
        """Print a Block (without braces) or a Program"""
        if isinstance(node, Block):
            return self.block_print(node, comments)
        if isinstance(node, Program):
            return self.program_print(node, comments)
        raise PrettyPrintFailure(f"Cannot print node of type {type(node).__name__}")

    def block_print(self, block: Block, comments: Iterable[CommentBlock] = (), level: int = 0) -> str:
        """
        Print the statements of a block without its braces

        Args:
            block: Statement block
            comments: Comments to attach; those outside the block are ignored
            level: Indentation level of the statements

        Returns:
            Printed statements, newline-terminated ("" for an empty block
            without comments)

        Raises:
            PrettyPrintFailure: If the block is malformed
        """
        self.block_validate(block)
        inner = [c for c in self.comments_validate(comments) if self.span_inBlock(c.span, block)]
        lines = self.items_print(block.statements, inner, level)
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def program_print(self, program: Program, comments: Iterable[CommentBlock] = ()) -> str:
        """
        Print a complete program

        Top-level declarations are separated by one blank line. Comments
        directly above a declaration stay attached to it.

        Raises:
            PrettyPrintFailure: If the program is malformed
        """
        self.program_validate(program)
        ordered = self.comments_validate(comments)

        def in_decl(comment: CommentBlock) -> bool:
            return any(decl.span.contains(comment.span.start) for decl in program.decls)

        top_level = [c for c in ordered if not in_decl(c)]
        out: List[str] = []
        prev_end: Optional[int] = None
        prev_is_comment = False

        def emit(lines: List[str], span: Span, is_comment: bool) -> None:
            nonlocal prev_end, prev_is_comment
            if prev_end is not None:
                if not prev_is_comment or span.start - prev_end > 1:
                    out.append("")
            out.extend(lines)
            prev_end = span.end
            prev_is_comment = is_comment

        pending = list(top_level)
        while pending and pending[0].span.start < program.span.start:
            comment = pending.pop(0)
            emit(self.comment_lines(comment, 0), comment.span, True)

        emit([f"package {program.package}"], Span(program.span.start, program.span.start), False)

        for decl in program.decls:
            while pending and pending[0].span.start < decl.span.start:
                comment = pending.pop(0)
                emit(self.comment_lines(comment, 0), comment.span, True)
            emit(self.decl_lines(decl, ordered), decl.span, False)

        for comment in pending:
            emit(self.comment_lines(comment, 0), comment.span, True)

        return "\n".join(out) + "\n"

    def decl_lines(self, decl: Union[FuncDecl, Decl], comments: Sequence[CommentBlock]) -> List[str]:
        if isinstance(decl, Decl):
            inner = [c for c in comments if decl.span.contains(c.span.start)]
            return self.statement_lines(decl, inner, 0)

        body_comments = [c for c in comments if self.span_inBlock(c.span, decl.body)]
        body = self.items_print(decl.body.statements, body_comments, level=1)
        signature = self.source_lines(decl.signature, 0)
        signature[-1] = f"{signature[-1]} {{"
        return signature + body + ["}"]

    def items_print(
        self, statements: Sequence[Statement], comments: Sequence[CommentBlock], level: int
    ) -> List[str]:
        """Interleave statements and comments by position"""
        out: List[str] = []
        prev_end: Optional[int] = None
        pending = list(comments)

        def emit(lines: List[str], span: Span) -> None:
            nonlocal prev_end
            if prev_end is not None and span.start - prev_end > 1:
                out.append("")
            out.extend(lines)
            prev_end = span.end

        for stmt in statements:
            while pending and pending[0].span.start < stmt.span.start:
                comment = pending.pop(0)
                emit(self.comment_lines(comment, level), comment.span)

            inner: List[CommentBlock] = []
            while pending and pending[0].span.start <= stmt.span.end:
                inner.append(pending.pop(0))
            end = max([stmt.span.end] + [c.span.end for c in inner])
            emit(self.statement_lines(stmt, inner, level), Span(stmt.span.start, end))

        for comment in pending:
            emit(self.comment_lines(comment, level), comment.span)

        return out

    def statement_lines(
        self, item: Union[Statement, Decl], comments: Sequence[CommentBlock], level: int
    ) -> List[str]:
        """
        Print one statement or declaration with the comments starting on its lines

        Source lines exclude comment lines, so a comment spliced in at line L
        goes before source line (L - start - lines of earlier spliced comments).

        Example:
            >>> loop = Statement("for {\\n\\tstep()\\n}", Span(2, 5))
            >>> note = CommentBlock(("// one step",), Span(3, 3))
            >>> SourcePrinter(4, True).statement_lines(loop, [note], 0)
            ['for {', '    // one step', '    step()', '}']
        """
        raw = item.source.rstrip("\n").split("\n")
        lines = self.source_lines(item.source, level)
        last = len(lines) - 1
        spliced: Dict[int, List[str]] = {}
        after: List[str] = []
        consumed = 0

        for comment in comments:
            start = comment.span.start
            if len(comment.lines) == 1 and start == item.span.start:
                lines[0] = f"{lines[0]} {comment.lines[0].strip()}"
            elif len(comment.lines) == 1 and start == item.span.end:
                lines[last] = f"{lines[last]} {comment.lines[0].strip()}"
            elif item.span.start < start < item.span.end:
                index = max(0, min(start - item.span.start - consumed, last))
                tabs = len(raw[index]) - len(raw[index].lstrip("\t"))
                spliced.setdefault(index, []).extend(self.comment_lines(comment, level + tabs))
                consumed += comment.span.end - start + 1
            else:
                after.extend(self.comment_lines(comment, level))

        out: List[str] = []
        for index, line in enumerate(lines):
            out.extend(spliced.get(index, []))
            out.append(line)
        return out + after

    def source_lines(self, source: str, level: int) -> List[str]:
        """
        Indent source text at `level`, converting leading tabs to the unit

        Example:
            >>> SourcePrinter(4, True).source_lines("if ok {\\n\\tdone()\\n}", 1)
            ['    if ok {', '        done()', '    }']
        """
        prefix = self.unit * level
        lines: List[str] = []
        for line in source.rstrip("\n").split("\n"):
            stripped = line.lstrip("\t")
            if not stripped.strip():
                lines.append("")
                continue
            tabs = len(line) - len(stripped)
            lines.append(prefix + self.unit * tabs + stripped.rstrip())
        return lines

    def comment_lines(self, comment: CommentBlock, level: int) -> List[str]:
        prefix = self.unit * level
        return [prefix + line.strip() if line.strip() else "" for line in comment.lines]

    @staticmethod
    def span_inBlock(span: Span, block: Block) -> bool:
        return block.span.start <= span.start <= block.span.end

    def comments_validate(self, comments: Iterable[CommentBlock]) -> List[CommentBlock]:
        ordered = comments_sort(comments)
        for comment in ordered:
            span_check(comment.span, "comment")
            if not comment.lines:
                raise PrettyPrintFailure(f"Empty comment at line {comment.span.start}")
        return ordered

    def block_validate(self, block: Block) -> None:
        span_check(block.span, "block")
        previous: Optional[Statement] = None
        for stmt in block.statements:
            span_check(stmt.span, "statement")
            if not stmt.source.strip():
                raise PrettyPrintFailure(f"Empty statement at line {stmt.span.start}")
            if stmt.span.start < block.span.start or stmt.span.end > block.span.end:
                raise PrettyPrintFailure(
                    f"Statement at lines {stmt.span.start}-{stmt.span.end} lies outside "
                    f"its block ({block.span.start}-{block.span.end})"
                )
            if previous is not None and stmt.span.start < previous.span.end:
                raise PrettyPrintFailure(
                    f"Statement at line {stmt.span.start} overlaps the statement "
                    f"ending at line {previous.span.end}"
                )
            previous = stmt

    def program_validate(self, program: Program) -> None:
        span_check(program.span, "program")
        previous_end: Optional[int] = None
        for decl in program.decls:
            if not isinstance(decl, (Decl, FuncDecl)):
                raise PrettyPrintFailure(f"Unsupported declaration {type(decl).__name__}")
            span_check(decl.span, "declaration")
            if decl.span.start < program.span.start or decl.span.end > program.span.end:
                raise PrettyPrintFailure(
                    f"Declaration at lines {decl.span.start}-{decl.span.end} lies outside the program"
                )
            if previous_end is not None and decl.span.start <= previous_end:
                raise PrettyPrintFailure(
                    f"Declaration at line {decl.span.start} overlaps the one ending at line {previous_end}"
                )
            if isinstance(decl, FuncDecl):
                if not decl.span.contains(decl.body.span.start) or decl.body.span.end > decl.span.end:
                    raise PrettyPrintFailure(f"Body of function '{decl.name}' lies outside its declaration")
                self.block_validate(decl.body)
            previous_end = decl.span.end
