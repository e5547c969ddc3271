"""
Source printer tests

Tests statement printing, comment placement by line position, and full
program output.
"""

import dataclasses

import pytest

from docdown.lib.errors import PrettyPrintFailure
from docdown.lib.printer import SourcePrinter
from docdown.models.source import Block, CommentBlock, Decl, FuncDecl, Program, Span, Statement


def stmt(source: str, start: int, end: int = None) -> Statement:
    return Statement(source, Span(start, start if end is None else end))


def comment(*lines: str, start: int, end: int = None) -> CommentBlock:
    return CommentBlock(tuple(lines), Span(start, start if end is None else end))


@pytest.fixture
def printer():
    return SourcePrinter(tab_width=4, use_spaces=True)


def hello_program(body_comments=False) -> Program:
    statements = (stmt('fmt.Println("hi")', 7 if body_comments else 6),)
    body = Block(statements, Span(5, 8 if body_comments else 7))
    return Program(
        package="main",
        decls=(
            Decl('import "fmt"', Span(3, 3)),
            FuncDecl(name="main", signature="func main()", body=body, span=body.span),
        ),
        span=Span(1, body.span.end),
    )


class TestStatements:
    """Test statement printing"""

    def test_statements_in_order(self, printer):
        block = Block((stmt('fmt.Println("a")', 2), stmt('fmt.Println("b")', 3)), Span(1, 4))
        assert printer.block_print(block) == 'fmt.Println("a")\nfmt.Println("b")\n'

    def test_continuation_lines_reindented(self, printer):
        """Tab-indented continuation lines use the indentation unit"""
        block = Block((stmt("if ok {\n\tdone()\n}", 2, 4),), Span(1, 5))
        assert printer.block_print(block, level=1) == "    if ok {\n        done()\n    }\n"

    def test_tab_indentation(self):
        """Tabs are used when spaces are turned off"""
        block = Block((stmt("if ok {\n\tdone()\n}", 2, 4),), Span(1, 5))
        assert SourcePrinter(use_spaces=False).block_print(block, level=1) == "\tif ok {\n\t\tdone()\n\t}\n"

    def test_gap_becomes_blank_line(self, printer):
        """Statements more than one line apart get one blank line"""
        block = Block((stmt("a()", 2), stmt("b()", 5)), Span(1, 6))
        assert printer.block_print(block) == "a()\n\nb()\n"

    def test_empty_block(self, printer):
        assert printer.block_print(Block((), Span(1, 2))) == ""

    def test_node_print_dispatch(self, printer):
        block = Block((stmt("a()", 2),), Span(1, 3))
        assert printer.node_print(block) == "a()\n"


class TestComments:
    """Test comment placement"""

    def test_leading_comment(self, printer):
        block = Block((stmt("greet()", 3),), Span(1, 4))
        assert printer.block_print(block, [comment("// say hi", start=2)]) == "// say hi\ngreet()\n"

    def test_trailing_comment_same_line(self, printer):
        block = Block((stmt("x := 1", 2),), Span(1, 3))
        assert printer.block_print(block, [comment("// one", start=2)]) == "x := 1 // one\n"

    def test_multiline_comment_on_last_line(self, printer):
        """A multi-line comment starting on a statement's line follows it"""
        block = Block((stmt("x := 1", 2),), Span(1, 4))
        printed = printer.block_print(block, [comment("/* a", "b */", start=2, end=3)])
        assert printed == "x := 1\n/* a\nb */\n"

    def test_comment_after_last_statement(self, printer):
        block = Block((stmt("a()", 2),), Span(1, 4))
        assert printer.block_print(block, [comment("// done", start=3)]) == "a()\n// done\n"

    def test_comment_gap(self, printer):
        block = Block((stmt("a()", 2),), Span(1, 6))
        assert printer.block_print(block, [comment("// later", start=4)]) == "a()\n\n// later\n"

    def test_comment_inside_loop_body(self, printer):
        """A comment inside a multi-line statement stays at its line"""
        loop = stmt("for i := 0; i < 3; i++ {\n\tfmt.Println(i)\n}", 2, 5)
        printed = printer.block_print(Block((loop,), Span(1, 6)), [comment("// print the counter", start=3)])
        assert printed == "for i := 0; i < 3; i++ {\n    // print the counter\n    fmt.Println(i)\n}\n"

    def test_comments_inside_statement_in_order(self, printer):
        """Each inner comment precedes the source line that follows it"""
        branch = stmt("if ok {\n\ta()\n\tb()\n}", 2, 7)
        comments = [comment("// second", start=5), comment("// first", start=3)]
        printed = printer.block_print(Block((branch,), Span(1, 8)), comments, level=1)
        assert printed == (
            "    if ok {\n        // first\n        a()\n        // second\n        b()\n    }\n"
        )

    def test_comment_on_first_line_of_statement(self, printer):
        loop = stmt("for {\n\tstep()\n}", 2, 4)
        printed = printer.block_print(Block((loop,), Span(1, 5)), [comment("// forever", start=2)])
        assert printed == "for { // forever\n    step()\n}\n"

    def test_comment_on_closing_line(self, printer):
        loop = stmt("for {\n\tstep()\n}", 2, 4)
        printed = printer.block_print(Block((loop,), Span(1, 5)), [comment("// end", start=4)])
        assert printed == "for {\n    step()\n} // end\n"

    def test_comment_order_does_not_matter(self, printer):
        block = Block((stmt("a()", 3), stmt("b()", 5)), Span(1, 6))
        comments = [comment("// first", start=2), comment("// second", start=4)]
        expected = "// first\na()\n// second\nb()\n"
        assert printer.block_print(block, comments) == expected
        assert printer.block_print(block, list(reversed(comments))) == expected

    def test_comment_outside_block_ignored(self, printer):
        block = Block((stmt("a()", 2),), Span(1, 3))
        assert printer.block_print(block, [comment("// elsewhere", start=10)]) == "a()\n"

    def test_comment_only_block(self, printer):
        block = Block((), Span(1, 3))
        assert printer.block_print(block, [comment("// nothing yet", start=2)]) == "// nothing yet\n"


class TestPrograms:
    """Test full program printing"""

    def test_program(self, printer):
        expected = 'package main\n\nimport "fmt"\n\nfunc main() {\n    fmt.Println("hi")\n}\n'
        assert printer.program_print(hello_program()) == expected

    def test_doc_comment_stays_on_decl(self, printer):
        printed = printer.program_print(hello_program(), [comment("// main prints hi", start=4)])
        assert printed == (
            'package main\n\nimport "fmt"\n\n// main prints hi\nfunc main() {\n    fmt.Println("hi")\n}\n'
        )

    def test_comment_before_package(self, printer):
        program = dataclasses.replace(hello_program(), span=Span(3, 7))
        printed = printer.program_print(program, [comment("// +build ignore", start=1)])
        assert printed.startswith('// +build ignore\n\npackage main\n\nimport "fmt"\n')

    def test_body_comment(self, printer):
        printed = printer.program_print(hello_program(body_comments=True), [comment("// greet", start=6)])
        assert "func main() {\n    // greet\n    fmt.Println(\"hi\")\n}\n" in printed

    def test_comment_inside_declaration(self, printer):
        """Declarations place inner comments the same way statements do"""
        decl = Decl("var (\n\ta = 1\n\tb = 2\n)", Span(3, 7))
        program = Program("main", (decl,), Span(1, 7))
        printed = printer.program_print(program, [comment("// a is one", start=4)])
        assert printed == "package main\n\nvar (\n    // a is one\n    a = 1\n    b = 2\n)\n"

    def test_empty_body(self, printer):
        body = Block((), Span(5, 6))
        program = Program("main", (FuncDecl("main", "func main()", body, Span(5, 6)),), Span(1, 6))
        assert printer.program_print(program) == "package main\n\nfunc main() {\n}\n"

    def test_node_print_program(self, printer):
        assert printer.node_print(hello_program()) == printer.program_print(hello_program())


class TestFailures:
    """Test malformed input"""

    def test_inverted_block_span(self, printer):
        with pytest.raises(PrettyPrintFailure, match="Invalid span"):
            printer.block_print(Block((), Span(4, 2)))

    def test_statement_outside_block(self, printer):
        with pytest.raises(PrettyPrintFailure, match="outside"):
            printer.block_print(Block((stmt("a()", 9),), Span(1, 3)))

    def test_overlapping_statements(self, printer):
        block = Block((stmt("a()", 2, 4), stmt("b()", 3)), Span(1, 5))
        with pytest.raises(PrettyPrintFailure, match="overlaps"):
            printer.block_print(block)

    def test_empty_statement(self, printer):
        with pytest.raises(PrettyPrintFailure, match="Empty statement"):
            printer.block_print(Block((stmt("  ", 2),), Span(1, 3)))

    def test_empty_comment(self, printer):
        block = Block((stmt("a()", 2),), Span(1, 3))
        with pytest.raises(PrettyPrintFailure, match="Empty comment"):
            printer.block_print(block, [CommentBlock((), Span(2, 2))])

    def test_overlapping_declarations(self, printer):
        program = Program("main", (Decl("var a = 1", Span(2, 3)), Decl("var b = 2", Span(3, 3))), Span(1, 3))
        with pytest.raises(PrettyPrintFailure, match="overlaps"):
            printer.program_print(program)

    def test_unknown_node(self, printer):
        with pytest.raises(PrettyPrintFailure, match="Cannot print"):
            printer.node_print("fmt.Println()")
