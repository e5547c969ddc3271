"""
Example renderer tests

Tests output comment extraction, bare block examples, and entry-point
truncation of full program examples.
"""

import pytest

from docdown.lib.errors import PrettyPrintFailure, UnsupportedFragmentKind
from docdown.lib.examples import ExampleRenderer, comments_partition, output_extract
from docdown.lib.printer import SourcePrinter
from docdown.models.source import (
    Block,
    CommentBlock,
    Decl,
    ExampleUnit,
    FuncDecl,
    Program,
    Span,
    Statement,
)


@pytest.fixture
def renderer():
    return ExampleRenderer(SourcePrinter(tab_width=4, use_spaces=True), entry_point="main")


def hello_block() -> Block:
    return Block((Statement('fmt.Println("hello")', Span(2, 2)),), Span(1, 5))


def hello_program() -> Program:
    body = Block((Statement('fmt.Println("hello")', Span(6, 6)),), Span(5, 10))
    return Program(
        package="main",
        decls=(
            Decl('import "fmt"', Span(3, 3)),
            FuncDecl(name="main", signature="func main()", body=body, span=Span(5, 10)),
        ),
        span=Span(1, 10),
    )


OUTPUT = CommentBlock(("// Output:", "// hello"), Span(7, 8))
NOTE = CommentBlock(("// trailing note",), Span(9, 9))


class TestOutputExtraction:
    """Test expected output comments"""

    @pytest.mark.parametrize(
        "lines, expected",
        [
            (("// Output:", "// hello"), ("hello\n", False)),
            (("// Output: hello",), ("hello\n", False)),
            (("// Output:",), ("", False)),
            (("// OUTPUT:", "// x"), ("x\n", False)),
            (("// Unordered output:", "// b", "// a"), ("b\na\n", True)),
            (("// Output:", "// a", "//", "// b"), ("a\n\nb\n", False)),
        ],
    )
    def test_output_text(self, lines, expected):
        assert output_extract(CommentBlock(lines, Span(1, len(lines)))) == expected

    def test_block_example(self, renderer):
        unit = ExampleUnit("Hello", hello_block(), (CommentBlock(("// Output:", "// hello"), Span(3, 4)),))
        assert renderer.example_render(unit).pair() == ('fmt.Println("hello")\n', "hello\n")

    def test_no_output_comment(self, renderer):
        rendered = renderer.example_render(ExampleUnit("Hello", hello_block()))
        assert rendered.output is None
        assert rendered.code == 'fmt.Println("hello")\n'

    def test_unordered_flag(self, renderer):
        comments = (CommentBlock(("// Unordered output:", "// b", "// a"), Span(3, 5)),)
        rendered = renderer.example_render(ExampleUnit("Set", hello_block(), comments))
        assert rendered.unordered
        assert rendered.output == "b\na\n"

    def test_last_output_comment_wins(self):
        first = CommentBlock(("// Output: one",), Span(3, 3))
        second = CommentBlock(("// Output: two",), Span(5, 5))
        partition = comments_partition([second, first])
        assert partition.output_comment == second
        assert partition.kept == ()

    def test_other_comments_kept(self, renderer):
        comments = (
            CommentBlock(("// print a greeting",), Span(1, 1)),
            CommentBlock(("// Output: hello",), Span(3, 3)),
        )
        block = Block((Statement('fmt.Println("hello")', Span(2, 2)),), Span(1, 4))
        rendered = renderer.example_render(ExampleUnit("Hello", block, comments))
        assert rendered.code == '// print a greeting\nfmt.Println("hello")\n'
        assert "Output" not in rendered.code


class TestPrograms:
    """Test full program examples"""

    def test_entry_point_truncated(self, renderer):
        """Comments after the output region inside main are not printed"""
        unit = ExampleUnit("Program", hello_program(), (NOTE, OUTPUT))
        rendered = renderer.example_render(unit)
        assert rendered.code == (
            'package main\n\nimport "fmt"\n\nfunc main() {\n    fmt.Println("hello")\n}\n'
        )
        assert rendered.output == "hello\n"

    def test_other_entry_point_not_truncated(self):
        renderer = ExampleRenderer(SourcePrinter(tab_width=4, use_spaces=True), entry_point="run")
        rendered = renderer.example_render(ExampleUnit("Program", hello_program(), (OUTPUT, NOTE)))
        assert rendered.code.endswith(
            'func main() {\n    fmt.Println("hello")\n\n    // trailing note\n}\n'
        )
        assert "Output" not in rendered.code

    def test_source_program_unchanged(self, renderer):
        program = hello_program()
        renderer.example_render(ExampleUnit("Program", program, (OUTPUT,)))
        assert program.decls[1].body.span == Span(5, 10)

    def test_truncate_without_output(self, renderer):
        program = hello_program()
        assert renderer.entryPoint_truncate(program, None) is program

    def test_truncate_empty_body(self, renderer):
        body = Block((), Span(5, 9))
        program = Program("main", (FuncDecl("main", "func main()", body, Span(5, 9)),), Span(1, 9))
        truncated = renderer.entryPoint_truncate(program, CommentBlock(("// Output:",), Span(6, 6)))
        assert truncated.decls[0].body.span == Span(5, 5)


class TestBlocks:
    """Test bare block examples"""

    def test_comment_only_block(self, renderer):
        unit = ExampleUnit("Empty", Block((), Span(1, 3)), (CommentBlock(("// nothing to see",), Span(2, 2)),))
        assert renderer.example_render(unit).pair() == ("// nothing to see\n", None)

    def test_empty_block_shows_braces(self, renderer):
        """A block with only an output comment still has code to show"""
        unit = ExampleUnit("Empty", Block((), Span(1, 3)), (CommentBlock(("// Output: x",), Span(2, 2)),))
        assert renderer.example_render(unit).pair() == ("{\n}\n", "x\n")

    def test_statements_not_indented(self, renderer):
        block = Block(
            (Statement("if ok {\n\tdone()\n}", Span(2, 4)),),
            Span(1, 5),
        )
        assert renderer.example_render(ExampleUnit("If", block)).code == "if ok {\n    done()\n}\n"


class TestFailures:
    """Test fatal example errors"""

    def test_unsupported_kind(self, renderer):
        with pytest.raises(UnsupportedFragmentKind) as excinfo:
            renderer.example_render(ExampleUnit("Bad", "fmt.Println()"))
        assert excinfo.value.kind == "str"
        assert excinfo.value.example == "Bad"

    def test_print_failure_names_example(self, renderer):
        with pytest.raises(PrettyPrintFailure) as excinfo:
            renderer.example_render(ExampleUnit("Broken", Block((), Span(4, 2))))
        assert excinfo.value.fragment == "Broken"
        assert "Broken" in str(excinfo.value)
