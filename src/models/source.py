"""
Source documentation models

Read-only description of a documented package: its doc comment, exported
names, and runnable examples. These values are produced outside of docdown
(by a documentation extractor, or loaded from a model file) and are never
mutated by the rendering pipeline.

Positions are 1-based source line numbers. Comment placement in printed
examples is decided purely from these positions.
"""

from dataclasses import dataclass
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import Field


@dataclass(frozen=True)
class Span:
    """
    Inclusive range of source lines

    Attributes:
        start: First line of the item
        end: Last line of the item
    """
    start: int
    end: int

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end


@dataclass(frozen=True)
class CommentBlock:
    """
    A group of adjacent comments attached to an example

    Attributes:
        lines: Raw comment lines, markers included
               (e.g., ("// Output:", "// hello"))
        span: Source lines covered by the group

    Example:
        >>> CommentBlock(lines=("// Output:", "// hello"), span=Span(7, 8)).text
        'Output:\\nhello\\n'
    """
    lines: Tuple[str, ...]
    span: Span

    @property
    def text(self) -> str:
        """Comment text without markers, ending in a newline (or empty)"""
        stripped: List[str] = []
        for raw in self.lines:
            line = raw.strip()
            if line.startswith("//"):
                line = line[2:]
                if line.startswith(" "):
                    line = line[1:]
            else:
                if line.startswith("/*"):
                    line = line[2:]
                if line.endswith("*/"):
                    line = line[:-2]
            stripped.append(line.rstrip())

        while stripped and not stripped[0]:
            stripped.pop(0)
        while stripped and not stripped[-1]:
            stripped.pop()

        if not stripped:
            return ""
        return "\n".join(stripped) + "\n"


@dataclass(frozen=True)
class Statement:
    """
    A single statement of example code

    Continuation lines of `source` are indented with tabs relative to the
    statement's own first line.
    """
    source: str
    span: Span


@dataclass(frozen=True)
class Block:
    """
    A bare statement-block fragment; `span` covers its braces
    """
    statements: Tuple[Statement, ...]
    span: Span
    kind: Literal["block"] = "block"


@dataclass(frozen=True)
class Decl:
    """A top-level declaration printed verbatim (import, type, var, const)"""
    source: str
    span: Span
    kind: Literal["decl"] = "decl"


@dataclass(frozen=True)
class FuncDecl:
    """
    A function declaration

    Attributes:
        name: Function name (e.g., "main")
        signature: Everything before the opening brace (e.g., "func main()")
        body: Function body block
        span: Lines from the func keyword to the closing brace
    """
    name: str
    signature: str
    body: Block
    span: Span
    kind: Literal["func"] = "func"


TopLevelDecl = Annotated[Union[FuncDecl, Decl], Field(discriminator="kind")]


@dataclass(frozen=True)
class Program:
    """
    A full runnable program fragment

    The entry-point function (see AppSettings.entry_point) is the
    designated block whose end may be pulled back before an Output Comment.
    """
    package: str
    decls: Tuple[TopLevelDecl, ...]
    span: Span
    kind: Literal["program"] = "program"


CodeFragment = Annotated[Union[Block, Program], Field(discriminator="kind")]


@dataclass(frozen=True)
class ExampleUnit:
    """
    One runnable example

    Attributes:
        name: Display name (e.g., "Client_Do")
        code: Statement block or full program
        comments: Comments attached to the code, in any order
    """
    name: str
    code: CodeFragment
    comments: Tuple[CommentBlock, ...] = ()


@dataclass(frozen=True)
class Paragraph:
    text: str
    kind: Literal["paragraph"] = "paragraph"


@dataclass(frozen=True)
class Heading:
    text: str
    kind: Literal["heading"] = "heading"


@dataclass(frozen=True)
class Preformatted:
    text: str
    kind: Literal["preformatted"] = "preformatted"


DocBlock = Annotated[Union[Paragraph, Heading, Preformatted], Field(discriminator="kind")]


@dataclass(frozen=True)
class PackageModel:
    """
    Source Documentation Model of one package

    Attributes:
        name: Package name ("main" for commands)
        import_path: Full import path (e.g., "github.com/motemen/goreadme")
        doc: Raw package doc comment text
        doc_format: "text" for plain doc comments, "html" when `doc` (or
                    `blocks`) came from an HTML doc formatter
        blocks: Pre-classified doc blocks; when given, `doc` is not scanned
        consts, vars, funcs, types: Exported declaration names
        examples: Runnable examples
        notes: TODO notes attached to the package
    """
    name: str
    import_path: str = ""
    doc: str = ""
    doc_format: Literal["text", "html"] = "text"
    blocks: Optional[Tuple[DocBlock, ...]] = None
    consts: Tuple[str, ...] = ()
    vars: Tuple[str, ...] = ()
    funcs: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()
    examples: Tuple[ExampleUnit, ...] = ()
    notes: Tuple[str, ...] = ()

    def exported_names(self) -> List[str]:
        """Exported names in declaration order, without duplicates"""
        names: List[str] = []
        for name in self.consts + self.vars + self.funcs + self.types:
            if name not in names:
                names.append(name)
        return names

    def doc_blocks(self) -> List[Union[Paragraph, Heading, Preformatted]]:
        """Doc blocks as given, or as scanned from the raw doc text"""
        if self.blocks is not None:
            return list(self.blocks)

        from ..lib.docblocks import blocks_parse
        return blocks_parse(self.doc)
