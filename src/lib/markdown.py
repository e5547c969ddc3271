"""
Prose-to-Markdown conversion

Turns package documentation blocks into Markdown:

- Preformatted blocks become indented code blocks
- Headings become level-2 Markdown headings
- Text from an HTML doc formatter (from_html) loses its tags and entities
- Paragraph text gets code-like tokens wrapped in backticks (see
  symbols.py) and bare underscores escaped

Each block is rendered on its own and blocks are joined with one newline,
so consecutive blocks are separated by a blank line. Surplus blank lines
are expected here; emptyLines_squeeze() removes them from the assembled
document.

Example:
    >>> renderer = MarkdownRenderer(symbolMatcher_build([]))
    >>> renderer.render([Paragraph("Logging for http.Client.")])
    'Logging for `http.Client`.\\n'
"""

import html
import re
from typing import Iterable, List, Optional, Tuple, Union

from ..models.source import Heading, Paragraph, Preformatted
from .errors import RenderError
from .log import LOG
from .symbols import SymbolMatcher

RX_INDENT = re.compile(r"^\s+\S")
RX_EMPTY_LINES = re.compile(r"\n{3,}")
RX_CODE_SPAN = re.compile(r"`[^`\n]*`")
RX_UNDERSCORE = re.compile(r"(?<!\\)_")
RX_MARKUP = re.compile(r"</?(?:p|pre|h3|a|code)\b[^>]*>")


def emptyLines_squeeze(text: str) -> str:
    """
    Collapse every run of three or more newlines into exactly two

    Idempotent; applied once to the fully assembled document.
    """
    return RX_EMPTY_LINES.sub("\n\n", text)


def preformatted_indent(text: str, indent: str = "    ") -> str:
    """
    Prefix every non-blank line with `indent`

    Blank lines stay empty so no trailing whitespace is produced.
    """
    return "\n".join(indent + line if line.strip() else "" for line in text.split("\n"))


def underscores_escape(text: str) -> str:
    return RX_UNDERSCORE.sub(r"\\_", text)


def markup_strip(text: str) -> str:
    """Remove tags and entities left behind by an HTML doc formatter"""
    return html.unescape(RX_MARKUP.sub("", text))


def codeSpans_split(line: str) -> List[Tuple[str, bool]]:
    """
    Split a line into (segment, is_code) pairs around existing code spans

    Example:
        >>> codeSpans_split("run `go doc` now")
        [('run ', False), ('`go doc`', True), (' now', False)]
    """
    segments: List[Tuple[str, bool]] = []
    pos = 0
    for match in RX_CODE_SPAN.finditer(line):
        if match.start() > pos:
            segments.append((line[pos:match.start()], False))
        segments.append((match.group(0), True))
        pos = match.end()
    if pos < len(line):
        segments.append((line[pos:], False))
    return segments


class MarkdownRenderer:
    """
    Converts doc blocks to Markdown using one run's symbol matcher
    """

    def __init__(self, matcher: SymbolMatcher, indent: Optional[str] = None, from_html: bool = False) -> None:
        """
        Args:
            matcher: Symbol matcher built for the current run
            indent: Code block indentation (defaults to settings.code_indent)
            from_html: Doc text came from an HTML formatter; its tags and entities
                       are removed before conversion. Plain text is kept as is
        """
        if indent is None:
            from ..config import appsettings
            indent = appsettings.code_indent
        self.matcher = matcher
        self.indent = indent
        self.from_html = from_html

    def render(self, blocks: Iterable[Union[Paragraph, Heading, Preformatted]]) -> str:
        """Render blocks in document order"""
        parts = [self.block_render(block) for block in blocks]
        LOG(f"Rendered {len(parts)} doc blocks to Markdown", level=3)
        return "\n".join(parts)

    def block_render(self, block: Union[Paragraph, Heading, Preformatted]) -> str:
        if isinstance(block, Preformatted):
            return self.preformatted_render(block.text)
        if isinstance(block, Heading):
            return self.heading_render(block.text)
        if isinstance(block, Paragraph):
            return self.paragraph_render(block.text)
        raise RenderError(f"Unknown doc block type: {type(block).__name__}")

    def text_prepare(self, text: str) -> str:
        return markup_strip(text) if self.from_html else text

    def preformatted_render(self, text: str) -> str:
        return preformatted_indent(text, self.indent) + "\n"

    def heading_render(self, text: str) -> str:
        return f"## {self.text_prepare(text).strip()}\n\n"

    def paragraph_render(self, text: str) -> str:
        """
        Render paragraph text line by line

        Indented lines form embedded code runs: each is re-indented with the
        code indentation, and a blank line is put before the first line of a
        run. Other lines get symbol wrapping and underscore escaping.
        """
        lines: List[str] = []
        in_code_run = False

        for line in self.text_prepare(text).strip("\n").split("\n"):
            if RX_INDENT.match(line):
                line = self.indent + line.strip()
                if not in_code_run:
                    line = "\n" + line
                in_code_run = True
            else:
                in_code_run = False
                line = self.line_render(line)
            lines.append(line)

        return "\n".join(lines) + "\n"

    def line_render(self, line: str) -> str:
        """Wrap symbols and escape underscores outside of code spans"""
        parts: List[str] = []
        for segment, is_code in codeSpans_split(line):
            if is_code:
                parts.append(segment)
                continue

            pos = 0
            for match in self.matcher.finditer(segment):
                parts.append(underscores_escape(segment[pos:match.start()]))
                parts.append(f"`{match.group(0)}`")
                pos = match.end()
            parts.append(underscores_escape(segment[pos:]))

        return "".join(parts)
