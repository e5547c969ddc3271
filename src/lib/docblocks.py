"""
Doc comment block scanner

Splits raw package documentation text into an ordered list of typed blocks
(Paragraph, Heading, Preformatted) in a single pass over its lines,
following the Go doc comment conventions:

- blank lines separate blocks
- a run of indented lines is preformatted text; blank lines inside the run
  belong to it, its common indentation is removed
- a lone capitalized line without sentence punctuation, surrounded by blank
  lines and followed by ordinary text, is a heading
- everything else is paragraph text

Example:
    >>> blocks_parse("Intro text.\\n\\n  go get foo\\n")
    [Paragraph(text='Intro text.', kind='paragraph'), Preformatted(text='go get foo\\n', kind='preformatted')]
"""

import textwrap
from typing import List, Optional, Union

from ..models.source import Heading, Paragraph, Preformatted
from .log import LOG

HEADING_FORBIDDEN = set(';:!?+*/=[]{}_^°&§~%#@<">\\')


def line_isBlank(line: str) -> bool:
    return not line.strip()


def line_isIndented(line: str) -> bool:
    return not line_isBlank(line) and line[0] in " \t"


def heading_check(line: str) -> Optional[str]:
    """
    Return the heading text if `line` qualifies as a heading, else None

    A heading starts with an upper-case letter, ends with a letter or digit,
    has none of the HEADING_FORBIDDEN characters, uses '.' only inside a
    word (e.g., "go.dev") and "'" only as a possessive "'s".
    """
    line = line.strip()
    if not line:
        return None
    if not line[0].isupper() or not line[-1].isalnum():
        return None
    if any(char in HEADING_FORBIDDEN for char in line):
        return None

    for index, char in enumerate(line):
        following = line[index + 1:index + 2]
        if char == "." and following in ("", " "):
            return None
        if char == "'":
            if following != "s":
                return None
            if line[index + 2:index + 3] not in ("", " "):
                return None

    return line


def blocks_parse(text: str) -> List[Union[Paragraph, Heading, Preformatted]]:
    """
    Scan documentation text into blocks

    Args:
        text: Raw doc comment text, comment markers already removed

    Returns:
        Blocks in document order
    """
    lines = text.split("\n")
    blocks: List[Union[Paragraph, Heading, Preformatted]] = []
    last_blank = False
    last_heading = False
    i = 0

    while i < len(lines):
        line = lines[i]

        if line_isBlank(line):
            last_blank = True
            i += 1
            continue

        if line_isIndented(line):
            end = i
            while end < len(lines) and (line_isIndented(lines[end]) or line_isBlank(lines[end])):
                end += 1
            run = lines[i:end]
            while run and line_isBlank(run[-1]):
                run.pop()
            blocks.append(Preformatted(textwrap.dedent("\n".join(run)) + "\n"))
            last_blank = False
            last_heading = False
            i = end
            continue

        if (
            blocks
            and last_blank
            and not last_heading
            and i + 2 < len(lines)
            and line_isBlank(lines[i + 1])
            and not line_isBlank(lines[i + 2])
            and not line_isIndented(lines[i + 2])
        ):
            heading = heading_check(line)
            if heading:
                blocks.append(Heading(heading))
                last_heading = True
                i += 1
                continue

        end = i
        while end < len(lines) and not line_isBlank(lines[end]) and not line_isIndented(lines[end]):
            end += 1
        blocks.append(Paragraph("\n".join(part.rstrip() for part in lines[i:end])))
        last_blank = False
        last_heading = False
        i = end

    LOG(f"Scanned {len(blocks)} doc blocks", level=3)
    return blocks
