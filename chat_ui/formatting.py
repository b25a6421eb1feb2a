"""
Light formatting for AI replies.

A fixed, single-pass, line-based formatter, not a markdown engine:

* a line that is only ``**text**``       -> section header
* ``* item`` / indented ``  * item``     -> bullet item, level 1 / level 2
* ``3. item``                            -> numbered item
* any other non-blank line               -> paragraph
* blank line                             -> spacer

Inside items and paragraphs ``**bold**`` and ```code``` spans become inline
elements. Nothing nests and nothing spans lines.
"""

from __future__ import annotations

import enum
import html
import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterable, List, Optional

HEADER_RE = re.compile(r"^\s*\*\*((?:(?!\*\*).)+)\*\*\s*$")
NESTED_ITEM_RE = re.compile(r"^\s{2,}\* ")
BULLET_PREFIX_RE = re.compile(r"^\s*\* ")
NUMBERED_RE = re.compile(r"^\s*(\d+)\.\s")
NUMBERED_PREFIX_RE = re.compile(r"^\s*\d+\.\s*")
INLINE_RE = re.compile(r"(\*\*[^*]+\*\*|`[^`]+`)")

STYLE = """
<style>
.chat-h { font-weight: 700; font-size: 1.15rem; margin: 1rem 0 0.5rem;
          border-left: 4px solid #a78bfa; padding-left: 0.75rem; }
.chat-ul, .chat-ol { margin: 0 0 0.5rem 1rem; }
.chat-li.level-2 { margin-left: 1.5rem; font-size: 0.92em; }
.chat-p { margin-bottom: 0.6rem; line-height: 1.6; }
.chat-spacer { height: 0.6rem; }
.chat-code { background: rgba(88, 28, 135, 0.3); padding: 0.1rem 0.4rem;
             border-radius: 0.4rem; font-family: monospace; font-size: 0.9em; }
.chat-strong { font-weight: 600; }
</style>
"""


class BlockKind(str, enum.Enum):
    HEADER = "header"
    BULLET = "bullet"
    NUMBERED = "numbered"
    PARAGRAPH = "paragraph"
    SPACER = "spacer"


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    text: str = ""
    level: int = 1
    number: Optional[int] = None


def classify_line(line: str) -> Block:
    header = HEADER_RE.match(line)
    if header and header.group(1).strip():
        return Block(BlockKind.HEADER, header.group(1).strip())

    if NESTED_ITEM_RE.match(line):
        return Block(BlockKind.BULLET, BULLET_PREFIX_RE.sub("", line, count=1), level=2)

    stripped = line.strip()
    if stripped.startswith("* "):
        return Block(BlockKind.BULLET, stripped[2:])

    numbered = NUMBERED_RE.match(line)
    if numbered:
        content = NUMBERED_PREFIX_RE.sub("", line, count=1)
        return Block(BlockKind.NUMBERED, content, number=int(numbered.group(1)))

    if stripped:
        return Block(BlockKind.PARAGRAPH, line)
    return Block(BlockKind.SPACER)


def parse_blocks(text: str) -> List[Block]:
    return [classify_line(line) for line in text.split("\n")]


def render_inline(text: str) -> str:
    """Escape ``text`` and turn ``**bold**`` / ```code``` spans into elements."""
    out = []
    for part in INLINE_RE.split(text):
        if not part:
            continue
        if part.startswith("**") and part.endswith("**") and len(part) > 4:
            out.append(f'<strong class="chat-strong">{html.escape(part[2:-2])}</strong>')
        elif part.startswith("`") and part.endswith("`") and len(part) > 2:
            out.append(f'<code class="chat-code">{html.escape(part[1:-1])}</code>')
        else:
            out.append(html.escape(part))
    return "".join(out)


def render_blocks(blocks: Iterable[Block]) -> str:
    out: List[str] = []
    open_list: Optional[BlockKind] = None

    for block in blocks:
        if block.kind is not open_list and open_list is not None:
            out.append("</ul>" if open_list is BlockKind.BULLET else "</ol>")
            open_list = None

        if block.kind is BlockKind.HEADER:
            out.append(f'<h3 class="chat-h">{html.escape(block.text)}</h3>')
        elif block.kind is BlockKind.BULLET:
            if open_list is None:
                out.append('<ul class="chat-ul">')
                open_list = BlockKind.BULLET
            out.append(f'<li class="chat-li level-{block.level}">{render_inline(block.text)}</li>')
        elif block.kind is BlockKind.NUMBERED:
            if open_list is None:
                out.append('<ol class="chat-ol">')
                open_list = BlockKind.NUMBERED
            out.append(f'<li class="chat-li" value="{block.number}">{render_inline(block.text)}</li>')
        elif block.kind is BlockKind.PARAGRAPH:
            out.append(f'<p class="chat-p">{render_inline(block.text)}</p>')
        else:
            out.append('<div class="chat-spacer"></div>')

    if open_list is not None:
        out.append("</ul>" if open_list is BlockKind.BULLET else "</ol>")
    return "".join(out)


def to_html(text: str) -> str:
    return render_blocks(parse_blocks(text))


def format_time(ts: datetime, tz: tzinfo) -> str:
    return ts.astimezone(tz).strftime("%I:%M %p")
