"""Message documents — a message built once and rendered per channel.

Templates describe a message as an ordered list of blocks. The same document
is rendered as Telegram HTML for the staff chat and as plain text for the
WhatsApp deep link, so both renderings always carry the same content.
"""

import html
import re
from dataclasses import dataclass
from enum import Enum

_TAG = re.compile(r"<[^>]+>")


class BlockKind(Enum):
    TITLE = "title"
    HEADING = "heading"
    FIELD = "field"
    LINE = "line"
    BLANK = "blank"


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    text: str = ""
    value: str = ""
    code: bool = False


class MessageDocument:
    def __init__(self):
        self.blocks: list[Block] = []

    def title(self, text):
        self.blocks.append(Block(BlockKind.TITLE, text=str(text)))
        return self

    def heading(self, text):
        self.blocks.append(Block(BlockKind.HEADING, text=str(text)))
        return self

    def field(self, label, value, code=False):
        self.blocks.append(Block(BlockKind.FIELD, text=str(label), value=str(value), code=code))
        return self

    def line(self, text):
        self.blocks.append(Block(BlockKind.LINE, text=str(text)))
        return self

    def blank(self):
        self.blocks.append(Block(BlockKind.BLANK))
        return self

    def values(self) -> list[str]:
        """Every label and value in order, for comparing renderings."""
        collected = []
        for block in self.blocks:
            if block.text:
                collected.append(block.text)
            if block.value:
                collected.append(block.value)
        return collected

    # -------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------
    def to_html(self) -> str:
        return "\n".join(_html_block(block) for block in self.blocks)

    def to_plain(self) -> str:
        return "\n".join(_plain_block(block) for block in self.blocks)


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _html_block(block: Block) -> str:
    if block.kind in (BlockKind.TITLE, BlockKind.HEADING):
        return f"<b>{_escape(block.text)}</b>"
    if block.kind is BlockKind.FIELD:
        value = f"<code>{_escape(block.value)}</code>" if block.code else _escape(block.value)
        return f"<b>{_escape(block.text)}:</b> {value}"
    return _escape(block.text)


def _plain_block(block: Block) -> str:
    if block.kind is BlockKind.FIELD:
        return f"{block.text}: {block.value}"
    return block.text


def strip_markup(text: str) -> str:
    """Remove Telegram HTML tags and entities, leaving the plain text."""
    return html.unescape(_TAG.sub("", text))
