"""
Incremental assembly of the agent's streamed text response.

Raw chunks arrive at arbitrary byte boundaries. Painting every chunk as it lands
produces half-word flicker, so text is held in a pending buffer and committed
only once it reaches a sentence end or a paragraph break.

Usage:
    assembler = StreamAssembler(on_update=placeholder.markdown)
    for chunk in response.iter_content(chunk_size=None):
        assembler.feed(chunk)
    text = assembler.finish()
"""

import codecs
import re
from typing import Callable, Iterable, Optional


# Event-stream framing that leaks into the body, e.g. 'data: "..."'
_DATA_PREFIX_RE = re.compile(r'data:\s*', re.IGNORECASE)
_LEADING_QUOTES_RE = re.compile(r'^(\s*)["\']+')
_TRAILING_QUOTES_RE = re.compile(r'["\']+(\s*)$')

# Sentence end (optionally followed by whitespace) at the end of the buffer
_SENTENCE_END_RE = re.compile(r'[.!?]\s*$')
_PARAGRAPH_BREAK = '\n\n'


def clean_chunk(text: str) -> str:
    """Strip 'data:' markers and stray surrounding quotes from decoded text.

    Whitespace around the quotes is kept so words split across chunks stay apart.
    """
    text = _DATA_PREFIX_RE.sub('', text)
    text = _LEADING_QUOTES_RE.sub(r'\1', text)
    text = _TRAILING_QUOTES_RE.sub(r'\1', text)
    return text


def is_flush_boundary(text: str) -> bool:
    return bool(_SENTENCE_END_RE.search(text)) or _PARAGRAPH_BREAK in text


class StreamAssembler:
    """
    Accumulates decoded chunks into committed, display-ready text.

    State:
        pending: text received since the last flush
        committed: finalized text; only ever grows
    """

    def __init__(self, on_update: Optional[Callable[[str], None]] = None, encoding: str = 'utf-8'):
        """
        Args:
            on_update: Called with the trimmed committed text after each flush
            encoding: Body encoding
        """
        self.on_update = on_update
        self._decoder = codecs.getincrementaldecoder(encoding)(errors='replace')
        self.pending = ''
        self.committed = ''
        self.flush_count = 0
        self._finished = False
        # Offsets of inserted separator spaces that ended up before a line break
        self._elided = set()
        self._separator_at = None

    def feed(self, chunk: bytes) -> bool:
        """
        Consume one raw chunk.

        Returns:
            True if the chunk completed a flush boundary
        """
        if self._finished:
            raise RuntimeError("StreamAssembler already finished")

        text = self._decoder.decode(chunk)
        if not text:
            # Only a partial multi-byte sequence so far
            return False

        self.pending += clean_chunk(text)

        if is_flush_boundary(self.pending):
            self._commit(self.pending, separator=True)
            return True
        return False

    def finish(self) -> str:
        """
        Flush whatever is left and return the full trimmed text.

        Safe to call on an assembler that never received a chunk.
        """
        if not self._finished:
            tail = self._decoder.decode(b'', final=True)
            if tail:
                self.pending += clean_chunk(tail)
            if self.pending:
                self._commit(self.pending)
            self._finished = True
        return self.text

    def assemble(self, chunks: Iterable[bytes]) -> str:
        """Feed every chunk, then finish."""
        for chunk in chunks:
            if chunk:
                self.feed(chunk)
        return self.finish()

    @property
    def text(self) -> str:
        """Current display text: committed, minus elided separators, trimmed."""
        if not self._elided:
            return self.committed.strip()
        return ''.join(
            c for i, c in enumerate(self.committed) if i not in self._elided
        ).strip()

    def _commit(self, text: str, separator: bool = False) -> None:
        if self.committed.endswith(' '):
            text = text.lstrip(' ')
        if self._separator_at is not None and text.startswith(('\n', '\r')):
            self._elided.add(self._separator_at)
        self._separator_at = None
        if separator and not text[-1:].isspace():
            text += ' '
            self._separator_at = len(self.committed) + len(text) - 1
        self.committed += text
        self.pending = ''
        self.flush_count += 1
        if self.on_update is not None:
            self.on_update(self.text)


def assemble_stream(chunks: Iterable[bytes], on_update: Optional[Callable[[str], None]] = None) -> str:
    """Convenience wrapper around StreamAssembler.assemble."""
    return StreamAssembler(on_update=on_update).assemble(chunks)
