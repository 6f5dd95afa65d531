"""Byte-stream transcoding adapter."""

from __future__ import annotations

import codecs

from utf8_converter.types import BinaryReader, BinaryWriter

TARGET_ENCODING = "utf-8"


class IncrementalTranscoder:
    """Default transcoder decoding with a stateful incremental decoder."""

    def __init__(self, errors: str = "strict") -> None:
        self.errors = errors

    def transcode(
        self,
        source: BinaryReader,
        target: BinaryWriter,
        charset: str,
        chunk_size: int,
    ) -> tuple[int, int]:
        """Re-encode ``source`` into UTF-8 chunk by chunk.

        Multi-byte sequences split across chunk boundaries are buffered by
        the decoder and emitted once complete.

        Parameters
        ----------
        source : BinaryReader
            Stream of bytes in ``charset``.
        target : BinaryWriter
            Stream receiving UTF-8 bytes.
        charset : str
            Source codec name.
        chunk_size : int
            Number of bytes read per step.

        Returns
        -------
        tuple[int, int]
            Bytes read from ``source`` and bytes written to ``target``.

        Raises
        ------
        UnicodeDecodeError
            If ``source`` holds bytes that are invalid in ``charset``.
        """
        decoder = codecs.getincrementaldecoder(charset)(self.errors)
        bytes_read = 0
        bytes_written = 0
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                break
            bytes_read += len(chunk)
            encoded = decoder.decode(chunk).encode(TARGET_ENCODING)
            target.write(encoded)
            bytes_written += len(encoded)
        tail = decoder.decode(b"", final=True).encode(TARGET_ENCODING)
        if tail:
            target.write(tail)
            bytes_written += len(tail)
        target.flush()
        return bytes_read, bytes_written
