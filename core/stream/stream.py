#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Instruction Stream

Ordered, append-only log of (container, instruction) pairs. This is the
hand-off contract between the builder and the layout pass.

Invariants enforced on append:
- insertion order is the only ordering signal, within and across containers
- nothing is removed or reordered once appended
- an enabling ColumnSectionToggle with fewer than two columns is rejected
  (InvalidColumnCount) and nothing is appended
- SectionBlock and PageBreak are filed under the primary content container
  whatever container the caller passed

Version: 1.0.0
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Tuple
import hashlib
import json
import logging

from config.constants import CHECKSUM_LENGTH, STREAM_FORMAT_VERSION

from .containers import Container, PRIMARY_CONTAINER
from .errors import StreamDecodeError
from .instructions import Instruction, instruction_from_dict
from .validation import check_column_toggle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreamEntry:
    """One (container, instruction) pair"""
    container: Container
    instruction: Instruction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "container": self.container.value,
            "instruction": self.instruction.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StreamEntry':
        try:
            container = Container(data["container"])
        except (KeyError, ValueError, TypeError) as e:
            raise StreamDecodeError(f"Unknown container in {data!r}") from e
        if "instruction" not in data:
            raise StreamDecodeError(f"Entry has no instruction: {data!r}")
        return cls(container=container, instruction=instruction_from_dict(data["instruction"]))


@dataclass
class StreamMetadata:
    """Metadata attached to a serialized stream"""
    version: str = STREAM_FORMAT_VERSION
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    checksum: str = ""

    @staticmethod
    def calculate_checksum(entries: List[Dict[str, Any]]) -> str:
        """Checksum over the serialized entries only"""
        json_str = json.dumps(entries, sort_keys=True, ensure_ascii=False)
        return hashlib.sha256(json_str.encode()).hexdigest()[:CHECKSUM_LENGTH]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "created_at": self.created_at,
            "checksum": self.checksum,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StreamMetadata':
        return cls(
            version=data.get("version", STREAM_FORMAT_VERSION),
            created_at=data.get("created_at", ""),
            checksum=data.get("checksum", ""),
        )


class InstructionStream:
    """
    Append-only instruction log for one document session.

    Usage:
        stream = InstructionStream()
        stream.append(Container.CONTENT_LEFT, SimpleText("Hello"))

        for entry in stream:
            ...

        json_str = stream.to_json()
        restored = InstructionStream.from_json(json_str)
    """

    def __init__(self):
        self._entries: List[StreamEntry] = []
        self.metadata = StreamMetadata()

    def append(self, container: Container, instruction: Instruction) -> None:
        """
        Append one instruction.

        Args:
            container: Target container (ignored for pinned kinds)
            instruction: Instruction to append

        Raises:
            InvalidColumnCount: enabling column toggle with fewer than two columns
        """
        check_column_toggle(instruction)

        if instruction.is_pinned and container is not PRIMARY_CONTAINER:
            logger.debug(f"{instruction.kind.value} filed under {PRIMARY_CONTAINER.value} "
                         f"(requested {container.value})")
            container = PRIMARY_CONTAINER

        self._entries.append(StreamEntry(container=container, instruction=instruction))
        logger.debug(f"Appended #{len(self._entries) - 1}: {container.value} {instruction.kind.value}")

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def entries(self) -> Tuple[StreamEntry, ...]:
        """All entries in insertion order (read-only copy)"""
        return tuple(self._entries)

    def snapshot(self) -> Tuple[StreamEntry, ...]:
        """Immutable view handed to the layout pass"""
        return self.entries

    def for_container(self, container: Container) -> List[StreamEntry]:
        """Sub-stream of one container, in order"""
        return [e for e in self._entries if e.container is container]

    def containers(self) -> List[Container]:
        """Containers in order of first use"""
        seen: List[Container] = []
        for entry in self._entries:
            if entry.container not in seen:
                seen.append(entry.container)
        return seen

    def get_statistics(self) -> Dict[str, int]:
        """
        Get statistics about instructions in the stream.

        Returns:
            Dict with counts of each instruction kind present
        """
        from collections import Counter
        return dict(Counter(e.instruction.kind.value for e in self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StreamEntry]:
        return iter(tuple(self._entries))

    def __getitem__(self, index: int) -> StreamEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return (f"InstructionStream(entries={len(self._entries)}, "
                f"containers={len(self.containers())})")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Serialized form; the checksum is computed for the output only"""
        entries = [e.to_dict() for e in self._entries]
        metadata = replace(self.metadata, checksum=StreamMetadata.calculate_checksum(entries))
        return {
            "metadata": metadata.to_dict(),
            "entries": entries,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InstructionStream':
        """
        Rebuild a stream, replaying every entry through append().

        Raises:
            StreamDecodeError: malformed entry or checksum mismatch
            InvalidColumnCount: serialized stream holds an invalid column toggle
        """
        if not isinstance(data, dict) or not isinstance(data.get("entries"), list):
            raise StreamDecodeError("Stream data must be a dict with an 'entries' list")

        raw_metadata = data.get("metadata", {})
        if not isinstance(raw_metadata, dict):
            raise StreamDecodeError("Stream metadata must be a dict")
        metadata = StreamMetadata.from_dict(raw_metadata)
        if metadata.checksum:
            actual = StreamMetadata.calculate_checksum(data["entries"])
            if actual != metadata.checksum:
                raise StreamDecodeError(
                    f"Checksum mismatch: expected {metadata.checksum}, got {actual}"
                )

        stream = cls()
        stream.metadata = metadata
        for raw in data["entries"]:
            entry = StreamEntry.from_dict(raw)
            stream.append(entry.container, entry.instruction)
        return stream

    @classmethod
    def from_json(cls, json_str: str) -> 'InstructionStream':
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise StreamDecodeError(f"Invalid stream JSON: {e}") from e
        return cls.from_dict(data)
