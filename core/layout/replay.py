#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Stream Replay

Per-container state fold the layout pass runs over an InstructionStream:
- Each container starts at the session defaults
- Modifiers (font, text color, indentation, offset, columns) override only
  their own axis, strictly in stream order (last write wins)
- Content instructions see the state current at their position
- AttributedText is self-styled: font and text color do not apply to it
- An unmatched disable_columns is a no-op; a column section still open at
  the end of a container is closed implicitly

No geometry is computed here; pagination and measurement belong to the
renderer that consumes the ReplayResult.

Version: 1.0.0
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional
import logging

from config.settings import Settings, settings as default_settings
from core.stream import (
    Color,
    Container,
    Font,
    Instruction,
    InstructionKind,
    StreamEntry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerState:
    """Interpretation state of one container"""
    font: Font
    text_color: Color
    left_indent: float = 0.0
    right_indent: float = 0.0
    absolute_offset: Optional[float] = None  # None: no override, keep flowing
    columns: Optional[int] = None  # None: not inside a column section

    @property
    def in_column_section(self) -> bool:
        return self.columns is not None

    def apply(self, instruction: Instruction) -> 'ContainerState':
        """State after a modifier; content instructions leave it unchanged"""
        kind = instruction.kind

        if kind is InstructionKind.FONT:
            return replace(self, font=instruction.font)

        elif kind is InstructionKind.TEXT_COLOR:
            return replace(self, text_color=instruction.color)

        elif kind is InstructionKind.INDENTATION:
            if instruction.left:
                return replace(self, left_indent=instruction.indentation)
            return replace(self, right_indent=instruction.indentation)

        elif kind is InstructionKind.OFFSET:
            return replace(self, absolute_offset=instruction.offset)

        elif kind is InstructionKind.COLUMN_SECTION:
            if instruction.enabled:
                return replace(self, columns=instruction.columns)
            return replace(self, columns=None)

        return self


@dataclass(frozen=True)
class ResolvedInstruction:
    """A stream entry together with the state it is interpreted under"""
    index: int
    container: Container
    instruction: Instruction
    state: ContainerState

    @property
    def effective_font(self) -> Optional[Font]:
        """Font that styles this entry (None for self-styled text)"""
        if self.instruction.kind is InstructionKind.ATTRIBUTED_TEXT:
            return None
        return self.state.font

    @property
    def effective_color(self) -> Optional[Color]:
        if self.instruction.kind is InstructionKind.ATTRIBUTED_TEXT:
            return None
        return self.state.text_color


@dataclass
class ReplayResult:
    """Outcome of replaying a whole stream"""
    entries: List[ResolvedInstruction] = field(default_factory=list)
    final_states: Dict[Container, ContainerState] = field(default_factory=dict)
    implicitly_closed: List[Container] = field(default_factory=list)
    ignored_disables: List[int] = field(default_factory=list)  # Stream indices

    def for_container(self, container: Container) -> List[ResolvedInstruction]:
        return [e for e in self.entries if e.container is container]

    def content(self) -> List[ResolvedInstruction]:
        return [e for e in self.entries if e.instruction.is_content]

    def __len__(self) -> int:
        return len(self.entries)


class StreamReplayer:
    """
    Replays an instruction stream into resolved per-container state.

    Usage:
        replayer = StreamReplayer()
        result = replayer.replay(stream)

        for resolved in result.content():
            render(resolved.instruction, resolved.state)
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Args:
            settings: Session defaults (uses the global settings if None)
        """
        self.settings = settings if settings is not None else default_settings

    def initial_state(self) -> ContainerState:
        return ContainerState(
            font=self.settings.default_font(),
            text_color=self.settings.default_color(),
        )

    def replay(self, stream: Iterable[StreamEntry]) -> ReplayResult:
        """
        Fold the stream left to right, one state per container.

        Args:
            stream: InstructionStream or a snapshot of its entries

        Returns:
            ReplayResult with every entry resolved
        """
        result = ReplayResult()
        states: Dict[Container, ContainerState] = {}

        for index, entry in enumerate(stream):
            state = states.get(entry.container) or self.initial_state()
            instruction = entry.instruction

            if (instruction.kind is InstructionKind.COLUMN_SECTION
                    and not instruction.enabled
                    and not state.in_column_section):
                logger.debug(f"#{index}: unmatched disable_columns in {entry.container.value} ignored")
                result.ignored_disables.append(index)

            if instruction.is_modifier:
                state = state.apply(instruction)

            states[entry.container] = state
            result.entries.append(ResolvedInstruction(
                index=index,
                container=entry.container,
                instruction=instruction,
                state=state,
            ))

        for container, state in states.items():
            if state.in_column_section:
                logger.debug(f"{container.value}: {state.columns}-column section closed at end of content")
                result.implicitly_closed.append(container)
                state = replace(state, columns=None)
            result.final_states[container] = state

        logger.info(f"Replayed {len(result.entries)} entries across {len(states)} containers")

        return result

    def resolve_state(
        self,
        stream: Iterable[StreamEntry],
        container: Container,
        upto: Optional[int] = None,
    ) -> ContainerState:
        """
        State of one container after the first `upto` entries (all if None).
        Unlike final_states, an open column section is reported as open.
        """
        state = self.initial_state()
        for index, entry in enumerate(stream):
            if upto is not None and index >= upto:
                break
            if entry.container is container and entry.instruction.is_modifier:
                state = state.apply(entry.instruction)
        return state


def replay_stream(stream: Iterable[StreamEntry], settings: Optional[Settings] = None) -> ReplayResult:
    """Convenience wrapper around StreamReplayer().replay()"""
    return StreamReplayer(settings).replay(stream)


def resolve_state(
    stream: Iterable[StreamEntry],
    container: Container,
    upto: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> ContainerState:
    """Convenience wrapper around StreamReplayer().resolve_state()"""
    return StreamReplayer(settings).resolve_state(stream, container, upto)
