#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Module

Replay contract between an InstructionStream and the layout pass.

Components:
- StreamReplayer: per-container state fold
- ContainerState: font, color, indentation, offset and column state
- ReplayResult: every entry with the state it is interpreted under

Usage:
    from core.layout import StreamReplayer

    result = StreamReplayer().replay(stream)
    for resolved in result.for_container(Container.CONTENT_LEFT):
        ...

Version: 1.0.0
"""

from .replay import (
    StreamReplayer,
    ContainerState,
    ResolvedInstruction,
    ReplayResult,
    replay_stream,
    resolve_state,
)

__all__ = [
    "StreamReplayer",
    "ContainerState",
    "ResolvedInstruction",
    "ReplayResult",
    "replay_stream",
    "resolve_state",
]

__version__ = "1.0.0"
