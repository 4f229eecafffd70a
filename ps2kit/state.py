"""Application state and the queue of requested actions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ps2kit.files import Files, VirtualFile


class AppEventKind(enum.Enum):
    OPEN_FOLDER = enum.auto()
    OPEN_FILE = enum.auto()
    SET_TITLE = enum.auto()
    ADD_FILES = enum.auto()
    EXPORT_PSU = enum.auto()
    SAVE_FILE = enum.auto()
    OPEN_SAVE = enum.auto()


@dataclass(frozen=True)
class AppEvent:
    """A requested action; ``payload`` holds the file or title where there is one."""

    kind: AppEventKind
    payload: Any = None


@dataclass
class AppState:
    """The opened folder, its files and the pending events."""

    opened_folder: Path | None = None
    files: Files = field(default_factory=Files)
    events: list[AppEvent] = field(default_factory=list)

    def _push(self, kind: AppEventKind, payload: Any = None) -> None:
        self.events.append(AppEvent(kind, payload))

    def open_file(self, file: VirtualFile) -> None:
        self._push(AppEventKind.OPEN_FILE, file)

    def set_title(self, title: str) -> None:
        self._push(AppEventKind.SET_TITLE, title)

    def add_files(self) -> None:
        self._push(AppEventKind.ADD_FILES)

    def open_folder(self) -> None:
        self._push(AppEventKind.OPEN_FOLDER)

    def open_save(self) -> None:
        self._push(AppEventKind.OPEN_SAVE)

    def export_psu(self) -> None:
        self._push(AppEventKind.EXPORT_PSU)

    def save_file(self) -> None:
        self._push(AppEventKind.SAVE_FILE)

    def drain_events(self) -> list[AppEvent]:
        """Remove and return all pending events in the order they were queued."""
        events, self.events = self.events, []
        return events