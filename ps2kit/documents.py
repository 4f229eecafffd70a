"""Editable documents for the files of an opened save folder."""

from __future__ import annotations

import abc
import math
import os
from pathlib import Path
from typing import Iterable

from PIL import Image

from ps2kit.color import Color
from ps2kit.files import VirtualFile
from ps2kit.icn import ICN, TEXTURE_SIZE
from ps2kit.icon_sys import IconSys

ICON_EXTENSIONS = ("icn", "ico")


class DocumentError(RuntimeError):
    """Raised when a document cannot perform the requested operation."""


class Document(abc.ABC):
    """A file opened for viewing or editing, identified by its name."""

    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        self.modified = False

    @property
    def id(self) -> str:
        return self.name

    @property
    def title(self) -> str:
        return self.name

    def display_title(self) -> str:
        """The title, marked with an asterisk while there are unsaved changes."""
        return f"* {self.title}" if self.modified else self.title

    @abc.abstractmethod
    def _serialize(self) -> bytes:
        """The bytes that saving writes to the document's path."""

    def save(self) -> None:
        """Write the document back to its file and clear the modified flag."""
        self.path.write_bytes(self._serialize())
        self.modified = False


class TitleCfgDocument(Document):
    """A plain-text configuration file such as title.cfg."""

    def __init__(self, file: VirtualFile) -> None:
        super().__init__(file.name, Path(file.file_path))
        data = self.path.read_bytes()
        try:
            self.contents = data.decode("utf-8")
            self.encoding_error = False
        except UnicodeDecodeError:
            self.contents = ""
            self.encoding_error = True

    def set_contents(self, contents: str) -> None:
        """Replace the text; a change marks the document as modified."""
        if contents != self.contents:
            self.contents = contents
            self.modified = True

    def _serialize(self) -> bytes:
        return self.contents.encode("utf-8")

    def save(self) -> None:
        super().save()


class IconSysDocument(Document):
    """An icon.sys file, showing its title and icon file names."""

    def __init__(self, file: VirtualFile) -> None:
        path = Path(file.file_path)
        super().__init__(path.name, path)
        sys_data = IconSys.from_bytes(path.read_bytes())
        self.title_text = sys_data.title
        self.icon_file = sys_data.icon_file
        self.icon_copy_file = sys_data.icon_copy_file
        self.icon_delete_file = sys_data.icon_delete_file

    def icon_choices(self, files: Iterable[VirtualFile]) -> list[str]:
        """Names of the files that can serve as icons, in the given order."""
        return [
            file.name
            for file in files
            if Path(file.name).suffix[1:] in ICON_EXTENSIONS
        ]

    def _serialize(self) -> bytes:
        raise DocumentError("saving icon.sys files is not supported")

    def save(self) -> None:
        """Saving icon.sys files is not supported and always raises."""
        raise DocumentError("saving icon.sys files is not supported")


class IcnDocument(Document):
    """A 3D icon file with its texture."""

    def __init__(self, file: VirtualFile) -> None:
        super().__init__(file.name, Path(file.file_path))
        self.icn = ICN.from_bytes(self.path.read_bytes())
        self.angle = math.pi / 2.0
        self.dark_mode = True
        self.needs_update = False
        self.closing = False

    def replace_texture(self, path: str | os.PathLike) -> None:
        """Load a 128x128 image as the new, fully opaque texture."""
        with Image.open(path) as image:
            rgba = image.convert("RGBA")
            pixels = [
                Color(r, g, b, 255).to_u16() for r, g, b, _ in rgba.getdata()
            ]
        if len(pixels) != TEXTURE_SIZE:
            raise ValueError(
                f"texture image needs {TEXTURE_SIZE} pixels, got {len(pixels)}"
            )
        self.icn.texture.pixels = pixels
        self.needs_update = True
        self.modified = True

    def export_obj(self, path: str | os.PathLike) -> None:
        """Write the first animation shape as a Wavefront OBJ file."""
        Path(path).write_text(self.icn.export_obj(), encoding="utf-8")

    def export_png(self, path: str | os.PathLike) -> None:
        """Write the texture as a PNG file."""
        Path(path).write_bytes(self.icn.export_png())

    def _serialize(self) -> bytes:
        return self.icn.to_bytes()

    def save(self) -> None:
        super().save()


_BOX_EDGES = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


def generate_wireframe_box(size: tuple[float, float, float]) -> list[float]:
    """Line-list coordinates for the 12 edges of a box centred on the origin."""
    hx, hy, hz = (component * 0.5 for component in size)
    corners = [
        (-hx, -hy, -hz),
        (hx, -hy, -hz),
        (hx, hy, -hz),
        (-hx, hy, -hz),
        (-hx, -hy, hz),
        (hx, -hy, hz),
        (hx, hy, hz),
        (-hx, hy, hz),
    ]
    return [
        coordinate
        for start, end in _BOX_EDGES
        for coordinate in (*corners[start], *corners[end])
    ]