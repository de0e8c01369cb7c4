"""Face registry -- named visual styles addressed by stable integer handles.

A ``Face`` is a foreground/background colour pair. The ``FaceRegistry`` hands
out ``FaceId`` integers that other components (the grid, highlighters,
renderers) hold on to. Handles stay valid across theme reloads: a name that
survives a reload keeps its id, and slots are never repurposed for anything
other than a later theme's faces.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Literal, Union

Rgb = tuple[int, int, int]
Color = Union[Literal["default"], Rgb]
FaceId = int

DEFAULT: Literal["default"] = "default"
DEFAULT_FACE_ID: FaceId = 0

_HEX_RE = re.compile(r"^#(?P<hex>[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class Face:
    """How a character is drawn. Equality is structural."""

    fg: Color = DEFAULT
    bg: Color = DEFAULT


DEFAULT_FACE = Face()

# Drawn for faces that cannot be resolved; meant to be noticed.
INVALID_FACE = Face(fg=(255, 0, 255), bg=(0, 0, 0))


def parse_color(value: object) -> Color:
    """Parse a colour from config data.

    Accepts ``None``/``"default"``, ``"#rgb"``, ``"#rrggbb"`` or a sequence
    of three ints in 0..255. Raises ``ValueError`` for anything else.
    """
    if value is None or value == DEFAULT:
        return DEFAULT
    if isinstance(value, str):
        match = _HEX_RE.match(value.strip())
        if not match:
            raise ValueError(f"Invalid colour: {value!r}")
        digits = match.group("hex")
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    if isinstance(value, (list, tuple)) and len(value) == 3:
        channels = tuple(value)
        for channel in channels:
            if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
                raise ValueError(f"Invalid colour channel {channel!r} in {value!r}")
        return channels  # type: ignore[return-value]
    raise ValueError(f"Invalid colour: {value!r}")


class FaceRegistry:
    """Ordered collection of Faces indexed by FaceId.

    Slot 0 is the ``default`` face. ``error`` is registered at construction
    with ``INVALID_FACE``. Both are permanent: theme loads update their
    Face but never move them.
    """

    def __init__(self) -> None:
        self._faces: list[Face] = []
        self._names: dict[str, FaceId] = {}
        self._theme_ids: set[FaceId] = set()

        self.register_or_update("default", DEFAULT_FACE)
        self.register_or_update("error", INVALID_FACE)

    # -- registration -------------------------------------------------------

    def register_or_update(self, name: str, face: Face) -> FaceId:
        """Bind *name* to *face*, reusing the existing id if *name* is known."""
        face_id = self._names.get(name)
        if face_id is not None:
            self._faces[face_id] = face
            return face_id

        face_id = len(self._faces)
        self._faces.append(face)
        self._names[name] = face_id
        return face_id

    def load_theme(self, entries: Iterable[tuple[str, Face]]) -> None:
        """Replace the theme-managed faces with *entries*.

        Names already bound to a theme slot keep that slot. The remaining
        names take the vacated theme slots in ascending order, then fresh
        ids. Names bound to permanent slots update those slots in place.
        Old theme names that are not re-bound lose their name binding, but
        their slot (and its last Face) stays put for grid cells that still
        point at it.
        """
        ordered: dict[str, Face] = {}
        for name, face in entries:
            ordered[name] = face

        claimed: dict[str, FaceId] = {}
        pending: list[tuple[str, Face]] = []
        for name, face in ordered.items():
            face_id = self._names.get(name)
            if face_id is None:
                pending.append((name, face))
            elif face_id in self._theme_ids:
                self._faces[face_id] = face
                claimed[name] = face_id
            else:
                self._faces[face_id] = face

        for name in [n for n, i in self._names.items() if i in self._theme_ids]:
            if name not in claimed:
                del self._names[name]

        claimed_ids = set(claimed.values())
        free_ids = sorted(i for i in self._theme_ids if i not in claimed_ids)
        for index, (name, face) in enumerate(pending):
            if index < len(free_ids):
                face_id = free_ids[index]
                self._faces[face_id] = face
            else:
                face_id = len(self._faces)
                self._faces.append(face)
                self._theme_ids.add(face_id)
            self._names[name] = face_id

    # -- lookups ------------------------------------------------------------

    def lookup_by_name(self, name: str) -> FaceId | None:
        return self._names.get(name)

    def lookup_by_id(self, face_id: FaceId) -> Face | None:
        if 0 <= face_id < len(self._faces):
            return self._faces[face_id]
        return None

    def face_for_name(self, name: str) -> Face:
        """Face bound to *name*, or ``INVALID_FACE`` when unknown."""
        face_id = self._names.get(name)
        if face_id is None:
            return INVALID_FACE
        return self._faces[face_id]

    def face_for_id(self, face_id: FaceId) -> Face:
        """Face stored at *face_id*, or ``INVALID_FACE`` when out of range."""
        face = self.lookup_by_id(face_id)
        return INVALID_FACE if face is None else face

    def is_theme_managed(self, face_id: FaceId) -> bool:
        return face_id in self._theme_ids

    def theme_names(self) -> list[str]:
        """Names currently bound to theme slots, in id order."""
        return sorted(
            (n for n, i in self._names.items() if i in self._theme_ids),
            key=lambda n: self._names[n],
        )

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._faces)
