"""Wavefront OBJ importer.

Supported records:

    v x y z          vertex (point)
    vn x y z         vertex normal (vector)
    f a b c ...      face; polygons are split into a triangle fan
    f a/t/n ...      face with normals; produces smooth triangles
    g name           starts (or resumes) a named group

Vertex and normal indices are 1-based; negative indices count back from the
most recent record, as in the OBJ format. Texture indices are accepted and
discarded. Any other line (comments, materials, texture coordinates,
gibberish) is ignored and counted.

Faces seen before any ``g`` record belong to the ``default`` group, which
always exists.

The parse result holds plain geometry, not shapes. Every call to
``triangles``, ``group`` or ``to_group`` builds fresh shapes, so a single
parse can feed several scenes.

Example:
    >>> from src.prism.scene.obj_file import parse_obj
    >>> result = parse_obj("v -1 1 0\\nv -1 0 0\\nv 1 0 0\\nv 1 1 0\\nf 1 2 3 4\\n")
    >>> len(result.triangles())
    2
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from src.prism.core.tuples import Tuple, point, vector
from src.prism.geometry.arena import ShapeArena
from src.prism.geometry.group import Group
from src.prism.geometry.triangle import SmoothTriangle, Triangle

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "default"


class ObjParseError(ValueError):
    """A record of an OBJ file could not be interpreted.

    Attributes:
        line_number: 1-based line number of the offending record.
    """

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


@dataclass(frozen=True)
class ObjFace:
    """One triangle of a face: three vertices and, optionally, three normals."""

    vertices: tuple[Tuple, Tuple, Tuple]
    normals: tuple[Tuple, Tuple, Tuple] | None = None

    def to_shape(self) -> Triangle:
        p1, p2, p3 = self.vertices
        if self.normals is None:
            return Triangle(p1, p2, p3)
        n1, n2, n3 = self.normals
        return SmoothTriangle(p1, p2, p3, n1, n2, n3)


@dataclass
class ObjParseResult:
    """Geometry read from an OBJ document.

    Attributes:
        vertices: Vertex records in file order.
        normals: Normal records in file order.
        faces: Triangulated faces per group name, in first-seen order.
        ignored: Number of lines that were not recognized.
    """

    vertices: list[Tuple] = field(default_factory=list)
    normals: list[Tuple] = field(default_factory=list)
    faces: dict[str, list[ObjFace]] = field(default_factory=lambda: {DEFAULT_GROUP: []})
    ignored: int = 0

    def vertex(self, index: int) -> Tuple:
        """Return a vertex by its 1-based OBJ index."""
        return self.vertices[index - 1]

    def normal(self, index: int) -> Tuple:
        """Return a normal by its 1-based OBJ index."""
        return self.normals[index - 1]

    @property
    def group_names(self) -> list[str]:
        return list(self.faces)

    def triangles(self, name: str = DEFAULT_GROUP) -> list[Triangle]:
        """Build new triangle shapes for one group.

        Raises:
            KeyError: If the document has no group with that name.
        """
        return [face.to_shape() for face in self.faces[name]]

    def group(self, name: str = DEFAULT_GROUP, arena: ShapeArena | None = None) -> Group:
        """Build a group holding the triangles of one named group."""
        return Group(children=self.triangles(name), name=name, arena=arena)

    def to_group(self, arena: ShapeArena | None = None) -> Group:
        """Build the whole document as a tree.

        The root group has one child group per named group; groups without
        any face are left out.
        """
        root = Group(name="obj")
        for name, faces in self.faces.items():
            if faces:
                root.add_child(self.group(name))

        if arena is not None:
            arena.register(root)
        return root


def _parse_floats(fields: list[str], line_number: int) -> tuple[float, float, float]:
    if len(fields) < 3:
        raise ObjParseError(f"expected 3 coordinates, got {len(fields)}", line_number)
    try:
        x, y, z = (float(value) for value in fields[:3])
    except ValueError as e:
        raise ObjParseError(f"invalid coordinate in {' '.join(fields)!r}", line_number) from e
    return x, y, z


def _resolve_index(token: str, records: list[Tuple], kind: str, line_number: int) -> Tuple:
    try:
        index = int(token)
    except ValueError as e:
        raise ObjParseError(f"invalid {kind} index {token!r}", line_number) from e

    # Negative indices are relative to the end of the list
    position = index - 1 if index > 0 else len(records) + index
    if index == 0 or not 0 <= position < len(records):
        raise ObjParseError(
            f"{kind} index {index} out of range (have {len(records)})", line_number
        )
    return records[position]


def _parse_face(fields: list[str], result: ObjParseResult, line_number: int) -> list[ObjFace]:
    if len(fields) < 3:
        raise ObjParseError(f"a face needs at least 3 vertices, got {len(fields)}", line_number)

    vertices: list[Tuple] = []
    normals: list[Tuple] = []
    for token in fields:
        parts = token.split("/")
        vertices.append(_resolve_index(parts[0], result.vertices, "vertex", line_number))
        if len(parts) == 3 and parts[2]:
            normals.append(_resolve_index(parts[2], result.normals, "normal", line_number))

    # Smooth only when every corner has a normal
    with_normals = len(normals) == len(vertices)

    faces = []
    for i in range(1, len(vertices) - 1):
        corners = (vertices[0], vertices[i], vertices[i + 1])
        corner_normals = (normals[0], normals[i], normals[i + 1]) if with_normals else None
        faces.append(ObjFace(corners, corner_normals))
    return faces


def parse_obj(text: str) -> ObjParseResult:
    """Parse an OBJ document.

    Args:
        text: The document contents.

    Returns:
        The parsed geometry.

    Raises:
        ObjParseError: If a recognized record is malformed or references a
            vertex or normal that does not exist.
    """
    result = ObjParseResult()
    current_group = DEFAULT_GROUP

    for line_number, line in enumerate(text.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue

        keyword, arguments = fields[0], fields[1:]

        if keyword == "v":
            result.vertices.append(point(*_parse_floats(arguments, line_number)))
        elif keyword == "vn":
            result.normals.append(vector(*_parse_floats(arguments, line_number)))
        elif keyword == "f":
            result.faces[current_group].extend(_parse_face(arguments, result, line_number))
        elif keyword == "g" and arguments:
            current_group = arguments[0]
            result.faces.setdefault(current_group, [])
        else:
            result.ignored += 1
            logger.debug("Ignoring OBJ line %d: %r", line_number, line)

    return result


def load_obj(path: str | PathLike[str]) -> ObjParseResult:
    """Read and parse an OBJ file."""
    path = Path(path)
    result = parse_obj(path.read_text(encoding="utf-8"))

    face_count = sum(len(faces) for faces in result.faces.values())
    logger.info(
        "Loaded %s: %d vertices, %d normals, %d triangles in %d groups (%d lines ignored)",
        path,
        len(result.vertices),
        len(result.normals),
        face_count,
        len(result.faces),
        result.ignored,
    )
    return result
