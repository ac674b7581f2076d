"""Command-line generator for primitive models, plus a small directory helper."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .gltf import export_gltf
from .mesh import Model, Vec3
from .obj import export_obj
from .shapes import Cube, Cylinder, Sphere
from .stl import export_stl
from .transforms import Rotate, Scale, Translate

PathLike = Union[str, "os.PathLike[str]"]

_FLOAT_RE = re.compile(
    r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_COUNT_RE = re.compile(r"\+?\d+")

USAGE = """\
3D Model Generator CLI
Usage: modelgen SHAPE [OPTIONS] OUTPUT_FILE

Shapes:
  cube      Generate a cube
  sphere    Generate a sphere
  cylinder  Generate a cylinder

Options for cube:
  --size SIZE              Set cube size (default: 1.0)
  --center X,Y,Z           Set center position (default: 0,0,0)

Options for sphere:
  --radius RADIUS          Set radius (default: 1.0)
  --segments SEGMENTS      Set number of segments (default: 32)
  --rings RINGS            Set number of rings (default: 16)
  --center X,Y,Z           Set center position (default: 0,0,0)

Options for cylinder:
  --radius RADIUS          Set radius (default: 1.0)
  --height HEIGHT          Set height (default: 2.0)
  --segments SEGMENTS      Set number of segments (default: 32)
  --center X,Y,Z           Set center position (default: 0,0,0)
  --no-caps                Remove end caps

Common options:
  --scale X,Y,Z            Apply scaling (default: 1,1,1)
  --rotate AXIS,DEGREES    Apply rotation (e.g., y,45)
  --translate X,Y,Z        Apply translation

Output formats are determined by file extension:
  .obj     Wavefront OBJ format
  .stl     STL format
  .gltf    glTF format"""


class ExportError(Exception):
    """Raised when a model cannot be written to the requested file."""


def _parse_float(text: str) -> Optional[float]:
    if _FLOAT_RE.fullmatch(text) is None:
        return None
    return float(text)


def _float_or(default: float) -> Callable[[str], float]:
    def parse(text: str) -> float:
        value = _parse_float(text)
        return default if value is None else value

    return parse


def _count_or(default: int) -> Callable[[str], int]:
    def parse(text: str) -> int:
        return int(text) if _COUNT_RE.fullmatch(text) else default

    return parse


def _vector_or(default: Vec3) -> Callable[[str], Vec3]:
    def parse(text: str) -> Vec3:
        value = parse_vector3(text)
        return default if value is None else value

    return parse


def parse_vector3(text: str) -> Optional[Vec3]:
    """Parse ``X,Y,Z`` into three floats, or return None if it is malformed."""
    parts = text.split(",")
    if len(parts) != 3:
        return None
    values = [_parse_float(part) for part in parts]
    if any(v is None for v in values):
        return None
    x, y, z = values
    return (x, y, z)  # type: ignore[return-value]


def parse_rotation(text: str) -> Optional[Tuple[str, float]]:
    """Parse ``AXIS,DEGREES`` with AXIS one of x, y, z; None if it is malformed."""
    parts = text.split(",")
    if len(parts) != 2:
        return None
    axis = parts[0].lower()
    if axis not in ("x", "y", "z"):
        return None
    angle = _parse_float(parts[1])
    if angle is None:
        return None
    return axis, angle


_COMMON_OPTIONS: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "--scale": ("scale", _vector_or((1.0, 1.0, 1.0))),
    "--rotate": ("rotate", parse_rotation),
    "--translate": ("translate", _vector_or((0.0, 0.0, 0.0))),
}


@dataclass
class _ShapeSpec:
    factory: Callable[..., Any]
    defaults: Dict[str, Any]
    options: Dict[str, Tuple[str, Callable[[str], Any]]]
    flags: Dict[str, Tuple[str, Any]] = field(default_factory=dict)


_SHAPES: Dict[str, _ShapeSpec] = {
    "cube": _ShapeSpec(
        Cube,
        {"size": 1.0, "center": (0.0, 0.0, 0.0)},
        {
            "--size": ("size", _float_or(1.0)),
            "--center": ("center", _vector_or((0.0, 0.0, 0.0))),
        },
    ),
    "sphere": _ShapeSpec(
        Sphere,
        {"radius": 1.0, "segments": 32, "rings": 16, "center": (0.0, 0.0, 0.0)},
        {
            "--radius": ("radius", _float_or(1.0)),
            "--segments": ("segments", _count_or(32)),
            "--rings": ("rings", _count_or(16)),
            "--center": ("center", _vector_or((0.0, 0.0, 0.0))),
        },
    ),
    "cylinder": _ShapeSpec(
        Cylinder,
        {"radius": 1.0, "height": 2.0, "segments": 32, "center": (0.0, 0.0, 0.0), "caps": True},
        {
            "--radius": ("radius", _float_or(1.0)),
            "--height": ("height", _float_or(2.0)),
            "--segments": ("segments", _count_or(32)),
            "--center": ("center", _vector_or((0.0, 0.0, 0.0))),
        },
        {"--no-caps": ("caps", False)},
    ),
}

_EXPORTERS: Dict[str, Tuple[str, Callable[[Model, Path], None]]] = {
    ".obj": ("OBJ", export_obj),
    ".stl": ("STL", export_stl),
    ".gltf": ("glTF", export_gltf),
}


def export_model(model: Model, path: PathLike) -> None:
    """Write the model in the format chosen by the file extension.

    Raises ExportError for an unsupported extension or a failed write.
    """
    target = Path(path)
    entry = _EXPORTERS.get(target.suffix)
    if entry is None:
        raise ExportError(
            f"Unsupported file format: {os.fspath(path)}\n"
            "Supported formats: .obj, .stl, .gltf"
        )
    label, exporter = entry
    try:
        exporter(model, target)
    except OSError as exc:
        raise ExportError(f"Error exporting to {label}: {exc}") from exc


def ensure_dirs(dirs: Iterable[PathLike]) -> List[Path]:
    """Create each missing directory, warning on stderr about any that fail.

    Returns the directories that were created.
    """
    created: List[Path] = []
    for entry in dirs:
        path = Path(entry)
        if path.exists():
            continue
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            print(f"warning: Failed to create directory {os.fspath(entry)}: {exc}", file=sys.stderr)
            continue
        created.append(path)
    return created


def _parse_arguments(args: Sequence[str], spec: _ShapeSpec) -> Tuple[Dict[str, Any], Optional[str]]:
    settings: Dict[str, Any] = dict(spec.defaults)
    settings.update(scale=None, rotate=None, translate=None)
    options = {**spec.options, **_COMMON_OPTIONS}
    output: Optional[str] = None

    remaining = iter(args)
    for arg in remaining:
        if arg in options:
            value = next(remaining, None)
            if value is None:
                continue
            key, parse = options[arg]
            settings[key] = parse(value)
        elif arg in spec.flags:
            key, flag_value = spec.flags[arg]
            settings[key] = flag_value
        else:
            output = arg
    return settings, output


_ROTATIONS = {"x": Rotate.around_x, "y": Rotate.around_y, "z": Rotate.around_z}


def _build(spec: _ShapeSpec, settings: Dict[str, Any]) -> Model:
    model = spec.factory(**{key: settings[key] for key in spec.defaults}).build()
    if settings["scale"] is not None:
        model.apply(Scale(*settings["scale"]))
    if settings["rotate"] is not None:
        axis, angle = settings["rotate"]
        model.apply(_ROTATIONS[axis](angle))
    if settings["translate"] is not None:
        model.apply(Translate(*settings["translate"]))
    return model


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the model generator and return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE)
        return 1

    shape, rest = args[0], args[1:]
    if shape in ("help", "--help", "-h"):
        print(USAGE)
        return 0

    spec = _SHAPES.get(shape)
    if spec is None:
        print(f"Unknown shape: {shape}", file=sys.stderr)
        print(USAGE)
        return 1

    settings, output = _parse_arguments(rest, spec)
    try:
        model = _build(spec, settings)
    except ValueError as exc:
        print(f"Invalid {shape} parameters: {exc}", file=sys.stderr)
        return 1

    if output is None:
        print("No output file specified", file=sys.stderr)
        return 1

    try:
        export_model(model, output)
    except ExportError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(f"Model exported to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())