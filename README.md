# modelgen

Build simple 3D models, transform them, and write them out in common
mesh formats:

- **OBJ**: Wavefront format. An `.mtl` file is written next to it when the model has materials.
- **STL**: ASCII format. A binary writer is also available from Python.
- **glTF 2.0**: a `.gltf` JSON file next to a `.bin` buffer.

It needs nothing beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
model-generator SHAPE [OPTIONS] OUTPUT_FILE
```

Shapes: `cube`, `sphere`, `cylinder`. The extension of `OUTPUT_FILE` picks
the format: `.obj`, `.stl` or `.gltf`. The command exits with status 1 in
these cases:

- the shape is unknown
- no output file is given
- the extension is not supported
- the file cannot be written
- the shape's parameters are invalid, for example fewer than 3 segments

| Shape    | Option                | Default |
|----------|-----------------------|---------|
| cube     | `--size SIZE`         | 1.0     |
| sphere   | `--radius RADIUS`     | 1.0     |
| sphere   | `--segments N`        | 32      |
| sphere   | `--rings N`           | 16      |
| cylinder | `--radius RADIUS`     | 1.0     |
| cylinder | `--height HEIGHT`     | 2.0     |
| cylinder | `--segments N`        | 32      |
| cylinder | `--no-caps`           | caps on |
| all      | `--center X,Y,Z`      | 0,0,0   |

All shapes also accept these transformations. They are applied in this
order: scale, rotate, translate.

- `--scale X,Y,Z`
- `--rotate AXIS,DEGREES` (AXIS is `x`, `y` or `z`, for example `y,45`)
- `--translate X,Y,Z`

A malformed numeric value falls back to the option's default. A malformed
rotation is ignored. Any argument that is not an option is taken as the
output file.

Examples:

```
model-generator cube --size 2 --rotate y,45 cube.obj
model-generator sphere --radius 0.5 --segments 48 --rings 24 ball.stl
model-generator cylinder --height 3 --no-caps --translate 0,1,0 tube.gltf
model-generator help
```

## Library use

```python
from modelgen.shapes import Cube
from modelgen.transforms import Rotate, Scale
from modelgen.obj import export_obj
from modelgen.stl import export_stl
from modelgen.gltf import export_gltf

model = Cube().build()
model.apply(Scale.uniform(2.0)).apply(Rotate.around_y(45.0))

export_obj(model, "cube.obj")
export_stl(model, "cube.stl")
export_gltf(model, "cube.gltf")   # also writes cube.bin
```

The modules:

- `modelgen.mesh` holds the data types `Model`, `Mesh`, `Vertex`, `Face`, `Material` and `TextureType`. `Model.apply` calls any transform with the model and returns the model, so calls can be chained.
- `modelgen.shapes` has `Cube`, `Sphere` (a UV sphere with its poles on Y) and `Cylinder` (axis along Z, with optional caps). Each one's `build()` returns a `Model`.
- `modelgen.transforms` has `Scale` (with `Scale.uniform`), `Translate` and `Rotate` (an axis and an angle in degrees, with `around_x`, `around_y` and `around_z`).
- `modelgen.obj` has `export_obj` and `export_mtl`.
- `modelgen.stl` has `export_stl`, `export_binary_stl`, `triangle_normal` and `fan_triangles`.
- `modelgen.gltf` has `export_gltf`, `buffer_size` and `index_count`. The extension is changed to `.gltf` if it is anything else.
- `modelgen.cli` has `export_model`, which picks the format from the extension and raises `ExportError`. It also has `parse_vector3`, `parse_rotation` and `ensure_dirs`.

For STL and glTF, faces with more than three corners are split into
triangles fanned from the first corner, and faces with fewer than three
corners are skipped. glTF indices are stored as unsigned 16-bit values.

## Example documentation

```
doc-generator [--promote]
```

Run this from a project root. It does the following:

- reads the package name from the first `name = ...` line of `Cargo.toml`
- builds Markdown pages for the `.rs` files in `examples/`
- writes the pages to `target/markdown-docs`, with an index at `README.md` and one page per example under `examples/`

Each page has these parts:

- a title and a description, taken from the example's leading doc comments; without them the title comes from the file name
- a usage section, taken from comment blocks that start with `USAGE:`, or else from the calls made in the example's `main` function
- the full source

With `--promote`, each page is also written next to its example file, and
the index is copied into `examples/`.

## What it does not do

- It only writes models. It cannot read OBJ, STL or glTF files.
- The shapes are limited to cube, sphere and cylinder.
- The transforms are limited to scale, translate and rotate. There are no mirror, quaternion, deformation or projection transforms.
- The command line always writes ASCII STL.