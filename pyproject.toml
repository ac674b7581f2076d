[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "modelgen"
version = "0.1.0"
description = "Generate simple 3D models (cubes, spheres, cylinders), transform them and export to OBJ, STL and glTF"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "mesh", "obj", "stl", "gltf", "model", "geometry", "export"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
model-generator = "modelgen.cli:main"
doc-generator = "modelgen.docgen:main"

[tool.hatch.build.targets.wheel]
packages = ["modelgen"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
