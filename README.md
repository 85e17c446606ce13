# strandview

Tools for preparing strand-based hair geometry for rendering: reading and
writing HAIR files, splitting strands into strandlets, packing GPU-side
records, and the camera and transform math that goes with them.

## Modules

- `strandview.hairfile`: `HairFile` holds a `HairHeader` and the optional
  `segments`, `points`, `thickness`, `transparency` and `colors` arrays as numpy
  arrays. Which arrays exist is chosen with `HairArrays` flags through
  `set_arrays()`; `set_hair_count()` and `set_point_count()` reallocate the
  arrays that are present. `HairFile.load()` / `save()` and `from_bytes()` /
  `to_bytes()` read and write the binary format, and `directions()` returns a
  normalised tangent for every point, shape `(point_count, 3)`. Truncated data,
  a wrong signature or inconsistent arrays raise `HairFileError`.
- `strandview.hair_model`: `HairModel.load(path)` or
  `HairModel.from_hair_file(name, hair_file)` turns a HAIR file into `vec4`
  vertices, `Strand` records, `Strandlet`s of at most 32 points and
  `StrandDescription`s. `vertex_count()`, `strand_count()`, `vertex_bytes()` and
  `strand_description_bytes()` give the counts and the packed little-endian
  buffers. The model also carries a default `transform`, `diffuse` and
  `specular` colours, a `rendering_mode` and a `group_size` (strands divided by
  the workgroup size of 32).
- `strandview.hair_common`: `HairRenderingMode` with display names from
  `to_string()`, and the packed records `StrandDescription.pack()` (four int32)
  and `HairBufferAddresses.pack()` (two uint64).
- `strandview.camera`: `FirstPersonCamera` builds right-handed `view()` and
  `projection()` matrices (depth range 0 to 1). `register_keys(pressed)` moves
  the eye for a set of `Key`s and returns `True` when `Key.ESCAPE` is pressed.
  `register_mouse(left_pressed, cursor)` steers while the button is held and
  returns the window centre to put the cursor back to. `camera_data()` returns
  a `CameraData` whose `pack()` gives the float32 uniform block.
- `strandview.transform`: `Transform` with `translate`, `scale` and `euler`
  (degrees). `model()` returns the 4x4 matrix `T @ R @ S`.
- `strandview.window`: `WindowResolutionPreset`, `resolution_preset_to_size()`
  (note that `W2560_H1440` gives 2560x1400), `ui_scale_factor()`, and
  `WindowCreateInfo.resolve_size(monitor_size)`. The last one applies the
  precedence: automatic resolution (75 % of the monitor), then the preset,
  then `width` and `height`.
- `strandview.extensions`: `find_extension()`, `find_layer()`,
  `supported_extensions()`, `supported_layers()` and `find_queue()` for
  choosing names and queue families (`QueueFlags`, `QueueFamilyProperties`,
  `QueueProperties`), plus the `RHIError` exception.
- `strandview.mathutil`: `clamp`, `acos_safe`, `asin_safe`, `sqrt_safe`,
  `is_finite`, and the sorting networks `sort2`, `sort3` and `sort4`.

## What it does not do

The package opens no window and talks to no graphics device. It does not
upload buffers, build pipelines, draw anything or show a user interface. It
prepares the data and matrices that such a renderer would consume, and it
resolves window sizes and queue choices from values you pass in.

## Installing

```
pip install .
```

## Example

```python
from strandview.hair_model import HairModel
from strandview.camera import FirstPersonCamera, Key

model = HairModel.load("wWavy.hair")
print(model.vertex_count(), model.strand_count())
vertex_blob = model.vertex_bytes()
strand_blob = model.strand_description_bytes()

camera = FirstPersonCamera((1920, 1080), (-17.0, 16.0, 144.0))
should_close = camera.register_keys({Key.W})
uniform_blob = camera.camera_data().pack()
```

## Running the tests

```
pip install .[test]
pytest
```