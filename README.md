# somarender

The CPU-side parts of a volume ray-casting renderer:

- `somarender.camera`: a camera that orbits the origin, with view, projection and
  inverse view-projection matrices, and small 4×4 matrix helpers;
- `somarender.volume`: a loader for raw voxel volumes, with or without a 16-byte header;
- `somarender.frame`: command-line argument parsing, mouse and arrow-key orbit input,
  and the 128-byte uniform block that a ray-casting shader reads on each frame.

The package has no runtime dependencies. It needs Python 3.10 or later.

## Camera

```python
from somarender.camera import Camera, mat4_invert, mat4_multiply

camera = Camera()          # distance 2.5, azimuth 0.0, elevation 0.3, fov_y_rad 0.8
camera.orbit(0.1, 0.05)    # change azimuth and elevation, in radians
camera.zoom(0.5)           # move closer; the distance stays within [0.5, 20]

view, proj = camera.view_projection(1024, 768)
view_proj = mat4_multiply(proj, view)
inv_view_proj, camera_pos = camera.inv_view_proj_and_camera_pos(1024, 768)
print(camera.eye)          # world-space position of the camera
```

The camera looks at the origin with +Y as up. The elevation is clamped just short of the
poles (±(π/2 − 0.01)). A viewport height of 0 is treated as 1 when the aspect ratio is
computed.

Matrices are tuples of 16 floats. `mat4_multiply(a, b)` treats element `row * 4 + col` as
the entry at that row and column. The view matrix holds its translation in elements
12–14, and `inv_view_proj_and_camera_pos` reads the camera position from those elements of
the inverse view matrix. `mat4_identity`, `mat4_multiply` and `mat4_invert` raise
`ValueError` for a sequence that does not hold 16 elements. `mat4_invert` returns the
identity for a matrix whose determinant is below 1e-8 in magnitude.

## Volumes

```python
from somarender.volume import VolumeError, load_raw, load_raw_with_header

try:
    volume = load_raw("assets/volume.raw", 256, 256, 256, False)
except VolumeError as exc:
    print(f"could not load volume: {exc}")
else:
    meta = volume.metadata
    print(meta.width, meta.height, meta.depth, meta.is_16bit, meta.voxel_count)
    voxels = volume.to_r8()   # one byte per voxel; 16-bit data keeps its high byte
```

`load_raw(path, width, height, depth, bits16=False)` expects a file that holds exactly
`width * height * depth` voxels, at one byte each, or at two bytes each when `bits16` is
true.

`load_raw_with_header(path)` reads a 16-byte little-endian header before the voxels. The
header holds three `uint32` dimensions and a `uint32` bit depth; a value of 16 means
16-bit little-endian samples, and any other value means 8-bit samples. The rest of the
file must hold exactly the voxels that the header describes.

`VolumeError` is raised when a file cannot be read, is too short for its header, or has
the wrong size. `Volume.to_r8()` also raises it when the volume holds no data.

## Per-frame state

```python
from somarender.camera import Camera
from somarender.frame import OrbitInput, build_uniforms, parse_args
from somarender.volume import load_raw

args = parse_args(["assets/volume.raw", "128", "128", "64"])
volume = load_raw(args.volume_path, args.width, args.height, args.depth, False)

camera = Camera()
orbit = OrbitInput()
# On each frame, feed the mouse button, cursor position and arrow-key state.
orbit.update(camera, True, 512.0, 384.0, key_up=False, key_down=False)

params = build_uniforms(camera, 1024, 768, volume.metadata, 0.002)
block = params.pack()   # 128 bytes, little-endian
```

`parse_args(argv=None)` reads `sys.argv[1:]` when no list is given. It takes
`[path [width height depth]]` and returns a `RenderArgs`. The defaults are
`assets/volume.raw` and 256×256×256. The dimensions are read only when all three are given.
They are parsed from their leading digits, so text that does not start with a number gives 0.

`OrbitInput.update` orbits the camera by 0.01 radians per pixel while the button stays
held between frames. The horizontal drag changes the azimuth and the vertical drag changes
the elevation. `key_up` zooms in by 0.1 and `key_down` zooms out by 0.1 on each call.

`UniformParams.pack()` lays out the inverse view-projection matrix (16 floats), the camera
position (3 floats and 4 bytes of padding), the resolution (2 floats and 8 bytes of
padding), the volume size (3 floats), the step size (1 float) and 16 bytes of tail
padding. The result is 128 bytes. `pack` raises `ValueError` if `inv_view_proj` does not
hold 16 values.

## What it does not do

This package opens no window, talks to no GPU and does no ray casting itself. It has no
shaders and no command to run. It prepares the camera matrices, the voxel bytes and the
uniform block for a renderer that you supply.