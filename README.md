# rdpcore

A pure-Python model of the Reality Display Processor's colour combiner: the
per-worker state it reads from, the commands that configure it, and the
one-cycle and two-cycle combiner passes that produce a pixel's colour and
alpha.

## Installation

    pip install .

For the tests:

    pip install .[test]
    pytest

## Modules

### `rdpcore.state`

- `RdpState` holds everything one rendering worker keeps between commands:
  the colours (`prim_color`, `env_color`, `shade_color`, `texel0_color`,
  `pixel_color`, `combined_color`, ...), the decoded `other_modes`
  (`OtherModes`, with derived values in `DerivedModes`), the combiner
  selector codes (`CombinerInputs`), eight `Tile` descriptors, and the
  combiner and blender input selections.
- Inputs are stored as `Ref` values. A `Ref` names a state attribute and,
  for colours, a channel (`"r"`, `"g"`, `"b"`, `"a"`); the names `"one"`
  (0x100), `"zero"` (0) and `"blender_one"` (0xff) are constants.
  `RdpState.read(ref)` returns the value a `Ref` currently names and raises
  `ValueError` for an unknown name or a wrong channel.
- `Color` is an RGBA value; `Color.set_rgba32(word)` loads it from a packed
  RGBA8888 word.

### `rdpcore.combine`

- Input selection: `suba_rgb_input`, `subb_rgb_input`, `mul_rgb_input`,
  `add_rgb_input`, `sub_alpha_input` and `mul_alpha_input` map a selector
  code to the `Ref` (or `(r, g, b)` triple of `Ref`s) it picks.
- `clamp_9bit` clamps a 9-bit combiner value to 0..0xff (overflow gives
  0xff, underflow gives 0); `extend_9bit` sign-extends a 9-bit value whose
  two top bits are set.
- `color_combiner_equation(a, b, c, d)` and `alpha_combiner_equation(a, b, c, d)`
  compute `(a - b) * c + d` in the combiner's fixed-point formats (17-bit
  and 9-bit results).
- Command handlers taking the state and the two command words:
  `set_prim_color`, `set_env_color`, `set_combine`, `set_key_gb`,
  `set_key_r`. `combiner_init` points every combiner input at the constant
  one.

### `rdpcore.combiner`

- `combiner_1cycle(state, adseed, curpixel_cvg)` runs the one-cycle pass and
  returns the updated coverage.
- `combiner_2cycle_cycle0(state, adseed, cvg)` runs the first cycle of
  two-cycle mode and returns the alpha-test alpha when alpha compare is
  enabled, otherwise `None`.
- `combiner_2cycle_cycle1(state, adseed, curpixel_cvg)` runs the second
  cycle and returns the updated coverage.
- `chroma_key_min(state, color)` returns the chroma-key alpha used when
  keying is enabled.

## Example

```python
from rdpcore.state import Color, RdpState, Ref
from rdpcore.combine import set_prim_color, set_combine
from rdpcore.combiner import combiner_1cycle

state = RdpState()
set_prim_color(state, [0, 0xFF804020])

# Cycle 1: RGB multiply = zero, RGB add = primitive colour,
# alpha multiply = zero, alpha add = primitive alpha.
set_combine(state, [0x0000001F, 0x001C00C3])

coverage = combiner_1cycle(state, adseed=0, curpixel_cvg=8)
assert coverage == 8
assert state.pixel_color == Color(0xFF, 0x80, 0x40, 0x20)
assert state.read(Ref("prim_color", "g")) == 0x80
```

## What this package does not do

It models the colour combiner and the state it works on, nothing more.
There is no blender stage, no rasterizer, texture or framebuffer code, no
command decoder or dispatch table that reads a display list, no video
output, and no settings object. Callers set up `RdpState` and call the
command handlers and combiner passes themselves.