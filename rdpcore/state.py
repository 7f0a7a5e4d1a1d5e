"""Per-worker state of the display processor."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Ref:
    """Names a value the combiner or blender reads.

    ``name`` is a state attribute (or one of the constants ``one``,
    ``zero`` and ``blender_one``); ``channel`` picks a color component.
    """

    name: str
    channel: str | None = None


ONE = Ref("one")
ZERO = Ref("zero")
BLENDER_ONE = Ref("blender_one")

_CONSTANTS = {"one": 0x100, "zero": 0x00, "blender_one": 0xFF}
_CHANNELS = ("r", "g", "b", "a")


@dataclass
class Color:
    """An RGBA color with signed integer components."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def set_rgba32(self, value: int) -> None:
        """Load the components from a packed RGBA8888 word."""
        self.r = (value >> 24) & 0xFF
        self.g = (value >> 16) & 0xFF
        self.b = (value >> 8) & 0xFF
        self.a = value & 0xFF


@dataclass
class DerivedModes:
    """Values derived from the other modes and the combiner setup."""

    stalederivs: int = 0
    dolod: int = 0
    partialreject_1cycle: int = 0
    partialreject_2cycle: int = 0
    rgb_alpha_dither: int = 0
    realblendershiftersneeded: int = 0
    interpixelblendershiftersneeded: int = 0
    getditherlevel: int = 0
    textureuselevel0: int = 0
    textureuselevel1: int = 0


@dataclass
class OtherModes:
    """Decoded fields of the set-other-modes command."""

    cycle_type: int = 0
    persp_tex_en: int = 0
    detail_tex_en: int = 0
    sharpen_tex_en: int = 0
    tex_lod_en: int = 0
    en_tlut: int = 0
    tlut_type: int = 0
    sample_type: int = 0
    mid_texel: int = 0
    bi_lerp0: int = 0
    bi_lerp1: int = 0
    convert_one: int = 0
    key_en: int = 0
    rgb_dither_sel: int = 0
    alpha_dither_sel: int = 0
    blend_m1a_0: int = 0
    blend_m1a_1: int = 0
    blend_m1b_0: int = 0
    blend_m1b_1: int = 0
    blend_m2a_0: int = 0
    blend_m2a_1: int = 0
    blend_m2b_0: int = 0
    blend_m2b_1: int = 0
    force_blend: int = 0
    alpha_cvg_select: int = 0
    cvg_times_alpha: int = 0
    z_mode: int = 0
    cvg_dest: int = 0
    color_on_cvg: int = 0
    image_read_en: int = 0
    z_update_en: int = 0
    z_compare_en: int = 0
    antialias_en: int = 0
    z_source_sel: int = 0
    dither_alpha_en: int = 0
    alpha_compare_en: int = 0
    f: DerivedModes = field(default_factory=DerivedModes)


@dataclass
class CombinerInputs:
    """Selector codes of the color combiner for both cycles."""

    sub_a_rgb0: int = 0
    sub_b_rgb0: int = 0
    mul_rgb0: int = 0
    add_rgb0: int = 0
    sub_a_a0: int = 0
    sub_b_a0: int = 0
    mul_a0: int = 0
    add_a0: int = 0
    sub_a_rgb1: int = 0
    sub_b_rgb1: int = 0
    mul_rgb1: int = 0
    add_rgb1: int = 0
    sub_a_a1: int = 0
    sub_b_a1: int = 0
    mul_a1: int = 0
    add_a1: int = 0


@dataclass
class Tile:
    """A texture tile descriptor."""

    format: int = 0
    size: int = 0
    line: int = 0
    tmem: int = 0
    palette: int = 0
    ct: int = 0
    mt: int = 0
    cs: int = 0
    ms: int = 0
    mask_t: int = 0
    shift_t: int = 0
    mask_s: int = 0
    shift_s: int = 0
    sl: int = 0
    tl: int = 0
    sh: int = 0
    th: int = 0
    clampdiffs: int = 0
    clampdifft: int = 0
    clampens: int = 0
    clampent: int = 0
    masksclamped: int = 0
    masktclamped: int = 0
    notlutswitch: int = 0
    tlutswitch: int = 0


def _pair(ref: Ref) -> list[Ref]:
    return field(default_factory=lambda: [ref, ref])


@dataclass
class RdpState:
    """Everything one rendering worker keeps between commands."""

    stride: int = 1
    offset: int = 0

    blshifta: int = 0
    blshiftb: int = 0
    pastblshifta: int = 0
    pastblshiftb: int = 0

    other_modes: OtherModes = field(default_factory=OtherModes)

    combined_color: Color = field(default_factory=Color)
    texel0_color: Color = field(default_factory=Color)
    texel1_color: Color = field(default_factory=Color)
    nexttexel_color: Color = field(default_factory=Color)
    shade_color: Color = field(default_factory=Color)
    noise: int = 0
    noise_seed: int = 0
    primitive_count: int = 0
    primitive_lod_frac: int = 0

    pixel_color: Color = field(default_factory=Color)
    memory_color: Color = field(default_factory=Color)
    pre_memory_color: Color = field(default_factory=Color)

    tile: list[Tile] = field(default_factory=lambda: [Tile() for _ in range(8)])

    k0_tf: int = 0
    k1_tf: int = 0
    k2_tf: int = 0
    k3_tf: int = 0
    k4: int = 0
    k5: int = 0
    lod_frac: int = 0

    max_level: int = 0
    min_level: int = 0

    rseed: int = 0

    blender1a_r: list[Ref] = _pair(ZERO)
    blender1a_g: list[Ref] = _pair(ZERO)
    blender1a_b: list[Ref] = _pair(ZERO)
    blender1b_a: list[Ref] = _pair(ZERO)
    blender2a_r: list[Ref] = _pair(ZERO)
    blender2a_g: list[Ref] = _pair(ZERO)
    blender2a_b: list[Ref] = _pair(ZERO)
    blender2b_a: list[Ref] = _pair(ZERO)

    blender_shade_alpha: int = 0

    blend_color: Color = field(default_factory=Color)
    fog_color: Color = field(default_factory=Color)
    inv_pixel_color: Color = field(default_factory=Color)
    blended_pixel_color: Color = field(default_factory=Color)

    combine: CombinerInputs = field(default_factory=CombinerInputs)

    combiner_rgbsub_a_r: list[Ref] = _pair(ONE)
    combiner_rgbsub_a_g: list[Ref] = _pair(ONE)
    combiner_rgbsub_a_b: list[Ref] = _pair(ONE)
    combiner_rgbsub_b_r: list[Ref] = _pair(ONE)
    combiner_rgbsub_b_g: list[Ref] = _pair(ONE)
    combiner_rgbsub_b_b: list[Ref] = _pair(ONE)
    combiner_rgbmul_r: list[Ref] = _pair(ONE)
    combiner_rgbmul_g: list[Ref] = _pair(ONE)
    combiner_rgbmul_b: list[Ref] = _pair(ONE)
    combiner_rgbadd_r: list[Ref] = _pair(ONE)
    combiner_rgbadd_g: list[Ref] = _pair(ONE)
    combiner_rgbadd_b: list[Ref] = _pair(ONE)

    combiner_alphasub_a: list[Ref] = _pair(ONE)
    combiner_alphasub_b: list[Ref] = _pair(ONE)
    combiner_alphamul: list[Ref] = _pair(ONE)
    combiner_alphaadd: list[Ref] = _pair(ONE)

    prim_color: Color = field(default_factory=Color)
    env_color: Color = field(default_factory=Color)
    key_scale: Color = field(default_factory=Color)
    key_center: Color = field(default_factory=Color)
    key_width: Color = field(default_factory=Color)

    keyalpha: int = 0

    fb_format: int = 0
    fb_size: int = 0
    fb_width: int = 0
    fb_address: int = 0
    fill_color: int = 0

    scfield: int = 0
    sckeepodd: int = 0

    primitive_z: int = 0
    primitive_delta_z: int = 0

    ti_format: int = 0
    ti_size: int = 0
    ti_width: int = 0
    ti_address: int = 0

    cvgbuf: bytearray = field(default_factory=lambda: bytearray(1024))
    tmem: bytearray = field(default_factory=lambda: bytearray(0x1000))

    zb_address: int = 0
    pastrawdzmem: int = 0

    def read(self, ref: Ref) -> int:
        """Return the current value that ``ref`` names."""
        if ref.name in _CONSTANTS:
            if ref.channel is not None:
                raise ValueError(f"constant {ref.name!r} has no channels")
            return _CONSTANTS[ref.name]
        if ref.name.startswith("_") or not hasattr(self, ref.name):
            raise ValueError(f"unknown state value {ref.name!r}")
        target = getattr(self, ref.name)
        if ref.channel is None:
            if not isinstance(target, int):
                raise ValueError(f"{ref.name!r} needs a channel")
            return target
        if not isinstance(target, Color) or ref.channel not in _CHANNELS:
            raise ValueError(f"invalid channel {ref.channel!r} for {ref.name!r}")
        return getattr(target, ref.channel)