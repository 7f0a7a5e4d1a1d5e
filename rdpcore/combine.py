"""Color combiner setup: input selection, lookup tables and equations."""

from __future__ import annotations

from .state import ONE, ZERO, Ref, RdpState

RefTriple = tuple[Ref, Ref, Ref]


def _rgb(name: str) -> RefTriple:
    return Ref(name, "r"), Ref(name, "g"), Ref(name, "b")


def _same(ref: Ref) -> RefTriple:
    return ref, ref, ref


_COMMON_RGB = (
    _rgb("combined_color"),
    _rgb("texel0_color"),
    _rgb("texel1_color"),
    _rgb("prim_color"),
    _rgb("shade_color"),
    _rgb("env_color"),
)

_SUBA_RGB = _COMMON_RGB + (_same(ONE), _same(Ref("noise"))) + (_same(ZERO),) * 8
_SUBB_RGB = _COMMON_RGB + (_rgb("key_center"), _same(Ref("k4"))) + (_same(ZERO),) * 8
_MUL_RGB = (
    _COMMON_RGB
    + (_rgb("key_scale"),)
    + tuple(
        _same(Ref(name, "a"))
        for name in (
            "combined_color",
            "texel0_color",
            "texel1_color",
            "prim_color",
            "shade_color",
            "env_color",
        )
    )
    + (
        _same(Ref("lod_frac")),
        _same(Ref("primitive_lod_frac")),
        _same(Ref("k5")),
    )
    + (_same(ZERO),) * 16
)
_ADD_RGB = _COMMON_RGB + (_same(ONE), _same(ZERO))

_SUB_ALPHA = (
    Ref("combined_color", "a"),
    Ref("texel0_color", "a"),
    Ref("texel1_color", "a"),
    Ref("prim_color", "a"),
    Ref("shade_color", "a"),
    Ref("env_color", "a"),
    ONE,
    ZERO,
)
_MUL_ALPHA = (
    Ref("lod_frac"),
    Ref("texel0_color", "a"),
    Ref("texel1_color", "a"),
    Ref("prim_color", "a"),
    Ref("shade_color", "a"),
    Ref("env_color", "a"),
    Ref("primitive_lod_frac"),
    ZERO,
)


def suba_rgb_input(code: int) -> RefTriple:
    """Return the (r, g, b) inputs of the RGB subtract-A selector ``code``."""
    return _SUBA_RGB[code & 0xF]


def subb_rgb_input(code: int) -> RefTriple:
    """Return the (r, g, b) inputs of the RGB subtract-B selector ``code``."""
    return _SUBB_RGB[code & 0xF]


def mul_rgb_input(code: int) -> RefTriple:
    """Return the (r, g, b) inputs of the RGB multiply selector ``code``."""
    return _MUL_RGB[code & 0x1F]


def add_rgb_input(code: int) -> RefTriple:
    """Return the (r, g, b) inputs of the RGB add selector ``code``."""
    return _ADD_RGB[code & 0x7]


def sub_alpha_input(code: int) -> Ref:
    """Return the input of an alpha subtract or add selector ``code``."""
    return _SUB_ALPHA[code & 0x7]


def mul_alpha_input(code: int) -> Ref:
    """Return the input of the alpha multiply selector ``code``."""
    return _MUL_ALPHA[code & 0x7]


def clamp_9bit(value: int) -> int:
    """Clamp a 9-bit combiner value to 0..0xff (overflow saturates, underflow is 0)."""
    value &= 0x1FF
    top = (value >> 7) & 3
    if top == 2:
        return 0xFF
    if top == 3:
        return 0
    return value & 0xFF


def extend_9bit(value: int) -> int:
    """Sign-extend a 9-bit combiner value whose two top bits are both set."""
    value &= 0x1FF
    if (value & 0x180) == 0x180:
        return value - 0x200
    return value


def _signf9(value: int) -> int:
    return value | -(value & 0x100)


def color_combiner_equation(a: int, b: int, c: int, d: int) -> int:
    """Compute ``(a - b) * c + d`` in the combiner's 17-bit fixed point."""
    diff = extend_9bit(a) - extend_9bit(b)
    result = diff * _signf9(c) + (extend_9bit(d) << 8) + 0x80
    return result & 0x1FFFF


def alpha_combiner_equation(a: int, b: int, c: int, d: int) -> int:
    """Compute ``(a - b) * c + d`` for alpha, returning a 9-bit value."""
    diff = extend_9bit(a) - extend_9bit(b)
    result = (diff * _signf9(c) + (extend_9bit(d) << 8) + 0x80) >> 8
    return result & 0x1FF


_RGB_SLOTS = (
    "combiner_rgbsub_a",
    "combiner_rgbsub_b",
    "combiner_rgbmul",
    "combiner_rgbadd",
)
_ALPHA_SLOTS = (
    "combiner_alphasub_a",
    "combiner_alphasub_b",
    "combiner_alphamul",
    "combiner_alphaadd",
)


def combiner_init(state: RdpState) -> None:
    """Point every combiner input of both cycles at the constant one."""
    for slot in _RGB_SLOTS:
        for channel in "rgb":
            getattr(state, f"{slot}_{channel}")[:] = [ONE, ONE]
    for slot in _ALPHA_SLOTS:
        getattr(state, slot)[:] = [ONE, ONE]


def _assign_rgb(state: RdpState, slot: str, cycle: int, refs: RefTriple) -> None:
    for channel, ref in zip("rgb", refs):
        getattr(state, f"{slot}_{channel}")[cycle] = ref


def set_prim_color(state: RdpState, args) -> None:
    """Handle the set-primitive-color command."""
    state.min_level = (args[0] >> 8) & 0x1F
    state.primitive_lod_frac = args[0] & 0xFF
    state.prim_color.set_rgba32(args[1])


def set_env_color(state: RdpState, args) -> None:
    """Handle the set-environment-color command."""
    state.env_color.set_rgba32(args[1])


def set_combine(state: RdpState, args) -> None:
    """Handle the set-combine command: decode selectors and wire the inputs."""
    w0, w1 = args[0], args[1]
    c = state.combine
    c.sub_a_rgb0 = (w0 >> 20) & 0xF
    c.mul_rgb0 = (w0 >> 15) & 0x1F
    c.sub_a_a0 = (w0 >> 12) & 0x7
    c.mul_a0 = (w0 >> 9) & 0x7
    c.sub_a_rgb1 = (w0 >> 5) & 0xF
    c.mul_rgb1 = w0 & 0x1F

    c.sub_b_rgb0 = (w1 >> 28) & 0xF
    c.sub_b_rgb1 = (w1 >> 24) & 0xF
    c.sub_a_a1 = (w1 >> 21) & 0x7
    c.mul_a1 = (w1 >> 18) & 0x7
    c.add_rgb0 = (w1 >> 15) & 0x7
    c.sub_b_a0 = (w1 >> 12) & 0x7
    c.add_a0 = (w1 >> 9) & 0x7
    c.add_rgb1 = (w1 >> 6) & 0x7
    c.sub_b_a1 = (w1 >> 3) & 0x7
    c.add_a1 = w1 & 0x7

    for cycle in (0, 1):
        _assign_rgb(state, "combiner_rgbsub_a", cycle,
                    suba_rgb_input(getattr(c, f"sub_a_rgb{cycle}")))
        _assign_rgb(state, "combiner_rgbsub_b", cycle,
                    subb_rgb_input(getattr(c, f"sub_b_rgb{cycle}")))
        _assign_rgb(state, "combiner_rgbmul", cycle,
                    mul_rgb_input(getattr(c, f"mul_rgb{cycle}")))
        _assign_rgb(state, "combiner_rgbadd", cycle,
                    add_rgb_input(getattr(c, f"add_rgb{cycle}")))
        state.combiner_alphasub_a[cycle] = sub_alpha_input(getattr(c, f"sub_a_a{cycle}"))
        state.combiner_alphasub_b[cycle] = sub_alpha_input(getattr(c, f"sub_b_a{cycle}"))
        state.combiner_alphamul[cycle] = mul_alpha_input(getattr(c, f"mul_a{cycle}"))
        state.combiner_alphaadd[cycle] = sub_alpha_input(getattr(c, f"add_a{cycle}"))

    state.other_modes.f.stalederivs = 1


def set_key_gb(state: RdpState, args) -> None:
    """Handle the set-key-GB command."""
    state.key_width.g = (args[0] >> 12) & 0xFFF
    state.key_width.b = args[0] & 0xFFF
    state.key_center.g = (args[1] >> 24) & 0xFF
    state.key_scale.g = (args[1] >> 16) & 0xFF
    state.key_center.b = (args[1] >> 8) & 0xFF
    state.key_scale.b = args[1] & 0xFF


def set_key_r(state: RdpState, args) -> None:
    """Handle the set-key-R command."""
    state.key_width.r = (args[1] >> 16) & 0xFFF
    state.key_center.r = (args[1] >> 8) & 0xFF
    state.key_scale.r = args[1] & 0xFF