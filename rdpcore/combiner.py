"""Color combiner stage: runs the combiner equations for one pixel."""

from __future__ import annotations

import copy

from .combine import (
    alpha_combiner_equation,
    clamp_9bit,
    color_combiner_equation,
    extend_9bit,
)
from .state import ZERO, Color, RdpState

_CHANNELS = "rgb"


def _sign17(value: int) -> int:
    return (value & 0x1FFFF) | -(value & 0x10000)


def _key_channel(value: int, width: int) -> int:
    key = _sign17(value)
    if key > 0:
        key = -key + 0x10 if (key & 0xF) == 8 else -key
    return (width << 4) + key


def chroma_key_min(state: RdpState, color: Color) -> int:
    """Return the chroma-key alpha for an unshifted combined ``color``."""
    width = state.key_width
    keyalpha = min(
        _key_channel(color.r, width.r),
        _key_channel(color.g, width.g),
        _key_channel(color.b, width.b),
    )
    return max(0, min(keyalpha, 0xFF))


def _combine(state: RdpState, cycle: int) -> None:
    """Evaluate the combiner equations of ``cycle`` into ``combined_color``."""
    read = state.read
    combined = state.combined_color
    if state.combiner_rgbmul_r[cycle] != ZERO:
        for ch in _CHANNELS:
            value = color_combiner_equation(
                read(getattr(state, f"combiner_rgbsub_a_{ch}")[cycle]),
                read(getattr(state, f"combiner_rgbsub_b_{ch}")[cycle]),
                read(getattr(state, f"combiner_rgbmul_{ch}")[cycle]),
                read(getattr(state, f"combiner_rgbadd_{ch}")[cycle]),
            )
            setattr(combined, ch, value)
    else:
        for ch in _CHANNELS:
            add = read(getattr(state, f"combiner_rgbadd_{ch}")[cycle])
            setattr(combined, ch, ((extend_9bit(add) << 8) + 0x80) & 0x1FFFF)

    if state.combiner_alphamul[cycle] != ZERO:
        combined.a = alpha_combiner_equation(
            read(state.combiner_alphasub_a[cycle]),
            read(state.combiner_alphasub_b[cycle]),
            read(state.combiner_alphamul[cycle]),
            read(state.combiner_alphaadd[cycle]),
        )
    else:
        combined.a = extend_9bit(read(state.combiner_alphaadd[cycle])) & 0x1FF


def _shift_combined(state: RdpState) -> None:
    combined = state.combined_color
    combined.r >>= 8
    combined.g >>= 8
    combined.b >>= 8


def _chroma_bypass(state: RdpState) -> tuple[int, int, int] | None:
    if not state.other_modes.key_en:
        return None
    return (
        state.read(state.combiner_rgbsub_a_r[1]),
        state.read(state.combiner_rgbsub_a_g[1]),
        state.read(state.combiner_rgbsub_a_b[1]),
    )


def _pixel_rgb(state: RdpState, bypass: tuple[int, int, int] | None) -> int | None:
    """Set the pixel color from the combined color; return the key alpha if keying."""
    pixel = state.pixel_color
    combined = state.combined_color
    if bypass is None:
        _shift_combined(state)
        pixel.r = clamp_9bit(combined.r)
        pixel.g = clamp_9bit(combined.g)
        pixel.b = clamp_9bit(combined.b)
        return None
    keyalpha = chroma_key_min(state, combined)
    pixel.r, pixel.g, pixel.b = (clamp_9bit(v) for v in bypass)
    _shift_combined(state)
    return keyalpha


def _pixel_alpha(state: RdpState) -> None:
    alpha = clamp_9bit(state.combined_color.a)
    state.pixel_color.a = 0x100 if alpha == 0xFF else alpha


def _shade_alpha(state: RdpState, adseed: int) -> None:
    value = state.shade_color.a + adseed
    state.blender_shade_alpha = 0xFF if value & 0x100 else value


def _finish_alpha(
    state: RdpState, adseed: int, curpixel_cvg: int, keyalpha: int | None
) -> int:
    """Apply coverage and alpha selection; return the updated coverage."""
    modes = state.other_modes
    pixel = state.pixel_color
    temp = 0
    if modes.cvg_times_alpha:
        temp = (pixel.a * curpixel_cvg + 4) >> 3
        curpixel_cvg = (temp >> 5) & 0xF

    if not modes.alpha_cvg_select:
        if keyalpha is None:
            pixel.a += adseed
            if pixel.a & 0x100:
                pixel.a = 0xFF
        else:
            pixel.a = keyalpha
    else:
        pixel.a = temp if modes.cvg_times_alpha else curpixel_cvg << 5
        if pixel.a > 0xFF:
            pixel.a = 0xFF

    _shade_alpha(state, adseed)
    return curpixel_cvg


def combiner_1cycle(state: RdpState, adseed: int, curpixel_cvg: int) -> int:
    """Run the combiner in one-cycle mode; return the updated coverage."""
    bypass = _chroma_bypass(state)
    _combine(state, 1)
    _pixel_alpha(state)
    keyalpha = _pixel_rgb(state, bypass)
    return _finish_alpha(state, adseed, curpixel_cvg, keyalpha)


def combiner_2cycle_cycle0(state: RdpState, adseed: int, cvg: int) -> int | None:
    """Run the first combiner cycle of two-cycle mode.

    Returns the alpha used by the alpha test when alpha compare is
    enabled, otherwise None.
    """
    modes = state.other_modes
    _combine(state, 0)

    acalpha = None
    if modes.alpha_compare_en:
        preacalpha = clamp_9bit(state.combined_color.a)
        if preacalpha == 0xFF:
            preacalpha = 0x100
        if not modes.alpha_cvg_select:
            preacalpha += adseed
            if preacalpha & 0x100:
                preacalpha = 0xFF
        else:
            if modes.cvg_times_alpha:
                preacalpha = (preacalpha * cvg + 4) >> 3
            else:
                preacalpha = cvg << 5
            if preacalpha > 0xFF:
                preacalpha = 0xFF
        acalpha = preacalpha

    _shift_combined(state)
    _shade_alpha(state, adseed)
    return acalpha


def combiner_2cycle_cycle1(state: RdpState, adseed: int, curpixel_cvg: int) -> int:
    """Run the second combiner cycle of two-cycle mode; return the updated coverage."""
    state.texel0_color, state.texel1_color = state.texel1_color, state.texel0_color

    bypass = _chroma_bypass(state)
    _combine(state, 1)
    keyalpha = _pixel_rgb(state, bypass)
    _pixel_alpha(state)
    curpixel_cvg = _finish_alpha(state, adseed, curpixel_cvg, keyalpha)

    state.texel1_color = copy.copy(state.nexttexel_color)
    return curpixel_cvg