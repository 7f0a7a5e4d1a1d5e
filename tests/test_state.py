import pytest

from rdpcore.state import (
    BLENDER_ONE,
    ONE,
    ZERO,
    Color,
    CombinerInputs,
    OtherModes,
    RdpState,
    Ref,
    Tile,
)


def test_set_rgba32_splits_bytes():
    color = Color()
    color.set_rgba32(0x11223344)
    assert (color.r, color.g, color.b, color.a) == (0x11, 0x22, 0x33, 0x44)


def test_set_rgba32_ignores_high_bits():
    color = Color()
    color.set_rgba32(0x1_FFEEDDCC)
    assert (color.r, color.g, color.b, color.a) == (0xFF, 0xEE, 0xDD, 0xCC)


def test_constants_read_like_source():
    state = RdpState()
    assert state.read(ONE) == 0x100
    assert state.read(ZERO) == 0x00
    assert state.read(BLENDER_ONE) == 0xFF


def test_read_color_channel_follows_state():
    state = RdpState()
    ref = Ref("pixel_color", "g")
    state.pixel_color.g = 77
    assert state.read(ref) == 77
    state.pixel_color = Color(g=5)
    assert state.read(ref) == 5


def test_read_scalar():
    state = RdpState()
    state.lod_frac = 42
    assert state.read(Ref("lod_frac")) == 42


def test_refs_compare_by_value():
    assert Ref("memory_color", "a") == Ref("memory_color", "a")
    assert Ref("memory_color", "a") != Ref("memory_color", "r")
    assert len({Ref("noise"), Ref("noise"), ZERO}) == 2


@pytest.mark.parametrize(
    "ref",
    [Ref("nonexistent"), Ref("pixel_color"), Ref("pixel_color", "x"),
     Ref("lod_frac", "r"), Ref("one", "r"), Ref("tile", "r")],
)
def test_bad_refs_raise(ref):
    with pytest.raises(ValueError):
        RdpState().read(ref)


def test_defaults_of_input_selectors():
    state = RdpState()
    assert state.combiner_rgbmul_r == [ONE, ONE]
    assert state.combiner_alphaadd == [ONE, ONE]
    assert state.blender1a_r == [ZERO, ZERO]


def test_states_do_not_share_containers():
    first = RdpState()
    second = RdpState()
    first.combiner_rgbmul_r[0] = ZERO
    first.tmem[0] = 9
    first.tile[0].format = 3
    first.other_modes.f.dolod = 1
    assert second.combiner_rgbmul_r[0] == ONE
    assert second.tmem[0] == 0
    assert second.tile[0].format == 0
    assert second.other_modes.f.dolod == 0


def test_memory_sizes():
    state = RdpState()
    assert len(state.tmem) == 0x1000
    assert len(state.cvgbuf) == 1024
    assert len(state.tile) == 8
    assert all(isinstance(t, Tile) for t in state.tile)


def test_mode_records_start_cleared():
    modes = OtherModes()
    inputs = CombinerInputs()
    assert modes.cycle_type == 0 and modes.f.stalederivs == 0
    assert inputs.mul_rgb1 == 0 and inputs.add_a1 == 0