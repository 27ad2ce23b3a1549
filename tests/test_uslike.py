import pytest

from lorastack.lorabase import OFF_CFLIST
from lorastack.uslike import AdrState, UsLikeChannelPlan


@pytest.fixture
def plan():
    return UsLikeChannelPlan(first_500khz_dr=6, join_125khz_dr=2)


def _enabled(plan):
    return [ch for ch in range(72) if plan.is_channel_enabled(ch)]


def test_defaults_enable_all_channels(plan):
    assert _enabled(plan) == list(range(72))
    assert plan.active_channels_125khz == 64
    assert plan.active_channels_500khz == 8
    assert plan.channel_map == [0xFFFF, 0xFFFF, 0xFFFF, 0xFFFF, 0x00FF]
    assert plan.tx_channel is None


def test_enable_disable_channel_tracks_counts(plan):
    assert plan.disable_channel(3) is True
    assert plan.disable_channel(3) is False
    assert plan.is_channel_enabled(3) is False
    assert plan.active_channels_125khz == 63
    assert plan.disable_channel(70) is True
    assert plan.active_channels_500khz == 7
    assert plan.enable_channel(3) is True
    assert plan.enable_channel(3) is False
    assert plan.active_channels_125khz == 64


def test_channel_out_of_range(plan):
    with pytest.raises(ValueError):
        plan.is_channel_enabled(72)
    with pytest.raises(ValueError):
        plan.enable_channel(-1)


def test_sub_band_includes_500khz_channel(plan):
    plan.map_channels(0x50, 0x00)
    assert _enabled(plan) == []
    assert plan.enable_sub_band(1) is True
    assert _enabled(plan) == [8, 9, 10, 11, 12, 13, 14, 15, 65]
    assert plan.disable_sub_band(1) is True
    assert _enabled(plan) == []
    with pytest.raises(ValueError):
        plan.enable_sub_band(8)


@pytest.mark.parametrize(
    "chpage, chmap, expected",
    [
        (0x00, 0xFFFF, True),
        (0x30, 0x1234, True),
        (0x40, 0x00FF, True),
        (0x40, 0x0100, False),
        (0x50, 0x00FF, True),
        (0x50, 0x0100, False),
        (0x60, 0x00FF, True),
        (0x70, 0xFF00, False),
        (0x70, 0x0000, True),
        (0x80, 0x0000, False),
    ],
)
def test_can_map_channels(plan, chpage, chmap, expected):
    assert plan.can_map_channels(chpage, chmap) is expected


def test_map_bank(plan):
    assert plan.map_channels(0x50, 0x02) is True
    assert _enabled(plan) == [8, 9, 10, 11, 12, 13, 14, 15, 65]
    assert plan.active_channels_125khz == 8
    assert plan.active_channels_500khz == 1


def test_map_125off_all_disables(plan):
    assert plan.map_channels(0x70, 0x0000) is False
    assert plan.active_channels_125khz == 0
    assert plan.active_channels_500khz == 0


def test_map_125on_with_no_500(plan):
    plan.map_channels(0x70, 0x0000)
    assert plan.map_channels(0x60, 0x0000) is True
    assert _enabled(plan) == list(range(64))


def test_map_direct_page(plan):
    assert plan.map_channels(0x10, 0x0001) is True
    assert _enabled(plan) == [ch for ch in range(72) if not 17 <= ch <= 31]
    assert plan.active_channels_125khz == 49


def test_map_500k_page(plan):
    plan.map_channels(0x40, 0x0081)
    assert [ch for ch in _enabled(plan) if ch >= 64] == [64, 71]
    assert plan.active_channels_500khz == 2
    assert plan.active_channels_125khz == 64


def test_data_rate_feasibility(plan):
    plan.map_channels(0x50, 0x01)
    assert plan.is_data_rate_feasible(0) is True
    assert plan.is_data_rate_feasible(6) is True
    plan.disable_channel(0)
    assert plan.is_data_rate_feasible(0) is True
    plan.disable_channel(1)
    assert plan.is_data_rate_feasible(0) is False
    plan.disable_channel(64)
    assert plan.is_data_rate_feasible(6) is False


def _join_accept(masks, cflist_type):
    frame = bytearray(OFF_CFLIST + 16)
    for index, mask in enumerate(masks):
        frame[OFF_CFLIST + 2 * index:OFF_CFLIST + 2 * index + 2] = mask.to_bytes(2, "little")
    frame[OFF_CFLIST + 15] = cflist_type
    return bytes(frame)


def test_cflist_mask_applied(plan):
    frame = _join_accept([0x00FF, 0, 0, 0, 0x0003], 1)
    assert plan.process_join_accept_cflist(frame) is True
    assert _enabled(plan) == [0, 1, 2, 3, 4, 5, 6, 7, 64, 65]
    assert plan.active_channels_125khz == 8
    assert plan.active_channels_500khz == 2


def test_cflist_other_type_ignored(plan):
    frame = _join_accept([0, 0, 0, 0, 0], 0)
    assert plan.process_join_accept_cflist(frame) is False
    assert _enabled(plan) == list(range(72))


def test_cflist_short_frame_ignored(plan):
    assert plan.process_join_accept_cflist(bytes(OFF_CFLIST)) is False
    assert plan.active_channels_125khz == 64


def test_adr_state_round_trip(plan):
    saved = plan.save_adr_state()
    assert plan.compare_adr_state(saved) is False
    plan.map_channels(0x50, 0x04)
    assert plan.compare_adr_state(saved) is True
    plan.restore_adr_state(saved)
    assert plan.compare_adr_state(saved) is False
    assert plan.save_adr_state() == saved
    assert _enabled(plan) == list(range(72))


def test_adr_state_holds_counts(plan):
    plan.map_channels(0x50, 0x01)
    state = plan.save_adr_state()
    assert state == AdrState(
        channel_map=(0x00FF, 0, 0, 0, 0x0001),
        active_channels_125khz=8,
        active_channels_500khz=1,
    )


def test_init_default_channels_resets(plan):
    plan.map_channels(0x70, 0x0000)
    plan.tx_channel = 5
    plan.init_default_channels()
    assert _enabled(plan) == list(range(72))
    assert plan.tx_channel is None