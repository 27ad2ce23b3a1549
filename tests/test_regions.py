import pytest

from lorastack.regions import (
    FrameType,
    decode_link_adr_req,
    frame_type,
    is_downlink,
    region_info,
)

ALL_REGIONS = ["eu868", "us915", "au915", "as923", "kr920", "in866"]


def test_eu868_beacon_layout():
    info = region_info("eu868")
    assert info.beacon.crc1 == 7
    assert info.beacon.length == 17
    assert info.beacon.rfu1 is None
    assert info.beacon_channel == 5
    assert info.beacon_airtime_us == 144384
    assert info.tx_param_setup_req is False


def test_us915_beacon_layout():
    info = region_info("us915")
    assert info.beacon.info == 9
    assert info.beacon.rfu1 == 16
    assert info.beacon.length == 19
    assert info.beacon_airtime_us == 72192


def test_au915_band_plan_data_rates():
    info = region_info("au915")
    assert info.first_500khz_dr == 6
    assert info.join_125khz_dr == 2
    assert info.initial_join_dr == 2
    assert info.tx_param_setup_req is True
    assert info.beacon == region_info("us915").beacon


def test_kr920_shares_as923_layout():
    assert region_info("kr920").beacon == region_info("as923").beacon
    assert region_info("kr920").beacon_channel == 11


def test_in866_layout():
    beacon = region_info("in866").beacon
    assert beacon.time == 1
    assert beacon.crc1 == 5
    assert beacon.crc2 == 17


def test_lookup_is_case_insensitive():
    assert region_info("AU915") == region_info("au915")


def test_unknown_region_raises():
    with pytest.raises(ValueError):
        region_info("xx000")


@pytest.mark.parametrize("name", ALL_REGIONS)
def test_beacon_layout_invariants(name):
    beacon = region_info(name).beacon
    assert beacon.crc2 + 2 == beacon.length
    assert beacon.time + 4 == beacon.crc1
    offsets = [beacon.netid, beacon.time, beacon.crc1, beacon.info,
               beacon.lat, beacon.lon, beacon.crc2]
    assert offsets == sorted(offsets)
    assert region_info(name).name == name


@pytest.mark.parametrize(
    "header, expected",
    [
        (0x00, FrameType.JOIN_REQUEST),
        (0x20, FrameType.JOIN_ACCEPT),
        (0x40, FrameType.DATA_UNCONFIRMED_UP),
        (0x60, FrameType.DATA_UNCONFIRMED_DOWN),
        (0x80, FrameType.DATA_CONFIRMED_UP),
        (0xA0, FrameType.DATA_CONFIRMED_DOWN),
        (0xE0, FrameType.PROPRIETARY),
        (0x43, FrameType.DATA_UNCONFIRMED_UP),
    ],
)
def test_frame_type(header, expected):
    assert frame_type(header) is expected


def test_reserved_frame_type_raises():
    with pytest.raises(ValueError):
        frame_type(0xC0)


def test_frame_type_out_of_range():
    with pytest.raises(ValueError):
        frame_type(0x100)


@pytest.mark.parametrize("header", [0x20, 0x60, 0xA0])
def test_downlink_types(header):
    assert is_downlink(header) is True


@pytest.mark.parametrize("header", [0x00, 0x40, 0x80, 0xE0])
def test_uplink_and_proprietary_types(header):
    assert is_downlink(header) is False


def test_decode_link_adr_req_fields():
    req = decode_link_adr_req(0x53, 0x00FF, 0x61)
    assert req.data_rate == 5
    assert req.tx_power == 3
    assert req.chmask == 0x00FF
    assert req.chmask_cntl == 0x60
    assert req.nb_trans == 1
    assert req.rfu is False


def test_decode_link_adr_req_rfu_and_bank():
    req = decode_link_adr_req(0x00, 0x0002, 0xD0)
    assert req.rfu is True
    assert req.chmask_cntl == 0x50
    assert req.nb_trans == 0


@pytest.mark.parametrize(
    "args", [(0x100, 0, 0), (0, 0x10000, 0), (0, 0, -1), (0, -1, 0)]
)
def test_decode_link_adr_req_rejects_out_of_range(args):
    with pytest.raises(ValueError):
        decode_link_adr_req(*args)