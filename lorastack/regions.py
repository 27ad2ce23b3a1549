"""Regional parameters, frame headers and LinkADRReq decoding.

Each supported region has its own beacon frame layout, beacon channel and
airtime, and may or may not honour TxParamSetupReq. The AU915 band plan is
US-like and also fixes the data rates used for 500 kHz channels and joins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .lorabase import (
    HDR_FTYPE,
    HDR_FTYPE_DAUP,
    HDR_FTYPE_DADN,
    HDR_FTYPE_DCDN,
    HDR_FTYPE_DCUP,
    HDR_FTYPE_DNFLAG,
    HDR_FTYPE_JACC,
    HDR_FTYPE_JREQ,
    HDR_FTYPE_PROP,
    LORAWAN_DR2,
    LORAWAN_DR6,
    MCMD_LINK_ADR_REQ_CHMASKCNTL_MASK,
    MCMD_LINK_ADR_REQ_DR_MASK,
    MCMD_LINK_ADR_REQ_DR_SHIFT,
    MCMD_LINK_ADR_REQ_NBTRANS_MASK,
    MCMD_LINK_ADR_REQ_POW_MASK,
    MCMD_LINK_ADR_REQ_POW_SHIFT,
    MCMD_LINK_ADR_REQ_REDUNDANCY_RFU,
)

__all__ = [
    "BeaconLayout",
    "RegionInfo",
    "FrameType",
    "LinkAdrRequest",
    "region_info",
    "frame_type",
    "is_downlink",
    "decode_link_adr_req",
]


@dataclass(frozen=True)
class BeaconLayout:
    """Byte offsets of the fields in a region's beacon frame."""

    netid: int
    time: int
    crc1: int
    info: int
    lat: int
    lon: int
    crc2: int
    length: int
    rfu1: Optional[int] = None


@dataclass(frozen=True)
class RegionInfo:
    """Fixed parameters of one regional band plan."""

    name: str
    beacon_channel: int
    beacon_airtime_us: int
    beacon: BeaconLayout
    tx_param_setup_req: bool
    first_500khz_dr: Optional[int] = None
    join_125khz_dr: Optional[int] = None
    initial_join_dr: Optional[int] = None


class FrameType(IntEnum):
    """Frame type field of the MAC header (bits 7..5)."""

    JOIN_REQUEST = HDR_FTYPE_JREQ
    JOIN_ACCEPT = HDR_FTYPE_JACC
    DATA_UNCONFIRMED_UP = HDR_FTYPE_DAUP
    DATA_UNCONFIRMED_DOWN = HDR_FTYPE_DADN
    DATA_CONFIRMED_UP = HDR_FTYPE_DCUP
    DATA_CONFIRMED_DOWN = HDR_FTYPE_DCDN
    PROPRIETARY = HDR_FTYPE_PROP


@dataclass(frozen=True)
class LinkAdrRequest:
    """Decoded fields of a LinkADRReq MAC command.

    ``chmask_cntl`` is kept in place (bits 6..4 of the redundancy octet), as
    the channel-page constants are defined that way.
    """

    data_rate: int
    tx_power: int
    chmask: int
    chmask_cntl: int
    nb_trans: int
    rfu: bool


_EU_BEACON = BeaconLayout(
    netid=0, time=3, crc1=7, info=8, lat=9, lon=12, crc2=15, length=17
)
_US_BEACON = BeaconLayout(
    netid=0, time=3, crc1=7, info=9, lat=10, lon=13, crc2=17, length=19, rfu1=16
)
_AS_BEACON = BeaconLayout(
    netid=0, time=2, crc1=6, info=8, lat=9, lon=12, crc2=15, length=17
)
_IN_BEACON = BeaconLayout(
    netid=0, time=1, crc1=5, info=7, lat=8, lon=11, crc2=17, length=19
)

_REGIONS: dict[str, RegionInfo] = {
    "eu868": RegionInfo(
        name="eu868",
        beacon_channel=5,
        beacon_airtime_us=144384,
        beacon=_EU_BEACON,
        tx_param_setup_req=False,
    ),
    "us915": RegionInfo(
        name="us915",
        beacon_channel=0,
        beacon_airtime_us=72192,
        beacon=_US_BEACON,
        tx_param_setup_req=False,
    ),
    "au915": RegionInfo(
        name="au915",
        beacon_channel=0,
        beacon_airtime_us=72192,
        beacon=_US_BEACON,
        tx_param_setup_req=True,
        first_500khz_dr=LORAWAN_DR6,
        join_125khz_dr=LORAWAN_DR2,
        initial_join_dr=LORAWAN_DR2,
    ),
    "as923": RegionInfo(
        name="as923",
        beacon_channel=5,
        beacon_airtime_us=144384,
        beacon=_AS_BEACON,
        tx_param_setup_req=True,
    ),
    "kr920": RegionInfo(
        name="kr920",
        beacon_channel=11,
        beacon_airtime_us=144384,
        beacon=_AS_BEACON,
        tx_param_setup_req=False,
    ),
    "in866": RegionInfo(
        name="in866",
        beacon_channel=5,
        beacon_airtime_us=144384,
        beacon=_IN_BEACON,
        tx_param_setup_req=False,
    ),
}


def region_info(name: str) -> RegionInfo:
    """Return the parameters of the region called *name* (case-insensitive)."""
    try:
        return _REGIONS[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(_REGIONS))
        raise ValueError(f"unsupported region {name!r}; known: {known}") from None


def _check_octet(value: int, what: str) -> int:
    value = int(value)
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{what} must be in 0..255, got {value}")
    return value


def frame_type(header: int) -> FrameType:
    """Return the frame type encoded in a MAC header octet.

    Raises ValueError for the reserved type 0xC0.
    """
    header = _check_octet(header, "header")
    ftype = header & HDR_FTYPE
    try:
        return FrameType(ftype)
    except ValueError:
        raise ValueError(f"reserved frame type 0x{ftype:02X}") from None


def is_downlink(header: int) -> bool:
    """Return True if the MAC header marks a network-to-device frame.

    Proprietary frames carry no direction and are never reported as downlink.
    """
    header = _check_octet(header, "header")
    if header & HDR_FTYPE == HDR_FTYPE_PROP:
        return False
    return bool(header & HDR_FTYPE_DNFLAG)


def decode_link_adr_req(dr_pow: int, chmask: int, redundancy: int) -> LinkAdrRequest:
    """Split the three fields of a LinkADRReq payload into their parts."""
    dr_pow = _check_octet(dr_pow, "dr_pow")
    redundancy = _check_octet(redundancy, "redundancy")
    chmask = int(chmask)
    if not 0 <= chmask <= 0xFFFF:
        raise ValueError(f"chmask must be in 0..0xFFFF, got {chmask}")
    return LinkAdrRequest(
        data_rate=(dr_pow & MCMD_LINK_ADR_REQ_DR_MASK) >> MCMD_LINK_ADR_REQ_DR_SHIFT,
        tx_power=(dr_pow & MCMD_LINK_ADR_REQ_POW_MASK) >> MCMD_LINK_ADR_REQ_POW_SHIFT,
        chmask=chmask,
        chmask_cntl=redundancy & MCMD_LINK_ADR_REQ_CHMASKCNTL_MASK,
        nb_trans=redundancy & MCMD_LINK_ADR_REQ_NBTRANS_MASK,
        rfu=bool(redundancy & MCMD_LINK_ADR_REQ_REDUNDANCY_RFU),
    )