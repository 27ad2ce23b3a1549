"""Basic LoRa and LoRaWAN definitions shared by every region.

A radio parameter set ("rps") is a 16-bit value that packs the spreading
factor, bandwidth, coding rate, CRC flag and implicit-header length:

* bits 2..0: spreading factor
* bits 4..3: bandwidth (125, 250 or 500 kHz; 3 is reserved)
* bits 6..5: coding rate (4/5 .. 4/8)
* bit 7: set when the frame carries no CRC
* bits 15..8: implicit header length in bytes; 0 selects an explicit header
"""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    "CodingRate",
    "SpreadingFactor",
    "Bandwidth",
    "get_sf",
    "set_sf",
    "get_bw",
    "set_bw",
    "get_cr",
    "set_cr",
    "get_nocrc",
    "set_nocrc",
    "get_ih",
    "set_ih",
    "make_rps",
    "same_sf_bw",
    "is_faster_dr",
    "is_slower_dr",
]


class CodingRate(IntEnum):
    """LoRa forward error correction rate."""

    CR_4_5 = 0
    CR_4_6 = 1
    CR_4_7 = 2
    CR_4_8 = 3


class SpreadingFactor(IntEnum):
    """LoRa spreading factor; FSK marks the FSK modem."""

    FSK = 0
    SF7 = 1
    SF8 = 2
    SF9 = 3
    SF10 = 4
    SF11 = 5
    SF12 = 6
    SFRFU = 7


class Bandwidth(IntEnum):
    """LoRa channel bandwidth."""

    BW125 = 0
    BW250 = 1
    BW500 = 2
    BWRFU = 3


_RPS_MASK = 0xFFFF
_SF_MASK = 0x0007
_BW_SHIFT = 3
_BW_MASK = 0x0018
_CR_SHIFT = 5
_CR_MASK = 0x0060
_NOCRC_SHIFT = 7
_NOCRC_MASK = 0x0080
_IH_SHIFT = 8
_IH_MASK = 0xFF00

ILLEGAL_RPS = 0xFF

# Frame and timing parameters.
STD_PREAMBLE_LEN = 8
LEN_DEVNONCE = 2
LEN_ARTNONCE = 3
LEN_NETID = 3
DELAY_JACC1 = 5  # seconds
DELAY_DNW1 = 1  # seconds, downlink window 1
DELAY_EXTDNW2 = 1  # seconds
DELAY_JACC2 = DELAY_JACC1 + DELAY_EXTDNW2
DELAY_DNW2 = DELAY_DNW1 + DELAY_EXTDNW2
BCN_INTV_EXP = 7
BCN_INTV_SEC = 1 << BCN_INTV_EXP
BCN_INTV_MS = BCN_INTV_SEC * 1000
BCN_INTV_US = BCN_INTV_MS * 1000
BCN_RESERVE_MS = 2120
BCN_GUARD_MS = 3000
BCN_SLOT_SPAN_MS = 30
BCN_WINDOW_MS = BCN_INTV_MS - BCN_GUARD_MS - BCN_RESERVE_MS
BCN_RESERVE_US = 2120000
BCN_GUARD_US = 3000000
BCN_SLOT_SPAN_US = 30000

# Data-rate codes; there are exactly sixteen.
LORAWAN_DR0 = 0
LORAWAN_DR1 = 1
LORAWAN_DR2 = 2
LORAWAN_DR3 = 3
LORAWAN_DR4 = 4
LORAWAN_DR5 = 5
LORAWAN_DR6 = 6
LORAWAN_DR7 = 7
LORAWAN_DR8 = 8
LORAWAN_DR9 = 9
LORAWAN_DR10 = 10
LORAWAN_DR11 = 11
LORAWAN_DR12 = 12
LORAWAN_DR13 = 13
LORAWAN_DR14 = 14
LORAWAN_DR15 = 15
LORAWAN_DR_LENGTH = 16

# Join Request frame layout.
OFF_JR_HDR = 0
OFF_JR_ARTEUI = 1
OFF_JR_DEVEUI = 9
OFF_JR_DEVNONCE = 17
OFF_JR_MIC = 19
LEN_JR = 23

# Join Accept frame layout.
OFF_JA_HDR = 0
OFF_JA_ARTNONCE = 1
OFF_JA_NETID = 4
OFF_JA_DEVADDR = 7
OFF_JA_RFU = 11
OFF_JA_DLSET = 11
OFF_JA_RXDLY = 12
OFF_CFLIST = 13
LEN_JA = 17
LEN_JAEXT = 17 + 16

# CFList types carried in a Join Accept.
CFLIST_TYPE_FREQUENCIES = 0
CFLIST_TYPE_MASK = 1

# Data frame layout.
OFF_DAT_HDR = 0
OFF_DAT_ADDR = 1
OFF_DAT_FCT = 5
OFF_DAT_SEQNO = 6
OFF_DAT_OPTS = 8

# Header octet fields.
HDR_FTYPE = 0xE0
HDR_RFU = 0x1C
HDR_MAJOR = 0x03
HDR_FTYPE_DNFLAG = 0x20
HDR_FTYPE_JREQ = 0x00
HDR_FTYPE_JACC = 0x20
HDR_FTYPE_DAUP = 0x40
HDR_FTYPE_DADN = 0x60
HDR_FTYPE_DCUP = 0x80
HDR_FTYPE_DCDN = 0xA0
HDR_FTYPE_PROP = 0xE0
HDR_MAJOR_V1 = 0x00

# Frame control octet fields.
FCT_ADREN = 0x80
FCT_ADRACKREQ = 0x40
FCT_ACK = 0x20
FCT_MORE = 0x10
FCT_OPTLEN = 0x0F
FCT_CLASSB = FCT_MORE
FOPTS_LEN_MAX = 0x0F

NWKID_MASK = 0xFE000000
NWKID_BITS = 7

# MAC commands sent by the device.
MCMD_LINK_CHECK_REQ = 0x02
MCMD_LINK_ADR_ANS = 0x03
MCMD_DUTY_CYCLE_ANS = 0x04
MCMD_RX_PARAM_SETUP_ANS = 0x05
MCMD_DEV_STATUS_ANS = 0x06
MCMD_NEW_CHANNEL_ANS = 0x07
MCMD_RX_TIMING_SETUP_ANS = 0x08
MCMD_TX_PARAM_SETUP_ANS = 0x09
MCMD_DL_CHANNEL_ANS = 0x0A
MCMD_DEVICE_TIME_REQ = 0x0D
MCMD_PING_SLOT_INFO_REQ = 0x10
MCMD_PING_SLOT_CHANNEL_ANS = 0x11
MCMD_BEACON_INFO_REQ = 0x12
MCMD_BEACON_FREQ_ANS = 0x13

# MAC commands sent by the network.
MCMD_LINK_CHECK_ANS = 0x02
MCMD_LINK_ADR_REQ = 0x03
MCMD_DUTY_CYCLE_REQ = 0x04
MCMD_RX_PARAM_SETUP_REQ = 0x05
MCMD_DEV_STATUS_REQ = 0x06
MCMD_NEW_CHANNEL_REQ = 0x07
MCMD_RX_TIMING_SETUP_REQ = 0x08
MCMD_TX_PARAM_SETUP_REQ = 0x09
MCMD_DL_CHANNEL_REQ = 0x0A
MCMD_DEVICE_TIME_ANS = 0x0D
MCMD_PING_SLOT_INFO_ANS = 0x10
MCMD_PING_SLOT_CHANNEL_REQ = 0x11
MCMD_BEACON_TIMING_ANS = 0x12
MCMD_BEACON_FREQ_REQ = 0x13

MCMD_BEACON_TIMING_ANS_TUNIT = 30  # milliseconds

MCMD_LINK_ADR_ANS_RFU = 0xF8
MCMD_LINK_ADR_ANS_POWER_ACK = 0x04
MCMD_LINK_ADR_ANS_DATA_RATE_ACK = 0x02
MCMD_LINK_ADR_ANS_CHANNEL_ACK = 0x01

MCMD_RX_PARAM_SETUP_ANS_RFU = 0xF8
MCMD_RX_PARAM_SETUP_ANS_RX1_DR_OFFSET_ACK = 0x04
MCMD_RX_PARAM_SETUP_ANS_RX2_DATA_RATE_ACK = 0x02
MCMD_RX_PARAM_SETUP_ANS_CHANNEL_ACK = 0x01

MCMD_NEW_CHANNEL_ANS_RFU = 0xFC
MCMD_NEW_CHANNEL_ANS_DATA_RATE_ACK = 0x02
MCMD_NEW_CHANNEL_ANS_CHANNEL_ACK = 0x01

MCMD_RX_TIMING_SETUP_REQ_RFU = 0xF0
MCMD_RX_TIMING_SETUP_REQ_DELAY = 0x0F

MCMD_DL_CHANNEL_ANS_RFU = 0xFC
MCMD_DL_CHANNEL_ANS_FREQ_ACK = 0x02
MCMD_DL_CHANNEL_ANS_CHANNEL_ACK = 0x01

MCMD_PING_SLOT_FREQ_ANS_RFU = 0xFC
MCMD_PING_SLOT_FREQ_ANS_DATA_RATE_ACK = 0x02
MCMD_PING_SLOT_FREQ_ANS_CHANNEL_ACK = 0x01

MCMD_DEVS_EXT_POWER = 0x00
MCMD_DEVS_BATT_MIN = 0x01
MCMD_DEVS_BATT_MAX = 0xFE
MCMD_DEVS_BATT_NOINFO = 0xFF

# Redundancy octet of LinkADRReq.
MCMD_LINK_ADR_REQ_REDUNDANCY_RFU = 0x80
MCMD_LINK_ADR_REQ_CHMASKCNTL_MASK = 0x70
MCMD_LINK_ADR_REQ_NBTRANS_MASK = 0x0F
MCMD_LINK_ADR_REQ_CHMASKCNTL_EULIKE_DIRECT = 0x00
MCMD_LINK_ADR_REQ_CHMASKCNTL_EULIKE_ALL_ON = 0x60
MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_500K = 0x40
MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_SPECIAL = 0x50
MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_BANK = 0x50
MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_125ON = 0x60
MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_125OFF = 0x70
MCMD_LINK_ADR_REQ_CHMASKCNTL_CN470_ALL_ON = 0x60

# First octet of LinkADRReq.
MCMD_LINK_ADR_REQ_DR_MASK = 0xF0
MCMD_LINK_ADR_REQ_POW_MASK = 0x0F
MCMD_LINK_ADR_REQ_DR_SHIFT = 4
MCMD_LINK_ADR_REQ_POW_SHIFT = 0

# TxParamSetupReq fields.
MCMD_TX_PARAM_RX_DWELL_SHIFT = 5
MCMD_TX_PARAM_RX_DWELL_MASK = 1 << MCMD_TX_PARAM_RX_DWELL_SHIFT
MCMD_TX_PARAM_TX_DWELL_SHIFT = 4
MCMD_TX_PARAM_TX_DWELL_MASK = 1 << MCMD_TX_PARAM_TX_DWELL_SHIFT
MCMD_TX_PARAM_MAX_EIRP_SHIFT = 0
MCMD_TX_PARAM_MAX_EIRP_MASK = 0xF << MCMD_TX_PARAM_MAX_EIRP_SHIFT

# Receive quality reporting.
RSSI_OFF = 64
SNR_SCALEUP = 4


def get_sf(rps: int) -> SpreadingFactor:
    """Return the spreading factor of a parameter set."""
    return SpreadingFactor(rps & _SF_MASK)


def set_sf(rps: int, sf: int) -> int:
    """Return *rps* with its spreading factor replaced by *sf*."""
    return ((rps & ~_SF_MASK) | int(sf)) & _RPS_MASK


def get_bw(rps: int) -> Bandwidth:
    """Return the bandwidth of a parameter set."""
    return Bandwidth((rps & _BW_MASK) >> _BW_SHIFT)


def set_bw(rps: int, bw: int) -> int:
    """Return *rps* with its bandwidth replaced by *bw*."""
    return ((rps & ~_BW_MASK) | (int(bw) << _BW_SHIFT)) & _RPS_MASK


def get_cr(rps: int) -> CodingRate:
    """Return the coding rate of a parameter set."""
    return CodingRate((rps & _CR_MASK) >> _CR_SHIFT)


def set_cr(rps: int, cr: int) -> int:
    """Return *rps* with its coding rate replaced by *cr*."""
    return ((rps & ~_CR_MASK) | (int(cr) << _CR_SHIFT)) & _RPS_MASK


def get_nocrc(rps: int) -> bool:
    """Return True if the parameter set disables the payload CRC."""
    return bool(rps & _NOCRC_MASK)


def set_nocrc(rps: int, nocrc: bool) -> int:
    """Return *rps* with the no-CRC flag set from the truth of *nocrc*."""
    flag = _NOCRC_MASK if nocrc else 0
    return ((rps & ~_NOCRC_MASK) | flag) & _RPS_MASK


def get_ih(rps: int) -> int:
    """Return the implicit header length; 0 means an explicit header."""
    return (rps >> _IH_SHIFT) & 0xFF


def set_ih(rps: int, ih: int) -> int:
    """Return *rps* with its implicit header length replaced by *ih*."""
    return ((rps & ~_IH_MASK) | (int(ih) << _IH_SHIFT)) & _RPS_MASK


def make_rps(sf: int, bw: int, cr: int, ih: int, nocrc: bool) -> int:
    """Pack the given fields into a parameter set.

    Only the low eight bits of *ih* are used.
    """
    value = (
        int(sf)
        | (int(bw) << _BW_SHIFT)
        | (int(cr) << _CR_SHIFT)
        | (_NOCRC_MASK if nocrc else 0)
        | ((int(ih) & 0xFF) << _IH_SHIFT)
    )
    return value & _RPS_MASK


def same_sf_bw(r1: int, r2: int) -> bool:
    """Return True if two frames would interfere: same spreading factor and bandwidth."""
    return ((r1 ^ r2) & (_SF_MASK | _BW_MASK)) == 0


def is_faster_dr(dr1: int, dr2: int) -> bool:
    """Return True if data rate *dr1* is faster than *dr2*."""
    return dr1 > dr2


def is_slower_dr(dr1: int, dr2: int) -> bool:
    """Return True if data rate *dr1* is slower than *dr2*."""
    return dr1 < dr2