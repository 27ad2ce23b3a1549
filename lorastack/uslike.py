"""Channel management for US-like band plans (US915, AU915).

These plans have 64 fixed 125 kHz uplink channels (0..63) and 8 fixed
500 kHz uplink channels (64..71). The network enables and disables channels
with LinkADRReq channel pages, with sub-band masks and with the channel-mask
CFList of a Join Accept. There is no duty cycling.
"""

from __future__ import annotations

from dataclasses import dataclass

from .lorabase import (
    CFLIST_TYPE_MASK,
    MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_125OFF,
    MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_125ON,
    MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_500K,
    MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_BANK,
    MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_SPECIAL,
    OFF_CFLIST,
)
from .timebase import ms2osticks

__all__ = ["AdrState", "UsLikeChannelPlan", "DNW2_SAFETY_ZONE"]

DNW2_SAFETY_ZONE = ms2osticks(750)

_CHANNELS_125KHZ = 64
_CHANNELS_500KHZ = 8
_CHANNEL_COUNT = _CHANNELS_125KHZ + _CHANNELS_500KHZ
_MAP_WORDS = 5
_SUB_BANDS = 8
_CHANNELS_PER_SUB_BAND = 8
_RESERVED_BITS = 0xFF00


def _is_125khz(channel: int) -> bool:
    return channel < _CHANNELS_125KHZ


@dataclass(frozen=True)
class AdrState:
    """A saved copy of the channel map and the active-channel counts."""

    channel_map: tuple[int, ...]
    active_channels_125khz: int
    active_channels_500khz: int


class UsLikeChannelPlan:
    """Enabled-channel bookkeeping for a US-like band plan."""

    def __init__(self, first_500khz_dr: int, join_125khz_dr: int) -> None:
        self.first_500khz_dr = first_500khz_dr
        self.join_125khz_dr = join_125khz_dr
        self.channel_map: list[int] = [0] * _MAP_WORDS
        self.active_channels_125khz = 0
        self.active_channels_500khz = 0
        self.tx_channel: int | None = None
        self.init_default_channels()

    def init_default_channels(self) -> None:
        """Enable all 72 channels and forget the current transmit channel."""
        self.channel_map = [0xFFFF] * (_MAP_WORDS - 1) + [0x00FF]
        self.active_channels_125khz = _CHANNELS_125KHZ
        self.active_channels_500khz = _CHANNELS_500KHZ
        self.tx_channel = None

    @staticmethod
    def _check_channel(channel: int) -> int:
        channel = int(channel)
        if not 0 <= channel < _CHANNEL_COUNT:
            raise ValueError(f"channel must be in 0..{_CHANNEL_COUNT - 1}, got {channel}")
        return channel

    def is_channel_enabled(self, channel: int) -> bool:
        """Return True if *channel* is enabled."""
        channel = self._check_channel(channel)
        return bool(self.channel_map[channel >> 4] & (1 << (channel & 0x0F)))

    def _adjust_count(self, channel: int, delta: int) -> None:
        if _is_125khz(channel):
            self.active_channels_125khz += delta
        else:
            self.active_channels_500khz += delta

    def enable_channel(self, channel: int) -> bool:
        """Enable *channel*; return True if it was previously disabled."""
        if self.is_channel_enabled(channel):
            return False
        self.channel_map[channel >> 4] |= 1 << (channel & 0x0F)
        self._adjust_count(channel, 1)
        return True

    def disable_channel(self, channel: int) -> bool:
        """Disable *channel*; return True if it was previously enabled."""
        if not self.is_channel_enabled(channel):
            return False
        self.channel_map[channel >> 4] &= ~(1 << (channel & 0x0F)) & 0xFFFF
        self._adjust_count(channel, -1)
        return True

    @staticmethod
    def _sub_band_channels(band: int) -> list[int]:
        band = int(band)
        if not 0 <= band < _SUB_BANDS:
            raise ValueError(f"sub-band must be in 0..{_SUB_BANDS - 1}, got {band}")
        start = band * _CHANNELS_PER_SUB_BAND
        return [*range(start, start + _CHANNELS_PER_SUB_BAND), _CHANNELS_125KHZ + band]

    def enable_sub_band(self, band: int) -> bool:
        """Enable the eight 125 kHz channels of *band* and its 500 kHz channel."""
        changes = [self.enable_channel(ch) for ch in self._sub_band_channels(band)]
        return any(changes)

    def disable_sub_band(self, band: int) -> bool:
        """Disable the eight 125 kHz channels of *band* and its 500 kHz channel."""
        changes = [self.disable_channel(ch) for ch in self._sub_band_channels(band)]
        return any(changes)

    def can_map_channels(self, chpage: int, chmap: int) -> bool:
        """Return True if a LinkADRReq channel page and mask are acceptable."""
        if chpage < MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_SPECIAL:
            if chpage == MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_500K:
                return not chmap & _RESERVED_BITS
            return True
        if chpage in (
            MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_BANK,
            MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_125ON,
            MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_125OFF,
        ):
            # Disabling every channel is allowed: a following request may
            # turn some back on.
            return not chmap & _RESERVED_BITS
        return False

    def _apply_mask(self, channels: range, chmap: int) -> None:
        for bit, channel in enumerate(channels):
            if channel >= _CHANNEL_COUNT:
                break
            if chmap >> bit & 1:
                self.enable_channel(channel)
            else:
                self.disable_channel(channel)

    def map_channels(self, chpage: int, chmap: int) -> bool:
        """Apply a LinkADRReq channel page and mask.

        Returns True if at least one channel remains enabled.
        """
        if chpage == MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_BANK:
            for band in range(_SUB_BANDS):
                if chmap >> band & 1:
                    self.enable_sub_band(band)
                else:
                    self.disable_sub_band(band)
        else:
            if chpage < MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_SPECIAL:
                # The unshifted page value is the first channel of the page.
                base = chpage
                top = 72 if base == 64 else base + 16
            else:
                enable_125 = chpage == MCMD_LINK_ADR_REQ_CHMASKCNTL_USLIKE_125ON
                for channel in range(_CHANNELS_125KHZ):
                    if enable_125:
                        self.enable_channel(channel)
                    else:
                        self.disable_channel(channel)
                base, top = _CHANNELS_125KHZ, _CHANNEL_COUNT
            self._apply_mask(range(base, top), chmap)
        return self.active_channels_125khz > 0 or self.active_channels_500khz > 0

    def is_data_rate_feasible(self, dr: int) -> bool:
        """Return True if enough channels are enabled to use data rate *dr*."""
        if dr >= self.first_500khz_dr:
            return self.active_channels_500khz > 0
        return self.active_channels_125khz > 6

    def process_join_accept_cflist(self, frame: bytes) -> bool:
        """Apply a channel-mask CFList from a Join Accept frame.

        Returns True if the frame carried such a CFList and it was applied.
        """
        frame = bytes(frame)
        if len(frame) < OFF_CFLIST + 16 or frame[OFF_CFLIST + 15] != CFLIST_TYPE_MASK:
            return False
        for word in range(_MAP_WORDS):
            offset = OFF_CFLIST + 2 * word
            mask = int.from_bytes(frame[offset:offset + 2], "little")
            start = word * 16
            self._apply_mask(range(start, start + 16), mask)
        return True

    def save_adr_state(self) -> AdrState:
        """Return a snapshot of the channel map and active-channel counts."""
        return AdrState(
            channel_map=tuple(self.channel_map),
            active_channels_125khz=self.active_channels_125khz,
            active_channels_500khz=self.active_channels_500khz,
        )

    def restore_adr_state(self, state: AdrState) -> None:
        """Restore the channel map and counts from a snapshot."""
        self.channel_map = list(state.channel_map)
        self.active_channels_125khz = state.active_channels_125khz
        self.active_channels_500khz = state.active_channels_500khz

    def compare_adr_state(self, state: AdrState) -> bool:
        """Return True if the current channel map differs from the snapshot's."""
        return tuple(self.channel_map) != tuple(state.channel_map)