# lorastack

Pure-Python building blocks for a LoRaWAN end device. It has no
dependencies outside the standard library.

## Modules

- `lorastack.encoding`: packs floats into compact sensor-payload words
  with `f2sflt16`, `f2sflt12`, `f2uflt16` and `f2uflt12`. The signed forms
  accept (-1, 1) and the unsigned forms accept [0, 1). Values outside the
  range saturate to the largest code (or 0 for negative input to the
  unsigned forms). NaN raises `ValueError`.
- `lorastack.timebase`: converts between microseconds, milliseconds,
  seconds and ticks at `OSTICKS_PER_SEC` (32768). The functions are
  `us2osticks`, `ms2osticks`, `sec2osticks`, `osticks2ms`, `osticks2us`
  and the `_ceil` and `_round` variants. Tick values are signed 32-bit and
  wrap around. Compare them with `time_diff(a, b)`.
- `lorastack.scheduler`: `Job` and `Scheduler`. A scheduler takes a clock
  callable that returns ticks. `set_callback` queues a job to run at once.
  `set_timed_callback` queues it in deadline order, and a deadline of 0 is
  treated as 1. `clear_callback` removes a job. `run_once` runs at most one
  job and returns whether it did. `run(max_iterations)` loops, forever when
  given `None`. `query_time_critical_jobs(time)` reports whether a timed job
  is due within `time` ticks.
- `lorastack.lorabase`: the `SpreadingFactor`, `Bandwidth` and
  `CodingRate` enums. It has helpers that pack and unpack 16-bit radio
  parameter sets: `make_rps`, `get_sf`/`set_sf`, `get_bw`/`set_bw`,
  `get_cr`/`set_cr`, `get_nocrc`/`set_nocrc`, `get_ih`/`set_ih` and
  `same_sf_bw`. It also defines `is_faster_dr` and `is_slower_dr`, plus
  constants for frame layouts, header fields and MAC command codes.
- `lorastack.regions`:
  - `region_info(name)` returns a `RegionInfo` for `eu868`, `us915`,
    `au915`, `as923`, `kr920` or `in866`. It holds the beacon channel,
    beacon airtime, a `BeaconLayout` of field offsets, and whether
    TxParamSetupReq is honoured. For `au915` it also holds the data rates
    for 500 kHz, for 125 kHz joins and for the initial join. An unknown
    name raises `ValueError`.
  - `frame_type(header)` returns a `FrameType`. It raises `ValueError` for
    the reserved type.
  - `is_downlink(header)` reports the frame direction.
  - `decode_link_adr_req(dr_pow, chmask, redundancy)` returns a
    `LinkAdrRequest`.
- `lorastack.uslike`: `UsLikeChannelPlan` manages the 64 × 125 kHz plus
  8 × 500 kHz channel plan that US915 and AU915 share.
  - It enables and disables single channels and sub-bands.
  - `can_map_channels` checks a LinkADRReq channel page, and
    `map_channels` applies it.
  - `is_data_rate_feasible` reports whether a data rate can be used.
  - `process_join_accept_cflist` applies a Join Accept channel-mask CFList.
  - `save_adr_state`, `restore_adr_state` and `compare_adr_state` work with
    an `AdrState` snapshot.

## Install

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Examples

```python
from lorastack.encoding import f2uflt16
from lorastack.lorabase import make_rps, get_sf, SpreadingFactor, Bandwidth, CodingRate

payload_word = f2uflt16(0.5)

rps = make_rps(SpreadingFactor.SF10, Bandwidth.BW125, CodingRate.CR_4_5, 0, False)
assert get_sf(rps) == SpreadingFactor.SF10
```

```python
from lorastack.scheduler import Job, Scheduler

ticks = [0]
sched = Scheduler(lambda: ticks[0])
job = Job()
sched.set_timed_callback(job, 100, lambda j: print("fired"))
assert not sched.run_once()   # not due yet
ticks[0] = 150
assert sched.run_once()       # prints "fired"
```

```python
from lorastack.regions import region_info
from lorastack.uslike import UsLikeChannelPlan

au = region_info("au915")
plan = UsLikeChannelPlan(au.first_500khz_dr, au.join_125khz_dr)
plan.map_channels(0x50, 0x0002)   # keep only sub-band 1
assert plan.is_channel_enabled(8) and not plan.is_channel_enabled(0)
```

## What it does not do

This package has no radio driver, so it sends and receives nothing. It does
not calculate airtime. It has no join or uplink state machine, and
`UsLikeChannelPlan` does not pick the next transmit channel. Only the
US-like channel plan is modelled; the other regions supply constants only.
There is no command-line program.

## Running the tests

```
pytest
```