"""Delta engine: how far each channel moved between two snapshots."""

from __future__ import annotations

from types import MappingProxyType
from typing import Optional

from cashup.core.money import round_local, round_reference
from cashup.modules.snapshots import ALL_CHANNELS

from .models import Deltas, NormalizedTotals, round_channel


def diff(current: NormalizedTotals, previous: Optional[NormalizedTotals]) -> Deltas:
    """Subtract ``previous`` from ``current``; no previous snapshot means a zero baseline."""
    if previous is None:
        previous = NormalizedTotals(fx_rate=current.fx_rate)

    channels = MappingProxyType({
        channel: round_channel(channel, current.amount(channel) - previous.amount(channel))
        for channel in ALL_CHANNELS
    })
    return Deltas(
        channels=channels,
        reference_total=round_reference(current.reference_total - previous.reference_total),
        local_total=round_local(current.local_total - previous.local_total),
        overall_total=round_reference(current.overall_total - previous.overall_total),
    )
