"""Turns seat comfort and the bonus config into per-channel effect values."""

from __future__ import annotations

from seated_fishing.config import BonusConfig
from seated_fishing.models import BonusChannel, ChannelKind, Seat

MIN_QUALITY_MULTIPLIER = 0.5
MAX_QUALITY_MULTIPLIER = 2.0
# Smallest stress factor the settings accept; bounds the threshold divisor.
MIN_STRESS_DIVISOR = 0.1

CHANNEL_KINDS: dict[BonusChannel, ChannelKind] = {
    BonusChannel.YIELD: ChannelKind.MULTIPLICATIVE,
    BonusChannel.SPEED: ChannelKind.MULTIPLICATIVE,
    BonusChannel.SKILL_FISHING: ChannelKind.MULTIPLICATIVE,
    BonusChannel.SKILL_INTELLECTUAL: ChannelKind.RATE,
    BonusChannel.SKILL_ARTISTIC: ChannelKind.RATE,
    BonusChannel.RECREATION: ChannelKind.RATE,
    BonusChannel.COMFORT: ChannelKind.RATE,
    BonusChannel.STRESS: ChannelKind.DIVISOR,
}

NEUTRAL_VALUES: dict[ChannelKind, float] = {
    ChannelKind.MULTIPLICATIVE: 1.0,
    ChannelKind.RATE: 0.0,
    ChannelKind.DIVISOR: 1.0,
}


def channel_kind(channel: BonusChannel) -> ChannelKind:
    return CHANNEL_KINDS[channel]


def neutral_value(channel: BonusChannel) -> float:
    """Value of ``channel`` that leaves the host's number unchanged."""
    return NEUTRAL_VALUES[CHANNEL_KINDS[channel]]


def channel_enabled(channel: BonusChannel, config: BonusConfig) -> bool:
    if not config.enabled:
        return False
    if channel in (BonusChannel.YIELD, BonusChannel.SPEED):
        return config.fish_bonus_enabled
    if channel in (BonusChannel.SKILL_FISHING, BonusChannel.SKILL_INTELLECTUAL, BonusChannel.SKILL_ARTISTIC):
        return config.skill_bonus_enabled
    if channel is BonusChannel.RECREATION:
        return config.recreation_enabled
    if channel is BonusChannel.COMFORT:
        return config.comfort_enabled
    return config.stress_reduction_enabled


def channel_base_value(channel: BonusChannel, config: BonusConfig) -> float:
    """The channel's own configured scalar before quality scaling."""
    return {
        BonusChannel.YIELD: config.yield_multiplier,
        BonusChannel.SPEED: config.speed_multiplier,
        BonusChannel.SKILL_FISHING: config.fishing_skill_multiplier,
        BonusChannel.SKILL_INTELLECTUAL: config.intellectual_skill_rate,
        BonusChannel.SKILL_ARTISTIC: config.artistic_skill_rate,
        BonusChannel.RECREATION: config.recreation_gain_rate,
        BonusChannel.COMFORT: config.comfort_level,
        BonusChannel.STRESS: config.stress_reduction_factor,
    }[channel]


def compute_quality_multiplier(seat: Seat | None, config: BonusConfig) -> float:
    """Scale factor in [0.5, 2.0] from how far the seat's comfort is from baseline.

    With base comfort 0.5 and multiplier 1.5 a seat of comfort 0.4 yields
    0.95, comfort 0.75 yields 1.125 and comfort 0.9 yields 1.2.
    """
    if seat is None or not config.quality_scaling_enabled:
        return 1.0

    multiplier = 1.0 + (seat.comfort - config.base_comfort) * (config.quality_multiplier - 1.0)
    return min(MAX_QUALITY_MULTIPLIER, max(MIN_QUALITY_MULTIPLIER, multiplier))


def compose_bonus(
    channel: BonusChannel,
    base_value: float,
    quality_multiplier: float,
    config: BonusConfig,
) -> float:
    """Blend ``base_value`` with ``quality_multiplier`` according to the channel's kind.

    Multiplicative channels scale only the bonus part above 1.0, rate channels
    scale the whole rate, and the stress channel returns the factor a break
    threshold is multiplied by. Disabled channels return their neutral value.
    """
    if not channel_enabled(channel, config):
        return neutral_value(channel)

    kind = CHANNEL_KINDS[channel]
    if kind is ChannelKind.MULTIPLICATIVE:
        return 1.0 + (base_value - 1.0) * quality_multiplier
    if kind is ChannelKind.RATE:
        return base_value * quality_multiplier

    # A factor of 0.5 at quality 2.0 zeroes the divisor.
    divisor = 1.0 + (base_value - 1.0) * quality_multiplier
    return 1.0 / max(MIN_STRESS_DIVISOR, divisor)


def compose_for_seat(channel: BonusChannel, seat: Seat | None, config: BonusConfig) -> float:
    """Effective value of ``channel`` for ``seat`` using the configured base scalar."""
    return compose_bonus(
        channel,
        channel_base_value(channel, config),
        compute_quality_multiplier(seat, config),
        config,
    )


def compose_all(seat: Seat | None, config: BonusConfig) -> dict[BonusChannel, float]:
    quality = compute_quality_multiplier(seat, config)
    return {
        channel: compose_bonus(channel, channel_base_value(channel, config), quality, config)
        for channel in BonusChannel
    }
