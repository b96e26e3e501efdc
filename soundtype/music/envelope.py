from .types import Envelope, EnvelopeCurve

PEAK_GAIN = 0.7


def build_envelope(envelope: Envelope, peak_gain: float = PEAK_GAIN) -> EnvelopeCurve:
    """Attack, decay and release ramps; sustain only sets the level reached after decay."""
    attack_end = envelope.attack
    decay_end = attack_end + envelope.decay
    release_end = decay_end + envelope.release
    sustain_level = envelope.sustain * peak_gain
    return EnvelopeCurve(
        points=(
            (0.0, 0.0),
            (attack_end, peak_gain),
            (decay_end, sustain_level),
            (release_end, 0.0),
        )
    )
