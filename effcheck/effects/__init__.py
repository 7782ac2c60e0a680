"""Effects understood by effcheck strategies."""

from effcheck.effects.base import Effect, EffectBase
from effcheck.effects.sample import Sample, SampleEffect, sample
from effcheck.effects.size import Size, SizeEffect, size
from effcheck.effects.succeed import Succeed, SucceedEffect, succeed

__all__ = [
    "Effect",
    "EffectBase",
    "Sample",
    "SampleEffect",
    "Size",
    "SizeEffect",
    "Succeed",
    "SucceedEffect",
    "sample",
    "size",
    "succeed",
]
