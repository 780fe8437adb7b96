"""Process-derived defaults for a run: a readable random name and a CPU count.

Both are plain callables so the assembler can take them as injected
dependencies; tests pass fixed values instead.
"""

from __future__ import annotations

import os
from random import Random
from typing import Callable

NameGenerator = Callable[[], str]

_ADJECTIVES = (
    "amber", "bold", "brave", "bright", "calm", "clever", "cosmic", "crisp",
    "daring", "eager", "fancy", "fierce", "gentle", "glad", "golden", "happy",
    "hidden", "icy", "jolly", "keen", "lively", "lucky", "mellow", "misty",
    "nimble", "noble", "proud", "quick", "quiet", "rapid", "rusty", "shiny",
    "silent", "sleek", "solid", "swift", "tidy", "vivid", "witty", "zesty",
)

_NOUNS = (
    "badger", "beacon", "bison", "canyon", "comet", "crane", "delta", "ember",
    "falcon", "fjord", "forest", "gecko", "glacier", "harbor", "heron", "island",
    "jaguar", "lagoon", "lynx", "meadow", "meteor", "otter", "panda", "pebble",
    "pine", "quartz", "raven", "reef", "river", "summit", "tiger", "tundra",
    "valley", "walrus", "willow", "wolf", "yak", "zebra", "orbit", "prairie",
)

_rng = Random()


def random_name(rng: Random | None = None) -> str:
    """Return a human-readable identifier like ``brave-otter-4821``."""
    rng = rng or _rng
    return f"{rng.choice(_ADJECTIVES)}-{rng.choice(_NOUNS)}-{rng.randint(0, 9999):04d}"


def available_cpus() -> int:
    """Number of logical processors this process may run on."""
    if hasattr(os, "sched_getaffinity"):
        try:
            return max(1, len(os.sched_getaffinity(0)))
        except OSError:
            pass
    return os.cpu_count() or 1
