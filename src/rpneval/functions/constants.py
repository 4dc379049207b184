"""Built-in named constants."""

from __future__ import annotations

import math

from rpneval.functions.registry import register_constant

PI = register_constant("pi", math.pi)
E = register_constant("e", math.e)
TAU = register_constant("tau", math.tau)
