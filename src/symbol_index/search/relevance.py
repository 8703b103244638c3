"""Index-time boost policy for symbol names.

Nested, companion and compiler-generated names carry ``$`` separators;
each one that is not the trailing object marker lowers the boost of the
``fqn`` field. Symbols the caller prioritizes (for example those from
recently opened files) get a flat bonus on top.
"""

import math

DEFAULT_PENALTY_STEP = 0.25
DEFAULT_PRIORITY_BONUS = 0.25


def nested_depth(fqn: str) -> int:
    """Count the ``$`` separators in ``fqn``, ignoring one trailing ``$``."""
    count = fqn.count("$")
    if fqn.endswith("$"):
        count -= 1
    return count


def calculate_penalty(fqn: str, step: float = DEFAULT_PENALTY_STEP) -> float:
    """Boost multiplier for ``fqn`` based on its nesting depth.

    Linear, ``1 - step * depth``, while that stays positive. Past that point
    the multiplier halves per extra level, so it never reaches zero.

    Args:
        fqn: Fully-qualified name
        step: Boost removed per non-trailing ``$``

    Returns:
        float: Multiplier in ``(0, 1]``
    """
    depth = nested_depth(fqn)
    # deepest level the linear formula still keeps positive
    last_linear = math.ceil(1 / step) - 1
    while last_linear > 0 and 1 - step * last_linear <= 0:
        last_linear -= 1
    if depth <= last_linear:
        return 1 - step * depth
    floor = 1 - step * last_linear
    return floor * 0.5 ** (depth - last_linear)


def calculate_boost(
    fqn: str,
    prioritize: bool = False,
    step: float = DEFAULT_PENALTY_STEP,
    bonus: float = DEFAULT_PRIORITY_BONUS,
) -> float:
    """Final ``fqn`` field boost for a freshly built document.

    Every call starts from the penalty, so repeated prioritized indexing of
    the same symbol yields the same boost rather than a growing one.
    """
    boost = calculate_penalty(fqn, step)
    if prioritize:
        boost += bonus
    return boost
