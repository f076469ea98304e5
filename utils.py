from typing import Optional, Union

import numpy as np


def make_rng(seed: Optional[Union[int, np.random.Generator]] = None) -> np.random.Generator:
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def tally_outcomes(outcomes, labels):
    counts = {label: 0 for label in labels.values()}
    for outcome in outcomes:
        counts[labels[outcome]] += 1
    return counts
