import numpy as np

from ...config.enums import C_COST, C_REWARD


def random_selection(rcl, rng, alpha=None):
    """Uniform pick over the RCL rows."""

    return int(rng.integers(rcl.shape[0]))


def best_value_selection(rcl, rng=None, alpha=None):
    """Pick the row with the highest reward; the first one wins ties."""

    return int(np.argmax(rcl[:, C_REWARD]))


def alpha_cut_selection(rcl, rng, alpha=0.8):
    """Alpha-cut fuzzy pick.

    The membership of a row is its raw insertion cost, so only rows with
    ``cost <= alpha`` survive the cut.  Survivors are drawn uniformly; when
    none survives the draw falls back to the whole RCL.
    """

    members = np.flatnonzero(rcl[:, C_COST] <= alpha)
    if members.size == 0:
        return random_selection(rcl, rng)
    return int(members[rng.integers(members.size)])


SELECTION_POLICIES = {
    "random": random_selection,
    "best_value": best_value_selection,
    "alpha_cut": alpha_cut_selection,
}


def get_selection_policy(name):
    if callable(name):
        return name
    try:
        return SELECTION_POLICIES[str(name)]
    except KeyError:
        known = ", ".join(sorted(SELECTION_POLICIES))
        raise ValueError(f"unknown selection policy {name!r} (expected one of: {known})") from None
