# Simple parameter defaults (extend freely)
DEFAULTS = {
    "iters": 100,
    "log_period": 1,          # append a metrics row every N GRASP iterations
    "rcl_size": 3,            # cap on the restricted candidate list
    "selection": "alpha_cut", # random | best_value | alpha_cut
    "alpha": 0.8,             # alpha-cut threshold, compared against raw insertion cost
}
