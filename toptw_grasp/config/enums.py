# Indices / enums used across modules (keep ints for JIT friendliness)

# node_f columns (float)
NODE_REWARD   = 0
NODE_SERVICE  = 1
NODE_TW_OPEN  = 2
NODE_TW_CLOSE = 3
F_NODE_F      = 4 # 4 features

# candidate record columns (float rows of a (k, F_CAND) array)
C_POINT  = 0 # Unrouted point to insert.
C_ROUTE  = 1 # Index of the target route (position in the active depot list).
C_PRED   = 2 # Node after which the point is spliced in.
C_COST   = 3 # Cascaded departure time at the closing depot after insertion.
C_REWARD = 4 # Reward of the point.
F_CAND   = 5 # 5 features

# route slots
NO_INITIALIZED = -1

# construction outcome
STATUS_COMPLETE   = "COMPLETE"
STATUS_INCOMPLETE = "INCOMPLETE"
