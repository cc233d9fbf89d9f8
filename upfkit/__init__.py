"""Building blocks for user-plane network functions: PLMN ids, logging, time, pools, buffers, timers, a hash table, paths, YAML iteration, packet headers and PFCP types."""

__version__ = "0.1.0"