"""Domain layer for lifedash.

Pure rules with no I/O:

- shared: Result type, domain errors, base event
- project: progress derivation, impact tiers, relation sets
- today: priority partitioning and ordering of today tasks
- habit: per-day completion keys and counter rules
"""
