"""Shared Kernel module.

Holds the observation context that probes of every layer attach to their
events. Kept outside the hierarchy context so hosts can build contexts
for their own instrumentation without depending on engine internals.
"""
