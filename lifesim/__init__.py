"""lifesim — life-simulation game backend.

The provider is asked for scenarios, choice outcomes and backstories in a
tag-delimited text format; `lifesim.parsing` turns that text into the typed
records in `lifesim.models`, and `lifesim.game` wraps each request in a
bounded retry.
"""
