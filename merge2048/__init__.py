"""Rule engine for 2048-style merge puzzles with pluggable merge modes.

The engine modules (sequences, modes, grid, history, session) are free of
FastAPI concerns; `merge2048.api` and `merge2048.main` are thin adapters.
"""
