"""Match generation for each tournament format.

Each format module exposes the same plain functions: ``default_config``,
``validate_config`` and ``generate_matches``.  The modules share no state
and no base class; the tournament package maps formats to them.
"""
