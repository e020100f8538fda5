"""
Scoring core: protocol registry, derivation, classification and reports.
"""
