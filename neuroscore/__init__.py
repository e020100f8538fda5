"""
NeuroScore - neuropsychological test scoring engine.

    from neuroscore.core.scoring import ScoringEngine
    from neuroscore.core.reports import PatientContext, format_report
"""

__version__ = "1.0.0"
