"""
Maturity Assessment Routes
==========================

API route handlers for the Maturity Assessment Service.
"""

from services.maturity_assessment.routes import answers, reports, scores


__all__ = ["answers", "reports", "scores"]
