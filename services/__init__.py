"""
BASTION Services
================

Services for the Bastion security maturity platform.

Services:
- maturity_assessment: Questionnaire answers, maturity scoring and gap reports
"""

__all__ = [
    "maturity_assessment",
]
