"""
Maturity Assessment Service
===========================

Security maturity scoring and gap-analysis service.

Features:
- Question, subcategory, domain and overall maturity scores
- Governance function, ownership and framework category views
- Critical gap extraction
- Per-framework coverage
- Prioritized remediation roadmap

Port: 8010
"""

__version__ = "0.1.0"
