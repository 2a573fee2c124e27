"""
Maturity Assessment Services
============================

Scoring engine and answer management.

Services:
- ScoringService: Question, subcategory, domain and overall metrics
- GapService: Critical gap extraction
- FrameworkCoverageService: Per-framework coverage
- RoadmapService: Remediation roadmap
- AnswerStore: In-memory answer store

Version: 0.1.0
"""

from services.maturity_assessment.services.answers import AnswerStore
from services.maturity_assessment.services.framework_coverage import FrameworkCoverageService
from services.maturity_assessment.services.gaps import NOT_ANSWERED, GapService
from services.maturity_assessment.services.report import AssessmentReport, build_report
from services.maturity_assessment.services.roadmap import RoadmapService
from services.maturity_assessment.services.scoring import (
    ScoringService,
    calculate_question_score,
)


__all__ = [
    # Scoring
    "ScoringService",
    "calculate_question_score",
    # Gaps
    "GapService",
    "NOT_ANSWERED",
    # Frameworks
    "FrameworkCoverageService",
    # Roadmap
    "RoadmapService",
    # Report
    "AssessmentReport",
    "build_report",
    # Answers
    "AnswerStore",
]
