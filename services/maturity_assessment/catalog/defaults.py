"""
Default Policy Tables
=====================

Scoring policy shipped with the platform. A catalog may override any of
these tables; the engine only reads them through the Catalog.

Version: 0.1.0
"""

from services.maturity_assessment.models.answer import ResponseValue
from services.maturity_assessment.models.reference import (
    Criticality,
    CriticalityLevel,
    EvidenceOption,
    FrameworkCategory,
    MaturityLevel,
    ResponseOption,
)


DEFAULT_MATURITY_LEVELS: tuple[MaturityLevel, ...] = (
    MaturityLevel(
        level=0,
        name="Nonexistent",
        description="No established practices",
        min_score=0.0,
        max_score=0.24,
    ),
    MaturityLevel(
        level=1,
        name="Initial",
        description="Ad-hoc practices",
        min_score=0.25,
        max_score=0.49,
    ),
    MaturityLevel(
        level=2,
        name="Defined",
        description="Documented processes",
        min_score=0.50,
        max_score=0.79,
    ),
    MaturityLevel(
        level=3,
        name="Managed",
        description="Continuous improvement",
        min_score=0.80,
        max_score=1.0,
    ),
)

DEFAULT_RESPONSE_OPTIONS: tuple[ResponseOption, ...] = (
    ResponseOption(value=ResponseValue.YES, score=1.0, label="Yes"),
    ResponseOption(value=ResponseValue.PARTIAL, score=0.5, label="Partial"),
    ResponseOption(value=ResponseValue.NO, score=0.0, label="No"),
    ResponseOption(value=ResponseValue.NOT_APPLICABLE, score=None, label="Not applicable"),
)

DEFAULT_EVIDENCE_OPTIONS: tuple[EvidenceOption, ...] = (
    EvidenceOption(value=ResponseValue.YES, multiplier=1.0, label="Evidence available"),
    EvidenceOption(value=ResponseValue.PARTIAL, multiplier=0.9, label="Partial evidence"),
    EvidenceOption(value=ResponseValue.NO, multiplier=0.7, label="No evidence"),
    EvidenceOption(value=ResponseValue.NOT_APPLICABLE, multiplier=None, label="Not applicable"),
)

DEFAULT_CRITICALITY_LEVELS: tuple[CriticalityLevel, ...] = (
    CriticalityLevel(name=Criticality.LOW, weight=1.0),
    CriticalityLevel(name=Criticality.MEDIUM, weight=1.5),
    CriticalityLevel(name=Criticality.HIGH, weight=2.0),
    CriticalityLevel(name=Criticality.CRITICAL, weight=3.0),
)

DEFAULT_FRAMEWORK_CATEGORIES: tuple[FrameworkCategory, ...] = (
    FrameworkCategory(
        category_id="NIST_AI_RMF",
        name="NIST AI RMF",
        description="Primary AI risk management framework",
        frameworks=["NIST AI RMF"],
    ),
    FrameworkCategory(
        category_id="SECURITY_BASELINE",
        name="Security Baseline",
        description="Foundational information security controls",
        frameworks=["ISO 27001", "ISO 27002", "NIST CSF"],
    ),
    FrameworkCategory(
        category_id="AI_RISK_MGMT",
        name="AI Risk Management",
        description="Frameworks specific to AI risk",
        frameworks=["ISO 23894", "ISO 42001"],
    ),
    FrameworkCategory(
        category_id="SECURE_DEVELOPMENT",
        name="Secure Development",
        description="Security across the development lifecycle",
        frameworks=["NIST SSDF", "CSA"],
    ),
    FrameworkCategory(
        category_id="PRIVACY_LGPD",
        name="Privacy & LGPD",
        description="Personal data protection",
        frameworks=["LGPD"],
    ),
    FrameworkCategory(
        category_id="THREAT_EXPOSURE",
        name="Threat Exposure",
        description="Technical LLM and API risks",
        frameworks=["OWASP LLM", "OWASP API"],
    ),
)

# Multiplier applied when evidence confidence is unset or NA
FALLBACK_EVIDENCE_VALUE = ResponseValue.NO

# Effective score under which a question in a High/Critical subcategory
# counts as a critical gap
CRITICAL_GAP_THRESHOLD = 0.5
