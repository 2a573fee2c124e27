"""
Framework Classification Rules
==============================

Question framework tags are free text ("NIST AI RMF GOVERN 1.1",
"ISO/IEC 27001 A.5.1", "OWASP LLM01"...). These ordered rule lists map a
tag onto a canonical framework name, a framework category or a selectable
framework id. Rules are evaluated first-match-wins; a rule whose target is
None excludes the tag.

Rule Lists:
- FRAMEWORK_NAME_RULES: canonical names for framework coverage reports
- FRAMEWORK_CATEGORY_RULES: categories for the framework-category view
- FRAMEWORK_ID_RULES: ids used to enable or disable question sets

Version: 0.1.0
"""

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from services.maturity_assessment.catalog.catalog import Catalog
from services.maturity_assessment.models.reference import Question


TagPredicate = Callable[[str], bool]


@dataclass(frozen=True)
class FrameworkRule:
    """Maps tags accepted by `predicate` onto `target` (None excludes)."""

    predicate: TagPredicate
    target: str | None
    label: str = ""

    def matches(self, tag: str) -> bool:
        return self.predicate(tag.lower())


def contains_any(*needles: str) -> TagPredicate:
    """Predicate matching a lower-cased tag containing any needle."""
    return lambda tag: any(needle in tag for needle in needles)


def contains_all(*needles: str) -> TagPredicate:
    """Predicate matching a lower-cased tag containing every needle."""
    return lambda tag: all(needle in tag for needle in needles)


def matches_pattern(pattern: str) -> TagPredicate:
    """Predicate matching a case-insensitive regular expression."""
    compiled = re.compile(pattern, re.IGNORECASE)
    return lambda tag: compiled.search(tag) is not None


def classify(tag: str, rules: Sequence[FrameworkRule]) -> str | None:
    """Return the target of the first rule matching `tag`, or None."""
    for rule in rules:
        if rule.matches(tag):
            return rule.target
    return None


# =============================================================================
# Canonical framework names
# =============================================================================

NIST_AI_RMF = "NIST AI RMF"
ISO_27001_27002 = "ISO/IEC 27001 / 27002"
LGPD = "LGPD"
ISO_23894 = "ISO/IEC 23894"
NIST_SSDF = "NIST SSDF"
CSA_AI_SECURITY = "CSA AI Security"
OWASP_LLM = "OWASP Top 10 for LLM Applications"
OWASP_API = "OWASP API Security Top 10"

FRAMEWORK_NAME_RULES: tuple[FrameworkRule, ...] = (
    FrameworkRule(contains_any("nist ai rmf", "ai rmf"), NIST_AI_RMF),
    FrameworkRule(
        contains_any("iso 27001", "iso/iec 27001", "iso 27002", "iso/iec 27002"),
        ISO_27001_27002,
    ),
    FrameworkRule(contains_any("lgpd"), LGPD),
    FrameworkRule(contains_any("iso/iec 23894", "iso 23894"), ISO_23894),
    FrameworkRule(contains_any("nist ssdf", "ssdf"), NIST_SSDF),
    FrameworkRule(contains_any("csa"), CSA_AI_SECURITY),
    FrameworkRule(
        lambda tag: "owasp" in tag and "llm" in tag,
        OWASP_LLM,
    ),
    FrameworkRule(contains_all("owasp", "api"), OWASP_API),
    FrameworkRule(
        contains_any(
            "mitre",
            "stride",
            "cis controls",
            "cis benchmark",
            "soc 2",
            "eu ai act",
            "iso/iec 42001",
            "iso 42001",
            "nist csf",
            "800-53",
            "slsa",
            "gdpr",
            "bacen",
            "cmn",
        ),
        None,
        label="excluded from coverage reports",
    ),
)

# Only these canonical names are emitted in coverage reports
AUTHORITATIVE_FRAMEWORKS: frozenset[str] = frozenset(
    {
        NIST_AI_RMF,
        ISO_27001_27002,
        LGPD,
        ISO_23894,
        NIST_SSDF,
        CSA_AI_SECURITY,
        OWASP_LLM,
        OWASP_API,
    }
)


# =============================================================================
# Framework categories
# =============================================================================

FRAMEWORK_CATEGORY_RULES: tuple[FrameworkRule, ...] = (
    FrameworkRule(contains_any("nist ai rmf", "ai rmf"), "NIST_AI_RMF"),
    FrameworkRule(
        contains_any(
            "iso 27001",
            "iso/iec 27001",
            "iso 27002",
            "iso/iec 27002",
            "nist sp 800-53",
            "nist 800-53",
            "nist csf",
        ),
        "SECURITY_BASELINE",
    ),
    FrameworkRule(
        contains_any("iso/iec 23894", "iso 23894", "iso/iec 42001", "iso 42001", "iso 31000"),
        "AI_RISK_MGMT",
    ),
    FrameworkRule(
        lambda tag: (
            contains_any("nist ssdf", "ssdf", "slsa", "sbom", "csa")(tag)
            or ("owasp" in tag and "ml" in tag)
        ),
        "SECURE_DEVELOPMENT",
    ),
    FrameworkRule(
        contains_any("lgpd", "privacy framework", "lc 105", "lei complementar 105"),
        "PRIVACY_LGPD",
    ),
    FrameworkRule(contains_any("owasp llm", "owasp api", "api security"), "THREAT_EXPOSURE"),
    FrameworkRule(
        contains_any(
            "mitre",
            "stride",
            "cis controls",
            "cis benchmark",
            "soc 2",
            "eu ai act",
            "ieee ead",
            "gdpr",
        ),
        None,
        label="de-emphasized",
    ),
)


# =============================================================================
# Selectable framework ids
# =============================================================================

FRAMEWORK_ID_RULES: tuple[FrameworkRule, ...] = (
    FrameworkRule(matches_pattern(r"NIST\s*AI\s*RMF"), "NIST_AI_RMF"),
    FrameworkRule(matches_pattern(r"ISO\s*/?\s*(IEC)?\s*2700[12]"), "ISO_27001_27002"),
    # 42001 is assessed together with the 27001 question set
    FrameworkRule(matches_pattern(r"ISO\s*/?\s*(IEC)?\s*42001"), "ISO_27001_27002"),
    FrameworkRule(matches_pattern(r"ISO\s*/?\s*(IEC)?\s*23894"), "ISO_23894"),
    FrameworkRule(matches_pattern(r"LGPD"), "LGPD"),
    FrameworkRule(matches_pattern(r"NIST\s*SSDF"), "NIST_SSDF"),
    FrameworkRule(matches_pattern(r"CSA"), "CSA_AI"),
    FrameworkRule(matches_pattern(r"OWASP\s*(Top\s*10\s*(for\s*)?)?LLM"), "OWASP_LLM"),
    FrameworkRule(matches_pattern(r"OWASP\s*(Top\s*10\s*)?(for\s*)?API"), "OWASP_API"),
)


@dataclass(frozen=True)
class FrameworkPolicy:
    """Rule lists and allow-list used by the framework-aware views."""

    name_rules: tuple[FrameworkRule, ...] = FRAMEWORK_NAME_RULES
    category_rules: tuple[FrameworkRule, ...] = FRAMEWORK_CATEGORY_RULES
    id_rules: tuple[FrameworkRule, ...] = FRAMEWORK_ID_RULES
    authoritative: frozenset[str] = field(default=AUTHORITATIVE_FRAMEWORKS)

    def normalize_name(self, tag: str) -> str | None:
        return classify(tag, self.name_rules)

    def category_of(self, tag: str) -> str | None:
        return classify(tag, self.category_rules)

    def framework_id_of(self, tag: str) -> str | None:
        return classify(tag, self.id_rules)

    def is_authoritative(self, name: str) -> bool:
        return name in self.authoritative


DEFAULT_FRAMEWORK_POLICY = FrameworkPolicy()


def normalize_framework_name(tag: str) -> str | None:
    """Canonical framework name of a tag under the default policy."""
    return DEFAULT_FRAMEWORK_POLICY.normalize_name(tag)


def framework_category(tag: str) -> str | None:
    """Framework category id of a tag under the default policy."""
    return DEFAULT_FRAMEWORK_POLICY.category_of(tag)


def question_belongs_to_frameworks(
    question_frameworks: Iterable[str],
    selected_framework_ids: Iterable[str],
    policy: FrameworkPolicy = DEFAULT_FRAMEWORK_POLICY,
) -> bool:
    """Whether any tag of a question maps onto a selected framework id."""
    selected = set(selected_framework_ids)
    if not selected:
        return False
    return any(policy.framework_id_of(tag) in selected for tag in question_frameworks)


def select_active_questions(
    catalog: Catalog,
    framework_ids: Iterable[str] | None = None,
    disabled_question_ids: Iterable[str] = (),
    custom_questions: Iterable[Question] = (),
    policy: FrameworkPolicy = DEFAULT_FRAMEWORK_POLICY,
) -> list[Question]:
    """
    Build the active question set of an assessment.

    Args:
        catalog: Reference catalog
        framework_ids: Enabled framework ids; None keeps every question
        disabled_question_ids: Questions switched off by the user
        custom_questions: User-defined questions appended to the catalog's
        policy: Framework classification rules

    Returns:
        Catalog questions followed by custom questions, filtered
    """
    disabled = set(disabled_question_ids)
    selected = None if framework_ids is None else set(framework_ids)

    active: list[Question] = []
    for question in [*catalog.questions, *custom_questions]:
        if question.question_id in disabled:
            continue
        if selected is not None and not question_belongs_to_frameworks(
            catalog.framework_tags_for(question), selected, policy
        ):
            continue
        active.append(question)
    return active
