from typing import Any, Mapping, Optional, Sequence

from ..models.schema import SmartScore
from .utils import round_half_up

WEIGHTS = {
    "performance": 0.35,
    "seo": 0.25,
    "security": 0.25,
    "accessibility": 0.15,
}

HEADER_PENALTY = 5
VIOLATION_PENALTY = 2
MAX_VIOLATION_PENALTY = 15

# (minimum score, grade, label), checked top down
GRADES = (
    (90, "A+", "Excellent"),
    (80, "A", "Great"),
    (70, "B", "Good"),
    (60, "C", "Fair"),
)
FLOOR_GRADE = ("D", "Poor")

HEADER_SUGGESTION = "Add missing security headers (CSP, HSTS, X-Frame-Options)."
ACCESSIBILITY_SUGGESTION = "Fix accessibility issues (missing alt tags, ARIA roles, contrast, etc)."

# (sub-score, threshold, suggestion), each applied when the score is below the threshold
THRESHOLD_SUGGESTIONS = (
    ("performance", 50, "Optimize images, enable caching, and minify scripts."),
    ("seo", 70, "Add meta tags, improve titles, and fix broken links."),
    ("accessibility", 70, "Improve keyboard navigation and ARIA attributes."),
    ("security", 70, "Implement HTTPS, strong headers, and input sanitization."),
)


def grade_for(score: int) -> tuple:
    for minimum, grade, label in GRADES:
        if score >= minimum:
            return grade, label
    return FLOOR_GRADE


def compute_smart_score(
    performance: Optional[float] = None,
    seo: Optional[float] = None,
    security: Optional[float] = None,
    accessibility: Optional[float] = None,
    header_checks: Sequence[str] = (),
    axe: Optional[Mapping[str, Any]] = None,
) -> SmartScore:
    """Combine the four sub-scores and the findings into the smart score."""
    scores = {
        "performance": performance,
        "seo": seo,
        "security": security,
        "accessibility": accessibility,
    }
    base = sum(weight * (scores[name] or 0) for name, weight in WEIGHTS.items())

    penalties = 0
    suggestions = []

    if header_checks:
        penalties += HEADER_PENALTY
        suggestions.append(HEADER_SUGGESTION)

    violations = (axe or {}).get("violations") or []
    if violations:
        penalties += min(len(violations) * VIOLATION_PENALTY, MAX_VIOLATION_PENALTY)
        suggestions.append(ACCESSIBILITY_SUGGESTION)

    for name, threshold, suggestion in THRESHOLD_SUGGESTIONS:
        value = scores[name]
        if value is not None and value < threshold:
            suggestions.append(suggestion)

    final_score = max(0, min(100, round_half_up(base - penalties)))
    grade, label = grade_for(final_score)

    return SmartScore(
        final_score=final_score,
        grade=grade,
        label=label,
        penalties=penalties,
        suggestions=suggestions,
    )
