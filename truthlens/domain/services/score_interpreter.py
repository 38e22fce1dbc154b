"""Turn model narratives or raw content into normalized credibility results.

Three pure operations live here:

- ``extract_score`` pulls a 0-100 score out of free-form model text.
- ``synthesize_stats`` derives illustrative source and fact-check counts and
  the issue list from a score.
- ``estimate_heuristic_credibility`` scores content by keyword scan when no
  model response is available.

The statistics are synthetic: they are a function of the score plus bounded
jitter and must never be presented as measured.
"""

import random
import re
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from pydantic import BaseModel

from ..models.analysis import FactCheckStats, SourceStats

SCORE_PATTERN = re.compile(r"(?:credibility score|score)[:\s]*(\d+)(?:/100|%|\s|$)", re.IGNORECASE)
BARE_SCORE_PATTERN = re.compile(r"(\d+)(?:/100|%)")
DEFAULT_SCORE = 50

MIN_SCORE = 0
MAX_SCORE = 100

# The keyword estimator never claims certainty in either direction.
HEURISTIC_BASELINE = 70
HEURISTIC_FLOOR = 5
HEURISTIC_CEILING = 95


class CredibilityTier(str, Enum):
    """Confidence bands driving issue lists."""

    HIGH = "high"  # [80, 100]
    MODERATE = "moderate"  # [60, 80)
    LOW = "low"  # [40, 60)
    CRITICAL = "critical"  # [0, 40)


class SynthesizedStats(BaseModel):
    """Presentation data derived from a confidence score."""

    source_stats: SourceStats
    fact_check_stats: FactCheckStats
    issues: List[str]


class KeywordRule(NamedTuple):
    """A weighted keyword check for the heuristic estimator."""

    phrases: Tuple[str, ...]
    weight: int
    require_all: bool = False

    def matches(self, text: str) -> bool:
        check = all if self.require_all else any
        return check(phrase in text for phrase in self.phrases)


HEURISTIC_RULES: Tuple[KeywordRule, ...] = (
    # Sensational or conspiratorial framing
    KeywordRule(("100%", "never fails"), -25),
    KeywordRule(("cure all", "miracle"), -30),
    KeywordRule(("they don't want you to know",), -35),
    KeywordRule(("secret", "government"), -20, require_all=True),
    KeywordRule(("big pharma", "conspiracy"), -25),
    # Institutional sourcing and hedged language
    KeywordRule(("peer reviewed", "clinical trial"), 20),
    KeywordRule(("university", "professor"), 15),
    KeywordRule(("according to", "research shows"), 10),
    KeywordRule(("reuters", "associated press"), 25),
    KeywordRule(("may", "suggests", "indicates"), 10),
)

_TIER_ISSUES = {
    CredibilityTier.HIGH: [
        "✅ High content credibility confirmed",
        "🔍 Analysis passed all credibility checks",
        "📊 Strong reliability indicators detected",
    ],
    CredibilityTier.MODERATE: [
        "⚠️ Moderate credibility concerns detected",
        "🔍 Some claims require additional verification",
        "📊 Mixed reliability signals identified",
    ],
    CredibilityTier.LOW: [
        "🔴 Significant credibility issues flagged",
        "⚠️ Multiple reliability concerns detected",
        "🚨 Content requires careful fact-checking",
    ],
    CredibilityTier.CRITICAL: [
        "🚨 High-risk misinformation patterns detected",
        "❌ Critical credibility failures identified",
        "⚠️ Extreme caution advised - likely false content",
    ],
}


def clamp(value: int, low: int, high: int) -> int:
    """Clamp an integer to the closed range [low, high]."""
    return max(low, min(high, value))


def extract_score(narrative: str) -> int:
    """Extract a credibility score from free-form model text.

    The model is asked to write ``Credibility Score: X/100`` but may not
    comply, so a labelled score is preferred, then any ``X/100`` or ``X%``,
    then the neutral default of 50.

    Args:
        narrative: Model response text

    Returns:
        Score clamped to [0, 100]
    """
    match = SCORE_PATTERN.search(narrative) or BARE_SCORE_PATTERN.search(narrative)
    score = int(match.group(1)) if match else DEFAULT_SCORE
    return clamp(score, MIN_SCORE, MAX_SCORE)


def tier_for(confidence: int) -> CredibilityTier:
    """Get the tier a confidence score falls in."""
    if confidence >= 80:
        return CredibilityTier.HIGH
    if confidence >= 60:
        return CredibilityTier.MODERATE
    if confidence >= 40:
        return CredibilityTier.LOW
    return CredibilityTier.CRITICAL


def credibility_label(confidence: int) -> str:
    """Get the display label for a score."""
    if confidence >= 85:
        return "Highly Credible"
    if confidence >= 70:
        return "Mostly Credible"
    if confidence >= 55:
        return "Moderately Credible"
    if confidence >= 40:
        return "Questionable"
    return "Low Credibility"


def synthesize_stats(
    confidence: int,
    used_remote_model: bool = True,
    rng: Optional[random.Random] = None,
) -> SynthesizedStats:
    """Derive presentation statistics and issues from a score.

    Expected reliable counts grow and expected conflicting counts shrink
    with confidence. The jitter only varies the display.

    Args:
        confidence: Score in [0, 100]
        used_remote_model: Whether the score came from the hosted model
        rng: Random source, injectable for reproducible output

    Returns:
        Synthesized source stats, fact-check stats and issues
    """
    rng = rng or random.Random()
    confidence = clamp(confidence, MIN_SCORE, MAX_SCORE)

    source_stats = SourceStats(
        reliable_count=confidence * 10 // 100 + 2,
        questionable_count=(100 - confidence) * 6 // 100 + 1,
        total_checked=rng.randint(0, 4) + 12,
    )
    fact_check_stats = FactCheckStats(
        verified=rng.randint(0, 3) + 4 if confidence > 70 else rng.randint(0, 1) + 1,
        conflicting=rng.randint(0, 3) + 3 if confidence < 40 else rng.randint(0, 1),
        unverified=rng.randint(0, 1) + 1,
    )

    issues = list(_TIER_ISSUES[tier_for(confidence)])
    if used_remote_model:
        issues.append("🤖 Analysis powered by Groq AI")
        issues.append(f"🎯 AI Confidence Level: {confidence}%")
        issues.append("🚀 Real-time AI fact-checking active")
    else:
        issues.append("🎭 Pattern-based analysis (not AI model output)")
        issues.append(f"🎯 Pattern Confidence Level: {confidence}%")
        issues.append("🛟 Fallback mode active")

    return SynthesizedStats(
        source_stats=source_stats,
        fact_check_stats=fact_check_stats,
        issues=issues,
    )


def estimate_heuristic_credibility(content: str) -> int:
    """Score content with a case-insensitive keyword scan.

    Starts at a neutral 70 and adds independent fixed weights. The result
    is clamped to [5, 95], not [0, 100].

    Args:
        content: Raw user content

    Returns:
        Heuristic score in [5, 95]
    """
    text = content.lower()
    score = HEURISTIC_BASELINE + sum(rule.weight for rule in HEURISTIC_RULES if rule.matches(text))
    return clamp(score, HEURISTIC_FLOOR, HEURISTIC_CEILING)


def remote_narrative(analysis: str, model: Optional[str], provider: str) -> str:
    """Frame model text with attribution and technical details."""
    return (
        f"🤖 {provider.upper()} ANALYSIS - REAL TIME\n\n"
        f"{analysis}\n\n"
        "🚀 TECHNICAL DETAILS:\n"
        f"• Model: {model or 'unknown'}\n"
        f"• Provider: {provider} (Real API)\n"
        "• Analysis Type: AI credibility assessment\n\n"
        "✅ This assessment was written by the hosted model."
    )


def fallback_narrative(confidence: int) -> str:
    """Build the templated explanation for a heuristic score.

    The wording states plainly that the score comes from keyword patterns
    and is not model output.
    """
    narrative = f"🎭 FALLBACK MODE (pattern analysis)\n\nCREDIBILITY ASSESSMENT: {confidence}/100 "

    if confidence >= 70:
        narrative += (
            "(GENERALLY RELIABLE)\n\n"
            "✅ PATTERN ASSESSMENT: GOOD CREDIBILITY\n"
            "• Content structure suggests reliability\n"
            "• No major misinformation indicators detected\n"
            "• Language patterns appear professional\n"
            "• Meets basic credibility standards"
        )
    elif confidence >= 50:
        narrative += (
            "(MODERATE RELIABILITY)\n\n"
            "⚠️ PATTERN ASSESSMENT: MIXED SIGNALS\n"
            "• Some reliability concerns identified\n"
            "• Content requires additional verification\n"
            "• Language patterns show potential bias\n"
            "• Cross-reference recommended"
        )
    else:
        narrative += (
            "(LOW RELIABILITY)\n\n"
            "🚨 PATTERN ASSESSMENT: HIGH RISK\n"
            "• Multiple misinformation indicators\n"
            "• Content matches known false claim patterns\n"
            "• Language shows bias and manipulation\n"
            "• Likely contains false information"
        )

    narrative += (
        "\n\n🔍 ANALYSIS DETAILS:\n"
        "• Keyword-weighted credibility scoring\n"
        "• Detection of sensational and conspiratorial phrasing\n"
        "• Recognition of institutional sourcing and hedged language\n"
        "• Limited to surface-level indicators\n\n"
        "📋 LIMITATIONS:\n"
        "This is pattern matching, not real AI model output. "
        "Configure a Groq API key for model-based assessment.\n\n"
        f"🎯 CONFIDENCE SCORE: {confidence}% (Pattern-Based Assessment)"
    )
    return narrative
