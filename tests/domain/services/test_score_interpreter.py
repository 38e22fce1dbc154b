"""Tests for score extraction, statistics synthesis and the keyword heuristic."""

import random

import pytest

from truthlens.domain.services.score_interpreter import (
    CredibilityTier,
    credibility_label,
    estimate_heuristic_credibility,
    extract_score,
    fallback_narrative,
    remote_narrative,
    synthesize_stats,
    tier_for,
)


@pytest.mark.parametrize(
    "narrative, expected",
    [
        ("Credibility Score: 73/100", 73),
        ("Score: 12%", 12),
        ("no numeric content here", 50),
        ("rating 150/100", 100),
        ("CREDIBILITY SCORE: 88/100 overall", 88),
        ("The score 64 reflects mixed sourcing.", 64),
        ("Credibility Score: 250", 100),
        ("Score: 7/10", 50),
        ("Roughly 35% of the claims hold up", 35),
    ],
)
def test_extract_score(narrative: str, expected: int):
    """Test the two-tier score extraction with its default and clamp."""
    assert extract_score(narrative) == expected


def test_extract_score_prefers_labelled_score():
    """Test that a labelled score wins over an earlier bare percentage."""
    narrative = "About 90% of the article is opinion.\nCredibility Score: 40/100"
    assert extract_score(narrative) == 40


@pytest.mark.parametrize(
    "confidence, tier",
    [
        (0, CredibilityTier.CRITICAL),
        (39, CredibilityTier.CRITICAL),
        (40, CredibilityTier.LOW),
        (59, CredibilityTier.LOW),
        (60, CredibilityTier.MODERATE),
        (79, CredibilityTier.MODERATE),
        (80, CredibilityTier.HIGH),
        (100, CredibilityTier.HIGH),
    ],
)
def test_tier_boundaries(confidence: int, tier: CredibilityTier):
    """Test that tiers include their lower bound and exclude their upper bound."""
    assert tier_for(confidence) == tier


@pytest.mark.parametrize(
    "confidence, label",
    [
        (95, "Highly Credible"),
        (85, "Highly Credible"),
        (84, "Mostly Credible"),
        (70, "Mostly Credible"),
        (55, "Moderately Credible"),
        (40, "Questionable"),
        (39, "Low Credibility"),
    ],
)
def test_credibility_label(confidence: int, label: str):
    """Test display labels."""
    assert credibility_label(confidence) == label


def test_synthesized_counts_are_non_negative(rng: random.Random):
    """Test that every count is non-negative for every score."""
    for confidence in range(0, 101):
        stats = synthesize_stats(confidence, rng=rng)
        assert stats.source_stats.reliable_count >= 0
        assert stats.source_stats.questionable_count >= 0
        assert stats.source_stats.total_checked >= 0
        assert stats.fact_check_stats.verified >= 0
        assert stats.fact_check_stats.conflicting >= 0
        assert stats.fact_check_stats.unverified >= 0


def test_reliable_count_is_non_decreasing(rng: random.Random):
    """Test that reliable sources never drop as confidence rises."""
    counts = [synthesize_stats(c, rng=rng).source_stats.reliable_count for c in range(0, 101)]
    assert counts == sorted(counts)
    assert counts[0] == 2
    assert counts[-1] == 12


def test_conflicting_count_falls_across_tiers():
    """Test that conflicting claims fall as confidence crosses the tier boundaries."""
    samples = {}
    for confidence in (0, 39, 40, 59, 60, 79, 80, 100):
        samples[confidence] = [
            synthesize_stats(confidence, rng=random.Random(seed)).fact_check_stats.conflicting
            for seed in range(50)
        ]

    # Below 40 at least 3 conflicting claims, from 40 upward at most 1
    assert min(samples[0]) >= 3 and min(samples[39]) >= 3
    for confidence in (40, 59, 60, 79, 80, 100):
        assert max(samples[confidence]) <= 1

    low_tier_mean = sum(samples[39]) / len(samples[39])
    high_tier_mean = sum(samples[80]) / len(samples[80])
    assert low_tier_mean > high_tier_mean


def test_verified_count_rises_above_seventy():
    """Test that verified claims jump for confident scores."""
    low = [synthesize_stats(70, rng=random.Random(s)).fact_check_stats.verified for s in range(50)]
    high = [synthesize_stats(71, rng=random.Random(s)).fact_check_stats.verified for s in range(50)]
    assert max(low) <= 2
    assert min(high) >= 4


def test_issues_follow_tier_and_end_with_informational_items(rng: random.Random):
    """Test tiered issue selection plus the three appended items."""
    high = synthesize_stats(85, rng=rng).issues
    critical = synthesize_stats(10, rng=rng).issues

    assert len(high) == 6
    assert high[0].endswith("High content credibility confirmed")
    assert critical[0].endswith("High-risk misinformation patterns detected")
    assert high[3] == "🤖 Analysis powered by Groq AI"
    assert high[4] == "🎯 AI Confidence Level: 85%"
    assert "active" in high[5]


def test_fallback_issues_do_not_claim_model_output(rng: random.Random):
    """Test that fallback issues are labelled as pattern based."""
    issues = synthesize_stats(55, used_remote_model=False, rng=rng).issues
    assert len(issues) == 6
    assert not any("Groq" in issue for issue in issues)
    assert "not AI model output" in issues[3]
    assert issues[4] == "🎯 Pattern Confidence Level: 55%"


def test_same_seed_gives_same_stats():
    """Test that statistics are reproducible with an injected random source."""
    first = synthesize_stats(62, rng=random.Random(7))
    second = synthesize_stats(62, rng=random.Random(7))
    assert first == second


def test_heuristic_penalizes_sensational_content():
    """Test that sensational framing scores below the neutral baseline."""
    score = estimate_heuristic_credibility(
        "This miracle cure is 100% guaranteed and they don't want you to know"
    )
    assert 5 <= score < 70
    assert score == 5


def test_heuristic_rewards_institutional_sourcing():
    """Test that institutional sourcing scores above the neutral baseline."""
    score = estimate_heuristic_credibility(
        "According to a peer reviewed clinical trial at a major university"
    )
    assert 70 < score <= 95
    assert score == 95


def test_heuristic_is_deterministic():
    """Test that identical content always yields the identical score."""
    content = "Research shows the secret government program may be a conspiracy."
    scores = {estimate_heuristic_credibility(content) for _ in range(20)}
    assert len(scores) == 1


@pytest.mark.parametrize(
    "content, expected",
    [
        ("The weather is nice today", 70),
        ("THE WEATHER IS NICE TODAY", 70),
        ("The recipe is a family secret", 70),
        ("The secret government program", 50),
        ("Big Pharma hides it", 45),
        ("This product never fails", 45),
        ("A professor explained the result", 85),
        ("The data suggests a small effect", 80),
        ("Reported by the Associated Press", 95),
    ],
)
def test_heuristic_weights(content: str, expected: int):
    """Test individual keyword weights against the baseline of 70."""
    assert estimate_heuristic_credibility(content) == expected


def test_heuristic_clamps_to_asymmetric_bounds():
    """Test that the heuristic stays within [5, 95]."""
    worst = "miracle cure all, 100% proven, they don't want you to know, big pharma secret government"
    best = "Reuters: according to a peer reviewed university study, results may help"
    assert estimate_heuristic_credibility(worst) == 5
    assert estimate_heuristic_credibility(best) == 95


@pytest.mark.parametrize(
    "confidence, heading",
    [
        (70, "GENERALLY RELIABLE"),
        (69, "MODERATE RELIABILITY"),
        (50, "MODERATE RELIABILITY"),
        (49, "LOW RELIABILITY"),
    ],
)
def test_fallback_narrative_tiers(confidence: int, heading: str):
    """Test that the fallback narrative varies by tier and carries a disclaimer."""
    narrative = fallback_narrative(confidence)
    assert heading in narrative
    assert f"CREDIBILITY ASSESSMENT: {confidence}/100" in narrative
    assert "not real AI model output" in narrative


def test_remote_narrative_wraps_model_text():
    """Test that remote narratives keep the model text and attribution."""
    narrative = remote_narrative("Credibility Score: 80/100", "llama3-8b-8192", "Groq AI")
    assert "Credibility Score: 80/100" in narrative
    assert "Model: llama3-8b-8192" in narrative
    assert "Provider: Groq AI" in narrative
