import pytest

from ats_optimizer.matcher import ATSScorer, calculate_ats_score, match_keywords


def _filler(count, word="lorem"):
    return " ".join([word] * count)


def test_absent_keyword_scores_zero():
    result = match_keywords(_filler(100), ["python"])

    assert result.matched_weight == 0
    assert result.score == 0
    assert result.missing_keywords == ["python"]


def test_full_coverage_scores_at_least_eighty():
    text = "python docker leadership experience " + _filler(996)

    assert calculate_ats_score(text, ["python", "docker", "leadership", "experience"]) >= 80


def test_floor_applies_above_seventy_percent_weight():
    # 9 of 12.5 weight matched = 72%, density too low for a bonus
    text = "python docker aws " + _filler(997)

    result = match_keywords(text, ["python", "docker", "aws", "leadership", "experience"])

    assert result.total_weight == pytest.approx(12.5)
    assert result.matched_weight == pytest.approx(9.0)
    assert result.score == 80


def test_density_bonus():
    # base 3/11 = 27.3%, density 3 / (50 / 100) = 6, bonus min(10, 8) = 8
    text = "python " + _filler(49)

    result = match_keywords(text, ["python", "docker", "kubernetes", "leadership"])

    assert result.keyword_density == pytest.approx(6.0)
    assert result.score == 35


def test_density_bonus_is_capped_and_score_clamped():
    assert calculate_ats_score("python docker", ["python", "docker"]) == 100


def test_partial_credit_for_multi_word_technical_keyword():
    result = match_keywords("I enjoy learning new things", ["machine learning"])

    assert result.partial_keywords == ["machine learning"]
    assert result.matched_weight == pytest.approx(2.4)
    assert result.score == 90


def test_no_partial_credit_for_single_word_or_non_technical():
    result = match_keywords("delivery of goods by python experts", ["project delivery", "docker"])

    assert result.partial_keywords == []
    assert result.matched_weight == 0
    assert result.score == 0


def test_matching_is_case_insensitive():
    result = match_keywords("Senior PYTHON Developer", ["python"])

    assert result.matched_keywords == ["python"]


@pytest.mark.parametrize("text,keywords", [
    ("", ["python"]),
    ("python", []),
    ("", []),
])
def test_empty_inputs_score_zero(text, keywords):
    assert calculate_ats_score(text, keywords) == 0


@pytest.mark.parametrize("text,keywords", [
    ("python", ["python"]),
    ("python " * 500, ["python", "docker"]),
    ("leadership communication", ["leadership", "communication", "experience", "machine learning"]),
    (_filler(3), ["python", "docker", "aws"]),
    ("learning " * 2, ["machine learning", "data analysis"]),
])
def test_score_is_always_within_bounds(text, keywords):
    assert 0 <= calculate_ats_score(text, keywords) <= 100


def test_weights_by_class():
    scorer = ATSScorer(["python", "project delivery", "leadership", "experience"])

    assert scorer.weight_of("python") == 3.0
    assert scorer.weight_of("project delivery") == 2.5
    assert scorer.weight_of("leadership") == 2.0
    assert scorer.weight_of("experience") == 1.5


def test_recommendations_list_missing_technical_keywords():
    result = match_keywords(_filler(100), ["python", "docker", "leadership"])

    assert any("python" in rec and "docker" in rec for rec in result.recommendations)
