"""
Keyword matcher and ATS scorer.
Scores resume text against job keywords by weighted coverage and density.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Union

from .extractor import KeywordClass, KeywordProfile

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Result of matching resume text against job keywords."""
    matched_keywords: List[str] = field(default_factory=list)
    partial_keywords: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)
    matched_weight: float = 0.0
    total_weight: float = 0.0
    word_count: int = 0
    keyword_density: float = 0.0
    keyword_coverage: float = 0.0
    score: int = 0
    recommendations: List[str] = field(default_factory=list)


class ATSScorer:
    """Approximate an ATS keyword scan of resume text."""

    # Weights per keyword class
    CLASS_WEIGHTS = {
        KeywordClass.TECHNICAL: 3.0,
        KeywordClass.PHRASE: 2.5,
        KeywordClass.SOFT: 2.0,
        KeywordClass.COMMON: 1.5,
    }
    PARTIAL_MATCH_CREDIT = 0.8
    DENSITY_THRESHOLD = 2.0
    DENSITY_BONUS_FACTOR = 2.0
    MAX_DENSITY_BONUS = 10.0
    FLOOR_COVERAGE = 0.7
    FLOOR_SCORE = 80

    def __init__(self, keywords: Union[KeywordProfile, Iterable[str]]):
        if isinstance(keywords, KeywordProfile):
            self.profile = keywords
        else:
            self.profile = KeywordProfile.from_keywords(keywords)

    def weight_of(self, keyword: str) -> float:
        return self.CLASS_WEIGHTS[self.profile.class_of(keyword)]

    def match(self, text: str) -> MatchResult:
        """Perform full matching analysis."""
        result = MatchResult()
        text_lower = (text or "").lower()
        result.word_count = len(text_lower.split())

        for keyword in self.profile:
            weight = self.weight_of(keyword)
            result.total_weight += weight

            if keyword in text_lower:
                result.matched_weight += weight
                result.matched_keywords.append(keyword)
            elif self._is_partial_match(keyword, text_lower):
                result.matched_weight += weight * self.PARTIAL_MATCH_CREDIT
                result.partial_keywords.append(keyword)
            else:
                result.missing_keywords.append(keyword)

        if len(self.profile):
            result.keyword_coverage = len(result.matched_keywords) / len(self.profile)
        if result.word_count:
            result.keyword_density = result.matched_weight / (result.word_count / 100)

        result.score = self._score(result)
        result.recommendations = self._generate_recommendations(result)

        logger.debug(
            "Matched %.1f of %.1f weight (density %.2f), score %d",
            result.matched_weight, result.total_weight, result.keyword_density, result.score,
        )
        return result

    def score(self, text: str) -> int:
        return self.match(text).score

    def _is_partial_match(self, keyword: str, text_lower: str) -> bool:
        """Multi-word technical keywords earn partial credit for any single word."""
        if self.profile.class_of(keyword) is not KeywordClass.TECHNICAL:
            return False
        words = keyword.split()
        if len(words) < 2:
            return False
        return any(word in text_lower for word in words)

    def _score(self, result: MatchResult) -> int:
        if result.total_weight <= 0:
            return 0

        score = result.matched_weight / result.total_weight * 100

        if result.keyword_density > self.DENSITY_THRESHOLD:
            bonus = (result.keyword_density - self.DENSITY_THRESHOLD) * self.DENSITY_BONUS_FACTOR
            score += min(self.MAX_DENSITY_BONUS, bonus)

        if result.matched_weight > result.total_weight * self.FLOOR_COVERAGE:
            score = max(self.FLOOR_SCORE, score)

        # Round half up, then cap: the bonus and floor can push past 100
        return max(0, min(100, int(math.floor(score + 0.5))))

    def _generate_recommendations(self, result: MatchResult) -> List[str]:
        """Generate recommendations for improving the resume."""
        recommendations = []

        missing_technical = [
            k for k in result.missing_keywords
            if self.profile.class_of(k) is KeywordClass.TECHNICAL
        ]
        if missing_technical:
            recommendations.append(
                f"Consider adding these technical skills: {', '.join(missing_technical[:5])}"
            )

        if result.partial_keywords:
            recommendations.append(
                f"Use the exact phrasing for: {', '.join(result.partial_keywords[:5])}"
            )

        if result.total_weight and result.score < 60:
            recommendations.append(
                f"ATS score is {result.score}%. Consider tailoring content more."
            )

        return recommendations


def match_keywords(text: str, keywords: Union[KeywordProfile, Iterable[str]]) -> MatchResult:
    """Convenience function to match text against keywords."""
    scorer = ATSScorer(keywords)
    return scorer.match(text)


def calculate_ats_score(text: str, keywords: Union[KeywordProfile, Iterable[str]]) -> int:
    """Convenience function returning only the 0-100 score."""
    return match_keywords(text, keywords).score
