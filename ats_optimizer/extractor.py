"""
Keyword extractor for job descriptions.
Extracts tokens, short phrases and lexicon terms, and classifies each keyword
as technical, phrase, soft or common.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Tuple

logger = logging.getLogger(__name__)


# Words dropped from single-token keywords
STOP_WORDS = frozenset({
    'the', 'and', 'for', 'with', 'from', 'have', 'were', 'this', 'that',
    'these', 'those', 'they', 'their', 'there',
})

# Generic resume and soft-skill terms, always part of the keyword set
COMMON_KEYWORDS: Tuple[str, ...] = (
    'experience', 'skills', 'education', 'projects', 'achievements',
    'development', 'programming', 'software', 'engineering', 'communication',
    'problem-solving', 'teamwork', 'leadership', 'collaboration', 'management',
    'analytical', 'organized', 'detail-oriented', 'results-driven', 'innovative',
    'strategic', 'efficient', 'proactive', 'motivated', 'adaptable',
    'creative', 'responsible', 'dedicated', 'self-starter', 'time management',
    'attention to detail', 'critical thinking', 'stakeholder', 'mentoring', 'documentation',
    'planning', 'initiative', 'reliable', 'flexible', 'professional',
)

# Technical terms, added only when the job description mentions them
TECHNICAL_KEYWORDS: Tuple[str, ...] = (
    'javascript', 'python', 'java', 'c++', 'sql', 'html', 'css',
    'react', 'angular', 'vue', 'node.js', 'express', 'mongodb',
    'aws', 'docker', 'kubernetes', 'git', 'agile', 'scrum',
    'machine learning', 'data analysis', 'cloud computing',
    'typescript', 'next.js', 'graphql', 'rest api', 'microservices',
    'ci/cd', 'devops', 'testing', 'debugging', 'code review',
    'web development', 'mobile development', 'database', 'api',
    'frontend', 'backend', 'full stack', 'ui/ux', 'responsive design',
)

SOFT_KEYWORDS: Tuple[str, ...] = (
    'leadership', 'communication', 'problem solving', 'problem-solving', 'team',
    'teamwork', 'management', 'analytical', 'creative', 'organized',
    'detail-oriented', 'results-driven', 'innovative', 'collaborative',
    'collaboration', 'strategic', 'efficient', 'proactive', 'responsible',
    'dedicated', 'motivated', 'self-starter', 'team player',
    'attention to detail', 'time management', 'critical thinking', 'adaptable',
)

# Punctuation trimmed from either end of a whitespace token
_TOKEN_STRIP = '.,;:!?()[]{}"\'`'


class KeywordClass(Enum):
    """Weight class of a keyword."""
    TECHNICAL = "technical"
    PHRASE = "phrase"
    SOFT = "soft"
    COMMON = "common"


def normalize_keyword(keyword: str) -> str:
    """Lower-case and trim a keyword."""
    return keyword.strip().lower()


def _mentions_any(keyword: str, terms: Iterable[str]) -> bool:
    # Plain substring test, so "api" also hits "rapid"
    normalized = normalize_keyword(keyword)
    return any(term in normalized for term in terms)


def is_technical(keyword: str) -> bool:
    return _mentions_any(keyword, TECHNICAL_KEYWORDS)


def is_soft_skill(keyword: str) -> bool:
    return _mentions_any(keyword, SOFT_KEYWORDS)


def classify_keyword(keyword: str) -> KeywordClass:
    """Classify a keyword; technical wins over phrase, phrase over soft."""
    normalized = normalize_keyword(keyword)
    if is_technical(normalized):
        return KeywordClass.TECHNICAL
    if ' ' in normalized:
        return KeywordClass.PHRASE
    if is_soft_skill(normalized):
        return KeywordClass.SOFT
    return KeywordClass.COMMON


@dataclass
class KeywordProfile:
    """Ordered, deduplicated keywords together with their weight classes."""
    keywords: List[str] = field(default_factory=list)
    classes: Dict[str, KeywordClass] = field(default_factory=dict)

    @classmethod
    def from_keywords(cls, keywords: Iterable[str]) -> "KeywordProfile":
        profile = cls()
        for keyword in keywords:
            profile.add(keyword)
        return profile

    def add(self, keyword: str) -> bool:
        """Add a keyword if its normalized form is new and non-empty."""
        normalized = normalize_keyword(keyword)
        if not normalized or normalized in self.classes:
            return False
        self.keywords.append(normalized)
        self.classes[normalized] = classify_keyword(normalized)
        return True

    def class_of(self, keyword: str) -> KeywordClass:
        normalized = normalize_keyword(keyword)
        return self.classes.get(normalized) or classify_keyword(normalized)

    def by_class(self, *classes: KeywordClass) -> List[str]:
        """Keywords belonging to any of the given classes, in insertion order."""
        return [k for k in self.keywords if self.classes[k] in classes]

    def missing_from(self, text: str) -> List[str]:
        """Keywords that do not occur (case-insensitively) in text."""
        text_lower = text.lower()
        return [k for k in self.keywords if k not in text_lower]

    def __iter__(self) -> Iterator[str]:
        return iter(self.keywords)

    def __len__(self) -> int:
        return len(self.keywords)

    def __contains__(self, keyword: object) -> bool:
        return isinstance(keyword, str) and normalize_keyword(keyword) in self.classes


class JobDescriptionExtractor:
    """Extract candidate keywords from job descriptions."""

    def __init__(self, min_token_length: int = 3, min_phrase_length: int = 5):
        self.min_token_length = min_token_length
        self.min_phrase_length = min_phrase_length
        self.phrase_split_pattern = re.compile(r'[.,]')

    def extract(self, job_description: str) -> KeywordProfile:
        """Extract all keywords from a job description."""
        profile = KeywordProfile()
        text = (job_description or "").lower()

        for token in self._extract_tokens(text):
            profile.add(token)

        for phrase in self._extract_phrases(text):
            profile.add(phrase)

        for keyword in COMMON_KEYWORDS:
            profile.add(keyword)

        for keyword in TECHNICAL_KEYWORDS:
            if keyword in text:
                profile.add(keyword)

        logger.debug(
            "Extracted %d keywords (%d technical)",
            len(profile), len(profile.by_class(KeywordClass.TECHNICAL)),
        )
        return profile

    def _extract_tokens(self, text: str) -> List[str]:
        """Whitespace tokens longer than the minimum, minus stop words."""
        tokens = []
        for raw in text.split():
            token = raw.strip(_TOKEN_STRIP)
            if len(token) > self.min_token_length and token not in STOP_WORDS:
                tokens.append(token)
        return tokens

    def _extract_phrases(self, text: str) -> List[str]:
        """Sentence fragments split on '.' and ','.

        Fragments containing "and" or "the" anywhere, even inside another
        word, are skipped, so "brand management" never becomes a phrase.
        """
        phrases = []
        for fragment in self.phrase_split_pattern.split(text):
            phrase = ' '.join(fragment.split())
            if len(phrase) > self.min_phrase_length and 'and' not in phrase and 'the' not in phrase:
                phrases.append(phrase)
        return phrases


def extract_keyword_profile(job_description: str) -> KeywordProfile:
    """Convenience function returning the classified keyword profile."""
    extractor = JobDescriptionExtractor()
    return extractor.extract(job_description)


def extract_keywords(job_description: str) -> List[str]:
    """Convenience function to extract keywords from a job description."""
    return list(extract_keyword_profile(job_description))
