"""
Content optimizer.
Rewrites resume sections so that missing job keywords appear in the text.
Every rewrite appends to an existing line; original content is never removed.
"""

import logging
from collections import Counter
from typing import Callable, Dict, Iterable, List, Sequence, Union

from .analyzer import BULLET, Section, SectionType, render_sections
from .errors import EmptyOutputError
from .extractor import KeywordClass, KeywordProfile

logger = logging.getLogger(__name__)


# Verbs that read naturally at the end of an experience bullet
ACHIEVEMENT_WORDS = frozenset({'improved', 'increased', 'reduced', 'achieved', 'developed'})

# Lower rank sorts first when choosing which missing keywords to inject
CLASS_PRIORITY = {
    KeywordClass.TECHNICAL: 0,
    KeywordClass.SOFT: 1,
    KeywordClass.PHRASE: 2,
    KeywordClass.COMMON: 3,
}

MAX_SUMMARY_KEYWORDS = 3
MAX_BULLET_KEYWORDS = 2
MAX_SKILL_ADDITIONS = 5

SectionHandler = Callable[[Section, KeywordProfile], Section]


def join_terms(terms: Sequence[str]) -> str:
    """Join terms as "a", "a and b" or "a, b and c"."""
    if len(terms) <= 1:
        return ''.join(terms)
    return f"{', '.join(terms[:-1])} and {terms[-1]}"


def capitalize_first(term: str) -> str:
    return term[:1].upper() + term[1:]


class ContentOptimizer:
    """Inject missing keywords into resume sections, one strategy per section type."""

    def __init__(self, keywords: Union[KeywordProfile, Iterable[str]]):
        if isinstance(keywords, KeywordProfile):
            self.profile = keywords
        else:
            self.profile = KeywordProfile.from_keywords(keywords)
        self.injected: Counter = Counter()
        self.handlers: Dict[SectionType, SectionHandler] = {
            SectionType.SUMMARY: self._optimize_summary,
            SectionType.EXPERIENCE: self._optimize_experience,
            SectionType.SKILLS: self._optimize_skills,
            SectionType.ACHIEVEMENTS: self._optimize_achievements,
            SectionType.PROJECTS: self._optimize_projects,
        }

    def optimize(self, sections: Sequence[Section]) -> str:
        """Optimize all sections and return the rejoined text."""
        optimized = self.optimize_sections(sections)
        text = render_sections(optimized)

        if not text.strip() and any(s.title.strip() or s.content for s in sections):
            raise EmptyOutputError("Content optimizer")

        logger.debug(
            "Optimized %d sections, injected %d keywords",
            len(sections), sum(self.injected.values()),
        )
        return text

    def optimize_sections(self, sections: Sequence[Section]) -> List[Section]:
        return [self.optimize_section(section) for section in sections]

    def optimize_section(self, section: Section) -> Section:
        handler = self.handlers.get(section.type)
        if handler is None:
            return section
        return handler(section, self.profile)

    def _rank(self, keywords: Iterable[str]) -> List[str]:
        """Stable sort of keywords by weight-class priority."""
        return sorted(keywords, key=lambda k: CLASS_PRIORITY[self.profile.class_of(k)])

    def _record(self, keywords: Iterable[str]):
        for keyword in keywords:
            self.injected[keyword] += 1

    def _optimize_summary(self, section: Section, profile: KeywordProfile) -> Section:
        """Append an expertise sentence and a track-record sentence."""
        missing = profile.missing_from(section.text)
        if not missing:
            return section

        expertise = self._rank(missing)[:MAX_SUMMARY_KEYWORDS]
        track_record = missing[:MAX_SUMMARY_KEYWORDS]
        sentences = (
            f"Expertise in {join_terms([capitalize_first(k) for k in expertise])}. "
            f"Proven track record in {join_terms([capitalize_first(k) for k in track_record])}."
        )
        self._record(dict.fromkeys(expertise + track_record))

        lines = list(section.content)
        if lines:
            lines[-1] = f"{lines[-1]} {sentences}"
        else:
            lines.append(sentences)
        return section.with_content(lines)

    def _optimize_experience(self, section: Section, profile: KeywordProfile) -> Section:
        """Append " utilizing <kw1> and <kw2>" to each bullet missing keywords."""
        lines = []
        for line in section.content:
            if not line.startswith(BULLET):
                lines.append(line)
                continue

            missing = profile.missing_from(line)
            if not missing:
                lines.append(line)
                continue

            preferred = [
                k for k in missing
                if profile.class_of(k) is KeywordClass.TECHNICAL or k in ACHIEVEMENT_WORDS
            ]
            others = [k for k in missing if k not in preferred]
            chosen = (preferred + others)[:MAX_BULLET_KEYWORDS]
            self._record(chosen)
            lines.append(f"{line} utilizing {join_terms(chosen)}")

        return section.with_content(lines)

    def _optimize_skills(self, section: Section, profile: KeywordProfile) -> Section:
        """Extend "Technical ..." and "Soft ..." skill lists with missing keywords."""
        section_text = section.text.lower()
        added = set()
        lines = []

        for line in section.content:
            label, sep, items = line.partition(':')
            # Substring test on the whole line; "technical" wins over "soft"
            lowered = line.lower()
            wants_technical = 'technical' in lowered
            wants_soft = not wants_technical and 'soft' in lowered
            if not sep or not (wants_technical or wants_soft):
                lines.append(line)
                continue

            existing = [s.strip() for s in items.split(',') if s.strip()]
            existing_lower = {s.lower() for s in existing}

            candidates = []
            if wants_technical:
                candidates.extend(profile.by_class(KeywordClass.TECHNICAL))
            if wants_soft:
                candidates.extend(profile.by_class(KeywordClass.SOFT))

            additions = []
            for keyword in candidates:
                if len(additions) >= MAX_SKILL_ADDITIONS:
                    break
                if keyword in existing_lower or keyword in section_text or keyword in added:
                    continue
                additions.append(keyword)
                added.add(keyword)

            if not additions:
                lines.append(line)
                continue

            self._record(additions)
            lines.append(f"{label.strip()}: {', '.join(existing + additions)}")

        return section.with_content(lines)

    def _optimize_achievements(self, section: Section, profile: KeywordProfile) -> Section:
        """Append " using <first missing keyword>" to each bullet."""
        lines = []
        for line in section.content:
            missing = profile.missing_from(line) if line.startswith(BULLET) else []
            if missing:
                self._record(missing[:1])
                lines.append(f"{line} using {missing[0]}")
            else:
                lines.append(line)
        return section.with_content(lines)

    def _optimize_projects(self, section: Section, profile: KeywordProfile) -> Section:
        """Append " using <kw1> and <kw2>" with missing technical keywords."""
        lines = []
        for line in section.content:
            missing = []
            if line.startswith(BULLET):
                missing = [
                    k for k in profile.missing_from(line)
                    if profile.class_of(k) is KeywordClass.TECHNICAL
                ]
            if missing:
                chosen = missing[:MAX_BULLET_KEYWORDS]
                self._record(chosen)
                lines.append(f"{line} using {join_terms(chosen)}")
            else:
                lines.append(line)
        return section.with_content(lines)


def optimize(sections: Sequence[Section], keywords: Union[KeywordProfile, Iterable[str]]) -> str:
    """Convenience function to optimize parsed sections against keywords."""
    optimizer = ContentOptimizer(keywords)
    return optimizer.optimize(sections)
