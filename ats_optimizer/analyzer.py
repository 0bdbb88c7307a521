"""
Plain-text resume analyzer and parser.
Splits extracted resume text into typed sections using header-line recognition.
"""

import re
from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import Iterable, List, Optional, Tuple


class SectionType(Enum):
    """Types of resume sections."""
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    ACHIEVEMENTS = "achievements"
    PROJECTS = "projects"
    LANGUAGES = "languages"
    OTHER = "other"


BULLET = "• "

# Leading "-", "•" or "*" markers, with or without following whitespace
_BULLET_PATTERN = re.compile(r'^[-•*]\s*')

# Characters XML 1.0 cannot carry (NUL, BEL and other C0 controls, lone surrogates)
_CONTROL_CHARS = re.compile('[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]')


def strip_control_chars(text: str) -> str:
    """Replace characters a DOCX paragraph cannot hold with spaces."""
    return _CONTROL_CHARS.sub(' ', text)


@dataclass(frozen=True)
class Section:
    """A titled, typed block of resume lines."""
    title: str
    type: SectionType
    content: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "\n".join(self.content)

    @property
    def bullets(self) -> List[str]:
        return [line for line in self.content if line.startswith(BULLET)]

    def with_content(self, content: Iterable[str]) -> "Section":
        return replace(self, content=tuple(content))

    def render(self) -> str:
        return "\n".join((self.title,) + self.content)


@dataclass(frozen=True)
class _ParserState:
    """Accumulator threaded through the line fold."""
    closed: Tuple[Section, ...] = ()
    current: Optional[Section] = None

    def flush(self) -> Tuple[Section, ...]:
        if self.current is None:
            return self.closed
        return self.closed + (self.current,)


class ResumeSectionParser:
    """Parse plain-text resumes into sections."""

    # Section header mappings, matched against the trimmed upper-cased line
    SECTION_MAPPINGS = {
        'SUMMARY': SectionType.SUMMARY,
        'OBJECTIVE': SectionType.SUMMARY,
        'PROFESSIONAL SUMMARY': SectionType.SUMMARY,
        'CAREER OBJECTIVE': SectionType.SUMMARY,
        'PROFILE': SectionType.SUMMARY,
        'EXPERIENCE': SectionType.EXPERIENCE,
        'WORK EXPERIENCE': SectionType.EXPERIENCE,
        'PROFESSIONAL EXPERIENCE': SectionType.EXPERIENCE,
        'EMPLOYMENT HISTORY': SectionType.EXPERIENCE,
        'EDUCATION': SectionType.EDUCATION,
        'ACADEMIC BACKGROUND': SectionType.EDUCATION,
        'SKILLS': SectionType.SKILLS,
        'TECHNICAL SKILLS': SectionType.SKILLS,
        'CORE COMPETENCIES': SectionType.SKILLS,
        'ACHIEVEMENTS': SectionType.ACHIEVEMENTS,
        'ACCOMPLISHMENTS': SectionType.ACHIEVEMENTS,
        'AWARDS': SectionType.ACHIEVEMENTS,
        'PROJECTS': SectionType.PROJECTS,
        'PERSONAL PROJECTS': SectionType.PROJECTS,
        'LANGUAGES': SectionType.LANGUAGES,
    }

    IMPLICIT_TITLE = "OTHER"

    def parse(self, text: str) -> List[Section]:
        """Parse resume text into an ordered list of sections."""
        lines = strip_control_chars(text or "").splitlines()
        state = reduce(self._consume_line, lines, _ParserState())
        return list(state.flush())

    def identify_header(self, line: str) -> Optional[SectionType]:
        """Return the section type if the line is a recognized header."""
        return self.SECTION_MAPPINGS.get(line.strip().upper())

    def _consume_line(self, state: _ParserState, line: str) -> _ParserState:
        section_type = self.identify_header(line)
        if section_type is not None:
            opened = Section(title=line.strip(), type=section_type)
            return _ParserState(closed=state.flush(), current=opened)

        cleaned = self.normalize_line(line)
        if not cleaned:
            return state

        current = state.current or Section(title=self.IMPLICIT_TITLE, type=SectionType.OTHER)
        return replace(state, current=current.with_content(current.content + (cleaned,)))

    @staticmethod
    def normalize_line(line: str) -> str:
        """Collapse whitespace and canonicalize bullet markers to '• '."""
        cleaned = ' '.join(line.split())
        if _BULLET_PATTERN.match(cleaned):
            body = _BULLET_PATTERN.sub('', cleaned, count=1)
            return BULLET + body if body else cleaned
        return cleaned


def parse_sections(text: str) -> List[Section]:
    """Convenience function to parse resume text into sections."""
    parser = ResumeSectionParser()
    return parser.parse(text)


def render_sections(sections: Iterable[Section]) -> str:
    """Rejoin sections as title plus lines, separated by blank lines."""
    return "\n\n".join(section.render() for section in sections)
