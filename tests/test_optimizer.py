import pytest

from ats_optimizer.analyzer import Section, SectionType, parse_sections, render_sections
from ats_optimizer.optimizer import ContentOptimizer, join_terms, optimize


def _optimize_one(section, keywords):
    return ContentOptimizer(keywords).optimize_section(section)


def test_join_terms():
    assert join_terms([]) == ""
    assert join_terms(["a"]) == "a"
    assert join_terms(["a", "b"]) == "a and b"
    assert join_terms(["a", "b", "c"]) == "a, b and c"


def test_summary_appends_expertise_and_track_record():
    section = Section(
        "SUMMARY", SectionType.SUMMARY,
        ("Software engineer with 5 years building web services.",),
    )

    result = _optimize_one(section, ["python", "leadership", "experience", "docker"])

    assert result.content == (
        "Software engineer with 5 years building web services."
        " Expertise in Python, Docker and Leadership."
        " Proven track record in Python, Leadership and Experience.",
    )


def test_summary_without_missing_keywords_is_unchanged():
    section = Section("SUMMARY", SectionType.SUMMARY, ("Python developer with leadership",))

    assert _optimize_one(section, ["python", "leadership"]) == section


def test_summary_with_no_prose_gets_sentences_as_new_line():
    section = Section("SUMMARY", SectionType.SUMMARY, ())

    result = _optimize_one(section, ["python"])

    assert result.content == ("Expertise in Python. Proven track record in Python.",)


def test_experience_bullets_prefer_technical_and_achievement_words():
    section = Section(
        "EXPERIENCE", SectionType.EXPERIENCE,
        ("Acme Corp", "• Built dashboards", "• Used Python daily"),
    )

    result = _optimize_one(section, ["communication", "python", "docker", "improved"])

    assert result.content == (
        "Acme Corp",
        "• Built dashboards utilizing python and docker",
        "• Used Python daily utilizing docker and improved",
    )


def test_experience_single_missing_keyword():
    section = Section("EXPERIENCE", SectionType.EXPERIENCE, ("• Wrote python services",))

    result = _optimize_one(section, ["python", "docker"])

    assert result.content == ("• Wrote python services utilizing docker",)


def test_skills_lines_are_extended_by_class():
    section = Section(
        "SKILLS", SectionType.SKILLS,
        ("Technical Skills: Python, SQL", "Soft Skills: Teamwork", "Tools: Jira"),
    )

    result = _optimize_one(
        section, ["python", "docker", "kubernetes", "leadership", "communication", "sql"],
    )

    assert result.content == (
        "Technical Skills: Python, SQL, docker, kubernetes",
        "Soft Skills: Teamwork, leadership, communication",
        "Tools: Jira",
    )


def test_skills_additions_are_capped_at_five():
    section = Section("SKILLS", SectionType.SKILLS, ("Technical Skills: Excel",))
    keywords = ["python", "docker", "kubernetes", "graphql", "react", "angular", "mongodb"]

    result = _optimize_one(section, keywords)

    assert result.content == ("Technical Skills: Excel, python, docker, kubernetes, graphql, react",)


def test_skills_lines_match_technical_and_soft_as_substrings():
    section = Section(
        "SKILLS", SectionType.SKILLS,
        ("TechnicalSkills: Excel", "Softskills: Teamwork"),
    )

    result = _optimize_one(section, ["python", "docker", "leadership"])

    assert result.content == (
        "TechnicalSkills: Excel, python, docker",
        "Softskills: Teamwork, leadership",
    )


def test_software_line_counts_as_soft_skill_line():
    # Coarse on purpose: "software" contains "soft"
    section = Section("SKILLS", SectionType.SKILLS, ("Software: Excel",))

    result = _optimize_one(section, ["leadership"])

    assert result.content == ("Software: Excel, leadership",)


def test_technical_wins_when_line_names_both():
    section = Section("SKILLS", SectionType.SKILLS, ("Technical & Soft Skills: Excel",))

    result = _optimize_one(section, ["python", "leadership"])

    assert result.content == ("Technical & Soft Skills: Excel, python",)


def test_achievements_append_first_missing_keyword():
    section = Section(
        "ACHIEVEMENTS", SectionType.ACHIEVEMENTS,
        ("• Won hackathon", "• Python award", "Dean's list"),
    )

    result = _optimize_one(section, ["python", "teamwork"])

    assert result.content == (
        "• Won hackathon using python",
        "• Python award using teamwork",
        "Dean's list",
    )


def test_projects_use_only_technical_keywords():
    section = Section(
        "PROJECTS", SectionType.PROJECTS,
        ("• Chat app", "Description line"),
    )

    result = _optimize_one(section, ["leadership", "react", "graphql", "docker"])

    assert result.content == ("• Chat app using react and graphql", "Description line")
    assert _optimize_one(section, ["leadership"]) == section


@pytest.mark.parametrize("section_type", [
    SectionType.EDUCATION, SectionType.LANGUAGES, SectionType.OTHER,
])
def test_other_section_types_pass_through(section_type):
    section = Section("TITLE", section_type, ("• Some line",))

    assert _optimize_one(section, ["python", "docker"]) == section


def test_optimize_never_removes_original_text(sample_resume, sample_job):
    from ats_optimizer.extractor import extract_keywords

    sections = parse_sections(sample_resume)
    optimized = ContentOptimizer(extract_keywords(sample_job)).optimize_sections(sections)

    for before, after in zip(sections, optimized):
        assert before.title == after.title
        assert len(before.content) == len(after.content)
        for old_line, new_line in zip(before.content, after.content):
            assert new_line.startswith(old_line)


@pytest.mark.parametrize("section", [
    Section("SUMMARY", SectionType.SUMMARY, ("Python and docker expert",)),
    Section("EXPERIENCE", SectionType.EXPERIENCE, ("• Shipped python on docker",)),
    Section("SKILLS", SectionType.SKILLS, ("Technical Skills: python, docker",)),
    Section("ACHIEVEMENTS", SectionType.ACHIEVEMENTS, ("• python docker award",)),
    Section("PROJECTS", SectionType.PROJECTS, ("• docker image for python",)),
])
def test_fully_covered_sections_are_not_rewritten(section):
    optimizer = ContentOptimizer(["python", "docker"])

    assert optimizer.optimize_section(section) == section
    assert not optimizer.injected


def test_second_pass_does_not_inject_again():
    sections = [Section("EXPERIENCE", SectionType.EXPERIENCE, ("• Built dashboards",))]
    keywords = ["python", "docker"]

    once = optimize(sections, keywords)
    twice = optimize(parse_sections(once), keywords)

    assert once == "EXPERIENCE\n• Built dashboards utilizing python and docker"
    assert twice == once


def test_optimize_records_injected_keywords():
    optimizer = ContentOptimizer(["python"])
    optimizer.optimize([
        Section("EXPERIENCE", SectionType.EXPERIENCE, ("• A", "• B")),
    ])

    assert optimizer.injected["python"] == 2


def test_optimize_rejoins_sections_with_blank_lines():
    sections = parse_sections("EDUCATION\nBS\nLANGUAGES\nEnglish")

    assert optimize(sections, []) == render_sections(sections)


def test_optimize_empty_sections():
    assert optimize([], ["python"]) == ""
