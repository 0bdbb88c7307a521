#!/usr/bin/env python3
"""
ATS Resume Optimizer - CLI Entry Point

Takes a PDF, DOCX or TXT resume and a job description, outputs an optimized
resume document with a higher ATS keyword match.

Usage:
    python -m ats_optimizer.main --resume input/resume.pdf --job input/job_description.txt
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import Settings
from .errors import ResumeProcessingError
from .extractor import KeywordClass
from .generator import SUPPORTED_FORMATS, MatchReportGenerator, download_filename
from .pipeline import ProcessedResult, ResumePipeline


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="ATS Resume Optimizer - Rewrite your resume for a job description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m ats_optimizer.main --resume input/resume.pdf --job input/job_description.txt
    python -m ats_optimizer.main -r resume.docx -j job.txt -f docx -o custom_output/
    python -m ats_optimizer.main -r resume.txt --job-text "Python developer with AWS" --report
        """
    )

    parser.add_argument(
        "-r", "--resume",
        type=str,
        required=True,
        help="Path to resume file (pdf, docx or txt)"
    )

    job = parser.add_mutually_exclusive_group()
    job.add_argument(
        "-j", "--job",
        type=str,
        help="Path to job description text file"
    )
    job.add_argument(
        "--job-text",
        type=str,
        default="",
        help="Job description given inline"
    )

    parser.add_argument(
        "-f", "--format",
        choices=SUPPORTED_FORMATS,
        default=None,
        help="Output format (default: pdf, or ATS_DEFAULT_FORMAT)"
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default="output",
        help="Output directory (default: output/)"
    )

    parser.add_argument(
        "--report",
        action="store_true",
        help="Also write match_report.md"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    return parser.parse_args(argv)


def load_file(path: str) -> bytes:
    """Load raw bytes from a file."""
    file_path = Path(path)
    if not file_path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)

    try:
        return file_path.read_bytes()
    except OSError as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
        sys.exit(1)


def save_file(path: Path, content: bytes) -> None:
    """Save bytes to a file."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    except OSError as e:
        print(f"Error writing {path}: {e}", file=sys.stderr)
        sys.exit(1)


def print_summary(result: ProcessedResult, verbose: bool = False) -> None:
    """Print a summary of the matching results."""
    match = result.match

    print("\n" + "=" * 60)
    print("ATS RESUME OPTIMIZER - MATCH SUMMARY")
    print("=" * 60)

    filled = int(result.score / 10)
    bar = "█" * filled + "░" * (10 - filled)
    print(f"\nATS Score: [{bar}] {result.score}%")

    print(f"\nMatched Keywords: {len(match.matched_keywords)}")
    print(f"Partial Matches: {len(match.partial_keywords)}")
    print(f"Missing Keywords: {len(match.missing_keywords)}")

    if verbose:
        if result.injected:
            print("\n--- Keywords Added ---")
            print(f"  {', '.join(result.injected)}")

        if match.missing_keywords:
            print("\n--- Missing Keywords ---")
            print(f"  {', '.join(match.missing_keywords[:15])}")

        for rec in match.recommendations:
            print(f"  * {rec}")

    print("\n" + "=" * 60)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = Settings.from_env()
    fmt = args.format or settings.default_format
    pipeline = ResumePipeline(settings=settings)

    print("ATS Resume Optimizer")
    print("-" * 40)

    print(f"Loading resume: {args.resume}")
    resume_bytes = load_file(args.resume)

    job_description = args.job_text
    if args.job:
        print(f"Loading job description: {args.job}")
        job_description = load_file(args.job).decode("utf-8", errors="replace")

    try:
        print("\nOptimizing resume...")
        result = pipeline.process(resume_bytes, filename=args.resume, job_description=job_description)
        profile = result.profile

        if args.verbose:
            print(f"  Found {len(profile)} unique keywords")
            print(f"  Technical: {len(profile.by_class(KeywordClass.TECHNICAL))}")
            print(f"  Phrases: {len(profile.by_class(KeywordClass.PHRASE))}")

        output_dir = Path(args.output)
        resume_path = output_dir / download_filename(fmt)
        print(f"\nSaving optimized resume: {resume_path}")
        save_file(resume_path, pipeline.export(result.optimized_content, fmt))
    except ResumeProcessingError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    if args.report:
        report_path = output_dir / "match_report.md"
        report = MatchReportGenerator(profile, result.match, result.injected).generate()
        print(f"Saving match report: {report_path}")
        save_file(report_path, report.encode("utf-8"))

    print_summary(result, args.verbose)
    print(f"\nOutput files saved to: {output_dir}/")

    if result.score >= 80:
        print("\n✓ Excellent match! Resume is well-optimized for this position.")
        return 0
    elif result.score >= 60:
        print("\n⚠ Good match. Review the missing keywords for further improvement.")
        return 0
    else:
        print("\n⚠ Low match. Consider adding more relevant experience or skills.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
