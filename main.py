#!/usr/bin/env python3
"""CLI for CareerOptimizer: generate a CV draft or check a CV for skill gaps."""

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from groq import APIError

from career_optimizer.courses import enrol_url, summarize_gaps
from career_optimizer.cv_draft import draft_to_markdown, selected_skills
from career_optimizer.cv_input import encode_file
from career_optimizer.cv_pdf import render_cv_pdf
from career_optimizer.errors import CareerOptimizerError
from career_optimizer.web_service import check_cv, generate_cv


def _read_text_arg(inline: str | None, path: Path | None, label: str) -> str:
    if inline:
        return inline
    if path:
        if not path.exists():
            raise FileNotFoundError(f"{label} file not found: {path}")
        return path.read_text(encoding="utf-8")
    raise ValueError(f"Provide {label.lower()} inline or via file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate CV drafts and check CVs for skill gaps using Groq AI."
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="Groq API key (or set GROQ_API_KEY in .env)",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use canned responses instead of calling the model",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw JSON result",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Draft CV sections from career details")
    gen.add_argument("--details", type=str, help="Career details as inline text")
    gen.add_argument("--details-file", type=Path, help="Path to a text file with career details")
    gen.add_argument("--target-job", type=str, required=True, help="Target job title")
    gen.add_argument(
        "--skill",
        action="append",
        default=[],
        help="Suggested skill to add to Expertise (repeatable)",
    )
    gen.add_argument("--pdf", type=Path, default=None, help="Also write the draft to this PDF path")

    chk = sub.add_parser("check", help="Compare a CV against a job description")
    cv_src = chk.add_mutually_exclusive_group(required=True)
    cv_src.add_argument("--cv-pdf", type=Path, help="Path to the CV PDF file")
    cv_src.add_argument("--cv-text-file", type=Path, help="Path to a plain-text CV")
    chk.add_argument("--jd-text", type=str, help="Job description as inline text")
    chk.add_argument("--jd-file", type=Path, help="Path to the job description text file")

    return parser


def run_generate(args, api_key: str | None) -> None:
    details = _read_text_arg(args.details, args.details_file, "Career details")
    draft = generate_cv(api_key, details, args.target_job, use_mock=args.mock)
    selected = selected_skills(args.skill)

    if args.json:
        print(json.dumps(draft, indent=2))
    else:
        print("=== Targeted Skill Recommendations ===\n")
        for skill in draft["suggestedSkills"]:
            mark = "✓" if skill["name"] in selected else "+"
            print(f"  {mark} {skill['name']} ({skill['category']})")
        print()
        print(draft_to_markdown(draft, args.target_job, selected))

    if args.pdf:
        args.pdf.write_bytes(render_cv_pdf(draft, args.target_job, selected))
        print(f"\nCV draft saved to: {args.pdf}", file=sys.stderr)


def run_check(args, api_key: str | None) -> None:
    jd_text = _read_text_arg(args.jd_text, args.jd_file, "Job description")
    if args.cv_pdf:
        if not args.cv_pdf.exists():
            raise FileNotFoundError(f"CV PDF not found: {args.cv_pdf}")
        cv_input = {"file": encode_file(args.cv_pdf.read_bytes())}
    else:
        cv_input = {"text": _read_text_arg(None, args.cv_text_file, "CV text")}

    result = check_cv(api_key, cv_input, jd_text, use_mock=args.mock)

    if args.json:
        print(json.dumps(result, indent=2))
        return
    print("=== Strategic Skill Gaps ===")
    print(summarize_gaps(result) + "\n")
    for gap in result["skillGaps"]:
        print(f"{gap['skill']}")
        print(f"  Why:    {gap['reason']}")
        print(f"  Course: {gap['suggestedCourse']} [{gap['platform']}]")
        url = enrol_url(gap)
        if url:
            print(f"  Enrol:  {url}")
        print()


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    api_key = args.api_key or os.getenv("GROQ_API_KEY")

    try:
        if args.command == "generate":
            run_generate(args, api_key)
        else:
            run_check(args, api_key)
    except (CareerOptimizerError, ValueError, FileNotFoundError, APIError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
