"""shot-planner CLI entry point."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="shot-planner",
        description="Shot planner — four-act story to storyboard shot breakdown",
    )
    parser.add_argument(
        "--log-level", default=None, metavar="LEVEL",
        help="Logging level (default: SHOT_PLANNER_LOG_LEVEL or INFO)",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    breakdown_parser = sub.add_parser(
        "breakdown",
        help="Break an acts JSON file into a validated Breakdown JSON",
    )
    breakdown_parser.add_argument(
        "--acts", required=True, metavar="acts.json",
        help="Path to an acts JSON file",
    )
    breakdown_parser.add_argument(
        "--output", required=True, metavar="breakdown.json",
        help="Destination path for the canonical Breakdown JSON",
    )
    breakdown_parser.add_argument(
        "--target-shots", type=int, default=None, metavar="N",
        help="Requested number of shots (default: configured shot count)",
    )
    breakdown_parser.add_argument(
        "--no-inserts", action="store_true",
        help="Do not generate insert shots",
    )
    breakdown_parser.add_argument(
        "--default-template", action="store_true",
        help="Use the even-split template instead of the proportional breakdown",
    )

    validate_acts_parser = sub.add_parser("validate-acts", help="Validate an acts JSON file")
    validate_acts_parser.add_argument(
        "--acts", required=True, metavar="acts.json",
        help="Path to an acts JSON file",
    )

    validate_breakdown_parser = sub.add_parser(
        "validate-breakdown",
        help="Validate an existing Breakdown JSON file against the contract",
    )
    validate_breakdown_parser.add_argument(
        "--breakdown", required=True, metavar="breakdown.json",
        help="Path to a Breakdown JSON file",
    )

    export_parser = sub.add_parser("export", help="Export a planning project as JSON or Marp Markdown")
    export_parser.add_argument(
        "--acts", required=True, metavar="acts.json",
        help="Path to an acts JSON file",
    )
    export_parser.add_argument(
        "--breakdown", default=None, metavar="breakdown.json",
        help="Existing Breakdown JSON; computed from the acts when omitted",
    )
    export_parser.add_argument(
        "--format", choices=("json", "markdown"), default="json",
        help="Export format (default: json)",
    )
    export_parser.add_argument(
        "--output", required=True, metavar="PATH",
        help="Destination path",
    )
    export_parser.add_argument(
        "--project-id", default=None,
        help="Project identifier (default: acts file name without extension)",
    )
    export_parser.add_argument(
        "--target-shots", type=int, default=None, metavar="N",
        help="Requested number of shots when no breakdown is given (default: configured shot count)",
    )
    export_parser.add_argument(
        "--no-inserts", action="store_true",
        help="Do not generate insert shots when no breakdown is given",
    )
    args = parser.parse_args(argv)

    from shot_planner.config import get_settings
    from shot_planner.log import configure_logging

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    if args.command == "breakdown":
        try:
            produce_breakdown(
                Path(args.acts),
                Path(args.output),
                target_shot_count=(
                    args.target_shots if args.target_shots is not None else settings.default_shot_count
                ),
                include_inserts=settings.include_inserts and not args.no_inserts,
                use_template=args.default_template,
            )
        except Exception as exc:
            logger.debug("breakdown failed", exc_info=True)
            print(f"ERROR: {exc}")
            sys.exit(1)
        print(f"OK: wrote {args.output}")
        sys.exit(0)
    elif args.command == "validate-acts":
        try:
            errors, warnings = validate_acts_file(Path(args.acts))
        except Exception:
            print("ERROR: invalid Acts")
            sys.exit(1)
        for warning in warnings:
            print(f"WARNING: {warning}")
        if errors:
            for error in errors:
                logger.error(error)
            print("ERROR: invalid Acts")
            sys.exit(1)
        sys.exit(0)
    elif args.command == "validate-breakdown":
        import jsonschema
        try:
            validate_breakdown_file(Path(args.breakdown))
        except jsonschema.ValidationError as exc:
            print(f"ERROR: invalid Breakdown — {exc.message}")
            sys.exit(1)
        except Exception as exc:
            print(f"ERROR: {exc}")
            sys.exit(1)
        print("OK: Breakdown is valid")
        sys.exit(0)
    elif args.command == "export":
        try:
            export_file(
                Path(args.acts),
                Path(args.output),
                fmt=args.format,
                breakdown_path=Path(args.breakdown) if args.breakdown else None,
                project_id=args.project_id,
                target_shot_count=(
                    args.target_shots if args.target_shots is not None else settings.default_shot_count
                ),
                include_inserts=settings.include_inserts and not args.no_inserts,
            )
        except Exception as exc:
            logger.debug("export failed", exc_info=True)
            print(f"ERROR: {exc}")
            sys.exit(1)
        print(f"OK: wrote {args.output}")
        sys.exit(0)
    else:
        parser.print_help()
        sys.exit(1)


def _load_acts_document(acts_path: Path):
    """Read, contract-check and model-validate an acts file."""
    from shot_planner.contract_validate import validate_acts_contract
    from shot_planner.schemas.acts_v1 import load_acts
    from shot_planner.validator import read_json_file

    raw = read_json_file(acts_path)
    validate_acts_contract(raw)
    return load_acts(raw)


def validate_acts_file(acts_path: Path):
    """Return (errors, warnings) for an acts file.

    Raises ``ValueError`` for unreadable files, ``jsonschema.ValidationError``
    for contract violations and pydantic ``ValidationError`` for model ones.
    """
    from shot_planner.validator import validate_planning_input, validate_story_acts

    document = _load_acts_document(acts_path)
    story = validate_story_acts(document.acts)
    errors = [f"{e.code}: {e.message}" for e in story.errors]
    warnings = list(story.warnings)
    if document.input.title or document.input.logline:
        planning = validate_planning_input(document.input)
        errors.extend(f"{e.code}: {e.message}" for e in planning.errors)
    return errors, warnings


def validate_breakdown_file(breakdown_path: Path) -> None:
    """Load a Breakdown JSON file and validate it against the contract.

    Raises ``jsonschema.ValidationError`` if the file does not conform to
    ``contracts/Breakdown.v1.json``.
    """
    from shot_planner.contract_validate import validate_breakdown_contract

    data = json.loads(breakdown_path.read_text(encoding="utf-8"))
    validate_breakdown_contract(data)


def produce_breakdown(
    acts_path: Path,
    output_path: Path,
    *,
    target_shot_count: int,
    include_inserts: bool = True,
    use_template: bool = False,
) -> None:
    """Acts file → canonical Breakdown file, validated before it is written.

    The output file is never written when validation fails.
    """
    from shot_planner.breakdown.planner import breakdown_story, default_breakdown
    from shot_planner.contract_validate import validate_breakdown_model
    from shot_planner.schemas.breakdown_v1 import dump_breakdown

    document = _load_acts_document(acts_path)
    if use_template:
        result = default_breakdown(document.acts)
    else:
        result = breakdown_story(
            document.acts,
            document.input,
            target_shot_count,
            include_inserts=include_inserts,
        )
    validate_breakdown_model(result)
    logger.info(
        "breakdown %s: %d shots, %d inserts, distribution %s",
        result.breakdown_id,
        len(result.shots),
        len(result.insert_shots),
        result.distribution,
    )
    output_path.write_text(dump_breakdown(result), encoding="utf-8")


def export_file(
    acts_path: Path,
    output_path: Path,
    *,
    fmt: str = "json",
    breakdown_path: Optional[Path] = None,
    project_id: Optional[str] = None,
    target_shot_count: int = 12,
    include_inserts: bool = True,
) -> None:
    from shot_planner.breakdown.planner import breakdown_story
    from shot_planner.contract_validate import validate_breakdown_contract
    from shot_planner.export import build_project, export_project_json, export_project_markdown
    from shot_planner.schemas.breakdown_v1 import load_breakdown
    from shot_planner.validator import read_json_file

    document = _load_acts_document(acts_path)
    if breakdown_path is not None:
        raw = read_json_file(breakdown_path)
        validate_breakdown_contract(raw)
        result = load_breakdown(raw)
    else:
        result = breakdown_story(
            document.acts,
            document.input,
            target_shot_count,
            include_inserts=include_inserts,
        )

    project = build_project(project_id or acts_path.stem, document, result)
    if fmt == "markdown":
        content = export_project_markdown(project)
    else:
        content = export_project_json(project)
    output_path.write_text(content, encoding="utf-8")
