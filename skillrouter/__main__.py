"""Command line entry point.

    skillrouter skills [--type TYPE] [--json]
    skillrouter show NAME
    skillrouter detect [PATH] [--json]
    skillrouter route "QUERY" [--project PATH | --type TYPE ...] [--json] [--fetch]
    skillrouter serve [--host HOST] [--port PORT]
"""

import argparse
import asyncio
import json
import logging
import sys

from skillrouter.config.settings import get_settings
from skillrouter.errors import SkillRouterError
from skillrouter.models.detection import ProjectType
from skillrouter.prompts import build_skill_context
from skillrouter.remote.guidelines import GuidelineFetcher
from skillrouter.routing.detector import detect_project
from skillrouter.routing.router import SkillRouter

logger = logging.getLogger("skillrouter")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillrouter",
        description="Pick front-end skill documents for a project and a request.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_skills = sub.add_parser("skills", help="List loaded skills")
    p_skills.add_argument("--type", dest="project_type", help="Only skills for this project type")
    p_skills.add_argument("--json", action="store_true")

    p_show = sub.add_parser("show", help="Print one skill document")
    p_show.add_argument("name")

    p_detect = sub.add_parser("detect", help="Detect the project type of a directory")
    p_detect.add_argument("path", nargs="?", default=".")
    p_detect.add_argument("--json", action="store_true")

    p_route = sub.add_parser("route", help="Select skills for a request")
    p_route.add_argument("query")
    p_route.add_argument("--project", default=None, help="Project directory to detect (default: cwd)")
    p_route.add_argument(
        "--type",
        dest="project_types",
        action="append",
        help="Project type, overrides detection (repeatable)",
    )
    p_route.add_argument("--max", dest="max_skills", type=positive_int, default=None)
    p_route.add_argument("--fetch", action="store_true", help="Fetch live guideline text")
    p_route.add_argument("--json", action="store_true")

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)

    return parser


def _cmd_skills(router: SkillRouter, args: argparse.Namespace) -> int:
    types = [ProjectType.parse(args.project_type)] if args.project_type else []
    skills = router.available(types)
    if args.json:
        print(json.dumps([s.summary() for s in skills], indent=2))
        return 0
    for s in skills:
        scope = ", ".join(s.project_types) or "any"
        print(f"{s.name:<24} [{scope}] {s.description}")
    return 0


def _cmd_show(router: SkillRouter, args: argparse.Namespace) -> int:
    skill = router.get(args.name)
    print(f"# {skill.name}")
    if skill.description:
        print(skill.description)
    print()
    print(skill.prompt_text)
    return 0


def _cmd_detect(args: argparse.Namespace) -> int:
    result = detect_project(args.path)
    if args.json:
        print(result.model_dump_json(indent=2))
        return 0
    if result.is_unknown:
        print(f"{result.root}: no front-end project type detected")
        return 0
    print(f"{result.root}: {', '.join(t.value for t in result.project_types)}")
    for line in result.evidence:
        print(f"  {line}")
    return 0


async def _cmd_route(router: SkillRouter, args: argparse.Namespace) -> int:
    root = None if args.project_types else (args.project or ".")
    result = router.route(
        args.query,
        project_types=args.project_types,
        root=root,
        max_skills=args.max_skills,
    )

    guidelines = None
    if args.fetch:
        selected = [router.skills[m.name] for m in result.selected]
        async with GuidelineFetcher() as fetcher:
            guidelines = await fetcher.fetch_for(selected)

    if args.json:
        payload = result.model_dump(mode="json")
        if guidelines:
            payload["guidelines"] = {name: doc.text for name, doc in guidelines.items()}
        print(json.dumps(payload, indent=2))
        return 0

    print(build_skill_context(result, router.skills, guidelines))
    if result.skipped:
        print()
        for m in result.skipped:
            print(f"(skipped {m.name}: {m.skip_reason})", file=sys.stderr)
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "skillrouter.api.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_level=settings.log_level.lower(),
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "detect":
            return _cmd_detect(args)
        if args.command == "serve":
            return _cmd_serve(args)

        router = SkillRouter.from_settings(settings)
        if args.command == "skills":
            return _cmd_skills(router, args)
        if args.command == "show":
            return _cmd_show(router, args)
        return asyncio.run(_cmd_route(router, args))
    except SkillRouterError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
