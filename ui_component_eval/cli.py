"""Command-line entry point: ``ui-component-eval``."""

from __future__ import annotations

import argparse
import logging
import sys

import jinja2
from dotenv import find_dotenv, load_dotenv

from ui_component_eval.backends import BackendRegistry
from ui_component_eval.config import apply_overrides, load_config, parse_technologies, validate_inputs
from ui_component_eval.exceptions import CompletionFailure, ConfigurationError
from ui_component_eval.report import format_summary
from ui_component_eval.runner import run_evaluation

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUN_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser.  Every override defaults to ``None`` (keep config value)."""
    parser = argparse.ArgumentParser(
        prog="ui-component-eval",
        description="Generate UI components with an LLM and judge them against yes/no questions.",
    )
    parser.add_argument("--config", default=None, help="YAML config file (default: built-in defaults)")
    parser.add_argument(
        "--instructions", "-i", dest="instruction_file", default=None, help="Component instruction document"
    )
    parser.add_argument("--dataset", "-d", dest="dataset_file", default=None, help="JSON or YAML scenario dataset")
    parser.add_argument(
        "--output",
        "-o",
        dest="output_file",
        default=None,
        help="Report path; {component} and {timestamp} are substituted",
    )
    parser.add_argument(
        "--backend",
        dest="type",
        default=None,
        help=f"LLM backend ({', '.join(BackendRegistry.available()) or 'none installed'})",
    )
    parser.add_argument("--model", "-m", default=None, help="Generation model identifier")
    parser.add_argument("--judge-model", default=None, help="Judgment model identifier (default: --model)")
    parser.add_argument(
        "--technologies", "-t", default=None, help="Comma-separated technology list, e.g. 'React,TypeScript'"
    )
    parser.add_argument("--ui-library", default=None, help="UI library providing the component")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    parser.add_argument("--max-workers", type=int, default=None, help="Scenarios evaluated concurrently")
    parser.add_argument(
        "--isolate-failures",
        action="store_true",
        default=None,
        help="Record failed completions as failed scenarios instead of aborting",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = load_config(args.config)
        config = apply_overrides(
            config,
            instruction_file=args.instruction_file,
            dataset_file=args.dataset_file,
            output_file=args.output_file,
            type=args.type,
            model=args.model,
            judge_model=args.judge_model,
            technologies=parse_technologies(args.technologies) if args.technologies is not None else None,
            ui_library=args.ui_library,
            timeout=args.timeout,
            max_workers=args.max_workers,
            isolate_failures=args.isolate_failures,
        )
        try:
            api_key_env = BackendRegistry.get(config.backend.type).api_key_env
        except KeyError as exc:
            raise ConfigurationError(str(exc.args[0])) from exc
        validate_inputs(config, api_key_env=api_key_env)
    except ValueError as exc:
        return _report_config_errors([str(exc)])
    except ConfigurationError as exc:
        return _report_config_errors(exc.errors)

    try:
        outcome = run_evaluation(config)
    except CompletionFailure as exc:
        logger.error("Evaluation aborted, no report written: %s", exc)
        return EXIT_RUN_FAILED
    except ConfigurationError as exc:
        return _report_config_errors(exc.errors)
    except (ValueError, jinja2.TemplateError) as exc:
        return _report_config_errors([str(exc)])

    print(format_summary(outcome.scenarios, outcome.report.statistics, outcome.report_path))
    return EXIT_OK


def _report_config_errors(errors: list[str]) -> int:
    print("Configuration errors:", file=sys.stderr)
    for error in errors:
        print(f"  - {error}", file=sys.stderr)
    return EXIT_CONFIG_ERROR
