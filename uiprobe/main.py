import argparse
import logging
import sys

from playwright.sync_api import Error as PlaywrightError

from uiprobe import config
from uiprobe.compiler.compiler import Compiler
from uiprobe.config import RunSettings
from uiprobe.errors import ScenarioFileError
from uiprobe.harness.session import BrowserSession, SuiteRunner, filter_scenarios
from uiprobe.locator.locator import FieldLocator
from uiprobe.providers.api import APIProvider
from uiprobe.providers.yaml_file import YamlScenarioProvider
from uiprobe.report import exit_code, format_summary, format_verdict, write_json_report


def _load_scenarios(args):
    if args.api_url:
        provider = APIProvider(args.api_url)
    else:
        provider = YamlScenarioProvider(args.scenarios)
    return provider.get_scenarios(), provider.target_url


def _settings(args, catalog_url=None) -> RunSettings:
    overrides = {"target_url": args.url or catalog_url or config.TARGET_URL}
    if getattr(args, "headed", False):
        overrides["headless"] = False
    if getattr(args, "ignore_https_errors", False):
        overrides["ignore_https_errors"] = True
    if getattr(args, "wait_mode", None):
        overrides["wait_mode"] = args.wait_mode
    return RunSettings(**overrides)


def process_run(args) -> int:
    """Handler for run command"""
    try:
        scenarios, catalog_url = _load_scenarios(args)
    except ScenarioFileError as e:
        print(f"Error: {e}")
        return 2

    scenarios = filter_scenarios(scenarios, args.filter)
    if not scenarios:
        print("No scenarios selected.")
        return 2

    settings = _settings(args, catalog_url)
    print(f"Running {len(scenarios)} scenarios against {settings.target_url} (wait mode: {settings.wait_mode})")

    with BrowserSession(settings) as session:
        suite = SuiteRunner(session, on_verdict=lambda v: print(format_verdict(v)))
        verdicts = suite.run(scenarios)

    print(format_summary(verdicts))
    if args.report:
        write_json_report(verdicts, args.report)
        print(f"Report saved to {args.report}")
    return exit_code(verdicts)


def process_probe(args) -> int:
    """Handler for probe command"""
    settings = _settings(args)
    locator = FieldLocator()
    print(f"Probing {settings.target_url}...")

    try:
        with BrowserSession(settings) as session:
            report = session.run_on_fresh_page(locator.explain)
    except PlaywrightError as e:
        print(f"Error: {e}")
        return 2

    for row in report:
        if row["matched"]:
            pairing = "shared field" if row["shared"] else f"{row['input_kind']} -> {row['output_kind']}"
            print(f"  {row['strategy']:<16} matched  confidence={row['confidence']:.1f}  {pairing}")
        else:
            print(f"  {row['strategy']:<16} no match")
    return 0 if any(row["matched"] for row in report) else 1


def process_export(args) -> int:
    """Handler for export command"""
    try:
        scenarios, catalog_url = _load_scenarios(args)
    except ScenarioFileError as e:
        print(f"Error: {e}")
        return 2

    code = Compiler().compile(scenarios, args.url or catalog_url or config.TARGET_URL)
    with open(args.output, "w", encoding="utf-8") as f:
        f.write(code)
    print(f"Saved {len(scenarios)} tests to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Translator widget probe and scenario runner")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: run
    parser_run = subparsers.add_parser("run", help="Run scenarios against the target page")
    parser_run.add_argument("--scenarios", default=config.SCENARIO_FILE, help="Scenario YAML file")
    parser_run.add_argument("--api-url", help="Fetch the scenario catalogue from this URL instead")
    parser_run.add_argument("--url", help="Override the target URL")
    parser_run.add_argument("--filter", help="Only run scenarios whose id, group or title contains this")
    parser_run.add_argument("--report", help="Write a JSON report to this path")
    parser_run.add_argument("--wait-mode", choices=["fixed", "stable"], help="How to wait for the output")
    parser_run.add_argument("--headed", action="store_true", help="Show the browser window")
    parser_run.add_argument("--ignore-https-errors", action="store_true", help="Ignore HTTPS certificate errors")

    # Command: probe
    parser_probe = subparsers.add_parser("probe", help="Show which locator strategies match the target page")
    parser_probe.add_argument("--url", help="Override the target URL")
    parser_probe.add_argument("--headed", action="store_true", help="Show the browser window")
    parser_probe.add_argument("--ignore-https-errors", action="store_true", help="Ignore HTTPS certificate errors")

    # Command: export
    parser_export = subparsers.add_parser("export", help="Generate a pytest-playwright module from scenarios")
    parser_export.add_argument("--scenarios", default=config.SCENARIO_FILE, help="Scenario YAML file")
    parser_export.add_argument("--api-url", help="Fetch the scenario catalogue from this URL instead")
    parser_export.add_argument("--url", help="Override the target URL")
    parser_export.add_argument("--output", default="test_generated_scenarios.py", help="Output file")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        return process_run(args)
    elif args.command == "probe":
        return process_probe(args)
    elif args.command == "export":
        return process_export(args)
    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
