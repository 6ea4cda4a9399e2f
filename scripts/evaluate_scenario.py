"""
Evaluate a saved scenario from the command line.

    python scripts/evaluate_scenario.py scenario.json --exit-price 11000 --exit-price 13000 --ledger

The JSON file uses the same shape the web form posts to /api/calculate
(camelCase or snake_case keys).
"""
import argparse
import json
import logging
import pathlib
import sys

from pydantic import ValidationError

from propanalyzer.api.calculate import CalculateRequest
from propanalyzer.services.presentation import format_currency
from propanalyzer.services.scenario import evaluate

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Evaluate a property investment scenario.")
    parser.add_argument("scenario", type=pathlib.Path, help="Path to a scenario JSON file")
    parser.add_argument(
        "--exit-price",
        dest="exit_prices",
        type=float,
        action="append",
        default=[],
        help="Additional exit price per sq.ft to compare (repeatable)",
    )
    parser.add_argument("--ledger", action="store_true", help="Print the monthly home loan ledger")
    parser.add_argument("--json", action="store_true", help="Dump the full breakdown as JSON")
    return parser


def _print_summary(result: dict) -> None:
    for stage in result["stage_calculations"].values():
        print(stage["title"])
        for item in stage["items"]:
            print(f"  {item['label']:<22} {item['value']}")
    detail = result["detailed_breakdown"]
    print(f"Net gain/loss: {format_currency(detail['net_gain_loss'])}  ROI: {detail['roi']:.2f}%")
    print()
    print(f"{'Exit price':>12} {'Sale value':>16} {'Net profit':>16} {'ROI %':>8}")
    for row in result["multiple_scenarios"]:
        marker = "*" if row["is_selected"] else " "
        print(
            f"{marker}{row['exit_price']:>11,.0f} {format_currency(row['sale_value']):>16} "
            f"{format_currency(row['net_profit']):>16} {row['roi']:>8.2f}"
        )


def _print_ledger(result: dict) -> None:
    print()
    print(f"{'Month':>5} {'Disbursed':>14} {'Balance':>14} {'HL payment':>12} {'PL1':>10} {'EMI':>4}")
    for row in result["detailed_breakdown"]["monthly_ledger"]:
        print(
            f"{row['month']:>5} {format_currency(row['disbursement']):>14} "
            f"{format_currency(row['outstanding_balance']):>14} {format_currency(row['hl_component']):>12} "
            f"{format_currency(row['pl1']):>10} {'yes' if row['is_full_emi'] else 'no':>4}"
        )


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    try:
        raw = json.loads(args.scenario.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read scenario %s: %s", args.scenario, exc)
        return 2

    try:
        req = CalculateRequest.model_validate(raw)
    except ValidationError as exc:
        logger.error("Invalid scenario: %s", exc)
        return 2

    payload = req.model_dump()
    payload["scenario_exit_prices"] = list(payload.get("scenario_exit_prices") or []) + args.exit_prices
    result = evaluate(payload)

    if args.json:
        json.dump(result, sys.stdout, indent=2, ensure_ascii=False)
        print()
        return 0

    _print_summary(result)
    if args.ledger:
        _print_ledger(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
