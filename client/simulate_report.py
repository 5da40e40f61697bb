"""CLI client for the Immosim API: posts an investment and prints a terminal report.

Usage:
    python client/simulate_report.py params.json
    python client/simulate_report.py params.json --rent 850 --furnished --tax-method actual --horizon 25
"""

import argparse
import asyncio
import json
import sys
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format an API percentage (already x100) for display."""
    return f"{float(v):.2f}%"


def _eur(v) -> str:
    return f"{float(v):,.0f} €"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_acquisition(data: dict) -> None:
    _header("Acquisition")
    print(f"  Tax Regime:           {data['regime']}")
    print(f"  Total Cost:           {_eur(data['total_acquisition_cost'])}")
    print(f"  Cash Outlay:          {_eur(data['initial_cash_outlay'])}")
    print(f"  Rent incl. Charges:   {_eur(data['monthly_rent_with_charges'])}/mo")
    if float(data["price_per_sqm"]):
        print(f"  Price / m²:           {_eur(data['price_per_sqm'])}")
        print(f"  Rent / m²:            {float(data['rent_per_sqm']):.2f} €/mo")


def print_indicators(data: dict) -> None:
    _header("Key Indicators")
    print(f"  Gross Yield:          {_pct(data['gross_yield'])}")
    print(f"  Net Yield:            {_pct(data['net_yield'])}")
    print(f"  Net-Net Yield:        {_pct(data['net_net_yield'])}")
    print(f"  Monthly Cash Flow:    {_eur(data['monthly_cash_flow'])}")
    irr = Decimal(data["irr"])
    print(f"  IRR:                  {_pct(irr) if irr else 'n/a'}")
    for years, value in sorted(data.get("irr_by_horizon", {}).items(), key=lambda kv: int(kv[0])):
        print(f"    {years:>2}-year IRR:        {_pct(value) if Decimal(value) else 'n/a'}")
    print(f"  ROI:                  {_pct(data['roi'])}")
    print(f"  Total Profit:         {_eur(data['total_profit'])}")
    print(f"  Total Tax Paid:       {_eur(data['total_tax_paid'])}")
    if Decimal(data["total_incentive_reduction"]):
        print(f"  Incentive Reduction:  {_eur(data['total_incentive_reduction'])}")
    payback = data.get("payback_year")
    print(f"  Payback Year:         {payback if payback is not None else 'never'}")


def print_cashflow_table(data: dict) -> None:
    yearly = data.get("yearly_results", [])
    if not yearly:
        return
    _header("Cash Flow Projections")
    header = (
        f"  {'Yr':>3}  {'Rent':>10}  {'Charges':>9}  {'Interest':>9}  "
        f"{'Tax':>9}  {'CFAT':>10}  {'Cumulative':>11}"
    )
    print(header)
    print(f"  {'---':>3}  {'-' * 10}  {'-' * 9}  {'-' * 9}  {'-' * 9}  {'-' * 10}  {'-' * 11}")
    for yr in yearly:
        print(
            f"  {yr['year']:>3}  {_eur(yr['effective_rent']):>10}  "
            f"{_eur(yr['total_charges']):>9}  {_eur(yr['interest_paid']):>9}  "
            f"{_eur(yr['net_tax']):>9}  {_eur(yr['cash_flow_after_tax']):>10}  "
            f"{_eur(yr['cumulative_cash_flow']):>11}"
        )


def print_resale(data: dict) -> None:
    resale = data.get("resale")
    if not resale:
        return
    _header(f"Resale After {resale['years_held']} Years")
    print(f"  Sale Price:           {_eur(resale['sale_price'])}")
    print(f"  Gross Capital Gain:   {_eur(resale['gross_capital_gain'])}")
    print(f"  Capital Gains Tax:    {_eur(resale['capital_gains_tax'])}")
    print(f"  Disposal Costs:       {_eur(resale['disposal_costs'])}")
    print(f"  Loan Payoff:          {_eur(resale['loan_payoff'])}")
    print(f"  Net Proceeds:         {_eur(resale['net_proceeds'])}")


def print_warnings(data: dict) -> None:
    warnings = data.get("energy_warnings", [])
    if not warnings:
        return
    _header("Warnings")
    for w in warnings:
        print(f"  ! {w}")


def print_report(data: dict) -> None:
    print_acquisition(data)
    print_indicators(data)
    print_cashflow_table(data)
    print_resale(data)
    print_warnings(data)
    print()


def build_payload(args: argparse.Namespace) -> dict:
    """Parameter file contents with command-line overrides applied."""
    with open(args.params_file, encoding="utf-8") as f:
        payload: dict = json.load(f)

    field_map = {
        "price": "price",
        "rent": "monthly_rent",
        "down_payment": "down_payment",
        "loan": "loan_amount",
        "rate": "loan_rate",
        "tax_method": "tax_method",
        "incentive": "incentive",
        "tmi": "marginal_tax_rate",
        "horizon": "horizon_years",
        "start_year": "start_year",
    }
    for cli_name, api_name in field_map.items():
        val = getattr(args, cli_name)
        if val is not None:
            payload[api_name] = val if not isinstance(val, Decimal) else str(val)

    if args.furnished:
        payload["rental_type"] = "furnished"
    return payload


# ── Main ─────────────────────────────────────────────────────────────────────

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Simulate a rental investment via the Immosim API"
    )
    parser.add_argument("params_file", help="JSON file with the investment parameters")
    parser.add_argument("--price", type=Decimal, help="Purchase price")
    parser.add_argument("--rent", type=Decimal, help="Monthly rent")
    parser.add_argument("--down-payment", type=Decimal, help="Cash down payment")
    parser.add_argument("--loan", type=Decimal, help="Loan amount")
    parser.add_argument("--rate", type=Decimal, help="Loan rate, percent")
    parser.add_argument("--furnished", action="store_true", help="Let furnished")
    parser.add_argument("--tax-method", choices=["micro", "actual"], default=None)
    parser.add_argument(
        "--incentive",
        choices=["none", "pinel", "denormandie", "malraux"],
        default=None,
    )
    parser.add_argument("--tmi", type=Decimal, help="Marginal income tax rate, percent")
    parser.add_argument("--horizon", type=int, help="Projection horizon in years")
    parser.add_argument("--start-year", type=int, help="Calendar year of the first projected year")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    return parser.parse_args(argv)


async def main() -> None:
    args = parse_args()
    payload = build_payload(args)
    url = f"{args.api_url}/api/v1/simulate"

    async with httpx.AsyncClient(timeout=30) as client:
        try:
            resp = await client.post(url, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn immosim.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            if isinstance(detail, list):
                for item in detail:
                    print(f"  - {item.get('msg', item) if isinstance(item, dict) else item}", file=sys.stderr)
            else:
                print(f"  {detail}", file=sys.stderr)
            sys.exit(1)

        data = resp.json()

    print_report(data)


if __name__ == "__main__":
    asyncio.run(main())
