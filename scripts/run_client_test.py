#!/usr/bin/env python3
"""End-to-end questionnaire runs against a live rental server.

Drives :class:`NeedsAssessmentFlow` through :class:`RentalApiClient` exactly
like the portal and the staff page do: fetch the catalog, opt into a random
subset of equipment categories, answer every visible question with a valid
random value, upload a small attachment and submit.  Each run is checked
for a receipt and the expected redirect.

Usage::

    # Install deps (first time only)
    uv pip install -e ".[scripts]"

    # Five client-portal runs
    uv run python scripts/run_client_test.py -n 5

    # Staff runs (employee role), verbose, reproducible
    uv run python scripts/run_client_test.py --variant staff -v --seed 42
"""

from __future__ import annotations

import argparse
import asyncio
import random
import sys
import time
from dataclasses import dataclass, field
from typing import Any

import httpx
from rich.console import Console
from rich.table import Table

from rental_questionnaire import (
    FlowVariant,
    NeedsAssessmentFlow,
    Notifier,
    RentalApiClient,
)
from rental_questionnaire.constants import ANSWER_FALSE, ANSWER_TRUE, RADIO_NO, RADIO_YES
from rental_questionnaire.models import LocalFile, Question

FREE_TEXT_POOL = [
    "Warszawa, plac budowy",
    "Hala magazynowa",
    "Od poniedziałku",
    "Brak dodatkowych wymagań",
    "Dostęp od strony ulicy",
]


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

class ConsoleNotifier(Notifier):
    """Prints notices and records redirects for the run's verdict."""

    def __init__(self, console: Console, verbose: bool) -> None:
        self._console = console
        self._verbose = verbose
        self.notices: list[tuple[str, str]] = []
        self.redirects: list[str] = []

    def notify(self, message: str, *, variant: Any = "default") -> None:
        self.notices.append((message, variant))
        if self._verbose:
            style = "red" if variant == "destructive" else "green"
            self._console.print(f"    [{style}]notice:[/] {message}")

    def redirect_to(self, path: str) -> None:
        self.redirects.append(path)
        if self._verbose:
            self._console.print(f"    [cyan]redirect:[/] {path}")


def random_answer(rng: random.Random, q: Question) -> str:
    if q.is_boolean:
        return rng.choice([ANSWER_TRUE, ANSWER_FALSE])
    if q.type == "radio":
        return rng.choice([RADIO_YES, RADIO_NO])
    if q.type == "number":
        return str(rng.randint(1, 500))
    if q.type == "select" and isinstance(q.options, list) and q.options:
        return str(rng.choice(q.options))
    return rng.choice(FREE_TEXT_POOL)


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------

@dataclass
class RunResult:
    index: int
    status: str = "incomplete"
    steps: int = 0
    selected: list[str] = field(default_factory=list)
    response_number: str | None = None
    error: str | None = None


async def run_once(
    index: int,
    api: RentalApiClient,
    variant: FlowVariant,
    rng: random.Random,
    console: Console,
    verbose: bool,
) -> RunResult:
    result = RunResult(index=index)
    notifier = ConsoleNotifier(console, verbose)
    flow = NeedsAssessmentFlow(
        catalog=api, store=api, gateway=api, notifier=notifier, variant=variant,
        redirect_delay=0,
    )

    if not await flow.load():
        result.status, result.error = "failed", "catalog load failed"
        return result

    session = flow.session
    optional = sorted({
        q.category for q in session.questions
        if not session.rules.is_mandatory(q.category)
        and not session.rules.is_accessory(q.category)
    })
    for category in optional:
        chosen = rng.random() < 0.5
        flow.toggle_category(category, chosen)
        if chosen:
            result.selected.append(category)

    flow.set_client_fields(company_name=f"Klient testowy {index}", phone="600100200")

    while True:
        group = session.current_group
        if group is None:
            result.status, result.error = "failed", "empty plan"
            return result
        if session.is_category_selected(group.category):
            for q in group.questions:
                if not q.is_header:
                    flow.set_response(q.id, random_answer(rng, q))
        result.steps += 1
        if session.is_final_step:
            break
        if not flow.next():
            result.status, result.error = "failed", f"stuck on {group.category!r}"
            return result

    await flow.upload([
        LocalFile(name="szkic.txt", content_type="text/plain", content=b"szkic lokalizacji"),
    ])

    receipt = await flow.submit()
    if receipt is None:
        result.status = "failed"
        result.error = notifier.notices[-1][0] if notifier.notices else "submit refused"
        return result

    result.response_number = receipt.response_number
    result.status = "success" if notifier.redirects else "failed"
    return result


def print_summary(console: Console, results: list[RunResult]) -> None:
    console.print()
    console.rule("[bold]Run Summary")
    table = Table(show_lines=True)
    table.add_column("#", style="dim", width=4)
    table.add_column("Status", width=8)
    table.add_column("Steps", width=6)
    table.add_column("Selected", min_width=24)
    table.add_column("Number / error", min_width=24)
    for r in results:
        status = "[green]OK[/]" if r.status == "success" else "[red]FAIL[/]"
        table.add_row(
            str(r.index),
            status,
            str(r.steps),
            ", ".join(r.selected) or "-",
            r.response_number or r.error or "-",
        )
    console.print(table)


# ---------------------------------------------------------------------------
# CLI + async main
# ---------------------------------------------------------------------------

def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="End-to-end questionnaire runs against a live rental server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--base-url", default="http://localhost:8080")
    parser.add_argument(
        "--variant", choices=[v.value for v in FlowVariant], default=FlowVariant.CLIENT.value,
    )
    parser.add_argument("-n", "--runs", type=int, default=3, help="Number of runs (default: 3)")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--user-id", default="e2e-employee", help="X-User-ID for staff runs")
    parser.add_argument("--role", default="employee", help="X-User-Role for staff runs")
    parser.add_argument("--timeout", type=float, default=30.0)
    return parser.parse_args()


async def main() -> None:
    args = parse_args()
    console = Console()
    variant = FlowVariant(args.variant)

    seed = args.seed if args.seed is not None else int(time.time())
    rng = random.Random(seed)
    console.print(f"[dim]RNG seed: {seed}[/]")

    staff = variant is FlowVariant.STAFF
    async with RentalApiClient(
        args.base_url,
        user_id=args.user_id if staff else None,
        role=args.role if staff else None,
        timeout=args.timeout,
    ) as api:
        try:
            async with httpx.AsyncClient(base_url=args.base_url, timeout=5.0) as probe:
                healthy = (await probe.get("/health")).status_code == 200
        except httpx.HTTPError:
            healthy = False
        if not healthy:
            console.print(f"[red]Server at {args.base_url} is not reachable.[/]")
            sys.exit(1)

        results = []
        for i in range(1, args.runs + 1):
            console.print(f"[bold]Run {i}/{args.runs}[/] ({variant.value})")
            results.append(await run_once(i, api, variant, rng, console, args.verbose))

    print_summary(console, results)
    if any(r.status != "success" for r in results):
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
