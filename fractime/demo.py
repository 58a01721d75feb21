"""Demonstration program stepping two fractured time configurations.

HALF counts from 10 to 15 milliseconds in half-millisecond steps on int16
storage. HUNDRED counts down from 5 milliseconds in 0.33 ms steps on uint32
storage while the value stays above 2 milliseconds.

Run with ``python -m fractime.demo`` (``--scenario half`` or ``hundred`` to
pick one, ``--debug`` to log every step).
"""

import argparse
import logging
from collections.abc import Callable, Iterator, Sequence
from typing import Literal

from fractime.core import FracturedTime, fractured_time
from fractime.storage import INT16, UINT32

logger = logging.getLogger(__name__)

Half = fractured_time(INT16, 2)
Hundred = fractured_time(UINT32, 100)

Scenario = Literal["half", "hundred"]


def half_time() -> Iterator[FracturedTime]:
    start = Half.th(10)
    end = start + Half.th(5)
    delta = Half.tl(1)

    current = start
    while current < end:
        yield current
        current += delta


def hundred_time() -> Iterator[FracturedTime]:
    bound = Hundred.th(2)
    delta = Hundred.tl(33)

    current = Hundred.th(5)
    while current > bound:
        yield current
        current -= delta


SCENARIOS: dict[Scenario, tuple[str, Callable[[], Iterator[FracturedTime]]]] = {
    "half": ("~~~~~ HALF TIME ~~~~~", half_time),
    "hundred": ("~~~~~ HUNDRED TIME ~~~~~", hundred_time),
}


def run(scenario: Scenario) -> list[str]:
    """Return the printed lines for one scenario, header first."""
    header, steps = SCENARIOS[scenario]
    lines = [header]
    for step, value in enumerate(steps()):
        logger.debug("%s step %d: %r", scenario, step, value)
        lines.append(str(value))
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fractime-demo",
        description="Print fractured time sequences for two configurations.",
    )
    parser.add_argument(
        "--scenario",
        choices=["all", *SCENARIOS],
        default="all",
        help="Which sequence to print (default: all)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    names: list[Scenario] = (
        list(SCENARIOS) if args.scenario == "all" else [args.scenario]
    )
    for name in names:
        for line in run(name):
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
