"""CLI job to detect the delivery city of a shipping address."""

import argparse
import logging
import sys
from typing import Optional, Sequence

from city_resolver.core.resolver import CityResolver, ResolutionError, get_resolver

logger = logging.getLogger(__name__)

SAMPLE_ADDRESS = "John Doe\n123 Main Street\nColombo 01\n0771234567"


def run_check(resolver: CityResolver) -> int:
    """Load the gazetteer and resolve a known address, mirroring a smoke test."""
    resolver.refresh_gazetteer(force=True)
    snapshot = resolver.cache.snapshot
    logger.info("Loaded %d cities (source=%s)", len(snapshot.records), snapshot.source)
    for city in snapshot.records[:3]:
        logger.info("Sample city: %s", city.to_dict())

    city = resolver.resolve_city(SAMPLE_ADDRESS)
    print(city.name if city else "-")
    return 0 if city else 1


def run_resolve(resolver: CityResolver, address: str, force_refresh: bool = False) -> int:
    if force_refresh:
        resolver.refresh_gazetteer(force=True)
    city = resolver.resolve_city(address)
    if city is None:
        logger.info("Could not determine city for address")
        print("-")
        return 1
    print(f"{city.name}\t{city.region}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detect the delivery city of a shipping address")
    parser.add_argument("--address", dest="address", help="Address text; read from stdin when omitted")
    parser.add_argument(
        "--force-refresh",
        dest="force_refresh",
        action="store_true",
        help="Reload the city sheet before resolving",
    )
    parser.add_argument(
        "--check",
        dest="check",
        action="store_true",
        help="Load the city sheet and resolve a sample address",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)
    resolver = get_resolver()

    if args.check:
        return run_check(resolver)

    address = args.address if args.address is not None else sys.stdin.read()
    try:
        return run_resolve(resolver, address, force_refresh=args.force_refresh)
    except ResolutionError as exc:
        logger.error("Cannot resolve address: %s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
