# *******************************************************************************
# Copyright (c) 2025 Contributors to the Eclipse Foundation
#
# See the NOTICE file(s) distributed with this work for additional
# information regarding copyright ownership.
#
# This program and the accompanying materials are made available under the
# terms of the Apache License Version 2.0 which is available at
# https://www.apache.org/licenses/LICENSE-2.0
#
# SPDX-License-Identifier: Apache-2.0
# *******************************************************************************

import argparse
import copy
import json
import os
import sys
from pathlib import Path

from . import PackageInfo, UpgradeInfo, Version
from .catalog import dedupe_versions, list_latest, read_packages
from .catalog import log as catalog_log
from .gh_logging import Logger

log = Logger(__name__)

DEFAULT_CATALOG_DIR = "packages"
_TRUTHY = {"1", "true", "yes", "on"}


def parse_args(args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Parse, compare and select package versions."
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=None,
        help=(
            "Catalog directory holding <package>/metadata.json files; "
            f"defaults to $PKGVERSION_CATALOG or '{DEFAULT_CATALOG_DIR}'."
        ),
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help=(
            "Only accept semantic versions (no V1/fallback parsing); "
            "defaults to $PKGVERSION_STRICT."
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    compare = sub.add_parser("compare", help="Compare two versions.")
    compare.add_argument("lhs")
    compare.add_argument("rhs")

    sort = sub.add_parser("sort", help="Sort versions, lowest first.")
    sort.add_argument("versions", nargs="+")
    sort.add_argument("--reverse", action="store_true", help="Highest first.")
    sort.add_argument(
        "--unique", action="store_true", help="Drop versions equal to an earlier one."
    )

    latest = sub.add_parser("latest", help="Show the latest version of packages.")
    latest.add_argument("packages", nargs="*")
    latest.add_argument("--arch", type=str, default=None)
    latest.add_argument(
        "--ignore-tweak",
        action="store_true",
        help="Render four part versions without their tweak.",
    )

    check = sub.add_parser("check", help="Plan upgrades of installed packages.")
    check.add_argument(
        "--installed",
        type=Path,
        required=True,
        help="JSON file mapping installed package ids to versions.",
    )
    check.add_argument("--arch", type=str, default="x86_64")
    check.add_argument(
        "packages",
        nargs="*",
        help="If not provided, every installed package is checked.",
    )
    return parser.parse_args(args)


def get_catalog_dir(args: argparse.Namespace) -> Path:
    """Get the catalog directory from CLI, environment, or default.

    Tries sources in order:
    1. --catalog CLI argument
    2. PKGVERSION_CATALOG environment variable
    3. ./packages
    """
    if args.catalog:
        return Path(args.catalog)
    elif catalog := os.getenv("PKGVERSION_CATALOG"):
        log.debug("Using catalog directory from environment variable.")
        return Path(catalog)
    else:
        return Path(DEFAULT_CATALOG_DIR)


def get_allow_fallback(args: argparse.Namespace) -> bool:
    if args.strict is not None:
        return not args.strict
    return os.getenv("PKGVERSION_STRICT", "").lower() not in _TRUTHY


def _parse_or_fatal(raw: str, allow_fallback: bool) -> Version:
    result = Version.parse(raw, allow_fallback)
    if not result:
        log.fatal(str(result.error))
    return result.unwrap()


def read_installed(path: Path) -> dict[str, str]:
    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log.fatal(f"{path} could not be parsed: {e}", file=path)

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        log.fatal(f"{path} must map package ids to version strings", file=path)
    return data


def plan_upgrades(
    args: argparse.Namespace,
    packages: list[PackageInfo],
    installed: dict[str, str],
) -> list[UpgradeInfo]:
    """Plan upgrades of installed packages to the latest catalog versions."""
    allow_fallback = get_allow_fallback(args)
    by_id = {p.id: p for p in packages}
    upgrades: list[UpgradeInfo] = []

    for package_id, raw_current in installed.items():
        if args.packages and package_id not in args.packages:
            continue

        log.debug(f"Checking package {package_id}...")

        package = by_id.get(package_id)
        if package is None:
            log.warning(f"Installed package {package_id} is not in the catalog.")
            continue

        if args.arch not in package.versions:
            log.info(f"Package {package_id} has no versions for {args.arch}")
            continue

        result = Version.parse(raw_current, allow_fallback)
        if not result:
            log.warning(f"Installed {package_id}: {result.error}; skipping.")
            continue

        current = result.unwrap()
        latest = package.latest_version(args.arch)
        if latest > current:
            log.info(f"Upgrading {package_id} from {current} to {latest}")
            upgrades.append(
                UpgradeInfo(package=package, arch=args.arch, current=current, latest=latest)
            )
        else:
            log.info(f"Package {package_id} is up to date.")

    if not upgrades:
        log.info("No packages need upgrading.")
    else:
        log.debug(f"Packages to be upgraded: {[u.package.id for u in upgrades]}")

    return upgrades


def _compare(p: argparse.Namespace) -> None:
    allow_fallback = get_allow_fallback(p)
    lhs = _parse_or_fatal(p.lhs, allow_fallback)
    rhs = _parse_or_fatal(p.rhs, allow_fallback)
    symbol = {-1: "<", 0: "==", 1: ">"}[lhs.compare(rhs)]
    print(f"{lhs} {symbol} {rhs}")


def _sort(p: argparse.Namespace) -> None:
    allow_fallback = get_allow_fallback(p)
    versions = [_parse_or_fatal(v, allow_fallback) for v in p.versions]
    if p.unique:
        versions = dedupe_versions(versions)
    for v in sorted(versions, reverse=p.reverse):
        print(v)


def _latest(p: argparse.Namespace) -> None:
    packages = read_packages(p.packages, get_catalog_dir(p), get_allow_fallback(p))
    for ref in list_latest(packages, p.arch):
        if p.ignore_tweak and ref.version.has_tweak():
            ref.version = copy.copy(ref.version)
            ref.version.ignore_tweak()
        print(ref)


def _check(p: argparse.Namespace) -> None:
    installed = read_installed(p.installed)
    packages = read_packages(None, get_catalog_dir(p), get_allow_fallback(p))
    for upgrade in plan_upgrades(p, packages, installed):
        print(f"{upgrade.package.id}: {upgrade.current} -> {upgrade.reference}")


def main(args: list[str]) -> None:
    """Main entry point for the pkgversion command line."""
    p = parse_args(args)
    {
        "compare": _compare,
        "sort": _sort,
        "latest": _latest,
        "check": _check,
    }[p.command](p)

    warnings = log.warnings + catalog_log.warnings
    if warnings:
        # If any warnings were issued, exit with non-zero code
        log.fatal(f"Completed with {len(warnings)} warnings.")


def cli() -> None:
    main(args=sys.argv[1:])


if __name__ == "__main__":
    cli()
