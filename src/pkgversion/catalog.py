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

import json
from collections.abc import Iterable
from pathlib import Path

from . import PackageInfo, Reference, Version, VersionV2
from .gh_logging import Logger
from .reference import FuzzyReference

log = Logger(__name__)

DEFAULT_CHANNEL = "main"


def dedupe_versions(versions: Iterable[Version]) -> list[Version]:
    """Drop versions equal to one seen earlier, keeping the first occurrence."""
    unique: list[Version] = []
    for v in versions:
        if any(v == u for u in unique):
            continue
        unique.append(v)
    return unique


def select_latest(versions: Iterable[Version]) -> Version | None:
    latest: Version | None = None
    for v in versions:
        if latest is None or v > latest:
            latest = v
    return latest


def _parse_versions(
    raw_versions: object, metadata_path: Path, allow_fallback: bool
) -> list[Version]:
    """Parse, deduplicate and sort a list of version strings, highest first."""
    if raw_versions is None:
        return []

    if not isinstance(raw_versions, list):
        log.fatal(
            f"{metadata_path} has invalid versions field; expected list of version strings",
            file=metadata_path,
        )

    versions: list[Version] = []
    for raw in raw_versions:  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(raw, str):
            log.warning(f"{metadata_path} lists non-string version {raw!r}; skipping")
            continue
        result = Version.parse(raw, allow_fallback)
        if not result:
            log.warning(f"{result.error}; skipping", file=metadata_path)
            continue
        v = result.unwrap()
        if any(v == seen for seen in versions):
            log.warning(f"{metadata_path} lists version {raw} more than once")
            continue
        if not isinstance(v.scheme, VersionV2):
            log.debug(f"{metadata_path}: {raw} parsed as {type(v.scheme).__name__}")
        versions.append(v)

    # Sort in descending order (highest version first)
    return sorted(versions, reverse=True)


def read_packages(
    package_ids: list[str] | None,
    catalog_dir: Path = Path("packages"),
    allow_fallback: bool = True,
) -> list[PackageInfo]:
    """Load packages from the catalog."""
    if not catalog_dir.is_dir():
        log.fatal(f"Catalog directory {catalog_dir} does not exist.")

    packages: list[PackageInfo] = []
    if package_ids:
        for package_id in package_ids:
            metadata_path = catalog_dir / package_id / "metadata.json"
            if p := try_parse_metadata_json(metadata_path, allow_fallback):
                if not p.obsolete:
                    packages.append(p)
            else:
                log.fatal(f"Package '{package_id}' could not be found or parsed.")
    else:
        for package_dir in sorted(catalog_dir.iterdir()):
            if p := try_parse_metadata_json(package_dir / "metadata.json", allow_fallback):  # noqa: SIM102
                if not p.obsolete:
                    packages.append(p)
    return packages


def try_parse_metadata_json(
    metadata_json: Path, allow_fallback: bool = True
) -> PackageInfo | None:
    """Parse a package metadata.json file."""
    package_path = metadata_json.parent
    if not package_path.is_dir():
        return None

    if not metadata_json.exists():
        log.warning(f"{metadata_json} does not exist; skipping")
        return None

    try:
        with open(metadata_json) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log.warning(f"{metadata_json} could not be parsed: {e}")
        return None

    if not isinstance(data, dict):
        log.warning(f"{metadata_json} must contain a JSON object", file=metadata_json)
        return None

    channel = data.get("channel", DEFAULT_CHANNEL)
    if not isinstance(channel, str) or not channel:
        log.warning(
            f"{metadata_json} has invalid channel field; expected a string",
            file=metadata_json,
        )
        return None

    raw_versions = data.get("versions", {})
    if not isinstance(raw_versions, dict):
        log.warning(
            f"{metadata_json} has invalid versions field; expected a mapping of architecture to versions",
            file=metadata_json,
        )
        return None

    versions: dict[str, list[Version]] = {}
    for arch, arch_versions in raw_versions.items():
        if parsed := _parse_versions(arch_versions, metadata_json, allow_fallback):
            versions[arch] = parsed

    return PackageInfo(
        path=package_path,
        id=package_path.name,
        channel=channel,
        versions=versions,
        obsolete=bool(data.get("obsolete", False)),
    )


def list_latest(packages: list[PackageInfo], arch: str | None = None) -> list[Reference]:
    """Latest reference of every package, per architecture."""
    latest: list[Reference] = []
    for package in packages:
        for package_arch in package.architectures:
            if arch and package_arch != arch:
                continue
            latest.append(
                Reference(
                    channel=package.channel,
                    id=package.id,
                    version=package.latest_version(package_arch),
                    arch=package_arch,
                )
            )
    return latest


def resolve(fuzzy: FuzzyReference, packages: list[PackageInfo]) -> Reference | None:
    """Pick the highest catalog reference matching `fuzzy`."""
    candidates = [
        ref
        for package in packages
        for arch in package.architectures
        for ref in package.references(arch)
        if fuzzy.matches(ref)
    ]
    if not candidates:
        log.debug(f"No catalog entry matches {fuzzy}")
        return None

    newest = select_latest(ref.version for ref in candidates)
    return next(ref for ref in candidates if ref.version is newest)
