#!/usr/bin/env python3
"""Entry point for the resourcefetcher CLI."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict

from resourcefetcher import __version__
from resourcefetcher.adapters import DirectoryResourceBundle, PackageResourceBundle
from resourcefetcher.domain import (
    ResourceAccessError,
    ResourceDeletedError,
    TempDirectory,
    TempDirectoryDeletedError,
)
from resourcefetcher.domain.temp_directory import resolve_folder_path
from resourcefetcher.ports.bundle import ResourceBundle
from resourcefetcher.settings import SETTINGS
from resourcefetcher.utils.telemetry import clear as telemetry_clear
from resourcefetcher.utils.telemetry import iter_events as telemetry_iter
from resourcefetcher.utils.telemetry import record_structured_event, track
from resourcefetcher.utils.telemetry import summarize as telemetry_summarize

DOMAIN_ERRORS = (ResourceAccessError, ResourceDeletedError, TempDirectoryDeletedError)


def _bundle_from_args(args: argparse.Namespace) -> ResourceBundle:
    source = getattr(args, "source", None)
    if source:
        return DirectoryResourceBundle(Path(source))
    return PackageResourceBundle(args.package)


def _emit(args: argparse.Namespace, payload: Dict[str, Any], lines: list[str]) -> None:
    if getattr(args, "json", False):
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        for line in lines:
            print(line)


def _tracked(args: argparse.Namespace, handler: Callable[[argparse.Namespace], int]) -> int:
    command = args.command
    event_context = {"command": command, "project": args.project, "group": args.group or ""}
    try:
        with track(SETTINGS, f"cli.{command}", component="cli", payload=event_context) as outcome:
            outcome["exit_code"] = handler(args)
    except DOMAIN_ERRORS as exc:
        print(f"{command} failed: {exc}", file=sys.stderr)
        return 1
    return outcome["exit_code"]


def _extract(args: argparse.Namespace) -> int:
    folder = TempDirectory(args.group or "", args.project, bundle=_bundle_from_args(args), settings=SETTINGS)
    resources = folder.extract_many(args.names)
    for resource in resources:
        record_structured_event(
            SETTINGS,
            "resource.extract",
            status="success",
            component="resource",
            payload={"name": resource.name, "path": str(resource.path)},
        )
    lines = [f"extract: {folder.folder_path}"]
    lines.extend(f"  - {resource.name} -> {resource.path}" for resource in resources)
    _emit(args, folder.to_dict(), lines)
    return 0


def _purge(args: argparse.Namespace) -> int:
    folder_path = resolve_folder_path(SETTINGS.temp_root, args.group or "", args.project)
    if not folder_path.exists():
        _emit(args, {"path": str(folder_path), "removed": False}, ["purge: nothing removed"])
        return 0
    TempDirectory(args.group or "", args.project, settings=SETTINGS).delete()
    record_structured_event(
        SETTINGS,
        "temp_directory.delete",
        status="success",
        component="temp_directory",
        payload={"path": str(folder_path)},
    )
    _emit(args, {"path": str(folder_path), "removed": True}, [f"purge removed: {folder_path}"])
    return 0


def _info(args: argparse.Namespace) -> int:
    folder_path = resolve_folder_path(SETTINGS.temp_root, args.group or "", args.project)
    files = sorted(str(path.relative_to(folder_path)) for path in folder_path.rglob("*") if path.is_file()) if folder_path.is_dir() else []
    payload = {
        "version": __version__,
        "temp_root": str(SETTINGS.temp_root),
        "group": args.group or "",
        "project": args.project,
        "path": str(folder_path),
        "exists": folder_path.is_dir(),
        "files": files,
    }
    lines = [
        f"resourcefetcher {__version__}",
        f"  temp root: {SETTINGS.temp_root}",
        f"  directory: {folder_path} ({'present' if payload['exists'] else 'missing'})",
    ]
    lines.extend(f"    - {name}" for name in files)
    _emit(args, payload, lines)
    return 0


def _extract_cmd(args: argparse.Namespace) -> int:
    return _tracked(args, _extract)


def _purge_cmd(args: argparse.Namespace) -> int:
    return _tracked(args, _purge)


def _info_cmd(args: argparse.Namespace) -> int:
    return _tracked(args, _info)


def _telemetry_cmd(args: argparse.Namespace) -> int:
    if getattr(args, "clear", False):
        telemetry_clear(SETTINGS)
        _emit(args, {"cleared": True}, ["telemetry: log cleared"])
        return 0
    events = list(telemetry_iter(SETTINGS))
    if getattr(args, "summary", False):
        summary = telemetry_summarize(events)
        lines = [f"telemetry: {summary['total']} events"]
        lines.extend(f"  - {name}: {count}" for name, count in sorted(summary["by_event"].items()))
        _emit(args, summary, lines)
        return 0
    lines = [
        f"{event.get('event')} [{event.get('status', 'unknown')}] {json.dumps(event.get('payload', {}), ensure_ascii=False)}"
        for event in events
    ]
    _emit(args, {"events": events}, lines or ["telemetry: no events recorded"])
    return 0


def _add_location_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--project", required=True, help="Project directory name")
    parser.add_argument("--group", default="", help="Shared group directory name (optional)")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resourcefetcher",
        description="Extract bundled resources into a per-project temp directory",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    extract_cmd = sub.add_parser("extract", help="Extract resources and print their paths")
    extract_cmd.add_argument("names", nargs="+", help="Bundle-relative resource names")
    _add_location_arguments(extract_cmd)
    source = extract_cmd.add_mutually_exclusive_group(required=True)
    source.add_argument("--package", help="Package shipping the resources as data files")
    source.add_argument("--source", help="Directory holding the resources")
    extract_cmd.set_defaults(func=_extract_cmd)

    purge_cmd = sub.add_parser("purge", help="Delete the project temp directory")
    _add_location_arguments(purge_cmd)
    purge_cmd.set_defaults(func=_purge_cmd)

    info_cmd = sub.add_parser("info", help="Show the project temp directory and its files")
    _add_location_arguments(info_cmd)
    info_cmd.set_defaults(func=_info_cmd)

    telemetry_cmd = sub.add_parser("telemetry", help="Inspect recorded telemetry events")
    mode = telemetry_cmd.add_mutually_exclusive_group()
    mode.add_argument("--summary", action="store_true", help="Aggregate events by name and status")
    mode.add_argument("--clear", action="store_true", help="Remove the telemetry log")
    telemetry_cmd.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    telemetry_cmd.set_defaults(func=_telemetry_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
