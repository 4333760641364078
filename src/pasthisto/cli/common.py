"""Common CLI helpers for pasthisto commands."""
from __future__ import annotations
import argparse
import os

def add_standard_flags(ap: argparse.ArgumentParser, project: bool = True, config: bool = True, log_file: bool = True):
    if project:
        ap.add_argument("--project", default=os.environ.get("PASTHISTO_PROJECT_PATH", os.getcwd()), help="Root searched for pasthisto.toml (default: cwd)")
    if config:
        ap.add_argument("--config", help="Optional pasthisto.toml overrides (highest precedence)")
    if log_file:
        ap.add_argument("--log-file", help="Also write log records to this file")
    return ap
