"""Corrections package: pure data model, detection and selection.

Submodules:
- model: palette, templates, snapshots and config-document parsing
- engine: mismatch detection between templates and sampled pixels
- selector: decision procedure picking the next action
"""
from .model import (
    ColorDefinition,
    ConfigSnapshot,
    Correction,
    Palette,
    Point,
    Template,
    parse_config_document,
)
from .engine import compute_corrections, compute_template_corrections, find_color_by_sample
from .selector import (
    Action,
    AwaitCooldown,
    CommitPending,
    Idle,
    LockTarget,
    select_action,
)

__all__ = [
    "ColorDefinition",
    "ConfigSnapshot",
    "Correction",
    "Palette",
    "Point",
    "Template",
    "parse_config_document",
    "compute_corrections",
    "compute_template_corrections",
    "find_color_by_sample",
    "Action",
    "AwaitCooldown",
    "CommitPending",
    "Idle",
    "LockTarget",
    "select_action",
]
