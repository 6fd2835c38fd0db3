"""Waybar JSON output.

Waybar's ``return-type: json`` reads one object per line from stdout.
This module is the only writer to stdout in the whole package.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from typing import TextIO

from wg_waybar.core.models import StatusLine


def emit(line: StatusLine, stream: TextIO | None = None) -> None:
    """Write *line* as compact JSON followed by a newline, then flush."""
    out = sys.stdout if stream is None else stream
    out.write(json.dumps(line.to_dict()) + "\n")
    out.flush()


def emit_all(lines: Iterable[StatusLine], stream: TextIO | None = None) -> None:
    for line in lines:
        emit(line, stream)
