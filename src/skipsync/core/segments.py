"""Normalisation of provider skip segments into SkipSegment lists.

Providers disagree on key names (camelCase vs snake_case intervals, ``skipType``
vs ``skip_type``) and on labelling. Everything leaving this module is a plain
list of SkipSegment in provider order.
"""

from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from skipsync.models.core import DEFAULT_SEGMENT_LABEL, SkipSegment
from skipsync.utils.debug import debug

OPENING_LABEL = "Opening"
ENDING_LABEL = "Ending"
RECAP_LABEL = "Recap"
SKIP_LABEL = DEFAULT_SEGMENT_LABEL


def label_for_skip_type(skip_type: Optional[str]) -> str:
    """Map a provider skip type to a display label.

    ``op``/``ed`` match as substrings so variants such as ``mixed-op`` still
    classify; ``recap`` must match exactly.
    """
    kind = (skip_type or "").lower()
    if "op" in kind:
        return OPENING_LABEL
    if "ed" in kind:
        return ENDING_LABEL
    if kind == "recap":
        return RECAP_LABEL
    return SKIP_LABEL


def _first_present(mapping: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if mapping.get(key) is not None:
            return mapping[key]
    return None


def parse_provider_segments(raw: Optional[Iterable[Any]]) -> List[SkipSegment]:
    """Convert timing-service results into SkipSegments.

    Args:
        raw: The ``results`` array of a timing-service response.

    Returns:
        Segments in provider order; entries without a usable interval are
        dropped.
    """
    segments: List[SkipSegment] = []
    for entry in raw or []:
        if not isinstance(entry, dict):
            continue
        interval = entry.get("interval")
        if not isinstance(interval, dict):
            continue
        start = _first_present(interval, "startTime", "start_time")
        end = _first_present(interval, "endTime", "end_time")
        if start is None or end is None:
            continue
        label = label_for_skip_type(_first_present(entry, "skipType", "skip_type"))
        try:
            segments.append(SkipSegment(start=start, end=end, label=label))
        except ValidationError:
            debug(f"Dropping unparsable interval: {interval!r}")
    return segments


def parse_database_segments(raw: Optional[Iterable[Any]]) -> List[SkipSegment]:
    """Read community database entries, already in ``{start, end, name}`` form."""
    segments: List[SkipSegment] = []
    for entry in raw or []:
        if not isinstance(entry, dict):
            continue
        if entry.get("start") is None or entry.get("end") is None:
            continue
        try:
            segments.append(SkipSegment.model_validate(entry))
        except ValidationError:
            debug(f"Dropping unparsable database segment: {entry!r}")
    return segments


def apply_offset(
    segments: Optional[List[SkipSegment]], offset: int
) -> Optional[List[SkipSegment]]:
    """Shift every segment by *offset* seconds, clamping at zero.

    The input list is returned as-is when there is nothing to shift; otherwise
    new SkipSegment objects are built so callers sharing the originals are
    unaffected.
    """
    if not segments or not offset:
        return segments
    return [
        seg.model_copy(
            update={
                "start": max(0, seg.start + offset),
                "end": max(0, seg.end + offset),
            }
        )
        for seg in segments
    ]
