"""CI detector loading via entry points."""

import logging
from collections.abc import Mapping, Sequence
from importlib.metadata import entry_points

from lighthouse_ci_trigger.detectors.base import CIContext, CIDetector

ENTRY_POINT_GROUP = "lighthouse_ci_trigger.detectors"

log = logging.getLogger(__name__)


def load_detectors() -> Sequence[CIDetector]:
    """Load all registered CI detectors.

    Returns:
        Detectors registered under the entry point group, sorted by priority
        (lowest first)

    """
    detectors: list[CIDetector] = [
        entry.load() for entry in entry_points(group=ENTRY_POINT_GROUP)
    ]
    return sorted(detectors, key=lambda detector: detector.priority)


def detect_ci(
    env: Mapping[str, str], detectors: Sequence[CIDetector]
) -> CIContext | None:
    """Return the context of the first detector matching the environment."""
    for detector in detectors:
        if (context := detector.detect(env)) is not None:
            log.info("Detected CI provider: %s", context.provider)
            return context

    log.info("No supported CI provider detected")
    return None
