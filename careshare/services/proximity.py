"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
"""

import asyncio
import inspect
import math
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence

from careshare.core.exceptions import MonitorAlreadyRunningError
from careshare.logging_config import get_logger

logger = get_logger(__name__)

EARTH_RADIUS_M = 6_371_000.0
SAMPLE_INTERVAL_S = 5.0
SAMPLE_DISTANCE_M = 10.0


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float


EnterCallback = Callable[[Any], Optional[Awaitable[None]]]


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters using the Haversine formula."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def is_inside(latitude: float, longitude: float, center) -> bool:
    return distance_meters(latitude, longitude, center.latitude, center.longitude) <= center.radius


def evaluate_regions(latitude: float, longitude: float, centers: Iterable) -> List:
    """
    Returns every center whose radius contains the position. The boundary is
    inclusive. Nothing is remembered between calls.
    """
    return [center for center in centers if is_inside(latitude, longitude, center)]


class RegionTracker:
    """
    Remembers, per center, whether the last sample was inside its radius and
    reports a center only on the outside -> inside transition. Leaving a
    region resets it silently so a later re-entry is reported again.
    """

    def __init__(self):
        self._inside: Dict[Any, bool] = {}

    def is_inside(self, center) -> bool:
        return self._inside.get(center.id, False)

    def update(self, latitude: float, longitude: float, centers: Iterable) -> List:
        entered = []
        for center in centers:
            inside_now = is_inside(latitude, longitude, center)
            if inside_now and not self._inside.get(center.id, False):
                entered.append(center)
            self._inside[center.id] = inside_now
        return entered

    def reset(self) -> None:
        self._inside.clear()


async def _notify(on_enter: EnterCallback, center) -> None:
    result = on_enter(center)
    if inspect.isawaitable(result):
        await result


async def monitor_position_stream(
    centers: Sequence,
    on_enter: EnterCallback,
    source: AsyncIterator[Position],
    tracker: Optional[RegionTracker] = None,
) -> None:
    """
    Consumes position samples until the source is exhausted or the task is
    cancelled, calling ``on_enter(center)`` each time a center is entered. A
    callback that raises is logged and monitoring continues.
    """
    tracker = tracker or RegionTracker()
    async for position in source:
        for center in tracker.update(position.latitude, position.longitude, centers):
            logger.info("Entered region '%s'", center.name)
            try:
                await _notify(on_enter, center)
            except Exception:
                logger.exception("Region entry callback failed for '%s'", center.name)


async def sample_positions(
    read_position: Callable[[], Awaitable[Position]],
    interval_s: float = SAMPLE_INTERVAL_S,
    distance_m: float = SAMPLE_DISTANCE_M,
    sleep_fn: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> AsyncIterator[Position]:
    """
    Polls ``read_position`` every ``interval_s`` seconds and yields a sample
    when it has moved at least ``distance_m`` from the last one yielded.
    """
    last: Optional[Position] = None
    while True:
        position = await read_position()
        if last is None or distance_meters(
            last.latitude, last.longitude, position.latitude, position.longitude
        ) >= distance_m:
            last = position
            yield position
        await sleep_fn(interval_s)


@dataclass(eq=False)
class MonitorHandle:
    task: "asyncio.Task[None]"
    tracker: RegionTracker = field(default_factory=RegionTracker)

    @property
    def running(self) -> bool:
        return not self.task.done()


class PositionMonitor:
    """
    Owns at most one live position subscription. ``start`` returns the handle
    that ``stop`` needs; a second ``start`` before ``stop`` is refused.
    """

    def __init__(self):
        self._handle: Optional[MonitorHandle] = None

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.running

    def start(self, centers: Sequence, on_enter: EnterCallback, source: AsyncIterator[Position]) -> MonitorHandle:
        if self.running:
            raise MonitorAlreadyRunningError("A position monitor is already running; stop it first")

        tracker = RegionTracker()
        task = asyncio.create_task(monitor_position_stream(list(centers), on_enter, source, tracker))
        self._handle = MonitorHandle(task=task, tracker=tracker)
        logger.info("Monitoring %d regions", len(centers))
        return self._handle

    async def stop(self, handle: MonitorHandle) -> None:
        if handle is not self._handle:
            return
        handle.task.cancel()
        try:
            await handle.task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Position monitor ended with an error")
        finally:
            self._handle = None
        logger.info("Position monitor stopped")
