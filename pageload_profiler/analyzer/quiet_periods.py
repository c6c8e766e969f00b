# pageload_profiler/analyzer/quiet_periods.py - CPU and network quiet period search
"""
Quiet period search over the CPU and network timelines of a page load.

A quiet period is a span of at least MIN_QUIET_DURATION during which a
timeline stays idle: no long task running for the CPU, no more than
MAX_CONCURRENT_NETWORK_REQUESTS_WHILE_QUIET requests in flight for the
network. Time to Interactive is anchored on the first CPU quiet period that
overlaps a network quiet period after first meaningful paint.
"""

from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass
import logging


MIN_QUIET_DURATION = 5000
MAX_CONCURRENT_NETWORK_REQUESTS_WHILE_QUIET = 2


class QuietPeriodError(Exception):
    """Raised when the page never reached a quiet state within the trace."""


class WindowTooShortError(QuietPeriodError):
    """The window after first meaningful paint is shorter than a quiet period."""


class CpuNeverQuietError(QuietPeriodError):
    """Long tasks left no quiet period on the CPU timeline."""


class NetworkNeverQuietError(QuietPeriodError):
    """Too many requests stayed in flight for a network quiet period."""


@dataclass(frozen=True)
class Interval:
    """
    A span of time [start, end] (milliseconds).
    """
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> Dict:
        return {'start': self.start, 'end': self.end}


@dataclass(frozen=True)
class TraceTimestamps:
    """
    Reference timestamps of a trace (milliseconds).
    """
    navigation_start: float
    first_meaningful_paint: float
    trace_end: float
    dom_content_loaded: Optional[float] = None


@dataclass(frozen=True)
class OverlappingQuietPeriods:
    """
    The first mutually quiet CPU and network periods, plus every candidate.
    """
    cpu_quiet_period: Interval
    network_quiet_period: Interval
    cpu_quiet_periods: Tuple[Interval, ...]
    network_quiet_periods: Tuple[Interval, ...]


def compute_quiet_periods(intervals: Sequence[Interval], max_concurrent: int,
                          window_start: float, window_end: float,
                          min_duration: float = MIN_QUIET_DURATION) -> List[Interval]:
    """
    Find the spans of a window where at most max_concurrent intervals are active.

    Args:
        intervals: Activity spans (long tasks or in-flight requests)
        max_concurrent: Number of overlapping intervals still considered quiet
        window_start: Start of the search window
        window_end: End of the search window
        min_duration: Minimum length of a quiet period

    Returns:
        Quiet periods clipped to the window, ordered by start
    """
    if not intervals:
        # Nothing ever happened, so the timeline was quiet from the very beginning.
        return [Interval(0, window_end)]

    # Starts sort ahead of ends at the same timestamp: intervals are inclusive.
    boundaries = sorted(
        [(interval.start, 0) for interval in intervals] +
        [(interval.end, 1) for interval in intervals]
    )

    quiet_periods = []

    def close_period(start: float, end: float):
        start = max(start, window_start)
        end = min(end, window_end)
        if end >= start and end - start >= min_duration:
            quiet_periods.append(Interval(start, end))

    active = 0
    quiet_start = window_start

    for time, is_end in boundaries:
        if is_end:
            active -= 1
            if active == max_concurrent:
                quiet_start = time
        else:
            if active == max_concurrent:
                close_period(quiet_start, time)
            active += 1

    close_period(quiet_start, window_end)

    return quiet_periods


class QuietPeriodFinder:
    """
    Finds the first window where both the CPU and the network are quiet.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize the quiet period finder.

        Args:
            config: Optional configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.min_quiet_duration = self.config.get('min_quiet_duration_ms', MIN_QUIET_DURATION)
        self.max_concurrent_network_requests = self.config.get(
            'max_concurrent_network_requests',
            MAX_CONCURRENT_NETWORK_REQUESTS_WHILE_QUIET
        )

    def find_cpu_quiet_periods(self, long_tasks: Sequence[Interval],
                               timestamps: TraceTimestamps) -> List[Interval]:
        """Quiet periods between long tasks after first meaningful paint."""
        return compute_quiet_periods(
            long_tasks, 0,
            timestamps.first_meaningful_paint, timestamps.trace_end,
            self.min_quiet_duration
        )

    def find_network_quiet_periods(self, network_requests: Sequence[Interval],
                                   timestamps: TraceTimestamps) -> List[Interval]:
        """Quiet periods of network activity after first meaningful paint."""
        return compute_quiet_periods(
            network_requests, self.max_concurrent_network_requests,
            timestamps.first_meaningful_paint, timestamps.trace_end,
            self.min_quiet_duration
        )

    def find_overlapping_quiet_periods(self, long_tasks: Sequence[Interval],
                                       network_requests: Sequence[Interval],
                                       timestamps: TraceTimestamps) -> OverlappingQuietPeriods:
        """
        Find the earliest CPU and network quiet periods that overlap.

        The two periods must share at least the minimum quiet duration.

        Args:
            long_tasks: CPU busy intervals
            network_requests: In-flight spans of network requests
            timestamps: Reference timestamps of the trace

        Returns:
            OverlappingQuietPeriods with both selected periods and all candidates

        Raises:
            WindowTooShortError: The trace ended too soon after first meaningful paint
            CpuNeverQuietError: No CPU quiet period overlaps a network one
            NetworkNeverQuietError: No network quiet period overlaps a CPU one
        """
        cpu_quiet_periods = self.find_cpu_quiet_periods(long_tasks, timestamps)
        network_quiet_periods = self.find_network_quiet_periods(network_requests, timestamps)

        self.logger.debug(
            f"Found {len(cpu_quiet_periods)} CPU and "
            f"{len(network_quiet_periods)} network quiet periods"
        )

        window = timestamps.trace_end - timestamps.first_meaningful_paint
        if window < self.min_quiet_duration:
            raise WindowTooShortError(
                f"Page did not quiet for at least {self._required_seconds()}s before end of trace "
                f"(trace ended {window:.0f}ms after first meaningful paint)."
            )

        if not cpu_quiet_periods:
            raise CpuNeverQuietError(self._did_not_quiet_message('CPU'))
        if not network_quiet_periods:
            raise NetworkNeverQuietError(self._did_not_quiet_message('Network'))

        cpu_index = 0
        network_index = 0

        while cpu_index < len(cpu_quiet_periods) and network_index < len(network_quiet_periods):
            cpu_candidate = cpu_quiet_periods[cpu_index]
            network_candidate = network_quiet_periods[network_index]

            if cpu_candidate.start >= network_candidate.start:
                # CPU starts later, the network period has to last long enough past it
                overlaps = network_candidate.end >= cpu_candidate.start + self.min_quiet_duration
                if not overlaps:
                    network_index += 1
            else:
                overlaps = cpu_candidate.end >= network_candidate.start + self.min_quiet_duration
                if not overlaps:
                    cpu_index += 1

            if overlaps:
                return OverlappingQuietPeriods(
                    cpu_quiet_period=cpu_candidate,
                    network_quiet_period=network_candidate,
                    cpu_quiet_periods=tuple(cpu_quiet_periods),
                    network_quiet_periods=tuple(network_quiet_periods),
                )

        if cpu_index < len(cpu_quiet_periods):
            raise NetworkNeverQuietError(self._did_not_quiet_message('Network'))
        raise CpuNeverQuietError(self._did_not_quiet_message('CPU'))

    def _required_seconds(self) -> str:
        return f"{self.min_quiet_duration / 1000:g}"

    def _did_not_quiet_message(self, timeline: str) -> str:
        return f"{timeline} did not quiet for at least {self._required_seconds()}s before end of trace."


def find_overlapping_quiet_periods(long_tasks: Sequence[Interval],
                                   network_requests: Sequence[Interval],
                                   timestamps: TraceTimestamps) -> OverlappingQuietPeriods:
    """
    Find the earliest overlapping quiet periods using the default thresholds.
    """
    return QuietPeriodFinder().find_overlapping_quiet_periods(
        long_tasks, network_requests, timestamps
    )
