# pageload_profiler/analyzer/interactive.py - Time to Interactive
"""
Computes Time to Interactive from the first mutually quiet CPU and network window.
"""

from typing import Dict, Optional, Sequence
import logging

from pageload_profiler.analyzer.quiet_periods import (
    Interval,
    QuietPeriodError,
    QuietPeriodFinder,
    TraceTimestamps,
)


class InteractiveAnalyzer:
    """
    Determines when a page became consistently interactive.

    A trace that never quiets down is a reportable outcome, not a failure:
    the result carries the reason instead of a timing.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize the interactive analyzer.

        Args:
            config: Optional configuration dictionary (see QuietPeriodFinder)
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)
        self.finder = QuietPeriodFinder(self.config)

    def analyze(self, long_tasks: Sequence[Interval], network_requests: Sequence[Interval],
                timestamps: TraceTimestamps) -> Dict:
        """
        Compute Time to Interactive.

        Args:
            long_tasks: CPU busy intervals
            network_requests: In-flight spans of network requests
            timestamps: Reference timestamps of the trace

        Returns:
            Dictionary with the timing and the quiet periods it was derived from
        """
        try:
            periods = self.finder.find_overlapping_quiet_periods(
                long_tasks, network_requests, timestamps
            )
        except QuietPeriodError as e:
            self.logger.warning(f"Time to Interactive could not be determined: {e}")
            return {
                'time_to_interactive_ms': None,
                'timestamp': None,
                'error': str(e),
                'error_type': type(e).__name__,
            }

        candidates = [periods.cpu_quiet_period.start, timestamps.first_meaningful_paint]
        if timestamps.dom_content_loaded is not None:
            candidates.append(timestamps.dom_content_loaded)

        timestamp = max(candidates)
        time_to_interactive_ms = timestamp - timestamps.navigation_start

        self.logger.info(f"Time to Interactive: {time_to_interactive_ms:.0f}ms")

        return {
            'time_to_interactive_ms': time_to_interactive_ms,
            'timestamp': timestamp,
            'cpu_quiet_period': periods.cpu_quiet_period.to_dict(),
            'network_quiet_period': periods.network_quiet_period.to_dict(),
            'cpu_quiet_period_count': len(periods.cpu_quiet_periods),
            'network_quiet_period_count': len(periods.network_quiet_periods),
        }
