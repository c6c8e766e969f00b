# pageload_profiler/analyzer/trace_analyzer.py - Full page-load analysis
"""
Runs every analysis over a loaded trace and combines the results.
"""

from typing import Dict, Optional
import logging

from pageload_profiler.analyzer.interactive import InteractiveAnalyzer
from pageload_profiler.analyzer.request_chains import CriticalRequestChainAnalyzer


class TraceAnalyzer:
    """
    Analyzes a page-load trace: critical request chains and Time to Interactive.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize the trace analyzer.

        Args:
            config: Optional configuration dictionary with an 'interactive' section
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.chain_analyzer = CriticalRequestChainAnalyzer()
        self.interactive_analyzer = InteractiveAnalyzer(self.config.get('interactive', {}))

    def analyze(self, trace) -> Dict:
        """
        Analyze a trace.

        Args:
            trace: PageLoadTrace object

        Returns:
            Dictionary with 'timestamps', 'chains' and 'interactive' sections
        """
        timestamps = trace.timestamps

        analysis = {
            'timestamps': {
                'navigation_start': timestamps.navigation_start,
                'first_meaningful_paint': timestamps.first_meaningful_paint,
                'trace_end': timestamps.trace_end,
            },
            'chains': self.chain_analyzer.analyze(trace.request_chains),
            'interactive': self.interactive_analyzer.analyze(
                trace.long_tasks, trace.network_requests, timestamps
            ),
        }

        self.logger.debug(f"Analysis complete: {analysis}")
        return analysis
