# pageload_profiler/analyzer/report_generator.py - Report generation
"""
Generates human-readable reports from analysis results.
"""

from typing import Dict
from datetime import datetime
import logging

from pageload_profiler.utils.helpers import format_bytes, format_duration_ms


class ReportGenerator:
    """
    Generates plain-text reports from analysis results.
    """

    def __init__(self):
        """
        Initialize the report generator.
        """
        self.logger = logging.getLogger(__name__)

    def generate_text_report(self, analysis: Dict) -> str:
        """
        Generate a human-readable text report.

        Args:
            analysis: Analysis results dictionary

        Returns:
            Formatted text report
        """
        lines = []
        lines.append("=" * 80)
        lines.append("Page Load Profiler - Report")
        lines.append("=" * 80)
        lines.append(f"Generated at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append("")

        if 'timestamps' in analysis:
            timestamps = analysis['timestamps']
            lines.append("TRACE")
            lines.append("-" * 80)
            fmp = timestamps['first_meaningful_paint'] - timestamps['navigation_start']
            length = timestamps['trace_end'] - timestamps['navigation_start']
            lines.append(f"First Meaningful Paint: {format_duration_ms(fmp)}")
            lines.append(f"Trace Length: {format_duration_ms(length)}")
            lines.append("")

        if 'chains' in analysis:
            chains = analysis['chains']
            longest = chains.get('longest_chain', {})
            lines.append("CRITICAL REQUEST CHAINS")
            lines.append("-" * 80)
            lines.append(f"Chains: {chains.get('chain_count', 0)}")
            lines.append(f"Requests: {chains.get('request_count', 0)}")
            lines.append(f"Longest Chain Length: {longest.get('length', 0)}")
            lines.append(f"Longest Chain Duration: {format_duration_ms(longest.get('duration_ms', 0))}")
            lines.append(f"Longest Chain Transfer Size: {format_bytes(longest.get('transfer_size', 0))}")
            lines.append("")

        if 'interactive' in analysis:
            interactive = analysis['interactive']
            lines.append("TIME TO INTERACTIVE")
            lines.append("-" * 80)
            if interactive.get('time_to_interactive_ms') is None:
                lines.append("Time to Interactive: could not be determined")
                lines.append(f"Reason: {interactive.get('error', 'unknown')}")
            else:
                lines.append(
                    f"Time to Interactive: {format_duration_ms(interactive['time_to_interactive_ms'])}"
                )
                lines.append(
                    f"Qualifying Quiet Periods: {interactive.get('cpu_quiet_period_count', 0)} CPU, "
                    f"{interactive.get('network_quiet_period_count', 0)} network"
                )
            lines.append("")

        lines.append("=" * 80)

        return "\n".join(lines)
