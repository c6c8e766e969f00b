# pageload_profiler/exporters/stdout.py - Console output exporter
"""
Exports analysis results to stdout in human-readable format.
"""

from typing import Dict
from colorama import Fore, Style, init
import logging

from pageload_profiler.utils.helpers import format_bytes, format_duration_ms


# Initialize colorama
init(autoreset=True)


class StdoutExporter:
    """
    Exports analysis results to stdout with colored output.
    """

    def __init__(self, use_colors: bool = True):
        """
        Initialize the stdout exporter.

        Args:
            use_colors: Whether to use colored output
        """
        self.use_colors = use_colors
        self.logger = logging.getLogger(__name__)

    def print_chains(self, chains: Dict):
        """
        Print critical request chain results.

        Args:
            chains: 'chains' section of an analysis
        """
        self._print_header("Critical Request Chains")

        longest = chains.get('longest_chain', {})
        print(f"  Chains: {chains.get('chain_count', 0)} "
              f"({chains.get('request_count', 0)} requests)")
        print(f"  Longest Chain: {longest.get('length', 0)} requests, "
              f"{format_duration_ms(longest.get('duration_ms', 0))}, "
              f"{format_bytes(longest.get('transfer_size', 0))}")

    def print_interactive(self, interactive: Dict):
        """
        Print Time to Interactive results.

        Args:
            interactive: 'interactive' section of an analysis
        """
        self._print_header("Time to Interactive")

        if interactive.get('time_to_interactive_ms') is None:
            reason = interactive.get('error', 'unknown reason')
            print(self._paint(f"  Could not be determined: {reason}", Fore.YELLOW))
            return

        tti = format_duration_ms(interactive['time_to_interactive_ms'])
        print(self._paint(f"  Time to Interactive: {tti}", Fore.GREEN))

        cpu = interactive['cpu_quiet_period']
        network = interactive['network_quiet_period']
        print(f"  CPU Quiet Period: {cpu['start']:.0f} - {cpu['end']:.0f} "
              f"({interactive.get('cpu_quiet_period_count', 0)} candidates)")
        print(f"  Network Quiet Period: {network['start']:.0f} - {network['end']:.0f} "
              f"({interactive.get('network_quiet_period_count', 0)} candidates)")

    def print_analysis(self, analysis: Dict):
        """
        Print complete analysis to stdout.

        Args:
            analysis: Analysis dictionary
        """
        if 'chains' in analysis:
            self.print_chains(analysis['chains'])

        if 'interactive' in analysis:
            self.print_interactive(analysis['interactive'])

        print()

    def _print_header(self, title: str):
        print("\n" + self._paint("=" * 80, Fore.CYAN))
        print(self._paint(title, Fore.CYAN))
        print(self._paint("=" * 80, Fore.CYAN) + "\n")

    def _paint(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{Style.RESET_ALL}"
