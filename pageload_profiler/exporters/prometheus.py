# pageload_profiler/exporters/prometheus.py - Prometheus metrics exporter
"""
Exports page-load metrics in Prometheus text format.
"""

from prometheus_client import CollectorRegistry, Gauge, generate_latest
from typing import Dict
import logging


class PrometheusExporter:
    """
    Exposes analysis results as Prometheus gauges, labelled by page.

    Each exporter owns its registry, so several can coexist in one process.
    """

    def __init__(self):
        """
        Initialize the Prometheus exporter.
        """
        self.logger = logging.getLogger(__name__)
        self.registry = CollectorRegistry()

        self.time_to_interactive = Gauge(
            'pageload_time_to_interactive_milliseconds',
            'Time to Interactive relative to navigation start',
            ['page'],
            registry=self.registry
        )

        self.interactive_determined = Gauge(
            'pageload_time_to_interactive_determined',
            'Whether Time to Interactive could be determined (1) or not (0)',
            ['page'],
            registry=self.registry
        )

        self.chain_count = Gauge(
            'pageload_critical_request_chains',
            'Number of critical request chains',
            ['page'],
            registry=self.registry
        )

        self.longest_chain_duration = Gauge(
            'pageload_longest_chain_duration_milliseconds',
            'Duration of the longest critical request chain',
            ['page'],
            registry=self.registry
        )

        self.longest_chain_length = Gauge(
            'pageload_longest_chain_length',
            'Number of requests in the longest critical request chain',
            ['page'],
            registry=self.registry
        )

        self.longest_chain_transfer_size = Gauge(
            'pageload_longest_chain_transfer_size_bytes',
            'Transfer size reported for the longest critical request chain',
            ['page'],
            registry=self.registry
        )

    def record_analysis(self, analysis: Dict, page: str = 'default'):
        """
        Record an analysis.

        Args:
            analysis: Analysis dictionary
            page: Label identifying the analyzed page
        """
        chains = analysis.get('chains', {})
        longest = chains.get('longest_chain', {})

        self.chain_count.labels(page=page).set(chains.get('chain_count', 0))
        self.longest_chain_duration.labels(page=page).set(longest.get('duration_ms', 0))
        self.longest_chain_length.labels(page=page).set(longest.get('length', 0))
        self.longest_chain_transfer_size.labels(page=page).set(longest.get('transfer_size', 0))

        tti = analysis.get('interactive', {}).get('time_to_interactive_ms')
        if tti is None:
            self.interactive_determined.labels(page=page).set(0)
        else:
            self.interactive_determined.labels(page=page).set(1)
            self.time_to_interactive.labels(page=page).set(tti)

        self.logger.debug(f"Recorded metrics for page {page}")

    def get_metrics_text(self) -> str:
        """
        Get current metrics in Prometheus text format.

        Returns:
            Metrics as text
        """
        return generate_latest(self.registry).decode('utf-8')
