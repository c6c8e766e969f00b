# pageload_profiler/exporters/__init__.py - Exporters module
"""
Exporters for outputting analysis results in various formats.

This module provides:
- prometheus.py: Prometheus text format exporter
- json_exporter.py: JSON format exporter
- stdout.py: Console output exporter
"""
