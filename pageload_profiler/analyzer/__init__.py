# pageload_profiler/analyzer/__init__.py - Analysis module
"""
Analyzer module for computing page-load metrics from a captured trace.

This module provides:
- request_chains.py: Critical request chain traversal and longest chain
- quiet_periods.py: CPU and network quiet period search
- interactive.py: Time to Interactive
- trace_analyzer.py: Combined analysis of a trace
- report_generator.py: Report generation
"""
