# pageload_profiler/collector/__init__.py - Trace input module
"""
Collector module for reading captured page-load traces.

This module provides:
- trace_loader.py: Loads JSON/YAML trace summaries into analyzer structures
"""
