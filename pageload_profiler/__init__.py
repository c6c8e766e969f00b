# pageload_profiler/__init__.py - Page-load profiler package
"""
Page-load profiler: critical request chains and Time to Interactive
computed from captured page-load traces.
"""

__version__ = "0.1.0"
