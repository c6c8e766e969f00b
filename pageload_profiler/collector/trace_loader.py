# pageload_profiler/collector/trace_loader.py - Trace summary loading
"""
Loads page-load trace summaries from JSON or YAML files.
Converts the captured records into the structures used by the analyzers.
"""

from typing import Any, Dict, List
from dataclasses import dataclass, field
from pathlib import Path
import json
import logging

import yaml

from pageload_profiler.analyzer.quiet_periods import Interval, TraceTimestamps
from pageload_profiler.analyzer.request_chains import NetworkRequest, RequestNode, RequestTree


logger = logging.getLogger(__name__)


@dataclass
class PageLoadTrace:
    """
    Everything captured about one page load.
    """
    timestamps: TraceTimestamps
    long_tasks: List[Interval] = field(default_factory=list)
    network_requests: List[Interval] = field(default_factory=list)
    request_chains: RequestTree = field(default_factory=dict)


def _pick(record: Dict, *keys: str, default: Any = None) -> Any:
    """Return the first key present, so both snake_case and camelCase records load."""
    for key in keys:
        if key in record:
            return record[key]
    return default


def _require(record: Dict, *keys: str) -> Any:
    value = _pick(record, *keys)
    if value is None:
        raise ValueError(f"Missing field '{keys[0]}' in {record!r}")
    return value


def _expect_dict(value: Any, what: str) -> Dict:
    if not isinstance(value, dict):
        raise ValueError(f"Expected {what} to be a mapping, got {type(value).__name__}")
    return value


def _expect_list(value: Any, what: str) -> List:
    if not isinstance(value, list):
        raise ValueError(f"Expected {what} to be a list, got {type(value).__name__}")
    return value


def _number(value: Any, name: str, cast=float):
    """Convert a field to a number, reporting bad values as ValueError."""
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValueError(f"Field '{name}' must be a number, got {value!r}") from None


def parse_timestamps(data: Dict) -> TraceTimestamps:
    """
    Parse the reference timestamps of a trace.

    Args:
        data: Dictionary with navigation start, first meaningful paint and trace end

    Returns:
        TraceTimestamps
    """
    data = _expect_dict(data, "'timestamps'")
    dom_content_loaded = _pick(data, 'dom_content_loaded', 'domContentLoaded')

    timestamps = TraceTimestamps(
        navigation_start=_number(
            _require(data, 'navigation_start', 'navigationStart'), 'navigation_start'
        ),
        first_meaningful_paint=_number(
            _require(data, 'first_meaningful_paint', 'firstMeaningfulPaint'), 'first_meaningful_paint'
        ),
        trace_end=_number(_require(data, 'trace_end', 'traceEnd'), 'trace_end'),
        dom_content_loaded=(
            _number(dom_content_loaded, 'dom_content_loaded')
            if dom_content_loaded is not None else None
        ),
    )

    if not (timestamps.navigation_start <= timestamps.first_meaningful_paint <= timestamps.trace_end):
        raise ValueError(
            "Timestamps must satisfy navigation_start <= first_meaningful_paint <= trace_end, "
            f"got {timestamps}"
        )

    return timestamps


def parse_intervals(records: List[Dict]) -> List[Interval]:
    """
    Parse a list of {start, end} records.

    Args:
        records: Interval records

    Returns:
        List of Interval objects
    """
    intervals = []

    for record in _expect_list(records, "interval records"):
        record = _expect_dict(record, "an interval record")
        interval = Interval(
            start=_number(_require(record, 'start', 'startTime', 'start_time'), 'start'),
            end=_number(_require(record, 'end', 'endTime', 'end_time'), 'end'),
        )
        if interval.start > interval.end:
            raise ValueError(f"Interval starts after it ends: {record!r}")
        intervals.append(interval)

    return intervals


def parse_network_requests(records: List[Dict]) -> List[Interval]:
    """
    Parse network request spans, skipping failed requests.

    Args:
        records: Request records with start, end and optional status

    Returns:
        List of in-flight intervals
    """
    successful = []

    for record in _expect_list(records, "'network_requests'"):
        record = _expect_dict(record, "a network request record")
        status_code = _number(
            _pick(record, 'status_code', 'statusCode', default=0) or 0, 'status_code', int
        )
        if record.get('failed') or status_code >= 400:
            logger.debug(f"Skipping failed request {record.get('url', '')}")
            continue
        successful.append(record)

    return parse_intervals(successful)


def parse_request_tree(data: Dict) -> RequestTree:
    """
    Parse a critical request chain tree.

    Args:
        data: Mapping of request id to {request, children}

    Returns:
        Mapping of request id to RequestNode
    """
    tree = {}

    for request_id, entry in _expect_dict(data, "request chains").items():
        entry = _expect_dict(entry, f"chain entry {request_id!r}")
        request_data = _expect_dict(entry.get('request', {}), f"request of {request_id!r}")
        transfer_size = _pick(request_data, 'transfer_size', 'transferSize', default=0)
        request = NetworkRequest(
            start_time=_number(_require(request_data, 'start_time', 'startTime'), 'start_time'),
            end_time=_number(_require(request_data, 'end_time', 'endTime'), 'end_time'),
            transfer_size=_number(transfer_size, 'transfer_size', int),
            url=_pick(request_data, 'url', default=""),
        )
        if request.start_time > request.end_time:
            raise ValueError(f"Request {request_id} starts after it ends")

        tree[request_id] = RequestNode(
            request=request,
            children=parse_request_tree(entry.get('children') or {}),
        )

    return tree


def parse_trace(data: Dict) -> PageLoadTrace:
    """
    Build a PageLoadTrace from a decoded trace summary.

    Args:
        data: Decoded trace summary

    Returns:
        PageLoadTrace
    """
    data = _expect_dict(data, "the trace summary")
    if 'timestamps' not in data:
        raise ValueError("Trace summary has no 'timestamps' section")

    return PageLoadTrace(
        timestamps=parse_timestamps(data['timestamps']),
        long_tasks=parse_intervals(_pick(data, 'long_tasks', 'longTasks', default=[])),
        network_requests=parse_network_requests(
            _pick(data, 'network_requests', 'networkRecords', default=[])
        ),
        request_chains=parse_request_tree(
            _pick(data, 'request_chains', 'criticalRequestChains', default={})
        ),
    )


def load_trace(trace_file: str) -> PageLoadTrace:
    """
    Load a trace summary from a JSON or YAML file.

    Args:
        trace_file: Path to the trace summary

    Returns:
        PageLoadTrace
    """
    trace_path = Path(trace_file)

    if not trace_path.exists():
        raise FileNotFoundError(f"Trace file not found: {trace_file}")

    try:
        with open(trace_path, 'r', encoding='utf-8') as f:
            if trace_path.suffix.lower() in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        trace = parse_trace({} if data is None else data)

    except (ValueError, yaml.YAMLError) as e:
        logger.error(f"Failed to load trace {trace_file}: {e}")
        raise

    logger.info(
        f"Loaded {trace_file}: {len(trace.long_tasks)} long tasks, "
        f"{len(trace.network_requests)} network requests"
    )
    return trace
