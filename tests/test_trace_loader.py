# tests/test_trace_loader.py - Tests for trace loading
"""
Unit tests for parsing and loading trace summaries.
"""

import json

import pytest
import yaml
from pageload_profiler.analyzer.quiet_periods import Interval
from pageload_profiler.collector.trace_loader import (
    load_trace,
    parse_network_requests,
    parse_request_tree,
    parse_timestamps,
    parse_trace,
)


TRACE = {
    'timestamps': {
        'navigation_start': 0,
        'first_meaningful_paint': 2500,
        'trace_end': 10000,
    },
    'long_tasks': [{'start': 3000, 'end': 3200}],
    'network_requests': [
        {'start': 100, 'end': 900, 'url': 'https://example.com/'},
        {'start': 200, 'end': 400, 'url': 'https://example.com/missing.png', 'status_code': 404},
    ],
    'request_chains': {
        'nav': {
            'request': {'start_time': 0.1, 'end_time': 0.9, 'transfer_size': 12000, 'url': 'https://example.com/'},
            'children': {
                'css': {
                    'request': {'start_time': 0.9, 'end_time': 1.2, 'transfer_size': 3000},
                    'children': {},
                },
            },
        },
    },
}


class TestParseTrace:
    """Test cases for trace parsing"""

    def test_parse_trace(self):
        """Test a full snake_case trace summary"""
        trace = parse_trace(TRACE)

        assert trace.timestamps.first_meaningful_paint == 2500
        assert trace.timestamps.dom_content_loaded is None
        assert trace.long_tasks == [Interval(3000, 3200)]
        assert trace.network_requests == [Interval(100, 900)]

        nav = trace.request_chains['nav']
        assert nav.request.transfer_size == 12000
        assert nav.request.url == 'https://example.com/'
        assert nav.children['css'].request.end_time == 1.2
        assert nav.children['css'].children == {}

    def test_camel_case_keys(self):
        """Test records using the capture tool's field names"""
        timestamps = parse_timestamps({
            'navigationStart': 100,
            'firstMeaningfulPaint': 300,
            'traceEnd': 900,
            'domContentLoaded': 250,
        })
        tree = parse_request_tree({
            'nav': {'request': {'startTime': 1, 'endTime': 2, 'transferSize': 10}, 'children': {}},
        })

        assert timestamps.navigation_start == 100
        assert timestamps.dom_content_loaded == 250
        assert tree['nav'].request.transfer_size == 10

    def test_failed_requests_are_skipped(self):
        """Test failed and error responses are left out of network activity"""
        requests = parse_network_requests([
            {'start': 0, 'end': 10},
            {'start': 0, 'end': 10, 'failed': True},
            {'start': 0, 'end': 10, 'statusCode': 500},
            {'start': 0, 'end': 10, 'status_code': 304},
        ])

        assert requests == [Interval(0, 10), Interval(0, 10)]

    def test_unordered_timestamps_rejected(self):
        """Test first meaningful paint after trace end is rejected"""
        with pytest.raises(ValueError):
            parse_timestamps({'navigation_start': 0, 'first_meaningful_paint': 11000, 'trace_end': 10000})

    def test_missing_timestamp_rejected(self):
        """Test a missing trace end is rejected"""
        with pytest.raises(ValueError, match='trace_end'):
            parse_timestamps({'navigation_start': 0, 'first_meaningful_paint': 100})

    def test_inverted_interval_rejected(self):
        """Test an interval ending before it starts is rejected"""
        data = dict(TRACE, long_tasks=[{'start': 5000, 'end': 4000}])

        with pytest.raises(ValueError):
            parse_trace(data)

    def test_missing_timestamps_section(self):
        """Test a summary without timestamps is rejected"""
        with pytest.raises(ValueError, match='timestamps'):
            parse_trace({'long_tasks': []})

    def test_optional_sections_default_to_empty(self):
        """Test a summary with only timestamps"""
        trace = parse_trace({'timestamps': TRACE['timestamps']})

        assert trace.long_tasks == []
        assert trace.network_requests == []
        assert trace.request_chains == {}

    def test_null_timestamps_rejected(self):
        """Test a null timestamps section is reported as a ValueError"""
        with pytest.raises(ValueError, match='timestamps'):
            parse_trace({'timestamps': None})

    def test_non_mapping_document_rejected(self):
        """Test a top-level list is reported as a ValueError"""
        with pytest.raises(ValueError):
            parse_trace([TRACE])

    def test_null_transfer_size_rejected(self):
        """Test a null numeric field is reported as a ValueError"""
        with pytest.raises(ValueError, match='transfer_size'):
            parse_request_tree({
                'nav': {'request': {'start_time': 0, 'end_time': 1, 'transfer_size': None}},
            })

    def test_non_numeric_interval_rejected(self):
        """Test a non-numeric interval bound is reported as a ValueError"""
        with pytest.raises(ValueError, match='start'):
            parse_trace(dict(TRACE, long_tasks=[{'start': 'soon', 'end': 10}]))

    def test_list_children_rejected(self):
        """Test children given as a list are reported as a ValueError"""
        with pytest.raises(ValueError, match='request chains'):
            parse_request_tree({
                'nav': {
                    'request': {'start_time': 0, 'end_time': 1},
                    'children': [{'request': {'start_time': 1, 'end_time': 2}}],
                },
            })

    def test_non_list_interval_section_rejected(self):
        """Test a long task section that is not a list is reported as a ValueError"""
        with pytest.raises(ValueError):
            parse_trace(dict(TRACE, long_tasks={'start': 0, 'end': 10}))

    def test_non_numeric_status_rejected(self):
        """Test a non-numeric status code is reported as a ValueError"""
        with pytest.raises(ValueError, match='status_code'):
            parse_network_requests([{'start': 0, 'end': 10, 'status_code': 'oops'}])


class TestLoadTrace:
    """Test cases for load_trace"""

    def test_load_json(self, tmp_path):
        """Test loading a JSON trace summary"""
        trace_file = tmp_path / 'trace.json'
        trace_file.write_text(json.dumps(TRACE))

        trace = load_trace(str(trace_file))

        assert len(trace.long_tasks) == 1
        assert 'nav' in trace.request_chains

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML trace summary"""
        trace_file = tmp_path / 'trace.yaml'
        trace_file.write_text(yaml.dump(TRACE))

        trace = load_trace(str(trace_file))

        assert trace.timestamps.trace_end == 10000
        assert trace.network_requests == [Interval(100, 900)]

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError"""
        with pytest.raises(FileNotFoundError):
            load_trace(str(tmp_path / 'missing.json'))

    def test_utf8_yaml(self, tmp_path):
        """Test non-ASCII content is decoded as UTF-8"""
        trace_file = tmp_path / 'trace.yaml'
        data = dict(TRACE, network_requests=[{'start': 100, 'end': 900, 'url': 'https://example.com/caf\u00e9'}])
        trace_file.write_text(yaml.dump(data, allow_unicode=True), encoding='utf-8')

        trace = load_trace(str(trace_file))

        assert trace.network_requests == [Interval(100, 900)]

    def test_null_section_in_file(self, tmp_path):
        """Test a file with a null timestamps section raises ValueError"""
        trace_file = tmp_path / 'trace.json'
        trace_file.write_text(json.dumps({'timestamps': None}))

        with pytest.raises(ValueError):
            load_trace(str(trace_file))

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON raises ValueError"""
        trace_file = tmp_path / 'trace.json'
        trace_file.write_text('{not json')

        with pytest.raises(ValueError):
            load_trace(str(trace_file))
