# pageload_profiler/exporters/json_exporter.py - JSON format exporter
"""
Exports analysis results as JSON files.
"""

import json
from pathlib import Path
from datetime import datetime
from typing import Dict, Optional
import logging


class JSONExporter:
    """
    Exports analysis results to JSON format.

    Provides structured JSON output for further processing or visualization.
    """

    def __init__(self, output_dir: Optional[str] = None):
        """
        Initialize the JSON exporter.

        Args:
            output_dir: Directory to save JSON files (default: current directory)
        """
        self.output_dir = Path(output_dir) if output_dir else Path('.')
        self.logger = logging.getLogger(__name__)

        self.output_dir.mkdir(parents=True, exist_ok=True)

    def to_json(self, analysis: Dict, source: Optional[str] = None) -> str:
        """
        Serialize an analysis with its metadata.

        Args:
            analysis: Analysis dictionary
            source: Trace file the analysis was computed from

        Returns:
            JSON document
        """
        output_data = {
            'timestamp': datetime.now().isoformat(),
            'source': source,
            'analysis': analysis
        }
        return json.dumps(output_data, indent=2)

    def export_analysis(self, analysis: Dict, filename: Optional[str] = None,
                        source: Optional[str] = None) -> str:
        """
        Export analysis results to JSON file.

        Args:
            analysis: Analysis dictionary
            filename: Output path, used as given. When omitted a timestamped
                file is created in the output directory.
            source: Trace file the analysis was computed from

        Returns:
            Path to output file
        """
        if filename:
            output_path = Path(filename)
            output_path.parent.mkdir(parents=True, exist_ok=True)
        else:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            output_path = self.output_dir / f'analysis_{timestamp}.json'

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.to_json(analysis, source))

        self.logger.info(f"Exported analysis to {output_path}")
        return str(output_path)
