# pageload_profiler/cli.py - Command-line interface
"""
Command-line interface for the Page Load Profiler.
"""

import click
import logging
import sys
from pathlib import Path

import yaml

from pageload_profiler.utils.logger import setup_logging
from pageload_profiler.utils.config import Config


logger = logging.getLogger(__name__)


def _load_config(config_file):
    try:
        return Config(config_file)
    except (yaml.YAMLError, ValueError) as e:
        click.echo(f"Error: invalid configuration {config_file}: {e}", err=True)
        sys.exit(1)


def _load_trace(trace_file):
    from pageload_profiler.collector.trace_loader import load_trace

    try:
        return load_trace(trace_file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error: could not read trace {trace_file}: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option('--log-level', default='WARNING', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']))
@click.option('--log-file', type=click.Path(), help='Log file path')
@click.option('--no-color', is_flag=True, help='Disable colored console logs')
@click.pass_context
def cli(ctx, log_level, log_file, no_color):
    """
    Page Load Profiler

    Finds the critical request chains and Time to Interactive of a captured page load.
    """
    ctx.ensure_object(dict)

    setup_logging(level=log_level, log_file=log_file, use_colors=not no_color)

    ctx.obj['log_level'] = log_level
    ctx.obj['log_file'] = log_file


@cli.command()
@click.argument('trace_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', type=click.Path(exists=True), help='Configuration file')
@click.option('--output-format', type=click.Choice(['stdout', 'json', 'text', 'prometheus']),
              help='Output format (default from config)')
@click.option('--output', type=click.Path(), help='Output file (json and text formats)')
@click.option('--page', default='default', help='Page label for Prometheus metrics')
def analyze(trace_file, config, output_format, output, page):
    """
    Analyze a page-load trace.

    Example:
        pageload-profiler analyze trace.json
        pageload-profiler analyze trace.json --output-format json --output result.json
        pageload-profiler analyze trace.yaml --config configs/default.yaml
    """
    from pageload_profiler.analyzer.trace_analyzer import TraceAnalyzer
    from pageload_profiler.analyzer.report_generator import ReportGenerator
    from pageload_profiler.exporters.stdout import StdoutExporter
    from pageload_profiler.exporters.json_exporter import JSONExporter
    from pageload_profiler.exporters.prometheus import PrometheusExporter

    cfg = _load_config(config)
    if output_format:
        cfg.set('output.format', output_format)

    logger.info(f"Analyzing {trace_file}")
    trace = _load_trace(trace_file)
    analysis = TraceAnalyzer(cfg.to_dict()).analyze(trace)

    fmt = cfg.get('output.format', 'stdout')

    try:
        if fmt == 'json':
            exporter = JSONExporter(cfg.get('output.directory'))
            if output:
                path = exporter.export_analysis(analysis, filename=output, source=trace_file)
                click.echo(f"Analysis written to {path}")
            else:
                click.echo(exporter.to_json(analysis, source=trace_file))

        elif fmt == 'text':
            report = ReportGenerator().generate_text_report(analysis)
            if output:
                Path(output).parent.mkdir(parents=True, exist_ok=True)
                with open(output, 'w', encoding='utf-8') as f:
                    f.write(report + "\n")
                click.echo(f"Report written to {output}")
            else:
                click.echo(report)

        elif fmt == 'prometheus':
            exporter = PrometheusExporter()
            exporter.record_analysis(analysis, page=page)
            click.echo(exporter.get_metrics_text(), nl=False)

        else:
            StdoutExporter(use_colors=cfg.get('output.use_colors', True)).print_analysis(analysis)

    except OSError as e:
        click.echo(f"Error: could not write output: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('trace_file', type=click.Path(exists=True, dir_okay=False))
def chains(trace_file):
    """
    Show the critical request chains of a trace.

    Example:
        pageload-profiler chains trace.json
    """
    from pageload_profiler.analyzer.request_chains import CriticalRequestChainAnalyzer

    trace = _load_trace(trace_file)
    result = CriticalRequestChainAnalyzer().analyze(trace.request_chains)
    longest = result['longest_chain']

    click.echo(f"Chains: {result['chain_count']}")
    click.echo(f"Requests: {result['request_count']}")
    click.echo(f"Longest chain: {longest['length']} requests, "
               f"{longest['duration_ms']:.0f}ms, {longest['transfer_size']} bytes")


@cli.command()
@click.argument('trace_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', type=click.Path(exists=True), help='Configuration file')
def interactive(trace_file, config):
    """
    Compute Time to Interactive for a trace.

    A trace that never quiets down is reported, not treated as an error.

    Example:
        pageload-profiler interactive trace.json
    """
    from pageload_profiler.analyzer.interactive import InteractiveAnalyzer

    cfg = _load_config(config)
    trace = _load_trace(trace_file)

    result = InteractiveAnalyzer(cfg.get('interactive', {})).analyze(
        trace.long_tasks, trace.network_requests, trace.timestamps
    )

    if result['time_to_interactive_ms'] is None:
        click.echo(f"Time to Interactive could not be determined: {result['error']}")
        return

    cpu = result['cpu_quiet_period']
    network = result['network_quiet_period']
    click.echo(f"Time to Interactive: {result['time_to_interactive_ms']:.0f}ms")
    click.echo(f"CPU quiet period: {cpu['start']:.0f} - {cpu['end']:.0f}")
    click.echo(f"Network quiet period: {network['start']:.0f} - {network['end']:.0f}")


@cli.command('init-config')
@click.argument('path', type=click.Path(dir_okay=False))
def init_config(path):
    """
    Write the default configuration to a YAML file.

    Example:
        pageload-profiler init-config profiler.yaml
    """
    Config().save_to_file(path)
    click.echo(f"Default configuration written to {path}")


if __name__ == '__main__':
    cli(obj={})
