#!/usr/bin/env python3
"""
Single- vs multi-thread throughput comparison

Runs every registered workload matching a name filter twice, once on one
thread and once on N threads, each for a fixed number of seconds, and prints
one CSV line per workload:

    name,singleThreadReport,multiThreadReport

Usage:
    # Run everything for 10s per run on all logical CPUs
    python3 comparison_experiment.py

    # Only the regexp workloads, 4 threads, 2 seconds per run
    python3 comparison_experiment.py -r '^regexp' -c 4 -t 2

    # Profile the whole run
    python3 comparison_experiment.py --cpuprofile bench.prof

    # Custom configuration file and a JSON metrics export
    python3 comparison_experiment.py --config my.yaml --metrics-output metrics.json
"""

import os
import sys
import argparse
import logging
from typing import Callable, Optional, TextIO

from harness import (
    ComparisonRunner,
    ConfigError,
    ConfigLoader,
    ConfigValidator,
    MetricsCollector,
    ProfileSession,
    ResourceError,
    WorkloadInvariantViolation,
    filter_workloads,
)
from workloads import SharedFixtures, WorkloadRegistry, build_default_registry

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Configure logging to stderr; stdout carries the CSV records."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Compare single- and multi-thread throughput of registered workloads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to YAML configuration file'
    )
    parser.add_argument(
        '--cpuprofile',
        type=str,
        default=None,
        metavar='FILE',
        help='Write a CPU profile of the whole run, worker threads included, to FILE (pstat format)'
    )
    parser.add_argument(
        '--threads', '-c',
        type=int,
        default=None,
        help='Number of threads for the multi-thread run (0 = all logical CPUs)'
    )
    parser.add_argument(
        '--duration', '-t',
        type=float,
        default=None,
        help='Duration of each benchmark run in seconds (default: 10)'
    )
    parser.add_argument(
        '--run', '-r',
        type=str,
        default=None,
        metavar='PATTERN',
        help="Regular expression selecting workloads to run (default: '.*')"
    )
    parser.add_argument(
        '--metrics-output',
        type=str,
        default=None,
        help='Write per-run timing metrics as JSON to this file'
    )
    parser.add_argument(
        '--summary',
        action='store_true',
        help='Print a human-readable summary to stderr after the run'
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List the workloads matching the filter and exit'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: from config, INFO)'
    )

    return parser.parse_args(argv)


def build_overrides(args) -> dict:
    """Build configuration overrides from command line arguments."""
    overrides = {}

    if args.threads is not None:
        overrides['benchmark.parallelism'] = args.threads
    if args.duration is not None:
        overrides['benchmark.duration'] = args.duration
    if args.run is not None:
        overrides['benchmark.filter'] = args.run

    if args.cpuprofile:
        overrides['output.cpuprofile'] = args.cpuprofile
    if args.metrics_output:
        overrides['output.metrics'] = args.metrics_output

    return overrides


def main(argv=None,
         registry_factory: Callable[[SharedFixtures], WorkloadRegistry] = build_default_registry,
         stream: Optional[TextIO] = None) -> int:
    """Run the comparison and return the process exit code."""
    args = parse_args(argv)
    out = stream or sys.stdout

    setup_logging(args.log_level or "INFO")

    overrides = build_overrides(args)
    if overrides:
        logger.debug(f"Configuration overrides: {overrides}")

    try:
        loader = ConfigLoader(args.config, overrides)
        config = loader.load()
        harness_config = ConfigValidator.validate(config)

        if args.log_level is None:
            logging.getLogger().setLevel(getattr(logging, harness_config.log_level.upper(), logging.INFO))

        logger.info(f"Max threads: {harness_config.parallelism}; CPUs available: {os.cpu_count()}")

        fixtures = SharedFixtures.from_config(harness_config.fixtures)
        registry = registry_factory(fixtures)
        selected = filter_workloads(harness_config.filter_pattern, registry.all())

        if args.list:
            for workload in selected:
                print(workload.name, file=out)
            return 0

        if not selected:
            logger.warning(f"No workloads match {harness_config.filter_pattern!r}")

        metrics = None
        if harness_config.metrics_output or args.summary:
            metrics = MetricsCollector(
                experiment_name="throughput-comparison",
                parallelism=harness_config.parallelism,
                duration=harness_config.duration,
            )
            metrics.set_config(config)
            metrics.set_cli_args(vars(args))

        runner = ComparisonRunner(
            parallelism=harness_config.parallelism,
            duration=harness_config.duration,
            metrics=metrics,
        )

        profile = None
        if harness_config.cpuprofile:
            profile = ProfileSession(harness_config.cpuprofile)
            profile.start()

        completed = False
        try:
            for record in runner.run(selected):
                print(record.to_csv_line(), file=out, flush=True)
            completed = True
        finally:
            if profile is not None:
                try:
                    profile.stop()
                except ResourceError as e:
                    if completed:
                        raise
                    # Keep the workload error as the reported failure
                    logger.error(f"CPU profile not written: {e}")

        if metrics is not None:
            if harness_config.metrics_output:
                metrics.save_to_file(harness_config.metrics_output)
                logger.info(f"Metrics written to {harness_config.metrics_output}")
            else:
                metrics.finalize()
            if args.summary:
                metrics.get_metrics().print_summary()

        return 0

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except ResourceError as e:
        logger.error(f"Resource error: {e}")
        return 1
    except WorkloadInvariantViolation as e:
        logger.error(f"Workload failed, aborting run: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
