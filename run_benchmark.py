#!/usr/bin/env python3
"""
Quick benchmark runner script.

This is a convenience wrapper around experiments/comparison_experiment.py
that can be run from the repository root.

Usage:
    # Run every workload, 10s per run, all logical CPUs
    python3 run_benchmark.py

    # Only the gzip workloads on 8 threads, 3 seconds per run
    python3 run_benchmark.py -r gzip -c 8 -t 3
"""

import sys

from experiments.comparison_experiment import main

if __name__ == '__main__':
    sys.exit(main())
