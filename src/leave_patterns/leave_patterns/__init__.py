"""Leave Pattern Analyzer package.

This package is organized by feature modules (core, common, analysis) with a
thin Flask controller layer on top of a pure analysis pipeline:
normalizer -> detectors -> risk aggregator -> report builder.
"""
