"""
circostools: command-line utilities for Circos input data.

This package provides tools for:
- Binning link lists into link-density tracks (histogram, heatmap and
  stacked histogram data)
"""

__version__ = "0.3.0"
__author__ = "circostools Team"
