"""
Distribution Matcher v1.0.0

A "match the distribution" game built on a small statistical core.
Each round generates three samples from mixtures of Gaussian
components (some skewed, clamped or salted with outliers) and shows
every sample three ways: kernel density estimate, box plot with IQR
fences, and normal Q-Q plot.  The player links the three views of the
same sample.

The core (sampling, statistics, round orchestration, match
evaluation) is GUI-free; ``python -m distmatch`` starts the PySide6
front-end.
"""

APP_NAME = "Distribution Matcher"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-19"
__version__ = APP_VERSION
