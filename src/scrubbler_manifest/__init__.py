"""scrubbler-manifest - plugin manifest generator for Scrubbler releases."""

__version__ = "1.0.0"
