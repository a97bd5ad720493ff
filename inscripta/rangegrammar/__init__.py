"""
RangeGrammar is an interval algebra engine: overlap detection, nearest-neighbor search, anchored coordinate
arithmetic, set algebra and overlap joins over in-memory collections of genomic intervals.
"""
__version__ = "0.1.0"
