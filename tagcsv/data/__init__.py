"""
CSV framing and the typed record read/write entry points.

Handles turning CSV files into tokenized rows and back, and pairs that with
the mapping layer to read and write typed records.
"""
