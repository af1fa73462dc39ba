"""Substring Counter - count fixed byte patterns in every file under a directory."""

from substring_counter.coordinator.engine import scan_directory
from substring_counter.matching.chunk import count_in_chunk
from substring_counter.matching.scanner import count_in_file

__version__ = '0.1.0'

__all__ = ['count_in_chunk', 'count_in_file', 'scan_directory', '__version__']
