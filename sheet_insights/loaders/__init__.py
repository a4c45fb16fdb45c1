"""Loaders turning source files into profiler rows."""
