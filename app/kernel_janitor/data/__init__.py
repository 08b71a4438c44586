"""Bundled data files for kernel-janitor."""
