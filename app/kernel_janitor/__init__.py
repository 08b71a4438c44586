"""kernel-janitor - Discover, build and prune installed Linux kernels.

Correlates boot images, configs, symbol maps, module trees and source
trees into per-version records and drives the rebuild and cleanup
workflow for the newest kernel.
"""

__version__ = "0.1.0"
