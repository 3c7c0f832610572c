#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Package initialization and version metadata.

Byte-indexed random access to GFA graphs and line-wrapped FASTA files, and
coordinate reconciliation between a reference genome and a gene-scoped
subgraph.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .version import __version__

__all__ = ["__version__"]

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
