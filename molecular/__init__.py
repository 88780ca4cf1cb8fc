"""
Molecular Vapor
===============

A pointer-reactive particle animation.

A field of small "molecular" dots drifts across the window, joined by
faint lines whenever two dots come close.  The dots shy away from the
pointer and ease back to their home positions once it moves on, while
large soft vapor clouds wander slowly behind them.

The animation features:
  - Inverse-distance repulsion within a fixed reach of the pointer
  - Eased drift back to each dot's home position
  - Elastic bounce off the viewport edges
  - Proximity links whose opacity fades with distance
  - Self-resetting vapor blobs painted as radial gradients
  - A sharp focus disc that follows the eased pointer over a softened field
"""

__version__ = "1.0.0"
__author__ = "Molecular Vapor"
