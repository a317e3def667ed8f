"""
ridgematch: minutiae-based fingerprint comparison.

Binary fingerprint images are thinned to skeletons, minutiae (ridge
endings and bifurcations) are extracted with their orientation, and two
minutiae sets are compared by searching for a rigid alignment.
"""

__version__ = "0.1.0"
