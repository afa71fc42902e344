"""Construction defaults for polylines and loops.

Lengths are in model units. A snap tolerance below the minimum segment
length is recommended but not enforced.
"""

DEFAULT_MIN_SEGMENT_LENGTH = 1e-3   # shorter segments are absorbed by build()
DEFAULT_SNAP_TOLERANCE = 1e-4       # closer consecutive points are merged
MIN_LOOP_POINTS = 3                 # fewest vertices a Loop may have
