"""Numeric tolerances, precomputed cosines, and the validation profile.

Lengths are in model units. Cosine constants are the cosine of the angle
named in degrees (COS_2_5 = cos 2.5 deg) so that angle tests are plain
comparisons of dot products of unit vectors.
"""
import os

# Length thresholds
TOO_SMALL = 1e-6                  # lengths and distances at or below this are negligible
TOO_SMALL_SQ = 1e-12              # TOO_SMALL squared
ZERO_LENGTH = 1e-12               # divisor guard; shortest vector unitize accepts
UNIT_TOLERANCE = 1e-6             # |u| = 1 +/- UNIT_TOLERANCE

# Precomputed cosines (no runtime trig for the common angles)
COS_0_01 = 0.9999999847691291
COS_0_25 = 0.9999904807207345
COS_1 = 0.9998476951563913
COS_2_5 = 0.9990482215818578
COS_45 = 0.7071067811865476
COS_90 = 6.123233995736766e-17
COS_170 = -0.984807753012208
COS_175 = -0.9961946980917455
COS_177_5 = -0.9990482215818578
COS_179 = -0.9998476951563913

# Validation profile: "checked" validates every value-type construction for
# NaN/Infinity and unit length; "fast" skips those checks.
PROFILE = os.environ.get("GEOM_PROFILE", "checked").strip().lower()
CHECKED = PROFILE != "fast"
