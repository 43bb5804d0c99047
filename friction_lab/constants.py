"""Physical and display constants for the friction experiment."""

# Standard gravity in m/s^2
GRAVITY = 9.81

# Rated capacity of both dynamometers in Newtons
SCALE_MAX_LOAD = 100.0

# A wet surface keeps 70% of the dry friction coefficient
WET_FRICTION_MULTIPLIER = 0.7

# Total spread of the uniform measurement noise, in Newtons
WEIGHT_NOISE_HALF_RANGE = 0.3
FRICTION_NOISE_HALF_RANGE = 1.0

# Time for the gauge to converge on the measured value, in seconds
CONVERGENCE_DURATION = 1.5

# Peak spread of the visual shake while the gauge is converging
WEIGHT_JITTER_AMPLITUDE = 0.5
FRICTION_JITTER_AMPLITUDE = 1.5

OVERLOAD_MARK = "Max!"
NOT_MEASURED_MARK = "-"
GAUGE_ERROR_TEXT = "ERR"
