"""Signal conditioning for offshore survey channels.

:mod:`survey_signal.algorithms` holds the pure kernels that work on plain
arrays; :mod:`survey_signal.survey` applies them to position, depth and
altitude channels of survey points.
"""

__version__ = "0.1.0"
