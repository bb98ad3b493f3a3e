"""clinimpact: real-world impact of a binary clinical classifier.

Turns free-text scenario descriptions into confusion-matrix and review
capacity parameters, and derives the metrics and workload that follow.
"""

from clinimpact.parsing.scenario import is_usable, parse_scenario_text

__version__ = "0.1.0"

__all__ = ["is_usable", "parse_scenario_text"]
