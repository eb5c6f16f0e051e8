# simple_matrix/config.py
"""
Library configuration and defaults.
"""

from dataclasses import dataclass, field

from .codec import DEFAULT_TEXT_RULE, TextRule


@dataclass
class MatrixConfig:
    """Global library configuration."""

    # Range fill: number of threads used for large regions (1 = sequential)
    fill_workers: int = 1

    # Minimum region size (elements) before threads are used
    parallel_threshold: int = 4096

    # Rule used by str(matrix) and Matrix.to_string() without arguments
    text_rule: TextRule = field(default_factory=lambda: DEFAULT_TEXT_RULE)

    def __post_init__(self):
        if self.fill_workers < 1:
            raise ValueError(f"fill_workers must be >= 1, got {self.fill_workers}")
        if self.parallel_threshold < 1:
            raise ValueError(
                f"parallel_threshold must be >= 1, got {self.parallel_threshold}"
            )


# Global config instance
CONFIG = MatrixConfig()
