"""Random villager creator: weighted form generation and reroll sequencing."""

__version__ = "0.1.0"
