"""Directory size aggregation for the deep scanner."""

from diskord.scanner.aggregator import SizeAggregator
from diskord.scanner.models import ScanEntry

__all__ = ["ScanEntry", "SizeAggregator"]
