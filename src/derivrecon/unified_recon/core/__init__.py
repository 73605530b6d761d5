from .aggregator import Aggregator
from .reconciler import Reconciler
from .source_router import SourceRouter, RoutedRecords
from .pipeline import ReconciliationPipeline, ReconciliationInputs

__all__ = [
    "Aggregator",
    "Reconciler",
    "SourceRouter",
    "RoutedRecords",
    "ReconciliationPipeline",
    "ReconciliationInputs",
]
