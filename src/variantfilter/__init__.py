"""Variant and gene filtering pipeline."""

__version__ = "0.1.0"

from variantfilter.config import FilterSettings, RunMode, load_filter_settings
from variantfilter.engine import FilterEngine, FilterRunResults
from variantfilter.factory import FilterConfigurationError, FilterFactory
from variantfilter.report import FilterReportFactory
from variantfilter.runners import GeneFilterRunner, SimpleVariantFilterRunner, SparseVariantFilterRunner

__all__ = [
    "FilterEngine",
    "FilterRunResults",
    "FilterSettings",
    "RunMode",
    "load_filter_settings",
    "FilterFactory",
    "FilterConfigurationError",
    "FilterReportFactory",
    "SimpleVariantFilterRunner",
    "SparseVariantFilterRunner",
    "GeneFilterRunner",
]
