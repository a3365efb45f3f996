"""Configuration module for variant filtering."""

from variantfilter.config.settings import FilterSettings, RunMode, load_filter_settings

__all__ = ["FilterSettings", "RunMode", "load_filter_settings"]
