"""Tests for filter settings and the YAML loader."""

import pytest
from pydantic import ValidationError

from variantfilter.config import FilterSettings, RunMode, load_filter_settings
from variantfilter.filters import GeneticInterval
from variantfilter.models import (
    ALL_FREQUENCY_SOURCES,
    FrequencySource,
    ModeOfInheritance,
    VariantEffect,
)


class TestFilterSettings:
    """Tests for FilterSettings validation."""

    def test_defaults(self):
        settings = FilterSettings()
        assert settings.max_frequency is None
        assert settings.frequency_sources == ALL_FREQUENCY_SOURCES
        assert settings.run_mode is RunMode.FULL
        assert settings.pathogenicity_pass_all is None

    def test_interval_parsed_from_string(self):
        settings = FilterSettings(genetic_interval="chr7:155595590-155604810")
        assert settings.genetic_interval == GeneticInterval(chromosome="7", start=155595590, end=155604810)

    def test_invalid_interval_rejected(self):
        with pytest.raises(ValidationError):
            FilterSettings(genetic_interval="chr7:200-100")
        with pytest.raises(ValidationError):
            FilterSettings(genetic_interval="not an interval")

    def test_frequency_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            FilterSettings(max_frequency=120.0)

    def test_negative_quality_rejected(self):
        with pytest.raises(ValidationError):
            FilterSettings(min_quality=-1.0)

    def test_empty_gene_list_rejected(self):
        with pytest.raises(ValidationError):
            FilterSettings(genes_to_keep=[])

    def test_unknown_option_rejected(self):
        with pytest.raises(ValidationError):
            FilterSettings(max_freq=1.0)

    def test_enum_values_from_strings(self):
        settings = FilterSettings(
            frequency_sources=["ESP_ALL", "GNOMAD_E_NFE"],
            off_target_effects=["synonymous_variant"],
            desired_inheritance_modes=["AUTOSOMAL_RECESSIVE", "X_RECESSIVE"],
            run_mode="pass_only",
        )
        assert settings.frequency_sources == {FrequencySource.ESP_ALL, FrequencySource.GNOMAD_E_NFE}
        assert settings.off_target_effects == {VariantEffect.SYNONYMOUS_VARIANT}
        assert settings.desired_inheritance_modes == {ModeOfInheritance.AUTOSOMAL_RECESSIVE, ModeOfInheritance.X_RECESSIVE}
        assert settings.run_mode is RunMode.PASS_ONLY

    def test_single_inheritance_mode_becomes_set(self):
        settings = FilterSettings(desired_inheritance_modes="AUTOSOMAL_DOMINANT")
        assert settings.desired_inheritance_modes == {ModeOfInheritance.AUTOSOMAL_DOMINANT}

    def test_unknown_inheritance_mode_rejected(self):
        with pytest.raises(ValidationError):
            FilterSettings(desired_inheritance_modes=["CODOMINANT"])


class TestLoadFilterSettings:
    """Tests for load_filter_settings."""

    def test_load_yaml(self, tmp_path):
        config_file = tmp_path / "filters.yaml"
        config_file.write_text(
            "max_frequency: 1.0\n"
            "min_quality: 30\n"
            "genetic_interval: chr1:1000-2000\n"
            "genes_to_keep: [673, 3845]\n"
            "run_mode: pass_only\n"
            "desired_inheritance_modes: [AUTOSOMAL_DOMINANT, X_DOMINANT]\n"
        )

        settings = load_filter_settings(config_file)

        assert settings.max_frequency == 1.0
        assert settings.min_quality == 30.0
        assert settings.genetic_interval == GeneticInterval(chromosome="1", start=1000, end=2000)
        assert settings.genes_to_keep == {673, 3845}
        assert settings.run_mode is RunMode.PASS_ONLY
        assert settings.desired_inheritance_modes == {ModeOfInheritance.AUTOSOMAL_DOMINANT, ModeOfInheritance.X_DOMINANT}

    def test_empty_file_gives_defaults(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_filter_settings(str(config_file)) == FilterSettings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_filter_settings(tmp_path / "missing.yaml")

    def test_invalid_value_in_file(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("max_frequency: -5\n")
        with pytest.raises(ValidationError):
            load_filter_settings(config_file)
