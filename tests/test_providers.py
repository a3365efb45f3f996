"""Tests for data provider composition."""

import logging
from unittest.mock import MagicMock

import pytest

from variantfilter.api.data_service import (
    InMemoryVariantDataService,
    VariantDataService,
    VariantDataServiceError,
)
from variantfilter.filters import (
    DataProvidedVariantFilter,
    FrequencyDataProvider,
    FrequencyFilter,
    PathogenicityDataProvider,
    PathogenicityFilter,
    QualityFilter,
    unwrap,
)
from variantfilter.models import (
    ALL_FREQUENCY_SOURCES,
    FilterType,
    Frequency,
    FrequencyData,
    FrequencySource,
    PathogenicityData,
    PathogenicityScore,
    PathogenicitySource,
    VariantEffect,
    VariantEvaluation,
)

ESP_AND_GNOMAD = frozenset({FrequencySource.ESP_ALL, FrequencySource.GNOMAD_E_NFE})
ESP_ONLY = frozenset({FrequencySource.ESP_ALL})


def make_variant(**kwargs) -> VariantEvaluation:
    fields = {"chromosome": "1", "position": 100, "ref": "A", "alt": "T"}
    fields.update(kwargs)
    return VariantEvaluation(**fields)


@pytest.fixture
def frequency_data():
    return FrequencyData.of(
        Frequency(source=FrequencySource.ESP_ALL, frequency=0.1),
        Frequency(source=FrequencySource.GNOMAD_E_NFE, frequency=5.0),
        rs_id="rs123",
    )


@pytest.fixture
def data_service(frequency_data):
    service = MagicMock(spec=VariantDataService)
    service.fetch_frequency_data.return_value = frequency_data
    service.fetch_pathogenicity_data.return_value = PathogenicityData.of(
        PathogenicityScore(source=PathogenicitySource.POLYPHEN, score=0.9),
        PathogenicityScore(source=PathogenicitySource.REVEL, score=0.3),
    )
    return service


class TestFrequencyDataProvider:
    """Tests for FrequencyDataProvider."""

    def test_attaches_restricted_data(self, data_service):
        variant = make_variant()
        FrequencyDataProvider(data_service=data_service, sources=ESP_ONLY).annotate(variant)

        data_service.fetch_frequency_data.assert_called_once_with(variant, ESP_ONLY)
        assert variant.frequency_data.sources() == ESP_ONLY
        assert variant.frequency_data.rs_id == "rs123"
        assert variant.frequency_request == ESP_ONLY

    def test_same_request_does_not_refetch(self, data_service):
        variant = make_variant()
        provider = FrequencyDataProvider(data_service=data_service, sources=ESP_AND_GNOMAD)
        provider.annotate(variant)
        first = variant.frequency_data
        provider.annotate(variant)

        assert data_service.fetch_frequency_data.call_count == 1
        assert variant.frequency_data is first

    def test_narrower_request_restricts_without_fetch(self, data_service):
        variant = make_variant()
        FrequencyDataProvider(data_service=data_service, sources=ESP_AND_GNOMAD).annotate(variant)
        FrequencyDataProvider(data_service=data_service, sources=ESP_ONLY).annotate(variant)

        assert data_service.fetch_frequency_data.call_count == 1
        assert variant.frequency_data.sources() == ESP_ONLY
        assert variant.frequency_request == ESP_ONLY

    def test_wider_request_fetches_again(self, data_service):
        variant = make_variant()
        FrequencyDataProvider(data_service=data_service, sources=ESP_ONLY).annotate(variant)
        FrequencyDataProvider(data_service=data_service, sources=ESP_AND_GNOMAD).annotate(variant)

        assert data_service.fetch_frequency_data.call_count == 2
        assert variant.frequency_data.sources() == ESP_AND_GNOMAD

    def test_fetch_failure_treated_as_absent(self, data_service, caplog):
        data_service.fetch_frequency_data.side_effect = VariantDataServiceError("malformed record")
        variant = make_variant()

        with caplog.at_level(logging.WARNING):
            FrequencyDataProvider(data_service=data_service).annotate(variant)

        assert variant.frequency_data is None
        assert variant.frequency_request is None
        assert "treating as absent" in caplog.text

    def test_existing_data_kept_without_fetch(self, data_service):
        existing = FrequencyData.of(
            Frequency(source=FrequencySource.GNOMAD_E_NFE, frequency=12.0),
            rs_id="rs1",
        )
        variant = make_variant(frequency_data=existing)

        FrequencyDataProvider(data_service=data_service).annotate(variant)

        data_service.fetch_frequency_data.assert_not_called()
        assert variant.frequency_data == existing
        assert variant.frequency_request == ALL_FREQUENCY_SOURCES

    def test_existing_data_survives_service_without_entry(self):
        variant = make_variant(
            frequency_data=FrequencyData.of(
                Frequency(source=FrequencySource.GNOMAD_E_NFE, frequency=12.0),
                rs_id="rs1",
            )
        )
        provided = DataProvidedVariantFilter(
            steps=(FrequencyDataProvider(data_service=InMemoryVariantDataService()),),
            variant_filter=FrequencyFilter(max_frequency=1.0),
        )

        assert provided.run_filter(variant).failed()
        assert variant.frequency_data.rs_id == "rs1"

    def test_existing_data_restricted_to_sources(self, data_service, frequency_data):
        variant = make_variant(frequency_data=frequency_data)
        FrequencyDataProvider(data_service=data_service, sources=ESP_ONLY).annotate(variant)

        data_service.fetch_frequency_data.assert_not_called()
        assert variant.frequency_data.sources() == ESP_ONLY
        assert variant.frequency_data.rs_id == "rs123"

    def test_does_not_touch_pathogenicity(self, data_service):
        pathogenicity_data = PathogenicityData.empty()
        variant = make_variant(pathogenicity_data=pathogenicity_data)
        FrequencyDataProvider(data_service=data_service).annotate(variant)
        assert variant.pathogenicity_data is pathogenicity_data
        data_service.fetch_pathogenicity_data.assert_not_called()


class TestPathogenicityDataProvider:
    """Tests for PathogenicityDataProvider."""

    def test_attaches_restricted_data(self, data_service):
        variant = make_variant()
        sources = frozenset({PathogenicitySource.REVEL})
        PathogenicityDataProvider(data_service=data_service, sources=sources).annotate(variant)

        assert variant.pathogenicity_data.sources() == sources
        assert variant.pathogenicity_request == sources

    def test_narrower_request_restricts_without_fetch(self, data_service):
        variant = make_variant()
        PathogenicityDataProvider(data_service=data_service).annotate(variant)
        PathogenicityDataProvider(
            data_service=data_service, sources=frozenset({PathogenicitySource.POLYPHEN})
        ).annotate(variant)

        assert data_service.fetch_pathogenicity_data.call_count == 1
        assert variant.pathogenicity_data.sources() == {PathogenicitySource.POLYPHEN}

    def test_fetch_failure_treated_as_absent(self, data_service):
        data_service.fetch_pathogenicity_data.side_effect = VariantDataServiceError("timeout")
        variant = make_variant()
        PathogenicityDataProvider(data_service=data_service).annotate(variant)
        assert variant.pathogenicity_data is None

    def test_existing_data_kept_without_fetch(self, data_service):
        existing = PathogenicityData.of(
            PathogenicityScore(source=PathogenicitySource.CADD, score=0.99),
            PathogenicityScore(source=PathogenicitySource.SIFT, score=0.01),
        )
        variant = make_variant(pathogenicity_data=existing)
        sources = frozenset({PathogenicitySource.CADD})

        PathogenicityDataProvider(data_service=data_service, sources=sources).annotate(variant)

        data_service.fetch_pathogenicity_data.assert_not_called()
        assert variant.pathogenicity_data.sources() == sources
        assert variant.pathogenicity_request == sources


class TestDataProvidedVariantFilter:
    """Tests for DataProvidedVariantFilter."""

    def test_reports_wrapped_filter_type(self, data_service):
        provided = DataProvidedVariantFilter(
            steps=(FrequencyDataProvider(data_service=data_service),),
            variant_filter=FrequencyFilter(max_frequency=1.0),
        )
        assert provided.filter_type is FilterType.FREQUENCY
        assert isinstance(unwrap(provided), FrequencyFilter)

    def test_unwrap_plain_filter(self):
        quality_filter = QualityFilter(min_quality=1.0)
        assert unwrap(quality_filter) is quality_filter

    def test_result_matches_undecorated_filter(self, data_service, frequency_data):
        frequency_filter = FrequencyFilter(max_frequency=1.0)
        provided = DataProvidedVariantFilter(
            steps=(FrequencyDataProvider(data_service=data_service),),
            variant_filter=frequency_filter,
        )
        variant = make_variant()
        result = provided.run_filter(variant)

        assert result.failed()
        assert result == frequency_filter.run_filter(make_variant(frequency_data=frequency_data))

    def test_restricted_sources_change_outcome(self, data_service):
        provided = DataProvidedVariantFilter(
            steps=(FrequencyDataProvider(data_service=data_service, sources=ESP_ONLY),),
            variant_filter=FrequencyFilter(max_frequency=1.0),
        )
        assert provided.run_filter(make_variant()).passed()

    def test_steps_run_in_order_before_filter(self, data_service):
        provided = DataProvidedVariantFilter(
            steps=(
                FrequencyDataProvider(data_service=data_service),
                PathogenicityDataProvider(data_service=data_service),
            ),
            variant_filter=PathogenicityFilter(),
        )
        variant = make_variant(variant_effect=VariantEffect.MISSENSE_VARIANT)
        result = provided.run_filter(variant)

        assert variant.frequency_data is not None
        assert result.score == pytest.approx(0.9)

    def test_in_memory_service(self):
        variant = make_variant()
        service = InMemoryVariantDataService()
        service.add_frequency_data(
            variant.variant_key(),
            FrequencyData.of(Frequency(source=FrequencySource.TOPMED, frequency=3.0)),
        )
        provided = DataProvidedVariantFilter(
            steps=(FrequencyDataProvider(data_service=service, sources=ALL_FREQUENCY_SOURCES),),
            variant_filter=FrequencyFilter(max_frequency=2.0),
        )

        assert provided.run_filter(variant).failed()
        assert provided.run_filter(make_variant(position=999)).passed()
