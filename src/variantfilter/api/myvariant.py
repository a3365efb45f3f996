"""MyVariant.info data service for frequency and pathogenicity annotation.

ARCHITECTURE:
    VariantEvaluation → genomic HGVS → MyVariant.info /v1/variant → FrequencyData / PathogenicityData

Key Design:
- HTTP with connection pooling (httpx.Client)
- Retry with exponential backoff on transport errors (tenacity)
- Structured parsing to typed hit models
- One request per variant; frequency and pathogenicity share the cached hit
"""

import logging
from typing import Any, Callable, Iterable

import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from variantfilter.api.data_service import VariantDataService, VariantDataServiceError, VariantKey
from variantfilter.api.myvariant_models import (
    GnomadData,
    MyVariantHit,
    Numeric,
)
from variantfilter.models.frequency import Frequency, FrequencyData, FrequencySource
from variantfilter.models.pathogenicity import (
    PathogenicityData,
    PathogenicityScore,
    PathogenicitySource,
    cadd_phred_to_score,
)
from variantfilter.models.variant import VariantEvaluation

logger = logging.getLogger(__name__)


class MyVariantAPIError(VariantDataServiceError):
    """Exception raised for MyVariant API errors."""

    pass


FIELDS = [
    "dbsnp.rsid",
    "gnomad_exome.af",
    "gnomad_genome.af",
    "exac.ac",
    "exac.an",
    "evs.maf",
    "dbnsfp.polyphen2.hdiv.score",
    "dbnsfp.sift.score",
    "dbnsfp.mutationtaster.score",
    "dbnsfp.revel.score",
    "dbnsfp.cadd.phred",
    "dbnsfp.1000gp3.af",
]

_GNOMAD_EXOME_SOURCES = {
    "af_afr": FrequencySource.GNOMAD_E_AFR,
    "af_amr": FrequencySource.GNOMAD_E_AMR,
    "af_asj": FrequencySource.GNOMAD_E_ASJ,
    "af_eas": FrequencySource.GNOMAD_E_EAS,
    "af_fin": FrequencySource.GNOMAD_E_FIN,
    "af_nfe": FrequencySource.GNOMAD_E_NFE,
    "af_oth": FrequencySource.GNOMAD_E_OTH,
    "af_sas": FrequencySource.GNOMAD_E_SAS,
}

_GNOMAD_GENOME_SOURCES = {
    "af_afr": FrequencySource.GNOMAD_G_AFR,
    "af_amr": FrequencySource.GNOMAD_G_AMR,
    "af_asj": FrequencySource.GNOMAD_G_ASJ,
    "af_eas": FrequencySource.GNOMAD_G_EAS,
    "af_fin": FrequencySource.GNOMAD_G_FIN,
    "af_nfe": FrequencySource.GNOMAD_G_NFE,
    "af_oth": FrequencySource.GNOMAD_G_OTH,
    "af_sas": FrequencySource.GNOMAD_G_SAS,
}

# population suffix shared by exac.ac_* and exac.an_*
_EXAC_SOURCES = {
    "afr": FrequencySource.EXAC_AFRICAN_INC_AFRICAN_AMERICAN,
    "amr": FrequencySource.EXAC_AMERICAN,
    "eas": FrequencySource.EXAC_EAST_ASIAN,
    "fin": FrequencySource.EXAC_FINNISH,
    "nfe": FrequencySource.EXAC_NON_FINNISH_EUROPEAN,
    "oth": FrequencySource.EXAC_OTHER,
    "sas": FrequencySource.EXAC_SOUTH_ASIAN,
}

_ESP_SOURCES = {
    "ea": FrequencySource.ESP_EUROPEAN_AMERICAN,
    "aa": FrequencySource.ESP_AFRICAN_AMERICAN,
    "all": FrequencySource.ESP_ALL,
}


def _reduce(value: Numeric, pick: Callable[[Iterable[float]], float] = max) -> float | None:
    """Collapse a single-or-list numeric field to one value, ignoring missing entries."""
    if value is None:
        return None
    if isinstance(value, list):
        present = [v for v in value if v is not None]
        return pick(present) if present else None
    return value


class MyVariantDataService(VariantDataService):
    """Variant data service backed by MyVariant.info.

    MyVariant.info aggregates gnomAD, ExAC, ESP, dbSNP and dbNSFP predictor
    scores for a variant in a single document.
    """

    BASE_URL = "https://myvariant.info/v1"
    DEFAULT_TIMEOUT = 30.0

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, client: httpx.Client | None = None) -> None:
        """Initialize the MyVariant data service.

        Args:
            timeout: Request timeout in seconds
            client: Optional pre-configured HTTP client, closed by close()
        """
        self.timeout = timeout
        self._client = client
        self._hits: dict[VariantKey, MyVariantHit | None] = {}

    def __enter__(self) -> "MyVariantDataService":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def _get_variant(self, hgvs: str) -> httpx.Response:
        client = self._get_client()
        return client.get(f"{self.BASE_URL}/variant/{hgvs}", params={"fields": ",".join(FIELDS)})

    def fetch_hit(self, variant_evaluation: VariantEvaluation) -> MyVariantHit | None:
        """Fetch and cache the MyVariant document for a variant.

        Returns:
            The parsed hit, or None if MyVariant has no record of the variant

        Raises:
            MyVariantAPIError: If the API request fails or the response is malformed
        """
        key = variant_evaluation.variant_key()
        if key in self._hits:
            return self._hits[key]

        hgvs = variant_evaluation.hgvs_genomic()
        try:
            response = self._get_variant(hgvs)
            if response.status_code == 404:
                logger.debug(f"MyVariant has no record of {hgvs}")
                hit = None
            else:
                response.raise_for_status()
                hit = MyVariantHit.from_response(response.json())
        except httpx.HTTPError as e:
            raise MyVariantAPIError(f"MyVariant request for {hgvs} failed: {e}") from e
        except (ValidationError, ValueError) as e:
            raise MyVariantAPIError(f"Failed to parse MyVariant response for {hgvs}: {e}") from e

        self._hits[key] = hit
        return hit

    def fetch_frequency_data(
        self,
        variant_evaluation: VariantEvaluation,
        sources: frozenset[FrequencySource],
    ) -> FrequencyData:
        hit = self.fetch_hit(variant_evaluation)
        if hit is None:
            return FrequencyData.empty()
        try:
            return self._frequency_data(hit).restricted_to(sources)
        except ValidationError as e:
            raise MyVariantAPIError(f"Invalid frequency data for {hit.id}: {e}") from e

    def fetch_pathogenicity_data(
        self,
        variant_evaluation: VariantEvaluation,
        sources: frozenset[PathogenicitySource],
    ) -> PathogenicityData:
        hit = self.fetch_hit(variant_evaluation)
        if hit is None:
            return PathogenicityData.empty()
        try:
            return self._pathogenicity_data(hit).restricted_to(sources)
        except ValidationError as e:
            raise MyVariantAPIError(f"Invalid pathogenicity data for {hit.id}: {e}") from e

    def _frequency_data(self, hit: MyVariantHit) -> FrequencyData:
        frequencies: list[Frequency] = []

        frequencies.extend(self._gnomad_frequencies(hit.gnomad_exome, _GNOMAD_EXOME_SOURCES))
        frequencies.extend(self._gnomad_frequencies(hit.gnomad_genome, _GNOMAD_GENOME_SOURCES))

        if hit.exac and hit.exac.ac and hit.exac.an:
            for population, source in _EXAC_SOURCES.items():
                allele_count = _reduce(getattr(hit.exac.ac, f"ac_{population}"))
                allele_number = _reduce(getattr(hit.exac.an, f"an_{population}"))
                if allele_count and allele_number:
                    frequencies.append(Frequency(source=source, frequency=allele_count / allele_number * 100))

        if hit.evs and hit.evs.maf:
            for population, source in _ESP_SOURCES.items():
                maf = _reduce(getattr(hit.evs.maf, population))
                if maf:
                    frequencies.append(Frequency(source=source, frequency=maf))

        if hit.dbnsfp and hit.dbnsfp.thousand_genomes:
            af = _reduce(hit.dbnsfp.thousand_genomes.af)
            if af:
                frequencies.append(Frequency(source=FrequencySource.THOUSAND_GENOMES, frequency=af * 100))

        rs_id = hit.dbsnp.rsid if hit.dbsnp else None
        return FrequencyData(rs_id=rs_id, frequencies=tuple(frequencies))

    @staticmethod
    def _gnomad_frequencies(gnomad: GnomadData | None, populations: dict[str, FrequencySource]) -> list[Frequency]:
        if gnomad is None or gnomad.af is None:
            return []
        frequencies = []
        for field, source in populations.items():
            af = _reduce(getattr(gnomad.af, field))
            # a zero frequency carries no information about rarity
            if af:
                frequencies.append(Frequency(source=source, frequency=af * 100))
        return frequencies

    def _pathogenicity_data(self, hit: MyVariantHit) -> PathogenicityData:
        dbnsfp = hit.dbnsfp
        if dbnsfp is None:
            return PathogenicityData.empty()

        scores: list[PathogenicityScore] = []

        def add(source: PathogenicitySource, value: float | None) -> None:
            if value is not None:
                scores.append(PathogenicityScore(source=source, score=value))

        if dbnsfp.polyphen2 and dbnsfp.polyphen2.hdiv:
            add(PathogenicitySource.POLYPHEN, _reduce(dbnsfp.polyphen2.hdiv.score))
        if dbnsfp.sift:
            # lower SIFT is more damaging
            add(PathogenicitySource.SIFT, _reduce(dbnsfp.sift.score, pick=min))
        if dbnsfp.mutationtaster:
            add(PathogenicitySource.MUTATION_TASTER, _reduce(dbnsfp.mutationtaster.score))
        if dbnsfp.revel:
            add(PathogenicitySource.REVEL, _reduce(dbnsfp.revel.score))
        if dbnsfp.cadd:
            phred = _reduce(dbnsfp.cadd.phred)
            if phred is not None:
                add(PathogenicitySource.CADD, cadd_phred_to_score(phred))

        return PathogenicityData(scores=tuple(scores))

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None
