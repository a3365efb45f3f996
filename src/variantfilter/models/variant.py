"""Variant models."""

from enum import Enum
from typing import Any

from pydantic import Field, PrivateAttr, field_validator

from variantfilter.models.filterable import Filterable
from variantfilter.models.frequency import FrequencyData, FrequencySource
from variantfilter.models.inheritance import ModeOfInheritance
from variantfilter.models.pathogenicity import PathogenicityData, PathogenicitySource


class VariantEffect(str, Enum):
    """Functional consequence of a variant, as Sequence Ontology terms."""

    FRAMESHIFT_VARIANT = "frameshift_variant"
    STOP_GAINED = "stop_gained"
    STOP_LOST = "stop_lost"
    START_LOST = "start_lost"
    SPLICE_DONOR_VARIANT = "splice_donor_variant"
    SPLICE_ACCEPTOR_VARIANT = "splice_acceptor_variant"
    SPLICE_REGION_VARIANT = "splice_region_variant"
    INFRAME_INSERTION = "inframe_insertion"
    INFRAME_DELETION = "inframe_deletion"
    MISSENSE_VARIANT = "missense_variant"
    SYNONYMOUS_VARIANT = "synonymous_variant"
    STOP_RETAINED_VARIANT = "stop_retained_variant"
    FIVE_PRIME_UTR_EXON_VARIANT = "5_prime_UTR_exon_variant"
    FIVE_PRIME_UTR_INTRON_VARIANT = "5_prime_UTR_intron_variant"
    THREE_PRIME_UTR_EXON_VARIANT = "3_prime_UTR_exon_variant"
    THREE_PRIME_UTR_INTRON_VARIANT = "3_prime_UTR_intron_variant"
    CODING_TRANSCRIPT_INTRON_VARIANT = "coding_transcript_intron_variant"
    NON_CODING_TRANSCRIPT_EXON_VARIANT = "non_coding_transcript_exon_variant"
    NON_CODING_TRANSCRIPT_INTRON_VARIANT = "non_coding_transcript_intron_variant"
    UPSTREAM_GENE_VARIANT = "upstream_gene_variant"
    DOWNSTREAM_GENE_VARIANT = "downstream_gene_variant"
    INTERGENIC_VARIANT = "intergenic_variant"
    REGULATORY_REGION_VARIANT = "regulatory_region_variant"
    SEQUENCE_VARIANT = "sequence_variant"


# Effects which can plausibly be pathogenic without any further evidence.
PATHOGENIC_EFFECTS: frozenset[VariantEffect] = frozenset({
    VariantEffect.MISSENSE_VARIANT,
    VariantEffect.FRAMESHIFT_VARIANT,
    VariantEffect.INFRAME_INSERTION,
    VariantEffect.INFRAME_DELETION,
    VariantEffect.SPLICE_DONOR_VARIANT,
    VariantEffect.SPLICE_ACCEPTOR_VARIANT,
    VariantEffect.SPLICE_REGION_VARIANT,
    VariantEffect.STOP_GAINED,
    VariantEffect.STOP_LOST,
    VariantEffect.START_LOST,
})

# Severity used when no predictor has scored the variant.
_DEFAULT_EFFECT_SCORES: dict[VariantEffect, float] = {
    VariantEffect.STOP_GAINED: 0.95,
    VariantEffect.FRAMESHIFT_VARIANT: 0.95,
    VariantEffect.START_LOST: 0.95,
    VariantEffect.SPLICE_DONOR_VARIANT: 0.95,
    VariantEffect.SPLICE_ACCEPTOR_VARIANT: 0.95,
    VariantEffect.STOP_LOST: 0.9,
    VariantEffect.INFRAME_INSERTION: 0.85,
    VariantEffect.INFRAME_DELETION: 0.85,
    VariantEffect.SPLICE_REGION_VARIANT: 0.8,
    VariantEffect.MISSENSE_VARIANT: 0.6,
    VariantEffect.SYNONYMOUS_VARIANT: 0.1,
}


def default_pathogenicity_score(effect: VariantEffect) -> float:
    """Severity for an effect class, used when no predictor score is available."""
    return _DEFAULT_EFFECT_SCORES.get(effect, 0.0)


def normalize_chromosome(chromosome: Any) -> str:
    """Normalize a chromosome name: drop any 'chr' prefix, upper-case X/Y, M -> MT."""
    name = str(chromosome).strip()
    if name.lower().startswith("chr"):
        name = name[3:]
    name = name.upper()
    if name == "M":
        return "MT"
    return name


class VariantEvaluation(Filterable):
    """A single called variant and everything filters have learned about it."""

    chromosome: str
    position: int = Field(..., ge=1)
    ref: str
    alt: str
    phred_score: float = 0.0
    variant_effect: VariantEffect = VariantEffect.SEQUENCE_VARIANT
    gene_symbol: str | None = None
    entrez_gene_id: int | None = None
    frequency_data: FrequencyData | None = None
    pathogenicity_data: PathogenicityData | None = None
    priority_score: float = 0.0
    compatible_inheritance_modes: set[ModeOfInheritance] = Field(default_factory=set)
    is_regulatory_region: bool = False

    # sources requested by the last data provider run, used to avoid refetching
    _frequency_request: frozenset[FrequencySource] | None = PrivateAttr(default=None)
    _pathogenicity_request: frozenset[PathogenicitySource] | None = PrivateAttr(default=None)
    _gene: Any = PrivateAttr(default=None)

    @field_validator("chromosome", mode="before")
    @classmethod
    def _normalize_chromosome(cls, value: Any) -> str:
        return normalize_chromosome(value)

    @property
    def frequency_request(self) -> frozenset[FrequencySource] | None:
        """Sources the current frequency data was restricted to, if provided."""
        return self._frequency_request

    @property
    def pathogenicity_request(self) -> frozenset[PathogenicitySource] | None:
        return self._pathogenicity_request

    def set_frequency_data(
        self,
        frequency_data: FrequencyData | None,
        sources: frozenset[FrequencySource] | None = None,
    ) -> None:
        self.frequency_data = frequency_data
        self._frequency_request = sources

    def set_pathogenicity_data(
        self,
        pathogenicity_data: PathogenicityData | None,
        sources: frozenset[PathogenicitySource] | None = None,
    ) -> None:
        self.pathogenicity_data = pathogenicity_data
        self._pathogenicity_request = sources

    def variant_key(self) -> tuple[str, int, str, str]:
        """Stable key identifying this variant."""
        return (self.chromosome, self.position, self.ref, self.alt)

    def hgvs_genomic(self) -> str:
        """Genomic HGVS notation for lookups, e.g. chr7:g.140453136A>T.

        Alleles are expected VCF-style, where indels share a leading padding base.
        """
        chrom, pos, ref, alt = self.chromosome, self.position, self.ref, self.alt
        if len(ref) == 1 and len(alt) == 1:
            return f"chr{chrom}:g.{pos}{ref}>{alt}"
        if len(ref) > 1 and len(alt) == 1 and ref[0] == alt[0]:
            start = pos + 1
            end = pos + len(ref) - 1
            if start == end:
                return f"chr{chrom}:g.{start}del"
            return f"chr{chrom}:g.{start}_{end}del"
        if len(ref) == 1 and len(alt) > 1 and ref[0] == alt[0]:
            return f"chr{chrom}:g.{pos}_{pos + 1}ins{alt[1:]}"
        return f"chr{chrom}:g.{pos}_{pos + len(ref) - 1}delins{alt}"

    def is_compatible_with(self, mode: ModeOfInheritance) -> bool:
        return mode in self.compatible_inheritance_modes

    def __str__(self) -> str:
        return (
            f"VariantEvaluation(chr={self.chromosome} pos={self.position} ref={self.ref} "
            f"alt={self.alt} qual={self.phred_score} effect={self.variant_effect.value} "
            f"passed={sorted(t.value for t in self.passed_filter_types())} "
            f"failed={sorted(t.value for t in self.failed_filter_types())})"
        )
